"""Shared fixtures: an in-memory object store that records its calls."""

from __future__ import annotations

import hashlib
import io
import logging
from collections.abc import Iterator
from typing import BinaryIO

import pytest

from s3tool.storage import (
    ListingEntry,
    NotFoundError,
    ObjectBody,
    ObjectHead,
    ObjectStore,
    parse_integrity_token,
)


def etag_of(data: bytes) -> str:
    """Quoted MD5 ETag, as S3 returns it for single-part uploads."""
    return f'"{hashlib.md5(data).hexdigest()}"'


class FakeStore(ObjectStore):
    """In-memory ObjectStore.

    Attributes:
        objects: (bucket, key) -> content.
        etags: (bucket, key) -> raw ETag overriding the computed one.
        put_etag: Raw ETag returned by put_object instead of the real one.
        calls: Names of the methods called, in order.
    """

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.etags: dict[tuple[str, str], str] = {}
        self.put_etag: str | None = None
        self.calls: list[str] = []

    def add(self, bucket: str, key: str, data: bytes) -> None:
        self.objects[(bucket, key)] = data

    def _etag(self, bucket: str, key: str) -> str:
        return self.etags.get((bucket, key), etag_of(self.objects[(bucket, key)]))

    def probe_object(self, bucket: str, key: str) -> ObjectHead:
        self.calls.append("probe_object")
        if (bucket, key) not in self.objects:
            raise NotFoundError(f"Not found: s3://{bucket}/{key}")
        return ObjectHead(
            size=len(self.objects[(bucket, key)]),
            fingerprint=parse_integrity_token(self._etag(bucket, key)),
        )

    def get_object(self, bucket: str, key: str) -> ObjectBody:
        self.calls.append("get_object")
        if (bucket, key) not in self.objects:
            raise NotFoundError(f"Not found: s3://{bucket}/{key}")
        data = self.objects[(bucket, key)]
        return ObjectBody(
            stream=io.BytesIO(data),
            size=len(data),
            fingerprint=parse_integrity_token(self._etag(bucket, key)),
        )

    def put_object(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        content_type: str,
        acl: str,
    ) -> str:
        self.calls.append("put_object")
        data = body.read()
        self.objects[(bucket, key)] = data
        return self.put_etag if self.put_etag is not None else etag_of(data)

    def list_objects(
        self, bucket: str, prefix: str = "", delimiter: str = "/"
    ) -> Iterator[ListingEntry]:
        self.calls.append("list_objects")
        prefixes: list[str] = []
        keys: list[str] = []
        for b, key in sorted(self.objects):
            if b != bucket or not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if delimiter and delimiter in rest:
                folded = prefix + rest.split(delimiter, 1)[0] + delimiter
                if folded not in prefixes:
                    prefixes.append(folded)
            else:
                keys.append(key)
        for p in prefixes:
            yield ListingEntry(key=p, is_prefix=True)
        for key in keys:
            yield ListingEntry(key=key, size=len(self.objects[(bucket, key)]))

    def list_buckets(self) -> list[str]:
        self.calls.append("list_buckets")
        return sorted({bucket for bucket, _ in self.objects})


@pytest.fixture
def store() -> FakeStore:
    """Create an empty in-memory store."""
    return FakeStore()


@pytest.fixture(autouse=True)
def reset_s3tool_logging() -> Iterator[None]:
    """Drop handlers installed by the CLI so they don't outlive the runner's streams."""
    yield
    s3tool_logger = logging.getLogger("s3tool")
    for handler in s3tool_logger.handlers[:]:
        s3tool_logger.removeHandler(handler)
    s3tool_logger.setLevel(logging.NOTSET)


def interrupted_download_client():
    """boto3 S3 client mock whose object body fails after HEAD reports 404.

    The body raises botocore's IncompleteReadError on read, as a dropped
    connection does mid-download.
    """
    from unittest.mock import MagicMock

    from botocore.exceptions import ClientError, IncompleteReadError

    client = MagicMock()
    client.head_object.side_effect = ClientError(
        {"Error": {"Code": "404", "Message": "Not Found"},
         "ResponseMetadata": {"HTTPStatusCode": 404}},
        "HeadObject",
    )
    body = MagicMock()
    body.read.side_effect = IncompleteReadError(actual_bytes=1, expected_bytes=5)
    client.get_object.return_value = {
        "Body": body,
        "ETag": f'"{hashlib.md5(b"hello").hexdigest()}"',
        "ContentLength": 5,
    }
    return client
