"""Object store abstraction consumed by s3tool.

This module provides:
- Abstract interface for the object store capabilities s3tool needs
- S3ObjectStore backed by boto3 (AWS, MinIO, any S3-compatible endpoint)
- parse_integrity_token for turning an ETag into a comparable fingerprint
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO

from s3tool.core.types import S3ToolError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound", "NoSuchBucket"})


class NotFoundError(S3ToolError):
    """The requested object (or its bucket) does not exist."""


class MalformedMetadataError(S3ToolError):
    """The store returned an integrity token that cannot be parsed."""


class TransportError(S3ToolError):
    """The store could not be reached or rejected the request."""


def parse_integrity_token(token: str | None) -> str:
    """Strip the outer quotes from an ETag.

    Args:
        token: Raw ETag as returned by the store, e.g. '"5d41...c592"'.

    Returns:
        The bare digest value.

    Raises:
        MalformedMetadataError: If the token is missing, too short or unquoted.
    """
    if token is None:
        raise MalformedMetadataError("ETag is missing")
    if len(token) < 3:
        raise MalformedMetadataError(f"ETag is too short. etag:{token!r}")
    if not (token.startswith('"') and token.endswith('"')):
        raise MalformedMetadataError(f"ETag is not quoted. etag:{token!r}")
    return token[1:-1]


@dataclass
class ObjectHead:
    """Object metadata returned by a probe, without content."""

    size: int
    fingerprint: str


@dataclass
class ObjectBody:
    """An open object body. The caller must close ``stream``."""

    stream: Any
    size: int
    fingerprint: str


class S3BodyReader:
    """Read-only wrapper around a botocore StreamingBody.

    Errors raised while streaming the content are re-raised as
    TransportError, like those of the request itself.
    """

    def __init__(self, body: Any, what: str) -> None:
        self._body = body
        self._what = what

    def read(self, size: int | None = -1) -> bytes:
        from botocore.exceptions import BotoCoreError, ClientError

        amt = None if size is None or size < 0 else size
        try:
            data: bytes = self._body.read(amt)
        except (BotoCoreError, ClientError) as e:
            raise TransportError(f"read {self._what}: {e}") from e
        return data

    def close(self) -> None:
        self._body.close()


@dataclass
class ListingEntry:
    """One line of a listing: a common prefix or an object key."""

    key: str
    is_prefix: bool = False
    size: int = 0


class ObjectStore(ABC):
    """Abstract interface for the object store."""

    @abstractmethod
    def probe_object(self, bucket: str, key: str) -> ObjectHead:
        """Fetch an object's size and fingerprint without its content.

        Raises:
            NotFoundError: If the object does not exist.
            MalformedMetadataError: If the ETag cannot be parsed.
            TransportError: On any other store failure.
        """

    @abstractmethod
    def get_object(self, bucket: str, key: str) -> ObjectBody:
        """Open an object's content for reading.

        Raises:
            NotFoundError: If the object does not exist.
            TransportError: On any other store failure.
        """

    @abstractmethod
    def put_object(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        content_type: str,
        acl: str,
    ) -> str:
        """Store an object.

        Returns:
            The raw integrity token (ETag) confirmed by the store.

        Raises:
            TransportError: If the store rejects the upload.
        """

    @abstractmethod
    def list_objects(
        self, bucket: str, prefix: str = "", delimiter: str = "/"
    ) -> Iterator[ListingEntry]:
        """Iterate over every page of a listing.

        Common prefixes of a page are yielded before its objects.
        """

    @abstractmethod
    def list_buckets(self) -> list[str]:
        """Return the names of all buckets visible to the caller."""


class S3ObjectStore(ObjectStore):
    """S3-compatible object store using boto3."""

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
        endpoint_url: str | None = None,
        client: Any = None,
    ) -> None:
        """Initialize the S3 store.

        Args:
            region: AWS region name.
            profile: Named profile from the shared AWS config, if any.
            endpoint_url: Custom endpoint URL (for MinIO, etc.).
            client: Pre-built boto3 S3 client, mostly for tests.
        """
        if client is None:
            import boto3
            from botocore.exceptions import BotoCoreError

            try:
                session = boto3.session.Session(profile_name=profile, region_name=region)
                client = session.client("s3", endpoint_url=endpoint_url)
            except BotoCoreError as e:
                raise TransportError(f"Cannot create S3 client: {e}") from e
        self._client: Any = client

    def _translate(self, error: Exception, what: str) -> S3ToolError:
        """Map a botocore exception to an s3tool error."""
        from botocore.exceptions import ClientError

        if isinstance(error, ClientError):
            code = error.response.get("Error", {}).get("Code", "")
            status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
            if code in NOT_FOUND_CODES or status == 404:
                return NotFoundError(f"Not found: {what}")
        return TransportError(f"{what}: {error}")

    def probe_object(self, bucket: str, key: str) -> ObjectHead:
        """Fetch an object's size and fingerprint with HEAD."""
        from botocore.exceptions import BotoCoreError, ClientError

        logger.debug("HEAD s3://%s/%s", bucket, key)
        try:
            response = self._client.head_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, f"s3://{bucket}/{key}") from e
        return ObjectHead(
            size=int(response.get("ContentLength", 0)),
            fingerprint=parse_integrity_token(response.get("ETag")),
        )

    def get_object(self, bucket: str, key: str) -> ObjectBody:
        """Open an object's content for reading."""
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, f"s3://{bucket}/{key}") from e
        body = response["Body"]
        try:
            fingerprint = parse_integrity_token(response.get("ETag"))
        except MalformedMetadataError:
            body.close()
            raise
        return ObjectBody(
            stream=S3BodyReader(body, f"s3://{bucket}/{key}"),
            size=int(response.get("ContentLength", 0)),
            fingerprint=fingerprint,
        )

    def put_object(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        content_type: str,
        acl: str,
    ) -> str:
        """Store an object and return the ETag the store confirmed."""
        from botocore.exceptions import BotoCoreError, ClientError

        params: dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if acl:
            params["ACL"] = acl
        logger.debug("PUT s3://%s/%s (%s, acl=%s)", bucket, key, content_type, acl)
        try:
            response = self._client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            raise TransportError(f"put s3://{bucket}/{key}: {e}") from e
        if response is None:
            raise TransportError(f"put s3://{bucket}/{key}: empty response")
        etag: str | None = response.get("ETag")
        if etag is None:
            raise MalformedMetadataError(f"put s3://{bucket}/{key}: response has no ETag")
        return etag

    def list_objects(
        self, bucket: str, prefix: str = "", delimiter: str = "/"
    ) -> Iterator[ListingEntry]:
        """Iterate over a listing using the list_objects_v2 paginator."""
        from botocore.exceptions import BotoCoreError, ClientError

        paginator = self._client.get_paginator("list_objects_v2")
        kwargs = {"Bucket": bucket, "Prefix": prefix, "Delimiter": delimiter}
        try:
            for page in paginator.paginate(**kwargs):
                for common_prefix in page.get("CommonPrefixes", []):
                    yield ListingEntry(key=common_prefix["Prefix"], is_prefix=True)
                for obj in page.get("Contents", []):
                    yield ListingEntry(key=obj["Key"], size=int(obj.get("Size", 0)))
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, f"s3://{bucket}/{prefix}") from e

    def list_buckets(self) -> list[str]:
        """Return the names of all buckets."""
        from botocore.exceptions import BotoCoreError, ClientError

        try:
            response = self._client.list_buckets()
        except (BotoCoreError, ClientError) as e:
            raise TransportError(f"list buckets: {e}") from e
        return [bucket["Name"] for bucket in response.get("Buckets", [])]
