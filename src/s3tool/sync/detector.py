"""Change detection between a local file and a remote object.

This module provides:
- ChangeDetector: Compares the local MD5 with the remote ETag
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from s3tool.core.fingerprint import file_fingerprint
from s3tool.core.types import ChangeRecord
from s3tool.storage import NotFoundError
from s3tool.sync.types import LocalIOError

if TYPE_CHECKING:
    from s3tool.storage import ObjectStore

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Decides whether a local file and a remote object differ."""

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    def check(self, local_path: Path, bucket: str, key: str) -> ChangeRecord:
        """Compare a local file with a remote object.

        A missing local file is always reported as changed, without
        contacting the store. A missing remote object is reported as
        changed with only the local side filled in.

        Args:
            local_path: Path of the local file.
            bucket: Bucket of the remote object.
            key: Key of the remote object.

        Returns:
            A fresh ChangeRecord.

        Raises:
            LocalIOError: If the local file cannot be read.
            MalformedMetadataError: If the remote ETag cannot be parsed.
            TransportError: If the store cannot be queried.
        """
        local_path = Path(local_path)
        if not local_path.exists():
            logger.debug("%s does not exist locally", local_path)
            return ChangeRecord(changed=True)

        try:
            fingerprint, size = file_fingerprint(local_path)
        except OSError as e:
            raise LocalIOError(f"Cannot read {local_path}: {e}") from e
        record = ChangeRecord(size=size, local_fingerprint=fingerprint.hex)

        try:
            head = self._store.probe_object(bucket, key)
        except NotFoundError:
            logger.debug("s3://%s/%s does not exist remotely", bucket, key)
            record.changed = True
            return record

        if "-" in head.fingerprint:
            # Multipart ETags are not the MD5 of the content.
            logger.warning(
                "s3://%s/%s has a multipart ETag (%s); it will never match a local MD5",
                bucket,
                key,
                head.fingerprint,
            )
        record.remote_fingerprint = head.fingerprint
        record.changed = record.local_fingerprint != record.remote_fingerprint
        logger.debug(
            "local=%s remote=%s changed=%s",
            record.local_fingerprint,
            record.remote_fingerprint,
            record.changed,
        )
        return record
