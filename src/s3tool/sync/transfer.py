"""Uploads and downloads guarded by change detection.

This module provides:
- TransferExecutor: Runs the change check, then transfers and verifies
"""

from __future__ import annotations

import contextlib
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from s3tool.core.fingerprint import compute_fingerprint
from s3tool.core.types import ChangeRecord, S3ToolError
from s3tool.storage import parse_integrity_token
from s3tool.sync.detector import ChangeDetector
from s3tool.sync.types import (
    Direction,
    DownloadRequest,
    LocalIOError,
    TransferRequest,
    UploadRequest,
    VerificationMismatchError,
)

if TYPE_CHECKING:
    from s3tool.storage import ObjectStore

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


class TransferExecutor:
    """Performs uploads and downloads against an object store."""

    def __init__(self, store: ObjectStore, detector: ChangeDetector | None = None) -> None:
        """Initialize the executor.

        Args:
            store: Object store used for transfers.
            detector: Change detector, defaults to one using the same store.
        """
        self._store = store
        self._detector = detector or ChangeDetector(store)

    def execute(self, request: TransferRequest) -> ChangeRecord:
        """Run an upload or a download depending on the request direction."""
        handlers = {
            Direction.UPLOAD: self.upload,
            Direction.DOWNLOAD: self.download,
        }
        return handlers[request.direction](request)  # type: ignore[operator]

    def upload(self, request: UploadRequest) -> ChangeRecord:
        """Upload a local file if it differs from the remote object.

        Args:
            request: What to upload and where.

        Returns:
            The ChangeRecord of the check, with the confirmed remote
            fingerprint after a real upload.

        Raises:
            S3ToolError: If the check or the upload fails. Errors raised
                during the upload carry the record with ``changed`` cleared.
        """
        record = self._detector.check(request.local_path, request.bucket, request.key)
        if not record.changed or request.dry_run:
            return record

        logger.info("Uploading %s to s3://%s/%s", request.local_path, request.bucket, request.key)
        with _failure_clears_changed(record):
            with open(request.local_path, "rb") as f:
                token = self._store.put_object(
                    request.bucket,
                    request.key,
                    f,
                    request.content_type,
                    request.acl,
                )
            record.remote_fingerprint = parse_integrity_token(token)
            if record.remote_fingerprint != record.local_fingerprint:
                raise VerificationMismatchError(
                    f"upload failed. md5:{record.local_fingerprint} "
                    f"ETag:{record.remote_fingerprint}"
                )
        return record

    def download(self, request: DownloadRequest) -> ChangeRecord:
        """Download a remote object if it differs from the local file.

        The written file is not re-hashed; the record carries the
        fingerprint reported by the store.

        Args:
            request: What to download and where.

        Returns:
            The ChangeRecord of the check, with the size written and the
            remote fingerprint after a real download.

        Raises:
            S3ToolError: If the check or the download fails. Errors raised
                during the download carry the record with ``changed`` cleared.
        """
        local_path = Path(request.local_path)
        record = self._detector.check(local_path, request.bucket, request.key)
        if not record.changed or request.dry_run:
            return record

        logger.info("Downloading s3://%s/%s to %s", request.bucket, request.key, local_path)
        with _failure_clears_changed(record):
            if request.mkdir_parents:
                _ensure_parent(local_path)
            body = self._store.get_object(request.bucket, request.key)
            with contextlib.closing(body.stream):
                record.size = _write_stream(body.stream, local_path)
            record.remote_fingerprint = body.fingerprint
        return record

    def put_file(
        self,
        bucket: str,
        key: str,
        local_path: Path,
        content_type: str,
        acl: str,
    ) -> ChangeRecord:
        """Upload a file unconditionally, verifying the confirmed ETag.

        Raises:
            VerificationMismatchError: If the ETag differs from the local MD5.
        """
        try:
            with open(local_path, "rb") as f:
                fingerprint, size = compute_fingerprint(f)
                token = self._store.put_object(bucket, key, f, content_type, acl)
        except OSError as e:
            raise LocalIOError(f"Cannot read {local_path}: {e}") from e
        record = ChangeRecord(
            changed=True,
            size=size,
            local_fingerprint=fingerprint.hex,
            remote_fingerprint=parse_integrity_token(token),
        )
        if record.remote_fingerprint != record.local_fingerprint:
            raise VerificationMismatchError(
                f"md5 and ETag does not match. md5:{record.local_fingerprint} "
                f"ETag:{record.remote_fingerprint}",
                record,
            )
        return record

    def get_file(self, bucket: str, key: str, local_path: Path) -> ChangeRecord:
        """Download an object unconditionally, creating parent directories."""
        local_path = Path(local_path)
        _ensure_parent(local_path)
        body = self._store.get_object(bucket, key)
        with contextlib.closing(body.stream):
            size = _write_stream(body.stream, local_path)
        return ChangeRecord(changed=True, size=size, remote_fingerprint=body.fingerprint)


@contextlib.contextmanager
def _failure_clears_changed(record: ChangeRecord):
    """Clear ``record.changed`` and attach the record to any transfer error.

    A failed transfer must report as failed, not as changed.
    """
    try:
        yield
    except S3ToolError as e:
        record.changed = False
        e.record = record
        raise
    except OSError as e:
        record.changed = False
        raise LocalIOError(str(e), record) from e


def _ensure_parent(local_path: Path) -> None:
    """Create the parent directories of a path, tolerating concurrent creators."""
    try:
        local_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LocalIOError(f"Cannot create {local_path.parent}: {e}") from e


def _write_stream(stream, local_path: Path) -> int:
    """Copy a readable stream into a new or truncated file.

    Returns:
        Number of bytes written.
    """
    try:
        with open(local_path, "wb") as f:
            shutil.copyfileobj(stream, f, COPY_BUFFER_SIZE)
            return f.tell()
    except OSError as e:
        raise LocalIOError(f"Cannot write {local_path}: {e}") from e
