"""Shared types for transfers.

This module provides:
- VerificationMismatchError, LocalIOError: Exception classes
- Direction: Transfer direction enum
- UploadRequest, DownloadRequest: Transfer requests
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from s3tool.core.config import DEFAULT_ACL, DEFAULT_MIME_TYPE
from s3tool.core.types import S3ToolError


class VerificationMismatchError(S3ToolError):
    """The store confirmed a fingerprint different from the one sent."""


class LocalIOError(S3ToolError):
    """A local filesystem operation failed."""


class Direction(Enum):
    """Direction of a transfer."""

    UPLOAD = "upload"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class UploadRequest:
    """Upload a local file to bucket/key."""

    local_path: Path
    bucket: str
    key: str
    content_type: str = DEFAULT_MIME_TYPE
    acl: str = DEFAULT_ACL
    dry_run: bool = False

    @property
    def direction(self) -> Direction:
        return Direction.UPLOAD


@dataclass(frozen=True)
class DownloadRequest:
    """Download bucket/key to a local file."""

    bucket: str
    key: str
    local_path: Path
    mkdir_parents: bool = False
    dry_run: bool = False

    @property
    def direction(self) -> Direction:
        return Direction.DOWNLOAD


TransferRequest = UploadRequest | DownloadRequest
