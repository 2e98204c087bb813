"""Change detection and verified transfers.

This package provides:
- ChangeDetector: Local MD5 versus remote ETag comparison
- TransferExecutor: Upload/download guarded by the change check
- exit_code_for, format_report: Outcome reporting
"""

from s3tool.sync.detector import ChangeDetector
from s3tool.sync.report import exit_code_for, format_report
from s3tool.sync.transfer import TransferExecutor
from s3tool.sync.types import (
    Direction,
    DownloadRequest,
    LocalIOError,
    TransferRequest,
    UploadRequest,
    VerificationMismatchError,
)

__all__ = [
    "ChangeDetector",
    "Direction",
    "DownloadRequest",
    "LocalIOError",
    "TransferExecutor",
    "TransferRequest",
    "UploadRequest",
    "VerificationMismatchError",
    "exit_code_for",
    "format_report",
]
