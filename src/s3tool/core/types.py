"""Shared types for s3tool."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChangeRecord:
    """Verdict of a change check, optionally updated by a transfer.

    Attributes:
        changed: True if a transfer is needed, or could not be ruled out.
        size: Local size when hashed, else remote size when probed,
            or the number of bytes written after a download.
        local_fingerprint: Hex MD5 of the local file, empty if absent.
        remote_fingerprint: Hex fingerprint reported by the store, empty
            if the object is absent.
    """

    changed: bool = False
    size: int = 0
    local_fingerprint: str = ""
    remote_fingerprint: str = ""


class S3ToolError(Exception):
    """Base exception for s3tool errors.

    Errors raised by a transfer carry the ChangeRecord that was current
    when the failure happened, so callers can still report it.
    """

    def __init__(self, message: str, record: ChangeRecord | None = None) -> None:
        super().__init__(message)
        self.record = record
