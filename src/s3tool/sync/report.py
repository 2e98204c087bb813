"""Exit status and plain-text report for transfer outcomes."""

from __future__ import annotations

from s3tool.core.config import ExitCodes
from s3tool.core.types import ChangeRecord


def exit_code_for(
    record: ChangeRecord | None,
    error: BaseException | None = None,
    codes: ExitCodes | None = None,
) -> int:
    """Map a transfer outcome to a process exit code.

    Failure takes precedence over change.

    Args:
        record: Final ChangeRecord, if one was produced.
        error: Error raised by the check or the transfer, if any.
        codes: Exit code mapping, defaults to ExitCodes().

    Returns:
        The failed, changed or ok code.
    """
    codes = codes or ExitCodes()
    if error is not None or record is None:
        return codes.failed
    if record.changed:
        return codes.changed
    return codes.ok


def format_report(record: ChangeRecord | None) -> str:
    """Render a ChangeRecord as four ``name value`` lines."""
    record = record or ChangeRecord()
    return "\n".join([
        f"changed {str(record.changed).lower()}",
        f"size {record.size}",
        f"local_md5 {record.local_fingerprint}",
        f"s3_md5 {record.remote_fingerprint}",
    ])
