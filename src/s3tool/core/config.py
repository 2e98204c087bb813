"""Shared configuration classes for s3tool.

This module defines the immutable configuration built once at startup
and passed explicitly to the components that need it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_REGION = "ap-northeast-1"
DEFAULT_ACL = "private"
DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class ExitCodes:
    """Process exit codes for the three transfer outcomes.

    Attributes:
        ok: Success, nothing needed to change.
        changed: Success, a change was (or would be) applied.
        failed: The check or the transfer failed.
    """

    ok: int = 0
    changed: int = 254
    failed: int = 255


@dataclass(frozen=True)
class ToolConfig:
    """Configuration for a single s3tool invocation.

    Attributes:
        region: AWS region used to build the S3 client.
        profile: Named AWS profile, or None for the default credential chain.
        acl: Canned ACL applied to uploads (private, public-read, ...).
        mime_type: Content-Type applied to uploads.
        exit_codes: Mapping of transfer outcomes to exit codes.
        precheck: Compare fingerprints before transferring.
        dry_run: Report the verdict without transferring (precheck mode only).
        fullpath: Print full keys in listings instead of the last component.
    """

    region: str = DEFAULT_REGION
    profile: str | None = None
    acl: str = DEFAULT_ACL
    mime_type: str = DEFAULT_MIME_TYPE
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    precheck: bool = False
    dry_run: bool = False
    fullpath: bool = False

    def __post_init__(self) -> None:
        """Fall back to the default MIME type when given an empty one."""
        if not self.mime_type:
            object.__setattr__(self, "mime_type", DEFAULT_MIME_TYPE)
