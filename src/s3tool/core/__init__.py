"""Core module - Fingerprints, configuration and shared types."""

from s3tool.core.config import (
    DEFAULT_ACL,
    DEFAULT_MIME_TYPE,
    DEFAULT_REGION,
    ExitCodes,
    ToolConfig,
)
from s3tool.core.fingerprint import (
    Fingerprint,
    compute_fingerprint,
    file_fingerprint,
)
from s3tool.core.types import ChangeRecord, S3ToolError

__all__ = [
    # Config
    "DEFAULT_ACL",
    "DEFAULT_MIME_TYPE",
    "DEFAULT_REGION",
    "ExitCodes",
    "ToolConfig",
    # Fingerprint
    "Fingerprint",
    "compute_fingerprint",
    "file_fingerprint",
    # Types
    "ChangeRecord",
    "S3ToolError",
]
