"""Content fingerprints for change detection.

This module provides:
- Fingerprint: an MD5 digest exposed as hex and base64
- compute_fingerprint: hash a seekable stream without moving its position
- file_fingerprint: hash a local file
"""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

BLOCK_SIZE = 64 * 1024


@dataclass(frozen=True)
class Fingerprint:
    """MD5 digest of a byte sequence."""

    digest: bytes

    @property
    def hex(self) -> str:
        """Lowercase hexadecimal form, comparable to an S3 ETag."""
        return self.digest.hex()

    @property
    def b64(self) -> str:
        """Standard base64 form, as used by the Content-MD5 header."""
        return base64.b64encode(self.digest).decode("ascii")


def compute_fingerprint(stream: BinaryIO) -> tuple[Fingerprint, int]:
    """Compute the MD5 fingerprint of a stream from its current position.

    The stream is read to the end and then rewound to the offset it had
    on entry, whether or not hashing succeeded.

    Args:
        stream: A readable, seekable binary stream.

    Returns:
        Tuple of (fingerprint, number of bytes hashed).

    Raises:
        OSError: If the stream cannot be read or repositioned.
    """
    offset = stream.tell()
    try:
        hasher = hashlib.md5(usedforsecurity=False)
        size = 0
        for block in iter(lambda: stream.read(BLOCK_SIZE), b""):
            hasher.update(block)
            size += len(block)
        return Fingerprint(hasher.digest()), size
    finally:
        stream.seek(offset)


def file_fingerprint(path: Path) -> tuple[Fingerprint, int]:
    """Compute the MD5 fingerprint of a local file.

    Args:
        path: Path to the file to hash.

    Returns:
        Tuple of (fingerprint, file size in bytes).
    """
    with open(path, "rb") as f:
        return compute_fingerprint(f)
