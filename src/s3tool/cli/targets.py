"""Parsing of bucket/key arguments and local destinations."""

from __future__ import annotations

import posixpath
from pathlib import Path

import click


def split_target(target: str) -> tuple[str, str]:
    """Split ``bucket/path/to/key`` into bucket and key.

    Args:
        target: Bucket name optionally followed by ``/`` and a key.

    Returns:
        Tuple of (bucket, key). The key is empty for a bare bucket.

    Raises:
        click.BadParameter: If the bucket name is empty.
    """
    bucket, _, key = target.partition("/")
    if not bucket:
        raise click.BadParameter(f"no bucket in {target!r}")
    return bucket, key


def upload_key(src: str, key: str) -> str:
    """Resolve the destination key of an upload.

    A key that is empty or ends with ``/`` names a directory: the source
    file name is appended.

    Raises:
        click.BadParameter: If the source does not name a file.
    """
    name = Path(src).name
    if src.endswith("/") or name in ("", ".", ".."):
        raise click.BadParameter(f"src path is unknown: {src}")
    if key == "" or key.endswith("/"):
        return posixpath.join(key, name)
    return key


def download_path(key: str, dest: str) -> Path:
    """Resolve the local file a download writes to.

    A destination ending with ``/``, or whose last component is ``.`` or
    ``..``, names a directory: the object's file name is used inside it.
    """
    name = posixpath.basename(key)
    if not name:
        raise click.BadParameter(f"key does not name an object: {key!r}")
    last = dest.rstrip("/").rsplit("/", 1)[-1]
    if dest.endswith("/") or last in (".", ".."):
        return Path(dest) / name
    return Path(dest)


def display_path(key: str, fullpath: bool = False) -> str:
    """Format a listed key: the full key, or just its last component.

    Common prefixes keep their trailing slash.
    """
    if fullpath:
        return key
    parts = key.split("/")
    if parts[-1] == "" and len(parts) > 1:
        return f"{parts[-2]}/"
    return parts[-1]
