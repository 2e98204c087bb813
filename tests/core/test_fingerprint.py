"""Tests for content fingerprints."""

from __future__ import annotations

import base64
import hashlib
import io
from pathlib import Path

import pytest

from s3tool.core.fingerprint import Fingerprint, compute_fingerprint, file_fingerprint

HELLO_MD5 = "5d41402abc4b2a76b9719d911017c592"


class TestFingerprint:
    """Tests for the Fingerprint dataclass."""

    def test_hex_and_b64_share_digest(self) -> None:
        """Both encodings should decode to the same digest bytes."""
        digest = hashlib.md5(b"hello").digest()
        fp = Fingerprint(digest)

        assert bytes.fromhex(fp.hex) == digest
        assert base64.b64decode(fp.b64) == digest

    def test_hex_is_lowercase(self) -> None:
        """Hex form should be lowercase, like an ETag."""
        fp = Fingerprint(bytes([0xAB, 0xCD]))
        assert fp.hex == "abcd"


class TestComputeFingerprint:
    """Tests for compute_fingerprint()."""

    def test_md5_of_hello(self) -> None:
        """Should match the well-known MD5 of 'hello'."""
        fp, size = compute_fingerprint(io.BytesIO(b"hello"))

        assert fp.hex == HELLO_MD5
        assert fp.b64 == "XUFAKrxLKna5cZ2REBfFkg=="
        assert size == 5

    def test_empty_stream(self) -> None:
        """Empty input should hash to the MD5 of no bytes."""
        fp, size = compute_fingerprint(io.BytesIO(b""))

        assert fp.hex == "d41d8cd98f00b204e9800998ecf8427e"
        assert size == 0

    def test_position_restored(self) -> None:
        """The stream should be back at its original offset."""
        stream = io.BytesIO(b"hello world")
        stream.seek(6)

        fp, size = compute_fingerprint(stream)

        assert stream.tell() == 6
        assert fp.hex == hashlib.md5(b"world").hexdigest()
        assert size == 5

    def test_idempotent(self) -> None:
        """Two consecutive computations should give the same result."""
        stream = io.BytesIO(b"x" * 200_000)

        first = compute_fingerprint(stream)
        second = compute_fingerprint(stream)

        assert first == second
        assert stream.tell() == 0

    def test_position_restored_on_read_error(self) -> None:
        """A failing read should still rewind the stream."""

        class FailingStream(io.BytesIO):
            def read(self, size: int | None = -1) -> bytes:
                if self.tell() >= 4:
                    raise OSError("disk error")
                return super().read(4)

        stream = FailingStream(b"abcdefgh")
        stream.seek(2)

        with pytest.raises(OSError, match="disk error"):
            compute_fingerprint(stream)

        assert stream.tell() == 2


class TestFileFingerprint:
    """Tests for file_fingerprint()."""

    def test_hashes_file(self, tmp_path: Path) -> None:
        """Should hash the whole file and report its size."""
        path = tmp_path / "a.txt"
        path.write_bytes(b"hello")

        fp, size = file_fingerprint(path)

        assert fp.hex == HELLO_MD5
        assert size == 5

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Should raise for a missing file."""
        with pytest.raises(FileNotFoundError):
            file_fingerprint(tmp_path / "missing")
