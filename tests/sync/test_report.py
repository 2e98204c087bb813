"""Tests for exit codes and the plain-text report."""

from __future__ import annotations

from s3tool.core.config import ExitCodes
from s3tool.core.types import ChangeRecord
from s3tool.storage import TransportError
from s3tool.sync import exit_code_for, format_report


class TestExitCodeFor:
    """Tests for exit_code_for()."""

    def test_unchanged(self) -> None:
        assert exit_code_for(ChangeRecord(changed=False)) == 0

    def test_changed(self) -> None:
        assert exit_code_for(ChangeRecord(changed=True)) == 254

    def test_error_wins_over_changed(self) -> None:
        """Failure takes precedence even if the record says changed."""
        record = ChangeRecord(changed=True)
        assert exit_code_for(record, TransportError("boom")) == 255

    def test_missing_record_is_failure(self) -> None:
        assert exit_code_for(None) == 255

    def test_custom_codes(self) -> None:
        """Operators may remap the three codes."""
        codes = ExitCodes(ok=10, changed=11, failed=12)
        assert exit_code_for(ChangeRecord(changed=False), codes=codes) == 10
        assert exit_code_for(ChangeRecord(changed=True), codes=codes) == 11
        assert exit_code_for(None, TransportError("x"), codes) == 12


class TestFormatReport:
    """Tests for format_report()."""

    def test_four_lines(self) -> None:
        record = ChangeRecord(
            changed=True,
            size=5,
            local_fingerprint="5d41402abc4b2a76b9719d911017c592",
            remote_fingerprint="",
        )

        assert format_report(record).splitlines() == [
            "changed true",
            "size 5",
            "local_md5 5d41402abc4b2a76b9719d911017c592",
            "s3_md5 ",
        ]

    def test_none_renders_empty_record(self) -> None:
        """A failure before any verdict still prints the four fields."""
        assert format_report(None).splitlines()[0] == "changed false"
        assert len(format_report(None).splitlines()) == 4
