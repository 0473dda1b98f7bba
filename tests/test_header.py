"""Tests for signature header parsing."""

from __future__ import annotations

from payrail.header import parse_header
from payrail.types import ParsedHeader


class TestParseHeader:
    """Test parse_header."""

    def test_timestamp_and_single_signature(self) -> None:
        """Test the canonical two-pair header."""
        parsed = parse_header("t=1614556800,v1=deadbeef", "v1")
        assert parsed == ParsedHeader(timestamp=1614556800, signatures=("deadbeef",))

    def test_multiple_signatures_keep_order(self) -> None:
        """Test repeated scheme pairs are collected in header order."""
        parsed = parse_header("t=10,v1=aaa,v1=bbb,v1=ccc", "v1")
        assert parsed is not None
        assert parsed.signatures == ("aaa", "bbb", "ccc")

    def test_unknown_schemes_ignored(self) -> None:
        """Test pairs under other schemes are skipped."""
        parsed = parse_header("t=10,v0=old,v1=current,v2=future", "v1")
        assert parsed is not None
        assert parsed.signatures == ("current",)

    def test_missing_timestamp(self) -> None:
        """Test a header without t= reports timestamp -1."""
        parsed = parse_header("v1=deadbeef", "v1")
        assert parsed is not None
        assert parsed.timestamp == -1
        assert parsed.signatures == ("deadbeef",)

    def test_non_integer_timestamp_treated_as_missing(self) -> None:
        """Test an unparseable timestamp is reported as not found."""
        for value in ("abc", "", "12.5", "+10", "1_000", "-5"):
            parsed = parse_header(f"t={value},v1=deadbeef", "v1")
            assert parsed is not None
            assert parsed.timestamp == -1, value

    def test_last_timestamp_wins(self) -> None:
        """Test duplicate t= pairs keep the last value."""
        parsed = parse_header("t=1,v1=sig,t=2", "v1")
        assert parsed is not None
        assert parsed.timestamp == 2

    def test_only_first_equals_splits(self) -> None:
        """Test values containing '=' are preserved."""
        parsed = parse_header("t=10,v1=abc==", "v1")
        assert parsed is not None
        assert parsed.signatures == ("abc==",)

    def test_padded_scheme_key_not_matched(self) -> None:
        """Test a key with surrounding spaces is not the expected scheme."""
        parsed = parse_header("t=10, v1=abc", "v1")
        assert parsed == ParsedHeader(timestamp=10, signatures=())

    def test_signature_value_kept_verbatim(self) -> None:
        """Test signature values are not trimmed."""
        parsed = parse_header("t=10,v1= abc ", "v1")
        assert parsed is not None
        assert parsed.signatures == (" abc ",)

    def test_timestamp_value_trimmed(self) -> None:
        """Test whitespace around the timestamp digits is ignored."""
        parsed = parse_header("t= 10 ,v1=abc", "v1")
        assert parsed == ParsedHeader(timestamp=10, signatures=("abc",))

    def test_tokens_without_equals_ignored(self) -> None:
        """Test stray tokens are ignored."""
        parsed = parse_header("garbage,t=10,,v1=abc", "v1")
        assert parsed == ParsedHeader(timestamp=10, signatures=("abc",))

    def test_other_expected_scheme(self) -> None:
        """Test collecting a non-default scheme."""
        parsed = parse_header("t=10,v1=one,v2=two", "v2")
        assert parsed is not None
        assert parsed.signatures == ("two",)

    def test_non_string_returns_none(self) -> None:
        """Test non-string headers are rejected."""
        assert parse_header(None, "v1") is None
        assert parse_header(b"t=10,v1=abc", "v1") is None
        assert parse_header(["t=10,v1=abc"], "v1") is None

    def test_empty_header(self) -> None:
        """Test an empty string yields an empty record."""
        assert parse_header("", "v1") == ParsedHeader(timestamp=-1, signatures=())
