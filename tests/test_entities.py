"""Tests for character reference decoding."""

import pytest

from richspan.entities import decode_entity, decode_numeric_entity


class TestNamedEntities:
    @pytest.mark.parametrize(
        ("mnemonic", "expected"),
        [
            ("&amp;", "&"),
            ("&lt;", "<"),
            ("&gt;", ">"),
            ("&quot;", '"'),
            ("&nbsp;", "\xa0"),
            ("&eacute;", "é"),
            ("&hellip;", "…"),
        ],
    )
    def test_known(self, mnemonic: str, expected: str) -> None:
        assert decode_entity(mnemonic) == expected.encode()

    def test_unknown_is_empty(self) -> None:
        assert decode_entity("&bogus;") == b""

    def test_case_sensitive(self) -> None:
        assert decode_entity("&AMP;") == b"&"
        assert decode_entity("&Amp;") == b""

    @pytest.mark.parametrize("mnemonic", ["", "&", "&;", "amp;", "&amp"])
    def test_malformed(self, mnemonic: str) -> None:
        assert decode_entity(mnemonic) == b""


class TestNumericEntities:
    def test_decimal(self) -> None:
        assert decode_entity("&#60;") == b"<"

    def test_hex(self) -> None:
        assert decode_entity("&#x3C;") == b"<"
        assert decode_entity("&#X3c;") == b"<"

    def test_astral(self) -> None:
        assert decode_entity("&#x1F600;") == "😀".encode()

    def test_windows_1252_replacement(self) -> None:
        assert decode_entity("&#128;") == "€".encode()

    def test_out_of_range_is_replacement_char(self) -> None:
        assert decode_numeric_entity("110000", is_hex=True) == "\ufffd"
        assert decode_numeric_entity("D800", is_hex=True) == "\ufffd"

    def test_not_a_number(self) -> None:
        assert decode_numeric_entity("") is None
        assert decode_numeric_entity("12a") is None
        assert decode_entity("&#;") == b""
        assert decode_entity("&#xZZ;") == b""
