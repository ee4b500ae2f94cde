"""Tests for visible-width byte classification."""

import pytest

from richspan.charsets import MNEMONIC_BYTES, visible_length, visible_width


class TestVisibleWidth:
    @pytest.mark.parametrize(
        ("byte", "width"),
        [
            (0x00, 1),
            (0x41, 1),
            (0x7F, 1),
            (0x80, 0),
            (0xBF, 0),
            (0xC3, 1),
            (0xE2, 1),
            (0xEF, 1),
            (0xF0, 2),
            (0xF4, 2),
        ],
    )
    def test_byte_classes(self, byte: int, width: int) -> None:
        assert visible_width(byte) == width

    @pytest.mark.parametrize("text", ["", "abc", "héllo", "€", "😀", "a😀b€"])
    def test_matches_utf16_units(self, text: str) -> None:
        assert visible_length(text.encode()) == len(text.encode("utf-16-le")) // 2


class TestMnemonicBytes:
    def test_membership(self) -> None:
        assert ord("#") in MNEMONIC_BYTES
        assert ord("x") in MNEMONIC_BYTES
        assert ord("7") in MNEMONIC_BYTES
        assert ord(";") not in MNEMONIC_BYTES
        assert ord("&") not in MNEMONIC_BYTES
        assert ord(" ") not in MNEMONIC_BYTES
