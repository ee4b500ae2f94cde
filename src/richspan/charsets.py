"""Byte classification for the tokenizer.

Positions handed to the rich-text layer are counted the way that layer
counts characters, not in UTF-8 bytes. It treats every scalar as one unit
except scalars that need four UTF-8 bytes, which it counts as two (they are
surrogate pairs in UTF-16). Counting happens one byte at a time: the lead
byte carries the whole width and continuation bytes carry none.

Usage:
    from richspan.charsets import visible_width

    visible = sum(visible_width(b) for b in "héllo 😀".encode())  # 8
"""

# ASCII letters, digits and '#' may appear between '&' and ';'
MNEMONIC_BYTES: frozenset[int] = frozenset(
    b"#0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)

# Longest named reference in the HTML5 table is 33 bytes with '&' and ';'
MAX_MNEMONIC_LENGTH = 40

NEWLINE = 0x0A

# U+2022 BULLET followed by a space
BULLET_MARKER = "• ".encode()


def visible_width(byte: int) -> int:
    """Visible-unit contribution of one UTF-8 byte.

    Args:
        byte: A single byte value (0-255)

    Returns:
        1 for ASCII, 0 for a continuation byte (``10xxxxxx``), 2 for a
        four-byte lead (``11110xxx``), 1 for any other lead byte.

    Example:
        >>> [visible_width(b) for b in "é".encode()]
        [1, 0]
    """
    if byte & 0x80 == 0:
        return 1
    if byte & 0x40 == 0:
        return 0
    if byte & 0xF0 == 0xF0:
        return 2
    return 1


def visible_length(data: bytes) -> int:
    """Total visible units of a byte string."""
    return sum(visible_width(b) for b in data)
