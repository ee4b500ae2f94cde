"""HTML character reference decoding.

This is the decoder the tokenizer calls for each complete ``&name;``
mnemonic. Named references come from Python's HTML5 table; numeric
references (``&#60;``, ``&#x3C;``) follow the HTML5 replacement rules.

An unrecognized mnemonic decodes to ``b""``. The tokenizer treats that as
"unknown" and writes the mnemonic through literally, so no text is lost.

A different decoder can be plugged in with ``FormatConfig.entity_decoder``;
it must follow the same contract.
"""

import html.entities

# Keys include the trailing semicolon (e.g. "amp;")
_HTML5_ENTITIES = html.entities.html5

# HTML5 numeric character reference replacements for the C1 range
_NUMERIC_REPLACEMENTS = {
    0x00: "\ufffd",  # NULL
    0x80: "\u20ac",  # EURO SIGN
    0x82: "\u201a",  # SINGLE LOW-9 QUOTATION MARK
    0x83: "\u0192",  # LATIN SMALL LETTER F WITH HOOK
    0x84: "\u201e",  # DOUBLE LOW-9 QUOTATION MARK
    0x85: "\u2026",  # HORIZONTAL ELLIPSIS
    0x86: "\u2020",  # DAGGER
    0x87: "\u2021",  # DOUBLE DAGGER
    0x88: "\u02c6",  # MODIFIER LETTER CIRCUMFLEX ACCENT
    0x89: "\u2030",  # PER MILLE SIGN
    0x8A: "\u0160",  # LATIN CAPITAL LETTER S WITH CARON
    0x8B: "\u2039",  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    0x8C: "\u0152",  # LATIN CAPITAL LIGATURE OE
    0x8E: "\u017d",  # LATIN CAPITAL LETTER Z WITH CARON
    0x91: "\u2018",  # LEFT SINGLE QUOTATION MARK
    0x92: "\u2019",  # RIGHT SINGLE QUOTATION MARK
    0x93: "\u201c",  # LEFT DOUBLE QUOTATION MARK
    0x94: "\u201d",  # RIGHT DOUBLE QUOTATION MARK
    0x95: "\u2022",  # BULLET
    0x96: "\u2013",  # EN DASH
    0x97: "\u2014",  # EM DASH
    0x98: "\u02dc",  # SMALL TILDE
    0x99: "\u2122",  # TRADE MARK SIGN
    0x9A: "\u0161",  # LATIN SMALL LETTER S WITH CARON
    0x9B: "\u203a",  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    0x9C: "\u0153",  # LATIN SMALL LIGATURE OE
    0x9E: "\u017e",  # LATIN SMALL LETTER Z WITH CARON
    0x9F: "\u0178",  # LATIN CAPITAL LETTER Y WITH DIAERESIS
}


def decode_numeric_entity(digits: str, is_hex: bool = False) -> str | None:
    """Decode the digits of a numeric reference like ``&#60;`` or ``&#x3C;``.

    Args:
        digits: The numeric part (without ``&#``, ``x`` or ``;``)
        is_hex: Whether the digits are hexadecimal

    Returns:
        The decoded character, or None if the digits are not a number
    """
    if not digits:
        return None
    try:
        codepoint = int(digits, 16 if is_hex else 10)
    except ValueError:
        return None

    if codepoint in _NUMERIC_REPLACEMENTS:
        return _NUMERIC_REPLACEMENTS[codepoint]
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return "\ufffd"
    return chr(codepoint)


def decode_entity(mnemonic: str) -> bytes:
    """Decode one complete mnemonic into UTF-8 bytes.

    Args:
        mnemonic: Reference text including the leading ``&`` and trailing ``;``

    Returns:
        Decoded UTF-8 bytes, or ``b""`` if the mnemonic is not recognized.

    Example:
        >>> decode_entity("&amp;")
        b'&'
        >>> decode_entity("&#x1F600;")
        b'\\xf0\\x9f\\x98\\x80'
        >>> decode_entity("&bogus;")
        b''
    """
    if len(mnemonic) < 3 or mnemonic[0] != "&" or mnemonic[-1] != ";":
        return b""

    body = mnemonic[1:-1]
    if body.startswith("#"):
        if body[1:2] in ("x", "X"):
            char = decode_numeric_entity(body[2:], is_hex=True)
        else:
            char = decode_numeric_entity(body[1:])
        return char.encode() if char is not None else b""

    decoded = _HTML5_ENTITIES.get(body + ";")
    return decoded.encode() if decoded is not None else b""
