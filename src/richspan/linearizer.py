"""Flatten overlapping tag spans into disjoint style ranges.

Tag spans nest and overlap freely (``<strong>a<em>b</strong>c</em>``); a
rich-text renderer wants one style per character run. Linearization has two
passes:

1. Accumulate: every span adds its effect to a per-position buffer covering
   ``[start, end)``. Flags are set, nesting counters incremented, heading
   level and link target overwritten.
2. Merge: one scan over the buffer emits a new range whenever the style
   changes.

The buffer is column-oriented (one array per style field) so applying a
span is a slice assignment for everything except the counters.

Thread Safety:
linearize() is a pure function; all state is local to the call.

"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import accumulate

from richspan.diagnostics import DiagnosticKind, Diagnostics
from richspan.errors import BufferCapacityExceeded
from richspan.styles import Style, StyleRange
from richspan.tokens import TagSpan
from richspan.utils.logger import get_logger

logger = get_logger(__name__)

_HREF_PREFIX = "a href="


_COUNTERS = ("quote_level", "exponent_level", "list_nest_level")


class StyleBuffer:
    """Per-position style accumulator for a display text of fixed length.

    Counter columns are kept as difference arrays while spans are applied,
    so nesting costs O(1) per span. They are summed into per-position
    values on the first read.
    """

    __slots__ = (
        "length",
        "bold",
        "italic",
        "struck",
        "code",
        "quote_level",
        "exponent_level",
        "list_nest_level",
        "heading_level",
        "link_url",
        "_deltas",
        "_dirty",
    )

    def __init__(self, length: int) -> None:
        self.length = length
        self.bold = bytearray(length)
        self.italic = bytearray(length)
        self.struck = bytearray(length)
        self.code = bytearray(length)
        self.quote_level = [0] * length
        self.exponent_level = [0] * length
        self.list_nest_level = [0] * length
        self.heading_level = bytearray(length)
        self.link_url: list[str | None] = [None] * length
        self._deltas: dict[str, list[int]] = {name: [0] * (length + 1) for name in _COUNTERS}
        self._dirty = False

    @staticmethod
    def _fill(column: bytearray, start: int, end: int, value: int) -> None:
        column[start:end] = bytes((value,)) * (end - start)

    def _increment(self, counter: str, start: int, end: int) -> None:
        if end <= start:
            return
        delta = self._deltas[counter]
        delta[start] += 1
        delta[end] -= 1
        self._dirty = True

    def settle(self) -> None:
        """Turn pending counter deltas into per-position values."""
        if not self._dirty:
            return
        for name in _COUNTERS:
            values = list(accumulate(self._deltas[name]))
            del values[self.length :]
            setattr(self, name, values)
        self._dirty = False

    def apply(self, span: TagSpan, diagnostics: Diagnostics | None = None) -> None:
        """Add one span's effect over ``[span.start, span.end)``.

        Tag names are matched by prefix, case-sensitively. Unknown names
        leave the buffer untouched.
        """
        name = span.name
        start, end = span.start, span.end
        if name is None:
            return

        if name.startswith("strong"):
            self._fill(self.bold, start, end, 1)
        elif name.startswith("em"):
            self._fill(self.italic, start, end, 1)
        elif name.startswith("del"):
            self._fill(self.struck, start, end, 1)
        elif name.startswith("code"):
            self._fill(self.code, start, end, 1)
        elif name.startswith("blockquote"):
            self._increment("quote_level", start, end)
        elif name.startswith("sup"):
            self._increment("exponent_level", start, end)
        elif len(name) >= 2 and name[0] == "h" and "1" <= name[1] <= "6":
            self._fill(self.heading_level, start, end, int(name[1]))
        elif name.startswith(_HREF_PREFIX):
            url = extract_href(name, start, diagnostics)
            if end > start:
                self.link_url[start:end] = [url] * (end - start)
        elif name.startswith(("ol", "ul")):
            self._increment("list_nest_level", start, end)
        else:
            logger.debug("Unknown tag %r ignored", name)

    def key_at(self, i: int) -> tuple:
        """Every style field at position ``i``, in Style field order."""
        self.settle()
        return (
            self.bold[i],
            self.italic[i],
            self.struck[i],
            self.code[i],
            self.quote_level[i],
            self.exponent_level[i],
            self.list_nest_level[i],
            self.heading_level[i],
            self.link_url[i],
        )

    def style_at(self, i: int) -> Style:
        return _style_from_key(self.key_at(i))


def _style_from_key(key: tuple) -> Style:
    bold, italic, struck, code, quote, exponent, list_nest, heading, url = key
    return Style(
        bold=bool(bold),
        italic=bool(italic),
        struck=bool(struck),
        code=bool(code),
        quote_level=quote,
        exponent_level=exponent,
        list_nest_level=list_nest,
        heading_level=heading,
        link_url=url,
    )


def extract_href(name: str, position: int = 0, diagnostics: Diagnostics | None = None) -> str:
    """Pull the link target out of raw ``a href=...`` tag text.

    The value runs from after the opening quote to the matching closing
    quote. A missing closing quote truncates the value at the end of the
    tag text; an unquoted value ends at the first whitespace. Both are
    reported as MALFORMED_ATTRIBUTE, or logged at debug level when no
    collector is passed.

    Example:
        >>> extract_href('a href="http://x" title="y"')
        'http://x'
    """
    value = name[len(_HREF_PREFIX) :]
    quote = value[:1]

    if quote in ('"', "'"):
        close = value.find(quote, 1)
        if close != -1:
            return value[1:close]
        problem = "has no closing quote"
        url = value[1:]
    else:
        problem = "is not quoted"
        parts = value.split(maxsplit=1)
        url = parts[0] if parts else ""

    message = f"href value {problem}: {name!r}"
    if diagnostics is not None:
        diagnostics.report(DiagnosticKind.MALFORMED_ATTRIBUTE, message, position)
    else:
        logger.debug("Malformed attribute at %d: %s", position, message)
    return url


def linearize(
    spans: Iterable[TagSpan],
    display_length: int,
    *,
    diagnostics: Diagnostics | None = None,
) -> list[StyleRange]:
    """Collapse overlapping spans into sorted, disjoint style ranges.

    Args:
        spans: Completed spans from the tokenizer
        display_length: Display text length in visible units
        diagnostics: Optional collector for MALFORMED_ATTRIBUTE reports

    Returns:
        Ranges covering exactly ``[0, display_length)``; adjacent ranges
        always differ in style. Empty list for empty text.

    Raises:
        BufferCapacityExceeded: If a span reaches past display_length.
        ValueError: If a span starts before position 0.

    Complexity: O(T + L) for T spans over L positions (flag and link
    columns are filled by slice assignment)
    """
    buffer = StyleBuffer(display_length)
    for span in spans:
        if span.start < 0:
            msg = f"Span {span!r} starts before the display text"
            raise ValueError(msg)
        if span.end > display_length:
            msg = f"Span {span!r} extends past display text"
            raise BufferCapacityExceeded(msg, size=span.end, capacity=display_length)
        buffer.apply(span, diagnostics)

    ranges: list[StyleRange] = []
    if display_length == 0:
        return ranges

    run_start = 0
    run_key = buffer.key_at(0)
    for i in range(1, display_length):
        key = buffer.key_at(i)
        if key != run_key:
            ranges.append(StyleRange(run_start, i, _style_from_key(run_key)))
            run_start = i
            run_key = key
    ranges.append(StyleRange(run_start, display_length, _style_from_key(run_key)))
    return ranges
