"""Formatting records produced by the linearizer.

A :class:`Style` is everything a renderer needs to format one character.
A :class:`StyleRange` attaches a style to a half-open interval of the
display text. Ranges from :func:`richspan.linearize` are sorted,
contiguous, cover the whole text, and never repeat a style in two adjacent
ranges.

Equality is plain dataclass field equality. The link target is a ``str``,
so two styles pointing at the same URL compare equal whether or not the
strings are the same object.

Thread Safety:
Both records are frozen and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

HeadingLevel = Literal[0, 1, 2, 3, 4, 5, 6]


@dataclass(frozen=True, slots=True)
class Style:
    """Formatting of a run of characters.

    Attributes:
        bold: Inside ``<strong>``
        italic: Inside ``<em>``
        struck: Inside ``<del>``
        code: Inside ``<code>``
        quote_level: Number of enclosing ``<blockquote>``
        exponent_level: Number of enclosing ``<sup>``
        list_nest_level: Number of enclosing ``<ol>``/``<ul>``
        heading_level: Level of the last applied ``<h1>``..``<h6>`` (0 = none)
        link_url: Target of the enclosing ``<a href>``, if any

    """

    bold: bool = False
    italic: bool = False
    struck: bool = False
    code: bool = False
    quote_level: int = 0
    exponent_level: int = 0
    list_nest_level: int = 0
    heading_level: HeadingLevel = 0
    link_url: str | None = None

    @property
    def is_plain(self) -> bool:
        """True if no formatting applies."""
        return self == PLAIN


PLAIN = Style()


@dataclass(frozen=True, slots=True)
class StyleRange:
    """A style applied to ``[start, end)`` of the display text.

    Positions are visible-character units.
    """

    start: int
    end: int
    style: Style = PLAIN

    @property
    def length(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"StyleRange({self.start}:{self.end}, {self.style!r})"
