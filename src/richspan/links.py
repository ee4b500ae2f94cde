"""Collect hyperlink targets from style ranges.

A link often spans several ranges (``<a href="u">go <strong>now</strong></a>``
gives two). Views that hit-test taps or build accessibility elements want
one entry per link, so adjacent ranges with the same target are joined.

Example:
    >>> from richspan import format_markup
    >>> from richspan.links import extract_links
    >>> result = format_markup('see <a href="https://x.org">here</a>')
    >>> extract_links(result.ranges)
    [LinkRun(url='https://x.org', start=4, end=8)]
"""

from collections.abc import Iterable
from dataclasses import dataclass

from richspan.styles import StyleRange


@dataclass(frozen=True, slots=True)
class LinkRun:
    """One contiguous stretch of text pointing at ``url``."""

    url: str
    start: int
    end: int

    def contains(self, position: int) -> bool:
        return self.start <= position < self.end


def extract_links(ranges: Iterable[StyleRange]) -> list[LinkRun]:
    """Join consecutive same-target ranges into link runs.

    Args:
        ranges: Sorted, contiguous ranges (as returned by linearize)

    Returns:
        Link runs in text order
    """
    runs: list[LinkRun] = []
    for style_range in ranges:
        url = style_range.style.link_url
        if url is None:
            continue
        if runs and runs[-1].url == url and runs[-1].end == style_range.start:
            last = runs.pop()
            runs.append(LinkRun(url, last.start, style_range.end))
        else:
            runs.append(LinkRun(url, style_range.start, style_range.end))
    return runs


def link_at(ranges: Iterable[StyleRange], position: int) -> str | None:
    """Link target at a visible position, or None."""
    for style_range in ranges:
        if style_range.start <= position < style_range.end:
            return style_range.style.link_url
    return None
