"""Tag records produced by the tokenizer.

A tag goes through two shapes. :class:`OpenTag` is provisional: its start
position is known as soon as ``<`` is seen, its name only once ``>`` is
reached. It lives on the tag stack. :class:`TagSpan` is final: it exists
only after the matching close tag, carries both positions, and is what the
linearizer consumes.

All positions are visible-character units (see :mod:`richspan.charsets`),
never byte offsets.

Thread Safety:
Both records are frozen and safe to share across threads.

"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OpenTag:
    """A tag that has started but not yet closed.

    Attributes:
        start: Visible position where the tag's content begins
        name: Raw tag text between ``<`` and ``>`` (None until scanned),
            including attribute text such as ``a href="..."``

    """

    start: int
    name: str | None = None

    def named(self, name: str) -> "OpenTag":
        """Return this marker with its name filled in."""
        return OpenTag(self.start, name)

    def close(self, end: int) -> "TagSpan":
        """Promote to a completed span ending at ``end``."""
        return TagSpan(self.name, self.start, end)


@dataclass(frozen=True, slots=True)
class TagSpan:
    """A completed tag occurrence.

    Attributes:
        name: Raw tag text (None when the name was never scanned)
        start: First covered visible position; ``start >= 0``
        end: One past the last covered position; ``start <= end``

    """

    name: str | None
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            msg = f"TagSpan start {self.start} is negative"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"TagSpan end {self.end} precedes start {self.start}"
            raise ValueError(msg)

    @property
    def is_empty(self) -> bool:
        """True for zero-width spans (self-closing tags, empty elements)."""
        return self.start == self.end

    def __repr__(self) -> str:
        return f"TagSpan({self.name!r}, {self.start}:{self.end})"
