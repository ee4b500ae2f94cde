"""Combined result of tokenizing and linearizing one piece of markup.

:class:`FormattedText` is the tuple a rich-text adapter consumes: display
text plus style ranges. It also carries the visible length the ranges were
computed against and every diagnostic both stages reported.

Thread Safety:
FormattedText is frozen and safe to share across threads.
"""

from __future__ import annotations

from dataclasses import dataclass

from richspan.diagnostics import Diagnostic, DiagnosticKind
from richspan.styles import Style, StyleRange


@dataclass(frozen=True, slots=True)
class FormattedText:
    """Display text with its disjoint style ranges.

    Attributes:
        text: Display text
        ranges: Sorted, contiguous style ranges covering the whole text
        visible_length: Text length in visible units (UTF-16 code units)
        diagnostics: Recoverable anomalies from both stages

    """

    text: str
    ranges: tuple[StyleRange, ...] = ()
    visible_length: int = 0
    diagnostics: tuple[Diagnostic, ...] = ()

    def style_at(self, position: int) -> Style:
        """Style in effect at a visible position.

        Raises:
            IndexError: If position is outside the text.
        """
        for style_range in self.ranges:
            if style_range.start <= position < style_range.end:
                return style_range.style
        msg = f"Position {position} outside text of length {self.visible_length}"
        raise IndexError(msg)

    def has_diagnostic(self, kind: DiagnosticKind) -> bool:
        return any(d.kind is kind for d in self.diagnostics)

    @property
    def is_plain(self) -> bool:
        """True if no range carries any formatting."""
        return all(r.style.is_plain for r in self.ranges)
