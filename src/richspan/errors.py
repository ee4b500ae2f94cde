"""Exception classes for richspan.

Malformed markup never raises: it degrades to best-effort output and is
reported through :mod:`richspan.diagnostics`. The exceptions here cover the
conditions where no sensible output exists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from richspan.diagnostics import Diagnostic


class RichspanError(Exception):
    """Base exception for all richspan errors.

    Subclass this for specific error categories.
    """

    pass


class BufferCapacityExceeded(RichspanError):
    """Input or span data does not fit the buffers sized for it.

    Raised before scanning when the source exceeds the configured input
    ceiling, and by the linearizer when a span reaches past the display
    length it was given.
    """

    def __init__(self, message: str, *, size: int, capacity: int) -> None:
        """Initialize capacity error.

        Args:
            message: What overflowed
            size: Requested size (bytes or visible units)
            capacity: Available capacity in the same unit
        """
        self.size = size
        self.capacity = capacity
        super().__init__(f"{message} ({size} > {capacity})")


class DiagnosticError(RichspanError):
    """Raised on request when a parse produced diagnostics.

    Callers that prefer strict handling over best-effort output use
    ``Diagnostics.raise_if_any()``.
    """

    def __init__(self, diagnostics: tuple[Diagnostic, ...]) -> None:
        self.diagnostics = diagnostics
        first = diagnostics[0]
        more = f" (+{len(diagnostics) - 1} more)" if len(diagnostics) > 1 else ""
        super().__init__(f"{first}{more}")
