"""Non-fatal anomalies found while converting markup.

Broken markup produces broken formatting, never a crash. Each anomaly is
recorded as a :class:`Diagnostic` and handed back with the result so callers
can log, count, or reject as they see fit.

Thread Safety:
Diagnostic is frozen. A Diagnostics collector belongs to a single call.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from richspan.errors import DiagnosticError


class DiagnosticKind(Enum):
    """Categories of recoverable anomalies."""

    TAG_DEPTH_EXCEEDED = auto()  # open tag dropped, stack full
    MALFORMED_ATTRIBUTE = auto()  # href value unquoted or unterminated
    UNKNOWN_ENTITY = auto()  # mnemonic passed through literally
    UNMATCHED_CLOSE = auto()  # </x> with nothing open
    UNTERMINATED_TAG = auto()  # input ended inside <...
    UNCLOSED_TAG = auto()  # <x> never closed


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single recoverable anomaly.

    Attributes:
        kind: Anomaly category
        message: Human-readable description
        position: Visible-character position where it was detected
    """

    kind: DiagnosticKind
    message: str
    position: int = 0

    def __str__(self) -> str:
        return f"{self.kind.name} at {self.position}: {self.message}"


class Diagnostics:
    """Ordered collector of diagnostics for one tokenize/linearize call."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(self, kind: DiagnosticKind, message: str, position: int = 0) -> Diagnostic:
        """Record an anomaly and return it."""
        diagnostic = Diagnostic(kind, message, position)
        self._items.append(diagnostic)
        return diagnostic

    def extend(self, other: Diagnostics | tuple[Diagnostic, ...]) -> None:
        self._items.extend(other)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self._items if d.kind is kind]

    def as_tuple(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    def raise_if_any(self) -> None:
        """Raise DiagnosticError if anything was reported.

        Raises:
            DiagnosticError: Carrying every recorded diagnostic.
        """
        if self._items:
            raise DiagnosticError(tuple(self._items))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
