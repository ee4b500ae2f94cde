"""Bounded LIFO of open tag markers.

The tokenizer pushes an :class:`~richspan.tokens.OpenTag` for every ``<x``
and pops one for every ``</x>``, so matching is purely positional: a close
tag ends whatever tag opened last, whatever its name.

Capacity is fixed at construction. A push onto a full stack is refused
(returns False) instead of overwriting anything; the caller decides how to
report it. Popping an empty stack returns None.

Thread Safety:
TagStack instances are local to a single tokenize() call.
"""

from __future__ import annotations

from richspan.tokens import OpenTag


class TagStack:
    """Fixed-capacity stack of open tags.

    Usage:
            >>> stack = TagStack(capacity=2)
            >>> stack.push(OpenTag(0))
            True
            >>> stack.pop()
            OpenTag(start=0, name=None)
            >>> stack.pop() is None
            True

    """

    __slots__ = ("_items", "_capacity")

    def __init__(self, capacity: int) -> None:
        """Initialize an empty stack.

        Args:
            capacity: Maximum number of markers held at once (>= 0)
        """
        if capacity < 0:
            msg = f"TagStack capacity must be non-negative, got {capacity}"
            raise ValueError(msg)
        self._items: list[OpenTag] = []
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, marker: OpenTag) -> bool:
        """Push a marker.

        Returns:
            False if the stack is full and the marker was not stored
        """
        if len(self._items) >= self._capacity:
            return False
        self._items.append(marker)
        return True

    def pop(self) -> OpenTag | None:
        """Pop the most recent marker, or None when empty."""
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> OpenTag | None:
        """Return the most recent marker without removing it."""
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def drain(self) -> list[OpenTag]:
        """Pop every remaining marker, most recent first."""
        drained = self._items[::-1]
        self._items.clear()
        return drained

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
