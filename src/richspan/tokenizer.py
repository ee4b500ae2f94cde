"""Single-pass tokenizer for inline forum markup.

Scans UTF-8 bytes once, left to right, and splits them into the text a
reader sees and the tags that format it. Tags are matched with a bounded
stack; entities are decoded inline; list items get their marker text
("1. ", "• ") written straight into the display text.

Positions on the emitted spans count visible characters as the rich-text
layer counts them (see :func:`richspan.charsets.visible_width`), so a span
can be applied to the display string without any byte-to-index mapping.

Thread Safety:
Tokenizer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from richspan.charsets import (
    BULLET_MARKER,
    MAX_MNEMONIC_LENGTH,
    MNEMONIC_BYTES,
    NEWLINE,
    visible_length,
    visible_width,
)
from richspan.config import FormatConfig, get_format_config
from richspan.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from richspan.entities import decode_entity
from richspan.errors import BufferCapacityExceeded
from richspan.stack import TagStack
from richspan.tokens import OpenTag, TagSpan
from richspan.utils.logger import get_logger

logger = get_logger(__name__)

_LT = ord("<")
_GT = ord(">")
_SLASH = ord("/")
_AMP = ord("&")
_SEMI = ord(";")


class ListMode(Enum):
    """Which marker the next ``<li>`` receives."""

    NONE = auto()  # no list opened yet
    ORDERED = auto()  # "1. ", "2. ", ...
    UNORDERED = auto()  # "• "


@dataclass(frozen=True, slots=True)
class TokenizeResult:
    """Output of one tokenize() call.

    Attributes:
        display_bytes: UTF-8 display text with all markup removed
        spans: Completed tag spans in the order they closed
        visible_length: Display length in visible-character units
        diagnostics: Recoverable anomalies, in detection order

    """

    display_bytes: bytes
    spans: list[TagSpan]
    visible_length: int
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def display_text(self) -> str:
        """Display text as str."""
        return self.display_bytes.decode("utf-8", errors="replace")

    @property
    def span_count(self) -> int:
        return len(self.spans)


def _is_line_break(name: str) -> bool:
    """True for ``br/`` and ``br /``."""
    return name.startswith("br/") or name.rstrip("/").rstrip() == "br"


class Tokenizer:
    """Byte-level state machine separating markup from display text.

    Usage:
            >>> result = Tokenizer("<strong>hi</strong>").tokenize()
            >>> result.display_text
            'hi'
            >>> result.spans
            [TagSpan('strong', 0:2)]

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_config",
        "_decoder",
        "_stack",
        "_spans",
        "_diagnostics",
        # Display text state
        "_display",
        "_visible",
        "_last_byte",
        # Tag state
        "_in_tag",
        "_tag_name",
        "_open_pushed",  # current '<' stored a marker
        "_open_dropped",  # current '<' found the stack full
        "_dropped_depth",  # dropped opens still waiting for their close
        # Entity state
        "_in_entity",
        "_entity",
        # List state
        "_list_mode",
        "_list_index",
    )

    def __init__(self, source: str | bytes, config: FormatConfig | None = None) -> None:
        """Initialize tokenizer with source markup.

        Args:
            source: Markup as str or UTF-8 bytes; invalid UTF-8 sequences are
                replaced with U+FFFD before scanning
            config: Format config (defaults to the context's config)

        Raises:
            BufferCapacityExceeded: If source is larger than
                ``config.max_input_bytes``.
        """
        is_text = isinstance(source, str)
        if is_text:
            source = source.encode("utf-8")
        config = config if config is not None else get_format_config()

        limit = config.max_input_bytes
        if limit is not None and len(source) > limit:
            raise BufferCapacityExceeded(
                "Input exceeds max_input_bytes", size=len(source), capacity=limit
            )

        if not is_text and not source.isascii():
            # Invalid sequences become U+FFFD so widths match the decoded text
            source = bytes(source).decode("utf-8", errors="replace").encode("utf-8")

        self._source = source
        self._source_len = len(source)
        self._config = config
        self._decoder = config.entity_decoder or decode_entity

        depth = config.max_tag_depth
        self._stack = TagStack(self._source_len if depth is None else depth)
        self._spans: list[TagSpan] = []
        self._diagnostics = Diagnostics()

        self._display = bytearray()
        self._visible = 0
        self._last_byte = -1

        self._in_tag = False
        self._tag_name = bytearray()
        self._open_pushed = False
        self._open_dropped = False
        self._dropped_depth = 0

        self._in_entity = False
        self._entity = bytearray()

        self._list_mode = ListMode.NONE
        self._list_index = 1

    def tokenize(self) -> TokenizeResult:
        """Scan the whole source.

        Returns:
            TokenizeResult with display text, spans and diagnostics

        Complexity: O(n) where n = len(source) in bytes
        """
        source = self._source
        source_len = self._source_len

        for i in range(source_len):
            byte = source[i]

            if self._in_entity:
                if byte == _SEMI:
                    self._finish_entity()
                    continue
                if byte in MNEMONIC_BYTES and len(self._entity) < MAX_MNEMONIC_LENGTH:
                    self._entity.append(byte)
                    continue
                # Not a reference after all ("a & b", "?x=1&y=2")
                self._flush_entity()

            if byte == _LT:
                self._start_tag(i + 1 < source_len and source[i + 1] != _SLASH)
            elif byte == _GT and self._in_tag:
                self._end_tag()
            elif byte == _AMP:
                self._in_entity = True
                self._entity.clear()
                self._entity.append(_AMP)
            elif self._in_tag:
                self._tag_name.append(byte)
            else:
                self._emit_text_byte(byte)

        self._finish()

        return TokenizeResult(
            display_bytes=bytes(self._display),
            spans=self._spans,
            visible_length=self._visible,
            diagnostics=self._diagnostics.as_tuple(),
        )

    # =========================================================================
    # Display text
    # =========================================================================

    def _emit_text_byte(self, byte: int) -> None:
        """Append one literal byte, applying the blank-line filter."""
        if (
            byte == NEWLINE
            and self._config.collapse_blank_lines
            and (self._last_byte == NEWLINE or self._visible == 0)
        ):
            return
        self._display.append(byte)
        self._visible += visible_width(byte)
        self._last_byte = byte

    def _write(self, data: bytes) -> None:
        """Append generated text (list markers, entities, line breaks)."""
        if not data:
            return
        self._display += data
        self._visible += visible_length(data)
        self._last_byte = data[-1]

    # =========================================================================
    # Tags
    # =========================================================================

    def _start_tag(self, opens: bool) -> None:
        """Handle ``<``.

        Args:
            opens: False for ``</`` and for a trailing ``<``; those never
                get a marker.
        """
        self._in_tag = True
        self._tag_name.clear()
        self._open_pushed = False
        self._open_dropped = False

        if not opens:
            return
        if self._stack.push(OpenTag(self._visible)):
            self._open_pushed = True
        else:
            self._open_dropped = True

    def _end_tag(self) -> None:
        """Handle ``>``: classify the buffered name and act on it."""
        name = self._tag_name.decode("utf-8", errors="replace")
        self._in_tag = False
        self._tag_name.clear()

        if name.startswith("/"):
            self._close_element(name)
        elif name.endswith("/"):
            self._void_element(name)
        else:
            self._open_element(name)

        self._open_pushed = False
        self._open_dropped = False

    def _close_element(self, name: str) -> None:
        if self._dropped_depth:
            # Closes the innermost open tag, which is one we never stored
            self._dropped_depth -= 1
            return

        marker = self._stack.pop()
        if marker is None:
            self._diagnostics.report(
                DiagnosticKind.UNMATCHED_CLOSE,
                f"<{name}> has no open tag",
                self._visible,
            )
            return
        self._spans.append(marker.close(self._visible))

    def _void_element(self, name: str) -> None:
        if self._open_pushed:
            self._stack.pop()

        if _is_line_break(name):
            if not self._config.compact_line_breaks:
                self._write(b"\n")
            return

        self._spans.append(TagSpan(name, self._visible, self._visible))

    def _open_element(self, name: str) -> None:
        if self._open_dropped:
            self._dropped_depth += 1
            self._diagnostics.report(
                DiagnosticKind.TAG_DEPTH_EXCEEDED,
                f"<{name}> ignored, {self._stack.capacity} tags already open",
                self._visible,
            )
            logger.debug("Tag stack full, dropping <%s>", name)
            return

        marker = self._stack.pop()
        if marker is not None:
            self._stack.push(marker.named(name))

        if name.startswith("ol"):
            self._list_mode = ListMode.ORDERED
            self._list_index = 1
        elif name.startswith("ul"):
            self._list_mode = ListMode.UNORDERED
        elif name.startswith("li"):
            self._write_list_marker()

    def _write_list_marker(self) -> None:
        if self._list_mode is ListMode.ORDERED:
            self._write(f"{self._list_index}. ".encode("ascii"))
            self._list_index += 1
        else:
            self._write(BULLET_MARKER)

    # =========================================================================
    # Entities
    # =========================================================================

    def _finish_entity(self) -> None:
        """Decode a complete ``&name;`` mnemonic."""
        self._entity.append(_SEMI)
        literal = bytes(self._entity)
        self._in_entity = False
        self._entity.clear()

        mnemonic = literal.decode("ascii")
        decoded = self._decoder(mnemonic)
        if not decoded:
            self._diagnostics.report(
                DiagnosticKind.UNKNOWN_ENTITY,
                f"Unknown entity {mnemonic}",
                self._visible,
            )
            decoded = literal

        if self._in_tag:
            self._tag_name += decoded
        else:
            self._write(decoded)

    def _flush_entity(self) -> None:
        """Write an abandoned ``&...`` prefix through literally."""
        literal = bytes(self._entity)
        self._in_entity = False
        self._entity.clear()

        if self._in_tag:
            self._tag_name += literal
        else:
            self._write(literal)

    # =========================================================================
    # End of input
    # =========================================================================

    def _finish(self) -> None:
        """Flush pending state and discard tags that never closed."""
        if self._in_entity:
            self._flush_entity()

        if self._in_tag:
            if self._open_pushed:
                self._stack.pop()
            self._diagnostics.report(
                DiagnosticKind.UNTERMINATED_TAG,
                f"Input ends inside <{self._tag_name.decode('utf-8', errors='replace')}",
                self._visible,
            )
            self._in_tag = False
            self._tag_name.clear()

        for marker in self._stack.drain():
            logger.debug("Unclosed tag <%s> at %d discarded", marker.name, marker.start)
            self._diagnostics.report(
                DiagnosticKind.UNCLOSED_TAG,
                f"<{marker.name or ''}> is never closed",
                marker.start,
            )


def tokenize(source: str | bytes, config: FormatConfig | None = None) -> TokenizeResult:
    """Split markup into display text and tag spans.

    Args:
        source: Markup as str or UTF-8 bytes
        config: Format config (defaults to the context's config)

    Returns:
        TokenizeResult

    Raises:
        BufferCapacityExceeded: If source is larger than the input ceiling.

    Example:
        >>> result = tokenize("a &amp; b")
        >>> result.display_text, result.visible_length
        ('a & b', 5)
    """
    return Tokenizer(source, config).tokenize()
