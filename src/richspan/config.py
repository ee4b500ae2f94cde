"""ContextVar-based format configuration for richspan.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Behaviour switches that tune the output for a particular upstream text
source live here as runtime values instead of build-time flags.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from richspan.config import FormatConfig, format_config_context
    from richspan.tokenizer import tokenize

    # Upstream already sends a newline after every <br/>
    with format_config_context(FormatConfig(compact_line_breaks=True)):
        result = tokenize(source)

    # Or pass the config explicitly
    result = tokenize(source, FormatConfig(collapse_blank_lines=False))

"""

from collections.abc import Callable
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

DEFAULT_MAX_INPUT_BYTES = 1 << 20


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        compact_line_breaks: Drop the newline a ``<br/>`` would insert, for
            sources that already send one after each break
        collapse_blank_lines: Drop a newline that directly follows another
            newline or that would be the first visible output
        max_input_bytes: Reject larger inputs before scanning (None = no limit)
        max_tag_depth: Open-tag stack capacity (None = input length)
        entity_decoder: Replacement for :func:`richspan.entities.decode_entity`

    """

    compact_line_breaks: bool = False
    collapse_blank_lines: bool = True
    max_input_bytes: int | None = DEFAULT_MAX_INPUT_BYTES
    max_tag_depth: int | None = None
    entity_decoder: Callable[[str], bytes] | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = FormatConfig.from_dict({
            ...     "compact_line_breaks": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.compact_line_breaks
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for the current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the module-level default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> from richspan.tokenizer import tokenize
        >>> with format_config_context(FormatConfig(compact_line_breaks=True)):
        ...     result = tokenize("a<br/>b")
        >>> result.display_text
        'ab'

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "DEFAULT_MAX_INPUT_BYTES",
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
]
