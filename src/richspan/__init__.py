"""
richspan — inline forum markup to display text plus style ranges.

Converts the small HTML dialect found in forum and comment bodies
(``<strong>``, ``<em>``, ``<del>``, ``<code>``, ``<sup>``, ``<blockquote>``,
``<h1>``..``<h6>``, lists, ``<a href>``, entities) into a plain string and a
list of disjoint, contiguous style ranges ready for a rich-text renderer.
Positions count characters the way UTF-16 text layers do.

Quick Start:
    >>> from richspan import format_markup
    >>> result = format_markup("<strong>hi</strong> there")
    >>> result.text
    'hi there'
    >>> result.ranges[0].start, result.ranges[0].end
    (0, 2)
    >>> result.ranges[0].style.bold
    True

Two-stage use:
    >>> from richspan import tokenize, linearize
    >>> tokens = tokenize("a<br/>b")
    >>> ranges = linearize(tokens.spans, tokens.visible_length)

Installation:
    pip install richspan
"""

from richspan.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from richspan.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from richspan.entities import decode_entity
from richspan.errors import BufferCapacityExceeded, DiagnosticError, RichspanError
from richspan.formatted import FormattedText
from richspan.linearizer import linearize
from richspan.links import LinkRun, extract_links
from richspan.serialization import from_dict, from_json, to_dict, to_json
from richspan.styles import Style, StyleRange
from richspan.tokenizer import Tokenizer, TokenizeResult, tokenize
from richspan.tokens import OpenTag, TagSpan
from richspan.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def format_markup(source: str | bytes, config: FormatConfig | None = None) -> FormattedText:
    """Convert markup into display text and style ranges.

    Args:
        source: Markup as str or UTF-8 bytes
        config: Format config (defaults to the context's config)

    Returns:
        FormattedText with diagnostics from both stages

    Raises:
        BufferCapacityExceeded: If source is larger than the input ceiling.

    Example:
        >>> result = format_markup('<a href="http://x">t</a>')
        >>> result.ranges[0].style.link_url
        'http://x'
    """
    tokens = tokenize(source, config)

    diagnostics = Diagnostics()
    diagnostics.extend(tokens.diagnostics)
    ranges = linearize(tokens.spans, tokens.visible_length, diagnostics=diagnostics)

    if diagnostics:
        logger.debug("Formatted markup with %d diagnostic(s)", len(diagnostics))

    return FormattedText(
        text=tokens.display_text,
        ranges=tuple(ranges),
        visible_length=tokens.visible_length,
        diagnostics=diagnostics.as_tuple(),
    )


__all__ = [
    "BufferCapacityExceeded",
    "Diagnostic",
    "DiagnosticError",
    "DiagnosticKind",
    "Diagnostics",
    "FormatConfig",
    "FormattedText",
    "LinkRun",
    "OpenTag",
    "RichspanError",
    "Style",
    "StyleRange",
    "TagSpan",
    "TokenizeResult",
    "Tokenizer",
    "__version__",
    "decode_entity",
    "extract_links",
    "format_config_context",
    "format_markup",
    "from_dict",
    "from_json",
    "get_format_config",
    "linearize",
    "reset_format_config",
    "set_format_config",
    "to_dict",
    "to_json",
    "tokenize",
]
