"""Result serialization — JSON round-trip for FormattedText.

Converts a :class:`~richspan.formatted.FormattedText` to/from
JSON-compatible dicts. Useful for:
- Caching converted comment bodies
- Shipping pre-computed ranges to a client that does the rendering
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability. Style
fields equal to their defaults are omitted, so plain ranges stay small.

Example:
    from richspan import format_markup
    from richspan.serialization import to_json, from_json

    result = format_markup("<strong>hi</strong>")
    restored = from_json(to_json(result))
    assert restored == result

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from richspan.diagnostics import Diagnostic, DiagnosticKind
from richspan.formatted import FormattedText
from richspan.styles import PLAIN, Style, StyleRange

_STYLE_DEFAULTS: dict[str, Any] = {f.name: getattr(PLAIN, f.name) for f in fields(Style)}


def style_to_dict(style: Style) -> dict[str, Any]:
    """Non-default style fields as a dict."""
    return {
        name: getattr(style, name)
        for name, default in _STYLE_DEFAULTS.items()
        if getattr(style, name) != default
    }


def style_from_dict(data: dict[str, Any]) -> Style:
    """Rebuild a Style; unknown keys are ignored."""
    return Style(**{k: v for k, v in data.items() if k in _STYLE_DEFAULTS})


def to_dict(result: FormattedText) -> dict[str, Any]:
    """Convert a FormattedText to a JSON-compatible dict.

    Args:
        result: Result of format_markup().

    Returns:
        Dict with ``_type``, text, visible length, ranges and diagnostics.

    """
    return {
        "_type": "FormattedText",
        "text": result.text,
        "visible_length": result.visible_length,
        "ranges": [
            {"start": r.start, "end": r.end, "style": style_to_dict(r.style)}
            for r in result.ranges
        ],
        "diagnostics": [
            {"kind": d.kind.name, "message": d.message, "position": d.position}
            for d in result.diagnostics
        ],
    }


def from_dict(data: dict[str, Any]) -> FormattedText:
    """Reconstruct a FormattedText from a dict.

    Args:
        data: Dict as produced by to_dict.

    Returns:
        FormattedText (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or wrong, or a diagnostic kind
            is unknown.

    """
    type_name = data.get("_type")
    if type_name != "FormattedText":
        msg = f"Expected FormattedText, got {type_name!r}"
        raise ValueError(msg)

    ranges = tuple(
        StyleRange(raw["start"], raw["end"], style_from_dict(raw.get("style", {})))
        for raw in data.get("ranges", ())
    )

    diagnostics = []
    for raw in data.get("diagnostics", ()):
        try:
            kind = DiagnosticKind[raw["kind"]]
        except KeyError:
            msg = f"Unknown diagnostic kind: {raw.get('kind')!r}"
            raise ValueError(msg) from None
        diagnostics.append(Diagnostic(kind, raw.get("message", ""), raw.get("position", 0)))

    return FormattedText(
        text=data.get("text", ""),
        ranges=ranges,
        visible_length=data.get("visible_length", 0),
        diagnostics=tuple(diagnostics),
    )


def to_json(result: FormattedText, *, indent: int | None = None) -> str:
    """Serialize a FormattedText to a JSON string.

    Args:
        result: FormattedText to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(result), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> FormattedText:
    """Deserialize a FormattedText from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a FormattedText.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw)
