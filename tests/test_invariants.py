"""Property-based tests for tokenizer and linearizer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from richspan import FormatConfig, format_markup, linearize, tokenize

_FRAGMENTS = [
    "a",
    "bc",
    " ",
    "\n",
    "é",
    "€",
    "😀",
    "&amp;",
    "&#x1F600;",
    "&bogus;",
    "&",
    ";",
    "<",
    ">",
    "/",
    "<strong>",
    "</strong>",
    "<em>",
    "</em>",
    "<del>",
    "</del>",
    "<code>",
    "</code>",
    "<sup>",
    "</sup>",
    "<blockquote>",
    "</blockquote>",
    "<h1>",
    "</h1>",
    "<h4>",
    "</h4>",
    "<ol>",
    "</ol>",
    "<ul>",
    "</ul>",
    "<li>",
    "</li>",
    "<br/>",
    "<hr/>",
    '<a href="http://x">',
    '<a href="http://y?a=1&amp;b=2">',
    '<a href="broken>',
    "</a>",
    "<p>",
    "</p>",
]

markup = st.lists(st.sampled_from(_FRAGMENTS), max_size=40).map("".join)
any_text = st.text(alphabet=st.characters(exclude_categories=("Cs",)), max_size=300)


class TestCoverageInvariant:
    """Ranges are sorted, contiguous and cover the whole display text."""

    @given(markup)
    @settings(max_examples=300)
    def test_ranges_cover_display_text(self, source: str) -> None:
        result = tokenize(source)
        ranges = linearize(result.spans, result.visible_length)

        if result.visible_length == 0:
            assert ranges == []
            return

        assert ranges[0].start == 0
        assert ranges[-1].end == result.visible_length
        for prev, cur in zip(ranges, ranges[1:]):
            assert prev.end == cur.start
        for r in ranges:
            assert r.start < r.end

    @given(markup)
    @settings(max_examples=300)
    def test_adjacent_ranges_differ(self, source: str) -> None:
        ranges = format_markup(source).ranges
        for prev, cur in zip(ranges, ranges[1:]):
            assert prev.style != cur.style


class TestTokenizerInvariants:
    """Span and length bookkeeping."""

    @given(markup)
    @settings(max_examples=200)
    def test_spans_inside_display_text(self, source: str) -> None:
        result = tokenize(source)
        for span in result.spans:
            assert 0 <= span.start <= span.end <= result.visible_length

    @given(markup)
    @settings(max_examples=200)
    def test_visible_length_is_utf16_length(self, source: str) -> None:
        result = tokenize(source)
        assert result.visible_length == len(result.display_text.encode("utf-16-le")) // 2

    @given(markup)
    @settings(max_examples=100)
    def test_span_count_bounded_by_open_brackets(self, source: str) -> None:
        result = tokenize(source)
        assert result.span_count <= source.count("<")

    @given(any_text)
    @settings(max_examples=200)
    def test_arbitrary_text_never_raises(self, source: str) -> None:
        result = format_markup(source)
        assert result.visible_length >= 0

    @given(st.from_regex(r"[a-zA-Z0-9 ]{0,100}", fullmatch=True))
    @settings(max_examples=50)
    def test_plain_text_unchanged(self, source: str) -> None:
        result = tokenize(source)
        assert result.display_text == source
        assert result.visible_length == len(source)


class TestConfigurationInvariants:
    """Config switches only ever remove newlines."""

    @given(markup)
    @settings(max_examples=100)
    def test_compact_mode_only_removes_newlines(self, source: str) -> None:
        regular = tokenize(source).display_text
        compact = tokenize(source, FormatConfig(compact_line_breaks=True)).display_text
        assert compact.replace("\n", "") == regular.replace("\n", "")
        assert len(compact) <= len(regular)


class TestDeterminism:
    """Conversion is deterministic."""

    @given(markup)
    @settings(max_examples=50)
    def test_repeated_conversion_identical(self, source: str) -> None:
        assert format_markup(source) == format_markup(source)
