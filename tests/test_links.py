"""Tests for link-run extraction."""

from richspan import LinkRun, extract_links, format_markup
from richspan.links import link_at


class TestExtractLinks:
    """Join same-target ranges into one run per link."""

    def test_single_link(self) -> None:
        result = format_markup('see <a href="https://x.org">here</a>')
        assert extract_links(result.ranges) == [LinkRun("https://x.org", 4, 8)]

    def test_link_split_by_formatting(self) -> None:
        result = format_markup('<a href="u">go <strong>now</strong></a>')
        assert len(result.ranges) == 2
        assert extract_links(result.ranges) == [LinkRun("u", 0, 6)]

    def test_two_links(self) -> None:
        result = format_markup('<a href="u1">a</a> and <a href="u2">b</a>')
        assert extract_links(result.ranges) == [LinkRun("u1", 0, 1), LinkRun("u2", 6, 7)]

    def test_same_target_separated_by_text(self) -> None:
        result = format_markup('<a href="u">a</a> <a href="u">b</a>')
        assert extract_links(result.ranges) == [LinkRun("u", 0, 1), LinkRun("u", 2, 3)]

    def test_no_links(self) -> None:
        assert extract_links(format_markup("<em>x</em>").ranges) == []


class TestLinkAt:
    """Position lookups."""

    def test_hit_and_miss(self) -> None:
        result = format_markup('ab<a href="u">cd</a>')
        assert link_at(result.ranges, 0) is None
        assert link_at(result.ranges, 3) == "u"
        assert link_at(result.ranges, 9) is None

    def test_run_contains(self) -> None:
        run = LinkRun("u", 2, 4)
        assert run.contains(2)
        assert not run.contains(4)
