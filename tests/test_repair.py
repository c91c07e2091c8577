"""
Tests for the edge repairs applied to a located span.
"""

import time

from quotealign.models import MatchSpan
from quotealign.repair import balance_tags, complete_link, restore_block_marker, trim_marker_lines


def _span(before: str, text: str, after: str) -> MatchSpan:
    return MatchSpan(
        start=len(before),
        end=len(before) + len(text),
        text=text,
        before=before,
        after=after,
    )


class TestBalanceTags:
    def test_nothing_to_repair(self):
        assert balance_tags(_span("a ", "[b]x[/b]", " c")) == "[b]x[/b]"

    def test_orphan_end_tag_at_start(self):
        span = _span("hello [b]", "world[/b] more", "")
        assert balance_tags(span) == "[b]world[/b] more"

    def test_several_orphan_end_tags_at_start(self):
        span = _span("[i][b]", "x[/b][/i] y", "")
        assert balance_tags(span) == "[i][b]x[/b][/i] y"

    def test_orphan_start_tag_at_end(self):
        span = _span("see ", "[url=x]link", " text[/url] tail")
        assert balance_tags(span) == "[url=x]link[/url]"

    def test_enclosing_pairs(self):
        span = _span("[quote][i]", "inner", "[/i][/quote]")
        assert balance_tags(span) == "[quote][i]inner[/i][/quote]"

    def test_enclosing_pairs_stop_at_first_mismatch(self):
        span = _span("[b][i]", "inner", "[/b][/i]")
        assert balance_tags(span) == "inner"

    def test_enclosing_pass_uses_tags_left_by_first_pass(self):
        span = _span("[u][b]", "bold[/b] more", " tail[/u]")
        assert balance_tags(span) == "[u][b]bold[/b] more[/u]"

    def test_first_pass_stops_at_start_tag(self):
        # [/i] would pair, but [b] comes first
        span = _span("[i]", "[b]x[/b][/i]", "")
        assert balance_tags(span) == "[b]x[/b][/i]"

    def test_exhausted_pool_stops_quietly(self):
        assert balance_tags(_span("", "[b]lonely", "")) == "[b]lonely"
        assert balance_tags(_span("", "lonely[/b]", "")) == "lonely[/b]"


class TestCompleteLink:
    def test_completes_open_link_target(self):
        assert complete_link("[text](", "https://x) now") == "[text](https://x)"

    def test_unclosed_target_adds_nothing(self):
        assert complete_link("[text](", "https://x") == "[text]("

    def test_empty_target_adds_nothing(self):
        assert complete_link("[text](", ") more") == "[text]("

    def test_leaves_other_text_alone(self):
        assert complete_link("[text](https://x)", " more)") == "[text](https://x)"


class TestRestoreBlockMarker:
    def test_heading(self):
        assert restore_block_marker("Title", "intro\n## ") == "## Title"

    def test_bullet_and_number(self):
        assert restore_block_marker("item", "- ") == "- item"
        assert restore_block_marker("step", "text\n  1. ") == "  1. step"

    def test_only_last_line_counts(self):
        assert restore_block_marker("x", "- \nword ") == " x"

    def test_no_marker(self):
        assert restore_block_marker("x", "word") == "x"


class TestTrimMarkerLines:
    def test_trailing_marker_line(self):
        assert trim_marker_lines("one.\n-") == "one."

    def test_leading_marker_line(self):
        assert trim_marker_lines("# \nbody") == "body"

    def test_both(self):
        assert trim_marker_lines("- \nhello\n#") == "hello"

    def test_keeps_content_lines(self):
        assert trim_marker_lines("- one\n- two") == "- one\n- two"


class TestLongMarkerRuns:
    def test_long_marker_line_before_match(self):
        before = "text\n" + "- " * 20000 + "x" + " -" * 20000
        start = time.monotonic()
        assert restore_block_marker("item", before) == " -" * 20000 + "item"
        assert time.monotonic() - start < 5

    def test_long_marker_run_inside_match(self):
        text = "one\n" + "- " * 20000 + "two" + "\n-" * 20000
        start = time.monotonic()
        assert trim_marker_lines(text) == "one\n" + "- " * 20000 + "two"
        assert time.monotonic() - start < 5
