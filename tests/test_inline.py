"""Tests for the inline formatter."""

import pytest

from mdpress.formatting.inline import InlineFormatter
from mdpress.formatting.ir import TextStyle


class TestEmphasis:
    """Tests for bold, italic and bold-italic markers."""

    @pytest.fixture
    def formatter(self) -> InlineFormatter:
        """Create a formatter instance."""
        return InlineFormatter()

    def test_plain_text(self, formatter: InlineFormatter):
        """Test that undecorated text becomes a single span."""
        run = formatter.format("Hello, world!")

        assert len(run) == 1
        assert run.spans[0].text == "Hello, world!"
        assert run.spans[0].style == TextStyle.NONE

    def test_bold(self, formatter: InlineFormatter):
        """Test bold text between plain text."""
        spans = formatter.format("This is **bold** text").spans

        assert [span.text for span in spans] == ["This is ", "bold", " text"]
        assert [span.bold for span in spans] == [False, True, False]

    def test_italic(self, formatter: InlineFormatter):
        """Test italic text."""
        spans = formatter.format("She *ran* quickly").spans

        assert spans[1].text == "ran"
        assert spans[1].italic is True
        assert spans[1].bold is False

    def test_bold_italic(self, formatter: InlineFormatter):
        """Test triple asterisks."""
        spans = formatter.format("***both***").spans

        assert len(spans) == 1
        assert spans[0].bold and spans[0].italic

    def test_bold_inside_italic(self, formatter: InlineFormatter):
        """Test that bold nests inside italic."""
        spans = formatter.format("*an **important** point*").spans

        assert [span.text for span in spans] == ["an ", "important", " point"]
        assert all(span.italic for span in spans)
        assert spans[1].bold is True

    def test_italic_closing_inside_bold(self, formatter: InlineFormatter):
        """Test that a trailing *** closes an inner italic and then the bold."""
        spans = formatter.format("**a *b***").spans

        assert [span.text for span in spans] == ["a ", "b"]
        assert spans[0].style == TextStyle.BOLD
        assert spans[1].style == TextStyle.BOLD | TextStyle.ITALIC

    def test_bold_around_lone_asterisk(self, formatter: InlineFormatter):
        spans = formatter.format("**a*b**").spans

        assert len(spans) == 1
        assert spans[0].text == "a*b"
        assert spans[0].bold is True

    def test_italic_with_doubled_close_is_literal(self, formatter: InlineFormatter):
        """Test that *a** has no matching close and stays as text."""
        run = formatter.format("*a**")

        assert run.plain_text == "*a**"
        assert not any(span.italic or span.bold for span in run)

    def test_unterminated_bold_is_literal(self, formatter: InlineFormatter):
        """Test that an unclosed marker stays as text."""
        run = formatter.format("**bold")

        assert run.plain_text == "**bold"
        assert not any(span.bold for span in run)

    def test_unterminated_italic_is_literal(self, formatter: InlineFormatter):
        """Test a lone asterisk."""
        assert formatter.format("5 * 3").plain_text == "5 * 3"

    def test_empty_emphasis_is_literal(self, formatter: InlineFormatter):
        """Test that markers with nothing between them stay as text."""
        assert formatter.format("****").plain_text == "****"


class TestLinks:
    """Tests for [label](target) links."""

    @pytest.fixture
    def formatter(self) -> InlineFormatter:
        return InlineFormatter()

    def test_link(self, formatter: InlineFormatter):
        spans = formatter.format("See [my site](https://example.com) now").spans

        assert spans[1].text == "my site"
        assert spans[1].href == "https://example.com"
        assert spans[0].href is None
        assert spans[2].href is None

    def test_emphasis_inside_link_label(self, formatter: InlineFormatter):
        """Test that emphasis and links nest in both directions."""
        spans = formatter.format("*see [the **docs**](https://x.io)*").spans

        assert [span.text for span in spans] == ["see ", "the ", "docs"]
        assert all(span.italic for span in spans)
        assert spans[0].href is None
        assert spans[1].href == spans[2].href == "https://x.io"
        assert spans[2].bold is True

    def test_incomplete_link_is_literal(self, formatter: InlineFormatter):
        assert formatter.format("[label](").plain_text == "[label]("


class TestCentering:
    """Tests for centered runs (input is already escaped)."""

    @pytest.fixture
    def formatter(self) -> InlineFormatter:
        return InlineFormatter()

    def test_centered_run(self, formatter: InlineFormatter):
        spans = formatter.format("-&gt;Centered&lt;-").spans

        assert len(spans) == 1
        assert spans[0].centered is True
        assert spans[0].text == "Centered"

    def test_centered_run_keeps_emphasis(self, formatter: InlineFormatter):
        spans = formatter.format("-&gt;**Your Title**&lt;-").spans

        assert spans[0].centered and spans[0].bold

    def test_text_around_centered_run(self, formatter: InlineFormatter):
        spans = formatter.format("left -&gt;mid&lt;- right").spans

        assert [span.centered for span in spans] == [False, True, False]

    def test_centered_run_with_color(self, formatter: InlineFormatter):
        spans = formatter.format("-&gt;{#0d9488}Accent&lt;-").spans

        assert spans[0].centered is True
        assert spans[0].color == "#0d9488"
        assert spans[0].text == "Accent"

    def test_color_before_centered_run(self, formatter: InlineFormatter):
        spans = formatter.format("{teal}-&gt;Accent&lt;- after").spans

        assert spans[0].centered is True
        assert spans[0].color == "teal"
        assert spans[1].color is None
        assert spans[1].plain == " after"

    def test_centered_line_prefix(self, formatter: InlineFormatter):
        spans = formatter.format("&gt;&gt; Whole line").spans

        assert spans[0].centered is True
        assert spans[0].text == "Whole line"

    def test_unterminated_center_is_literal(self, formatter: InlineFormatter):
        run = formatter.format("-&gt;open")

        assert run.plain_text == "->open"
        assert not run.has_centered


class TestColor:
    """Tests for {#hex} and {name} color tags."""

    @pytest.fixture
    def formatter(self) -> InlineFormatter:
        return InlineFormatter()

    def test_hex_color(self, formatter: InlineFormatter):
        spans = formatter.format("{#ff0000}red text").spans

        assert len(spans) == 1
        assert spans[0].color == "#ff0000"
        assert spans[0].text == "red text"

    def test_named_color(self, formatter: InlineFormatter):
        assert formatter.format("{teal}note").spans[0].color == "teal"

    def test_reset_tag(self, formatter: InlineFormatter):
        spans = formatter.format("a {#f00}b{/} c").spans

        assert [span.color for span in spans] == [None, "#f00", None]

    def test_trailing_tag_is_literal(self, formatter: InlineFormatter):
        """Test that a tag with no text after it is left alone."""
        run = formatter.format("text {#fff}")

        assert run.plain_text == "text {#fff}"
        assert run.spans[0].color is None

    def test_color_carries_across_lines(self, formatter: InlineFormatter):
        first, second = formatter.format_lines(["{#f00}one", "two"])

        assert first.spans[0].color == "#f00"
        assert second.spans[0].color == "#f00"

    def test_color_does_not_leak_between_blocks(self, formatter: InlineFormatter):
        formatter.format_lines(["{#f00}one"])
        (run,) = formatter.format_lines(["two"])

        assert run.spans[0].color is None

    def test_color_applies_to_emphasis(self, formatter: InlineFormatter):
        spans = formatter.format("{#123456}plain **bold**").spans

        assert all(span.color == "#123456" for span in spans)
        assert spans[-1].bold is True


class TestResolvedOutput:
    """Tests that resolved spans are not matched a second time."""

    def test_reformatting_resolved_text(self):
        formatter = InlineFormatter()
        run = formatter.format("-&gt;{#f00}**Name**&lt;-")

        again = formatter.format(run.text)

        assert again.plain_text == run.plain_text == "Name"
        assert not again.has_centered
        assert again.spans[0].color is None
        assert again.spans[0].bold is False
