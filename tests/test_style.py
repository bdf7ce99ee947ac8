"""Tests for style configuration and resolution."""

import json
import pytest
from pathlib import Path

from pydantic import ValidationError

from mdpress.formatting.ir import BlockRole, Heading, ListBlock, Paragraph, Rule
from mdpress.style.config import (
    FontFamily,
    StyleConfig,
    parse_leading_float,
    parse_leading_int,
)
from mdpress.style.resolver import (
    CONTACT_LINE,
    H1,
    H2,
    H3,
    LINK,
    LIST,
    PARAGRAPH,
    RULE,
    RULE_NAMES,
    SUBTITLE,
    TAGLINE,
    Alignment,
    resolve_style,
)
from mdpress.units import px_to_pt


class TestLenientNumbers:
    """Tests for form-style number parsing."""

    def test_leading_int(self):
        assert parse_leading_int("12mm") == 12
        assert parse_leading_int(" 7") == 7
        assert parse_leading_int(15) == 15
        assert parse_leading_int(9.8) == 9

    def test_leading_int_rejects(self):
        assert parse_leading_int("abc") is None
        assert parse_leading_int(True) is None

    def test_leading_float(self):
        assert parse_leading_float("1.4x") == 1.4
        assert parse_leading_float(".5") == 0.5
        assert parse_leading_float("") is None

    def test_non_finite_rejected(self):
        assert parse_leading_int(float("inf")) is None
        assert parse_leading_int(float("nan")) is None
        assert parse_leading_float(float("-inf")) is None
        assert parse_leading_float(float("nan")) is None
        assert parse_leading_float(10 ** 400) is None
        assert parse_leading_float("9" * 400) is None


class TestStyleConfig:
    """Tests for StyleConfig defaults and fallbacks."""

    def test_defaults(self, style: StyleConfig):
        assert style.center_h1 is True
        assert style.center_h2 is False
        assert style.center_h3 is False
        assert style.center_first_paragraph is True
        assert (style.margins.top, style.margins.right) == (20, 20)
        assert (style.margins.bottom, style.margins.left) == (20, 20)
        assert style.font_size.body == 11
        assert style.font_size.h1 == 24
        assert style.font_size.h2 == 14
        assert style.font_size.h3 == 12
        assert style.font_family is FontFamily.SANS_SERIF
        assert style.heading_color == "#1a1a1a"
        assert style.accent_color == "#0d9488"
        assert style.line_height == 1.5

    def test_camel_case_aliases(self):
        config = StyleConfig.model_validate(
            {"centerH1": False, "fontSize": {"body": 12}, "accentColor": "#abc"}
        )

        assert config.center_h1 is False
        assert config.font_size.body == 12
        assert config.font_size.h1 == 24
        assert config.accent_color == "#abc"

    def test_invalid_margin_falls_back_to_zero(self):
        config = StyleConfig(margins={"top": "abc", "left": "12mm"})

        assert config.margins.top == 0
        assert config.margins.left == 12
        assert config.margins.right == 20

    def test_margin_clamped(self):
        config = StyleConfig(margins={"top": 80, "bottom": -5})

        assert config.margins.top == 50
        assert config.margins.bottom == 0

    def test_invalid_font_size_falls_back(self):
        config = StyleConfig(font_size={"body": "big", "h1": 100, "h3": 2})

        assert config.font_size.body == 11
        assert config.font_size.h1 == 48
        assert config.font_size.h3 == 8

    def test_invalid_line_height_falls_back(self):
        assert StyleConfig(line_height="tall").line_height == 1.5
        assert StyleConfig(line_height=5).line_height == 3.0
        assert StyleConfig(line_height="1.2").line_height == 1.2

    def test_invalid_color_falls_back(self):
        config = StyleConfig(heading_color="red", accent_color="#12345")

        assert config.heading_color == "#1a1a1a"
        assert config.accent_color == "#0d9488"

    @pytest.mark.parametrize("number", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_numbers_fall_back(self, number: float):
        config = StyleConfig.model_validate(
            {"margins": {"top": number}, "fontSize": {"body": number}, "lineHeight": number}
        )

        assert config.margins.top == 0
        assert config.font_size.body == 11
        assert config.line_height == 1.5

    def test_unknown_font_family(self):
        assert StyleConfig(font_family="comic").font_family is FontFamily.SANS_SERIF

    def test_flag_words(self):
        assert StyleConfig(center_h2="yes").center_h2 is True
        assert StyleConfig(center_h1="off").center_h1 is False
        assert StyleConfig(center_h1="maybe").center_h1 is True

    def test_non_mapping_group(self):
        assert StyleConfig(margins=5).margins.top == 20

    def test_invalid_values_are_logged(self, caplog):
        with caplog.at_level("WARNING", logger="mdpress"):
            StyleConfig(line_height="tall")

        assert "line height" in caplog.text

    def test_frozen(self, style: StyleConfig):
        with pytest.raises(ValidationError):
            style.center_h1 = False

    def test_updated_returns_new_config(self, style: StyleConfig):
        changed = style.updated(font_family=FontFamily.SERIF, line_height=None)

        assert changed.font_family is FontFamily.SERIF
        assert changed.line_height == 1.5
        assert style.font_family is FontFamily.SANS_SERIF

    def test_from_json_file(self, tmp_path: Path):
        path = tmp_path / "style.json"
        path.write_text(json.dumps({"fontFamily": "mono", "margins": {"top": 10}}))

        config = StyleConfig.from_json_file(path)

        assert config.font_family is FontFamily.MONO
        assert config.margins.top == 10

    def test_from_json_file_rejects_non_object(self, tmp_path: Path):
        path = tmp_path / "style.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError):
            StyleConfig.from_json_file(path)


class TestResolveStyle:
    """Tests for resolving a StyleConfig into presentation rules."""

    def test_every_rule_present(self, resolved):
        assert set(resolved.rules) == set(RULE_NAMES)

    def test_deterministic(self, style: StyleConfig):
        first, second = resolve_style(style), resolve_style(style)

        assert first.page == second.page
        assert dict(first.rules) == dict(second.rules)

    def test_page_rule(self, resolved):
        assert resolved.page.width_mm == 210
        assert resolved.page.min_height_mm == 297
        assert resolved.page.margin_left == 20
        assert resolved.page.font_size == 11
        assert resolved.page.line_height == 1.5

    def test_centered_h1_by_default(self, resolved):
        assert resolved.rule(H1).align is Alignment.CENTER
        assert resolved.rule(H2).align is Alignment.LEFT
        assert resolved.rule(H3).align is Alignment.LEFT

    def test_uncentered_h1(self):
        resolved = resolve_style(StyleConfig(center_h1=False))

        assert resolved.rule(H1).align is Alignment.LEFT

    def test_subtitle_alignment(self, resolved):
        assert resolved.rule(SUBTITLE).align is Alignment.CENTER
        off = resolve_style(StyleConfig(center_first_paragraph=False))
        assert off.rule(SUBTITLE).align is Alignment.JUSTIFY

    def test_heading_sizes_and_colors(self, resolved):
        assert resolved.rule(H1).font_size == 24
        assert resolved.rule(H1).color == "#1a1a1a"
        assert resolved.rule(H3).color == "#0d9488"

    def test_accent_color_flows_to_rules(self):
        resolved = resolve_style(StyleConfig(accent_color="#ff0000"))

        assert resolved.rule(H2).border_bottom.color == "#ff0000"
        assert resolved.rule(RULE).border_top.color == "#ff0000"
        assert resolved.rule(LINK).color == "#ff0000"
        assert resolved.rule(SUBTITLE).color == "#ff0000"

    def test_secondary_lines_smaller(self, resolved):
        assert resolved.rule(CONTACT_LINE).font_size == 10
        assert resolved.rule(TAGLINE).italic is True

    def test_body_text_justified(self, resolved):
        assert resolved.rule(PARAGRAPH).align is Alignment.JUSTIFY

    def test_list_indent(self, resolved):
        assert resolved.rule(LIST).indent == pytest.approx(px_to_pt(20))

    def test_rule_for_blocks(self, resolved):
        assert resolved.rule_for(Heading(level=2)) is resolved.rule(H2)
        assert resolved.rule_for(Paragraph()) is resolved.rule(PARAGRAPH)
        assert resolved.rule_for(Paragraph(role=BlockRole.TAGLINE)) is resolved.rule(TAGLINE)
        assert resolved.rule_for(ListBlock()) is resolved.rule(LIST)
        assert resolved.rule_for(Rule()) is resolved.rule(RULE)
