"""Tests for the document converter pipeline."""

import json
import pytest
from pathlib import Path
from unittest.mock import Mock

from mdpress.core.converter import (
    ConversionError,
    DocumentConverter,
    load_source,
    load_style,
    source_stats,
)
from mdpress.export.base import ExportFailure
from mdpress.export.pdf_exporter import RasterPdfExporter
from mdpress.export.print_exporter import PrintExporter
from mdpress.formatting.ir import Heading
from mdpress.style.config import FontFamily, StyleConfig


class TestSourceStats:
    """Tests for the status-line figures."""

    def test_counts(self):
        stats = source_stats("ab\ncd")

        assert stats.characters == 5
        assert stats.lines == 2

    def test_empty_source_has_one_line(self):
        assert source_stats("").lines == 1


class TestLoading:
    """Tests for reading source and style files."""

    def test_load_source(self, tmp_markdown_file: Path, sample_markdown: str):
        assert load_source(tmp_markdown_file) == sample_markdown

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(ConversionError, match="not found"):
            load_source(tmp_path / "missing.md")

    def test_binary_source(self, tmp_path: Path):
        path = tmp_path / "binary.md"
        path.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(ConversionError):
            load_source(path)

    def test_default_style(self):
        assert load_style(None) == StyleConfig()

    def test_style_file(self, tmp_path: Path):
        path = tmp_path / "style.json"
        path.write_text(json.dumps({"fontFamily": "serif", "centerH1": False}))

        style = load_style(path)

        assert style.font_family is FontFamily.SERIF
        assert style.center_h1 is False

    def test_out_of_range_numbers_in_style_file(self, tmp_path: Path):
        """Test that JSON numbers that overflow to inf or read as NaN fall back."""
        path = tmp_path / "style.json"
        path.write_text('{"margins": {"top": 1e400}, "lineHeight": NaN}')

        style = load_style(path)

        assert style.margins.top == 0
        assert style.line_height == 1.5

    def test_missing_style(self, tmp_path: Path):
        with pytest.raises(ConversionError, match="not found"):
            load_style(tmp_path / "missing.json")

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_invalid_style(self, tmp_path: Path, content: str):
        path = tmp_path / "style.json"
        path.write_text(content)

        with pytest.raises(ConversionError, match="Invalid style file"):
            load_style(path)


class TestDocumentConverter:
    """Tests for the DocumentConverter class."""

    @pytest.fixture
    def converter(self, blank_rasterizer) -> DocumentConverter:
        return DocumentConverter(
            pdf_exporter=RasterPdfExporter(rasterizer_factory=lambda: blank_rasterizer),
            print_exporter=PrintExporter(opener=lambda url: True),
        )

    def test_parse(self, converter: DocumentConverter):
        doc = converter.parse("# Title")

        assert isinstance(doc.blocks[0], Heading)

    def test_render_uses_style(self, converter: DocumentConverter):
        surface = converter.render("# Title", StyleConfig(font_family="mono"))

        assert surface.style.page.font_family is FontFamily.MONO
        assert surface.document.blocks[0].plain_text == "Title"

    def test_render_reflects_edits(self, converter: DocumentConverter):
        first = converter.render("# One")
        second = converter.render("# Two")

        assert first.document != second.document

    @pytest.mark.asyncio
    async def test_export_pdf(self, converter: DocumentConverter, tmp_path: Path, sample_markdown):
        output = await converter.export_pdf(sample_markdown, tmp_path / "resume.pdf")

        assert output.read_bytes().startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_export_failure_propagates(self, tmp_path: Path, broken_rasterizer):
        converter = DocumentConverter(
            pdf_exporter=RasterPdfExporter(rasterizer_factory=lambda: broken_rasterizer)
        )

        with pytest.raises(ExportFailure):
            await converter.export_pdf("# Title", tmp_path / "out.pdf")

    def test_print_document_written(self, converter: DocumentConverter, tmp_path: Path):
        path = converter.print_document("# Title", path=tmp_path / "p.html", open_window=False)

        html = path.read_text(encoding="utf-8")
        assert "md-h1" in html
        assert "window.print()" not in html

    def test_print_document_opened(self, tmp_path: Path):
        opener = Mock(return_value=True)
        converter = DocumentConverter(print_exporter=PrintExporter(opener=opener))

        path = converter.print_document("# Title", path=tmp_path / "p.html")

        opener.assert_called_once_with(path.resolve().as_uri())

    def test_print_without_path_or_window(self, converter: DocumentConverter):
        with pytest.raises(ValueError):
            converter.print_document("# Title", open_window=False)
