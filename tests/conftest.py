"""Pytest fixtures for mdpress tests."""

import pytest
from pathlib import Path

from PIL import Image

from mdpress import config
from mdpress.export.base import PageRasterizer
from mdpress.formatting.parser import MarkdownParser
from mdpress.render.renderer import Renderer
from mdpress.render.surface import RenderedSurface
from mdpress.samples import SAMPLE_MARKDOWN
from mdpress.style.config import StyleConfig
from mdpress.style.resolver import ResolvedStyle, resolve_style


class BlankRasterizer(PageRasterizer):
    """Rasterizer that draws tiny blank pages and counts them."""

    def __init__(self) -> None:
        self.rendered: list[int] = []

    def render_page(self, surface: RenderedSurface, index: int, scale: float) -> Image.Image:
        self.rendered.append(index)
        return Image.new("RGB", (20, 28), "white")


class BrokenRasterizer(PageRasterizer):
    """Rasterizer that fails on the first page."""

    def render_page(self, surface: RenderedSurface, index: int, scale: float) -> Image.Image:
        raise RuntimeError("canvas exploded")


class EmptyRasterizer(BlankRasterizer):
    """Rasterizer that reports no pages at all."""

    def page_count(self, surface: RenderedSurface) -> int:
        return 0


@pytest.fixture
def sample_markdown() -> str:
    """The built-in resume template."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def parser() -> MarkdownParser:
    """Create a parser instance."""
    return MarkdownParser()


@pytest.fixture
def style() -> StyleConfig:
    """Default style settings."""
    return StyleConfig()


@pytest.fixture
def resolved(style: StyleConfig) -> ResolvedStyle:
    """Default style resolved into presentation rules."""
    return resolve_style(style)


@pytest.fixture
def render(parser: MarkdownParser):
    """Render markdown source to a surface, optionally with a custom style."""

    def _render(source: str, config: StyleConfig = None) -> RenderedSurface:
        return Renderer().render(parser.parse(source), resolve_style(config or StyleConfig()))

    return _render


@pytest.fixture
def sample_surface(render, sample_markdown: str) -> RenderedSurface:
    """The resume template laid out with default style."""
    return render(sample_markdown)


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary markdown file."""
    file_path = tmp_path / "resume.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path


@pytest.fixture
def blank_rasterizer() -> BlankRasterizer:
    """Fast rasterizer producing blank pages."""
    return BlankRasterizer()


@pytest.fixture
def broken_rasterizer() -> BrokenRasterizer:
    """Rasterizer that always fails."""
    return BrokenRasterizer()


@pytest.fixture
def empty_rasterizer() -> EmptyRasterizer:
    """Rasterizer that produces no pages."""
    return EmptyRasterizer()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so an --env-file from one test never leaks."""
    config._settings = None
    yield
    config._settings = None
