"""Tests for environment settings."""

from pathlib import Path

from mdpress.config import get_settings, load_settings


class TestSettings:
    """Tests for loading settings."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.output_filename == "document.pdf"
        assert settings.max_pages == 50

    def test_load_env_file(self, tmp_path: Path):
        env = tmp_path / "press.env"
        env.write_text("MDPRESS_PRINT_TITLE=Resume\nMDPRESS_MAX_PAGES=3\n")

        settings = load_settings(env)

        assert settings.print_title == "Resume"
        assert settings.max_pages == 3
        assert get_settings() is settings

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("MDPRESS_JPEG_QUALITY", "0.5")

        assert load_settings().jpeg_quality == 0.5
