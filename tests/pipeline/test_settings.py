"""Tests for runtime settings resolution."""

from pathlib import Path

import pytest

import egyptnet.config as config
from egyptnet.exceptions import ConfigurationError
from egyptnet.pipeline.settings import SiteSettings

ENV_KEYS = (
    "SITE_DATA_ROOT",
    "SITE_TEMPLATE_ROOT",
    "SITE_SHELL_DIR",
    "SITE_OUTPUT_DIR",
    "SITE_VALIDATE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "PROJECT_ROOT", tmp_path / "project")


def test_defaults() -> None:
    settings = SiteSettings()
    assert settings.data_root == config.SITE_DIR
    assert settings.template_root == config.TEMPLATES_DIR
    assert settings.shell_dir == config.SITE_DIR
    assert settings.output_dir == config.DEFAULT_OUTPUT_DIR
    assert settings.validate is False
    assert settings.log_level == "INFO"


def test_environment_then_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SITE_DATA_ROOT", str(tmp_path))
    monkeypatch.setenv("SITE_VALIDATE", "true")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = SiteSettings()
    assert settings.data_root == tmp_path
    assert settings.validate is True
    assert settings.log_level == "DEBUG"

    overridden = SiteSettings(validate=False, output_dir=tmp_path / "out", log_level="WARNING")
    assert overridden.validate is False
    assert overridden.output_dir == tmp_path / "out"
    assert overridden.log_level == "WARNING"


def test_url_roots_are_kept_as_strings() -> None:
    settings = SiteSettings(
        data_root="https://example.invalid/site",
        template_root="https://example.invalid/templates",
    )
    assert settings.data_root == "https://example.invalid/site"
    assert settings.template_root == "https://example.invalid/templates"


def test_missing_local_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="data root"):
        SiteSettings(data_root=tmp_path / "absent")


def test_dotenv_file_is_read(monkeypatch, tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / ".env").write_text("SITE_VALIDATE=1\n", encoding="utf-8")
    # Registers SITE_VALIDATE with monkeypatch so the value loaded from .env is undone.
    monkeypatch.setenv("SITE_VALIDATE", "0")
    assert SiteSettings().validate is True
