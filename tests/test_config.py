"""Tests for src/config.py — FolioConfig, TOML loading, CLI overrides."""

from pathlib import Path

import pytest
from folio import config as config_module
from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content.models import RenderMode
from pydantic import ValidationError

ENV_VARS = (
    "FOLIO_CONTENT_DIR",
    "FOLIO_EXTENSION",
    "FOLIO_RENDER_MODE",
    "FOLIO_HIGHLIGHT_STYLE",
    "FOLIO_STRICT_LANGUAGES",
)


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Keep tests away from real env vars and the user's global config."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG", tmp_path / "no-global.toml")


class TestFolioConfigDefaults:
    def test_default_content(self):
        cfg = FolioConfig()
        assert cfg.content.directory == "./posts"
        assert cfg.content.extension == ".md"
        assert cfg.content.render_mode is RenderMode.RENDERED_HTML

    def test_default_render(self):
        cfg = FolioConfig()
        assert cfg.render.highlight_style == "default"
        assert cfg.render.strict_languages is True

    def test_extension_gets_dot(self):
        cfg = FolioConfig.model_validate({"content": {"extension": "markdown"}})
        assert cfg.content.extension == ".markdown"

    def test_invalid_render_mode(self):
        with pytest.raises(ValidationError):
            FolioConfig.model_validate({"content": {"render_mode": "pdf"}})


class TestLoadConfig:
    def test_load_from_explicit_path(self, tmp_path):
        toml_path = tmp_path / ".folio.toml"
        toml_path.write_text(
            '[content]\ndirectory = "content"\nrender_mode = "raw"\n'
            '[render]\nhighlight_style = "monokai"\n'
        )
        cfg = load_config(toml_path)
        assert cfg.content.directory == "content"
        assert cfg.content.render_mode is RenderMode.RAW_BODY
        assert cfg.render.highlight_style == "monokai"

    def test_load_missing_path_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.content.directory == "./posts"

    def test_load_searches_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".folio.toml").write_text('[content]\ndirectory = "from-cwd"\n')
        monkeypatch.chdir(tmp_path)
        assert load_config().content.directory == "from-cwd"

    def test_falls_back_to_global(self, tmp_path, monkeypatch):
        global_path = tmp_path / "global.toml"
        global_path.write_text('[content]\ndirectory = "from-global"\n')
        monkeypatch.setattr(config_module, "GLOBAL_CONFIG", global_path)
        monkeypatch.chdir(tmp_path)
        assert load_config().content.directory == "from-global"

    def test_invalid_toml_returns_defaults(self, tmp_path):
        toml_path = tmp_path / "bad.toml"
        toml_path.write_text("[content\nnot toml")
        cfg = load_config(toml_path)
        assert cfg.content.directory == "./posts"


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        toml_path = tmp_path / ".folio.toml"
        toml_path.write_text('[content]\ndirectory = "from-toml"\n')
        monkeypatch.setenv("FOLIO_CONTENT_DIR", "from-env")
        assert load_config(toml_path).content.directory == "from-env"

    def test_render_mode_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FOLIO_RENDER_MODE", "none")
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.content.render_mode is RenderMode.NONE

    @pytest.mark.parametrize(("raw", "expected"), [("true", True), ("0", False), ("no", False)])
    def test_strict_languages_env(self, tmp_path, monkeypatch, raw, expected):
        monkeypatch.setenv("FOLIO_STRICT_LANGUAGES", raw)
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg.render.strict_languages is expected


class TestMergeCliOverrides:
    def test_overrides_set_values(self):
        cfg = merge_cli_overrides(FolioConfig(), content_dir="elsewhere", render_mode="raw")
        assert cfg.content.directory == "elsewhere"
        assert cfg.content.render_mode is RenderMode.RAW_BODY

    def test_none_values_ignored(self):
        cfg = merge_cli_overrides(FolioConfig(), content_dir=None, highlight_style=None)
        assert cfg == FolioConfig()

    def test_unknown_keys_ignored(self):
        cfg = merge_cli_overrides(FolioConfig(), colour="blue")
        assert cfg == FolioConfig()
