"""
Tests for site_analyzer.config.

What we test
------------
- The committed default.toml loads and matches the model defaults.
- Missing explicit config path raises FileNotFoundError.
- local.toml next to the config is deep-merged on top.
- SITE_ANALYZER_* environment variables override file values.
- Invalid values fail validation.
- resolve_data_path() handles absolute and project-relative paths.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from site_analyzer.config import (
    AppConfig,
    LoggingConfig,
    MatcherConfig,
    RecommendationConfig,
    _deep_merge,
    load_config,
    resolve_data_path,
)

_ENV_VARS = ("SITE_ANALYZER_RETAILERS_FILE", "SITE_ANALYZER_LOG_LEVEL", "SITE_ANALYZER_DEBUG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def _write_toml(directory: Path, body: str, name: str = "app.toml") -> Path:
    path = directory / name
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_default_file(self):
        config = load_config()
        assert config.matcher == MatcherConfig()
        assert config.recommendations.max_recommendations == 10
        assert config.data.retailers_file == "config/data/retailers.json"
        assert config.data.lot_reference_file == "config/data/lot_reference.json"
        assert config.data.business_profiles_file == "config/data/business_profiles.json"
        assert config.recommendations.lot_tenant_limit == 10
        assert config.debug is False

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "absent.toml")

    def test_custom_file(self, tmp_path: Path):
        path = _write_toml(tmp_path, "[matcher]\nmax_results = 5\n")
        config = load_config(path)
        assert config.matcher.max_results == 5
        assert config.matcher.min_match_score == 30

    def test_local_override_merged(self, tmp_path: Path):
        path = _write_toml(tmp_path, "[matcher]\nmax_results = 5\nmin_match_score = 40\n")
        _write_toml(tmp_path, "[matcher]\nmax_results = 7\n", name="local.toml")
        config = load_config(path)
        assert config.matcher.max_results == 7
        assert config.matcher.min_match_score == 40

    def test_project_debug_flag(self, tmp_path: Path):
        path = _write_toml(tmp_path, "[project]\ndebug = true\n")
        assert load_config(path).debug is True

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = _write_toml(tmp_path, "[logging]\nlevel = \"INFO\"\n")
        monkeypatch.setenv("SITE_ANALYZER_LOG_LEVEL", "debug")
        monkeypatch.setenv("SITE_ANALYZER_DEBUG", "yes")
        monkeypatch.setenv("SITE_ANALYZER_RETAILERS_FILE", "/data/retailers.json")
        config = load_config(path)
        assert config.logging.level == "DEBUG"
        assert config.debug is True
        assert config.data.retailers_file == "/data/retailers.json"

    def test_invalid_value(self, tmp_path: Path):
        path = _write_toml(tmp_path, "[matcher]\nmin_match_score = 150\n")
        with pytest.raises(ValidationError, match="min_match_score"):
            load_config(path)


class TestModels:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_log_level_uppercased(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    def test_max_results_positive(self):
        with pytest.raises(ValidationError):
            MatcherConfig(max_results=0)

    def test_lot_tenant_limit_non_negative(self):
        with pytest.raises(ValidationError):
            RecommendationConfig(lot_tenant_limit=-1)

    def test_frozen(self):
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.debug = True


def test_deep_merge_nested() -> None:
    base = {"a": {"x": 1, "y": 2}, "b": 1}
    merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})
    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
    assert base["a"]["y"] == 2


def test_resolve_data_path_absolute(tmp_path: Path) -> None:
    target = tmp_path / "r.json"
    assert resolve_data_path(target) == target


def test_resolve_data_path_project_relative() -> None:
    path = resolve_data_path("config/data/retailers.json")
    assert path.exists()
