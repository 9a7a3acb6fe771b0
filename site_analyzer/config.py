"""
Site analyzer settings.

``load_config()`` builds one frozen ``AppConfig`` from these layers, later
ones winning:

  1. ``config/default.toml``  committed defaults
  2. ``config/local.toml``    optional, deep-merged (gitignored)
  3. ``.env``                 project-root dotenv file, never overrides real env
  4. ``SITE_ANALYZER_*``      environment variables

Scoring thresholds are not configurable; they live as module constants in the
analysis, recommendation and matcher modules. The config only carries file
locations, logging, and the list-length / cut-off knobs the orchestrator
forwards.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# env var -> (section, key) in the raw TOML dict
_ENV_OVERRIDES: tuple[tuple[str, tuple[str, str]], ...] = (
    ("SITE_ANALYZER_RETAILERS_FILE", ("data", "retailers_file")),
    ("SITE_ANALYZER_LOG_LEVEL", ("logging", "level")),
)
_TRUTHY = frozenset({"1", "true", "yes"})


# ── Sections ──────────────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Where the reference data files are read from and where exports go."""

    model_config = ConfigDict(frozen=True)

    retailers_file: str = "config/data/retailers.json"
    lot_reference_file: str = "config/data/lot_reference.json"
    business_profiles_file: str = "config/data/business_profiles.json"
    output_dir: str = "data/outputs"


class MatcherConfig(BaseModel):
    """How many retailer matches are kept, and the score they must reach."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(default=20, ge=1)
    min_match_score: int = Field(default=30, ge=0, le=100)


class RecommendationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_recommendations: int = Field(default=10, ge=1)
    brands_per_category: int = Field(default=3, ge=1)
    downtown_seed_limit: int = Field(default=10, ge=0)
    preferred_business_limit: int = Field(default=5, ge=0)
    lot_tenant_limit: int = Field(default=10, ge=0)


class LoggingConfig(BaseModel):
    """Root logger level, optional log file, and text vs JSON-lines output."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/site_analyzer.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalise_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(_LOG_LEVELS)}, got '{v}'.")
        return level


class AppConfig(BaseModel):
    """Every setting the CLI and ``AnalysisPipeline`` read."""

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    matcher: MatcherConfig = MatcherConfig()
    recommendations: RecommendationConfig = RecommendationConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Paths ─────────────────────────────────────────────────────────────────────


def _project_root() -> Path:
    """First ancestor of this package holding ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents[:4]):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def resolve_data_path(path: str | Path) -> Path:
    """Absolute paths and paths that exist from the CWD are used as-is;
    anything else is taken relative to the project root."""
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p
    return _project_root() / p


# ── Loading ───────────────────────────────────────────────────────────────────


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Read, merge and validate configuration.

    Args:
        config_path: TOML file to start from. ``None`` means
            ``config/default.toml`` under the project root. A ``local.toml``
            in the same directory is merged on top when present.

    Returns:
        A validated, frozen ``AppConfig``.

    Raises:
        FileNotFoundError: ``config_path`` does not exist.
        pydantic.ValidationError: A merged value is out of range.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(path)
    local = path.parent / "local.toml"
    if local.exists():
        raw = _deep_merge(raw, _read_toml(local))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict: ``override`` merged into ``base``, tables merged key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy ``SITE_ANALYZER_*`` variables into the raw dict.

    SITE_ANALYZER_RETAILERS_FILE -> [data] retailers_file
    SITE_ANALYZER_LOG_LEVEL      -> [logging] level
    SITE_ANALYZER_DEBUG          -> debug (1/true/yes)
    """
    for var, (section, key) in _ENV_OVERRIDES:
        value = os.environ.get(var)
        if value:
            raw.setdefault(section, {})[key] = value

    debug = os.environ.get("SITE_ANALYZER_DEBUG")
    if debug:
        raw["debug"] = debug.strip().lower() in _TRUTHY
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Validate the merged dict; ``[project] debug`` backs a missing top-level flag."""
    project = raw.get("project", {})
    return AppConfig.model_validate(
        {
            "data": raw.get("data", {}),
            "matcher": raw.get("matcher", {}),
            "recommendations": raw.get("recommendations", {}),
            "logging": raw.get("logging", {}),
            "debug": raw.get("debug", project.get("debug", False)),
        }
    )
