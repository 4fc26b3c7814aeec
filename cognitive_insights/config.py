"""
Configuration for Cognitive Insights.

Sources, lowest precedence first:

  ``config/default.toml``   defaults shipped with the project
  ``config/local.toml``     per-machine overrides next to the main file
  ``.env``                  exported into the environment (existing vars win)
  ``COGNITIVE_INSIGHTS_*``  environment variables, see ``ENV_OVERRIDES``

Only the CLI calls ``load_config()``. Library callers construct
``InsightConfig`` / ``DatabaseConfig`` directly and pass them to
``InsightService`` and ``SqliteInsightStore``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "COGNITIVE_INSIGHTS_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


# env suffix -> (section or None for top level, key, cast)
ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "DB_PATH":        ("database", "db_path", str),
    "LOG_LEVEL":      ("logging", "level", str),
    "NARRATIVE_SEED": ("insights", "narrative_seed", int),
    "DEBUG":          (None, "debug", _as_bool),
}


class DatabaseConfig(BaseModel):
    """Where the SQLite insight store lives and how connections are opened."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/cognitive_insights.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class InsightConfig(BaseModel):
    """Scoring and selection parameters for the insight engine.

    ``narrative_seed`` pins the template choice (useful for demos and
    reproducible output); ``None`` leaves it random.
    """

    model_config = ConfigDict(frozen=True)

    strength_threshold: float = 70.0
    max_strengths: int = 3
    max_weaknesses: int = 3
    history_limit: int = 10
    narrative_seed: Optional[int] = None

    @field_validator("strength_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"strength_threshold must be in [0, 100], got {v}.")
        return v

    @field_validator("max_strengths", "max_weaknesses")
    @classmethod
    def validate_item_cap(cls, v: int) -> int:
        if not 1 <= v <= 3:
            raise ValueError(f"Item caps must be in [1, 3], got {v}.")
        return v

    @field_validator("history_limit")
    @classmethod
    def validate_history_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"history_limit must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Console / file logging options. An empty ``log_file`` disables the file."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/cognitive_insights.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalise_level(cls, v: str) -> str:
        name = v.strip().upper()
        if name not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; expected one of {list(_LOG_LEVELS)}.")
        return name


class AppConfig(BaseModel):
    """All configuration sections, as loaded by the CLI."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    insights: InsightConfig = InsightConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loading ───────────────────────────────────────────────────────────────────

def project_root() -> Path:
    """Nearest ancestor of this package that contains ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for parent in (here, *here.parents):
        if (parent / "pyproject.toml").is_file():
            return parent
    return here.parent


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build an ``AppConfig`` from every configuration source.

    Args:
        config_path: TOML file to start from. When omitted,
            ``config/default.toml`` under the project root is used.

    Raises:
        FileNotFoundError: If the TOML file is missing.
        pydantic.ValidationError: If a merged value is out of range.
    """
    root = project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(path)
    local_path = path.with_name("local.toml")
    if local_path.is_file() and local_path != path:
        raw = _merge(raw, _read_toml(local_path))

    _overlay_environment(raw)
    return AppConfig(
        database=DatabaseConfig(**raw.get("database", {})),
        insights=InsightConfig(**raw.get("insights", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` updated with ``extra``, merging nested tables key by key."""
    out = dict(base)
    for key, value in extra.items():
        current = out.get(key)
        out[key] = (
            _merge(current, value)
            if isinstance(current, dict) and isinstance(value, dict)
            else value
        )
    return out


def _overlay_environment(raw: dict[str, Any]) -> None:
    """Copy any set ``COGNITIVE_INSIGHTS_*`` variables into ``raw`` in place."""
    for suffix, (section, key, cast) in ENV_OVERRIDES.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = cast(value)
