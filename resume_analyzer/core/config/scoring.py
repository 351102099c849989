from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_SCORING_PATH = Path(__file__).resolve().with_name("scoring.yaml")
_SCORING_CONFIG_CACHE: dict[str, Any] | None = None


def scoring_config_path() -> Path:
    override = os.getenv("SCORING_CONFIG_PATH", "").strip()
    return Path(override) if override else _DEFAULT_SCORING_PATH


def load_scoring_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RuntimeError(f"Scoring config not found at '{path}'. Expected a YAML mapping of scoring weights and thresholds.")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    logger.debug("scoring_config_loaded path=%s sections=%s", path, sorted(parsed))
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Scoring weights and thresholds, loaded once per process."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is None:
        _SCORING_CONFIG_CACHE = load_scoring_config(scoring_config_path())
    return _SCORING_CONFIG_CACHE


def reset_scoring_config_cache() -> None:
    global _SCORING_CONFIG_CACHE
    _SCORING_CONFIG_CACHE = None


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a nested value by dot path, e.g. 'matching.weights.skill_match'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
