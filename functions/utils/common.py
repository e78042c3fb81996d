# functions/utils/common.py
"""
common utility helpers used across the CV builder.

This includes:
- YAML loading with logged, non-fatal failures
- Cached access to parameters/parameters.yaml and its sections
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

logger = structlog.get_logger().bind(module="utils.common")

# Root of project (two dirs up from utils/)
ROOT = Path(__file__).resolve().parents[2]

PARAMETERS_PATH = ROOT / "parameters" / "parameters.yaml"

_PARAMETERS_CACHE: Dict[str, Any] | None = None

# ---------------------------------------------------------------------------
# yaml reader
# ---------------------------------------------------------------------------

def load_yaml_dict(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML file into a dict. Accepts either a string path or a Path object.
    Returns {} on any error, and logs via structlog.
    """
    p = Path(path)
    if not p.exists():
        logger.info("yaml_file_not_found", path=str(p))
        return {}

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("yaml_file_load_error", path=str(p), error=str(exc))
        return {}

    if not isinstance(data, dict):
        logger.error("yaml_file_not_a_mapping", path=str(p), root_type=type(data).__name__)
        return {}

    return data

# ---------------------------------------------------------------------------
# Full parameters.yaml loader (cached)
# ---------------------------------------------------------------------------

def load_all_parameters() -> Dict[str, Any]:
    """Load and cache the entire parameters/parameters.yaml file."""
    global _PARAMETERS_CACHE
    if _PARAMETERS_CACHE is not None:
        return _PARAMETERS_CACHE

    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", path=str(PARAMETERS_PATH))

    _PARAMETERS_CACHE = load_yaml_dict(PARAMETERS_PATH)
    return _PARAMETERS_CACHE


def reset_parameters_cache() -> None:
    """Forget the cached parameters (tests, hot reload)."""
    global _PARAMETERS_CACHE
    _PARAMETERS_CACHE = None


def get_param_section(name: str) -> Dict[str, Any]:
    """Return one top-level section of parameters.yaml, {} if absent or malformed."""
    section = load_all_parameters().get(name, {}) or {}
    if not isinstance(section, dict):
        logger.warning("parameters_section_not_dict", section=name, raw=str(section)[:200])
        return {}
    return section


__all__ = [
    "ROOT",
    "PARAMETERS_PATH",
    "load_yaml_dict",
    "load_all_parameters",
    "reset_parameters_cache",
    "get_param_section",
]
