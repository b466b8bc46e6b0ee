"""
Reminder section loader for the YAML config files.

config/defaults.yaml ships the reminder defaults; an optional
config/settings.yaml (gitignored) overrides individual keys of the same
``reminders:`` section. Everything else (database, logging) comes from
environment variables, see core.config.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULTS_PATH = PROJECT_ROOT / "config" / "defaults.yaml"
SETTINGS_PATH = PROJECT_ROOT / "config" / "settings.yaml"

SECTION = "reminders"

# (defaults_path, settings_path) -> merged section
_sections: Dict[Tuple[Path, Path], Dict[str, Any]] = {}


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load %s: %s", path, e)
        return {}
    return content if isinstance(content, dict) else {}


def _reminders_section(path: Path) -> Dict[str, Any]:
    section = _load_yaml(path).get(SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Ignoring non-mapping '%s' section in %s", SECTION, path)
        return {}
    return section


def overlay(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively apply `override` on top of `base` without mutating either."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = overlay(result[key], value)
        else:
            result[key] = value
    return result


def load_reminders_section(
    defaults_path: Optional[Path] = None,
    settings_path: Optional[Path] = None,
    reload: bool = False,
) -> Dict[str, Any]:
    """Return the merged ``reminders:`` section of defaults + local settings.

    Args:
        defaults_path: Shipped defaults file (config/defaults.yaml if omitted)
        settings_path: Local override file (config/settings.yaml if omitted)
        reload: Re-read the files even if this pair was loaded before

    Returns:
        The section as a dict, e.g. {"water": {"count": 4, ...}}; empty when
        neither file defines it.
    """
    paths = (defaults_path or DEFAULTS_PATH, settings_path or SETTINGS_PATH)
    if not reload and paths in _sections:
        return _sections[paths]

    section = overlay(_reminders_section(paths[0]), _reminders_section(paths[1]))
    _sections[paths] = section
    logger.debug("Loaded reminder config from %s (+ %s)", *paths)
    return section
