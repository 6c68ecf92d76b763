"""
YAML → template config loader.

Training templates ship as Python defaults in config.py.  A user file
merges over them:

1. $LIFT_PLANNER_CONFIG, if set
2. otherwise ~/.lift-planner/templates.yaml

Usage:
    from lift_planner.core.engine.config_loader import load_training_templates
    templates = load_training_templates()
    templates["powerlifting"]["method"]

A missing user file means defaults.  A file that cannot be read or
parsed is ignored with a logged warning.
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..config import TRAINING_TEMPLATES
from ..models import PERIODIZATION_METHODS, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LIFT_PLANNER_CONFIG"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; return {} (with a warning) on error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _check_template(key: str, template: Any) -> None:
    """Reject templates the planner could not run."""
    if not isinstance(template, dict):
        raise ValidationError(f"templates.{key}", "must be a mapping")
    method = template.get("method")
    if method not in PERIODIZATION_METHODS:
        raise ValidationError(
            f"templates.{key}.method",
            f"must be one of {PERIODIZATION_METHODS}, got {method!r}",
        )
    days = template.get("training_days")
    if not isinstance(days, int) or isinstance(days, bool) or not 1 <= days <= 7:
        raise ValidationError(f"templates.{key}.training_days", f"must be 1-7, got {days!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_user_yaml_path() -> Path | None:
    """Return the user override file if it exists, else None."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        p = Path(env).expanduser()
    else:
        home = Path(os.environ.get("HOME", "~")).expanduser()
        p = home / ".lift-planner" / "templates.yaml"
    return p if p.exists() else None


def load_training_templates(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load training templates, merging user overrides over the defaults.

    The user file holds a top-level ``templates:`` mapping keyed like
    TRAINING_TEMPLATES; entries deep-merge, so overriding one field of a
    built-in template keeps the rest.

    Args:
        path: Explicit override file (default: get_user_yaml_path())

    Returns:
        Template key → template dict

    Raises:
        ValidationError: If a merged template has an unusable method or day count
    """
    templates = copy.deepcopy(TRAINING_TEMPLATES)

    user = path if path is not None else get_user_yaml_path()
    if user is not None:
        overrides = _load_yaml_file(user).get("templates") or {}
        if isinstance(overrides, dict):
            templates = _deep_merge(templates, overrides)
        else:
            logger.warning("Ignoring config file %s: 'templates' must be a mapping", user)

    for key, template in templates.items():
        _check_template(key, template)
    return templates
