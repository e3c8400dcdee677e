"""Constants used in the project."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the CLI.

    Args:
        Enum (int): Exit codes for the CLI.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INPUT_ERROR = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "NPMVIEW_LOG_LEVEL"
    ENV_CONFIG = "NPMVIEW_CONFIG"
    DEFAULT_CONFIG_FILES = ["npmview.yml", "npmview.yaml"]

    # README rendering
    README_CDN_BASE_URL = "https://cdn.jsdelivr.net/npm"
    README_ALLOWED_SCHEMES = ["http", "https", "mailto"]
    EXTERNAL_LINK_REL = "nofollow noreferrer noopener"
    EXTERNAL_LINK_TARGET = "_blank"
    HIGHLIGHT_THEME = "github-dark"
    HIGHLIGHT_LANGUAGES = [
        "javascript",
        "typescript",
        "jsx",
        "tsx",
        "json",
        "html",
        "css",
        "scss",
        "bash",
        "shell",
        "yaml",
        "toml",
        "markdown",
        "diff",
        "python",
        "rust",
        "go",
        "sql",
        "graphql",
        "dockerfile",
    ]

    # Version history
    UNKNOWN_RELEASE_LINE = "unknown"
    LATEST_TAG = "latest"
    VERSION_URL_PLACEHOLDER = "{version}"


# Keys that may be overridden from a YAML config file, mapped to the
# Constants attribute they replace.
_CONFIG_KEYS = {
    "readme_cdn_base_url": "README_CDN_BASE_URL",
    "readme_allowed_schemes": "README_ALLOWED_SCHEMES",
    "highlight_theme": "HIGHLIGHT_THEME",
    "highlight_languages": "HIGHLIGHT_LANGUAGES",
    "log_format": "LOG_FORMAT",
}


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML config from an explicit path or the default locations.

    Lookup order: ``path``, ``$NPMVIEW_CONFIG``, then ``Constants.DEFAULT_CONFIG_FILES``
    in the working directory. Returns an empty dict when nothing usable is found.
    """
    candidates = []
    if path:
        candidates.append(path)
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        candidates.append(env_path)
    candidates.extend(Constants.DEFAULT_CONFIG_FILES)

    for candidate in candidates:
        if not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except OSError as exc:
            logger.warning("Failed to read config %s: %s", candidate, exc)
            return {}
        except yaml.YAMLError as exc:
            logger.warning("Failed to parse config %s: %s", candidate, exc)
            return {}
        if isinstance(data, dict):
            section = data.get("npmview", data)
            return section if isinstance(section, dict) else {}
        return {}
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply known keys from a loaded config mapping onto Constants."""
    for key, attr in _CONFIG_KEYS.items():
        if key not in cfg:
            continue
        value = cfg[key]
        current = getattr(Constants, attr)
        if isinstance(current, list):
            if not isinstance(value, list):
                logger.warning("Ignoring config key %s: expected a list", key)
                continue
            value = [str(v) for v in value]
        elif not isinstance(value, str) or not value.strip():
            logger.warning("Ignoring config key %s: expected a non-empty string", key)
            continue
        setattr(Constants, attr, value)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML config and apply it to Constants. Never raises."""
    cfg = _load_yaml_config(path)
    if cfg:
        apply_config(cfg)
    return cfg
