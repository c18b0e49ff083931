"""
Mailhub configuration.

Settings come from args/mailhub.yaml (override the path with MAILHUB_CONFIG)
and from the environment. A .env file at the project root is loaded first so
ANTHROPIC_API_KEY and MAILHUB_* variables can live there during development.

Usage:
    from mailhub.config import get_section

    assistant_config = get_section("assistant")
    model = assistant_config.get("model", DEFAULT_MODEL)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from mailhub import PROJECT_ROOT


load_dotenv()

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "args" / "mailhub.yaml"

# Defaults used when the YAML file omits a key
DEFAULT_MODEL = "claude-3-5-haiku-latest"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.3
DEFAULT_TOKEN_COOKIE = "mailhub_token"


def get_config_path() -> Path:
    """Resolve the config file path, honouring MAILHUB_CONFIG."""
    override = os.environ.get("MAILHUB_CONFIG")
    if override:
        return Path(override)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML. A missing file yields an empty dict."""
    path = path or get_config_path()
    if path.exists():
        with open(path) as f:
            return yaml.safe_load(f) or {}
    return {}


# Global config
config = load_config()


def get_section(name: str) -> dict[str, Any]:
    """Return one top-level config section, or {} when absent."""
    section = config.get(name) or {}
    return section if isinstance(section, dict) else {}
