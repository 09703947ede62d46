import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path("shipment_card.config.yaml")

DEFAULT_ENDPOINT = "https://api.hubapi.com/collector/graphql"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = "shipment-card/0.3"
DEFAULT_TOKEN_ENV = "PRIVATE_APP_ACCESS_TOKEN"
DEFAULT_TRACKING_BASE_URL = "https://www.aftership.com/track"

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "collector": {
        "endpoint": DEFAULT_ENDPOINT,
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "auth": {
        "token_env": DEFAULT_TOKEN_ENV,
    },
    "tracking": {
        "base_url": DEFAULT_TRACKING_BASE_URL,
    },
}

ALLOWED_SECTIONS = tuple(BASE_DEFAULTS)


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, section by section."""
    merged = deepcopy(BASE_DEFAULTS)
    for section, values in config.items():
        if section not in ALLOWED_SECTIONS:
            # Unknown sections are carried through untouched
            merged[section] = values
            continue
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a dictionary")
        merged[section].update(values)
    return merged


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load runtime configuration from YAML and apply defaults.

    Args:
        path: Optional path to the config file. Defaults to shipment_card.config.yaml

    Returns:
        Configuration dictionary with every known section present

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file is not a mapping or a section is malformed
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    merged = _merge_defaults(config)
    timeout = merged["collector"].get("timeout_seconds")
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ValueError("collector.timeout_seconds must be a positive number")
    return merged


def load_config_or_defaults(path: Path | None = None) -> Dict[str, Any]:
    """Load config, falling back to built-in defaults when no file exists."""
    try:
        return load_config(path)
    except FileNotFoundError:
        return deepcopy(BASE_DEFAULTS)


def resolve_token(config: Dict[str, Any], token: Optional[str] = None) -> str:
    """
    Return the bearer token for the collector.

    The explicit token wins; otherwise the environment variable named by
    ``auth.token_env`` is read.

    Raises:
        ValueError: If no token is available
    """
    if token:
        return token
    env_name = (config.get("auth") or {}).get("token_env") or DEFAULT_TOKEN_ENV
    env_token = os.environ.get(env_name)
    if not env_token:
        raise ValueError(f"No access token provided and ${env_name} is not set")
    return env_token
