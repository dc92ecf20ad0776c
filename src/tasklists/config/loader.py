import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("tasklists.config.yaml")

ENV_SECRET_KEY = "TASKLISTS_SECRET_KEY"
ENV_DB_PATH = "TASKLISTS_DB_PATH"

BASE_CONFIG: Dict[str, Dict[str, Any]] = {
    "storage": {
        "sqlite_path": "tasklists.db",
    },
    "auth": {
        "secret_key": "change-me",
        "token_ttl_days": 30,
        "bcrypt_rounds": 12,
    },
}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the YAML configuration and merge it over the built-in defaults.

    Args:
        path: Optional config path. When given it must exist; the default
            path is optional and falls back to built-in values.

    Returns:
        Config dict with ``storage`` and ``auth`` sections always present.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file does not hold a mapping of mappings
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    loaded: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    elif path is not None:
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    if not isinstance(loaded, dict):
        raise ValueError("Config must be a dictionary")

    config = deepcopy(BASE_CONFIG)
    for section, values in loaded.items():
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a dictionary")
        config.setdefault(section, {}).update(values)

    # Environment wins over the file
    if os.environ.get(ENV_SECRET_KEY):
        config["auth"]["secret_key"] = os.environ[ENV_SECRET_KEY]
    if os.environ.get(ENV_DB_PATH):
        config["storage"]["sqlite_path"] = os.environ[ENV_DB_PATH]

    return config


def get_sqlite_path(config: Dict[str, Any]) -> str:
    return str(config.get("storage", {}).get("sqlite_path", BASE_CONFIG["storage"]["sqlite_path"]))


def get_auth_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Get the auth section with defaults applied and types checked.

    Defaults:
    - secret_key: "change-me"
    - token_ttl_days: 30
    - bcrypt_rounds: 12
    """
    section = (config or {}).get("auth") or {}
    result = {**BASE_CONFIG["auth"], **section}

    if not isinstance(result["secret_key"], str) or not result["secret_key"]:
        raise ValueError("auth.secret_key must be a non-empty string")

    ttl = result["token_ttl_days"]
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or ttl <= 0:
        raise ValueError("auth.token_ttl_days must be a positive number")

    rounds = result["bcrypt_rounds"]
    if isinstance(rounds, bool) or not isinstance(rounds, int) or not 4 <= rounds <= 31:
        raise ValueError("auth.bcrypt_rounds must be an integer between 4 and 31")

    return result
