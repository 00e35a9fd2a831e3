from pathlib import Path
from typing import Any, Dict, List

import yaml

DEFAULT_CONFIG_PATH = Path("courselib.config.yaml")
DEFAULT_MAPPINGS_PATH = Path("config/property_mappings.yaml")

DEFAULT_SQLITE_PATH = "courselib.db"
BASE_PAGING_DEFAULTS: Dict[str, int] = {
    "default_page_size": 10,
    "max_page_size": 20,
}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_sqlite_path(config: Dict[str, Any] | None) -> str:
    storage = (config or {}).get("storage") or {}
    return storage.get("sqlite_path") or DEFAULT_SQLITE_PATH


def get_paging_settings(config: Dict[str, Any] | None = None) -> Dict[str, int]:
    """
    Resolve paging limits with built-in fallbacks.

    Args:
        config: Runtime config dict (may be None or lack a ``paging`` section)

    Returns:
        {"default_page_size": int, "max_page_size": int}

    Raises:
        ValueError: Non-positive or non-integer values, or default > max
    """
    paging = (config or {}).get("paging") or {}
    if not isinstance(paging, dict):
        raise ValueError("Config 'paging' must be a dictionary")

    settings = {**BASE_PAGING_DEFAULTS, **paging}
    for key in BASE_PAGING_DEFAULTS:
        value = settings[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"Config 'paging.{key}' must be a positive integer")
    if settings["default_page_size"] > settings["max_page_size"]:
        raise ValueError("Config 'paging.default_page_size' cannot exceed 'paging.max_page_size'")
    return {key: settings[key] for key in BASE_PAGING_DEFAULTS}


def load_property_mappings_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the static property mapping table from YAML.

    Args:
        path: Optional path. Defaults to config/property_mappings.yaml

    Returns:
        Dictionary with ``version`` and ``mappings`` (list of view/model/fields entries)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the structure is invalid
    """
    cfg_path = path or DEFAULT_MAPPINGS_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Property mappings config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Property mappings config must be a dictionary")
    if "version" not in config:
        raise ValueError("Property mappings config must have 'version' field")

    mappings = config.get("mappings", [])
    if not isinstance(mappings, list):
        raise ValueError("Property mappings config 'mappings' must be a list")

    for entry in mappings:
        if not isinstance(entry, dict):
            raise ValueError("Each mapping entry must be a dictionary")
        for required in ("view", "model", "fields"):
            if required not in entry:
                raise ValueError(f"Mapping entry missing required field: {required}")
        fields = entry["fields"]
        if not isinstance(fields, dict) or not fields:
            raise ValueError(f"Mapping '{entry['view']}' fields must be a non-empty dictionary")
        for name, value in fields.items():
            if not isinstance(value, dict):
                raise ValueError(f"Mapping '{entry['view']}.{name}' must be a dictionary")
            targets = value.get("targets")
            if not isinstance(targets, list) or not targets:
                raise ValueError(f"Mapping '{entry['view']}.{name}' needs a non-empty 'targets' list")
            if not isinstance(value.get("revert", False), bool):
                raise ValueError(f"Mapping '{entry['view']}.{name}' 'revert' must be a boolean")

    return config


def get_mapping_entries(config: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return validated mapping entries (empty list if none)."""
    return list(config.get("mappings") or [])
