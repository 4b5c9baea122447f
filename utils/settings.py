from pathlib import Path
from typing import Any

import yaml

from config import get_config


DEFAULT_SCOPE = "default"


def get_settings_path(settings_file: str = None) -> Path:
    """Returns the path to the store settings YAML file."""
    if settings_file is None:
        settings_file = get_config()["STORE_SETTINGS_FILE"]
    return Path(settings_file)


def load_settings_yaml(settings_file: str = None) -> dict[str, Any]:
    """Loads store settings from YAML; a missing or broken file means no settings."""
    settings_path = get_settings_path(settings_file)
    if not settings_path.exists():
        return {}
    raw = settings_path.read_text(encoding="utf-8").strip()
    if not raw:
        return {}
    try:
        data = yaml.safe_load(raw)
        return data if isinstance(data, dict) else {}
    except yaml.YAMLError:
        return {}


def save_settings_yaml(settings_dict: dict[str, Any], settings_file: str = None) -> None:
    """Saves store settings as YAML."""
    settings_path = get_settings_path(settings_file)
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    with settings_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(settings_dict, handle, sort_keys=True)


def lookup_path(data: Any, key: str) -> Any:
    """
    Walks a nested dict along a slash-separated key.

    lookup_path({"a": {"b": 1}}, "a/b") -> 1
    Returns None when any segment is missing.
    """
    node = data
    for part in key.strip("/").split("/"):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def get_store_value(settings: dict[str, Any], store_id, key: str) -> str | None:
    """
    Resolves a setting for a store, falling back to the default scope.

    Layout:
        stores:
          default:
            catalog: {placeholder: {image_placeholder: "default/image.jpg"}}
          "1":
            catalog: {placeholder: {thumbnail_placeholder: "stores/1/thumb.jpg"}}
    """
    stores = settings.get("stores") if isinstance(settings, dict) else None
    if not isinstance(stores, dict):
        return None

    for scope in (str(store_id), DEFAULT_SCOPE):
        scope_settings = stores.get(scope)
        if scope_settings is None and scope.isdigit():
            # YAML turns unquoted numeric keys into ints.
            scope_settings = stores.get(int(scope))
        value = lookup_path(scope_settings, key)
        if value is not None and not isinstance(value, dict):
            return str(value)
    return None
