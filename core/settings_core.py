"""
Settings Core - Store Settings Management.

Provides store settings read/write operations separated from the resolver.
"""

import logging
from typing import Any

from config import get_config
from utils.settings import get_store_value, load_settings_yaml, save_settings_yaml

logger = logging.getLogger(__name__)


def get_setting(key: str, default: Any = None) -> Any:
    """
    Gets a single process setting value.

    Args:
        key: Setting key
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    config = get_config()
    return config.get(key, default)


def get_store_setting(key: str, store_id=None) -> str | None:
    """
    Gets a store-scoped setting, falling back to the default scope.

    Args:
        key: Slash-separated key (e.g. "catalog/placeholder/image_placeholder")
        store_id: Store scope; the configured store when None

    Returns:
        Setting value or None
    """
    if store_id is None:
        store_id = get_config()["STORE_ID"]
    return get_store_value(load_settings_yaml(), store_id, key)


def set_store_setting(key: str, value: str, store_id=None) -> None:
    """
    Stores a store-scoped setting.

    Args:
        key: Slash-separated key
        value: Value to store
        store_id: Store scope; the default scope when None
    """
    scope = "default" if store_id is None else str(store_id)
    settings = load_settings_yaml()
    node = settings.setdefault("stores", {}).setdefault(scope, {})
    parts = key.strip("/").split("/")
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = value
    save_settings_yaml(settings)
    logger.info(f"Updated store setting {key} for scope {scope}")
