"""
Config Service - Store Settings and Design Lookup.

Implements ConfigProviderInterface on the store settings YAML and
DesignInterface on the skin directory layout.
"""

from typing import Any

from config import get_config
from logging_config import get_logger
from resolver.interfaces.configuration import ConfigProviderInterface, DesignInterface
from utils.path_manager import PathManager, get_path_manager
from utils.settings import get_store_value, load_settings_yaml

logger = get_logger(__name__)

DEFAULT_THEME = "default"
BASE_PACKAGE = "base"


class StoreConfigProvider(ConfigProviderInterface):
    """
    Store-scoped settings read from YAML.

    The document is loaded once per provider instance; create a new
    provider to pick up edits.
    """

    def __init__(
        self,
        store_id=None,
        settings: dict[str, Any] | None = None,
        settings_file: str | None = None,
    ):
        self.store_id = store_id if store_id is not None else get_config()["STORE_ID"]
        if settings is None:
            settings = load_settings_yaml(settings_file)
            logger.debug(f"Loaded store settings for store {self.store_id}")
        self._settings = settings

    def get_config(self, key: str) -> str | None:
        return get_store_value(self._settings, self.store_id, key)


class SkinDesign(DesignInterface):
    """
    Skin directories laid out as {skin_base_dir}/{package}/{theme}.

    The active package/theme come from configuration unless given.
    """

    def __init__(
        self,
        package: str | None = None,
        theme: str | None = None,
        path_manager: PathManager | None = None,
    ):
        config = get_config()
        self.package = package or config["DESIGN_PACKAGE"]
        self.theme = theme or config["DESIGN_THEME"]
        self.path_manager = path_manager or get_path_manager()

    def get_skin_base_dir(self, theme: str | None = None, package: str | None = None) -> str:
        return str(
            self.path_manager.get_skin_dir(package or self.package, theme or self.theme)
        )
