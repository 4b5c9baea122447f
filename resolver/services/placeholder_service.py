"""
Placeholder Service - Fallback Source Chain.

Chooses the image that replaces a missing or unaffordable source:
1. the placeholder configured for the store and destination category
2. the skin placeholder of the current theme
3. the skin placeholder of the default theme
4. the skin placeholder of the default theme in the base package
"""

from dataclasses import dataclass

from logging_config import get_logger
from resolver.interfaces.configuration import ConfigProviderInterface, DesignInterface
from resolver.interfaces.storage import FileSystemInterface
from resolver.services.config_service import BASE_PACKAGE, DEFAULT_THEME

logger = get_logger(__name__)

PLACEHOLDER_CONFIG_KEY = "catalog/placeholder/{destination_subdir}_placeholder"
CONFIG_PLACEHOLDER_PATH = "/placeholder/{name}"
SKIN_PLACEHOLDER_PATH = "/images/catalog/product/placeholder/{destination_subdir}.jpg"


@dataclass(frozen=True)
class PlaceholderChoice:
    """
    A placeholder candidate.

    Attributes:
        base_dir: Directory the relative path is anchored to.
        relative_path: Placeholder path with a leading slash.
        tier: Which link of the chain produced it ("config", "theme",
            "default_theme", "base_package").
    """

    base_dir: str
    relative_path: str
    tier: str

    @property
    def absolute_path(self) -> str:
        return self.base_dir + self.relative_path


class PlaceholderService:
    """
    Walks the placeholder chain.

    The skin tiers reuse one relative path and only swap the base
    directory. The base package tier is taken without an existence probe;
    final validation of the choice belongs to the caller.
    """

    def __init__(
        self,
        config_provider: ConfigProviderInterface,
        design: DesignInterface,
        filesystem: FileSystemInterface,
    ):
        self.config_provider = config_provider
        self.design = design
        self.filesystem = filesystem

    def configured_placeholder(self, media_base_dir: str, destination_subdir: str) -> PlaceholderChoice | None:
        """Returns the store-configured placeholder if it exists on disk."""
        name = self.config_provider.get_config(
            PLACEHOLDER_CONFIG_KEY.format(destination_subdir=destination_subdir)
        )
        if not name:
            return None

        choice = PlaceholderChoice(
            base_dir=media_base_dir,
            relative_path=CONFIG_PLACEHOLDER_PATH.format(name=name),
            tier="config",
        )
        if self.filesystem.exists(choice.absolute_path):
            return choice

        logger.warning(
            f"Configured {destination_subdir} placeholder is missing: {choice.absolute_path}"
        )
        return None

    def skin_placeholder(self, destination_subdir: str) -> PlaceholderChoice:
        """Returns the first skin tier holding the placeholder (last tier unprobed)."""
        relative_path = SKIN_PLACEHOLDER_PATH.format(destination_subdir=destination_subdir)

        candidates = [
            ("theme", self.design.get_skin_base_dir()),
            ("default_theme", self.design.get_skin_base_dir(theme=DEFAULT_THEME)),
        ]
        for tier, base_dir in candidates:
            if self.filesystem.exists(base_dir + relative_path):
                return PlaceholderChoice(base_dir, relative_path, tier)

        return PlaceholderChoice(
            base_dir=self.design.get_skin_base_dir(theme=DEFAULT_THEME, package=BASE_PACKAGE),
            relative_path=relative_path,
            tier="base_package",
        )

    def choose(self, media_base_dir: str, destination_subdir: str) -> PlaceholderChoice:
        """Returns the placeholder to use for a destination category."""
        choice = self.configured_placeholder(media_base_dir, destination_subdir)
        if choice is None:
            choice = self.skin_placeholder(destination_subdir)
        logger.debug(
            f"Using {choice.tier} placeholder for {destination_subdir}: {choice.absolute_path}"
        )
        return choice
