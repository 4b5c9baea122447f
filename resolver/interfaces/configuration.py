"""
Configuration Interfaces - Store Settings and Design Lookup.

Both are read-only views of externally owned configuration.
"""

from abc import ABC, abstractmethod


class ConfigProviderInterface(ABC):
    """Read-only key/value lookup of store-scoped settings."""

    @abstractmethod
    def get_config(self, key: str) -> str | None:
        """
        Looks up a setting.

        Args:
            key: Slash-separated setting path
                (e.g. "catalog/placeholder/image_placeholder").

        Returns:
            The value as a string, or None when unset.
        """
        pass


class DesignInterface(ABC):
    """Resolves skin base directories of the active design."""

    @abstractmethod
    def get_skin_base_dir(
        self, theme: str | None = None, package: str | None = None
    ) -> str:
        """
        Returns the skin base directory.

        Args:
            theme: Theme override; the active theme when None.
            package: Package override; the active package when None.
        """
        pass
