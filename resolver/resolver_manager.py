# ------------------------------------------------------------------------------
# Resolver Manager Module for Image Derivatives
# resolver/resolver_manager.py
# ------------------------------------------------------------------------------

"""
This module defines the ResolverManager class, which wires the resolver
services from configuration and offers the operations callers need around
a resolution: render hand-off, cache inspection and cache purging.
"""

from config import get_config
from logging_config import get_logger
from resolver.interfaces.configuration import ConfigProviderInterface, DesignInterface
from resolver.interfaces.memory import (
    DecodeCostInterface,
    MemoryBudgetInterface,
    MemoryEstimate,
)
from resolver.interfaces.render import RenderInterface
from resolver.interfaces.resolution import (
    DEFAULT_DESTINATION,
    ResolvedSource,
    TransformSpec,
)
from resolver.interfaces.storage import FileSystemInterface
from resolver.services.config_service import SkinDesign, StoreConfigProvider
from resolver.services.decode_cost_service import DecodeCostService
from resolver.services.filesystem_service import LocalFileSystem
from resolver.services.memory_service import MemoryBudgetService
from resolver.services.placeholder_service import PlaceholderService
from resolver.source_resolver import SourceResolver
from utils.file_gc import purge_cache
from utils.path_manager import PathManager

logger = get_logger(__name__)


class ResolverManager:
    """
    Builds a SourceResolver from configuration and drives it.

    Any collaborator can be passed in; the rest are created from get_config().

    Key Responsibilities:
    - Resolves derivative requests through SourceResolver.
    - Hands uncached derivatives to a renderer.
    - Reports and purges cached derivatives.
    """

    def __init__(
        self,
        media_base_dir: str | None = None,
        store_id=None,
        filesystem: FileSystemInterface | None = None,
        memory_budget: MemoryBudgetInterface | None = None,
        cost_estimator: DecodeCostInterface | None = None,
        config_provider: ConfigProviderInterface | None = None,
        design: DesignInterface | None = None,
    ):
        config = get_config()
        self.media_base_dir = str(media_base_dir or config["MEDIA_BASE_DIR"]).rstrip("/")
        self.store_id = store_id if store_id is not None else config["STORE_ID"]
        self.path_manager = PathManager(self.media_base_dir, config["SKIN_BASE_DIR"])

        self.filesystem = filesystem or LocalFileSystem()
        self.memory_budget = memory_budget or MemoryBudgetService()
        self.cost_estimator = cost_estimator or DecodeCostService(
            self.filesystem,
            overhead_bytes=config["DECODE_OVERHEAD_BYTES"],
            safety_multiplier=config["DECODE_SAFETY_MULTIPLIER"],
        )
        self.config_provider = config_provider or StoreConfigProvider(self.store_id)
        self.design = design or SkinDesign(path_manager=self.path_manager)

        self.resolver = SourceResolver(
            media_base_dir=self.media_base_dir,
            store_id=self.store_id,
            filesystem=self.filesystem,
            memory_budget=self.memory_budget,
            cost_estimator=self.cost_estimator,
            placeholders=PlaceholderService(
                self.config_provider, self.design, self.filesystem
            ),
        )

    def resolve(
        self,
        requested_path: str | None,
        transform: TransformSpec,
        destination_subdir: str = DEFAULT_DESTINATION,
    ) -> ResolvedSource:
        """Resolves a derivative request. Raises SourceNotFoundError."""
        return self.resolver.resolve(requested_path, transform, destination_subdir)

    def prepare(
        self,
        requested_path: str | None,
        transform: TransformSpec,
        destination_subdir: str = DEFAULT_DESTINATION,
        renderer: RenderInterface | None = None,
    ) -> ResolvedSource:
        """
        Resolves a request and renders the derivative when it is not cached.

        Args:
            requested_path: Source path below the media base directory.
            transform: Transform parameters.
            destination_subdir: Derivative category.
            renderer: Optional render pipeline; without one nothing is rendered.

        Returns:
            ResolvedSource; is_cached reflects the state after rendering.
        """
        resolved = self.resolve(requested_path, transform, destination_subdir)
        if resolved.is_cached or renderer is None:
            return resolved

        self.path_manager.ensure_parent_dir(resolved.cache_path)
        rendered = renderer.render(
            resolved.source.absolute_path, transform, resolved.cache_path
        )
        if not rendered:
            logger.warning(
                f"Renderer did not produce {resolved.cache_path} from "
                f"{resolved.source.absolute_path}"
            )
            return resolved

        logger.debug(f"Rendered derivative: {resolved.cache_path}")
        return ResolvedSource(
            source=resolved.source,
            cache_path=resolved.cache_path,
            is_cached=self.filesystem.exists(resolved.cache_path),
        )

    def is_cached(
        self,
        requested_path: str | None,
        transform: TransformSpec,
        destination_subdir: str = DEFAULT_DESTINATION,
    ) -> bool:
        """True when the derivative of the resolved source already exists."""
        return self.resolve(requested_path, transform, destination_subdir).is_cached

    def estimate(self, path: str) -> MemoryEstimate:
        """Returns the decode cost estimate of an absolute image path."""
        return self.cost_estimator.estimate(path)

    def clear_cache(self, store_id=None, dry_run: bool = False) -> dict:
        """
        Purges cached derivatives.

        Args:
            store_id: Limit the purge to one store scope; all stores when None.
            dry_run: Only count the files.

        Returns:
            Stats dict from purge_cache.
        """
        scope = None
        if store_id is not None:
            scope = self.path_manager.get_store_cache_dir(store_id)
        return purge_cache(self.path_manager.cache_dir, scope=scope, dry_run=dry_run)
