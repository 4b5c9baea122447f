# ------------------------------------------------------------------------------
# Source Resolver Module for Image Derivatives
# resolver/source_resolver.py
# ------------------------------------------------------------------------------

"""
This module defines the SourceResolver class, which decides for one
derivative request which source image to render from, whether decoding it
fits into the memory budget, and where the derivative is cached.
"""

from logging_config import get_logger
from resolver.errors import SourceNotFoundError
from resolver.interfaces.memory import (
    UNLIMITED,
    DecodeCostInterface,
    MemoryBudgetInterface,
)
from resolver.interfaces.resolution import (
    DEFAULT_DESTINATION,
    ResolvedSource,
    SourceImage,
    SourceResolverInterface,
    TransformSpec,
)
from resolver.interfaces.storage import FileSystemInterface
from resolver.services.cache_key_service import CacheKeyService
from resolver.services.cache_path_service import CachePathService
from resolver.services.placeholder_service import PlaceholderService

logger = get_logger(__name__)

NO_SELECTION = "/no_selection"


# >>> Helper Functions >>>
def normalize_requested_path(requested_path: str | None) -> str | None:
    """
    Prefixes a leading slash and maps the no-selection sentinel to None.

    Args:
        requested_path: Path below the media base directory, as stored.

    Returns:
        Leading-slash path, or None when no file was provided.
    """
    if not requested_path:
        return None
    if not requested_path.startswith("/"):
        requested_path = "/" + requested_path
    if requested_path == NO_SELECTION:
        return None
    return requested_path


def admits(current_usage: int, estimate: int, limit) -> bool:
    """True when decoding fits strictly below the limit (or there is none)."""
    if limit is UNLIMITED:
        return True
    return current_usage + estimate < limit


class SourceResolver(SourceResolverInterface):
    """
    Orchestrates one resolution request.

    Steps:
    - Normalize the requested path
    - Reject missing sources
    - Accept sources whose derivative is already cached without any decode check
    - Otherwise admit the decode only if it fits the memory budget
    - Fall back to the placeholder chain when any of the above fails
    - Raise SourceNotFoundError when even the placeholder is missing

    Every collaborator is injected; the resolver holds no per-request state.
    """

    def __init__(
        self,
        media_base_dir: str,
        store_id,
        filesystem: FileSystemInterface,
        memory_budget: MemoryBudgetInterface,
        cost_estimator: DecodeCostInterface,
        placeholders: PlaceholderService,
        cache_keys: CacheKeyService | None = None,
        cache_paths: CachePathService | None = None,
    ):
        self.media_base_dir = str(media_base_dir).rstrip("/")
        self.store_id = store_id
        self.filesystem = filesystem
        self.memory_budget = memory_budget
        self.cost_estimator = cost_estimator
        self.placeholders = placeholders
        self.cache_keys = cache_keys or CacheKeyService()
        self.cache_paths = cache_paths or CachePathService()

    def cache_path_for(
        self,
        relative_path: str,
        transform: TransformSpec,
        destination_subdir: str,
        cache_key: str | None = None,
    ) -> str:
        """Computes the cache path of relative_path rendered with transform."""
        if cache_key is None:
            cache_key = self.cache_keys.derive(transform)
        return self.cache_paths.resolve(
            self.media_base_dir,
            self.store_id,
            destination_subdir,
            transform.width,
            transform.height,
            cache_key,
            relative_path,
        )

    def is_admitted(self, source_path: str) -> bool:
        """Checks whether decoding source_path fits into the memory budget."""
        limit = self.memory_budget.limit()
        if limit is UNLIMITED:
            return True

        usage = self.memory_budget.current_usage()
        estimate = self.cost_estimator.estimate(source_path).bytes
        if admits(usage, estimate, limit):
            return True

        logger.info(
            f"Decode of {source_path} denied: usage {usage} + estimate {estimate} "
            f">= limit {limit}"
        )
        return False

    def resolve(
        self,
        requested_path: str | None,
        transform: TransformSpec,
        destination_subdir: str = DEFAULT_DESTINATION,
    ) -> ResolvedSource:
        cache_key = self.cache_keys.derive(transform)
        relative_path = normalize_requested_path(requested_path)
        cache_path = None
        is_cached = False

        if relative_path:
            cache_path = self.cache_path_for(
                relative_path, transform, destination_subdir, cache_key
            )
            source_path = self.media_base_dir + relative_path
            if not self.filesystem.exists(source_path):
                logger.info(f"Source image missing, using placeholder: {source_path}")
                relative_path = None
            elif self.filesystem.exists(cache_path):
                is_cached = True
            elif not self.is_admitted(source_path):
                relative_path = None

        base_dir = self.media_base_dir
        is_placeholder = False
        if not relative_path:
            choice = self.placeholders.choose(self.media_base_dir, destination_subdir)
            base_dir = choice.base_dir
            relative_path = choice.relative_path
            is_placeholder = True
            cache_path = self.cache_path_for(
                relative_path, transform, destination_subdir, cache_key
            )
            is_cached = self.filesystem.exists(cache_path)

        absolute_path = base_dir + relative_path
        if not self.filesystem.exists(absolute_path):
            logger.error(
                f"No usable source for {requested_path!r} ({destination_subdir}): "
                f"{absolute_path} does not exist"
            )
            raise SourceNotFoundError(path=absolute_path)

        return ResolvedSource(
            source=SourceImage(
                absolute_path=absolute_path,
                relative_path=relative_path,
                is_placeholder=is_placeholder,
            ),
            cache_path=cache_path,
            is_cached=is_cached,
        )
