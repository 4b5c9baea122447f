"""
Resolver Services.

This package contains concrete implementations of the resolver interfaces.
Each service encapsulates a specific responsibility and can be tested independently.

ARCHITECTURE:
- Services implement interfaces from resolver/interfaces/
- Services may use utils/ for low-level operations
- SourceResolver orchestrates these services
"""

from resolver.services.cache_key_service import CacheKeyService
from resolver.services.cache_path_service import CachePathService
from resolver.services.config_service import SkinDesign, StoreConfigProvider
from resolver.services.decode_cost_service import DecodeCostService
from resolver.services.filesystem_service import LocalFileSystem
from resolver.services.memory_service import (
    MemoryBudgetService,
    ProcessMemoryAccounting,
    parse_memory_limit,
)
from resolver.services.placeholder_service import PlaceholderChoice, PlaceholderService

__all__ = [
    "CacheKeyService",
    "CachePathService",
    "DecodeCostService",
    "LocalFileSystem",
    "MemoryBudgetService",
    "PlaceholderChoice",
    "PlaceholderService",
    "ProcessMemoryAccounting",
    "SkinDesign",
    "StoreConfigProvider",
    "parse_memory_limit",
]
