"""
Resolver Interfaces.

This package defines the abstract interfaces for all collaborators of
the source resolver. These interfaces enable:
- Clear service boundaries
- Dependency injection
- Independent testing of each component
- Substituting admission policies without touching call sites

ARCHITECTURE:
- SourceResolver only coordinates these interfaces
- Concrete implementations live in services/
- No direct dependencies between implementations
"""

from resolver.interfaces.configuration import ConfigProviderInterface, DesignInterface
from resolver.interfaces.memory import (
    UNLIMITED,
    DecodeCostInterface,
    MemoryAccountingInterface,
    MemoryBudgetInterface,
    MemoryEstimate,
)
from resolver.interfaces.render import RenderInterface
from resolver.interfaces.resolution import (
    ResolvedSource,
    SourceImage,
    SourceResolverInterface,
    TransformSpec,
    WatermarkSpec,
)
from resolver.interfaces.storage import FileSystemInterface, ImageHeader

__all__ = [
    # Interfaces
    "ConfigProviderInterface",
    "DesignInterface",
    "DecodeCostInterface",
    "FileSystemInterface",
    "MemoryAccountingInterface",
    "MemoryBudgetInterface",
    "RenderInterface",
    "SourceResolverInterface",
    # Data Classes
    "ImageHeader",
    "MemoryEstimate",
    "ResolvedSource",
    "SourceImage",
    "TransformSpec",
    "WatermarkSpec",
    # Markers
    "UNLIMITED",
]
