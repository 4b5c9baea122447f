"""
Render Interface - Downstream Derivative Rendering.

The resolver never renders; it only hands the resolved triple over.
"""

from abc import ABC, abstractmethod

from resolver.interfaces.resolution import TransformSpec


class RenderInterface(ABC):
    """Interface for the pipeline that produces derivative files."""

    @abstractmethod
    def render(self, source_path: str, transform: TransformSpec, cache_path: str) -> bool:
        """
        Produces the derivative at cache_path.

        Args:
            source_path: Absolute path of the source image.
            transform: Transform parameters.
            cache_path: Target file path.

        Returns:
            True if the derivative was written.
        """
        pass
