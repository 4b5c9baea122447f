"""
Resolution Interface - Transform Parameters and Resolved Sources.

Defines the value types flowing through a single resolution request and
the contract of the orchestrator that produces them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_BACKGROUND_COLOR = (255, 255, 255)
DEFAULT_QUALITY = 90
DEFAULT_DESTINATION = "image"


@dataclass(frozen=True)
class WatermarkSpec:
    """
    Watermark configured for a derivative.

    Attributes:
        file: Watermark image reference (as configured, not resolved).
        opacity: Watermark opacity in percent.
        position: Placement keyword (e.g. "stretch", "tile", "top-left").
        width: Optional watermark width in pixels.
        height: Optional watermark height in pixels.
    """

    file: str
    opacity: int = 0
    position: str = ""
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class TransformSpec:
    """
    Transform parameters of a requested derivative.

    All fields are fixed for the lifetime of a resolution request; the cache
    key derived from an instance is only valid for that exact instance value.

    Attributes:
        keep_aspect_ratio: Resize proportionally.
        keep_frame: Pad to the requested box instead of cropping.
        keep_transparency: Preserve the alpha channel.
        constrain_only: Never upscale beyond the source dimensions.
        background_color: Fill color as (r, g, b).
        angle: Rotation angle in degrees.
        quality: Encoder quality, 0-100.
        width: Target width in pixels, or None.
        height: Target height in pixels, or None.
        watermark: Optional watermark parameters.
    """

    keep_aspect_ratio: bool = True
    keep_frame: bool = True
    keep_transparency: bool = True
    constrain_only: bool = False
    background_color: tuple[int, int, int] = DEFAULT_BACKGROUND_COLOR
    angle: int = 0
    quality: int = DEFAULT_QUALITY
    width: int | None = None
    height: int | None = None
    watermark: WatermarkSpec | None = None

    def __post_init__(self):
        if not 0 <= self.quality <= 100:
            raise ValueError(f"quality must be within 0-100, got {self.quality}")
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        if len(self.background_color) != 3:
            raise ValueError(
                f"background_color must have 3 channels, got {self.background_color!r}"
            )
        # Normalize lists coming from YAML/JSON so the value stays hashable.
        object.__setattr__(self, "background_color", tuple(self.background_color))


@dataclass(frozen=True)
class SourceImage:
    """
    The image a derivative is rendered from.

    Attributes:
        absolute_path: Absolute filesystem path of the source.
        relative_path: Path below its base directory, with a leading slash.
        is_placeholder: True when the requested image was substituted.
    """

    absolute_path: str
    relative_path: str
    is_placeholder: bool = False


@dataclass(frozen=True)
class ResolvedSource:
    """
    Result of a resolution request.

    Attributes:
        source: The image to render from.
        cache_path: Where the derivative is or will be stored.
        is_cached: Whether the cache path existed at resolution time.
    """

    source: SourceImage
    cache_path: str
    is_cached: bool = False


class SourceResolverInterface(ABC):
    """
    Interface for resolving a requested image into a renderable source.

    Implementations should handle:
    - Leading-slash normalization and the no-selection sentinel
    - Memory admission for uncached derivatives
    - Placeholder substitution
    """

    @abstractmethod
    def resolve(
        self,
        requested_path: str | None,
        transform: TransformSpec,
        destination_subdir: str = DEFAULT_DESTINATION,
    ) -> ResolvedSource:
        """
        Resolves the source image and cache path for a derivative.

        Args:
            requested_path: Path of the source below the media base directory.
            transform: Transform parameters of the derivative.
            destination_subdir: Derivative category (e.g. "thumbnail").

        Returns:
            ResolvedSource with the chosen source and its cache path.

        Raises:
            SourceNotFoundError: If neither the source nor any placeholder exists.
        """
        pass
