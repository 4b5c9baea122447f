"""
Storage Interface - Filesystem Access.

Defines the read-only filesystem operations the resolver depends on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageHeader:
    """
    Header-level image metadata.

    Attributes:
        width: Width in pixels (0 when unknown).
        height: Height in pixels (0 when unknown).
        bits_per_channel: Bit depth per channel, if reported.
        channels: Channel count, if reported.
        format: Image format name (e.g. "JPEG").
    """

    width: int = 0
    height: int = 0
    bits_per_channel: int | None = None
    channels: int | None = None
    format: str | None = None


class FileSystemInterface(ABC):
    """Interface for existence checks and header reads."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_regular_file(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_header(self, path: str) -> ImageHeader | None:
        """
        Reads image metadata without decoding pixel data.

        Returns:
            ImageHeader, or None when the header cannot be parsed.
        """
        pass
