"""
Decode Cost Service - Header-only Memory Estimation.

Implements DecodeCostInterface. Predicts the peak memory of decoding an
image from its header, never from its pixel data.
"""

import math

from logging_config import get_logger
from resolver.interfaces.memory import DecodeCostInterface, MemoryEstimate
from resolver.interfaces.storage import FileSystemInterface

logger = get_logger(__name__)


class DecodeCostService(DecodeCostInterface):
    """
    Estimates decode memory as
    ceil((width * height * bits * channels / 8 + overhead) * multiplier).

    Constraints:
    - Unknown files and unknown dimensions cost 0 (admission proceeds)
    - Missing channel count assumes RGBA, missing bit depth assumes 8
    """

    DEFAULT_OVERHEAD_BYTES = 65536
    DEFAULT_SAFETY_MULTIPLIER = 1.65
    DEFAULT_CHANNELS = 4
    DEFAULT_BITS = 8

    def __init__(
        self,
        filesystem: FileSystemInterface,
        overhead_bytes: int = DEFAULT_OVERHEAD_BYTES,
        safety_multiplier: float = DEFAULT_SAFETY_MULTIPLIER,
    ):
        self.filesystem = filesystem
        self.overhead_bytes = overhead_bytes
        self.safety_multiplier = safety_multiplier

    def estimate(self, path: str) -> MemoryEstimate:
        if not path:
            return MemoryEstimate(0)
        if not self.filesystem.exists(path) or not self.filesystem.is_regular_file(path):
            return MemoryEstimate(0)

        header = self.filesystem.read_header(path)
        if header is None:
            logger.debug(f"Image header unreadable, skipping cost estimate: {path}")
            return MemoryEstimate(0)

        # Missing dimensions
        if not header.width or not header.height:
            return MemoryEstimate(0)

        channels = header.channels if header.channels else self.DEFAULT_CHANNELS
        bits = header.bits_per_channel if header.bits_per_channel else self.DEFAULT_BITS
        return MemoryEstimate(
            self.compute(header.width, header.height, bits, channels)
        )

    def compute(self, width: int, height: int, bits: int, channels: int) -> int:
        """Applies the cost formula to known header values."""
        pixel_bytes = width * height * bits * channels / 8
        return math.ceil((pixel_bytes + self.overhead_bytes) * self.safety_multiplier)
