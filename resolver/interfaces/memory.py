"""
Memory Interfaces - Budget and Decode Cost.

Defines the contracts used to decide whether decoding an image is safe.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class _Unlimited:
    """Marker for a memory ceiling that disables admission checks."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNLIMITED"


UNLIMITED = _Unlimited()


@dataclass(frozen=True)
class MemoryEstimate:
    """
    Predicted peak memory of decoding one image.

    Attributes:
        bytes: Estimated bytes; 0 when the cost could not be assessed.
    """

    bytes: int = 0


class MemoryAccountingInterface(ABC):
    """Process memory accounting as seen by the admission check."""

    @abstractmethod
    def current_allocated_bytes(self) -> int:
        """Returns the live memory usage of the process."""
        pass

    @abstractmethod
    def configured_memory_limit_string(self) -> str | None:
        """Returns the raw, unit-suffixed memory ceiling (e.g. "256M")."""
        pass


class MemoryBudgetInterface(ABC):
    """Interface for the process memory ceiling and its current usage."""

    @abstractmethod
    def limit(self) -> "int | _Unlimited":
        """Returns the ceiling in bytes, or UNLIMITED."""
        pass

    @abstractmethod
    def current_usage(self) -> int:
        """Returns a snapshot of the current usage in bytes."""
        pass


class DecodeCostInterface(ABC):
    """Interface for predicting decode memory from image headers."""

    @abstractmethod
    def estimate(self, path: str) -> MemoryEstimate:
        """
        Estimates the peak memory needed to decode an image.

        Args:
            path: Absolute path of the image.

        Returns:
            MemoryEstimate; zero when the file or its dimensions are unknown.
        """
        pass
