"""
Memory Service - Process Memory Ceiling and Usage.

Implements MemoryBudgetInterface on top of a MemoryAccountingInterface.
The budget is a pure query; nothing is reserved or cached between calls.
"""

import os
import re
import resource

import psutil

from config import get_config
from logging_config import get_logger
from resolver.interfaces.memory import (
    UNLIMITED,
    MemoryAccountingInterface,
    MemoryBudgetInterface,
)

logger = get_logger(__name__)

DEFAULT_MEMORY_LIMIT = 128 * 1024 * 1024  # 128M
NO_LIMIT = -1

_UNIT_FACTORS = {
    "": 1,
    "K": 1024,
    "M": 1024 * 1024,
    "G": 1024 * 1024 * 1024,
}
_LIMIT_PATTERN = re.compile(r"^(-?\d+)([KMG]?)$")


def parse_memory_limit(value: str | None):
    """
    Parses a memory ceiling such as "256M", "1g", "512k" or "1048576".

    Args:
        value: Raw limit string; base-1024 K/M/G suffix, case-insensitive.

    Returns:
        Limit in bytes, UNLIMITED for "-1", or DEFAULT_MEMORY_LIMIT when the
        value is empty or cannot be parsed.
    """
    raw = (value or "").strip().upper()
    if not raw:
        logger.warning(
            f"Memory limit is not configured, using default of {DEFAULT_MEMORY_LIMIT} bytes"
        )
        return DEFAULT_MEMORY_LIMIT

    match = _LIMIT_PATTERN.match(raw)
    if not match:
        logger.warning(
            f"Unparseable memory limit {value!r}, using default of {DEFAULT_MEMORY_LIMIT} bytes"
        )
        return DEFAULT_MEMORY_LIMIT

    number = int(match.group(1))
    if number == NO_LIMIT and not match.group(2):
        return UNLIMITED
    if number < 0:
        logger.warning(
            f"Negative memory limit {value!r}, using default of {DEFAULT_MEMORY_LIMIT} bytes"
        )
        return DEFAULT_MEMORY_LIMIT
    return number * _UNIT_FACTORS[match.group(2)]


class ProcessMemoryAccounting(MemoryAccountingInterface):
    """
    Memory accounting of the running Python process.

    Usage is the resident set size reported by psutil. The ceiling is the
    MEMORY_LIMIT setting; when unset, the address-space rlimit is used
    ("-1" when the process has none).
    """

    def __init__(self, memory_limit: str | None = None):
        self._memory_limit = memory_limit
        self._process = psutil.Process(os.getpid())

    def current_allocated_bytes(self) -> int:
        return self._process.memory_info().rss

    def configured_memory_limit_string(self) -> str | None:
        if self._memory_limit is not None:
            return self._memory_limit
        configured = get_config().get("MEMORY_LIMIT")
        if configured is not None:
            return configured

        soft, _hard = resource.getrlimit(resource.RLIMIT_AS)
        if soft == resource.RLIM_INFINITY:
            return str(NO_LIMIT)
        return str(soft)


class MemoryBudgetService(MemoryBudgetInterface):
    """
    Reads the memory ceiling and the live usage of the process.

    Both values are read on every call: concurrent requests see the same
    racy snapshot, which is accepted for a best-effort throttle.
    """

    def __init__(self, accounting: MemoryAccountingInterface | None = None):
        self.accounting = accounting or ProcessMemoryAccounting()

    def limit(self):
        return parse_memory_limit(self.accounting.configured_memory_limit_string())

    def current_usage(self) -> int:
        return self.accounting.current_allocated_bytes()
