"""
Derivative Resolver Core Package.

This package contains the entry points used by callers of the resolver,
separated from the resolver internals. Resolution, cost estimation and
cache maintenance are coordinated through core modules.

ARCHITECTURE RULES:
- core/ modules may only import from:
  - Python standard library
  - utils/ (low-level adapters)
  - resolver/ (for resolution orchestration)
  - config (for global configuration)

- core/ modules MUST NOT import from:
  - main (the CLI)
  - any render pipeline implementation

- All new business logic should be placed here, not in main.py
"""

__all__ = [
    "resolve_core",
    "settings_core",
]
