"""
CACHE PURGE POLICY
==================

Purpose
-------
Derivatives are disposable: every file below {media_base_dir}/cache can be
rendered again from its source. Purging the cache is the only way the
resolver ever deletes files.

Semantics
---------
- Scope is either the whole cache directory or one store scope
  (cache/{store_id}).
- Files are removed first, then empty directories bottom-up.
- Originals and placeholders are never touched.

Safety rules
------------
- Never delete files outside the cache directory
- Resolve paths before deletion (no symlink escapes)
- Missing files are logged, not raised
- dry_run reports what would be removed without touching the disk
"""

import logging
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


def _safe_delete(abs_path: Path, cache_dir: Path) -> str:
    """
    Safely deletes a file at absolute path.
    Verifies path is within cache_dir.
    """
    try:
        resolved = abs_path.resolve()
        cache_dir = cache_dir.resolve()

        if not resolved.is_relative_to(cache_dir):
            logger.error(f"Refusing to delete outside cache directory: {resolved}")
            return "error"

    except OSError as e:
        logger.error(f"Path verification error for {abs_path}: {e}")
        return "error"

    try:
        if resolved.exists():
            resolved.unlink()
            return "deleted"
        else:
            logger.warning(f"File not found for deletion: {resolved}")
            return "missing"
    except OSError as e:
        logger.error(f"Failed to delete file: {resolved} ({e})")
        return "error"


def purge_cache(cache_dir: Path, scope: Path = None, dry_run: bool = False) -> dict[str, Any]:
    """
    Removes derivative files below scope (default: the whole cache_dir).

    Returns:
        Stats dict: deleted, missing, errors, would_delete (dry run only).
    """
    cache_dir = Path(cache_dir)
    scope = Path(scope) if scope is not None else cache_dir

    stats = {"deleted": 0, "missing": 0, "errors": 0}
    if not scope.exists():
        logger.info(f"Cache scope does not exist, nothing to purge: {scope}")
        return stats

    files = [p for p in scope.rglob("*") if p.is_file() or p.is_symlink()]
    if dry_run:
        stats["would_delete"] = len(files)
        return stats

    for file_path in files:
        result = _safe_delete(file_path, cache_dir)
        if result == "deleted":
            stats["deleted"] += 1
        elif result == "missing":
            stats["missing"] += 1
        else:
            stats["errors"] += 1

    # Deepest directories first so parents are empty when reached.
    directories = sorted(
        (p for p in scope.rglob("*") if p.is_dir()),
        key=lambda p: len(p.parts),
        reverse=True,
    )
    for directory in directories:
        try:
            directory.rmdir()
        except OSError:
            logger.debug(f"Keeping non-empty cache directory: {directory}")
    if scope != cache_dir:
        try:
            scope.rmdir()
        except OSError:
            logger.debug(f"Keeping non-empty cache directory: {scope}")

    logger.info(
        f"Cache purge finished for {scope}: {stats['deleted']} deleted, "
        f"{stats['missing']} missing, {stats['errors']} errors"
    )
    return stats
