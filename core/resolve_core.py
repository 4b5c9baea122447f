"""
Resolve Core - Derivative Resolution Entry Points.

Provides resolution, estimation and cache maintenance abstracted from
the CLI and from any render pipeline.
"""

from typing import Any

from resolver.interfaces.resolution import (
    DEFAULT_DESTINATION,
    ResolvedSource,
    TransformSpec,
    WatermarkSpec,
)
from resolver.resolver_manager import ResolverManager

_manager: ResolverManager | None = None


def get_resolver_manager() -> ResolverManager:
    """
    Get or create the process-wide ResolverManager.

    Returns:
        ResolverManager built from configuration
    """
    global _manager
    if _manager is None:
        _manager = ResolverManager()
    return _manager


def reset_resolver_manager() -> None:
    """Drops the process-wide manager so the next call rebuilds it."""
    global _manager
    _manager = None


def build_transform(params: dict[str, Any]) -> TransformSpec:
    """
    Builds a TransformSpec from a plain dict (CLI/JSON input).

    Args:
        params: Keys named like TransformSpec fields; "watermark" may be a
            dict with WatermarkSpec fields.

    Returns:
        TransformSpec
    """
    values = dict(params)
    watermark = values.pop("watermark", None)
    if isinstance(watermark, dict):
        watermark = WatermarkSpec(**watermark) if watermark.get("file") else None
    return TransformSpec(watermark=watermark, **values)


def resolve_source(
    requested_path: str | None,
    transform: TransformSpec,
    destination_subdir: str = DEFAULT_DESTINATION,
) -> ResolvedSource:
    """
    Resolve the source image and cache path of a derivative.

    Args:
        requested_path: Source path below the media base directory
        transform: Transform parameters
        destination_subdir: Derivative category

    Returns:
        ResolvedSource

    Raises:
        SourceNotFoundError: If no source or placeholder exists
    """
    return get_resolver_manager().resolve(requested_path, transform, destination_subdir)


def resolved_to_dict(resolved: ResolvedSource) -> dict[str, Any]:
    """Flattens a ResolvedSource for JSON output."""
    return {
        "absolute_path": resolved.source.absolute_path,
        "relative_path": resolved.source.relative_path,
        "is_placeholder": resolved.source.is_placeholder,
        "cache_path": resolved.cache_path,
        "is_cached": resolved.is_cached,
    }


def estimate_decode_cost(path: str) -> int:
    """
    Estimate the decode memory of an image file in bytes.

    Args:
        path: Absolute image path

    Returns:
        Estimated bytes (0 when unknown)
    """
    return get_resolver_manager().estimate(path).bytes


def clear_cache(store_id=None, dry_run: bool = False) -> dict[str, Any]:
    """
    Purge cached derivatives of one store or of all stores.

    Args:
        store_id: Store scope, or None for all stores
        dry_run: Only count files

    Returns:
        Purge statistics
    """
    return get_resolver_manager().clear_cache(store_id=store_id, dry_run=dry_run)
