"""
Cache Path Service - Derivative Location.

The segment order below is a compatibility contract with every cache
written so far. Reordering it orphans existing derivatives.
"""

CACHE_SEGMENT = "cache"
PATH_SEPARATOR = "/"


def _dimension(value) -> str:
    return "" if value is None else str(value)


class CachePathService:
    """
    Composes cache paths:
    {base_dir}/cache/{store_id}/{destination_subdir}/[{width}x{height}/]{cache_key}{relative_path}

    Pure string composition; the filesystem is never touched.
    """

    def segments(
        self,
        base_dir: str,
        store_id,
        destination_subdir: str,
        width: int | None,
        height: int | None,
        cache_key: str,
    ) -> list[str]:
        """Returns the ordered directory segments of a cache path."""
        segments = [
            str(base_dir).rstrip(PATH_SEPARATOR),
            CACHE_SEGMENT,
            str(store_id),
            destination_subdir,
        ]
        if width or height:
            segments.append(f"{_dimension(width)}x{_dimension(height)}")
        segments.append(cache_key)
        return segments

    def resolve(
        self,
        base_dir: str,
        store_id,
        destination_subdir: str,
        width: int | None,
        height: int | None,
        cache_key: str,
        relative_path: str,
    ) -> str:
        """
        Builds the absolute cache path of a derivative.

        Args:
            base_dir: Media base directory (cache root parent).
            store_id: Store scope identifier.
            destination_subdir: Derivative category (e.g. "small_image").
            width: Target width or None.
            height: Target height or None.
            cache_key: Digest of the transform parameters.
            relative_path: Source path with a leading slash; appended verbatim.

        Returns:
            Cache file path as a string.
        """
        directory = PATH_SEPARATOR.join(
            self.segments(base_dir, store_id, destination_subdir, width, height, cache_key)
        )
        return directory + relative_path
