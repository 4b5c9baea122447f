"""
Cache Key Service - Transform Parameter Digest.

Turns a TransformSpec into the directory name that separates renderings
of the same source. Pure function, no I/O.
"""

import hashlib

from resolver.interfaces.resolution import TransformSpec

KEY_SEPARATOR = "_"


def rgb_to_string(rgb) -> str:
    """Renders a background color as zero-padded hex, (255, 0, 16) -> "ff0010"."""
    return "".join("null" if channel is None else "%02x" % int(channel) for channel in rgb)


def _optional(value) -> str:
    return "" if value is None else str(value)


class CacheKeyService:
    """
    Derives the cache key of a TransformSpec.

    Parts are joined with "_" in a fixed order and digested with MD5. The
    digest only has to keep renderings apart; it protects nothing, and
    switching it would orphan every existing cache directory.
    """

    def parameter_parts(self, transform: TransformSpec) -> list[str]:
        """Returns the ordered parameter strings that feed the digest."""
        parts = [
            ("" if transform.keep_aspect_ratio else "non") + "proportional",
            ("" if transform.keep_frame else "no") + "frame",
            ("" if transform.keep_transparency else "no") + "transparency",
            ("do" if transform.constrain_only else "not") + "constrainonly",
            rgb_to_string(transform.background_color),
            f"angle{transform.angle}",
            f"quality{transform.quality}",
        ]

        watermark = transform.watermark
        if watermark is not None and watermark.file:
            parts.extend(
                [
                    watermark.file,
                    str(watermark.opacity),
                    watermark.position,
                    _optional(watermark.width),
                    _optional(watermark.height),
                ]
            )
        return parts

    def derive(self, transform: TransformSpec) -> str:
        """Returns the 32-character hex cache key."""
        joined = KEY_SEPARATOR.join(self.parameter_parts(transform))
        return hashlib.md5(joined.encode("utf-8")).hexdigest()
