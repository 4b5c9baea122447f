import struct
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from resolver.interfaces.storage import ImageHeader


# Bit depth per channel for Pillow modes that are not 8 bits wide.
_MODE_BITS = {
    "1": 1,
    "I": 32,
    "F": 32,
    "I;16": 16,
    "I;16B": 16,
    "I;16L": 16,
    "I;16N": 16,
}


def mode_bits(mode: str) -> int:
    """Returns the bit depth per channel of a Pillow image mode."""
    return _MODE_BITS.get(mode, 8)


def mode_channels(image_format: str | None, mode: str) -> int | None:
    """
    Returns the channel count the way image headers report it.

    JPEG headers carry the component count, GIF is always reported as RGB.
    Other formats report nothing, so the caller has to assume the worst case.
    """
    if image_format == "JPEG":
        return Image.getmodebands(mode)
    if image_format == "GIF":
        return 3
    return None


def _header_from_image(image) -> ImageHeader:
    width, height = image.size
    return ImageHeader(
        width=width,
        height=height,
        bits_per_channel=mode_bits(image.mode),
        channels=mode_channels(image.format, image.mode),
        format=image.format,
    )


def _open_without_pixel_limit(path: Path) -> ImageHeader | None:
    """
    Parses the header through the format plugins directly.

    Image.open refuses images above twice MAX_IMAGE_PIXELS after it has
    already parsed their header. The plugin factories do the same parsing
    without that limit and without touching the global setting.
    """
    Image.init()
    with open(path, "rb") as fp:
        prefix = fp.read(16)
        for format_id in Image.ID:
            factory, accept = Image.OPEN[format_id]
            if accept is not None and not accept(prefix):
                continue
            fp.seek(0)
            try:
                image = factory(fp, str(path))
            except (SyntaxError, IndexError, TypeError, ValueError, struct.error):
                continue
            return _header_from_image(image)
    return None


def read_image_header(image_path) -> ImageHeader | None:
    """
    Reads dimensions and depth of an image without decoding pixel data.

    Pillow's Image.open is lazy: only the header is parsed until load()
    is called, which never happens here. Images too large for Image.open
    are read again through their format plugin so their size is still known.

    Args:
        image_path: Path to the image file.

    Returns:
        ImageHeader, or None if the file is not a readable image.
    """
    path = Path(image_path)
    try:
        with Image.open(path) as image:
            return _header_from_image(image)
    except Image.DecompressionBombError:
        try:
            return _open_without_pixel_limit(path)
        except OSError:
            return None
    except (OSError, UnidentifiedImageError, ValueError):
        return None
