"""
Unit tests for the decode cost estimator and header reading.
"""

import struct
import zlib

from PIL import Image

from resolver.interfaces.storage import FileSystemInterface, ImageHeader
from resolver.interfaces.memory import UNLIMITED
from resolver.services.decode_cost_service import DecodeCostService
from resolver.services.filesystem_service import LocalFileSystem
from resolver.services.memory_service import parse_memory_limit
from resolver.source_resolver import admits
from utils.image_ops import mode_bits, read_image_header


class _HeaderFileSystem(FileSystemInterface):
    """Every path exists and reports the given header."""

    def __init__(self, header):
        self.header = header
        self.header_reads = 0

    def exists(self, path):
        return True

    def is_regular_file(self, path):
        return True

    def read_header(self, path):
        self.header_reads += 1
        return self.header


def _write_image(path, mode, size, fmt):
    Image.new(mode, size).save(path, format=fmt)
    return str(path)


def _png_chunk(chunk_type, data):
    return (
        struct.pack(">I", len(data))
        + chunk_type
        + data
        + struct.pack(">I", zlib.crc32(chunk_type + data) & 0xFFFFFFFF)
    )


def _write_png_header(path, width, height):
    """Writes an RGB PNG that declares its size but carries no pixel data."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", b"")
        + _png_chunk(b"IEND", b"")
    )
    return str(path)


class TestCostFormula:
    """Tests for the estimate arithmetic."""

    def test_jpeg_rgb_example(self):
        fs = _HeaderFileSystem(ImageHeader(width=100, height=100, bits_per_channel=8, channels=3))
        assert DecodeCostService(fs).estimate("/img.jpg").bytes == 157635

    def test_missing_channels_assume_rgba(self):
        fs = _HeaderFileSystem(ImageHeader(width=100, height=100, bits_per_channel=8))
        # ceil((100*100*8*4/8 + 65536) * 1.65) = ceil(174134.4)
        assert DecodeCostService(fs).estimate("/img.png").bytes == 174135

    def test_missing_bits_assume_eight(self):
        fs = _HeaderFileSystem(ImageHeader(width=100, height=100, channels=3))
        assert DecodeCostService(fs).estimate("/img.jpg").bytes == 157635

    def test_constants_are_configurable(self):
        fs = _HeaderFileSystem(ImageHeader(width=10, height=10, bits_per_channel=8, channels=1))
        service = DecodeCostService(fs, overhead_bytes=0, safety_multiplier=2.0)
        assert service.estimate("/img.jpg").bytes == 200

    def test_larger_image_costs_more(self):
        small = DecodeCostService(_HeaderFileSystem(ImageHeader(width=10, height=10)))
        large = DecodeCostService(_HeaderFileSystem(ImageHeader(width=1000, height=10)))
        assert large.estimate("/a").bytes > small.estimate("/a").bytes


class TestUnknownCost:
    """Unknown files and dimensions cost nothing."""

    def test_missing_file(self, tmp_path):
        service = DecodeCostService(LocalFileSystem())
        assert service.estimate(str(tmp_path / "missing.jpg")).bytes == 0

    def test_directory(self, tmp_path):
        service = DecodeCostService(LocalFileSystem())
        assert service.estimate(str(tmp_path)).bytes == 0

    def test_empty_path(self):
        assert DecodeCostService(LocalFileSystem()).estimate("").bytes == 0

    def test_zero_dimensions(self):
        fs = _HeaderFileSystem(ImageHeader(width=0, height=100))
        assert DecodeCostService(fs).estimate("/img.jpg").bytes == 0

    def test_unreadable_header(self):
        fs = _HeaderFileSystem(None)
        assert DecodeCostService(fs).estimate("/img.jpg").bytes == 0

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.jpg"
        path.write_text("not an image")
        assert DecodeCostService(LocalFileSystem()).estimate(str(path)).bytes == 0


class TestReadImageHeader:
    """Tests for Pillow-based header reads."""

    def test_jpeg_reports_components(self, tmp_path):
        path = _write_image(tmp_path / "a.jpg", "RGB", (100, 100), "JPEG")
        header = read_image_header(path)
        assert (header.width, header.height) == (100, 100)
        assert header.channels == 3
        assert header.bits_per_channel == 8
        assert header.format == "JPEG"

    def test_grayscale_jpeg(self, tmp_path):
        path = _write_image(tmp_path / "g.jpg", "L", (20, 10), "JPEG")
        header = read_image_header(path)
        assert header.channels == 1

    def test_png_reports_no_channels(self, tmp_path):
        path = _write_image(tmp_path / "a.png", "RGBA", (30, 40), "PNG")
        header = read_image_header(path)
        assert (header.width, header.height) == (30, 40)
        assert header.channels is None

    def test_gif_reports_rgb(self, tmp_path):
        path = _write_image(tmp_path / "a.gif", "P", (8, 8), "GIF")
        assert read_image_header(path).channels == 3

    def test_garbage_returns_none(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n garbage")
        assert read_image_header(path) is None

    def test_real_jpeg_estimate(self, tmp_path):
        path = _write_image(tmp_path / "a.jpg", "RGB", (100, 100), "JPEG")
        assert DecodeCostService(LocalFileSystem()).estimate(path).bytes == 157635

    def test_mode_bits(self):
        assert mode_bits("RGB") == 8
        assert mode_bits("1") == 1
        assert mode_bits("I;16") == 16
        assert mode_bits("F") == 32


class TestOversizedImages:
    """Images beyond Pillow's open limit still report their real cost."""

    def test_header_of_oversized_png(self, tmp_path):
        path = _write_png_header(tmp_path / "huge.png", 20000, 20000)
        header = read_image_header(path)
        assert (header.width, header.height) == (20000, 20000)
        assert header.format == "PNG"
        assert header.channels is None

    def test_oversized_png_is_estimated(self, tmp_path):
        path = _write_png_header(tmp_path / "huge.png", 20000, 20000)
        service = DecodeCostService(LocalFileSystem())
        assert service.estimate(path).bytes == service.compute(20000, 20000, 8, 4)

    def test_more_pixels_never_flip_to_admitted(self, tmp_path):
        limit = parse_memory_limit("256M")
        assert limit is not UNLIMITED
        service = DecodeCostService(LocalFileSystem())
        large = service.estimate(_write_png_header(tmp_path / "large.png", 9000, 9000)).bytes
        huge = service.estimate(_write_png_header(tmp_path / "huge.png", 20000, 20000)).bytes

        assert huge > large
        assert not admits(0, large, limit)
        assert not admits(0, huge, limit)
