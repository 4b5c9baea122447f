"""
Filesystem Service - Local Disk Access.

Implements FileSystemInterface with os.path probes and Pillow header reads.
"""

import os

from resolver.interfaces.storage import FileSystemInterface, ImageHeader
from utils.image_ops import read_image_header


class LocalFileSystem(FileSystemInterface):
    """Read-only view of the local filesystem."""

    def exists(self, path: str) -> bool:
        return bool(path) and os.path.exists(path)

    def is_regular_file(self, path: str) -> bool:
        return bool(path) and os.path.isfile(path)

    def read_header(self, path: str) -> ImageHeader | None:
        return read_image_header(path)
