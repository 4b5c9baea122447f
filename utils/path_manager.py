from pathlib import Path


# Directory structure:
# media/catalog/product/
# ├── a/b/
# │   └── filename           (originals, referenced as "/a/b/filename")
# ├── placeholder/
# │   └── stores/1/image.jpg (configured placeholders)
# └── cache/
#     └── {store_id}/
#         └── {destination_subdir}/
#             └── [{width}x{height}/]
#                 └── {cache_key}/a/b/filename
#
# skin/frontend/
# └── {package}/{theme}/images/catalog/product/placeholder/{destination_subdir}.jpg

CACHE_DIR_NAME = "cache"


class PathManager:
    def __init__(self, media_base_dir: str, skin_base_dir: str = "skin/frontend"):
        self.media_base_dir = Path(media_base_dir)
        self.cache_dir = self.media_base_dir / CACHE_DIR_NAME
        self.skin_base_dir = Path(skin_base_dir)

    # -------------------------------------------------------------------------
    # Cache Path Methods
    # -------------------------------------------------------------------------
    def get_store_cache_dir(self, store_id) -> Path:
        """Returns cache/{store_id}, without creating it."""
        return self.cache_dir / str(store_id)

    def ensure_parent_dir(self, file_path: str) -> Path:
        """Creates the directory a derivative will be written into."""
        parent = Path(file_path).parent
        parent.mkdir(parents=True, exist_ok=True)
        return parent

    # -------------------------------------------------------------------------
    # Skin Path Methods
    # -------------------------------------------------------------------------
    def get_skin_dir(self, package: str, theme: str) -> Path:
        """Returns the skin base directory of a design package/theme."""
        return self.skin_base_dir / package / theme


# Global Instance - to be initialized by app with config["MEDIA_BASE_DIR"]
_instance = None


def get_path_manager(media_base_dir: str = None, skin_base_dir: str = None) -> PathManager:
    global _instance
    if _instance is None:
        from config import get_config

        config = get_config()
        if media_base_dir is None:
            media_base_dir = config["MEDIA_BASE_DIR"]
        if skin_base_dir is None:
            skin_base_dir = config["SKIN_BASE_DIR"]
        _instance = PathManager(media_base_dir, skin_base_dir)
    return _instance

