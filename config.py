# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

_config = None


def _env_int(name, default):
    try:
        return int(float(os.getenv(name, default)))
    except (TypeError, ValueError):
        return default


def _env_float(name, default):
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    media_base_dir = os.getenv("MEDIA_BASE_DIR", "media/catalog/product")

    config = {
        # General Settings
        "DEBUG_MODE": os.getenv("DEBUG_MODE", "False").lower() == "true",
        "LOG_LEVEL": os.getenv("LOG_LEVEL"),

        # Media and Cache Settings
        "MEDIA_BASE_DIR": media_base_dir,
        "STORE_ID": os.getenv("STORE_ID", "1"),
        "STORE_SETTINGS_FILE": os.getenv(
            "STORE_SETTINGS_FILE", os.path.join(media_base_dir, "store_settings.yaml")
        ),

        # Design (skin) Settings
        "SKIN_BASE_DIR": os.getenv("SKIN_BASE_DIR", "skin/frontend"),
        "DESIGN_PACKAGE": os.getenv("DESIGN_PACKAGE", "default"),
        "DESIGN_THEME": os.getenv("DESIGN_THEME", "default"),

        # Memory Admission Settings
        # None means: ask the process rlimit instead.
        "MEMORY_LIMIT": os.getenv("MEMORY_LIMIT"),
        "DECODE_OVERHEAD_BYTES": _env_int("DECODE_OVERHEAD_BYTES", 65536),
        "DECODE_SAFETY_MULTIPLIER": _env_float("DECODE_SAFETY_MULTIPLIER", 1.65),
    }
    return config


def get_config():
    """Returns the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config():
    """Drops the cached configuration and loads it again from the environment."""
    global _config
    _config = None
    return get_config()


if __name__ == "__main__":
    # For testing purposes, print the configuration
    config = load_config()
    from pprint import pprint

    pprint(config)
