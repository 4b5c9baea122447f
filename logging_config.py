# logging_config.py
import logging
from config import get_config

config = get_config()
DEBUG_MODE = config["DEBUG_MODE"]
LOG_LEVEL = config.get("LOG_LEVEL") or ("DEBUG" if DEBUG_MODE else "INFO")

# Configure logging once for the entire application.
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Pillow logs every parsed chunk at DEBUG; header reads would flood the output.
logging.getLogger("PIL").setLevel(logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger with the given name.
    """
    return logging.getLogger(name)
