"""
Logging for the products_api package.

All module loggers hang off the ``products_api`` logger, which gets a single
stdout handler the first time any of them is requested.
"""
import logging
import sys
from products_api.config import get_settings

ROOT_LOGGER = "products_api"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(logging.DEBUG if get_settings().DEBUG else logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; names outside the package are nested under it"""
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
