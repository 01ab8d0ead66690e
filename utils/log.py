import logging
from typing import Optional

from domain.constants import LOG_LEVEL

_ROOT_NAME = "danceclub"
_root: Optional[logging.Logger] = None


def _configure_root() -> logging.Logger:
    global _root
    if _root is None:
        _root = logging.getLogger(_ROOT_NAME)
        _root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
        # Streamlit re-executes the script on every interaction; keep a single handler
        _root.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        _root.addHandler(handler)
        _root.propagate = False
    return _root


def get_logger(name: str = "") -> logging.Logger:
    """Get a child of the application logger. Configures it on first use."""
    root = _configure_root()
    return root.getChild(name) if name else root
