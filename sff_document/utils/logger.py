"""Central logging configuration for the SFF library."""
from __future__ import annotations

import logging
from typing import Optional

LIBRARY_LOGGER = "sff_document"

_DEFAULT_LEVEL = logging.INFO
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``sff_document`` hierarchy.

    Module names already inside the package are used as is. Anything else,
    including ``None``, is nested below the library logger so a single
    ``logging.getLogger("sff_document")`` controls all codec output.
    """
    if not name:
        name = LIBRARY_LOGGER
    elif name != LIBRARY_LOGGER and not name.startswith(LIBRARY_LOGGER + "."):
        name = f"{LIBRARY_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_DEFAULT_FORMAT)
    return logger
