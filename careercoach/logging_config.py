"""Logging setup shared by the CLI and the API.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed once, here, by whichever entry point starts the process.
"""

from __future__ import annotations

import logging
from typing import Optional

from careercoach.config import settings

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_KV_FORMAT = 'ts=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stderr handler to the ``careercoach`` logger tree.

    Calling it again only updates the level, so the CLI callback and the API
    factory can both call it without duplicating output.
    """
    root = logging.getLogger("careercoach")
    root.setLevel((level or settings.log_level).upper())

    if root.handlers:
        return

    handler = logging.StreamHandler()
    fmt = _KV_FORMAT if settings.log_format == "logfmt" else _TEXT_FORMAT
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
