"""Centralized logging configuration.

Console output always; a log file as well when ``Settings.log_file`` is
set.  Modules log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys

from storefront.infrastructure.config import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(settings: Settings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Reduce verbosity from the HTTP server
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
