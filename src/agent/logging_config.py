# src/agent/logging_config.py
"""
Central logging configuration for the navigation tools.

Call configure_logging() once from an entrypoint (cli.navigate does):

    from agent.logging_config import configure_logging
    configure_logging("DEBUG")

Library modules only ever do `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging
import sys
from typing import Union


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Attach one stdout handler to the root logger, unless one already exists.

    Args:
        level: logging level as int (logging.DEBUG) or name ("debug").
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
