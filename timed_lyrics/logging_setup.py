from __future__ import annotations

import logging
import os
import sys


def _level_from_env(default: int) -> int:
    name = os.getenv("TIMED_LYRICS_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_logging(debug: bool) -> None:
    # stdout carries command output (exported lyrics, JSON), logs go to stderr
    level = _level_from_env(logging.DEBUG if debug else logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
