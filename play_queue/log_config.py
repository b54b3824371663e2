"""Configure logging for the play_queue logger tree."""

import logging
import os
import sys

# Environment variable read when setup_logging() gets no explicit level.
LOG_LEVEL_ENV = "PLAY_QUEUE_LOG_LEVEL"


def _resolve_level(level: int | str | None) -> int:
    """Level from a name or number (either may come as a string); unknown names give INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    if level.strip().isdigit():
        return int(level)
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str | None = None, log_path: str | None = None) -> logging.Logger:
    """Configure the play_queue logger: stderr at level, plus log_path at DEBUG if given."""
    root = logging.getLogger("play_queue")
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_path:
        try:
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            root.addHandler(fh)
        except OSError:
            log_path = None

    eh = logging.StreamHandler(sys.stderr)
    eh.setLevel(_resolve_level(level))
    eh.setFormatter(fmt)
    root.addHandler(eh)

    root.debug("Logging started; file: %s", log_path or "(none)")
    return root
