"""Playback/task queue with a current head, repeat modes and index-safe removal."""

from play_queue.log_config import setup_logging
from play_queue.queue import (
    InvalidArgument,
    Queue,
    RepeatMode,
)
from play_queue.version import __version__

__all__ = [
    'InvalidArgument',
    'Queue',
    'RepeatMode',
    '__version__',
    'setup_logging',
]
