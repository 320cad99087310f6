"""
Utility package for output batching and logging.
"""

from .append_buffer import AppendBuffer
from .logger import setup_logger

__all__ = [
    'AppendBuffer',
    'setup_logger'
]
