"""
Logging setup for the editor.

The terminal's stdout carries the rendered frames, so log records go to a
file or nowhere.
"""

import logging
from typing import Optional

LOGGER_NAME = "rawedit"


def setup_logger(log_file: Optional[str] = None, name: str = LOGGER_NAME) -> logging.Logger:
    """
    Configure the package logger.

    Format: Date/Time - File - Function - Line - Message
    """
    logger = logging.getLogger(name)

    # Prevent adding multiple handlers if setup is called multiple times
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s   %(filename)s   %(funcName)s   %(lineno)d   %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger
