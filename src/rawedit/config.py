"""
Editor settings with environment variable overrides.
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Final, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_TAB_STOP: Final[int] = 4
DEFAULT_QUIT_TIMES: Final[int] = 3
DEFAULT_MESSAGE_TIMEOUT: Final[int] = 5
DEFAULT_READ_TIMEOUT: Final[int] = 1

ENV_TAB_STOP: Final[str] = "RAWEDIT_TAB_STOP"
ENV_QUIT_TIMES: Final[str] = "RAWEDIT_QUIT_TIMES"
ENV_LOG_FILE: Final[str] = "RAWEDIT_LOG_FILE"


@dataclass
class EditorConfig:
    """Tunable editor settings."""

    tab_stop: int = DEFAULT_TAB_STOP
    quit_times: int = DEFAULT_QUIT_TIMES
    message_timeout: int = DEFAULT_MESSAGE_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT
    log_file: Optional[str] = None


def _positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default

    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default

    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> EditorConfig:
    """
    Build the editor configuration.

    Args:
        environ: Mapping to read overrides from. Defaults to os.environ.

    Returns:
        EditorConfig with defaults replaced by any valid overrides.
    """

    if environ is None:
        environ = os.environ

    overrides: Dict[str, object] = {
        "tab_stop": _positive_int(environ, ENV_TAB_STOP, DEFAULT_TAB_STOP),
        "quit_times": _positive_int(environ, ENV_QUIT_TIMES, DEFAULT_QUIT_TIMES),
    }

    log_file = environ.get(ENV_LOG_FILE)
    if log_file:
        overrides["log_file"] = log_file

    return EditorConfig(**overrides)
