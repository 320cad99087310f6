"""
Terminal mode controller.

Switches the controlling terminal into raw mode for the lifetime of a
``with RawTerminal():`` block and guarantees the original attributes are put
back on every way out of it.
"""

import atexit
import logging
import os
import re
import sys
import termios
from typing import List, Optional, Tuple, Final

logger = logging.getLogger(__name__)

CLEAR_SCREEN: Final[bytes] = b'\x1b[2J'
CURSOR_HOME: Final[bytes] = b'\x1b[H'
CURSOR_FAR_BOTTOM_RIGHT: Final[bytes] = b'\x1b[999C\x1b[999B'
CURSOR_POSITION_REPORT: Final[bytes] = b'\x1b[6n'

CURSOR_REPORT_PATTERN: Final = re.compile(rb'^\x1b\[(\d+);(\d+)$')

# termios.tcgetattr list indices
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)


class TerminalError(Exception):
    """Unrecoverable terminal failure."""


def make_raw(attrs: List, read_timeout: int = 1) -> List:
    """
    Derive raw-mode attributes from a tcgetattr() result.

    Args:
        attrs: Attribute list as returned by termios.tcgetattr
        read_timeout: Read timeout in tenths of a second

    Returns:
        A new attribute list; attrs is not modified
    """

    new = list(attrs)
    new[CC] = list(attrs[CC])

    # no break SIGINT, no CR->NL, no parity check, no 8th bit strip, no XON/XOFF
    new[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    new[OFLAG] &= ~termios.OPOST
    new[CFLAG] |= termios.CS8
    # no echo, no canonical mode, no Ctrl-V, no Ctrl-C/Ctrl-Z signals
    new[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)

    new[CC][termios.VMIN] = 0
    new[CC][termios.VTIME] = read_timeout

    return new


def parse_cursor_report(report: bytes) -> Tuple[int, int]:
    """Parse an ``ESC [ rows ; cols`` cursor position report (trailing R removed)."""

    match = CURSOR_REPORT_PATTERN.match(report)
    if not match:
        raise TerminalError(f"Malformed cursor position report: {report!r}")

    return int(match.group(1)), int(match.group(2))


class RawTerminal:
    """Owns the terminal file descriptors and their original attributes."""

    def __init__(self, stdin_fd: Optional[int] = None, stdout_fd: Optional[int] = None,
                 read_timeout: int = 1) -> None:
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self.read_timeout = read_timeout
        self._original_attrs: Optional[List] = None

    @property
    def raw(self) -> bool:
        return self._original_attrs is not None

    def enable_raw_mode(self) -> None:
        """Capture the current attributes and install raw mode."""

        try:
            self._original_attrs = termios.tcgetattr(self.stdin_fd)
        except termios.error as e:
            raise TerminalError(f"tcgetattr: {e}") from e

        atexit.register(self.disable_raw_mode)

        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH,
                              make_raw(self._original_attrs, self.read_timeout))
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e

        logger.debug("Raw mode enabled on fd %d", self.stdin_fd)

    def disable_raw_mode(self) -> None:
        """Restore the attributes captured by enable_raw_mode()."""

        if self._original_attrs is None:
            return

        attrs, self._original_attrs = self._original_attrs, None
        atexit.unregister(self.disable_raw_mode)

        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            self.reset_screen()
            raise TerminalError(f"tcsetattr: {e}") from e

        logger.debug("Raw mode disabled on fd %d", self.stdin_fd)

    def reset_screen(self) -> None:
        """Clear the screen and home the cursor."""

        try:
            self.write(CLEAR_SCREEN + CURSOR_HOME)
        except OSError:
            logger.exception("Could not reset screen")

    def __enter__(self) -> 'RawTerminal':
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.reset_screen()
        self.disable_raw_mode()

    def read_byte(self) -> Optional[int]:
        """Read one byte. Returns None when the read times out."""

        try:
            data = os.read(self.stdin_fd, 1)
        except BlockingIOError:
            return None
        except OSError as e:
            raise TerminalError(f"read: {e}") from e

        if not data:
            return None

        return data[0]

    def write(self, data: bytes) -> None:
        """Write all of data to the terminal."""

        view = memoryview(data)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]

    def get_cursor_position(self) -> Tuple[int, int]:
        """Ask the terminal where the cursor is."""

        self.write(CURSOR_POSITION_REPORT)

        report = bytearray()
        while len(report) < 31:
            byte = self.read_byte()
            if byte is None or byte == ord('R'):
                break
            report.append(byte)

        return parse_cursor_report(bytes(report))

    def get_window_size(self) -> Tuple[int, int]:
        """
        Get the terminal size as (rows, cols).

        Raises:
            TerminalError: If neither the size query nor the cursor fallback works.
        """

        try:
            size = os.get_terminal_size(self.stdout_fd)
            if size.columns != 0:
                logger.debug("Window size %dx%d", size.columns, size.lines)
                return size.lines, size.columns
        except OSError:
            pass

        try:
            self.write(CURSOR_FAR_BOTTOM_RIGHT)
            rows, cols = self.get_cursor_position()
        except (OSError, TerminalError) as e:
            raise TerminalError(f"getWindowSize: {e}") from e

        logger.debug("Window size %dx%d (cursor report)", cols, rows)
        return rows, cols
