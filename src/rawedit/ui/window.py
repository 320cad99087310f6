"""
Window management module: cursor and viewport state plus frame rendering.
"""

import os
import time
from typing import Final, Optional, TYPE_CHECKING

from .. import __version__
from ..config import EditorConfig
from ..core.document import Document
from ..utils.append_buffer import AppendBuffer

if TYPE_CHECKING:
    from .terminal import RawTerminal

HIDE_CURSOR: Final[bytes] = b'\x1b[?25l'
SHOW_CURSOR: Final[bytes] = b'\x1b[?25h'
CURSOR_HOME: Final[bytes] = b'\x1b[H'
CLEAR_LINE: Final[bytes] = b'\x1b[K'
REVERSE_VIDEO: Final[bytes] = b'\x1b[7m'
RESET_ATTRIBUTES: Final[bytes] = b'\x1b[m'
NEWLINE: Final[bytes] = b'\r\n'

EMPTY_ROW_MARKER: Final[bytes] = b'~'
WELCOME_MESSAGE: Final[str] = f"rawedit -- version {__version__}"
STATUS_FILENAME_WIDTH: Final[int] = 20
STATUS_MESSAGE_MAX: Final[int] = 79

# Status bar and message bar
RESERVED_ROWS: Final[int] = 2


class WindowManager:
    """Holds the cursor, the viewport and the status message, and draws frames."""

    def __init__(self, terminal: 'RawTerminal', document: Document,
                 height: int, width: int, config: Optional[EditorConfig] = None) -> None:
        self.terminal = terminal
        self.document = document
        self.config = config or EditorConfig()

        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.rowoffset = 0
        self.coloffset = 0
        self.screenrows = max(0, height - RESERVED_ROWS)
        self.screencols = width

        self.status_message = ""
        self.status_message_time = 0.0

    def set_status_message(self, fmt: str, *args: object) -> None:
        """Set the message bar text, printf-style, and restart its timer."""

        message = fmt % args if args else fmt
        self.status_message = message[:STATUS_MESSAGE_MAX]
        self.status_message_time = time.time()

    def scroll(self) -> None:
        """Adjust the offsets so the cursor is inside the viewport."""

        self.rx = 0
        row = self.document.get_row(self.cy)
        if row is not None:
            self.rx = row.cx_to_rx(self.cx)

        if self.cy < self.rowoffset:
            self.rowoffset = self.cy
        if self.cy >= self.rowoffset + self.screenrows:
            self.rowoffset = self.cy - self.screenrows + 1
        if self.rx < self.coloffset:
            self.coloffset = self.rx
        if self.rx >= self.coloffset + self.screencols:
            self.coloffset = self.rx - self.screencols + 1

    def _draw_welcome(self, ab: AppendBuffer) -> None:
        welcome = WELCOME_MESSAGE.encode()[:self.screencols]
        padding = (self.screencols - len(welcome)) // 2
        if padding:
            ab.append(EMPTY_ROW_MARKER)
            padding -= 1

        ab.append(b' ' * padding)
        ab.append(welcome)

    def draw_rows(self, ab: AppendBuffer) -> None:
        """Draw the visible slice of the document, one line per screen row."""

        for y in range(self.screenrows):
            filerow = y + self.rowoffset
            row = self.document.get_row(filerow)

            if row is not None:
                ab.append(row.render[self.coloffset:self.coloffset + self.screencols])
            elif self.document.numrows == 0 and y == self.screenrows // 3:
                self._draw_welcome(ab)
            else:
                ab.append(EMPTY_ROW_MARKER)

            ab.append(CLEAR_LINE)
            ab.append(NEWLINE)

    def draw_status_bar(self, ab: AppendBuffer) -> None:
        """Draw the reverse-video status bar."""

        doc = self.document
        # Filenames may hold undecodable bytes, so the bar is built as bytes
        name = os.fsencode(doc.filename)[:STATUS_FILENAME_WIDTH] if doc.filename else b"[No Name]"
        status = name + b" - %d lines" % doc.numrows
        if doc.modified:
            status += b" (modified)"

        left = status[:self.screencols]
        right = b"%d/%d" % (self.cy + 1, doc.numrows)
        gap = self.screencols - len(left)

        ab.append(REVERSE_VIDEO)
        ab.append(left)
        if gap >= len(right):
            ab.append(b' ' * (gap - len(right)))
            ab.append(right)
        else:
            ab.append(b' ' * gap)
        ab.append(RESET_ATTRIBUTES)
        ab.append(NEWLINE)

    def message_visible(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time()

        return bool(self.status_message) and now - self.status_message_time < self.config.message_timeout

    def draw_message_bar(self, ab: AppendBuffer) -> None:
        ab.append(CLEAR_LINE)
        if self.message_visible():
            ab.append(self.status_message.encode()[:self.screencols])

    def compose_frame(self) -> bytes:
        """Scroll and build the bytes of one complete frame."""

        self.scroll()

        ab = AppendBuffer()
        ab.append(HIDE_CURSOR)
        ab.append(CURSOR_HOME)

        self.draw_rows(ab)
        self.draw_status_bar(ab)
        self.draw_message_bar(ab)

        cursor_y = (self.cy - self.rowoffset) + 1
        cursor_x = (self.rx - self.coloffset) + 1
        ab.append(f"\x1b[{cursor_y};{cursor_x}H".encode())
        ab.append(SHOW_CURSOR)

        return ab.getvalue()

    def refresh_screen(self) -> None:
        """Render a frame and write it to the terminal in one call."""

        self.terminal.write(self.compose_frame())
