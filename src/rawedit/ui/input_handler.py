"""
Input handler module for processing keyboard events.
"""

from typing import Callable, Dict, Final, Optional

from .keys import BACKSPACE, ENTER, ESCAPE, Key, KeyDecoder, ctrl_key, is_control
from .window import WindowManager


HELP_STATUS_MESSAGE: Final[str] = "HELP: Ctrl-S = save | Ctrl-Q = quit"
UNSAVED_CHANGES_STATUS_MESSAGE: Final[str] = (
    "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit."
)
SAVE_AS_PROMPT: Final[str] = "Save as: %s (ESC to cancel)"
SAVE_ABORTED_STATUS_MESSAGE: Final[str] = "Save aborted"
SAVED_STATUS_MESSAGE: Final[str] = "%d bytes written to disk"
SAVE_ERROR_STATUS_MESSAGE: Final[str] = "Can't save! I/O error: %s"

QUIT_KEY: Final[int] = ctrl_key('q')
SAVE_KEY: Final[int] = ctrl_key('s')
REDRAW_KEY: Final[int] = ctrl_key('l')
CTRL_H: Final[int] = ctrl_key('h')


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, window_manager: WindowManager, decoder: KeyDecoder) -> None:
        self.window_manager = window_manager
        self.decoder = decoder
        self.quit_times = window_manager.config.quit_times
        self.command_handlers: Dict[int, Callable[[], None]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the keyboard command handlers."""

        return {
            Key.ARROW_LEFT: self._move_left,
            Key.ARROW_RIGHT: self._move_right,
            Key.ARROW_UP: self._move_up,
            Key.ARROW_DOWN: self._move_down,
            Key.HOME: self._move_line_start,
            Key.END: self._move_line_end,
            Key.PAGE_UP: self._page_up,
            Key.PAGE_DOWN: self._page_down,

            Key.DELETE: self._delete_char,
            BACKSPACE: self._backspace,
            CTRL_H: self._backspace,
            ENTER: self._insert_newline,

            SAVE_KEY: self._save,
            REDRAW_KEY: self._ignore,
            ESCAPE: self._ignore,
        }

    def process_keypress(self) -> bool:
        """Read one key and handle it. Returns False if should quit."""

        return self.handle_input(self.decoder.read_key())

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        if ch == QUIT_KEY:
            return self._quit()

        handler = self.command_handlers.get(ch)
        if handler is not None:
            handler()
        else:
            self._insert_char(ch)

        self.quit_times = self.window_manager.config.quit_times
        return True

    def _ignore(self) -> None:
        pass

    def _quit(self) -> bool:
        """Quit, unless the document is dirty and confirmations are still owed."""

        if self.window_manager.document.modified and self.quit_times > 0:
            self.window_manager.set_status_message(UNSAVED_CHANGES_STATUS_MESSAGE, self.quit_times)
            self.quit_times -= 1
            return True

        return False

    def _insert_char(self, ch: int) -> None:
        """Insert a byte at the cursor."""

        wm = self.window_manager
        doc = wm.document

        if wm.cy == doc.numrows:
            doc.insert_row(doc.numrows, b'')

        doc.insert_char(wm.cy, wm.cx, ch)
        wm.cx += 1

    def _insert_newline(self) -> None:
        """Split the current row at the cursor."""

        wm = self.window_manager
        doc = wm.document

        if wm.cx == 0:
            doc.insert_row(wm.cy, b'')
        else:
            doc.split_row(wm.cy, wm.cx)

        wm.cy += 1
        wm.cx = 0

    def _backspace(self) -> None:
        """Delete character before cursor, joining rows at column 0."""

        wm = self.window_manager
        doc = wm.document

        if wm.cy == doc.numrows:
            return
        if wm.cx == 0 and wm.cy == 0:
            return

        if wm.cx > 0:
            doc.delete_char(wm.cy, wm.cx - 1)
            wm.cx -= 1
            return

        current = doc.rows[wm.cy]
        wm.cx = doc.rows[wm.cy - 1].size
        doc.append_string(wm.cy - 1, bytes(current.chars))
        doc.delete_row(wm.cy)
        wm.cy -= 1

    def _delete_char(self) -> None:
        """Delete character at cursor."""

        self._move_right()
        self._backspace()

    def _clamp_column(self) -> None:
        wm = self.window_manager
        row = wm.document.get_row(wm.cy)
        rowlen = row.size if row is not None else 0
        if wm.cx > rowlen:
            wm.cx = rowlen

    def _move_left(self) -> None:
        """Move cursor left, wrapping to the end of the previous row."""

        wm = self.window_manager
        if wm.cx != 0:
            wm.cx -= 1
        elif wm.cy > 0:
            wm.cy -= 1
            wm.cx = wm.document.rows[wm.cy].size

        self._clamp_column()

    def _move_right(self) -> None:
        """Move cursor right, wrapping to the start of the next row."""

        wm = self.window_manager
        row = wm.document.get_row(wm.cy)
        if row is not None:
            if wm.cx < row.size:
                wm.cx += 1
            elif wm.cx == row.size:
                wm.cy += 1
                wm.cx = 0

        self._clamp_column()

    def _move_up(self) -> None:
        """Move cursor up one line."""

        wm = self.window_manager
        if wm.cy != 0:
            wm.cy -= 1

        self._clamp_column()

    def _move_down(self) -> None:
        """Move cursor down one line."""

        wm = self.window_manager
        if wm.cy < wm.document.numrows:
            wm.cy += 1

        self._clamp_column()

    def _move_line_start(self) -> None:
        self.window_manager.cx = 0

    def _move_line_end(self) -> None:
        wm = self.window_manager
        row = wm.document.get_row(wm.cy)
        if row is not None:
            wm.cx = row.size

    def _page_up(self) -> None:
        """Move cursor up one page."""

        wm = self.window_manager
        wm.cy = wm.rowoffset
        for _ in range(wm.screenrows):
            self._move_up()

    def _page_down(self) -> None:
        """Move cursor down one page."""

        wm = self.window_manager
        wm.cy = min(wm.rowoffset + wm.screenrows - 1, wm.document.numrows)
        for _ in range(wm.screenrows):
            self._move_down()

    def _save(self) -> None:
        """Save the document, asking for a filename if it has none."""

        wm = self.window_manager
        doc = wm.document

        if not doc.filename:
            filename = self.prompt(SAVE_AS_PROMPT)
            if filename is None:
                wm.set_status_message(SAVE_ABORTED_STATUS_MESSAGE)
                return
            doc.filename = filename

        try:
            written = doc.save_file()
        except OSError as e:
            wm.set_status_message(SAVE_ERROR_STATUS_MESSAGE, e.strerror or str(e))
            return

        wm.set_status_message(SAVED_STATUS_MESSAGE, written)

    def prompt(self, template: str) -> Optional[str]:
        """
        Read a line of text in the message bar.

        Args:
            template: Message format with one %s for the text typed so far

        Returns:
            The entered text, or None if the user pressed Escape
        """

        wm = self.window_manager
        buf = ""

        while True:
            wm.set_status_message(template, buf)
            wm.refresh_screen()

            ch = self.decoder.read_key()
            if ch in (Key.DELETE, CTRL_H, BACKSPACE):
                buf = buf[:-1]
            elif ch == ESCAPE:
                wm.set_status_message("")
                return None
            elif ch == ENTER:
                if buf:
                    wm.set_status_message("")
                    return buf
            elif ch < 128 and not is_control(ch):
                buf += chr(ch)
