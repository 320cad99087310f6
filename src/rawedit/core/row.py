"""
Row module holding one line of text and its tab-expanded display form.
"""

from typing import Final

from ..config import DEFAULT_TAB_STOP

TAB: Final[int] = ord('\t')


class Row:
    """A single line: raw bytes plus the rendered bytes shown on screen."""

    def __init__(self, chars: bytes = b'', tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.chars = bytearray(chars)
        self.tab_stop = tab_stop
        self.render = b''
        self.update()

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update(self) -> None:
        """Recompute the render from the raw characters."""

        rendered = bytearray()
        for byte in self.chars:
            if byte == TAB:
                rendered.append(ord(' '))
                while len(rendered) % self.tab_stop != 0:
                    rendered.append(ord(' '))
                continue

            rendered.append(byte)

        self.render = bytes(rendered)

    def cx_to_rx(self, cx: int) -> int:
        """Convert a byte offset into chars to a column in render."""

        rx = 0
        for byte in self.chars[:cx]:
            if byte == TAB:
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1

        return rx

    def insert_char(self, at: int, c: int) -> None:
        """Insert byte c at offset at, appending if at is out of range."""

        if at < 0 or at > self.size:
            at = self.size

        self.chars.insert(at, c)
        self.update()

    def delete_char(self, at: int) -> bool:
        """Delete the byte at offset at. Returns False if nothing was removed."""

        if not 0 <= at < self.size:
            return False

        del self.chars[at]
        self.update()
        return True

    def append_string(self, text: bytes) -> None:
        self.chars += text
        self.update()

    def truncate(self, at: int) -> bytes:
        """Cut the row at offset at and return the removed tail."""

        at = max(0, min(at, self.size))
        tail = bytes(self.chars[at:])
        del self.chars[at:]
        self.update()
        return tail

    def __repr__(self) -> str:
        return f"Row({bytes(self.chars)!r})"
