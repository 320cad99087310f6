"""
Document module: the ordered row store backing the editor, plus file I/O.
"""

import logging
from typing import Iterable, List, Optional

from ..config import DEFAULT_TAB_STOP
from .row import Row

logger = logging.getLogger(__name__)


class Document:
    """Ordered list of rows with a dirty counter and an optional filename."""

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.rows: List[Row] = []
        self.dirty = 0
        self.filename: Optional[str] = None
        self.tab_stop = tab_stop

    @property
    def numrows(self) -> int:
        return len(self.rows)

    @property
    def modified(self) -> bool:
        return self.dirty != 0

    def get_row(self, at: int) -> Optional[Row]:
        """Get the row at index at, or None past the end."""

        if not 0 <= at < self.numrows:
            return None

        return self.rows[at]

    def insert_row(self, at: int, text: bytes = b'') -> None:
        """Insert a new row at index at. Indices outside [0, numrows] are ignored."""

        if not 0 <= at <= self.numrows:
            return

        self.rows.insert(at, Row(text, self.tab_stop))
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        """Remove the row at index at."""

        if not 0 <= at < self.numrows:
            return

        del self.rows[at]
        self.dirty += 1

    def insert_char(self, y: int, at: int, c: int) -> None:
        row = self.get_row(y)
        if row is None:
            return

        row.insert_char(at, c)
        self.dirty += 1

    def delete_char(self, y: int, at: int) -> None:
        row = self.get_row(y)
        if row is None:
            return

        if row.delete_char(at):
            self.dirty += 1

    def append_string(self, y: int, text: bytes) -> None:
        """Concatenate text onto the end of row y."""

        row = self.get_row(y)
        if row is None:
            return

        row.append_string(text)
        self.dirty += 1

    def split_row(self, y: int, at: int) -> None:
        """Break row y at offset at, moving the tail onto a new row below it."""

        row = self.get_row(y)
        if row is None:
            return

        tail = row.truncate(at)
        self.insert_row(y + 1, tail)

    def load_lines(self, lines: Iterable[bytes]) -> None:
        """Append lines as rows, stripping trailing newlines and carriage returns."""

        for line in lines:
            self.insert_row(self.numrows, line.rstrip(b'\r\n'))

    def load_file(self, filename: str) -> None:
        """
        Load a file into the document.

        Raises:
            OSError: If the file cannot be opened or read.
        """

        self.filename = filename
        with open(filename, 'rb') as f:
            self.load_lines(f)

        self.dirty = 0
        logger.info("Loaded %s (%d lines)", filename, self.numrows)

    def to_bytes(self) -> bytes:
        """Serialize every row followed by a newline."""

        return b''.join(bytes(row.chars) + b'\n' for row in self.rows)

    def save_file(self, filename: Optional[str] = None) -> int:
        """
        Write the document to disk, truncating any existing content.

        Args:
            filename: Optional filename to save to. If None, uses current filename.

        Returns:
            int: Number of bytes written

        Raises:
            ValueError: If no filename is known.
            OSError: If the file cannot be written. The dirty counter is left unchanged.
        """

        save_filename = filename or self.filename
        if not save_filename:
            raise ValueError("No filename specified")

        data = self.to_bytes()
        try:
            with open(save_filename, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.error("Failed to save %s: %s", save_filename, e)
            raise

        self.filename = save_filename
        self.dirty = 0
        logger.info("Saved %s (%d bytes)", save_filename, len(data))
        return len(data)
