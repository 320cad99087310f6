"""
Byte accumulator used to batch one frame of terminal output.
"""


class AppendBuffer:
    """Growable byte buffer flushed to the terminal in a single write."""

    def __init__(self) -> None:
        self._data = bytearray()

    def append(self, data: bytes) -> None:
        """Append raw bytes to the buffer."""

        self._data += data

    def getvalue(self) -> bytes:
        """Return the accumulated bytes."""

        return bytes(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self.getvalue()
