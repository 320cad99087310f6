"""
Key decoding: turns raw terminal bytes into logical key codes.
"""

from collections import deque
from enum import IntEnum
from typing import Callable, Dict, Final, List, Optional


class Key(IntEnum):
    """Named keys. Values start above the byte range so they never clash."""

    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DELETE = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


ESCAPE: Final[int] = 0x1b
ENTER: Final[int] = ord('\r')
BACKSPACE: Final[int] = 127


def ctrl_key(ch: str) -> int:
    """Key code produced by holding Ctrl with ch."""

    return ord(ch) & 0x1f


def is_control(key: int) -> bool:
    return key < 32 or key == BACKSPACE


# Bytes following ESC -> key
ESCAPE_SEQUENCES: Final[Dict[bytes, Key]] = {
    b'[1~': Key.HOME,
    b'[3~': Key.DELETE,
    b'[4~': Key.END,
    b'[5~': Key.PAGE_UP,
    b'[6~': Key.PAGE_DOWN,
    b'[7~': Key.HOME,
    b'[8~': Key.END,
    b'[A': Key.ARROW_UP,
    b'[B': Key.ARROW_DOWN,
    b'[C': Key.ARROW_RIGHT,
    b'[D': Key.ARROW_LEFT,
    b'[H': Key.HOME,
    b'[F': Key.END,
    b'OH': Key.HOME,
    b'OF': Key.END,
}


class KeyDecoder:
    """
    Reads key codes from a byte source.

    ``read_byte`` must return one byte as an int, or None when no input
    arrived within the terminal's read timeout.
    """

    def __init__(self, read_byte: Callable[[], Optional[int]]) -> None:
        self.read_byte = read_byte

    def read_key(self) -> int:
        """Block until a key is available and return its code."""

        byte = self.read_byte()
        while byte is None:
            byte = self.read_byte()

        if byte != ESCAPE:
            return byte

        return self._read_escape_sequence()

    def _read_escape_sequence(self) -> int:
        seq = bytearray()
        for _ in range(2):
            byte = self.read_byte()
            if byte is None:
                return ESCAPE
            seq.append(byte)

        if seq[0] == ord('[') and ord('0') <= seq[1] <= ord('9'):
            byte = self.read_byte()
            if byte is None:
                return ESCAPE
            seq.append(byte)

        return ESCAPE_SEQUENCES.get(bytes(seq), ESCAPE)


def decode_keys(data: bytes) -> List[int]:
    """Decode every key contained in data."""

    pending = deque(data)

    def read_byte() -> Optional[int]:
        return pending.popleft() if pending else None

    decoder = KeyDecoder(read_byte)
    keys = []
    while pending:
        keys.append(decoder.read_key())

    return keys
