from collections import deque

import pytest

from rawedit.config import EditorConfig
from rawedit.core.document import Document
from rawedit.ui.input_handler import InputHandler
from rawedit.ui.keys import KeyDecoder
from rawedit.ui.window import WindowManager


class FakeTerminal:
    """Stands in for RawTerminal: scripted input bytes, captured output."""

    MAX_IDLE_READS = 50

    def __init__(self, data=b'', height=10, width=40):
        self.input = deque(data)
        self.writes = []
        self.height = height
        self.width = width
        self._idle = 0

    def feed(self, data):
        self.input.extend(data)

    def read_byte(self):
        if self.input:
            self._idle = 0
            return self.input.popleft()

        self._idle += 1
        if self._idle > self.MAX_IDLE_READS:
            raise AssertionError("read_byte called with no scripted input left")
        return None

    def write(self, data):
        self.writes.append(bytes(data))

    def get_window_size(self):
        return self.height, self.width

    @property
    def output(self):
        return b''.join(self.writes)


def make_document(lines, tab_stop=4):
    doc = Document(tab_stop=tab_stop)
    doc.load_lines(line.encode() if isinstance(line, str) else line for line in lines)
    doc.dirty = 0
    return doc


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_editor():
    def factory(lines=(), height=10, width=40, config=None, data=b''):
        config = config or EditorConfig()
        term = FakeTerminal(data, height=height, width=width)
        doc = make_document(lines, tab_stop=config.tab_stop)
        wm = WindowManager(term, doc, height, width, config)
        handler = InputHandler(wm, KeyDecoder(term.read_byte))
        return wm, handler, term

    return factory
