"""
UI package for the terminal front end.

This package implements everything that talks to the terminal: the raw
mode controller, the key decoder, the WindowManager that renders frames,
and the InputHandler that maps keys to editing actions.
"""

from .input_handler import InputHandler
from .keys import Key, KeyDecoder
from .terminal import RawTerminal, TerminalError
from .window import WindowManager

__all__ = ['InputHandler', 'Key', 'KeyDecoder', 'RawTerminal', 'TerminalError', 'WindowManager']
