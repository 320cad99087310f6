"""
rawedit - a small screen-oriented text editor for raw VT100 terminals.
"""

__version__ = "0.1.0"
