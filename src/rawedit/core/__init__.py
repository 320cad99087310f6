"""
Core package for the editor's text model.

This package implements the row store: the Row class holding raw and
tab-expanded text for one line, and the Document class owning the ordered
rows, the dirty counter and file load/save.
"""

from .document import Document
from .row import Row

__all__ = ['Document', 'Row']
