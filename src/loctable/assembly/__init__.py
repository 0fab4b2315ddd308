"""Assembly layer: directive configuration and the multi-source assembler.

Python 3.13+.
"""

from .assembler import AssembledTable, Assembler, Entry, TempKey
from .config import Configuration

__all__ = [
    "AssembledTable",
    "Assembler",
    "Configuration",
    "Entry",
    "TempKey",
]
