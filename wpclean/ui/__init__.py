"""Terminal presentation package for wpclean.

- CleanerTUI: Rich-based rendering of the folder and archive views.
- KeyReader / decode_key: raw keyboard input decoded into Intent values.
"""

from .cleaner_tui import CleanerTUI
from .keyboard import KeyReader, decode_key

__all__ = ["CleanerTUI", "KeyReader", "decode_key"]
