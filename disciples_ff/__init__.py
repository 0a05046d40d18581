"""Disciples II MQDB (.ff) resource archive reader."""

__version__ = "0.1.0"

from .mqdb import FFReader, FormatError, SpecialId, TocEntry
from .formats import IndexData, PackedImage

__all__ = ["FFReader", "FormatError", "SpecialId", "TocEntry", "IndexData", "PackedImage", "__version__"]
