"""MQDB (.ff) archive reading."""

from .errors import FormatError
from .header import (
    ANIMATION_ID,
    IMAGES_RECORD_NAME,
    INDEX_RECORD_NAME,
    MQDB_MAGIC,
    MQDB_VERSION,
    MQRC_MAGIC,
    MQDBHeader,
    MQRCHeader,
    SpecialId,
    TocEntry,
)
from .reader import FFReader

__all__ = [
    "FFReader",
    "FormatError",
    "MQDBHeader",
    "MQRCHeader",
    "SpecialId",
    "TocEntry",
    "ANIMATION_ID",
    "IMAGES_RECORD_NAME",
    "INDEX_RECORD_NAME",
    "MQDB_MAGIC",
    "MQDB_VERSION",
    "MQRC_MAGIC",
]
