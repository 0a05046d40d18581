"""MQDB header, table of contents and record header structures.

MQDB (.ff) files are little-endian containers of MQRC records:

- 24-byte file header: "MQDB", reserved, version (9), 12 reserved bytes
- 4-byte absolute offset of the table of contents
- Table of contents: entry count followed by 16-byte entries
- Each record starts with a 28-byte MQRC header followed by its contents
"""

from dataclasses import dataclass
from enum import IntEnum

# MQDB magic bytes and the only supported version
MQDB_MAGIC = b"MQDB"
MQDB_VERSION = 9

# Every record in the file starts with this signature
MQRC_MAGIC = b"MQRC"

MQDB_HEADER_SIZE = 24
TOC_ENTRY_SIZE = 16
MQRC_HEADER_SIZE = 28

# Name list entries store names in a fixed, null-padded field
NAME_FIELD_SIZE = 256

# Optional records holding packed image metadata and data
INDEX_RECORD_NAME = "-INDEX.OPT"
IMAGES_RECORD_NAME = "-IMAGES.OPT"

# Index entries with this id describe animation frames
ANIMATION_ID = 0xFFFFFFFF


class SpecialId(IntEnum):
    """Records with predefined ids."""

    NAME_LIST = 2


@dataclass
class MQDBHeader:
    """MQDB file header (24 bytes)."""

    magic: bytes  # 4 bytes: "MQDB"
    version: int  # 4 bytes, after 4 reserved bytes

    @property
    def is_valid(self) -> bool:
        return self.magic == MQDB_MAGIC and self.version == MQDB_VERSION


@dataclass(frozen=True)
class TocEntry:
    """Table of contents entry (16 bytes)."""

    record_id: int
    size: int  # Size of record contents
    size_allocated: int  # Total space reserved for the record in file
    offset: int  # Absolute offset of the record's MQRC header

    @property
    def data_offset(self) -> int:
        """Absolute offset of record contents, past its MQRC header."""
        return self.offset + MQRC_HEADER_SIZE


@dataclass
class MQRCHeader:
    """Record header (28 bytes), read while resolving names."""

    magic: bytes  # 4 bytes: "MQRC", followed by 4 reserved bytes
    record_id: int
    size: int
    size_allocated: int
    used: int  # Zero for deleted records
    # 4 trailing reserved bytes

    @property
    def is_valid(self) -> bool:
        return self.magic == MQRC_MAGIC

    @property
    def is_used(self) -> bool:
        return self.used != 0
