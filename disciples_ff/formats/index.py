"""'-INDEX.OPT' record parser.

The index lists every packed image and animation frame stored in the
archive's packed records:

- 4-byte entry count
- Per entry: 4-byte record id, null-terminated name,
  4-byte relative offset and 4-byte size of the packed data

Entries with id 0xFFFFFFFF describe animation frames, the rest are images.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..mqdb.errors import FormatError
from ..mqdb.header import ANIMATION_ID
from ..utils.binary import BinaryReader

logger = logging.getLogger(__name__)


@dataclass
class PackedImageInfo:
    """Location of a packed image inside a packed data record."""

    offset: int  # Relative to the start of the packed record contents
    size: int


@dataclass
class ImageIndices:
    """Image entries of the index.

    Ids, names and packed_info always have the same length, so the same
    position in each list describes one image.
    """

    ids: List[int] = field(default_factory=list)  # Ids of records with raw image data
    names: List[str] = field(default_factory=list)
    packed_info: List[PackedImageInfo] = field(default_factory=list)

    def append(self, record_id: int, name: str, info: PackedImageInfo) -> None:
        self.ids.append(record_id)
        self.names.append(name)
        self.packed_info.append(info)

    def find(self, name: str) -> Optional[PackedImageInfo]:
        """Return packed info of the first image with the given name."""
        try:
            return self.packed_info[self.names.index(name)]
        except ValueError:
            return None

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class AnimationIndices:
    """Animation frame entries of the index, aligned the same way as images.

    Animation offsets point into the separate animations record, not into
    '-IMAGES.OPT'.
    """

    names: List[str] = field(default_factory=list)
    packed_info: List[PackedImageInfo] = field(default_factory=list)

    def append(self, name: str, info: PackedImageInfo) -> None:
        self.names.append(name)
        self.packed_info.append(info)

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class IndexData:
    """Decoded contents of '-INDEX.OPT'."""

    images: ImageIndices = field(default_factory=ImageIndices)
    animations: AnimationIndices = field(default_factory=AnimationIndices)


def parse_index(data: bytes) -> IndexData:
    """Decode '-INDEX.OPT' record contents.

    Raises:
        FormatError: If the contents end in the middle of an entry.
    """
    reader = BinaryReader(data)
    index = IndexData()

    try:
        total = reader.read_u32()

        for _ in range(total):
            record_id = reader.read_u32()
            name = reader.read_cstring()
            info = PackedImageInfo(offset=reader.read_u32(), size=reader.read_u32())

            if record_id == ANIMATION_ID:
                index.animations.append(name, info)
            else:
                index.images.append(record_id, name, info)
    except EOFError as e:
        raise FormatError(f"Truncated index record at offset {reader.tell()}: {e}") from e

    logger.debug(
        "Index: %d images, %d animation frames", len(index.images), len(index.animations)
    )
    return index
