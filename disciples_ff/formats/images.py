"""'-IMAGES.OPT' record parser.

The record is a sequence of packed image blocks with no count or padding:

- Palette: 11-byte header and 256 4-byte colors
- 4-byte frame count
- Per frame: null-terminated name, 4-byte part count, 4-byte width,
  4-byte height, then the parts
- Per part: source x, source y, target x, target y, width, height (4 bytes each)

A packed image's pixels are stored as shuffled rectangles. Parts describe
where each rectangle goes in the unpacked frame.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..mqdb.errors import FormatError
from ..utils.binary import BinaryReader

logger = logging.getLogger(__name__)

PALETTE_HEADER_SIZE = 11
PALETTE_COLORS = 256
PALETTE_SIZE = PALETTE_HEADER_SIZE + PALETTE_COLORS * 4  # 1035 bytes

PART_SIZE = 24


@dataclass
class ImagePart:
    """Rectangle moved from its shuffled position to its place in the frame."""

    source_x: int
    source_y: int
    target_x: int
    target_y: int
    width: int
    height: int


@dataclass
class ImageFrame:
    """Single packed image or animation frame."""

    name: str
    width: int  # Size of the unpacked frame
    height: int
    parts: List[ImagePart] = field(default_factory=list)


@dataclass
class PackedImage:
    """Packed image or animation.

    A plain image has a single frame. Animations have several frames which
    the game expects to share the same width and height.
    """

    palette: bytes
    frames: List[ImageFrame] = field(default_factory=list)

    @property
    def palette_colors(self) -> bytes:
        """Palette color entries without the 11-byte header."""
        return self.palette[PALETTE_HEADER_SIZE:]


def read_packed_image(reader: BinaryReader) -> PackedImage:
    """Read one packed image block at the reader's position."""
    image = PackedImage(palette=reader.read_bytes(PALETTE_SIZE))
    frame_count = reader.read_u32()

    for _ in range(frame_count):
        name = reader.read_cstring()
        part_count = reader.read_u32()
        width = reader.read_u32()
        height = reader.read_u32()

        frame = ImageFrame(name=name, width=width, height=height)
        for _ in range(part_count):
            frame.parts.append(
                ImagePart(
                    source_x=reader.read_u32(),
                    source_y=reader.read_u32(),
                    target_x=reader.read_u32(),
                    target_y=reader.read_u32(),
                    width=reader.read_u32(),
                    height=reader.read_u32(),
                )
            )
        image.frames.append(frame)

    return image


def parse_packed_images(data: bytes) -> Dict[int, PackedImage]:
    """Decode '-IMAGES.OPT' record contents.

    Returns packed images keyed by the relative offset their block starts at,
    the same offset index entries refer to.

    Raises:
        FormatError: If the last block is cut short.
    """
    reader = BinaryReader(data)
    images: Dict[int, PackedImage] = {}

    while reader.remaining() > 0:
        offset = reader.tell()
        try:
            images[offset] = read_packed_image(reader)
        except EOFError as e:
            raise FormatError(f"Truncated packed image at offset {offset}: {e}") from e

    logger.debug("Unpacked %d packed images from %d bytes", len(images), len(data))
    return images
