"""Parsers for packed image records."""

from .images import ImageFrame, ImagePart, PackedImage, parse_packed_images
from .index import AnimationIndices, ImageIndices, IndexData, PackedImageInfo, parse_index

__all__ = [
    "AnimationIndices",
    "ImageFrame",
    "ImageIndices",
    "ImagePart",
    "IndexData",
    "PackedImage",
    "PackedImageInfo",
    "parse_index",
    "parse_packed_images",
]
