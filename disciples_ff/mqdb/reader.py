"""MQDB (.ff) archive reader."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..formats.images import PackedImage, parse_packed_images
from ..formats.index import IndexData, parse_index
from ..utils.binary import BinaryReader
from .errors import FormatError
from .header import (
    IMAGES_RECORD_NAME,
    INDEX_RECORD_NAME,
    MQDB_HEADER_SIZE,
    MQDB_MAGIC,
    MQDB_VERSION,
    NAME_FIELD_SIZE,
    MQDBHeader,
    MQRCHeader,
    SpecialId,
    TocEntry,
)

logger = logging.getLogger(__name__)

RecordKey = Union[int, str]


class FFReader:
    """Reader for MQDB (.ff) resource archives.

    The whole archive structure is parsed on construction: header, table of
    contents, name list, and the optional '-INDEX.OPT' and '-IMAGES.OPT'
    records. Record contents are read on demand by get_record_data().
    """

    def __init__(self, path: Union[str, Path], read_image_data: bool = True):
        self.path = Path(path)
        self._header: Optional[MQDBHeader] = None
        self._toc: Dict[int, TocEntry] = {}
        self._names: Dict[str, int] = {}
        self._index = IndexData()
        self._packed_images: Dict[int, PackedImage] = {}

        with open(self.path, "rb") as f:
            reader = BinaryReader(f)
            try:
                self._read_header(reader)
                self._read_toc(reader)
                self._read_name_list(reader)
                self._read_index(reader)
                if read_image_data:
                    self._read_images(reader)
            except EOFError as e:
                raise FormatError(f"Truncated MQDB file {self.path}: {e}") from e

        logger.debug(
            "Opened %s: %d toc records, %d names, %d packed images",
            self.path,
            len(self._toc),
            len(self._names),
            len(self._packed_images),
        )

    @property
    def header(self) -> MQDBHeader:
        return self._header

    @property
    def table_of_contents(self) -> Dict[int, TocEntry]:
        return self._toc

    @property
    def record_names(self) -> Dict[str, int]:
        return self._names

    @property
    def index_data(self) -> IndexData:
        return self._index

    @property
    def packed_images(self) -> Dict[int, PackedImage]:
        """Packed images keyed by their offset inside '-IMAGES.OPT'."""
        return self._packed_images

    def _read_header(self, reader: BinaryReader) -> None:
        """Read and check the 24-byte MQDB header."""
        magic = reader.read_bytes(4)
        reader.skip(4)
        version = reader.read_u32()
        reader.skip(MQDB_HEADER_SIZE - 12)

        if magic != MQDB_MAGIC:
            raise FormatError(f"Invalid MQDB magic: {magic!r}, expected {MQDB_MAGIC!r}")
        if version != MQDB_VERSION:
            raise FormatError(f"Wrong MQDB version: {version}, expected {MQDB_VERSION}")

        self._header = MQDBHeader(magic=magic, version=version)

    def _read_toc(self, reader: BinaryReader) -> None:
        """Read the table of contents.

        The 4-byte absolute offset of the table follows the file header.
        """
        toc_offset = reader.read_u32()
        reader.seek(toc_offset)

        total = reader.read_u32()
        for _ in range(total):
            entry = TocEntry(
                record_id=reader.read_u32(),
                size=reader.read_u32(),
                size_allocated=reader.read_u32(),
                offset=reader.read_u32(),
            )
            if entry.record_id in self._toc:
                raise FormatError(
                    f"MQDB table of contents has duplicate record id {entry.record_id}"
                )
            self._toc[entry.record_id] = entry

    def _read_record_header(self, reader: BinaryReader) -> MQRCHeader:
        magic = reader.read_bytes(4)
        reader.skip(4)
        record_header = MQRCHeader(
            magic=magic,
            record_id=reader.read_u32(),
            size=reader.read_u32(),
            size_allocated=reader.read_u32(),
            used=reader.read_u32(),
        )
        reader.skip(4)
        return record_header

    def _read_name_list(self, reader: BinaryReader) -> None:
        """Read the name list record and map names to used records.

        Entries referring to ids missing from the table of contents or to
        unused records are skipped. When a name repeats, its first mapping is
        kept.
        """
        name_list = self.find_toc_record(SpecialId.NAME_LIST)
        if name_list is None:
            raise FormatError("MQDB file has no name list record")

        reader.seek(name_list.data_offset)
        total = reader.read_u32()

        for _ in range(total):
            name = reader.read_fixed_string(NAME_FIELD_SIZE)
            record_id = reader.read_u32()

            entry = self._toc.get(record_id)
            if entry is None:
                logger.debug("Name %r refers to missing record %d", name, record_id)
                continue

            position = reader.tell()
            reader.seek(entry.offset)
            record_header = self._read_record_header(reader)
            if not record_header.is_valid:
                raise FormatError(
                    f"Invalid MQRC magic {record_header.magic!r} at offset {entry.offset} "
                    f"for record {record_id} ({name!r})"
                )
            reader.seek(position)

            if not record_header.is_used:
                logger.debug("Skipping unused record %d (%r)", record_id, name)
                continue

            if name in self._names:
                # Some resource editors leave stale copies of renamed records
                logger.debug(
                    "Duplicate name %r for record %d, keeping record %d",
                    name,
                    record_id,
                    self._names[name],
                )
                continue

            self._names[name] = record_id

    def _read_record_contents(self, reader: BinaryReader, entry: TocEntry) -> bytes:
        reader.seek(entry.data_offset)
        return reader.read_bytes(entry.size)

    def _read_index(self, reader: BinaryReader) -> None:
        entry = self.find_toc_record(INDEX_RECORD_NAME)
        if not entry:
            logger.debug("No %s record in %s", INDEX_RECORD_NAME, self.path)
            return
        self._index = parse_index(self._read_record_contents(reader, entry))

    def _read_images(self, reader: BinaryReader) -> None:
        entry = self.find_toc_record(IMAGES_RECORD_NAME)
        if not entry:
            logger.debug("No %s record in %s", IMAGES_RECORD_NAME, self.path)
            return
        self._packed_images = parse_packed_images(self._read_record_contents(reader, entry))

    def find_toc_record(self, key: RecordKey) -> Optional[TocEntry]:
        """Find a table of contents entry by record id, special id or name."""
        if isinstance(key, str):
            record_id = self._names.get(key)
            if record_id is None:
                return None
            key = record_id
        return self._toc.get(int(key))

    def get_record_data(self, key: RecordKey) -> Optional[bytes]:
        """Read contents of a record by id or name.

        Returns None if the record is unknown, the archive cannot be reopened
        or the contents cannot be read in full.
        """
        entry = self.find_toc_record(key)
        if not entry:
            return None
        try:
            with open(self.path, "rb") as f:
                return self._read_record_contents(BinaryReader(f), entry)
        except OSError as e:
            logger.warning("Could not read record %d from %s: %s", entry.record_id, self.path, e)
        except EOFError as e:
            logger.warning("Record %d in %s is truncated: %s", entry.record_id, self.path, e)
        return None

    def get_names(self) -> List[str]:
        """Return all resolved record names, sorted."""
        return sorted(self._names)

    def find_packed_image(self, name: str) -> Optional[PackedImage]:
        """Find the decoded packed image for an image entry of the index."""
        info = self._index.images.find(name)
        if info is None:
            return None
        return self._packed_images.get(info.offset)

    def __repr__(self) -> str:
        return (
            f"FFReader(path={str(self.path)!r}, records={len(self._toc)}, "
            f"names={len(self._names)})"
        )
