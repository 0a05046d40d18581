"""Tests for '-INDEX.OPT' parsing."""

import pytest

from disciples_ff.formats.index import PackedImageInfo, parse_index
from disciples_ff.mqdb import FormatError
from disciples_ff.mqdb.header import ANIMATION_ID

from ffbuild import pack_index


def assert_aligned(index):
    images = index.images
    assert len(images.ids) == len(images.names) == len(images.packed_info)
    animations = index.animations
    assert len(animations.names) == len(animations.packed_info)


class TestParseIndex:
    """Tests for parse_index."""

    def test_empty_index(self):
        index = parse_index(pack_index([]))

        assert len(index.images) == 0
        assert len(index.animations) == 0

    def test_single_animation_entry(self):
        index = parse_index(pack_index([(ANIMATION_ID, "ANIM1", 0, 10)]))

        assert index.animations.names == ["ANIM1"]
        assert index.animations.packed_info == [PackedImageInfo(offset=0, size=10)]
        assert len(index.images) == 0
        assert_aligned(index)

    def test_single_image_entry(self):
        index = parse_index(pack_index([(7, "IMG", 1035, 200)]))

        assert index.images.ids == [7]
        assert index.images.names == ["IMG"]
        assert index.images.packed_info == [PackedImageInfo(offset=1035, size=200)]
        assert len(index.animations) == 0

    def test_all_entries_accumulate(self):
        entries = [
            (10, "A", 0, 100),
            (ANIMATION_ID, "FRAME0", 0, 50),
            (11, "B", 100, 100),
            (ANIMATION_ID, "FRAME1", 50, 50),
            (12, "C", 200, 30),
        ]
        index = parse_index(pack_index(entries))

        assert index.images.ids == [10, 11, 12]
        assert index.images.names == ["A", "B", "C"]
        assert [i.offset for i in index.images.packed_info] == [0, 100, 200]
        assert index.animations.names == ["FRAME0", "FRAME1"]
        assert [i.size for i in index.animations.packed_info] == [50, 50]
        assert_aligned(index)

    def test_sentinel_never_in_images(self):
        entries = [(ANIMATION_ID, f"F{i}", i, 1) for i in range(5)]
        entries.append((0xFFFFFFFE, "ALMOST", 0, 1))
        index = parse_index(pack_index(entries))

        assert ANIMATION_ID not in index.images.ids
        assert index.images.ids == [0xFFFFFFFE]
        assert len(index.animations) == 5

    def test_empty_name(self):
        index = parse_index(pack_index([(3, "", 4, 5)]))
        assert index.images.names == [""]
        assert index.images.packed_info[0].size == 5

    def test_find_image(self):
        index = parse_index(pack_index([(1, "A", 0, 10), (2, "B", 10, 20)]))

        assert index.images.find("B") == PackedImageInfo(offset=10, size=20)
        assert index.images.find("MISSING") is None

    def test_truncated_entry(self):
        data = pack_index([(1, "A", 0, 10)])[:-2]
        with pytest.raises(FormatError, match="Truncated"):
            parse_index(data)

    def test_count_exceeds_entries(self):
        data = b"\x02\x00\x00\x00" + pack_index([(1, "A", 0, 10)])[4:]
        with pytest.raises(FormatError):
            parse_index(data)
