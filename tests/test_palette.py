import pytest

import voxreader
from voxreader.voxfile import Chunk

from voxbuild import chunk, rgba_chunk, size_chunk, vox, xyzi_chunk


def test_default_palette():
    palette = voxreader.DEFAULT_PALETTE
    assert palette.is_default
    assert len(palette) == 256
    assert palette[0] == 0x00000000
    assert palette[1] == 0xFFFFFFFF
    assert palette[255] == 0xFF111111


def test_document_without_rgba_uses_default():
    document = voxreader.load(vox(size_chunk(1, 1, 1), xyzi_chunk([(0, 0, 0, 1)])))
    assert document.palette.is_default
    assert list(document.palette) == list(voxreader.DEFAULT_PALETTE)


def test_document_with_rgba_uses_its_colors():
    colors = [0xFF000000 | index for index in range(256)]
    document = voxreader.load(
        vox(size_chunk(1, 1, 1), xyzi_chunk([(0, 0, 0, 1)]), rgba_chunk(colors))
    )

    assert not document.palette.is_default
    assert list(document.palette) == colors
    assert document.palette == voxreader.Palette(colors)
    # nothing taken over from the default palette
    assert document.palette[0] == 0xFF000000
    assert document.palette[1] == 0xFF000001


def test_custom_palette_does_not_touch_default():
    before = list(voxreader.DEFAULT_PALETTE)
    voxreader.load(vox(rgba_chunk([0x12345678] * 256)))
    assert list(voxreader.DEFAULT_PALETTE) == before


def test_last_rgba_chunk_wins():
    document = voxreader.load(vox(rgba_chunk([1] * 256), rgba_chunk([2] * 256)))
    assert set(document.palette) == {2}


def test_short_rgba_chunk():
    with pytest.raises(voxreader.PaletteSizeMismatchError):
        voxreader.load(vox(rgba_chunk([0xFFFFFFFF] * 255)))


def test_read_palette_from_chunk():
    content = b"".join(bytes((index, 0, 0, 255)) for index in range(256)) + b"extra"
    palette = voxreader.Palette.read(Chunk(b"RGBA", content))
    assert palette[255] == 0xFFFF0000
    assert palette.color(7) == voxreader.Color(7, 0, 0, 255)


def test_rgba_bytes_are_red_green_blue_alpha():
    document = voxreader.load(vox(chunk(b"RGBA", bytes((0x11, 0x22, 0x33, 0x44)) * 256)))

    assert document.palette.color(1) == voxreader.Color(0x11, 0x22, 0x33, 0x44)
    assert document.palette[1] == 0x44112233


def test_palette_needs_256_colors():
    with pytest.raises(voxreader.PaletteSizeMismatchError):
        voxreader.Palette([0] * 10)


def test_color_unpack():
    color = voxreader.Color.from_argb(0x80112233)
    assert color == voxreader.Color(0x11, 0x22, 0x33, 0x80)
    assert color.to_argb() == 0x80112233


def test_palette_color():
    assert voxreader.DEFAULT_PALETTE.color(1) == voxreader.Color(255, 255, 255, 255)
    assert voxreader.DEFAULT_PALETTE.color(0) == voxreader.Color(0, 0, 0, 0)


def test_colors_are_hashable():
    colors = {voxreader.Color(1, 2, 3), voxreader.Color(1, 2, 3), voxreader.Color(3, 2, 1)}
    assert len(colors) == 2


def test_rgba_chunk_is_not_merged_with_children():
    data = vox(chunk(b"RGBA", bytes((7, 0, 0, 0)) * 256, chunk(b"ABCD")))
    assert set(voxreader.load(data).palette) == {0x00070000}
