import pytest

import voxreader
from voxreader import View2DFlags, Viewport, Voxel

from voxbuild import size_chunk, vox, xyzi_chunk


def make_document(size, voxels):
    return voxreader.load(vox(size_chunk(*size), xyzi_chunk(voxels)))


def test_single_voxel():
    document = make_document((1, 1, 1), [(0, 0, 0, 5)])
    view = voxreader.project(document, 0, Viewport.XY, 0)

    assert (view.width, view.height) == (1, 1)
    assert view.voxel_at(0, 0) == Voxel(0, 0, 0, 5)
    assert view.color_index_at(0, 0) == 5


@pytest.mark.parametrize(
    "viewport, flags, expected",
    [
        (Viewport.XZ, 0, (2, 4)),
        (Viewport.XY, 0, (2, 3)),
        (Viewport.YZ, 0, (3, 4)),
        (Viewport.XZ, View2DFlags.SWAP_AXIS, (4, 2)),
        (Viewport.XY, View2DFlags.SWAP_AXIS, (3, 2)),
        (Viewport.YZ, View2DFlags.SWAP_AXIS, (4, 3)),
    ],
)
def test_grid_size(viewport, flags, expected):
    document = make_document((2, 3, 4), [])
    view = voxreader.project(document, 0, viewport, flags)

    assert (view.width, view.height) == expected
    assert len(view.cells) == expected[0]
    assert all(len(column) == expected[1] for column in view.cells)
    assert all(cell is None for column in view.cells for cell in column)


@pytest.mark.parametrize(
    "viewport, expected",
    [
        (Viewport.XZ, (1, 3)),
        (Viewport.XY, (1, 2)),
        (Viewport.YZ, (2, 3)),
    ],
)
def test_axes(viewport, expected):
    document = make_document((4, 4, 4), [(1, 2, 3, 9)])
    view = voxreader.project(document, 0, viewport)
    assert view.color_index_at(*expected) == 9


@pytest.mark.parametrize("voxels", [
    [(0, 0, 2, 1), (0, 0, 5, 2)],
    [(0, 0, 5, 2), (0, 0, 2, 1)],
])
def test_nearer_voxel_wins(voxels):
    document = make_document((1, 1, 6), voxels)

    front = voxreader.project(document, 0, Viewport.XY)
    assert front.voxel_at(0, 0) == Voxel(0, 0, 2, 1)

    behind = voxreader.project(document, 0, Viewport.XY, View2DFlags.FROM_BEHIND)
    assert behind.voxel_at(0, 0) == Voxel(0, 0, 5, 2)


def test_equal_depth_keeps_first():
    document = make_document((1, 1, 1), [(0, 0, 0, 1), (0, 0, 0, 2)])

    assert voxreader.project(document, 0, Viewport.XY).color_index_at(0, 0) == 1
    flags = View2DFlags.FROM_BEHIND
    assert voxreader.project(document, 0, Viewport.XY, flags).color_index_at(0, 0) == 1


def test_invert_up():
    document = make_document((1, 3, 1), [(0, 0, 0, 4)])
    view = voxreader.project(document, 0, Viewport.XY, View2DFlags.INVERT_UP)

    assert view.color_index_at(0, 2) == 4
    assert view.color_index_at(0, 0) == 0


def test_from_behind_mirrors_horizontally():
    document = make_document((3, 1, 1), [(0, 0, 0, 4)])
    view = voxreader.project(document, 0, Viewport.XY, View2DFlags.FROM_BEHIND)

    assert view.color_index_at(2, 0) == 4
    assert view.color_index_at(0, 0) == 0


def test_swap_axis():
    document = make_document((3, 2, 1), [(2, 1, 0, 4)])
    view = voxreader.project(document, 0, Viewport.XY, View2DFlags.SWAP_AXIS)

    assert (view.width, view.height) == (2, 3)
    assert view.color_index_at(1, 2) == 4


def test_combined_flags():
    document = make_document((3, 2, 1), [(0, 0, 0, 4)])
    flags = View2DFlags.INVERT_UP | View2DFlags.FROM_BEHIND | View2DFlags.SWAP_AXIS
    view = voxreader.project(document, 0, Viewport.XY, flags)

    # x -> 2, y -> 1, then swapped
    assert (view.width, view.height) == (2, 3)
    assert view.color_index_at(1, 2) == 4


def test_plain_int_arguments():
    document = make_document((2, 2, 2), [(1, 0, 1, 3)])
    view = voxreader.project(document, 0, 0, 1)

    # XZ with the up axis inverted
    assert view.color_index_at(1, 0) == 3


def test_unknown_viewport():
    document = make_document((1, 1, 1), [(0, 0, 0, 1)])
    with pytest.raises(voxreader.UnknownViewportError):
        voxreader.project(document, 0, 3)


@pytest.mark.parametrize("model_index", [-1, 1, 10])
def test_model_index_out_of_range(model_index):
    document = make_document((1, 1, 1), [(0, 0, 0, 1)])
    with pytest.raises(voxreader.ModelIndexError):
        voxreader.project(document, model_index, Viewport.XY)
    with pytest.raises(IndexError):
        voxreader.project(document, model_index, Viewport.XY)


def test_out_of_bounds_voxels_are_left_out():
    document = make_document((2, 2, 2), [(5, 0, 0, 1), (1, 1, 1, 2)])
    view = voxreader.project(document, 0, Viewport.XY, View2DFlags.INVERT_UP)

    assert [voxel for row in view.rows() for voxel in row if voxel] == [Voxel(1, 1, 1, 2)]


def test_view_owns_its_voxels():
    document = make_document((2, 1, 1), [(0, 0, 0, 1)])
    view = voxreader.project(document, 0, Viewport.XY)

    document.models[0].voxels.clear()
    assert view.voxel_at(0, 0) == Voxel(0, 0, 0, 1)


def test_projection_does_not_change_document():
    document = make_document((2, 2, 2), [(1, 1, 1, 2), (0, 0, 0, 1)])
    voxreader.project(document, 0, Viewport.YZ, View2DFlags.SWAP_AXIS)
    assert document.models[0].voxels == [(1, 1, 1, 2), (0, 0, 0, 1)]


def test_rows():
    document = make_document((2, 2, 1), [(0, 0, 0, 1), (1, 1, 0, 2)])
    view = voxreader.project(document, 0, Viewport.XY)

    assert [[voxel and voxel.color_index for voxel in row] for row in view.rows()] == [
        [1, None],
        [None, 2],
    ]


def test_voxel_at_outside_grid():
    document = make_document((1, 1, 1), [(0, 0, 0, 1)])
    view = voxreader.project(document, 0, Viewport.XY)
    assert view.voxel_at(1, 0) is None
    assert view.voxel_at(-1, 0) is None


def test_reader_view2d():
    reader = voxreader.VoxReader()
    reader.load(vox(size_chunk(1, 1, 2), xyzi_chunk([(0, 0, 1, 7), (0, 0, 0, 8)])))

    assert reader.view2d(Viewport.XY).color_index_at(0, 0) == 8
    assert reader.view2d(Viewport.XY, View2DFlags.FROM_BEHIND, 0).color_index_at(0, 0) == 7
