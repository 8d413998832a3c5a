"""2D projection of a model.

A projection flattens one model onto a plane, looking along one of its axes.
Where several voxels land on the same cell, the one nearest to the viewer is
kept.
"""

import enum
import logging
from typing import Iterator, Optional

from voxreader.document import Document
from voxreader.errors import ModelIndexError, UnknownViewportError
from voxreader.model import Voxel

logger = logging.getLogger(__name__)


class Viewport(enum.IntEnum):
    """Model side to look at, named after its (horizontal, vertical) axes."""

    XZ = 0
    XY = 1
    YZ = 2


class View2DFlags(enum.IntFlag):
    """Flags modifying a projection.

    Flag        | Behaviour
    ------------|-------------------------------------------------------------------
    INVERT_UP   | Invert voxels along the up axis. The lowest voxel is seen highest.
    FROM_BEHIND | The model is seen from the back side.
    SWAP_AXIS   | The up and row axis are swapped.
    """

    NONE = 0x0
    INVERT_UP = 0x1
    FROM_BEHIND = 0x2
    SWAP_AXIS = 0x4


# (horizontal, vertical, depth) axis of each viewport, as indices into (x, y, z)
AXES = {
    Viewport.XZ: (0, 2, 1),
    Viewport.XY: (0, 1, 2),
    Viewport.YZ: (1, 2, 0),
}


class View2D:
    """Result of a projection.

    `voxels` is the projection's own copy of the model's voxel list and
    `cells[x][y]` holds the index into it of the voxel seen at column x, row y,
    or None where nothing is seen.
    """

    def __init__(self, width: int, height: int, voxels: list[Voxel], cells: list[list[Optional[int]]]):
        self.width = width
        self.height = height
        self.voxels = voxels
        self.cells = cells

    def voxel_at(self, x: int, y: int) -> Optional[Voxel]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        index = self.cells[x][y]
        return None if index is None else self.voxels[index]

    def color_index_at(self, x: int, y: int) -> int:
        """Color index seen at (x, y); 0 where the cell is empty."""
        voxel = self.voxel_at(x, y)
        return 0 if voxel is None else voxel.color_index

    def rows(self) -> Iterator[list[Optional[Voxel]]]:
        """Iterate over rows, y = 0 first."""
        for y in range(self.height):
            yield [self.voxel_at(x, y) for x in range(self.width)]

    def __repr__(self):
        return f"<View2D {self.width}x{self.height}>"


def project(document: Document, model_index: int, viewport, flags: int = 0) -> View2D:
    """Create a 2D view of a model the way it is seen from `viewport`.

    Smaller depth values are nearer to the viewer, unless FROM_BEHIND is set.
    Among voxels at the same depth and cell, the first one in the model's voxel
    list is kept. Voxels that fall outside the grid (coordinates outside the
    model's size) are left out.
    """
    try:
        viewport = Viewport(viewport)
    except ValueError:
        raise UnknownViewportError(f"Unknown 2D viewport: {viewport!r}") from None

    if not 0 <= model_index < len(document.models):
        raise ModelIndexError(
            f"Model index {model_index} out of range; document has {len(document.models)} models"
        )
    model = document.models[model_index]

    invert_up = bool(flags & View2DFlags.INVERT_UP)
    from_behind = bool(flags & View2DFlags.FROM_BEHIND)
    swap_axis = bool(flags & View2DFlags.SWAP_AXIS)

    h_axis, v_axis, d_axis = AXES[viewport]
    h_max = model.size[h_axis]
    v_max = model.size[v_axis]

    width, height = (v_max, h_max) if swap_axis else (h_max, v_max)

    voxels = list(model.voxels)
    cells: list[list[Optional[int]]] = [[None] * height for _ in range(width)]

    dropped = 0
    for index, voxel in enumerate(voxels):
        h = voxel[h_axis]
        v = voxel[v_axis]
        depth = voxel[d_axis]

        if invert_up:
            v = v_max - v - 1
        if from_behind:
            h = h_max - h - 1
        if swap_axis:
            h, v = v, h

        if not (0 <= h < width and 0 <= v < height):
            dropped += 1
            continue

        current = cells[h][v]
        if current is None:
            cells[h][v] = index
            continue

        other_depth = voxels[current][d_axis]
        nearer = depth > other_depth if from_behind else depth < other_depth
        if nearer:
            cells[h][v] = index

    if dropped:
        logger.debug("Dropped %d voxels outside the %dx%d view", dropped, width, height)

    return View2D(width, height, voxels, cells)
