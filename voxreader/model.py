"""Model and Voxel classes for VoxReader.

A model is a dense bounding box holding a sparse list of voxels: any position
not listed is empty.
"""

import logging
from typing import NamedTuple

from voxreader.errors import InvalidModelSizeError, UnexpectedEofError
from voxreader.voxfile import ByteIter, Chunk

logger = logging.getLogger(__name__)


class Voxel(NamedTuple):
    """A single colored voxel; `color_index` addresses the palette (1-255)."""

    x: int
    y: int
    z: int
    color_index: int


class Model:
    """Model class.

    SIZE chunk:
    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | size x
    4        | int        | size y
    4        | int        | size z : gravity direction
    -------------------------------------------------------------------------------

    XYZI chunk:
    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | numVoxels (N)
    4 x N    | int        | (x, y, z, colorIndex) : 1 byte for each component
    -------------------------------------------------------------------------------
    """

    def __init__(self, size: tuple[int, int, int], voxels: list[Voxel]):
        """Model constructor."""
        self.size = size
        self.voxels = voxels

    @property
    def size_x(self) -> int:
        return self.size[0]

    @property
    def size_y(self) -> int:
        return self.size[1]

    @property
    def size_z(self) -> int:
        return self.size[2]

    @property
    def voxel_count(self) -> int:
        return len(self.voxels)

    def in_bounds(self, voxel: Voxel) -> bool:
        """Whether the voxel lies inside the model's bounding box."""
        return (
            voxel.x < self.size[0] and voxel.y < self.size[1] and voxel.z < self.size[2]
        )

    @classmethod
    def read(cls, size_chunk: Chunk, xyzi_chunk: Chunk) -> "Model":
        """Build a model from a SIZE chunk and the XYZI chunk following it."""
        byte_iter = ByteIter(size_chunk.content)
        size = (byte_iter.read_uint32(), byte_iter.read_uint32(), byte_iter.read_uint32())
        if 0 in size:
            raise InvalidModelSizeError(f"Invalid model size {size}")

        byte_iter = ByteIter(xyzi_chunk.content)
        num_voxels = byte_iter.read_uint32()
        if num_voxels * 4 > byte_iter.remaining:
            raise UnexpectedEofError(
                f"Chunk {xyzi_chunk.id!r} declares {num_voxels} voxels but only "
                f"holds {byte_iter.remaining // 4}"
            )

        voxels = []
        skipped = 0
        for _ in range(num_voxels):
            x, y, z, color_index = byte_iter.read_bytes(4)
            # color index 0 is "no voxel"
            if color_index == 0:
                skipped += 1
                continue
            voxels.append(Voxel(x, y, z, color_index))

        if skipped:
            logger.debug("Dropped %d voxels with color index 0", skipped)
        logger.debug("Read model of size %s with %d voxels", size, len(voxels))

        return cls(size, voxels)

    def __repr__(self):
        return f"<Model size={self.size} voxels={len(self.voxels)}>"
