"""VoxReader: read MagicaVoxel .vox files."""

from voxreader.document import Document, build_document
from voxreader.errors import (
    ChunkSizeMismatchError,
    DuplicateSceneNodeIdError,
    InvalidModelSizeError,
    MagicMismatchError,
    ModelIndexError,
    PaletteSizeMismatchError,
    ReservedFieldViolationError,
    StringLengthOutOfBoundsError,
    UnexpectedEofError,
    UnknownViewportError,
    UnpairedSizeVoxelListError,
    UnsupportedVersionError,
    VoxError,
)
from voxreader.model import Model, Voxel
from voxreader.palette import DEFAULT_PALETTE, Color, Palette
from voxreader.reader import VoxReader, load
from voxreader.scene import (
    GroupNode,
    Layer,
    Material,
    SceneGraph,
    ShapeModel,
    ShapeNode,
    TransformNode,
    dict_get,
)
from voxreader.view2d import View2D, View2DFlags, Viewport, project
from voxreader.voxfile import ByteIter, Chunk, VoxFile

__version__ = "0.1.0"
