"""Errors raised by VoxReader.

Every failure while decoding a .vox source or projecting one of its models is
reported as a subclass of VoxError, which is a ValueError so that callers
catching ValueError keep working.
"""


class VoxError(ValueError):
    """Base class of all VoxReader errors."""


class MagicMismatchError(VoxError):
    """The source does not start with the 'VOX ' magic."""


class UnsupportedVersionError(VoxError):
    """The file header declares a version other than 150."""


class UnexpectedEofError(VoxError):
    """The source (or a chunk's content) ended before a read could complete."""


class ChunkSizeMismatchError(VoxError):
    """A chunk's children did not add up to its declared children size."""


class UnpairedSizeVoxelListError(VoxError):
    """A SIZE chunk was not immediately followed by an XYZI chunk."""


class PaletteSizeMismatchError(VoxError):
    """An RGBA chunk holds fewer than 256 colors."""


class ReservedFieldViolationError(VoxError):
    """A reserved field does not hold its mandated value."""


class DuplicateSceneNodeIdError(VoxError):
    """Two scene graph nodes were registered under the same id."""


class UnknownViewportError(VoxError):
    """A 2D projection was requested for an unsupported viewport."""


class StringLengthOutOfBoundsError(VoxError):
    """A string's declared length reaches past the end of its buffer."""


class InvalidModelSizeError(VoxError):
    """A SIZE chunk declares a zero dimension."""


class ModelIndexError(VoxError, IndexError):
    """A model index does not address a model of the document."""
