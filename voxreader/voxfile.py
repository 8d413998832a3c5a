"""VoxFile structure and related functions.

The goal of this module is to provide the low level pieces needed to read
MagicaVoxel .vox files: a cursor over the raw bytes, readers for the primitive
types the format is built from, and the recursive chunk tree. Turning chunks
into models, palettes and scene graphs is left to the document module.
"""

import logging
from typing import BinaryIO, Optional, Union

from voxreader.errors import (
    ChunkSizeMismatchError,
    MagicMismatchError,
    StringLengthOutOfBoundsError,
    UnexpectedEofError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)

MAGIC = b"VOX "
SUPPORTED_VERSION = 150

# tag + content size + children size
CHUNK_HEADER_SIZE = 12

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]
Dictionary = list[tuple[str, str]]


class ByteIter:
    """Cursor over a byte buffer.

    Every read advances the cursor. A read that would run past the end of the
    buffer raises UnexpectedEofError and leaves the cursor where it was.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    @classmethod
    def from_source(cls, source: ByteSource) -> "ByteIter":
        """Create a cursor over an in-memory buffer or a readable binary stream."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            return cls(source)
        if hasattr(source, "read"):
            return cls(source.read())
        raise TypeError(f"Cannot read .vox data from {type(source).__name__}")

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def __bool__(self):
        return self.remaining > 0

    def peek_bytes(self, n: int) -> bytes:
        return self.data[self.offset : self.offset + n]

    def read_bytes(self, n: int) -> bytes:
        return Bytes.read(self, n)

    def read_uint32(self) -> int:
        return UInt32.read(self)

    def read_int32(self) -> int:
        return Int32.read(self)

    def read_string(self) -> str:
        return String.read(self)

    def read_dict(self) -> Dictionary:
        return Dict.read(self)


class Bytes:
    """Representative of .vox file bytes."""

    @staticmethod
    def read(byte_iter: ByteIter, n: int) -> bytes:
        """Read n bytes from bytes."""
        if n > byte_iter.remaining:
            raise UnexpectedEofError(
                f"Cannot read {n} bytes at offset {byte_iter.offset:#x}: "
                f"only {byte_iter.remaining} left"
            )
        start = byte_iter.offset
        byte_iter.offset += n
        return byte_iter.data[start : byte_iter.offset]


class UInt32:
    """Representative of .vox file unsigned 32-bit integers."""

    @staticmethod
    def read(byte_iter: ByteIter) -> int:
        """Read an unsigned 32-bit integer from bytes."""
        return int.from_bytes(Bytes.read(byte_iter, 4), "little", signed=False)


class Int32:
    """Representative of .vox file 32-bit integers."""

    @staticmethod
    def read(byte_iter: ByteIter) -> int:
        """Read a 32-bit integer from bytes."""
        return int.from_bytes(Bytes.read(byte_iter, 4), "little", signed=True)


class String:
    """Representative of .vox file strings.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | buffer size (in bytes)
    N        | char       | buffer (no ending '\\0')
    -------------------------------------------------------------------------------
    """

    @staticmethod
    def read(byte_iter: ByteIter) -> str:
        """Read a string from bytes."""
        length = UInt32.read(byte_iter)
        if length > byte_iter.remaining:
            raise StringLengthOutOfBoundsError(
                f"String of {length} bytes at offset {byte_iter.offset:#x} "
                f"exceeds the {byte_iter.remaining} bytes left"
            )
        return Bytes.read(byte_iter, length).decode("utf-8", "surrogateescape")


class Dict:
    """Representative of .vox file dictionaries.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | num of key-value pairs
    // for each key-value pair
    {
    STRING   | key
    STRING   | value
    }xN
    -------------------------------------------------------------------------------

    Pairs are kept as a list in the order they were read; keys may repeat.
    """

    @staticmethod
    def read(byte_iter: ByteIter) -> Dictionary:
        """Read a dictionary from bytes."""
        length = UInt32.read(byte_iter)
        dict_ = []
        for _ in range(length):
            key = String.read(byte_iter)
            value = String.read(byte_iter)
            dict_.append((key, value))
        return dict_


class Chunk:
    """Chunk class.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    1x4      | char       | chunk id
    4        | int        | num bytes of chunk content (N)
    4        | int        | num bytes of children chunks (M)
    N        |            | chunk content
    M        |            | children chunks
    -------------------------------------------------------------------------------

    Chunks only live while a source is being read; the document keeps none of
    them.
    """

    def __init__(self, id: bytes, content: bytes, children: Optional[list["Chunk"]] = None):
        """Chunk constructor."""
        self.id = id
        self.content = content
        self.children = children if children is not None else []

    def __repr__(self):
        return f"Chunk({self.id!r}, {len(self.content)} bytes, {len(self.children)} children)"

    @property
    def size(self) -> int:
        """Number of bytes the chunk occupies when encoded, header included."""
        return CHUNK_HEADER_SIZE + len(self.content) + sum(child.size for child in self.children)

    @classmethod
    def read(cls, byte_iter: ByteIter) -> "Chunk":
        """Read a chunk and, recursively, all of its children."""
        id = byte_iter.read_bytes(4)
        content_size = byte_iter.read_uint32()
        children_size = byte_iter.read_uint32()

        content = byte_iter.read_bytes(content_size)
        children_bytes = byte_iter.read_bytes(children_size)

        logger.debug(
            "Read chunk %r: %d content bytes, %d children bytes",
            id,
            content_size,
            children_size,
        )

        return cls(id, content, cls.read_children(id, children_bytes))

    @classmethod
    def read_children(cls, id: bytes, data: bytes) -> list["Chunk"]:
        """Read the children region of chunk `id`.

        Reading stops exactly at the end of the region; a child that runs past
        it means the declared children size is wrong.
        """
        children = []
        child_iter = ByteIter(data)
        while child_iter.offset < len(data):
            start = child_iter.offset
            try:
                children.append(cls.read(child_iter))
            except UnexpectedEofError as e:
                raise ChunkSizeMismatchError(
                    f"Child of chunk {id!r} at offset {start:#x} runs past the "
                    f"declared children size of {len(data)} bytes"
                ) from e
        return children


def read_header(byte_iter: ByteIter) -> int:
    """Check the 'VOX ' magic and return the file version."""
    header = byte_iter.peek_bytes(4)
    if header != MAGIC:
        raise MagicMismatchError(f"Invalid .vox file header: {header!r}")
    byte_iter.read_bytes(4)

    version = byte_iter.read_uint32()
    if version != SUPPORTED_VERSION:
        raise UnsupportedVersionError(
            f"Unsupported .vox version {version}; expected {SUPPORTED_VERSION}"
        )
    return version


class VoxFile:
    """VoxFile class: the file version plus the root of the chunk tree."""

    def __init__(self, version: int, main: Chunk):
        """VoxFile constructor."""
        self.version = version
        self.main = main

    @staticmethod
    def read(source: ByteSource) -> "VoxFile":
        """Read the header and the chunk tree from a buffer or binary stream."""
        byte_iter = ByteIter.from_source(source)

        version = read_header(byte_iter)

        main = Chunk.read(byte_iter)
        if main.id != b"MAIN":
            logger.debug("Root chunk is %r rather than b'MAIN'", main.id)
        if byte_iter:
            logger.warning(
                "Ignoring %d trailing bytes after the main chunk", byte_iter.remaining
            )

        return VoxFile(version, main)
