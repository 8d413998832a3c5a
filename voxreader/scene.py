"""Scene graph, layer and material structures for VoxReader.

MagicaVoxel arranges models in a scene graph made of three node kinds:

     T          T : Transform node
     |          G : Group node
     G          S : Shape node
    / \\
   T   T
   |   |
   G   S
  / \\
 T   T
 |   |
 S   S

Nodes, layers and materials are addressed by an explicit id stored in their
chunk, so they are kept in sparse id-indexed tables rather than lists.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import ClassVar, Generic, Iterator, Optional, TypeVar, Union

from voxreader.errors import DuplicateSceneNodeIdError, ReservedFieldViolationError
from voxreader.voxfile import ByteIter, Chunk, Dictionary

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dict_get(dictionary: Dictionary, key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the value of the first `key` entry of a dictionary."""
    for entry_key, value in dictionary:
        if entry_key == key:
            return value
    return default


class SparseTable(Generic[T]):
    """Id-indexed table that grows to fit the highest id stored.

    Its size is one past the highest id ever stored; slots below that which
    were never written read as None, as do negative ids and ids past the end.
    """

    def __init__(self):
        self._items: dict[int, T] = {}
        self._size = 0

    def get(self, id: int) -> Optional[T]:
        if id < 0 or id >= self._size:
            return None
        return self._items.get(id)

    def set(self, id: int, item: T):
        if id < 0:
            raise IndexError(f"Negative table id: {id}")
        self._items[id] = item
        self._size = max(self._size, id + 1)

    def items(self) -> Iterator[tuple[int, T]]:
        """Iterate over populated slots in id order."""
        for id in sorted(self._items):
            yield id, self._items[id]

    def __contains__(self, id) -> bool:
        return self.get(id) is not None

    def __len__(self):
        return self._size


class NodeKind(enum.Enum):
    TRANSFORM = b"nTRN"
    GROUP = b"nGRP"
    SHAPE = b"nSHP"


@dataclass
class TransformNode:
    """Transform node (nTRN).

    int32   : node id
    DICT    : node attributes
        (_name : string)
        (_hidden : 0/1)
    int32   : child node id
    int32   : reserved id (must be -1)
    int32   : layer id
    int32   : num of frames

    // for each frame
    {
    DICT    : frame attributes
        (_r : int8)    rotation
        (_t : int32x3) translation
        (_f : int32)   frame index, start from 0
    }xN
    """

    kind: ClassVar[NodeKind] = NodeKind.TRANSFORM

    node_id: int
    attributes: Dictionary
    child_node_id: int
    layer_id: int
    frames: list[Dictionary] = field(default_factory=list)

    @classmethod
    def read(cls, byte_iter: ByteIter) -> "TransformNode":
        node_id = byte_iter.read_uint32()
        attributes = byte_iter.read_dict()
        child_node_id = byte_iter.read_int32()
        reserved_id = byte_iter.read_int32()
        if reserved_id != -1:
            raise ReservedFieldViolationError(
                f"Transform node {node_id}: reserved id must be -1, got {reserved_id}"
            )
        layer_id = byte_iter.read_int32()
        num_frames = byte_iter.read_uint32()

        frames = []
        for _ in range(num_frames):
            frames.append(byte_iter.read_dict())

        return cls(node_id, attributes, child_node_id, layer_id, frames)

    @property
    def name(self) -> Optional[str]:
        return dict_get(self.attributes, "_name")

    @property
    def hidden(self) -> bool:
        return dict_get(self.attributes, "_hidden") == "1"


@dataclass
class GroupNode:
    """Group node (nGRP).

    int32   : node id
    DICT    : node attributes
    int32   : num of children nodes

    // for each child
    {
    int32   : child node id
    }xN
    """

    kind: ClassVar[NodeKind] = NodeKind.GROUP

    node_id: int
    attributes: Dictionary
    child_node_ids: list[int] = field(default_factory=list)

    @classmethod
    def read(cls, byte_iter: ByteIter) -> "GroupNode":
        node_id = byte_iter.read_uint32()
        attributes = byte_iter.read_dict()
        num_children = byte_iter.read_uint32()

        child_node_ids = []
        for _ in range(num_children):
            child_node_ids.append(byte_iter.read_uint32())

        return cls(node_id, attributes, child_node_ids)


@dataclass
class ShapeModel:
    """A model referenced by a shape node; `model_id` indexes the document's models."""

    model_id: int
    attributes: Dictionary


@dataclass
class ShapeNode:
    """Shape node (nSHP).

    int32   : node id
    DICT    : node attributes
    int32   : num of models

    // for each model
    {
    int32   : model id
    DICT    : model attributes : reserved
        (_f : int32)   frame index, start from 0
    }xN
    """

    kind: ClassVar[NodeKind] = NodeKind.SHAPE

    node_id: int
    attributes: Dictionary
    models: list[ShapeModel] = field(default_factory=list)

    @classmethod
    def read(cls, byte_iter: ByteIter) -> "ShapeNode":
        node_id = byte_iter.read_uint32()
        attributes = byte_iter.read_dict()
        num_models = byte_iter.read_uint32()

        models = []
        for _ in range(num_models):
            model_id = byte_iter.read_uint32()
            models.append(ShapeModel(model_id, byte_iter.read_dict()))

        return cls(node_id, attributes, models)


SceneNode = Union[TransformNode, GroupNode, ShapeNode]

NODE_TYPES: dict[bytes, type] = {
    NodeKind.TRANSFORM.value: TransformNode,
    NodeKind.GROUP.value: GroupNode,
    NodeKind.SHAPE.value: ShapeNode,
}


class SceneGraph:
    """Id-indexed table of scene graph nodes; node 0 is the root."""

    def __init__(self):
        self._nodes: SparseTable[SceneNode] = SparseTable()

    def read_node(self, chunk: Chunk) -> SceneNode:
        """Decode an nTRN, nGRP or nSHP chunk and register the node."""
        node = NODE_TYPES[chunk.id].read(ByteIter(chunk.content))
        self.add_node(node)
        return node

    def add_node(self, node: SceneNode):
        if self._nodes.get(node.node_id) is not None:
            raise DuplicateSceneNodeIdError(f"Duplicate scene graph node id {node.node_id}")
        self._nodes.set(node.node_id, node)
        logger.debug("Added %s node %d", node.kind.name.lower(), node.node_id)

    def get_node(self, id: int) -> Optional[SceneNode]:
        """Return the node stored at `id`, or None."""
        return self._nodes.get(id)

    def get_root(self) -> Optional[SceneNode]:
        return self.get_node(0)

    def nodes(self) -> Iterator[tuple[int, SceneNode]]:
        return self._nodes.items()

    def __len__(self):
        return len(self._nodes)


@dataclass
class Layer:
    """Layer (LAYR).

    int32   : layer id
    DICT    : layer attribute
        (_name : string)
        (_hidden : 0/1)
    """

    layer_id: int
    attributes: Dictionary

    @classmethod
    def read(cls, chunk: Chunk) -> "Layer":
        byte_iter = ByteIter(chunk.content)
        layer_id = byte_iter.read_uint32()
        return cls(layer_id, byte_iter.read_dict())

    @property
    def name(self) -> Optional[str]:
        return dict_get(self.attributes, "_name")

    @property
    def hidden(self) -> bool:
        return dict_get(self.attributes, "_hidden") == "1"


@dataclass
class Material:
    """Material (MATL).

    int32   : material id
    DICT    : material properties
          (_type : str) _diffuse, _metal, _glass, _emit
          (_weight : float) range 0 ~ 1
          (_rough : float)
          (_spec : float)
          (_ior : float)
          (_att : float)
          (_flux : float)
          (_plastic)

    Properties are kept as read; none of them is interpreted.
    """

    material_id: int
    properties: Dictionary

    @classmethod
    def read(cls, chunk: Chunk) -> "Material":
        byte_iter = ByteIter(chunk.content)
        material_id = byte_iter.read_uint32()
        return cls(material_id, byte_iter.read_dict())

    @property
    def type(self) -> Optional[str]:
        return dict_get(self.properties, "_type")
