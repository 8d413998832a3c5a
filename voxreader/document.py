"""Document class for VoxReader.

A document is everything decoded from one .vox source: models, the active
palette, the scene graph, layers and materials. `build_document` walks the
children of the main chunk and dispatches each of them by its id:

    Chunk 'MAIN'
    {
        // pack of models
        Chunk 'PACK'    : optional

        // models
        Chunk 'SIZE'
        Chunk 'XYZI'

        ...

        // palette
        Chunk 'RGBA'    : optional

        // scene graph, layers, materials
        Chunk 'nTRN' / 'nGRP' / 'nSHP' / 'LAYR' / 'MATL'

        // anything else is skipped
    }
"""

import logging
from typing import Iterator, Optional

from voxreader.errors import UnpairedSizeVoxelListError
from voxreader.model import Model
from voxreader.palette import DEFAULT_PALETTE, Palette
from voxreader.scene import (
    NODE_TYPES,
    Layer,
    Material,
    SceneGraph,
    SceneNode,
    SparseTable,
)
from voxreader.voxfile import SUPPORTED_VERSION, ByteIter, Chunk

logger = logging.getLogger(__name__)

PACK_ID = b"PACK"
SIZE_ID = b"SIZE"
XYZI_ID = b"XYZI"
RGBA_ID = b"RGBA"
LAYR_ID = b"LAYR"
MATL_ID = b"MATL"


class Document:
    """Document class."""

    def __init__(self, version: int = SUPPORTED_VERSION):
        """Document constructor; an empty document uses the default palette."""
        self.version = version
        self.models: list[Model] = []
        self.palette: Palette = DEFAULT_PALETTE
        self.scene_graph = SceneGraph()
        # advisory model count from the PACK chunk
        self.model_count_hint = 1
        self._layers: SparseTable[Layer] = SparseTable()
        self._materials: SparseTable[Material] = SparseTable()

    def get_node(self, id: int) -> Optional[SceneNode]:
        return self.scene_graph.get_node(id)

    def get_root(self) -> Optional[SceneNode]:
        return self.scene_graph.get_root()

    def get_layer(self, id: int) -> Optional[Layer]:
        return self._layers.get(id)

    def get_material(self, id: int) -> Optional[Material]:
        return self._materials.get(id)

    def set_layer(self, layer: Layer):
        """Store a layer at its id, replacing any layer already there."""
        self._layers.set(layer.layer_id, layer)

    def set_material(self, material: Material):
        """Store a material at its id, replacing any material already there."""
        self._materials.set(material.material_id, material)

    def layers(self) -> Iterator[tuple[int, Layer]]:
        return self._layers.items()

    def materials(self) -> Iterator[tuple[int, Material]]:
        return self._materials.items()

    @property
    def layer_count(self) -> int:
        """Size of the layer table: one past the highest layer id."""
        return len(self._layers)

    @property
    def material_count(self) -> int:
        """Size of the material table: one past the highest material id."""
        return len(self._materials)

    def __repr__(self):
        return (
            f"<Document models={len(self.models)} nodes={len(self.scene_graph)} "
            f"layers={self.layer_count} materials={self.material_count} "
            f"palette={'default' if self.palette.is_default else 'custom'}>"
        )


def build_document(main: Chunk, version: int = SUPPORTED_VERSION) -> Document:
    """Build a document from the children of the main chunk."""
    document = Document(version)

    children = main.children
    pack_read = False
    i = 0
    while i < len(children):
        chunk = children[i]
        id = chunk.id

        if id == PACK_ID:
            document.model_count_hint = ByteIter(chunk.content).read_uint32()
            pack_read = True
        elif id == SIZE_ID:
            # the voxel list must follow its size directly
            if i + 1 >= len(children) or children[i + 1].id != XYZI_ID:
                following = children[i + 1].id if i + 1 < len(children) else None
                raise UnpairedSizeVoxelListError(
                    f"Expected {XYZI_ID!r} following {SIZE_ID!r}, got {following!r}"
                )
            document.models.append(Model.read(chunk, children[i + 1]))
            i += 1
        elif id == RGBA_ID:
            document.palette = Palette.read(chunk)
        elif id in NODE_TYPES:
            document.scene_graph.read_node(chunk)
        elif id == LAYR_ID:
            document.set_layer(Layer.read(chunk))
        elif id == MATL_ID:
            document.set_material(Material.read(chunk))
        else:
            logger.debug("Skipping unknown chunk %r", id)

        i += 1

    if pack_read and document.model_count_hint != len(document.models):
        logger.warning(
            "PACK chunk announces %d models but %d were read",
            document.model_count_hint,
            len(document.models),
        )

    logger.info("Built %r", document)
    return document
