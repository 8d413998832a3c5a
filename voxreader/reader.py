"""Loading .vox sources.

`load` turns a buffer or binary stream into a Document. `VoxReader` keeps the
document of its last successful load: a failed load raises and leaves the
previous document untouched.
"""

import logging
from typing import Optional

from voxreader.document import Document, build_document
from voxreader.model import Model
from voxreader.palette import Palette
from voxreader.scene import Layer, Material, SceneGraph, SceneNode
from voxreader.view2d import View2D, project
from voxreader.voxfile import ByteSource, VoxFile

logger = logging.getLogger(__name__)


def load(source: ByteSource) -> Document:
    """Read a .vox buffer or binary stream into a new document."""
    vox_file = VoxFile.read(source)
    return build_document(vox_file.main, vox_file.version)


class VoxReader:
    """Holds the models, palette, scene graph, layers and materials of a .vox source."""

    def __init__(self, document: Optional[Document] = None):
        self.document = document if document is not None else Document()

    def load(self, source: ByteSource) -> Document:
        """Read `source` and replace the current document with it.

        The current document is only replaced once the whole source has been
        decoded.
        """
        document = load(source)
        self.document = document
        return document

    @property
    def models(self) -> list[Model]:
        return self.document.models

    @property
    def palette(self) -> Palette:
        return self.document.palette

    @property
    def scene_graph(self) -> SceneGraph:
        return self.document.scene_graph

    def get_node(self, id: int) -> Optional[SceneNode]:
        return self.document.get_node(id)

    def get_root(self) -> Optional[SceneNode]:
        return self.document.get_root()

    def get_layer(self, id: int) -> Optional[Layer]:
        return self.document.get_layer(id)

    def get_material(self, id: int) -> Optional[Material]:
        return self.document.get_material(id)

    def view2d(self, viewport, flags: int = 0, model_index: int = 0) -> View2D:
        """Create a 2D view of a model; see `voxreader.view2d.project`."""
        return project(self.document, model_index, viewport, flags)
