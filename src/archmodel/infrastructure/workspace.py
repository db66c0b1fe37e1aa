"""Workspace — a model persisted as a single JSON file.

The Workspace is the single dependency injected into every service. It
owns the model (hydrated lazily from the file on first access), the
graph engine built over it, and writing the model back.

INVARIANT: A file that fails to hydrate is never partially loaded.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from archmodel.domain.documents import ModelDocument
from archmodel.domain.hydrator import dehydrate, hydrate
from archmodel.domain.model import Model
from archmodel.infrastructure.graph.engine import GraphEngine

logger = logging.getLogger(__name__)


def read_model_file(path: Path) -> Model:
    """Read and hydrate the model stored at *path*.

    Raises:
        pydantic.ValidationError: If the file is not a valid model document.
        ModelError: If the document's references do not resolve.
    """
    document = ModelDocument.from_json(path.read_bytes())
    return hydrate(document)


def write_model_file(path: Path, model: Model, *, indent: int | None = 2) -> None:
    """Serialize *model* to *path*, replacing it atomically.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = dehydrate(model).to_json(indent=indent)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(rendered)
            fh.write("\n")
        Path(tmp_name).replace(path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class Workspace:
    """A model file plus the in-memory state built from it."""

    def __init__(
        self,
        path: Path,
        *,
        indent: int | None = 2,
        derive_on_save: bool = False,
    ) -> None:
        self.path = path
        self.indent = indent
        self.derive_on_save = derive_on_save
        self._model: Model | None = None
        self._graph: GraphEngine | None = None

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> Model:
        """The model, hydrated from the file on first access (empty if none)."""
        if self._model is None:
            if self.exists:
                self._model = read_model_file(self.path)
                logger.debug("Loaded workspace %s", self.path)
            else:
                self._model = Model()
        return self._model

    def replace_model(self, model: Model) -> None:
        self._model = model
        self.invalidate()

    @property
    def graph(self) -> GraphEngine:
        """The graph engine over the current model (created lazily)."""
        if self._graph is None:
            self._graph = GraphEngine(self.model)
        return self._graph

    def invalidate(self) -> None:
        """Drop cached graph views after the model changed."""
        self._graph = None

    def save(self) -> list[str]:
        """Write the model back to the file.

        Returns the IDs of implicit relationships derived first when
        ``derive_on_save`` is set.
        """
        derived: list[str] = []
        if self.derive_on_save:
            derived = [r.id for r in self.model.add_implicit_relationships()]
        write_model_file(self.path, self.model, indent=self.indent)
        self.invalidate()
        logger.debug("Saved workspace %s", self.path)
        return derived
