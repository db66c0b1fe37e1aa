"""ManifestStrategy — discover components from a JSON manifest.

Manifest format::

    {
      "components": [
        {"name": "OrderController", "type": "com.shop.OrderController",
         "technology": "Spring MVC", "sourcePath": "src/OrderController.java",
         "uses": [{"name": "OrderRepository", "description": "Reads from"}]},
        {"name": "OrderRepository"}
      ]
    }

``uses`` entries may name components declared by another strategy; they
are resolved in the dependency phase, after every strategy has run its
component phase.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from archmodel.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from archmodel.analysis.component_finder import ComponentFinder
    from archmodel.domain.elements import Component

logger = logging.getLogger(__name__)


class _ManifestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ManifestDependency(_ManifestModel):
    name: str
    description: str = ""
    technology: str | None = None


class ManifestComponent(_ManifestModel):
    name: str
    type: str | None = None
    description: str = ""
    technology: str = ""
    source_path: str | None = None
    uses: list[ManifestDependency] = Field(default_factory=list)


class ComponentManifest(_ManifestModel):
    components: list[ManifestComponent] = Field(default_factory=list)


class ManifestStrategy:
    """Discovery strategy backed by a :class:`ComponentManifest`."""

    def __init__(self, manifest: ComponentManifest) -> None:
        self.manifest = manifest

    @classmethod
    def from_file(cls, path: Path) -> ManifestStrategy:
        return cls(ComponentManifest.model_validate_json(path.read_text(encoding="utf-8")))

    @hookimpl
    def find_components(self, finder: ComponentFinder) -> list[Component]:
        return [
            finder.found_component(
                entry.name,
                entry.type,
                entry.description,
                entry.technology,
                entry.source_path,
            )
            for entry in self.manifest.components
        ]

    @hookimpl
    def find_dependencies(self, finder: ComponentFinder) -> None:
        container = finder.container
        for entry in self.manifest.components:
            source = container.get_component_with_name(entry.name)
            if source is None:
                continue
            for dependency in entry.uses:
                destination = container.get_component_with_name(dependency.name)
                if destination is None:
                    logger.warning(
                        "Component %r uses unknown component %r", entry.name, dependency.name
                    )
                    continue
                source.uses(destination, dependency.description, dependency.technology)
