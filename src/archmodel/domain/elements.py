"""Element variants of the architecture model graph.

Ownership is tree-shaped: a parent owns its children (software system ->
containers -> components, deployment node -> nested nodes and container
instances) and every element owns its outgoing relationships. ``parent``
and ``model`` are plain back-references used for upward traversal and
for delegating creation to the owning :class:`~archmodel.domain.model.Model`;
they never own anything.

Elements compare and hash by identity so they can key the candidate
maps built while deriving implicit relationships.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from archmodel.domain.types import (
    DEFAULT_DEPLOYMENT_ENVIRONMENT,
    ElementKind,
    InteractionStyle,
    Location,
)

if TYPE_CHECKING:
    from archmodel.domain.model import Model
    from archmodel.domain.relationship import Relationship


@dataclass
class Enterprise:
    """The organisation the modelled systems belong to."""

    name: str


@dataclass(eq=False)
class Element:
    """Common state for every node in the graph."""

    kind: ClassVar[ElementKind]

    name: str = ""
    description: str = ""
    id: str = ""
    parent: Element | None = field(default=None, repr=False)
    relationships: list[Relationship] = field(default_factory=list, repr=False)
    model: Model | None = field(default=None, repr=False)

    @property
    def children(self) -> list[Element]:
        """Elements owned by this one, in insertion order."""
        return []

    def ancestors(self) -> Iterator[Element]:
        """Yield parent, grandparent, ... up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    @property
    def canonical_path(self) -> str:
        """Slash-separated names from the root down to this element."""
        names = [self.name, *(a.name for a in self.ancestors())]
        return "/" + "/".join(reversed(names))

    def has(self, relationship: Relationship) -> bool:
        """Whether an outgoing edge already matches *relationship*'s destination and description."""
        return any(
            r.destination is relationship.destination and r.description == relationship.description
            for r in self.relationships
        )

    def has_efferent_relationship_with(self, other: Element) -> bool:
        """Whether any outgoing edge points at *other*."""
        return self.get_efferent_relationship_with(other) is not None

    def get_efferent_relationship_with(self, other: Element) -> Relationship | None:
        for relationship in self.relationships:
            if relationship.destination is other:
                return relationship
        return None

    def uses(
        self,
        destination: Element | None,
        description: str,
        technology: str | None = None,
        interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS,
    ) -> Relationship | None:
        """Add an outgoing relationship; ``None`` if an identical one exists."""
        return self._require_model().add_relationship(
            self, destination, description, technology, interaction_style
        )

    def _require_model(self) -> Model:
        if self.model is None:
            msg = f"{self.kind} {self.name!r} is not part of a model"
            raise RuntimeError(msg)
        return self.model

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}:{self.name}"


@dataclass(eq=False)
class Person(Element):
    """A human user of the modelled systems."""

    kind: ClassVar[ElementKind] = ElementKind.PERSON

    location: Location = Location.UNSPECIFIED


@dataclass(eq=False)
class SoftwareSystem(Element):
    """The top level of the static structure; owns containers."""

    kind: ClassVar[ElementKind] = ElementKind.SOFTWARE_SYSTEM

    location: Location = Location.UNSPECIFIED
    containers: list[Container] = field(default_factory=list, repr=False)

    @property
    def children(self) -> list[Element]:
        return list(self.containers)

    def get_container_with_name(self, name: str) -> Container | None:
        return next((c for c in self.containers if c.name == name), None)

    def add_container(self, name: str, description: str = "", technology: str = "") -> Container:
        """Create a container in this system.

        Raises:
            NameConflictError: If a container with *name* already exists here.
        """
        return self._require_model().add_container(self, name, description, technology)


@dataclass(eq=False)
class Container(Element):
    """A separately deployable unit inside a software system; owns components."""

    kind: ClassVar[ElementKind] = ElementKind.CONTAINER

    technology: str = ""
    components: list[Component] = field(default_factory=list, repr=False)

    @property
    def software_system(self) -> SoftwareSystem | None:
        return self.parent if isinstance(self.parent, SoftwareSystem) else None

    @property
    def children(self) -> list[Element]:
        return list(self.components)

    def get_component_with_name(self, name: str) -> Component | None:
        return next((c for c in self.components if c.name == name), None)

    def add_component(
        self,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        type: str | None = None,
        source_path: str | None = None,
    ) -> Component:
        """Create a component in this container.

        Raises:
            NameConflictError: If a component with *name* already exists here.
        """
        return self._require_model().add_component(
            self, name, description, technology, type=type, source_path=source_path
        )


@dataclass(eq=False)
class Component(Element):
    """A grouping of code inside a container."""

    kind: ClassVar[ElementKind] = ElementKind.COMPONENT

    technology: str = ""
    type: str | None = None
    source_path: str | None = None

    @property
    def container(self) -> Container | None:
        return self.parent if isinstance(self.parent, Container) else None


@dataclass(eq=False)
class DeploymentNode(Element):
    """Infrastructure that hosts container instances; may nest other nodes."""

    kind: ClassVar[ElementKind] = ElementKind.DEPLOYMENT_NODE

    technology: str = ""
    environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT
    instances: int = 1
    properties: dict[str, str] = field(default_factory=dict)
    deployment_nodes: list[DeploymentNode] = field(default_factory=list, repr=False)
    container_instances: list[ContainerInstance] = field(default_factory=list, repr=False)

    @property
    def children(self) -> list[Element]:
        return [*self.deployment_nodes, *self.container_instances]

    def get_deployment_node_with_name(self, name: str) -> DeploymentNode | None:
        return next((n for n in self.deployment_nodes if n.name == name), None)

    def add_deployment_node(
        self,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        instances: int = 1,
        properties: dict[str, str] | None = None,
    ) -> DeploymentNode:
        """Create a child node in the same environment.

        Raises:
            NameConflictError: If a child node with *name* already exists here.
        """
        return self._require_model().add_deployment_node(
            name,
            description,
            technology,
            environment=self.environment,
            instances=instances,
            properties=properties,
            parent=self,
        )

    def add(self, container: Container) -> ContainerInstance:
        """Place an instance of *container* on this node."""
        return self._require_model().add_container_instance(self, container)


@dataclass(eq=False)
class ContainerInstance(Element):
    """A container deployed onto a deployment node in one environment."""

    kind: ClassVar[ElementKind] = ElementKind.CONTAINER_INSTANCE

    container: Container | None = field(default=None, repr=False)
    instance_number: int = 1
    environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT

    @property
    def container_id(self) -> str | None:
        return self.container.id if self.container is not None else None

    @property
    def deployment_node(self) -> DeploymentNode | None:
        return self.parent if isinstance(self.parent, DeploymentNode) else None
