"""Model — the root owner of an architecture graph.

The model owns the top-level people, software systems and deployment
nodes, an id -> element index and an id -> relationship index covering
every nesting level, and the identity generator that feeds both.

Creation follows a lookup-or-create pattern whose duplicate outcome
depends on scope:

- Top level (people, software systems, top-level deployment nodes): a
  name already taken in scope returns ``None``.
- Nested (containers, components, child deployment nodes): a name
  already taken in scope raises :class:`NameConflictError`.

Relationships are unique per (source, destination, description); adding
a duplicate returns ``None``.

Not safe for concurrent mutation. Nothing is ever removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from archmodel.domain.elements import (
    Component,
    Container,
    ContainerInstance,
    DeploymentNode,
    Element,
    Enterprise,
    Person,
    SoftwareSystem,
)
from archmodel.domain.errors import (
    DuplicateIdentifierError,
    MissingDestinationError,
    ModelError,
    NameConflictError,
    RelationshipConflictError,
    UnresolvedReferenceError,
)
from archmodel.domain.ids import SequentialIdGenerator
from archmodel.domain.relationship import Relationship
from archmodel.domain.types import DEFAULT_DEPLOYMENT_ENVIRONMENT, InteractionStyle, Location

logger = logging.getLogger(__name__)


class Model:
    """An in-memory software architecture model."""

    def __init__(self, *, id_generator: SequentialIdGenerator | None = None) -> None:
        self.enterprise: Enterprise | None = None
        self.people: list[Person] = []
        self.software_systems: list[SoftwareSystem] = []
        self.deployment_nodes: list[DeploymentNode] = []
        self._elements_by_id: dict[str, Element] = {}
        self._relationships_by_id: dict[str, Relationship] = {}
        self._id_generator = id_generator or SequentialIdGenerator()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def id_generator(self) -> SequentialIdGenerator:
        return self._id_generator

    @property
    def elements(self) -> list[Element]:
        """Every registered element, in registration order."""
        return list(self._elements_by_id.values())

    @property
    def relationships(self) -> list[Relationship]:
        """Every registered relationship, in registration order."""
        return list(self._relationships_by_id.values())

    def find_element(self, element_id: str) -> Element | None:
        return self._elements_by_id.get(element_id)

    def get_element(self, element_id: str) -> Element:
        """Return the element registered under *element_id*.

        Raises:
            UnresolvedReferenceError: If no such element exists.
        """
        element = self._elements_by_id.get(element_id)
        if element is None:
            raise UnresolvedReferenceError(element_id)
        return element

    def find_relationship(self, relationship_id: str) -> Relationship | None:
        return self._relationships_by_id.get(relationship_id)

    def get_relationship(self, relationship_id: str) -> Relationship:
        relationship = self._relationships_by_id.get(relationship_id)
        if relationship is None:
            raise UnresolvedReferenceError(relationship_id, expected="relationship")
        return relationship

    def contains(self, element: Element) -> bool:
        return self._elements_by_id.get(element.id) is element

    def get_person_with_name(self, name: str) -> Person | None:
        return next((p for p in self.people if p.name == name), None)

    def get_software_system_with_name(self, name: str) -> SoftwareSystem | None:
        return next((s for s in self.software_systems if s.name == name), None)

    def get_software_system_with_id(self, system_id: str) -> SoftwareSystem | None:
        return next((s for s in self.software_systems if s.id == system_id), None)

    def get_deployment_node_with_name(
        self,
        name: str,
        environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT,
    ) -> DeploymentNode | None:
        """Return the top-level node called *name* in *environment*."""
        return next(
            (n for n in self.deployment_nodes if n.environment == environment and n.name == name),
            None,
        )

    @property
    def environments(self) -> list[str]:
        """Deployment environments in first-seen order."""
        return list(dict.fromkeys(n.environment for n in self.deployment_nodes))

    def deployment_nodes_in(self, environment: str) -> list[DeploymentNode]:
        return [n for n in self.deployment_nodes if n.environment == environment]

    def container_instances(self) -> Iterator[ContainerInstance]:
        for element in self._elements_by_id.values():
            if isinstance(element, ContainerInstance):
                yield element

    def container_instances_of(self, container: Container) -> list[ContainerInstance]:
        return [ci for ci in self.container_instances() if ci.container is container]

    # ------------------------------------------------------------------
    # Element graph
    # ------------------------------------------------------------------

    def add_person(
        self,
        name: str,
        description: str = "",
        *,
        location: Location = Location.UNSPECIFIED,
    ) -> Person | None:
        """Create a person, or return ``None`` if the name is already taken."""
        if self.get_person_with_name(name) is not None:
            logger.debug("Person %r already exists", name)
            return None
        person = Person(name=name, description=description, location=location)
        self.people.append(person)
        self._assign_and_register(person)
        return person

    def add_software_system(
        self,
        name: str,
        description: str = "",
        *,
        location: Location = Location.UNSPECIFIED,
    ) -> SoftwareSystem | None:
        """Create a software system, or return ``None`` if the name is already taken."""
        if self.get_software_system_with_name(name) is not None:
            logger.debug("Software system %r already exists", name)
            return None
        system = SoftwareSystem(name=name, description=description, location=location)
        self.software_systems.append(system)
        self._assign_and_register(system)
        return system

    def add_container(
        self,
        parent: SoftwareSystem,
        name: str,
        description: str = "",
        technology: str = "",
    ) -> Container:
        if parent.get_container_with_name(name) is not None:
            raise NameConflictError("container", name, f"software system {parent.name!r}")
        container = Container(name=name, description=description, technology=technology)
        container.parent = parent
        parent.containers.append(container)
        self._assign_and_register(container)
        return container

    def add_component(
        self,
        parent: Container,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        type: str | None = None,
        source_path: str | None = None,
    ) -> Component:
        if parent.get_component_with_name(name) is not None:
            raise NameConflictError("component", name, f"container {parent.name!r}")
        component = Component(
            name=name,
            description=description,
            technology=technology,
            type=type,
            source_path=source_path,
        )
        component.parent = parent
        parent.components.append(component)
        self._assign_and_register(component)
        return component

    def add_deployment_node(
        self,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT,
        instances: int = 1,
        properties: dict[str, str] | None = None,
        parent: DeploymentNode | None = None,
    ) -> DeploymentNode | None:
        """Create a deployment node at the top level or under *parent*.

        Top-level nodes are unique by name per environment (``None`` on a
        clash); child nodes are unique by name under their parent and take
        the parent's environment.

        Raises:
            NameConflictError: If *parent* already has a child called *name*.
        """
        if parent is None:
            if self.get_deployment_node_with_name(name, environment) is not None:
                logger.debug("Deployment node %r already exists in %s", name, environment)
                return None
        else:
            if parent.get_deployment_node_with_name(name) is not None:
                raise NameConflictError("deployment node", name, f"deployment node {parent.name!r}")
            environment = parent.environment

        node = DeploymentNode(
            name=name,
            description=description,
            technology=technology,
            environment=environment,
            instances=instances,
            properties=dict(properties or {}),
        )
        if parent is None:
            self.deployment_nodes.append(node)
        else:
            node.parent = parent
            parent.deployment_nodes.append(node)
        self._assign_and_register(node)
        return node

    def add_container_instance(
        self,
        deployment_node: DeploymentNode,
        container: Container | None,
    ) -> ContainerInstance:
        """Instantiate *container* on *deployment_node*.

        Container-to-container relationships between *container* and any
        container already instantiated in the same environment are mirrored
        as instance-to-instance relationships, linked back to the original.
        """
        if container is None:
            raise ModelError("A container must be specified.")

        environment = deployment_node.environment
        instance = ContainerInstance(
            name=container.name,
            description=container.description,
            container=container,
            instance_number=len(self.container_instances_of(container)) + 1,
            environment=environment,
        )
        instance.id = self._id_generator.generate_id(instance)
        instance.parent = deployment_node
        deployment_node.container_instances.append(instance)

        peers = [ci for ci in self.container_instances() if ci.environment == environment]
        for peer in peers:
            other = peer.container
            if other is None:
                continue
            for relationship in list(container.relationships):
                if relationship.destination is other:
                    self._replicate(relationship, instance, peer)
            for relationship in list(other.relationships):
                if relationship.destination is container:
                    self._replicate(relationship, peer, instance)

        self._register_element(instance)
        return instance

    def _replicate(
        self,
        relationship: Relationship,
        source: ContainerInstance,
        destination: ContainerInstance,
    ) -> None:
        replica = self.add_relationship(
            source,
            destination,
            relationship.description,
            relationship.technology,
            relationship.interaction_style,
        )
        if replica is not None:
            replica.tags = []
            replica.linked_relationship_id = relationship.id

    # ------------------------------------------------------------------
    # Relationship store
    # ------------------------------------------------------------------

    def add_relationship(
        self,
        source: Element,
        destination: Element | None,
        description: str = "",
        technology: str | None = None,
        interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS,
    ) -> Relationship | None:
        """Create a relationship, or return ``None`` if an identical one exists.

        Raises:
            MissingDestinationError: If *destination* is ``None``.
        """
        if destination is None:
            raise MissingDestinationError(source.id)
        relationship = Relationship(
            source=source,
            destination=destination,
            description=description,
            technology=technology,
            interaction_style=interaction_style,
        )
        if source.has(relationship):
            logger.debug("Relationship %s already exists", relationship)
            return None
        relationship.id = self._id_generator.generate_id(relationship)
        source.relationships.append(relationship)
        self._register_relationship(relationship)
        return relationship

    def modify_relationship(
        self,
        relationship: Relationship,
        description: str,
        technology: str | None,
    ) -> None:
        """Change the description and technology of *relationship* in place.

        Raises:
            RelationshipConflictError: If another outgoing edge of the same
                source already has this destination and *description*.
        """
        for sibling in relationship.source.relationships:
            if sibling is relationship:
                continue
            if sibling.destination is relationship.destination and sibling.description == description:
                raise RelationshipConflictError(relationship.id, description, sibling.id)
        relationship.description = description
        relationship.technology = technology

    def add_implicit_relationships(self) -> list[Relationship]:
        """Propagate relationships up the containment hierarchy.

        See :func:`archmodel.domain.implicit.add_implicit_relationships`.
        """
        from archmodel.domain.implicit import add_implicit_relationships

        return add_implicit_relationships(self)

    # ------------------------------------------------------------------
    # Registration (shared by the factories and the hydrator)
    # ------------------------------------------------------------------

    def register_element(self, element: Element) -> None:
        """Index an element that already carries an ID (hydration path).

        Raises:
            DuplicateIdentifierError: If the ID is already used.
        """
        self._register_element(element)

    def register_relationship(self, relationship: Relationship) -> None:
        """Index a relationship that already carries an ID (hydration path)."""
        self._register_relationship(relationship)

    def _assign_and_register(self, element: Element) -> None:
        element.id = self._id_generator.generate_id(element)
        self._register_element(element)
        logger.debug("Added %s", element)

    def _register_element(self, element: Element) -> None:
        self._check_unused(element.id)
        self._elements_by_id[element.id] = element
        element.model = self
        self._id_generator.found(element.id)

    def _register_relationship(self, relationship: Relationship) -> None:
        self._check_unused(relationship.id)
        self._relationships_by_id[relationship.id] = relationship
        self._id_generator.found(relationship.id)

    def _check_unused(self, entity_id: str) -> None:
        if entity_id in self._elements_by_id or entity_id in self._relationships_by_id:
            raise DuplicateIdentifierError(entity_id)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def walk(self) -> Iterator[Element]:
        """Yield every element in hydration order.

        People, then each software system followed by its containers and
        their components, then the deployment forest depth-first (a node,
        its child nodes, then its container instances).
        """
        yield from self.people
        for system in self.software_systems:
            yield system
            for container in system.containers:
                yield container
                yield from container.components
        for node in self.deployment_nodes:
            yield from _walk_deployment_node(node)


def _walk_deployment_node(node: DeploymentNode) -> Iterator[Element]:
    yield node
    for child in node.deployment_nodes:
        yield from _walk_deployment_node(child)
    yield from node.container_instances
