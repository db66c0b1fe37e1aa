"""Hydration — rebuild a live model from its persisted form, and back.

Relationships in a :class:`ModelDocument` point at their endpoints by ID,
so :func:`hydrate` runs in two passes:

1. Elements. Every person, software system, container, component,
   deployment node and container instance is rebuilt with its parent
   link and registered under its stored ID. Container instances resolve
   their container here, which is why software systems go first.
2. Relationships. Only once every element in the whole document is
   indexed are the relationships of each element (same traversal order)
   resolved and registered, so forward references across sibling
   subtrees always resolve.

Any ID that does not resolve aborts hydration; a partial model is never
returned. Stored IDs are fed to the model's ID generator so new IDs
continue above the highest one found.
"""

from __future__ import annotations

import logging
from typing import TypeAlias

from archmodel.domain.documents import (
    ComponentDocument,
    ContainerDocument,
    ContainerInstanceDocument,
    DeploymentNodeDocument,
    ElementDocument,
    EnterpriseDocument,
    ModelDocument,
    PersonDocument,
    RelationshipDocument,
    SoftwareSystemDocument,
)
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
from archmodel.domain.errors import UnresolvedReferenceError
from archmodel.domain.model import Model
from archmodel.domain.relationship import Relationship

logger = logging.getLogger(__name__)

_Pending: TypeAlias = list[tuple[Element, list[RelationshipDocument]]]


def hydrate(document: ModelDocument) -> Model:
    """Build a :class:`Model` from *document*.

    Raises:
        UnresolvedReferenceError: If a container instance or relationship
            references an ID that is not in the document.
        DuplicateIdentifierError: If two entries share an ID.
    """
    model = Model()
    if document.enterprise is not None:
        model.enterprise = Enterprise(name=document.enterprise.name)

    # Pass 1: elements
    pending: _Pending = []
    for person_doc in document.people:
        person = Person(
            id=person_doc.id,
            name=person_doc.name,
            description=person_doc.description,
            location=person_doc.location,
        )
        model.people.append(person)
        _register(model, person, person_doc, pending)

    for system_doc in document.software_systems:
        system = SoftwareSystem(
            id=system_doc.id,
            name=system_doc.name,
            description=system_doc.description,
            location=system_doc.location,
        )
        model.software_systems.append(system)
        _register(model, system, system_doc, pending)
        for container_doc in system_doc.containers:
            container = Container(
                id=container_doc.id,
                name=container_doc.name,
                description=container_doc.description,
                technology=container_doc.technology,
                parent=system,
            )
            system.containers.append(container)
            _register(model, container, container_doc, pending)
            for component_doc in container_doc.components:
                component = Component(
                    id=component_doc.id,
                    name=component_doc.name,
                    description=component_doc.description,
                    technology=component_doc.technology,
                    type=component_doc.type,
                    source_path=component_doc.source_path,
                    parent=container,
                )
                container.components.append(component)
                _register(model, component, component_doc, pending)

    for node_doc in document.deployment_nodes:
        model.deployment_nodes.append(_hydrate_deployment_node(model, node_doc, None, pending))

    # Pass 2: relationships
    for element, relationship_docs in pending:
        for relationship_doc in relationship_docs:
            _hydrate_relationship(model, element, relationship_doc)

    logger.debug(
        "Hydrated %d elements and %d relationships",
        len(model.elements),
        len(model.relationships),
    )
    return model


def _register(
    model: Model,
    element: Element,
    document: ElementDocument,
    pending: _Pending,
) -> None:
    model.register_element(element)
    pending.append((element, document.relationships))


def _hydrate_deployment_node(
    model: Model,
    document: DeploymentNodeDocument,
    parent: DeploymentNode | None,
    pending: _Pending,
) -> DeploymentNode:
    node = DeploymentNode(
        id=document.id,
        name=document.name,
        description=document.description,
        technology=document.technology,
        environment=document.environment,
        instances=document.instances,
        properties=dict(document.properties),
        parent=parent,
    )
    _register(model, node, document, pending)

    for child_doc in document.children:
        node.deployment_nodes.append(_hydrate_deployment_node(model, child_doc, node, pending))

    for instance_doc in document.container_instances:
        container = model.find_element(instance_doc.container_id)
        if not isinstance(container, Container):
            raise UnresolvedReferenceError(
                instance_doc.container_id,
                expected="container",
                context=f"container instance {instance_doc.id}",
            )
        instance = ContainerInstance(
            id=instance_doc.id,
            name=instance_doc.name or container.name,
            description=instance_doc.description,
            container=container,
            instance_number=instance_doc.instance_number,
            environment=instance_doc.environment,
            parent=node,
        )
        node.container_instances.append(instance)
        _register(model, instance, instance_doc, pending)

    return node


def _hydrate_relationship(model: Model, owner: Element, document: RelationshipDocument) -> None:
    source_id = document.source_id or owner.id
    source = model.find_element(source_id)
    if source is None:
        raise UnresolvedReferenceError(source_id, context=f"source of relationship {document.id}")
    destination = model.find_element(document.destination_id)
    if destination is None:
        raise UnresolvedReferenceError(
            document.destination_id,
            context=f"destination of relationship {document.id}",
        )
    relationship = Relationship(
        id=document.id,
        source=source,
        destination=destination,
        description=document.description,
        technology=document.technology,
        interaction_style=document.interaction_style,
        tags=list(document.tags) if document.tags is not None else None,
        linked_relationship_id=document.linked_relationship_id,
    )
    source.relationships.append(relationship)
    model.register_relationship(relationship)


# ---------------------------------------------------------------------------
# Model -> document
# ---------------------------------------------------------------------------


def dehydrate(model: Model) -> ModelDocument:
    """Flatten *model* into its persisted form."""
    return ModelDocument(
        enterprise=EnterpriseDocument(name=model.enterprise.name) if model.enterprise else None,
        people=[
            PersonDocument(
                id=p.id,
                name=p.name,
                description=p.description,
                location=p.location,
                relationships=_relationship_docs(p),
            )
            for p in model.people
        ],
        software_systems=[_system_doc(s) for s in model.software_systems],
        deployment_nodes=[_node_doc(n) for n in model.deployment_nodes],
    )


def _relationship_docs(element: Element) -> list[RelationshipDocument]:
    return [
        RelationshipDocument(
            id=r.id,
            source_id=r.source_id,
            destination_id=r.destination_id,
            description=r.description,
            technology=r.technology,
            interaction_style=r.interaction_style,
            tags=list(r.tags) if r.tags is not None else None,
            linked_relationship_id=r.linked_relationship_id,
        )
        for r in element.relationships
    ]


def _system_doc(system: SoftwareSystem) -> SoftwareSystemDocument:
    return SoftwareSystemDocument(
        id=system.id,
        name=system.name,
        description=system.description,
        location=system.location,
        relationships=_relationship_docs(system),
        containers=[
            ContainerDocument(
                id=c.id,
                name=c.name,
                description=c.description,
                technology=c.technology,
                relationships=_relationship_docs(c),
                components=[
                    ComponentDocument(
                        id=comp.id,
                        name=comp.name,
                        description=comp.description,
                        technology=comp.technology,
                        type=comp.type,
                        source_path=comp.source_path,
                        relationships=_relationship_docs(comp),
                    )
                    for comp in c.components
                ],
            )
            for c in system.containers
        ],
    )


def _node_doc(node: DeploymentNode) -> DeploymentNodeDocument:
    return DeploymentNodeDocument(
        id=node.id,
        name=node.name,
        description=node.description,
        technology=node.technology,
        environment=node.environment,
        instances=node.instances,
        properties=dict(node.properties),
        relationships=_relationship_docs(node),
        children=[_node_doc(child) for child in node.deployment_nodes],
        container_instances=[
            ContainerInstanceDocument(
                id=ci.id,
                name=ci.name,
                description=ci.description,
                container_id=ci.container_id or "",
                environment=ci.environment,
                instance_number=ci.instance_number,
                relationships=_relationship_docs(ci),
            )
            for ci in node.container_instances
        ],
    )
