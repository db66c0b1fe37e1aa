"""ModelService — build and edit the model stored in a workspace.

Pipeline per mutation: LOAD → RESOLVE IDS → MUTATE (domain) → SAVE → RESPOND

A name already taken at the top level, or a relationship that already
exists, is a successful no-op reported through ``warnings`` with
``created: False``. Structural errors from the domain become failed
results with the error's code.
"""

from __future__ import annotations

from typing import Any

from archmodel.domain.elements import (
    Container,
    DeploymentNode,
    Element,
    Enterprise,
    SoftwareSystem,
)
from archmodel.domain.errors import ModelError
from archmodel.domain.model import Model
from archmodel.domain.types import DEFAULT_DEPLOYMENT_ENVIRONMENT, InteractionStyle, Location
from archmodel.services._helpers import element_summary, relationship_summary
from archmodel.services.base import BaseService
from archmodel.services.result import ServiceResult
from archmodel.services.telemetry import trace_span, traced


class ModelService(BaseService):
    """Handles element and relationship creation for a workspace."""

    # ------------------------------------------------------------------
    # Workspace lifecycle
    # ------------------------------------------------------------------

    @traced
    def init_workspace(self, *, enterprise: str | None = None, force: bool = False) -> ServiceResult:
        """Write an empty model to the workspace file."""
        op = "init_workspace"
        if self._workspace.exists and not force:
            return ServiceResult.failure(
                op,
                "ALREADY_EXISTS",
                f"Workspace {self._workspace.path} already exists (use --force to overwrite)",
            )
        model = Model()
        if enterprise:
            model.enterprise = Enterprise(name=enterprise)
        self._workspace.replace_model(model)
        self._workspace.save()
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(self._workspace.path), "enterprise": enterprise},
        )

    # ------------------------------------------------------------------
    # Top-level elements (soft duplicates)
    # ------------------------------------------------------------------

    @traced
    def add_person(
        self,
        name: str,
        description: str = "",
        *,
        location: Location = Location.UNSPECIFIED,
    ) -> ServiceResult:
        op = "add_person"
        if failure := self._load_failure(op):
            return failure
        person = self.model.add_person(name, description, location=location)
        if person is None:
            return self._already_exists(op, "person", self.model.get_person_with_name(name))
        return self._created(op, person)

    @traced
    def add_software_system(
        self,
        name: str,
        description: str = "",
        *,
        location: Location = Location.UNSPECIFIED,
    ) -> ServiceResult:
        op = "add_software_system"
        if failure := self._load_failure(op):
            return failure
        system = self.model.add_software_system(name, description, location=location)
        if system is None:
            return self._already_exists(
                op, "software system", self.model.get_software_system_with_name(name)
            )
        return self._created(op, system)

    # ------------------------------------------------------------------
    # Nested elements (hard duplicates)
    # ------------------------------------------------------------------

    @traced
    def add_container(
        self,
        system_id: str,
        name: str,
        description: str = "",
        technology: str = "",
    ) -> ServiceResult:
        op = "add_container"
        if failure := self._load_failure(op):
            return failure
        system = self._lookup(op, system_id, SoftwareSystem)
        if isinstance(system, ServiceResult):
            return system
        try:
            container = self.model.add_container(system, name, description, technology)
        except ModelError as exc:
            return self._model_error(op, exc)
        return self._created(op, container)

    @traced
    def add_component(
        self,
        container_id: str,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        type: str | None = None,
        source_path: str | None = None,
    ) -> ServiceResult:
        op = "add_component"
        if failure := self._load_failure(op):
            return failure
        container = self._lookup(op, container_id, Container)
        if isinstance(container, ServiceResult):
            return container
        try:
            component = self.model.add_component(
                container, name, description, technology, type=type, source_path=source_path
            )
        except ModelError as exc:
            return self._model_error(op, exc)
        return self._created(op, component)

    @traced
    def add_deployment_node(
        self,
        name: str,
        description: str = "",
        technology: str = "",
        *,
        environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT,
        parent_id: str | None = None,
        instances: int = 1,
        properties: dict[str, str] | None = None,
    ) -> ServiceResult:
        """Add a top-level node (soft duplicate) or a child node (hard duplicate)."""
        op = "add_deployment_node"
        if failure := self._load_failure(op):
            return failure
        parent: DeploymentNode | None = None
        if parent_id is not None:
            found = self._lookup(op, parent_id, DeploymentNode)
            if isinstance(found, ServiceResult):
                return found
            parent = found
        try:
            node = self.model.add_deployment_node(
                name,
                description,
                technology,
                environment=environment,
                instances=instances,
                properties=properties,
                parent=parent,
            )
        except ModelError as exc:
            return self._model_error(op, exc)
        if node is None:
            return self._already_exists(
                op, "deployment node", self.model.get_deployment_node_with_name(name, environment)
            )
        return self._created(op, node)

    @traced
    def add_container_instance(self, node_id: str, container_id: str) -> ServiceResult:
        """Deploy a container onto a node, mirroring container relationships."""
        op = "add_container_instance"
        if failure := self._load_failure(op):
            return failure
        node = self._lookup(op, node_id, DeploymentNode)
        if isinstance(node, ServiceResult):
            return node
        container = self._lookup(op, container_id, Container)
        if isinstance(container, ServiceResult):
            return container

        with trace_span("replicate"):
            instance = self.model.add_container_instance(node, container)
        replicated = [
            relationship_summary(r)
            for r in self.model.relationships
            if r.linked_relationship_id and instance in (r.source, r.destination)
        ]
        return self._created(op, instance, replicated=replicated)

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    @traced
    def add_relationship(
        self,
        source_id: str,
        destination_id: str,
        description: str = "",
        technology: str | None = None,
        *,
        interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS,
    ) -> ServiceResult:
        op = "add_relationship"
        if failure := self._load_failure(op):
            return failure
        source = self._lookup(op, source_id, Element)
        if isinstance(source, ServiceResult):
            return source
        destination = self.model.find_element(destination_id)
        try:
            relationship = self.model.add_relationship(
                source, destination, description, technology, interaction_style
            )
        except ModelError as exc:
            return self._model_error(op, exc)
        if relationship is None:
            return ServiceResult(
                ok=True,
                op=op,
                data={"created": False, "source_id": source_id, "destination_id": destination_id},
                warnings=[
                    f"{source.name!r} already has a relationship to "
                    f"{destination.name if destination else destination_id!r} "
                    f"described as {description!r}"
                ],
            )
        return self._saved(op, {"created": True, **relationship_summary(relationship)})

    @traced
    def modify_relationship(
        self,
        relationship_id: str,
        description: str,
        technology: str | None = None,
    ) -> ServiceResult:
        op = "modify_relationship"
        if failure := self._load_failure(op):
            return failure
        relationship = self.model.find_relationship(relationship_id)
        if relationship is None:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"No relationship with id {relationship_id!r}", id=relationship_id
            )
        try:
            self.model.modify_relationship(relationship, description, technology)
        except ModelError as exc:
            return self._model_error(op, exc)
        return self._saved(op, relationship_summary(relationship))

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @traced
    def show(self, element_id: str) -> ServiceResult:
        """Describe one element with its children and outgoing relationships."""
        op = "show"
        if failure := self._load_failure(op):
            return failure
        element = self._lookup(op, element_id, Element)
        if isinstance(element, ServiceResult):
            return element
        data = element_summary(element)
        data["children"] = [element_summary(c) for c in element.children]
        data["relationships"] = [relationship_summary(r) for r in element.relationships]
        if isinstance(element, Container):
            data["instances"] = [ci.id for ci in self.model.container_instances_of(element)]
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def list_elements(self, *, kind: str | None = None) -> ServiceResult:
        op = "list_elements"
        if failure := self._load_failure(op):
            return failure
        items = [
            element_summary(e) for e in self.model.walk() if kind is None or str(e.kind) == kind
        ]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _created(self, op: str, element: Element, **extra: Any) -> ServiceResult:
        return self._saved(op, {"created": True, **element_summary(element), **extra})

    def _saved(self, op: str, data: dict[str, Any]) -> ServiceResult:
        derived = self._workspace.save()
        if derived:
            data = {**data, "derived": derived}
        return ServiceResult(ok=True, op=op, data=data)

    @staticmethod
    def _already_exists(op: str, label: str, existing: Element | None) -> ServiceResult:
        data: dict[str, Any] = {"created": False}
        if existing is not None:
            data.update(element_summary(existing))
        name = existing.name if existing is not None else ""
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=[f"A {label} named {name!r} already exists"],
        )
