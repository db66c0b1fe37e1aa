"""Persisted form of a model — pydantic document tree.

Field names are snake_case in Python and camelCase on the wire
(``softwareSystems``, ``sourceId``, ``containerId`` ...). Relationships
are stored under their source element and reference both endpoints by
ID; container instances reference their container by ID. Turning those
IDs back into object references is the hydrator's job.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from archmodel.domain.types import DEFAULT_DEPLOYMENT_ENVIRONMENT, InteractionStyle, Location


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RelationshipDocument(_Document):
    id: str
    source_id: str | None = None
    destination_id: str
    description: str = ""
    technology: str | None = None
    interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS
    tags: list[str] | None = None
    linked_relationship_id: str | None = None


class ElementDocument(_Document):
    """Fields shared by every persisted element."""

    id: str
    name: str = ""
    description: str = ""
    relationships: list[RelationshipDocument] = Field(default_factory=list)


class EnterpriseDocument(_Document):
    name: str


class PersonDocument(ElementDocument):
    location: Location = Location.UNSPECIFIED


class ComponentDocument(ElementDocument):
    technology: str = ""
    type: str | None = None
    source_path: str | None = None


class ContainerDocument(ElementDocument):
    technology: str = ""
    components: list[ComponentDocument] = Field(default_factory=list)


class SoftwareSystemDocument(ElementDocument):
    location: Location = Location.UNSPECIFIED
    containers: list[ContainerDocument] = Field(default_factory=list)


class ContainerInstanceDocument(ElementDocument):
    container_id: str
    environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT
    instance_number: int = 1


class DeploymentNodeDocument(ElementDocument):
    technology: str = ""
    environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT
    instances: int = 1
    properties: dict[str, str] = Field(default_factory=dict)
    children: list[DeploymentNodeDocument] = Field(default_factory=list)
    container_instances: list[ContainerInstanceDocument] = Field(default_factory=list)


class ModelDocument(_Document):
    """Root of the persisted form."""

    enterprise: EnterpriseDocument | None = None
    people: list[PersonDocument] = Field(default_factory=list)
    software_systems: list[SoftwareSystemDocument] = Field(default_factory=list)
    deployment_nodes: list[DeploymentNodeDocument] = Field(default_factory=list)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, raw: str | bytes) -> ModelDocument:
        return cls.model_validate_json(raw)
