"""Element kinds and classification enums."""

from __future__ import annotations

from enum import StrEnum

DEFAULT_DEPLOYMENT_ENVIRONMENT = "Default"


class ElementKind(StrEnum):
    """The six element variants in the model graph."""

    PERSON = "person"
    SOFTWARE_SYSTEM = "software_system"
    CONTAINER = "container"
    COMPONENT = "component"
    DEPLOYMENT_NODE = "deployment_node"
    CONTAINER_INSTANCE = "container_instance"


class InteractionStyle(StrEnum):
    """How the source of a relationship talks to its destination."""

    SYNCHRONOUS = "Synchronous"
    ASYNCHRONOUS = "Asynchronous"


class Location(StrEnum):
    """Where a person or software system sits relative to the enterprise."""

    INTERNAL = "Internal"
    EXTERNAL = "External"
    UNSPECIFIED = "Unspecified"
