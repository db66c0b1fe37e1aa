"""Shared helpers for service modules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from archmodel.domain.elements import Element
    from archmodel.domain.relationship import Relationship

# Optional attributes copied into summaries when an element has them.
_OPTIONAL_FIELDS = ("technology", "environment", "location", "type", "source_path", "instance_number")


def element_summary(element: Element) -> dict[str, Any]:
    """Flatten an element into a JSON-friendly dict."""
    summary: dict[str, Any] = {
        "id": element.id,
        "kind": str(element.kind),
        "name": element.name,
        "description": element.description,
        "path": element.canonical_path,
        "parent_id": element.parent.id if element.parent is not None else None,
    }
    for name in _OPTIONAL_FIELDS:
        value = getattr(element, name, None)
        if value not in (None, ""):
            summary[name] = str(value) if name == "location" else value
    container_id = getattr(element, "container_id", None)
    if container_id:
        summary["container_id"] = container_id
    return summary


def relationship_summary(relationship: Relationship) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "id": relationship.id,
        "source_id": relationship.source_id,
        "source": relationship.source.name,
        "destination_id": relationship.destination_id,
        "destination": relationship.destination.name,
        "description": relationship.description,
        "technology": relationship.technology,
        "interaction_style": str(relationship.interaction_style),
    }
    if relationship.linked_relationship_id:
        summary["linked_relationship_id"] = relationship.linked_relationship_id
    return summary
