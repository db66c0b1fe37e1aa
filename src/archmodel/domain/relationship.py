"""Directed, described edges between elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archmodel.domain.types import InteractionStyle

if TYPE_CHECKING:
    from archmodel.domain.elements import Element

RELATIONSHIP_TAG = "Relationship"


def default_tags(interaction_style: InteractionStyle) -> list[str]:
    """Tags a freshly created relationship carries."""
    return [RELATIONSHIP_TAG, str(interaction_style)]


@dataclass(eq=False)
class Relationship:
    """An edge owned by its source element.

    ``source`` and ``destination`` are references into the owning model;
    a relationship never outlives it. ``linked_relationship_id`` is set on
    edges replicated from another edge (container -> instance level).
    """

    source: Element
    destination: Element
    description: str = ""
    technology: str | None = None
    interaction_style: InteractionStyle = InteractionStyle.SYNCHRONOUS
    tags: list[str] | None = None
    id: str = ""
    linked_relationship_id: str | None = None

    def __post_init__(self) -> None:
        if self.tags is None:
            self.tags = default_tags(self.interaction_style)

    @property
    def source_id(self) -> str:
        return self.source.id

    @property
    def destination_id(self) -> str:
        return self.destination.id

    def __str__(self) -> str:
        label = f"{self.source.name} -[{self.description}]-> {self.destination.name}"
        return f"{self.id}: {label}" if self.id else label
