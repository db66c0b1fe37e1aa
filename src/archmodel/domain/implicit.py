"""Implicit relationship derivation.

For every relationship ``A -> B`` the model gains relationships between
every combination of ``A`` and its ancestors and ``B`` and its
ancestors, unless the pair is the same element, the pair is within two
containment levels of each other, or the source already has an edge to
the destination. Given ``S1/C1/Comp1 -> S2/C2/Comp2`` this adds
``Comp1 -> C2``, ``Comp1 -> S2``, ``C1 -> Comp2``, ``C1 -> C2``,
``C1 -> S2``, ``S1 -> Comp2``, ``S1 -> C2`` and ``S1 -> S2``.

When several relationships map onto the same pair, the derived
description (and technology) is kept only if they all agree; otherwise
it is left empty.

Running the derivation twice adds nothing the second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archmodel.domain.elements import Element
    from archmodel.domain.model import Model
    from archmodel.domain.relationship import Relationship

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    """Descriptions and technologies contributed to one (source, destination) pair."""

    descriptions: set[str] = field(default_factory=set)
    technologies: set[str] = field(default_factory=set)

    @property
    def description(self) -> str:
        return next(iter(self.descriptions)) if len(self.descriptions) == 1 else ""

    @property
    def technology(self) -> str:
        return next(iter(self.technologies)) if len(self.technologies) == 1 else ""


def propagation_allowed(source: Element, destination: Element) -> bool:
    """Whether a propagated relationship between these two elements is allowed.

    Only the parent and grandparent levels are excluded; deeper ancestors
    (possible with nested deployment nodes) are not.
    """
    if source is destination:
        return False
    if source.parent is not None:
        if destination is source.parent:
            return False
        if source.parent.parent is not None and destination is source.parent.parent:
            return False
    if destination.parent is not None:
        if source is destination.parent:
            return False
        if destination.parent.parent is not None and source is destination.parent.parent:
            return False
    return True


def collect_candidates(model: Model) -> dict[tuple[Element, Element], _Candidate]:
    """Map every propagatable (source, destination) pair to its contributions."""
    candidates: dict[tuple[Element, Element], _Candidate] = {}
    for relationship in model.relationships:
        sources = [relationship.source, *relationship.source.ancestors()]
        destinations = [relationship.destination, *relationship.destination.ancestors()]
        for source in sources:
            for destination in destinations:
                if not propagation_allowed(source, destination):
                    continue
                if source.has_efferent_relationship_with(destination):
                    continue
                candidate = candidates.setdefault((source, destination), _Candidate())
                if relationship.description is not None:
                    candidate.descriptions.add(relationship.description)
                if relationship.technology is not None:
                    candidate.technologies.add(relationship.technology)
    return candidates


def add_implicit_relationships(model: Model) -> list[Relationship]:
    """Add propagated relationships to *model* and return the ones created."""
    created: list[Relationship] = []
    for (source, destination), candidate in collect_candidates(model).items():
        relationship = model.add_relationship(
            source, destination, candidate.description, candidate.technology
        )
        if relationship is not None:
            created.append(relationship)
    logger.debug("Derived %d implicit relationships", len(created))
    return created
