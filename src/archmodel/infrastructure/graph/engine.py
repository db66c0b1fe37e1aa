"""GraphEngine — lazy-built NetworkX views of a Model.

Two projections:
- ``graph``: a MultiDiGraph with one edge per relationship (keyed by
  relationship ID), so parallel edges with different descriptions survive.
- ``containment``: a DiGraph of parent -> child edges.

Both are rebuilt on demand and must be invalidated after the model
changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import networkx as nx

if TYPE_CHECKING:
    from archmodel.domain.model import Model

_Graph: TypeAlias = nx.MultiDiGraph
_Tree: TypeAlias = nx.DiGraph


class GraphEngine:
    """Lazy-loading graph engine over an in-memory model."""

    def __init__(self, model: Model) -> None:
        self._model = model
        self._graph: _Graph | None = None
        self._containment: _Tree | None = None

    @property
    def graph(self) -> _Graph:
        """Return the relationship graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build_relationship_graph()
        return self._graph

    @property
    def containment(self) -> _Tree:
        """Return the containment forest, building it on first access."""
        if self._containment is None:
            self._containment = self._build_containment_graph()
        return self._containment

    def invalidate(self) -> None:
        """Clear the cached graphs, forcing rebuild on next access."""
        self._graph = None
        self._containment = None

    def _add_nodes(self, g: nx.DiGraph) -> None:
        # Isolated elements must still be visible to algorithms.
        for element in self._model.elements:
            g.add_node(
                element.id,
                kind=str(element.kind),
                name=element.name,
                path=element.canonical_path,
            )

    def _build_relationship_graph(self) -> _Graph:
        g: _Graph = nx.MultiDiGraph()
        self._add_nodes(g)
        for relationship in self._model.relationships:
            g.add_edge(
                relationship.source_id,
                relationship.destination_id,
                key=relationship.id,
                description=relationship.description,
                technology=relationship.technology,
                interaction_style=str(relationship.interaction_style),
                linked=relationship.linked_relationship_id,
            )
        return g

    def _build_containment_graph(self) -> _Tree:
        g: _Tree = nx.DiGraph()
        self._add_nodes(g)
        for element in self._model.elements:
            if element.parent is not None:
                g.add_edge(element.parent.id, element.id)
        return g
