"""GraphService — read-only queries over the NetworkX projection of the model.

Uses ``self._workspace.graph`` (lazy-built from the hydrated model).
"""

from __future__ import annotations

from collections import Counter
from typing import Any

import networkx as nx

from archmodel.services.base import BaseService
from archmodel.services.result import ServiceResult
from archmodel.services.telemetry import trace_span, traced

_DIRECTIONS = ("out", "in", "both")


class GraphService(BaseService):
    """Handles graph queries and analysis."""

    def _node(self, g: nx.MultiDiGraph, node_id: str, **extra: Any) -> dict[str, Any]:
        attrs = g.nodes[node_id]
        return {
            "id": node_id,
            "kind": attrs.get("kind", ""),
            "name": attrs.get("name", ""),
            "path": attrs.get("path", ""),
            **extra,
        }

    def _not_found(self, op: str, node_id: str) -> ServiceResult:
        return ServiceResult.failure(
            op, "NOT_FOUND", f"Element '{node_id}' not found in graph", id=node_id
        )

    # ------------------------------------------------------------------
    # summary
    # ------------------------------------------------------------------

    @traced
    def summary(self) -> ServiceResult:
        """Count elements by kind, relationships, and environments."""
        op = "summary"
        if failure := self._load_failure(op):
            return failure
        with trace_span("build_graph") as span:
            g = self._workspace.graph.graph
            if span:
                span.annotate("nodes", g.number_of_nodes())
                span.annotate("edges", g.number_of_edges())

        kinds = Counter(attrs["kind"] for _, attrs in g.nodes(data=True))
        linked = sum(1 for *_, attrs in g.edges(data=True) if attrs.get("linked"))
        model = self.model
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "enterprise": model.enterprise.name if model.enterprise else None,
                "elements": g.number_of_nodes(),
                "relationships": g.number_of_edges(),
                "replicated_relationships": linked,
                "kinds": dict(sorted(kinds.items())),
                "environments": model.environments,
                "high_water_id": model.id_generator.high_water,
            },
        )

    # ------------------------------------------------------------------
    # dependencies: bounded BFS
    # ------------------------------------------------------------------

    @traced
    def dependencies(
        self,
        element_id: str,
        *,
        direction: str = "out",
        depth: int = 1,
    ) -> ServiceResult:
        """List elements reachable from *element_id* within *depth* hops.

        *direction* is ``out`` (what it uses), ``in`` (what uses it) or
        ``both``.
        """
        op = "dependencies"
        if failure := self._load_failure(op):
            return failure
        if direction not in _DIRECTIONS:
            return ServiceResult.failure(
                op, "INVALID_ARGUMENT", f"direction must be one of {', '.join(_DIRECTIONS)}"
            )
        g = self._workspace.graph.graph
        if element_id not in g:
            return self._not_found(op, element_id)

        depth = max(1, min(depth, 10))
        if direction == "out":
            view: nx.Graph[str] = g
        elif direction == "in":
            view = g.reverse(copy=False)
        else:
            view = g.to_undirected(as_view=True)

        distances = nx.single_source_shortest_path_length(view, element_id, cutoff=depth)
        items = [
            self._node(g, node_id, depth=d)
            for node_id, d in sorted(distances.items(), key=lambda x: (x[1], x[0]))
            if node_id != element_id
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": element_id,
                "direction": direction,
                "count": len(items),
                "items": items,
            },
        )

    # ------------------------------------------------------------------
    # path: shortest relationship chain
    # ------------------------------------------------------------------

    @traced
    def path(self, source_id: str, target_id: str) -> ServiceResult:
        """Find the shortest chain of relationships from source to target."""
        op = "path"
        if failure := self._load_failure(op):
            return failure
        g = self._workspace.graph.graph
        for node_id in (source_id, target_id):
            if node_id not in g:
                return self._not_found(op, node_id)

        try:
            node_ids = nx.shortest_path(g, source_id, target_id)
        except nx.NetworkXNoPath:
            return ServiceResult.failure(
                op,
                "NO_PATH",
                f"No relationship path from '{source_id}' to '{target_id}'",
            )

        steps: list[dict[str, Any]] = []
        for i, node_id in enumerate(node_ids):
            step = self._node(g, node_id)
            if i + 1 < len(node_ids):
                edges = g.get_edge_data(node_id, node_ids[i + 1]) or {}
                step["via"] = [
                    {"relationship_id": key, "description": attrs.get("description", "")}
                    for key, attrs in edges.items()
                ]
            steps.append(step)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source_id": source_id,
                "target_id": target_id,
                "length": len(node_ids) - 1,
                "steps": steps,
            },
        )
