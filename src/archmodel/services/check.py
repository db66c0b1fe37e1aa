"""CheckService — integrity report over a loaded workspace.

Categories:
- ``structure``: containment is not a forest, or an element is missing
  from the index.
- ``names``: a name used twice within one scope.
- ``relationships``: dangling endpoints, an edge not owned by its source,
  or a duplicate (source, destination, description).
- ``instances``: a container instance whose container is gone, or two
  instances of one container sharing an instance number.

A report with issues is still ``ok=True``; the issues are the payload.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

import networkx as nx

from archmodel.domain.elements import Element
from archmodel.services.base import BaseService
from archmodel.services.result import ServiceResult
from archmodel.services.telemetry import trace_span, traced


def _issue(category: str, message: str, *ids: str) -> dict[str, Any]:
    return {"category": category, "message": message, "ids": list(ids)}


def _duplicate_names(elements: Iterable[Element], scope: str) -> list[dict[str, Any]]:
    counts = Counter(e.name for e in elements)
    return [
        _issue("names", f"Name {name!r} is used {n} times in {scope}")
        for name, n in counts.items()
        if n > 1
    ]


class CheckService(BaseService):
    """Handles workspace integrity checks."""

    @traced
    def check(self) -> ServiceResult:
        op = "check"
        if failure := self._load_failure(op):
            return failure

        issues: list[dict[str, Any]] = []
        with trace_span("structure"):
            issues.extend(self._check_structure())
        with trace_span("names"):
            issues.extend(self._check_names())
        with trace_span("relationships"):
            issues.extend(self._check_relationships())
        with trace_span("instances"):
            issues.extend(self._check_instances())

        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(issues), "issues": issues},
            warnings=[i["message"] for i in issues],
        )

    def _check_structure(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        model = self.model
        walked = list(model.walk())
        for element in walked:
            if not model.contains(element):
                issues.append(
                    _issue("structure", f"{element.name!r} is not registered", element.id)
                )
        if len(walked) != len(model.elements):
            issues.append(
                _issue(
                    "structure",
                    f"{len(model.elements)} elements registered but {len(walked)} reachable",
                )
            )
        containment = self._workspace.graph.containment
        if containment.number_of_nodes() and not nx.is_branching(containment):
            issues.append(_issue("structure", "Containment hierarchy is not a forest"))
        return issues

    def _check_names(self) -> list[dict[str, Any]]:
        model = self.model
        issues = _duplicate_names(model.people, "people")
        issues += _duplicate_names(model.software_systems, "software systems")
        for system in model.software_systems:
            issues += _duplicate_names(system.containers, f"software system {system.name!r}")
            for container in system.containers:
                issues += _duplicate_names(container.components, f"container {container.name!r}")
        for environment in model.environments:
            issues += _duplicate_names(
                model.deployment_nodes_in(environment), f"environment {environment!r}"
            )
        stack = list(model.deployment_nodes)
        while stack:
            node = stack.pop()
            issues += _duplicate_names(node.deployment_nodes, f"deployment node {node.name!r}")
            stack.extend(node.deployment_nodes)
        return issues

    def _check_relationships(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        model = self.model
        seen: Counter[tuple[str, str, str]] = Counter()
        for relationship in model.relationships:
            for end in (relationship.source, relationship.destination):
                if not model.contains(end):
                    issues.append(
                        _issue(
                            "relationships",
                            f"Relationship {relationship.id} points at unregistered {end.name!r}",
                            relationship.id,
                        )
                    )
            if not any(r is relationship for r in relationship.source.relationships):
                issues.append(
                    _issue(
                        "relationships",
                        f"Relationship {relationship.id} is not owned by its source",
                        relationship.id,
                    )
                )
            seen[(relationship.source_id, relationship.destination_id, relationship.description)] += 1
        for (source_id, destination_id, description), n in seen.items():
            if n > 1:
                issues.append(
                    _issue(
                        "relationships",
                        f"{n} relationships {source_id} -> {destination_id} described as {description!r}",
                        source_id,
                        destination_id,
                    )
                )
        return issues

    def _check_instances(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        numbers: Counter[tuple[str, int]] = Counter()
        for instance in self.model.container_instances():
            container = instance.container
            if container is None or not self.model.contains(container):
                issues.append(
                    _issue(
                        "instances",
                        f"Container instance {instance.id} has no registered container",
                        instance.id,
                    )
                )
                continue
            numbers[(container.id, instance.instance_number)] += 1
        for (container_id, number), n in numbers.items():
            if n > 1:
                issues.append(
                    _issue(
                        "instances",
                        f"{n} instances of container {container_id} share number {number}",
                        container_id,
                    )
                )
        return issues
