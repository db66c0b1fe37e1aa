"""DiscoveryService — populate a container through discovery strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from archmodel.analysis.component_finder import ComponentFinder
from archmodel.domain.elements import Container
from archmodel.domain.errors import ModelError
from archmodel.plugins.builtins.manifest import ManifestStrategy
from archmodel.plugins.manager import PluginManager
from archmodel.services._helpers import element_summary
from archmodel.services.base import BaseService
from archmodel.services.result import ServiceResult
from archmodel.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from pathlib import Path


class DiscoveryService(BaseService):
    """Handles component discovery for one container."""

    @traced
    def discover(
        self,
        container_id: str,
        *,
        manifests: list[Path] | None = None,
        namespace: str = "",
        use_entry_points: bool = False,
        enabled: list[str] | None = None,
    ) -> ServiceResult:
        """Run manifest strategies (and optionally installed ones) against a container."""
        op = "discover"
        if failure := self._load_failure(op):
            return failure
        container = self._lookup(op, container_id, Container)
        if isinstance(container, ServiceResult):
            return container

        strategies: list[object] = []
        for path in manifests or []:
            try:
                strategies.append(ManifestStrategy.from_file(path))
            except (OSError, ValidationError) as exc:
                return ServiceResult.failure(
                    op, "INVALID_MANIFEST", f"Cannot read manifest {path}: {exc}"
                )

        plugins = PluginManager()
        warnings: list[str] = []
        if use_entry_points:
            loaded = plugins.discover_and_load(enabled=enabled)
            if not loaded:
                warnings.append("No installed discovery strategies found")
        if not strategies and not plugins.get_plugins():
            return ServiceResult.failure(op, "NO_STRATEGIES", "No discovery strategies to run")

        before = len(self.model.relationships)
        with trace_span("find_components") as span:
            finder = ComponentFinder(container, namespace, *strategies, plugin_manager=plugins)
            try:
                found = finder.find_components()
            except ModelError as exc:
                return self._model_error(op, exc)
            if span:
                span.annotate("components", len(found))

        self._workspace.save()
        unique = list({c.id: c for c in found}.values())
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "container_id": container_id,
                "count": len(unique),
                "items": [element_summary(c) for c in unique],
                "relationships_added": len(self.model.relationships) - before,
            },
            warnings=warnings,
        )
