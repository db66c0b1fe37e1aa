"""DeriveService — materialize implicit relationships across the hierarchy."""

from __future__ import annotations

from archmodel.domain.implicit import collect_candidates
from archmodel.services._helpers import relationship_summary
from archmodel.services.base import BaseService
from archmodel.services.result import ServiceResult
from archmodel.services.telemetry import trace_span, traced


class DeriveService(BaseService):
    """Handles implicit relationship derivation."""

    @traced
    def derive(self, *, dry_run: bool = False) -> ServiceResult:
        """Add every propagated relationship and save the workspace.

        With *dry_run* the candidate pairs are reported and nothing changes.
        A second run on an unchanged model creates nothing.
        """
        op = "derive"
        if failure := self._load_failure(op):
            return failure

        if dry_run:
            with trace_span("collect_candidates") as span:
                candidates = collect_candidates(self.model)
                if span:
                    span.annotate("pairs", len(candidates))
            items = [
                {
                    "source_id": source.id,
                    "source": source.name,
                    "destination_id": destination.id,
                    "destination": destination.name,
                    "description": candidate.description,
                    "technology": candidate.technology,
                }
                for (source, destination), candidate in candidates.items()
            ]
            return ServiceResult(
                ok=True, op=op, data={"dry_run": True, "count": len(items), "items": items}
            )

        with trace_span("add_implicit_relationships") as span:
            created = self.model.add_implicit_relationships()
            if span:
                span.annotate("created", len(created))

        warnings: list[str] = []
        if created:
            self._workspace.save()
        else:
            warnings.append("No implicit relationships to add")
        items = [relationship_summary(r) for r in created]
        return ServiceResult(
            ok=True,
            op=op,
            data={"dry_run": False, "count": len(items), "items": items},
            warnings=warnings,
        )
