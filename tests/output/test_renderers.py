"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from archmodel.output.renderers import render_result
from archmodel.services.result import ServiceResult


def _render(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render and collapse runs of whitespace so assertions ignore padding."""
    return " ".join(render_result(result, verbose=verbose).split())


class TestMutationRenderers:
    def test_element_mutation(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_container",
            data={"created": True, "id": "3", "kind": "container", "name": "API", "path": "/S/API"},
        )
        out = _render(result)
        assert out.startswith("OK add_container")
        assert "id: 3" in out
        assert "path: /S/API" in out

    def test_relationship_mutation(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_relationship",
            data={"created": True, "id": "9", "source_id": "1", "destination_id": "2", "description": "Uses"},
        )
        out = _render(result)
        assert "description: Uses" in out
        assert "technology" not in out

    def test_unchanged_marker(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_person",
            data={"created": False, "id": "1", "kind": "person", "name": "Customer"},
            warnings=["A person named 'Customer' already exists"],
        )
        assert _render(result).startswith("OK add_person (unchanged)")

    def test_derived_ids_listed(self) -> None:
        result = ServiceResult(
            ok=True, op="add_relationship", data={"id": "9", "derived": ["10", "11"]}
        )
        assert "derived: 10, 11" in _render(result)


class TestQueryRenderers:
    def test_show_panel(self) -> None:
        result = ServiceResult(
            ok=True,
            op="show",
            data={
                "id": "2",
                "kind": "software_system",
                "name": "Banking",
                "path": "/Banking",
                "description": "Online banking",
                "children": [{"id": "3", "kind": "container", "name": "API"}],
                "relationships": [],
            },
        )
        out = _render(result)
        assert "2 — Banking" in out
        assert "Online banking" in out
        assert "1 children" in out

    def test_derive_dry_run(self) -> None:
        result = ServiceResult(
            ok=True,
            op="derive",
            data={
                "dry_run": True,
                "count": 1,
                "items": [
                    {
                        "source_id": "3",
                        "source": "API",
                        "destination_id": "4",
                        "destination": "Database",
                        "description": "Reads",
                        "technology": "",
                    }
                ],
            },
        )
        out = _render(result)
        assert "DRY RUN" in out
        assert "Database (4)" in out

    def test_summary(self) -> None:
        result = ServiceResult(
            ok=True,
            op="summary",
            data={
                "elements": 3,
                "relationships": 1,
                "replicated_relationships": 0,
                "high_water_id": 4,
                "environments": ["Live", "Dev"],
                "kinds": {"person": 1, "software_system": 2},
            },
        )
        out = _render(result)
        assert "environments: Live, Dev" in out
        assert "software_system" in out

    def test_path(self) -> None:
        result = ServiceResult(
            ok=True,
            op="path",
            data={
                "length": 1,
                "steps": [
                    {"id": "1", "name": "A", "via": [{"relationship_id": "5", "description": "Uses"}]},
                    {"id": "2", "name": "B"},
                ],
            },
        )
        out = _render(result)
        assert "Uses" in out
        assert "(5)" in out

    def test_check_issues_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="check",
            data={"count": 1, "issues": [{"category": "names", "message": "Name 'X' is used 2 times"}]},
        )
        out = _render(result)
        assert "issues: 1" in out
        assert "Name 'X' is used 2 times" in out


class TestErrorAndFallback:
    def test_error(self) -> None:
        result = ServiceResult.failure("add_container", "NAME_CONFLICT", "taken", name="API")
        out = _render(result, verbose=True)
        assert out.startswith("ERROR add_container — taken")
        assert "name: API" in out

    def test_unknown_op_uses_generic(self) -> None:
        result = ServiceResult(ok=True, op="mystery", data={"a": 1, "b": [1, 2]})
        out = _render(result)
        assert "a: 1" in out
        assert "b: [1,2]" in out

    def test_verbose_renders_telemetry(self) -> None:
        result = ServiceResult(
            ok=True,
            op="derive",
            data={"dry_run": False, "count": 0, "items": []},
            meta={"telemetry": {"name": "DeriveService.derive", "duration_ms": 1.5}},
        )
        out = _render(result, verbose=True)
        assert "DeriveService.derive" in out
