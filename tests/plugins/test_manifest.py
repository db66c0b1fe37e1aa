"""Tests for the built-in manifest discovery strategy."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from archmodel.analysis.component_finder import ComponentFinder
from archmodel.domain.model import Model
from archmodel.plugins.builtins.manifest import ComponentManifest, ManifestStrategy
from tests.conftest import build_banking_model


class TestComponentManifest:
    def test_camel_case_fields(self) -> None:
        manifest = ComponentManifest.model_validate(
            {"components": [{"name": "A", "sourcePath": "a.py", "uses": [{"name": "B"}]}]}
        )
        entry = manifest.components[0]
        assert entry.source_path == "a.py"
        assert entry.uses[0].name == "B"
        assert entry.uses[0].description == ""

    def test_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "m.json"
        path.write_text(json.dumps({"components": [{"name": "A"}]}))
        strategy = ManifestStrategy.from_file(path)
        assert [c.name for c in strategy.manifest.components] == ["A"]


class TestManifestStrategy:
    def test_unknown_dependency_is_skipped(
        self, model: Model, caplog: pytest.LogCaptureFixture
    ) -> None:
        b = build_banking_model(model)
        manifest = ComponentManifest.model_validate(
            {"components": [{"name": "A", "uses": [{"name": "Ghost"}]}]}
        )
        finder = ComponentFinder(b.web, "", ManifestStrategy(manifest))
        with caplog.at_level(logging.WARNING, logger="archmodel"):
            components = finder.find_components()
        assert [c.name for c in components] == ["A"]
        assert components[0].relationships == []
        assert "Ghost" in caplog.text

    def test_dependency_description_and_technology(self, model: Model) -> None:
        b = build_banking_model(model)
        manifest = ComponentManifest.model_validate(
            {
                "components": [
                    {
                        "name": "Repo",
                        "uses": [{"name": "Sign In Controller", "description": "Notifies", "technology": "events"}],
                    }
                ]
            }
        )
        ComponentFinder(b.api, "", ManifestStrategy(manifest)).find_components()
        repo = b.api.get_component_with_name("Repo")
        rel = repo.get_efferent_relationship_with(b.signin)
        assert (rel.description, rel.technology) == ("Notifies", "events")
