"""Tests for hydrate/dehydrate and the persisted document form."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from archmodel.domain.documents import ModelDocument
from archmodel.domain.elements import Component, ContainerInstance, Enterprise
from archmodel.domain.errors import DuplicateIdentifierError, UnresolvedReferenceError
from archmodel.domain.hydrator import dehydrate, hydrate
from archmodel.domain.model import Model
from archmodel.domain.types import Location
from tests.conftest import build_banking_model


def _roundtrip(model: Model) -> Model:
    return hydrate(ModelDocument.from_json(dehydrate(model).to_json()))


def _deployed_model() -> Model:
    model = Model()
    model.enterprise = Enterprise("Big Bank plc")
    b = build_banking_model(model)
    b.customer.location = Location.EXTERNAL
    b.customer.uses(b.web, "Visits", "HTTPS")
    b.web.uses(b.api, "Makes API calls to", "JSON/HTTPS")
    b.signin.uses(b.security, "Uses")
    aws = model.add_deployment_node("AWS", environment="Live", properties={"region": "eu"})
    host = aws.add_deployment_node("EC2", "Host", "Ubuntu", instances=2)
    host.add(b.web)
    host.add(b.api)
    return model


class TestRoundTrip:
    def test_elements_survive(self) -> None:
        original = _deployed_model()
        restored = _roundtrip(original)
        assert [(e.id, e.kind, e.name) for e in restored.walk()] == [
            (e.id, e.kind, e.name) for e in original.walk()
        ]
        assert restored.enterprise == Enterprise("Big Bank plc")

    def test_relationships_survive(self) -> None:
        original = _deployed_model()
        restored = _roundtrip(original)

        def shape(m: Model) -> list[tuple[object, ...]]:
            return sorted(
                (
                    r.id,
                    r.source_id,
                    r.destination_id,
                    r.description,
                    r.technology,
                    tuple(r.tags or ()),
                    r.linked_relationship_id,
                )
                for r in m.relationships
            )

        assert shape(restored) == shape(original)

    def test_parent_links_restored(self) -> None:
        restored = _roundtrip(_deployed_model())
        signin = next(e for e in restored.elements if e.name == "Sign In Controller")
        assert isinstance(signin, Component)
        assert signin.parent.name == "API Application"
        assert signin.parent.parent.name == "Internet Banking"

    def test_container_instances_resolve_their_container(self) -> None:
        restored = _roundtrip(_deployed_model())
        instances = [e for e in restored.elements if isinstance(e, ContainerInstance)]
        assert len(instances) == 2
        for instance in instances:
            assert instance.container is restored.find_element(instance.container_id)
            assert instance.parent.name == "EC2"
            assert instance.environment == "Live"

    def test_deployment_node_fields(self) -> None:
        restored = _roundtrip(_deployed_model())
        aws = restored.get_deployment_node_with_name("AWS", "Live")
        assert aws.properties == {"region": "eu"}
        host = aws.get_deployment_node_with_name("EC2")
        assert (host.technology, host.instances, host.environment) == ("Ubuntu", 2, "Live")

    def test_ids_continue_above_high_water(self) -> None:
        original = _deployed_model()
        restored = _roundtrip(original)
        assert restored.id_generator.high_water == original.id_generator.high_water
        person = restored.add_person("Auditor")
        assert int(person.id) == original.id_generator.high_water + 1

    def test_every_element_knows_its_model(self) -> None:
        restored = _roundtrip(_deployed_model())
        assert all(e.model is restored for e in restored.elements)


class TestPersistedForm:
    def test_camel_case_keys(self) -> None:
        raw = json.loads(dehydrate(_deployed_model()).to_json())
        assert "softwareSystems" in raw
        assert "deploymentNodes" in raw
        rel = raw["people"][0]["relationships"][0]
        assert {"id", "sourceId", "destinationId", "description"} <= set(rel)
        node = raw["deploymentNodes"][0]["children"][0]
        assert node["containerInstances"][0]["containerId"] == "4"

    def test_none_fields_are_omitted(self) -> None:
        model = Model()
        a = model.add_software_system("A")
        b = model.add_software_system("B")
        a.uses(b, "Uses")
        raw = json.loads(dehydrate(model).to_json())
        assert "technology" not in raw["softwareSystems"][0]["relationships"][0]
        assert "enterprise" not in raw

    def test_empty_model(self) -> None:
        restored = _roundtrip(Model())
        assert restored.elements == []
        assert restored.relationships == []


class TestHydrateDocuments:
    def test_forward_reference_across_subtrees(self) -> None:
        """A person may point at a system declared later in the document."""
        doc = ModelDocument.model_validate(
            {
                "people": [
                    {
                        "id": "1",
                        "name": "User",
                        "relationships": [{"id": "9", "destinationId": "5", "description": "Uses"}],
                    }
                ],
                "softwareSystems": [
                    {
                        "id": "2",
                        "name": "S",
                        "containers": [
                            {
                                "id": "3",
                                "name": "C",
                                "relationships": [{"id": "8", "destinationId": "7"}],
                                "components": [{"id": "5", "name": "Comp"}],
                            }
                        ],
                    }
                ],
                "deploymentNodes": [
                    {
                        "id": "6",
                        "name": "N",
                        "containerInstances": [{"id": "7", "containerId": "3"}],
                    }
                ],
            }
        )
        model = hydrate(doc)
        user = model.get_element("1")
        assert user.relationships[0].destination is model.get_element("5")
        assert user.relationships[0].source is user
        assert model.get_element("3").relationships[0].destination is model.get_element("7")
        assert model.add_person("New").id == "10"

    def test_missing_source_id_defaults_to_owner(self) -> None:
        doc = ModelDocument.model_validate(
            {
                "people": [
                    {"id": "1", "name": "A", "relationships": [{"id": "3", "destinationId": "2"}]},
                    {"id": "2", "name": "B"},
                ]
            }
        )
        model = hydrate(doc)
        assert model.get_relationship("3").source is model.get_element("1")

    def test_missing_tags_get_defaults(self) -> None:
        doc = ModelDocument.model_validate(
            {
                "people": [
                    {"id": "1", "name": "A", "relationships": [{"id": "3", "destinationId": "2"}]},
                    {"id": "2", "name": "B"},
                ]
            }
        )
        assert hydrate(doc).get_relationship("3").tags == ["Relationship", "Synchronous"]

    def test_unresolved_destination(self) -> None:
        doc = ModelDocument.model_validate(
            {"people": [{"id": "1", "name": "A", "relationships": [{"id": "2", "destinationId": "99"}]}]}
        )
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            hydrate(doc)
        assert exc_info.value.ref_id == "99"

    def test_unresolved_source(self) -> None:
        doc = ModelDocument.model_validate(
            {
                "people": [
                    {
                        "id": "1",
                        "name": "A",
                        "relationships": [{"id": "2", "sourceId": "50", "destinationId": "1"}],
                    }
                ]
            }
        )
        with pytest.raises(UnresolvedReferenceError):
            hydrate(doc)

    def test_instance_of_non_container(self) -> None:
        doc = ModelDocument.model_validate(
            {
                "people": [{"id": "1", "name": "A"}],
                "deploymentNodes": [
                    {"id": "2", "name": "N", "containerInstances": [{"id": "3", "containerId": "1"}]}
                ],
            }
        )
        with pytest.raises(UnresolvedReferenceError, match="No container with id '1'"):
            hydrate(doc)

    def test_duplicate_id(self) -> None:
        doc = ModelDocument.model_validate(
            {"people": [{"id": "1", "name": "A"}], "softwareSystems": [{"id": "1", "name": "S"}]}
        )
        with pytest.raises(DuplicateIdentifierError):
            hydrate(doc)

    def test_legacy_non_numeric_ids(self) -> None:
        doc = ModelDocument.model_validate(
            {"people": [{"id": "legacy-a", "name": "A"}, {"id": "4", "name": "B"}]}
        )
        model = hydrate(doc)
        assert model.id_generator.is_used("legacy-a")
        assert model.add_person("C").id == "5"

    def test_invalid_document(self) -> None:
        with pytest.raises(ValidationError):
            ModelDocument.from_json('{"people": [{"name": "no id"}]}')
