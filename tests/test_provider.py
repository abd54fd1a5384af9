"""Tests for the provider boundary: schema validation -> layout input."""

import pytest
from pydantic import ValidationError

from backend.provider import to_layout_input
from backend.schemas import GraphRelation, LayoutRequest, RelationshipCreate
from cityscape import Entity


class TestGraphRelation:

    @pytest.mark.parametrize("value", ["0.4", "strong", True, float("nan"), float("-inf"), [0.5], 10**400])
    def test_non_numeric_strength_becomes_none(self, value):
        rel = GraphRelation(other={"id": 2}, category="Partner", strength=value)
        assert rel.strength is None

    @pytest.mark.parametrize("value", [0, 0.35, 1])
    def test_numeric_strength_kept(self, value):
        assert GraphRelation(other={"id": 2}, strength=value).strength == value

    def test_other_is_optional(self):
        assert GraphRelation(category="Vendor").other is None


class TestToLayoutInput:

    def test_converts_request(self):
        req = LayoutRequest.model_validate({
            "focus": {"id": 1, "name": "Acme", "category": "alpha"},
            "relations": [
                {"other": {"id": 2, "name": "Beta"}, "category": "Partner", "strength": 0.8},
                {"other": None, "category": "Vendor"},
            ],
        })
        focus, relations = to_layout_input(req)

        assert focus == Entity(id=1, name="Acme", category="alpha")
        assert relations[0].other == Entity(id=2, name="Beta", category=None)
        assert relations[0].strength == 0.8
        assert relations[1].other is None
        assert relations[1].category == "Vendor"

    def test_focus_required(self):
        with pytest.raises(ValidationError):
            LayoutRequest.model_validate({"relations": []})


class TestRelationshipCreate:

    def test_self_relationship_rejected(self):
        with pytest.raises(ValidationError, match="cannot be the same"):
            RelationshipCreate(company1_id=1, company2_id=1, relationship_type="Partner")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            RelationshipCreate(company1_id=1, company2_id=2, relationship_type="Friend")

    def test_strength_range(self):
        with pytest.raises(ValidationError):
            RelationshipCreate(company1_id=1, company2_id=2, relationship_type="Vendor", strength=1.2)
