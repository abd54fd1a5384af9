"""API tests: graph, layout and scene endpoints."""

import math

import pytest
import pytest_asyncio

from backend.app import app, lifespan
from backend.database import init_db
from backend.routes.graph import get_layout_config
from cityscape import LayoutConfig, LayoutConfigError
from conftest import create_company, create_relationship


@pytest_asyncio.fixture
async def city(client):
    """Acme with two Partners (0.8 outgoing, 0.2 incoming) and one Competitor."""
    ids = {}
    ids["acme"] = await create_company(client, "Acme", city_metaphor_style="alpha-spire")
    for name in ("Beta", "Gamma", "Delta"):
        ids[name.lower()] = await create_company(client, name, industry="Software")
    await create_relationship(client, ids["acme"], ids["beta"], "Partner", strength=0.8)
    await create_relationship(client, ids["gamma"], ids["acme"], "Partner", strength=0.2)
    await create_relationship(client, ids["acme"], ids["delta"], "Competitor")
    return ids


class TestGraph:

    async def test_graph_entries(self, client, city):
        resp = await client.get(f"/api/company/{city['acme']}/graph")
        assert resp.status_code == 200
        data = resp.json()

        assert data["focus_company"]["company_name"] == "Acme"
        entries = data["related_companies"]
        assert [e["connected_company_id"] for e in entries] == [city["beta"], city["gamma"], city["delta"]]
        assert [e["direction_from_focus"] for e in entries] == ["outgoing", "incoming", "outgoing"]
        assert entries[1]["related_company_details"]["company_name"] == "Gamma"
        assert entries[1]["relationship_with_focus"] == "Partner"
        assert entries[2]["strength"] is None

    async def test_unknown_company(self, client):
        for path in ("graph", "layout", "scene"):
            resp = await client.get(f"/api/company/4242/{path}")
            assert resp.status_code == 404

    async def test_company_without_relationships(self, client):
        cid = await create_company(client, "Loner")
        data = (await client.get(f"/api/company/{cid}/graph")).json()
        assert data["related_companies"] == []


class TestLayout:

    async def test_layout_districts(self, client, city):
        data = (await client.get(f"/api/company/{city['acme']}/layout", params={"seed": 7})).json()

        assert data["focus"]["category"] == "alpha-spire"
        assert data["focus_placement"] == [0.0, 0.0, 0.0]
        partner, competitor = data["districts"]
        assert partner["category"] == "Partner"
        assert [m["entity"]["name"] for m in partner["members"]] == ["Beta", "Gamma"]
        assert [m["entity"]["name"] for m in competitor["members"]] == ["Delta"]
        assert partner["distance"] == pytest.approx(14.0)
        assert competitor["distance"] == pytest.approx(14.0)
        assert competitor["angle"] == pytest.approx(math.pi)

    async def test_seeded_layout_is_stable(self, client, city):
        url = f"/api/company/{city['acme']}/layout"
        first = (await client.get(url, params={"seed": 3})).json()
        second = (await client.get(url, params={"seed": 3})).json()
        assert first == second

    async def test_layout_uses_configured_distances(self, client, city):
        app.dependency_overrides[get_layout_config] = lambda: LayoutConfig(min_distance=2.0, max_distance=4.0)
        data = (await client.get(f"/api/company/{city['acme']}/layout")).json()
        for district in data["districts"]:
            assert 2.0 <= district["distance"] <= 4.0

    async def test_scene(self, client, city):
        data = (await client.get(f"/api/company/{city['acme']}/scene", params={"seed": 11})).json()
        kinds = [o["kind"] for o in data["scene"]["objects"]]

        assert kinds.count("focus_building") == 1
        assert kinds.count("island") == 2
        assert kinds.count("building") == 3
        assert data["scene"]["focus_id"] == city["acme"]
        assert len(data["layout"]["districts"]) == 2


class TestLayoutPayload:

    async def test_payload_layout(self, client):
        payload = {
            "focus": {"id": 1, "name": "Focus"},
            "relations": [
                {"other": {"id": 2}, "category": "Partner", "strength": 0.8},
                {"other": None, "category": "Partner", "strength": 0.1},
                {"other": {"id": 3}, "category": "Vendor", "strength": "very"},
                {"other": {"id": 4}},
            ],
            "seed": 5,
        }
        resp = await client.post("/api/layout", json=payload)
        assert resp.status_code == 200
        data = resp.json()

        assert [d["category"] for d in data["districts"]] == ["Partner", "Vendor", "Unknown"]
        assert data["districts"][0]["strengths"] == [0.8]
        assert data["districts"][1]["average_strength"] == 0.5
        assert data["skipped"] == [{"index": 1, "reason": "missing_other"}]

    async def test_oversized_strength_is_absent(self, client):
        payload = {
            "focus": {"id": 1},
            "relations": [{"other": {"id": 2}, "category": "Partner", "strength": 10**400}],
        }
        resp = await client.post("/api/layout", json=payload)
        assert resp.status_code == 200
        partner = resp.json()["districts"][0]
        assert partner["strengths"] == []
        assert partner["average_strength"] == 0.5

    async def test_empty_payload(self, client):
        data = (await client.post("/api/layout", json={"focus": {"id": 9}})).json()
        assert data["districts"] == []
        assert data["focus_placement"] == [0.0, 0.0, 0.0]

    async def test_focus_required(self, client):
        assert (await client.post("/api/layout", json={"relations": []})).status_code == 422


@pytest.fixture
def fresh_layout_config():
    get_layout_config.cache_clear()
    yield
    get_layout_config.cache_clear()


class TestStartup:

    async def test_invalid_layout_env_fails_startup(self, monkeypatch, fresh_layout_config):
        monkeypatch.setenv("LAYOUT_MIN_DISTANCE", "30")
        with pytest.raises(LayoutConfigError, match="max_distance"):
            async with lifespan(app):
                pass

    async def test_valid_layout_env_starts(self, monkeypatch, fresh_layout_config, engine):
        monkeypatch.setenv("LAYOUT_MIN_DISTANCE", "5")
        monkeypatch.setattr("backend.app.init_db", lambda: init_db(engine))
        async with lifespan(app):
            assert get_layout_config().min_distance == 5.0
