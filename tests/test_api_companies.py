"""API tests: companies and products."""

from conftest import create_company


class TestCompanies:

    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.json() == {"status": "ok"}

    async def test_create_and_list(self, client):
        await create_company(client, "Zeta Labs", industry="Biotech")
        await create_company(client, "Acme", founded_date="2001-01-01", is_public=True)

        resp = await client.get("/api/companies")
        assert resp.status_code == 200
        names = [c["company_name"] for c in resp.json()]
        assert names == ["Acme", "Zeta Labs"]
        acme = resp.json()[0]
        assert acme["founded_date"] == "2001-01-01"
        assert acme["is_public"] is True

    async def test_create_returns_id(self, client):
        resp = await client.post("/api/companies", json={"company_name": "Acme"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Company added successfully"
        assert isinstance(body["companyId"], int)

    async def test_name_required(self, client):
        resp = await client.post("/api/companies", json={"industry": "Retail"})
        assert resp.status_code == 422

    async def test_duplicate_name_conflict(self, client):
        await create_company(client, "Acme")
        resp = await client.post("/api/companies", json={"company_name": "Acme"})
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Company name already exists."

    async def test_names_and_ids(self, client):
        b = await create_company(client, "Beta")
        a = await create_company(client, "Alpha")
        resp = await client.get("/api/company/getCompanyNamesAndIds")
        assert resp.json() == [{"id": a, "name": "Alpha"}, {"id": b, "name": "Beta"}]

    async def test_get_by_id(self, client):
        cid = await create_company(client, "Acme", country="DE")
        resp = await client.get(f"/api/companies/{cid}")
        assert resp.status_code == 200
        assert resp.json()["country"] == "DE"

        assert (await client.get("/api/companies/999")).status_code == 404


class TestCompanyUpdate:

    async def test_partial_update(self, client):
        cid = await create_company(client, "Acme", industry="Retail", country="DE")
        resp = await client.put(f"/api/companies/{cid}", json={"industry": "Logistics", "employee_count": 40})
        assert resp.status_code == 200
        assert resp.json()["changes"] == 2

        company = (await client.get(f"/api/companies/{cid}")).json()
        assert company["industry"] == "Logistics"
        assert company["employee_count"] == 40
        assert company["country"] == "DE"

    async def test_no_fields(self, client):
        cid = await create_company(client, "Acme")
        resp = await client.put(f"/api/companies/{cid}", json={"not_a_column": 1})
        assert resp.status_code == 400
        assert "No valid fields" in resp.json()["detail"]

    async def test_missing_company(self, client):
        resp = await client.put("/api/companies/404", json={"industry": "X"})
        assert resp.status_code == 404

    async def test_rename_to_existing_name(self, client):
        await create_company(client, "Acme")
        cid = await create_company(client, "Beta")
        resp = await client.put(f"/api/companies/{cid}", json={"company_name": "Acme"})
        assert resp.status_code == 409


class TestProducts:

    async def test_create_and_list_for_company(self, client):
        cid = await create_company(client, "Acme")
        for name, category in [("Widget", "Hardware"), ("Cloud", "Software")]:
            resp = await client.post(
                "/api/products", json={"company_id": cid, "product_name": name, "category": category}
            )
            assert resp.status_code == 201
            assert "productId" in resp.json()

        resp = await client.get(f"/api/companies/{cid}/products")
        assert [p["product_name"] for p in resp.json()] == ["Cloud", "Widget"]
        assert resp.json()[0]["company_name"] == "Acme"

    async def test_filter_by_category(self, client):
        cid = await create_company(client, "Acme")
        await client.post("/api/products", json={"company_id": cid, "product_name": "A", "category": "X"})
        await client.post("/api/products", json={"company_id": cid, "product_name": "B", "category": "Y"})

        resp = await client.get("/api/products", params={"category": "Y"})
        assert [p["product_name"] for p in resp.json()] == ["B"]
        assert len((await client.get("/api/products")).json()) == 2

    async def test_unknown_company(self, client):
        resp = await client.post("/api/products", json={"company_id": 77, "product_name": "Ghost"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid Company ID provided for the product."

    async def test_get_and_update(self, client):
        cid = await create_company(client, "Acme")
        pid = (await client.post("/api/products", json={"company_id": cid, "product_name": "A"})).json()["productId"]

        resp = await client.put(f"/api/products/{pid}", json={"status": "Retired"})
        assert resp.status_code == 200

        product = (await client.get(f"/api/products/{pid}")).json()
        assert product["status"] == "Retired"
        assert product["company_name"] == "Acme"
        assert (await client.get("/api/products/999")).status_code == 404
