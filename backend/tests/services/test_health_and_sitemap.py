"""Health probe and sitemap route tests."""


async def test_liveness(client):
    resp = await client.get("/api/v1/health/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    resp = await client.get("/api/v1/health/ready")

    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "healthy"


async def test_sitemap_lists_slugged_entities(client):
    await client.post("/api/v1/artists", json={"name": "Echo"})
    await client.post("/api/v1/releases", json={"title": "Night Drive"})
    await client.post("/api/v1/artists", json={"name": "!!!"})

    resp = await client.get("/sitemap.xml")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert "<loc>https://label.test/artist/echo</loc>" in resp.text
    assert "<loc>https://label.test/release/night-drive</loc>" in resp.text
    assert resp.text.count("/artist/") == 1
