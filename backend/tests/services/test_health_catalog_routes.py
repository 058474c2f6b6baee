"""Health & Catalog Routes — verifies probes and the static spread/deck listings."""


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_spreads(client):
    spreads = (await client.get("/api/v1/spreads")).json()["spreads"]
    assert len(spreads) == 20
    for s in spreads:
        assert s["card_count"] == len(s["positions"])


async def test_deck(client):
    cards = (await client.get("/api/v1/deck")).json()["cards"]
    assert len(cards) == 78
    assert cards[0]["name"] == "愚者"
    assert cards[0]["image_url"].endswith("/ar00.jpg")
    assert cards[22]["image_url"].endswith("/waac.jpg")
