"""Health check - liveness endpoint."""


async def test_health_check_returns_200(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["partners"] == 3
    assert "FG-00001" not in res.text
