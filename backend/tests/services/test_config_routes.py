"""Config Routes — verifies provider config read/apply/test over HTTP.

Invariants:
    - GET on a fresh install reports gemini, default name, no key
    - PUT persists the config; the key itself is never echoed
    - POST /test applies the config, then pings the provider
    - Short keys are rejected with a 400 validation envelope
"""

from lucid.core.errors import ProviderAPIError


async def test_fresh_config_has_no_key(client):
    res = await client.get("/api/v1/config")
    assert res.status_code == 200
    body = res.json()
    assert body["provider"] == "gemini"
    assert body["user_name"] == "旅行者"
    assert body["has_api_key"] is False
    assert body["stored_keys"] == {"gemini": False, "siliconflow": False}


async def test_put_config_persists_without_echoing_key(client):
    res = await client.put(
        "/api/v1/config",
        json={"provider": "siliconflow", "api_key": "sk-test-999", "user_name": "Ann"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["provider"] == "siliconflow"
    assert body["base_url"] == "https://api.siliconflow.cn/v1"
    assert body["has_api_key"] is True
    assert body["stored_keys"]["siliconflow"] is True
    assert "sk-test-999" not in res.text

    again = (await client.get("/api/v1/config")).json()
    assert again["user_name"] == "Ann"


async def test_short_key_rejected(client):
    res = await client.put("/api/v1/config", json={"api_key": "12345"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "body.api_key"


async def test_connection_success(client, fake_provider):
    res = await client.post("/api/v1/config/test", json={"api_key": "gem-key-123"})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": None}
    assert fake_provider.pings == 1


async def test_connection_failure_reports_message(client, fake_provider):
    fake_provider.ping_error = ProviderAPIError(
        "Gemini API Error: 401 - bad key", "authentication_error",
    )
    res = await client.post("/api/v1/config/test", json={"api_key": "gem-key-123"})
    assert res.status_code == 200
    assert res.json() == {"success": False, "message": "Gemini API Error: 401 - bad key"}
    # config is applied even when the ping fails
    assert (await client.get("/api/v1/config")).json()["has_api_key"] is True
