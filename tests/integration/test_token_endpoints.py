"""Integration tests for token issuance and lookup endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

EMAIL = "user@example.com"


def _client(test_app):
    return AsyncClient(transport=ASGITransport(app=test_app.app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_issue_and_lookup_roundtrip(test_app):
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "registration"})
        assert resp.status_code == 200
        issued = resp.json()
        assert issued["purpose"] == "registration"
        assert len(issued["token"]) == 8
        assert issued["message_id"]
        assert issued["timestamp"].startswith("2024-01-01T12:00:00")

        resp = await http.post("/api/v1/tokens/lookup", json={"email": EMAIL})
        assert resp.status_code == 200
        data = resp.json()
        assert data["email"] == EMAIL
        assert data["token"] == issued["token"]
        assert data["purpose"] == "registration"
        assert data["expires_at"].startswith("2024-01-01T12:15:00")

        resp = await http.get("/api/v1/tokens/lookup", params={"email": EMAIL})
        assert resp.status_code == 200
        assert resp.json()["token"] == issued["token"]

    assert test_app.email_sender.sent[0]["to"] == EMAIL


@pytest.mark.asyncio
async def test_issue_rejects_unknown_purpose(test_app):
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "login"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"
    assert test_app.email_sender.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"email": EMAIL}, {"purpose": "recovery"}])
async def test_issue_requires_both_fields(test_app, body):
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


@pytest.mark.asyncio
async def test_issue_reports_delivery_failure(test_app):
    test_app.email_sender.fail_with = ConnectionError("smtp unreachable")
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "recovery"})
        assert resp.status_code == 502
        assert resp.json()["error"] == "delivery_error"

        resp = await http.get("/api/v1/tokens/lookup", params={"email": EMAIL})
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_lookup_requires_email(test_app):
    async with _client(test_app) as http:
        resp = await http.get("/api/v1/tokens/lookup")
        assert resp.status_code == 400
        resp = await http.post("/api/v1/tokens/lookup", json={})
        assert resp.status_code == 400


@pytest.mark.asyncio
async def test_lookup_unknown_address(test_app):
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens/lookup", json={"email": "nobody@example.com"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_lookup_after_expiry_is_gone(test_app):
    async with _client(test_app) as http:
        await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "registration"})
        test_app.clock.advance(minutes=15, seconds=1)

        resp = await http.get("/api/v1/tokens/lookup", params={"email": EMAIL})
        assert resp.status_code == 410
        assert resp.json()["error"] == "expired"

        resp = await http.get("/api/v1/tokens/lookup", params={"email": EMAIL})
        assert resp.status_code == 404


@pytest.mark.asyncio
async def test_reissue_invalidates_first_token(test_app):
    async with _client(test_app) as http:
        first = (
            await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "registration"})
        ).json()
        test_app.clock.advance(minutes=1)
        second = (
            await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "recovery"})
        ).json()

        resp = await http.get("/api/v1/tokens/lookup", params={"email": EMAIL})
    data = resp.json()
    assert data["token"] == second["token"]
    assert data["token"] != first["token"]
    assert data["purpose"] == "recovery"


@pytest.mark.asyncio
async def test_sender_dependency_override(test_app):
    """Routes resolve the sender through deps so it can be swapped per app."""

    class SpySender:
        def __init__(self):
            self.calls = []

        async def send(self, recipient, subject, html_body):
            self.calls.append((recipient, subject))
            return "spy-1"

    sender = SpySender()

    async def _get_sender():
        return sender

    from tokenmail.deps import get_email_sender

    test_app.app.dependency_overrides = {get_email_sender: _get_sender}
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", json={"email": EMAIL, "purpose": "recovery"})
    assert resp.status_code == 200
    assert resp.json()["message_id"] == "spy-1"
    assert sender.calls == [(EMAIL, "Recover your account")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kwargs",
    [
        {"json": {"email": 123, "purpose": "registration"}},
        {"json": {"email": EMAIL, "purpose": 7}},
        {},
        {"content": b"not json", "headers": {"Content-Type": "application/json"}},
    ],
    ids=["non-string-email", "non-string-purpose", "empty-body", "non-json-body"],
)
async def test_issue_rejects_malformed_body(test_app, kwargs):
    async with _client(test_app) as http:
        resp = await http.post("/api/v1/tokens", **kwargs)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "validation_error"
    assert body["detail"]
    assert test_app.email_sender.sent == []


@pytest.mark.asyncio
async def test_openapi_documents_error_responses(test_app):
    async with _client(test_app) as http:
        resp = await http.get("/openapi.json")
    assert resp.status_code == 200
    spec = resp.json()
    ref = "#/components/schemas/ErrorResponse"
    issue = spec["paths"]["/api/v1/tokens"]["post"]["responses"]
    lookup = spec["paths"]["/api/v1/tokens/lookup"]["get"]["responses"]
    for responses, codes in ((issue, ("400", "502")), (lookup, ("400", "404", "410"))):
        for code in codes:
            assert responses[code]["content"]["application/json"]["schema"]["$ref"] == ref
    assert "ErrorResponse" in spec["components"]["schemas"]
