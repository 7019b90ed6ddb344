"""Auth & Guard Routes — token issuance, bearer guard, and health probes.

Invariants tested:
    - POST /jwt returns a token that verifies back to the requested email
    - Protected routes: no header -> 401, bad/expired token -> 401
    - With identity proof required, the ID token email must match
    - GET / is plain-text liveness, /health/ready checks the database
"""

from datetime import timedelta

from etuition.config import Settings, get_settings
from etuition.core.errors import InvalidCredentialError
from etuition.infrastructure.identity_tokens import TokenService, get_token_service
from etuition.main import app


class FakeIdentityProvider:
    def __init__(self, email: str | None):
        self.email = email

    async def verify_id_token(self, id_token: str) -> str:
        if self.email is None:
            raise InvalidCredentialError("identity proof rejected")
        return self.email


# ─── Health ─────────────────────────────────────────────────────

async def test_liveness(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.text == "eTuition Server Running"


async def test_readiness(client):
    resp = await client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "healthy"


# ─── Token issuance ─────────────────────────────────────────────

async def test_jwt_issues_verifiable_token(client):
    resp = await client.post("/jwt", json={"email": "a@x.com", "role": "tutor"})
    assert resp.status_code == 200
    identity = get_token_service().verify(resp.json()["token"])
    assert identity.email == "a@x.com"
    assert identity.role == "tutor"


async def test_jwt_without_email_is_400(client):
    resp = await client.post("/jwt", json={"role": "student"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_jwt_requires_proof_when_enabled(client, monkeypatch):
    app.dependency_overrides[get_settings] = lambda: Settings(require_identity_proof=True)

    resp = await client.post("/jwt", json={"email": "a@x.com"})
    assert resp.status_code == 400

    monkeypatch.setattr(
        "etuition.api.routes.auth.get_identity_provider",
        lambda: FakeIdentityProvider("other@x.com"),
    )
    resp = await client.post("/jwt", json={"email": "a@x.com", "idToken": "t"})
    assert resp.status_code == 403

    monkeypatch.setattr(
        "etuition.api.routes.auth.get_identity_provider",
        lambda: FakeIdentityProvider("a@x.com"),
    )
    resp = await client.post("/jwt", json={"email": "a@x.com", "idToken": "t"})
    assert resp.status_code == 200
    assert resp.json()["token"]


async def test_jwt_rejected_proof_is_401(client, monkeypatch):
    app.dependency_overrides[get_settings] = lambda: Settings(require_identity_proof=True)
    monkeypatch.setattr(
        "etuition.api.routes.auth.get_identity_provider",
        lambda: FakeIdentityProvider(None),
    )
    resp = await client.post("/jwt", json={"email": "a@x.com", "idToken": "t"})
    assert resp.status_code == 401


# ─── Guard ──────────────────────────────────────────────────────

async def test_missing_token_is_401(client):
    resp = await client.get("/notifications/a@x.com")
    assert resp.status_code == 401
    error = resp.json()["error"]
    assert error["code"] == "UNAUTHENTICATED"
    assert error["message"] == "Unauthorized access: No token provided"
    assert resp.headers["www-authenticate"] == "Bearer"


async def test_garbage_token_is_401(client):
    resp = await client.get(
        "/notifications/a@x.com", headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 401


async def test_expired_token_is_401(client):
    settings = get_settings()
    expired = TokenService(
        settings.access_token_secret, ttl=timedelta(seconds=-5),
    ).issue({"email": "a@x.com"})
    resp = await client.get(
        "/notifications/a@x.com", headers={"Authorization": f"Bearer {expired}"},
    )
    assert resp.status_code == 401
    assert "expired" in resp.json()["error"]["message"]


async def test_foreign_key_token_is_401(client):
    forged = TokenService("someone-elses-secret").issue({"email": "a@x.com"})
    resp = await client.get(
        "/notifications/a@x.com", headers={"Authorization": f"Bearer {forged}"},
    )
    assert resp.status_code == 401


async def test_valid_token_passes_guard(client, auth_headers):
    resp = await client.get("/notifications/a@x.com", headers=auth_headers("a@x.com"))
    assert resp.status_code == 200
    assert resp.json() == []


async def test_owner_scope_is_403_not_401(client, auth_headers):
    resp = await client.get("/notifications/a@x.com", headers=auth_headers("b@x.com"))
    assert resp.status_code == 403
    assert "www-authenticate" not in resp.headers
    assert resp.json()["error"]["message"] == "Forbidden access"
