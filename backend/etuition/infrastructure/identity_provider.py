"""Firebase Identity Provider — best-effort init and ID-token verification.

Invariants:
    - Init failure is logged, never fatal: the API still serves token-based routes
    - verify_id_token returns the verified email or raises InvalidCredentialError
    - Service-account material is decoded in memory only, never logged

Design Decisions:
    - Base64 service key in one env var: deploy targets expose a single secret string
    - Sync SDK call run in a worker thread: keeps the event loop free
"""

import asyncio
import base64
import json
import logging

import firebase_admin
from firebase_admin import auth, credentials

from etuition.core.errors import IdentityProviderError, InvalidCredentialError

logger = logging.getLogger(__name__)


class FirebaseIdentityProvider:
    """Verifies Firebase ID tokens against an initialized admin app."""

    def __init__(self, app: firebase_admin.App):
        self.app = app

    async def verify_id_token(self, id_token: str) -> str:
        try:
            decoded = await asyncio.to_thread(
                auth.verify_id_token, id_token, app=self.app,
            )
        except (auth.InvalidIdTokenError, ValueError):
            raise InvalidCredentialError("identity proof rejected")
        email = decoded.get("email")
        if not email:
            raise InvalidCredentialError("identity proof has no email")
        return email


def verify_credential(service_account_material: str) -> firebase_admin.App:
    """Decode base64 service-account JSON and initialize (or reuse) the admin app."""
    try:
        decoded = base64.b64decode(service_account_material).decode("utf-8")
        cert = credentials.Certificate(json.loads(decoded))
    except (ValueError, TypeError) as e:
        raise IdentityProviderError(f"Invalid service account material: {type(e).__name__}")
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app(cert)


# Singleton (initialized on startup, may stay None)
identity_provider: FirebaseIdentityProvider | None = None


def init_identity_provider(service_account_material: str | None) -> None:
    global identity_provider
    if not service_account_material:
        logger.warning("Firebase service key not configured, identity proofs disabled")
        return
    try:
        identity_provider = FirebaseIdentityProvider(
            verify_credential(service_account_material),
        )
        logger.info("Firebase Admin initialized")
    except IdentityProviderError as e:
        logger.error(f"Firebase Admin init error: {e.message}")


def get_identity_provider() -> FirebaseIdentityProvider:
    """FastAPI dependency for the identity provider."""
    if not identity_provider:
        raise IdentityProviderError("Identity provider not initialized")
    return identity_provider
