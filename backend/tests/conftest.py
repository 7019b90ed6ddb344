"""Root conftest — shared test configuration."""

import os

# Ensure tests never use real secrets or a real database
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-signing-secret")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_fake_key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("PAYMENT_BASE_DELAY_MS", "0")
