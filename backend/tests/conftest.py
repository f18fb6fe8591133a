"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("STORE_BACKEND", "sql")
os.environ.setdefault("SITE_BASE_URL", "https://label.test")
