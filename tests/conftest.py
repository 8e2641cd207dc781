"""Root conftest - shared test configuration."""

import os

# Ensure tests never reach a real database or leak debug output
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_FORMAT", "text")
