"""Shared test setup.

Points the application at an in-memory SQLite database before any
``niente`` module creates its engine.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
