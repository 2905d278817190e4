"""Minimal conftest for unit tests - no database, no app dependencies."""

import os

# Set required env vars before any app imports
os.environ.setdefault("AUTH_SECRET", "testsecretkey_for_unit_tests_only_1234567890")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
