"""Root conftest — shared test configuration."""

import os

# Tests never reach a real provider: no deployment key, throwaway database
os.environ["API_KEY"] = ""
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "plain")
