"""
Shared fixtures.

The store location is read once at import time, so the temporary database
path must be in the environment before anything from ``hospital`` is imported.
"""
import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="hospital-tests-"))
os.environ["HOSPITAL_DB_PATH"] = str(_TMP_DIR / "hospital.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from hospital.api_main import app  # noqa: E402
from hospital.db import Base, engine  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    """Empty tables (and reset AUTOINCREMENT counters) for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
