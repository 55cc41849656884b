import pytest
from fastapi.testclient import TestClient

from miniparty.core.config import settings
from miniparty.main import create_app
from miniparty.services.db_service import SQLiteBookingStore

ADMIN_SECRET = "party-admin-secret"

@pytest.fixture
def store(tmp_path):
    return SQLiteBookingStore(str(tmp_path / "data" / "bookings.db"))

@pytest.fixture
def client(store, tmp_path):
    # dist_path points nowhere so the SPA fallback is not mounted
    app = create_app(store=store, dist_path=str(tmp_path / "no-dist"))
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def admin_secret(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_SECRET", ADMIN_SECRET)
    return ADMIN_SECRET

@pytest.fixture
def no_admin_secret(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_SECRET", "")
