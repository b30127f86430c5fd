import pytest
from fastapi.testclient import TestClient

from customer_api.app.config import Settings
from customer_api.app.main import create_app


@pytest.fixture()
def app_settings(tmp_path):
    return Settings(
        DB_PATH=str(tmp_path / "test.db"),
        BASE_URL="http://testserver",
        DEFAULT_PAGE_LIMIT=10,
        MAX_PAGE_LIMIT=100,
        REQUEST_LOGGING_ENABLED=False,
    )


@pytest.fixture()
def client(app_settings):
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_customer(client):
    counter = {"n": 0}

    def _make(first_name="Asha", last_name="Rao", phone_number=None, address=None):
        counter["n"] += 1
        body = {
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number or f"90000000{counter['n']:02d}",
        }
        if address:
            body["address"] = address
        r = client.post("/api/customers", json=body)
        assert r.status_code == 201, r.json()
        return r.json()["data"]

    return _make

