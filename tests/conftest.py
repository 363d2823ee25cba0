import pytest
from fastapi.testclient import TestClient

from database import CollectionStore
from main import app
from seed import ADMIN_EMAIL, ADMIN_PASSWORD, initialize_data


@pytest.fixture
def store(tmp_path):
    store = CollectionStore(str(tmp_path / "data"))
    initialize_data(store)
    return store


@pytest.fixture
def client(store, tmp_path):
    previous = app.state.store, app.state.upload_dir
    app.state.store = store
    app.state.upload_dir = str(tmp_path / "uploads")
    yield TestClient(app)
    app.state.store, app.state.upload_dir = previous


@pytest.fixture
def token(client):
    res = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return res.json()["token"]


@pytest.fixture
def headers(token):
    return {"Authorization": f"Bearer {token}"}
