import pytest
from fastapi.testclient import TestClient

from blog.main import create_app

SECRET = "test-secret"


@pytest.fixture()
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def app(database_url):
    return create_app(database_url=database_url, secret_key=SECRET)


@pytest.fixture()
def client(app):
    # with -> lifespan: таблицы создаются на старте
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth_headers(client):
    r = client.post("/register/", json={"username": "bob", "password": "secret123"})
    assert r.status_code == 200
    r = client.post("/login/", json={"username": "bob", "password": "secret123"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['jwtToken']}"}
