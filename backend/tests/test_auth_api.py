import pytest

from blog.core.database import Database
from blog.core.errors import ConflictError
from blog.core.models import User
from blog.services.stores import CredentialStore


def test_register_success(client):
    r = client.post("/register/", json={"username": "bob", "password": "secret123"})
    assert r.status_code == 200
    assert r.json() == {"message": "User registered successfully."}


def test_register_duplicate(client):
    client.post("/register/", json={"username": "bob", "password": "secret123"})
    r = client.post("/register/", json={"username": "bob", "password": "another123"})
    assert r.status_code == 409
    assert r.json() == {"Error": "Username already exists."}


@pytest.mark.parametrize("password", ["a", "123456"])
def test_register_short_password_creates_nothing(client, app, password):
    r = client.post("/register/", json={"username": "bob", "password": password})
    assert r.status_code == 400
    assert r.json() == {"Error": "The password must be more than six characters long."}

    db = app.state.database.session()
    try:
        assert db.query(User).count() == 0
    finally:
        db.close()


@pytest.mark.parametrize("body", [{}, {"username": "bob"}, {"password": "secret123"}, {"username": "", "password": "secret123"}])
def test_register_missing_data(client, body):
    r = client.post("/register/", json=body)
    assert r.status_code == 400
    assert r.text == "Missing data"


def test_register_not_json(client):
    r = client.post("/register/", content="username=bob", headers={"Content-Type": "text/plain"})
    assert r.status_code == 400


def test_login_missing_data(client):
    r = client.post("/login/", json={"username": "bob"})
    assert r.status_code == 400
    assert r.text == "Missing Data"


def test_login_unknown_user(client):
    r = client.post("/login/", json={"username": "nobody", "password": "secret123"})
    assert r.status_code == 400
    assert r.text == "Invalid user"


def test_login_wrong_password(client, auth_headers):
    r = client.post("/login/", json={"username": "bob", "password": "wrongpass"})
    assert r.status_code == 400
    assert r.text == "Invalid password"


def test_login_returns_token(client):
    client.post("/register/", json={"username": "bob", "password": "secret123"})
    r = client.post("/login/", json={"username": "bob", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["jwtToken"].count(".") == 2


def test_unique_username_enforced_by_storage(database_url):
    database = Database(database_url)
    database.create_all()
    first, second = database.session(), database.session()
    try:
        # обе сессии не видят пользователя, но записать сможет только одна
        assert CredentialStore(first).get_by_username("carol") is None
        assert CredentialStore(second).get_by_username("carol") is None

        CredentialStore(first).add_user("carol", "hash-1")
        with pytest.raises(ConflictError):
            CredentialStore(second).add_user("carol", "hash-2")
    finally:
        first.close()
        second.close()
        database.dispose()


def test_register_password_with_nul_byte(client, app):
    r = client.post("/register/", json={"username": "bob", "password": "secret\u0000123"})
    assert r.status_code == 400
    assert r.json() == {"Error": "The password contains unsupported characters."}

    db = app.state.database.session()
    try:
        assert db.query(User).count() == 0
    finally:
        db.close()


def test_login_password_with_nul_byte(client, auth_headers):
    r = client.post("/login/", json={"username": "bob", "password": "secret\u0000123"})
    assert r.status_code == 400
    assert r.text == "Invalid password"


def test_login_with_corrupted_hash_fails_only_that_login(client, app):
    db = app.state.database.session()
    try:
        db.add(User(username="broken", password_hash="garbage"))
        db.commit()
    finally:
        db.close()

    r = client.post("/login/", json={"username": "broken", "password": "secret123"})
    assert r.status_code == 500
    assert r.json()["error"].startswith("Stored password hash is malformed")

    # сервис продолжает работать
    client.post("/register/", json={"username": "bob", "password": "secret123"})
    r = client.post("/login/", json={"username": "bob", "password": "secret123"})
    assert r.status_code == 200
    assert "jwtToken" in r.json()


def test_register_seven_character_password(client):
    r = client.post("/register/", json={"username": "bob", "password": "1234567"})
    assert r.status_code == 200
