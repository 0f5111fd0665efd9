import pytest

from blog.core.database import Database
from blog.core.errors import HashFormatError, InvalidToken
from blog.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_is_not_plaintext_and_verifies():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert hashed.startswith("$2b$10$")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_same_password_gets_different_salt():
    assert hash_password("secret123") != hash_password("secret123")


def test_malformed_stored_hash():
    with pytest.raises(HashFormatError):
        verify_password("secret123", "not-a-bcrypt-hash")


def test_token_roundtrip():
    token = create_access_token({"username": "alice"}, "k1", "HS256")
    claims = decode_access_token(token, "k1", "HS256")
    assert claims["username"] == "alice"
    assert "exp" not in claims


def test_token_signed_with_other_key_rejected():
    token = create_access_token({"username": "alice"}, "k1", "HS256")
    with pytest.raises(InvalidToken):
        decode_access_token(token, "k2", "HS256")


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_malformed_token_rejected(token):
    with pytest.raises(InvalidToken):
        decode_access_token(token, "k1", "HS256")


def test_token_without_username_rejected():
    token = create_access_token({"sub": "1"}, "k1", "HS256")
    with pytest.raises(InvalidToken):
        decode_access_token(token, "k1", "HS256")


def test_verify_password_with_nul_byte_is_mismatch():
    hashed = hash_password("secret123")
    assert verify_password("secret\u0000123", hashed) is False


def test_database_creates_sqlite_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "app.db"
    database = Database(f"sqlite:///{path}")
    try:
        assert path.parent.is_dir()
    finally:
        database.dispose()
