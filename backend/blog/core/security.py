"""
Функции безопасности: хеширование паролей, выпуск и проверка JWT токенов.
"""
from blog import config
from datetime import datetime, timezone
from typing import Optional
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from jose import JWTError, jwt

from blog.core.errors import HashFormatError, InvalidToken

# Контекст для хеширования паролей (соль + cost фактор внутри хеша)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Хеширует пароль.

    Пароль, который bcrypt не принимает (NUL байт), -> PasswordValueError.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверяет пароль.

    Битый хеш в базе -> HashFormatError, падает только это сравнение.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except PasswordValueError:
        # Такой пароль не мог быть захеширован, значит не совпадает
        return False
    except (ValueError, TypeError) as e:
        raise HashFormatError(f"Stored password hash is malformed: {e}") from e


def create_access_token(
    data: dict,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Создаёт JWT токен.

    Args:
        data: Данные для вшивания в токен (минимум {"username": ...})
        secret_key: Секрет подписи, по умолчанию из конфига
        algorithm: Алгоритм подписи, по умолчанию из конфига

    Поле exp не ставится: токен действует бессрочно.
    """
    to_encode = data.copy()
    to_encode.update({"iat": int(datetime.now(timezone.utc).timestamp())})

    return jwt.encode(
        to_encode,
        secret_key or config.SECRET_KEY,
        algorithm=algorithm or config.ALGORITHM,
    )


def decode_access_token(
    token: Optional[str],
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> dict:
    """Проверяет подпись и возвращает claims, иначе InvalidToken"""
    if not token:
        raise InvalidToken("Token is missing")

    try:
        payload = jwt.decode(
            token,
            secret_key or config.SECRET_KEY,
            algorithms=[algorithm or config.ALGORITHM],
        )
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    if not payload.get("username"):
        raise InvalidToken("Token has no username claim")

    return payload
