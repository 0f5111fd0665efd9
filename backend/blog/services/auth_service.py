"""
Регистрация и вход.
"""
import logging

from passlib.exc import PasswordValueError

from blog import config
from blog.core.errors import AuthenticationError, ConflictError, ValidationError
from blog.core.security import create_access_token, hash_password, verify_password
from blog.services.stores import CredentialStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: CredentialStore, secret_key: str, algorithm: str = config.ALGORITHM):
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm

    def register(self, username, password) -> dict:
        """
        Новый пользователь.

        Порядок проверок: поля -> занятость username -> длина пароля.
        Хешируем только когда пароль уже прошёл проверку.
        """
        logger.info("🔄 Попытка регистрации: %s", username)

        if not username or not password:
            raise ValidationError("Missing data")

        if self.store.get_by_username(username) is not None:
            logger.warning("⚠️ Username уже занят: %s", username)
            raise ConflictError("Username already exists.", json_key="Error")

        if len(password) < config.MIN_PASSWORD_LENGTH:
            logger.warning("⚠️ Слишком короткий пароль: %s", username)
            raise ValidationError(
                "The password must be more than six characters long.",
                json_key="Error",
            )

        try:
            password_hash = hash_password(password)
        except PasswordValueError as e:
            logger.warning("⚠️ Пароль не принят bcrypt: %s", username)
            raise ValidationError("The password contains unsupported characters.", json_key="Error") from e

        self.store.add_user(username, password_hash)
        logger.info("Пользователь зарегистрирован: %s", username)

        return {"message": "User registered successfully."}

    def login(self, username, password) -> dict:
        """Проверка пароля и выдача токена"""
        logger.info("🔄 Попытка входа: %s", username)

        if not username or not password:
            raise ValidationError("Missing Data")

        user = self.store.get_by_username(username)
        if user is None:
            logger.warning("⚠️ Неизвестный пользователь: %s", username)
            raise AuthenticationError("Invalid user")

        if not verify_password(password, user.password_hash):
            logger.warning("⚠️ Неверный пароль: %s", username)
            raise AuthenticationError("Invalid password")

        token = create_access_token({"username": username}, self.secret_key, self.algorithm)
        logger.info("Пользователь вошёл: %s", username)

        return {"jwtToken": token}
