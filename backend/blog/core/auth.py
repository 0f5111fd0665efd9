"""
Проверка Bearer токена перед защищёнными ручками.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blog.core.errors import AuthorizationError, InvalidToken
from blog.core.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: отказ формируем сами (401 "Invalid JWT Token")
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_username(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Достаёт username из заголовка Authorization: Bearer <token>.

    Существование пользователя в базе здесь НЕ проверяется,
    это делают сами ручки.
    """
    if credentials is None:
        logger.warning("⚠️ Нет Bearer токена: %s %s", request.method, request.url.path)
        raise AuthorizationError()

    try:
        claims = decode_access_token(
            credentials.credentials,
            request.app.state.secret_key,
            request.app.state.algorithm,
        )
    except InvalidToken as e:
        logger.warning("⚠️ Токен отклонён: %s", e)
        raise AuthorizationError() from e

    username = claims["username"]
    request.state.username = username
    return username
