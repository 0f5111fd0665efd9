"""
Ошибки приложения и их перевод в HTTP ответы.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Базовая ошибка приложения.

    json_key=None -> ответ текстом, иначе -> {json_key: message}
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    json_key: Optional[str] = None

    def __init__(self, message: str, json_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if json_key is not None:
            self.json_key = json_key

    def to_response(self):
        if self.json_key is None:
            return PlainTextResponse(self.message, status_code=self.status_code)
        return JSONResponse({self.json_key: self.message}, status_code=self.status_code)


class ValidationError(AppError):
    """Не хватает данных или они кривые"""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Username уже занят"""
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(AppError):
    """Неверный логин или пароль"""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(AppError):
    """Нет токена или он невалиден"""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid JWT Token"):
        super().__init__(message)


class NotFoundError(AppError):
    """Пользователь из токена пропал из базы"""
    status_code = status.HTTP_400_BAD_REQUEST


class StorageError(AppError):
    """Ошибка базы данных, текст отдаём как есть"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    json_key = "error"


class HashFormatError(StorageError):
    """Хеш пароля в базе не распознан"""


class InvalidToken(Exception):
    """Подпись не сошлась, токен битый или пустой"""


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return exc.to_response()


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("⚠️ Невалидный запрос %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI):
    """Все ошибки заканчиваются на границе HTTP, процесс не падает"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
