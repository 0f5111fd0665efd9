"""
Blog API - главный файл приложения.

Запуск:
    python manage.py runserver
    uvicorn blog.main:create_app --factory
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from blog import config
from blog.schemas import (
    CommentCreate,
    CommentList,
    MessageResponse,
    PostCreate,
    Token,
    UserCredentials,
)
from blog.core.auth import get_current_username
from blog.core.database import Database, get_db
from blog.core.errors import register_exception_handlers
from blog.services.auth_service import AuthService
from blog.services.post_service import PostService
from blog.services.stores import CredentialStore, PostStore

logger = logging.getLogger(__name__)

router = APIRouter()


# ============= DEPENDENCIES =============

def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(
        CredentialStore(db),
        secret_key=request.app.state.secret_key,
        algorithm=request.app.state.algorithm,
    )


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    return PostService(CredentialStore(db), PostStore(db))


# ============= HEALTH CHECK =============

@router.get("/", tags=["Health"])
async def root():
    """Проверка что API работает"""
    return {
        "message": "Blog API",
        "status": "healthy",
        "version": "1.0.0",
        "docs": "/docs"
    }


@router.get("/health", tags=["Health"])
def health(request: Request):
    """Проверка состояния базы"""
    logger.debug("Health check вызван")
    database_ok = True
    try:
        with request.app.state.database.engine.connect():
            pass
    except Exception:
        logger.error("База недоступна", exc_info=True)
        database_ok = False

    return {
        "status": "ok" if database_ok else "degraded",
        "services": {"database": database_ok},
    }


# ============= AUTH ENDPOINTS =============

@router.post("/register/", response_model=MessageResponse, tags=["Authentication"])
def register(credentials: UserCredentials, service: AuthService = Depends(get_auth_service)):
    """Регистрация нового пользователя"""
    return service.register(credentials.username, credentials.password)


@router.post("/login/", response_model=Token, tags=["Authentication"])
def login(credentials: UserCredentials, service: AuthService = Depends(get_auth_service)):
    """Вход пользователя"""
    return service.login(credentials.username, credentials.password)


# ============= POSTS & COMMENTS =============

@router.post("/posts", status_code=status.HTTP_201_CREATED, tags=["Posts"])
def create_post(
    payload: PostCreate,
    username: str = Depends(get_current_username),
    service: PostService = Depends(get_post_service),
):
    """Новый пост"""
    return service.create_post(username, payload.title, payload.content)


@router.post("/posts/{postId}/comments", status_code=status.HTTP_201_CREATED, tags=["Posts"])
def create_comment(
    postId: int,
    payload: CommentCreate,
    username: str = Depends(get_current_username),
    service: PostService = Depends(get_post_service),
):
    """Комментарий к посту"""
    return service.add_comment(username, postId, payload.comment)


@router.get(
    "/posts/{postId}/comments",
    response_model=CommentList,
    dependencies=[Depends(get_current_username)],
    tags=["Posts"],
)
def list_comments(
    postId: int,
    service: PostService = Depends(get_post_service),
):
    """Все комментарии поста"""
    return service.list_comments(postId)


# ============= СОЗДАНИЕ ПРИЛОЖЕНИЯ =============

def create_app(
    database_url: Optional[str] = None,
    secret_key: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> FastAPI:
    """
    Собирает приложение.

    Секрет подписи и URL базы передаются явно, по умолчанию берутся из конфига.
    """
    secret_key = secret_key or config.SECRET_KEY
    if not secret_key:
        raise RuntimeError("SECRET_KEY не задан (переменная окружения или аргумент create_app)")

    database = Database(database_url or config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Код ДО yield - выполняется при старте (startup).
        Код ПОСЛЕ yield - выполняется при остановке (shutdown).
        """
        logger.info("Blog API запускается...")
        database.create_all()
        logger.info("API готов к работе!")

        yield  # Приложение работает

        logger.info("Остановка приложения...")
        database.dispose()
        logger.info("Приложение остановлено")

    app = FastAPI(
        title="Blog API",
        description="Users, posts and comments behind JWT authentication",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.secret_key = secret_key
    app.state.algorithm = algorithm or config.ALGORITHM

    # ============= CORS =============
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    return app
