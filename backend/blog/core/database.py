"""
Настройка подключения к базе данных.
"""
import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from fastapi import Request

logger = logging.getLogger(__name__)

# Базовый класс для моделей
Base = declarative_base()


class Database:
    """
    Клиент хранилища: движок + фабрика сессий.

    Создаётся явно (один на приложение) и передаётся дальше,
    глобального подключения нет.
    """

    def __init__(self, url: str):
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False  # Только для SQLite
            database_path = make_url(url).database
            if database_path and database_path != ":memory:":
                Path(database_path).parent.mkdir(parents=True, exist_ok=True)

        self.url = url
        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        """Создать таблицы (если их нет)"""
        # Модели должны быть зарегистрированы в Base до create_all
        from blog.core import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Таблицы созданы: %s", self.url)

    def drop_all(self):
        from blog.core import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)
        logger.warning("Таблицы удалены: %s", self.url)

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """
    Dependency для получения сессии БД в endpoint'ах.

    Использование:
        @router.post("/posts")
        def create_post(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
