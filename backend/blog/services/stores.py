"""
Доступ к таблицам: пользователи (Credential Store), посты и комментарии.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog.core.errors import ConflictError, NotFoundError, StorageError
from blog.core.models import Comment, Post, User

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    username -> password_hash.

    Уникальность username держит UNIQUE в базе, а не блокировки в приложении.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            logger.error("Ошибка чтения пользователя %s", username, exc_info=True)
            raise StorageError(str(e)) from e

    def add_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            # Параллельная регистрация успела раньше
            self.db.rollback()
            logger.warning("⚠️ Username уже занят (constraint): %s", username)
            raise ConflictError("Username already exists.", json_key="Error") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Ошибка записи пользователя %s", username, exc_info=True)
            raise StorageError(str(e)) from e

        self.db.refresh(user)
        return user

    def resolve_user_id(self, username: str) -> int:
        user = self.get_by_username(username)
        if user is None:
            raise NotFoundError("Invalid user")
        return user.id


class PostStore:
    def __init__(self, db: Session):
        self.db = db

    def create_post(self, title: str, content: str) -> Post:
        return self._insert(Post(title=title, content=content))

    def add_comment(self, post_id: int, user_id: int, comment: str) -> Comment:
        return self._insert(Comment(post_id=post_id, user_id=user_id, comment=comment))

    def list_comments(self, post_id: int) -> List[Comment]:
        try:
            return (
                self.db.query(Comment)
                .filter(Comment.post_id == post_id)
                .order_by(Comment.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Ошибка чтения комментариев post_id=%s", post_id, exc_info=True)
            raise StorageError(str(e)) from e

    def _insert(self, row):
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Ошибка записи в %s", row.__tablename__, exc_info=True)
            raise StorageError(str(e)) from e

        self.db.refresh(row)
        return row
