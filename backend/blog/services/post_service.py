"""
Посты и комментарии.

Автор поста проходит аутентификацию, но в таблицу posts не пишется.
"""
import logging

from blog.core.errors import ValidationError
from blog.services.stores import CredentialStore, PostStore

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, credentials: CredentialStore, posts: PostStore):
        self.credentials = credentials
        self.posts = posts

    def create_post(self, username: str, title, content) -> str:
        # Пользователь мог пропасть после выдачи токена -> 400 Invalid user
        self.credentials.resolve_user_id(username)

        if not title or not content:
            raise ValidationError("Title and content are required", json_key="error")

        post = self.posts.create_post(title, content)
        logger.info("Пост %s создан пользователем %s", post.id, username)

        return "Post Successfully Added."

    def add_comment(self, username: str, post_id: int, comment) -> str:
        user_id = self.credentials.resolve_user_id(username)

        if not comment:
            raise ValidationError("Comment is required", json_key="error")

        self.posts.add_comment(post_id, user_id, comment)
        logger.info("Комментарий к посту %s от %s", post_id, username)

        return f"Comment successfully added to postId {post_id}"

    def list_comments(self, post_id: int) -> dict:
        return {"comments": self.posts.list_comments(post_id)}
