from blogql.models.post import Post
from blogql.models.user import User  # noqa: F401  (registers Post.author target)
from blogql.repositories.base import SQLAlchemyRepository


class PostRepository(SQLAlchemyRepository[Post]):
    model = Post
