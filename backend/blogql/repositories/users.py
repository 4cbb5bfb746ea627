from typing import Optional

from blogql.models.user import User
from blogql.models.post import Post  # noqa: F401  (registers User.posts target)
from blogql.repositories.base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Check whether another account already uses this email"""
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None
