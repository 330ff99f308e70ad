"""DAO for the users table."""

from typing import List, Optional
from sqlalchemy import or_

from dao.base_dao import BaseDao
from utilities.models import User


class UserDao(BaseDao[User]):
    """
    Queries and state changes for users.
    """

    model = User

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter_by(username=username).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter_by(email=email).first()

    def find_by_username_or_email(self, username_or_email: str) -> Optional[User]:
        """Find an active user whose username or email equals the given value."""
        return (
            self.session.query(User)
            .filter(
                or_(User.username == username_or_email, User.email == username_or_email)
            )
            .filter_by(is_active=True)
            .first()
        )

    def find_all_active(self) -> List[User]:
        return (
            self.session.query(User)
            .filter_by(is_active=True)
            .order_by(User.id)
            .all()
        )

    def activate(self, user_id: int) -> None:
        user = self._get_or_raise(user_id)
        user.is_active = True
        self.session.flush()

    def deactivate(self, user_id: int) -> None:
        user = self._get_or_raise(user_id)
        user.is_active = False
        self.session.flush()

    def count_active(self) -> int:
        return self.session.query(User).filter_by(is_active=True).count()
