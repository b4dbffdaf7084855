"""SQLAlchemy implementation of UserRepository"""

from typing import Optional, Dict, Any, List
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.time_formats import utc_now
from app.models.user_model import User
from app.repositories.user_repository import UserRepository

_UPDATABLE_FIELDS = {"username", "email", "password_hash"}


class SqlUserRepository(UserRepository):
    """Relational implementation of UserRepository"""

    def __init__(self, session: Session):
        """
        Initialize SQL user repository.

        Args:
            session: SQLAlchemy session bound to the request
        """
        self.session = session

    def create(self, user_data: Dict[str, Any]) -> User:
        """Insert a new user row"""
        user = User(**user_data)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError("User with this username or email already exists") from e
        return user

    def find_by_id(self, user_id: UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.scalars(select(User).where(User.email == email.lower())).first()

    def exists(self, username: str, email: Optional[str] = None) -> bool:
        conditions = [User.username == username]
        if email:
            conditions.append(User.email == email.lower())
        query = select(User.id).where(or_(*conditions)).limit(1)
        return self.session.scalars(query).first() is not None

    def update(self, user_id: UUID, update_data: Dict[str, Any]) -> Optional[User]:
        """Update the given user fields; unknown keys are ignored"""
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for key, value in update_data.items():
            if key in _UPDATABLE_FIELDS:
                setattr(user, key, value)
        user.updated_at = utc_now()
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError("User with this username or email already exists") from e
        return user

    def delete(self, user_id: UUID) -> bool:
        user = self.find_by_id(user_id)
        if user is None:
            return False
        self.session.delete(user)
        self.session.commit()
        return True

    def list(self, limit: int = 50, offset: int = 0) -> List[User]:
        query = select(User).order_by(User.created_at.desc()).limit(limit).offset(offset)
        return list(self.session.scalars(query))

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(User)) or 0
