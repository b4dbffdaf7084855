"""User repository interface following clean architecture"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
from uuid import UUID

from app.models.user_model import User


class UserRepository(ABC):
    """Abstract repository interface for user data access"""

    @abstractmethod
    def create(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user.

        Args:
            user_data: username, email and password_hash

        Returns:
            Created user with id and timestamps filled in

        Raises:
            ValueError: If the username or email is already taken
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Find user by ID.

        Args:
            user_id: User's ID

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        """
        Find user by username.

        Args:
            username: User's username

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find user by email address.

        Args:
            email: User's email address

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    def exists(self, username: str, email: Optional[str] = None) -> bool:
        """True if a user with this username or email exists."""
        pass

    @abstractmethod
    def update(self, user_id: UUID, update_data: Dict[str, Any]) -> Optional[User]:
        """
        Update user data.

        Args:
            user_id: User's ID
            update_data: Dictionary with fields to update

        Returns:
            Updated user if found, None otherwise
        """
        pass

    @abstractmethod
    def delete(self, user_id: UUID) -> bool:
        """
        Delete a user.

        Args:
            user_id: User's ID

        Returns:
            True if deleted, False otherwise
        """
        pass

    @abstractmethod
    def list(self, limit: int = 50, offset: int = 0) -> List[User]:
        """Users ordered by creation time, newest first."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass
