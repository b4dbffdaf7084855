from typing import List, Optional
from uuid import UUID

import bcrypt

from app.core.logger import get_logger
from app.models.user_model import User
from app.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserAlreadyExistsError(ValueError):
    """Username or email is taken"""


class AuthService:
    """Service for authentication operations following clean architecture"""

    def __init__(self, user_repository: UserRepository):
        """
        Initialize authentication service.

        Args:
            user_repository: Repository for user data access
        """
        self.user_repository = user_repository

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt"""
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify password against hash"""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False

    def register(self, username: str, password: str, email: Optional[str] = None) -> User:
        """
        Register a new user

        Args:
            username: Unique username
            password: User's password (will be hashed)
            email: Optional unique email address

        Returns:
            User: Created user

        Raises:
            UserAlreadyExistsError: If username or email already exists
        """
        if self.user_repository.find_by_username(username):
            raise UserAlreadyExistsError("Username already exists")

        if email and self.user_repository.find_by_email(email):
            raise UserAlreadyExistsError("Email already exists")

        try:
            user = self.user_repository.create({
                "username": username,
                "email": email.lower() if email else None,
                "password_hash": self.hash_password(password),
            })
        except ValueError as e:
            # lost a race against a concurrent registration
            raise UserAlreadyExistsError(str(e)) from e
        logger.info("Registered user %s", user.username)
        return user

    def login(self, username: str, password: str) -> User:
        """
        Authenticate user by username

        Args:
            username: User's username
            password: User's password

        Returns:
            User: Authenticated user

        Raises:
            ValueError: If user not found or password is incorrect
        """
        user = self.user_repository.find_by_username(username)

        if not user or not self.verify_password(password, user.password_hash):
            logger.info("Failed login for %s", username)
            raise ValueError("Invalid username or password")

        return user

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.user_repository.find_by_id(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        return self.user_repository.find_by_username(username)

    def update_user(self, user_id: UUID, update_data: dict) -> Optional[User]:
        """Update user data; a plain `password` entry is hashed first"""
        update_data = dict(update_data)
        if "password" in update_data:
            update_data["password_hash"] = self.hash_password(update_data.pop("password"))
        return self.user_repository.update(user_id, update_data)

    def delete_user(self, user_id: UUID) -> bool:
        """Delete user account"""
        return self.user_repository.delete(user_id)

    def list_users(self, limit: int = 50, offset: int = 0) -> List[User]:
        return self.user_repository.list(limit=limit, offset=offset)

    def count_users(self) -> int:
        return self.user_repository.count()
