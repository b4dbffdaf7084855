"""Repository interfaces and implementations for clean architecture"""

from app.repositories.expense_repository import ExpenseRepository
from app.repositories.user_repository import UserRepository

__all__ = ["ExpenseRepository", "UserRepository"]
