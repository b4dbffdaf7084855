"""Dependency injection for clean architecture"""

from typing import Callable, Dict, Type
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.db import get_session
from app.core.exceptions import UnauthorizedException
from app.repositories.expense_repository import ExpenseRepository
from app.repositories.sql_expense_repository import (
    SqlCarExpenseRepository,
    SqlExpenseRepository,
    SqlHouseExpenseRepository,
)
from app.repositories.sql_user_repository import SqlUserRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import AuthService
from app.services.expense_service import ExpenseService

EXPENSE_REPOSITORIES: Dict[str, Type[SqlExpenseRepository]] = {
    "house": SqlHouseExpenseRepository,
    "car": SqlCarExpenseRepository,
}


def get_user_repository(session: Session = Depends(get_session)) -> UserRepository:
    """
    Get user repository instance.

    Args:
        session: Request scoped database session

    Returns:
        UserRepository instance
    """
    return SqlUserRepository(session)


def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository (injected)

    Returns:
        AuthService instance
    """
    return AuthService(user_repository=user_repo)


def expense_service_provider(kind: str) -> Callable[..., ExpenseService]:
    """
    Build a dependency returning the expense service of one kind.

    Args:
        kind: "house" or "car"

    Returns:
        Dependency callable for Depends()
    """
    repository_class = EXPENSE_REPOSITORIES[kind]

    def get_expense_service(session: Session = Depends(get_session)) -> ExpenseService:
        repository: ExpenseRepository = repository_class(session)
        return ExpenseService(expense_repository=repository, kind=kind)

    return get_expense_service


def get_current_user_id(request: Request) -> UUID:
    """User ID set on request.state by TokenAuthMiddleware"""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise UnauthorizedException(
            message="User authentication required",
            errors=["User ID not found in token"],
        )
    return user_id
