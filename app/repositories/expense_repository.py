"""Expense repository interface following clean architecture"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from app.schemas.expense_schema import ExpenseForm, ExpenseRead, ExpenseType


class ExpenseRepository(ABC):
    """Abstract repository for one expense kind (house or car) and its type lookup.

    Every read and write on expenses is scoped by the owning user.
    """

    @abstractmethod
    def list_types(self) -> List[ExpenseType]:
        """All expense types, ordered by ID."""
        pass

    @abstractmethod
    def get_type(self, type_id: int) -> Optional[ExpenseType]:
        pass

    @abstractmethod
    def get_by_id(self, expense_id: int, user_id: UUID) -> Optional[ExpenseRead]:
        """
        Find an expense by ID.

        Args:
            expense_id: Expense ID
            user_id: Owner; other users' expenses are not found

        Returns:
            Expense joined with its type name, None if not found
        """
        pass

    @abstractmethod
    def create(self, user_id: UUID, expense: ExpenseForm) -> ExpenseRead:
        """
        Insert a new expense.

        Args:
            user_id: Owner of the expense
            expense: Validated expense input

        Returns:
            Created expense with ID, created_at and type name
        """
        pass

    @abstractmethod
    def update(self, expense_id: int, user_id: UUID, expense: ExpenseForm) -> Optional[ExpenseRead]:
        """
        Replace type, amount, date and notes of an expense.

        Returns:
            Updated expense, None if it does not exist for this user
        """
        pass

    @abstractmethod
    def delete(self, expense_id: int, user_id: UUID) -> bool:
        """
        Delete an expense.

        Returns:
            True if a row was deleted, False otherwise
        """
        pass

    @abstractmethod
    def list_for_month(self, year: int, month: int, user_id: UUID) -> List[ExpenseRead]:
        """Expenses of a month, newest date first."""
        pass

    @abstractmethod
    def list_for_year(self, year: int, user_id: UUID, type_id: Optional[int] = None) -> List[ExpenseRead]:
        """Expenses of a year, optionally of one type, oldest date first."""
        pass

    @abstractmethod
    def list_between(self, start: date, end: date, user_id: UUID) -> List[ExpenseRead]:
        """Expenses with start <= expense_date <= end, oldest first."""
        pass

    @abstractmethod
    def total_for_month(self, year: int, month: int, user_id: UUID) -> float:
        """Sum of a month's amounts, 0.0 when the month is empty."""
        pass

    @abstractmethod
    def highest_for_month(self, year: int, month: int, user_id: UUID) -> Optional[Tuple[float, str]]:
        """Amount and type name of the month's largest expense, None when empty."""
        pass
