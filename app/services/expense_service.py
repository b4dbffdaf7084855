from datetime import date
from typing import List, Optional
from uuid import UUID

from app.core.logger import get_logger
from app.core.time_formats import month_name
from app.repositories.expense_repository import ExpenseRepository
from app.schemas.expense_schema import (
    ChartPoint,
    ExpenseForm,
    ExpenseOverview,
    ExpenseRead,
    ExpenseType,
    HighestExpense,
    MonthlyExpense,
    MonthSummary,
    SearchResults,
)

logger = get_logger(__name__)


class ExpenseService:
    """Business logic for one expense kind (house or car)"""

    def __init__(self, expense_repository: ExpenseRepository, kind: str):
        """
        Initialize expense service.

        Args:
            expense_repository: Repository for this kind's expenses and types
            kind: "house" or "car", used in logs and page names
        """
        self.expense_repository = expense_repository
        self.kind = kind

    def list_types(self) -> List[ExpenseType]:
        return self.expense_repository.list_types()

    def get_type(self, type_id: int) -> Optional[ExpenseType]:
        return self.expense_repository.get_type(type_id)

    def _require_type(self, type_id: int) -> None:
        if self.expense_repository.get_type(type_id) is None:
            raise ValueError(f"Unknown {self.kind} expense type: {type_id}")

    def get_expense(self, expense_id: int, user_id: UUID) -> Optional[ExpenseRead]:
        return self.expense_repository.get_by_id(expense_id, user_id)

    def create_expense(self, user_id: UUID, form: ExpenseForm) -> ExpenseRead:
        """
        Create an expense for the user

        Raises:
            ValueError: If the expense type does not exist
        """
        self._require_type(form.type_id)
        expense = self.expense_repository.create(user_id, form)
        logger.info("Created %s expense %s for user %s", self.kind, expense.id, user_id)
        return expense

    def edit_expense(self, expense_id: int, user_id: UUID, form: ExpenseForm) -> Optional[ExpenseRead]:
        """
        Update an expense of the user

        Returns:
            The updated expense, None if the user has no such expense

        Raises:
            ValueError: If the expense type does not exist
        """
        self._require_type(form.type_id)
        expense = self.expense_repository.update(expense_id, user_id, form)
        if expense is not None:
            logger.info("Edited %s expense %s for user %s", self.kind, expense_id, user_id)
        return expense

    def delete_expense(self, expense_id: int, user_id: UUID) -> bool:
        deleted = self.expense_repository.delete(expense_id, user_id)
        if deleted:
            logger.info("Deleted %s expense %s for user %s", self.kind, expense_id, user_id)
        return deleted

    def monthly_summary(self, user_id: UUID, year: int, month: int) -> MonthSummary:
        """Total and highest expense of a month; zeros when the month is empty"""
        total = self.expense_repository.total_for_month(year, month, user_id)
        highest = self.expense_repository.highest_for_month(year, month, user_id)
        amount, type_name = highest if highest else (0.0, "")
        return MonthSummary(
            monthly_expense=MonthlyExpense(amount=total, month=month_name(month)),
            highest_expense=HighestExpense(amount=amount, type=type_name),
        )

    def overview(self, user_id: UUID, today: Optional[date] = None) -> ExpenseOverview:
        """Summary and expenses of the current month"""
        today = today or date.today()
        return ExpenseOverview(
            name=self.kind,
            summary=self.monthly_summary(user_id, today.year, today.month),
            recent_expenses=self.expense_repository.list_for_month(today.year, today.month, user_id),
        )

    def search_month(self, user_id: UUID, year: int, month: int) -> SearchResults:
        expenses = self.expense_repository.list_for_month(year, month, user_id)
        return SearchResults(
            year=year,
            month=month,
            expenses=expenses,
            total=self.expense_repository.total_for_month(year, month, user_id),
        )

    def chart_data(self, user_id: UUID, year: int, type_id: Optional[int] = None) -> List[ChartPoint]:
        expenses = self.expense_repository.list_for_year(year, user_id, type_id=type_id)
        return [
            ChartPoint(id=e.id, type=e.type_name, amount=e.amount, date=e.expense_date)
            for e in expenses
        ]

    def expenses_between(self, user_id: UUID, start: date, end: date) -> List[ExpenseRead]:
        if start > end:
            raise ValueError("Start date must not be after end date")
        return self.expense_repository.list_between(start, end, user_id)
