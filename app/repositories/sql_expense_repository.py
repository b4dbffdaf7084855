"""SQLAlchemy implementations of ExpenseRepository for house and car expenses"""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.time_formats import month_bounds
from app.models.expense_model import CarExpense, CarExpenseType, HouseExpense, UtilityType
from app.repositories.expense_repository import ExpenseRepository
from app.schemas.expense_schema import ExpenseForm, ExpenseRead, ExpenseType


class SqlExpenseRepository(ExpenseRepository):
    """Relational ExpenseRepository; subclasses bind the expense and type tables"""

    expense_model = None
    type_model = None

    def __init__(self, session: Session):
        """
        Initialize SQL expense repository.

        Args:
            session: SQLAlchemy session bound to the request
        """
        self.session = session

    def _joined(self):
        """Expense columns joined with the type name"""
        expense, expense_type = self.expense_model, self.type_model
        return select(
            expense.id,
            expense.type_id.label("type_id"),
            expense_type.name.label("type_name"),
            expense.amount,
            expense.expense_date,
            expense.notes,
            expense.created_at,
            expense.created_by,
        ).join(expense_type, expense.type_id == expense_type.id)

    def _fetch(self, query) -> List[ExpenseRead]:
        return [ExpenseRead(**row._mapping) for row in self.session.execute(query)]

    def _in_month(self, query, year: int, month: int):
        start, end = month_bounds(year, month)
        return query.where(self.expense_model.expense_date.between(start, end))

    def list_types(self) -> List[ExpenseType]:
        rows = self.session.scalars(select(self.type_model).order_by(self.type_model.id))
        return [ExpenseType.model_validate(row) for row in rows]

    def get_type(self, type_id: int) -> Optional[ExpenseType]:
        row = self.session.get(self.type_model, type_id)
        return ExpenseType.model_validate(row) if row else None

    def get_by_id(self, expense_id: int, user_id: UUID) -> Optional[ExpenseRead]:
        query = self._joined().where(
            self.expense_model.id == expense_id,
            self.expense_model.created_by == user_id,
        )
        rows = self._fetch(query)
        return rows[0] if rows else None

    def create(self, user_id: UUID, expense: ExpenseForm) -> ExpenseRead:
        row = self.expense_model(
            type_id=expense.type_id,
            amount=expense.amount,
            expense_date=expense.expense_date,
            notes=expense.notes,
            created_by=user_id,
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError(f"Failed to create expense: unknown type {expense.type_id}") from e
        return self.get_by_id(row.id, user_id)

    def update(self, expense_id: int, user_id: UUID, expense: ExpenseForm) -> Optional[ExpenseRead]:
        row = self.session.get(self.expense_model, expense_id)
        if row is None or row.created_by != user_id:
            return None
        row.type_id = expense.type_id
        row.amount = expense.amount
        row.expense_date = expense.expense_date
        row.notes = expense.notes
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValueError(f"Failed to edit expense: unknown type {expense.type_id}") from e
        return self.get_by_id(expense_id, user_id)

    def delete(self, expense_id: int, user_id: UUID) -> bool:
        result = self.session.execute(
            delete(self.expense_model).where(
                self.expense_model.id == expense_id,
                self.expense_model.created_by == user_id,
            )
        )
        self.session.commit()
        return result.rowcount > 0

    def list_for_month(self, year: int, month: int, user_id: UUID) -> List[ExpenseRead]:
        query = self._in_month(self._joined(), year, month).where(
            self.expense_model.created_by == user_id
        )
        return self._fetch(query.order_by(self.expense_model.expense_date.desc(), self.expense_model.id.desc()))

    def list_for_year(self, year: int, user_id: UUID, type_id: Optional[int] = None) -> List[ExpenseRead]:
        query = self._joined().where(
            self.expense_model.created_by == user_id,
            self.expense_model.expense_date.between(date(year, 1, 1), date(year, 12, 31)),
        )
        if type_id is not None:
            query = query.where(self.expense_model.type_id == type_id)
        return self._fetch(query.order_by(self.expense_model.expense_date.asc(), self.expense_model.id.asc()))

    def list_between(self, start: date, end: date, user_id: UUID) -> List[ExpenseRead]:
        query = self._joined().where(
            self.expense_model.created_by == user_id,
            self.expense_model.expense_date >= start,
            self.expense_model.expense_date <= end,
        )
        return self._fetch(query.order_by(self.expense_model.expense_date.asc()))

    def total_for_month(self, year: int, month: int, user_id: UUID) -> float:
        query = self._in_month(select(func.sum(self.expense_model.amount)), year, month).where(
            self.expense_model.created_by == user_id
        )
        return float(self.session.scalar(query) or 0.0)

    def highest_for_month(self, year: int, month: int, user_id: UUID) -> Optional[Tuple[float, str]]:
        query = (
            self._in_month(self._joined(), year, month)
            .where(self.expense_model.created_by == user_id)
            .order_by(self.expense_model.amount.desc(), self.expense_model.id.asc())
            .limit(1)
        )
        rows = self._fetch(query)
        if not rows:
            return None
        return rows[0].amount, rows[0].type_name


class SqlHouseExpenseRepository(SqlExpenseRepository):
    """house_expenses joined with utility_types"""
    expense_model = HouseExpense
    type_model = UtilityType


class SqlCarExpenseRepository(SqlExpenseRepository):
    """car_expenses joined with car_expense_types"""
    expense_model = CarExpense
    type_model = CarExpenseType
