from datetime import date, datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field


class ExpenseType(BaseModel):
    """Lookup row: utility type or car expense type"""
    id: int
    name: str

    class Config:
        from_attributes = True


class ExpenseForm(BaseModel):
    """Validated input for creating or editing an expense"""
    type_id: int = Field(..., description="Expense type ID")
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Expense amount, must be positive and finite")
    expense_date: date = Field(..., description="Date of the expense")
    notes: str = Field(default="", max_length=1000)


class ExpenseRead(BaseModel):
    """Expense joined with its type name"""
    id: int
    type_id: int
    type_name: str
    amount: float
    expense_date: date
    notes: str = ""
    created_at: Optional[datetime] = None
    created_by: Optional[UUID] = None

    class Config:
        from_attributes = True


class MonthlyExpense(BaseModel):
    """Total expense for a month; is_oob marks an HTMX out-of-band swap"""
    amount: float = 0.0
    month: str = ""
    is_oob: bool = False


class HighestExpense(BaseModel):
    """Single largest expense of a month"""
    amount: float = 0.0
    type: str = ""
    is_oob: bool = False


class MonthSummary(BaseModel):
    monthly_expense: MonthlyExpense
    highest_expense: HighestExpense

    def as_oob(self) -> "MonthSummary":
        return MonthSummary(
            monthly_expense=self.monthly_expense.model_copy(update={"is_oob": True}),
            highest_expense=self.highest_expense.model_copy(update={"is_oob": True}),
        )


class ExpenseOverview(BaseModel):
    """Data for an expense page: current month summary and its expenses"""
    name: str
    summary: MonthSummary
    recent_expenses: List[ExpenseRead] = Field(default_factory=list)


class SearchResults(BaseModel):
    year: int
    month: int
    expenses: List[ExpenseRead] = Field(default_factory=list)
    total: float = 0.0


class ChartPoint(BaseModel):
    """Expense shape served to the chart endpoint"""
    id: int
    type: str
    amount: float
    date: date
