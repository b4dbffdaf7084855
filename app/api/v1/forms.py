"""Helpers turning raw HTML form fields into validated schemas"""
import math
from datetime import datetime
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.exceptions import BadRequestException
from app.core.time_formats import DATE_FORMATS
from app.schemas.expense_schema import ExpenseForm

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def build_schema(schema: Type[SchemaT], message: str, **fields) -> SchemaT:
    """Instantiate a schema, reporting pydantic errors as a 400"""
    try:
        return schema(**fields)
    except ValidationError as e:
        raise BadRequestException(
            message=message,
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        )


def parse_expense_form(type_id: str, expense_date: str, amount: str, notes: Optional[str]) -> ExpenseForm:
    """
    Parse the typeID/date/amount/notes fields of the expense forms.

    Raises:
        BadRequestException: On a malformed type ID, date or a non-positive amount
    """
    try:
        parsed_type_id = int(type_id)
    except (TypeError, ValueError):
        raise BadRequestException(message="Bad Request on type ID.")

    try:
        parsed_date = datetime.strptime(expense_date or "", DATE_FORMATS.input).date()
    except ValueError:
        raise BadRequestException(message="Bad Request on date.")

    try:
        parsed_amount = float(amount)
    except (TypeError, ValueError):
        raise BadRequestException(message="Bad Request on amount.")
    if not math.isfinite(parsed_amount) or parsed_amount <= 0:
        raise BadRequestException(message="Amount invalid, must be a positive number")

    return build_schema(
        ExpenseForm,
        "Bad Request on expense.",
        type_id=parsed_type_id,
        amount=parsed_amount,
        expense_date=parsed_date,
        notes=(notes or "").strip(),
    )


def parse_month(value: str):
    """Parse a YYYY-MM month input into (year, month)"""
    try:
        parsed = datetime.strptime(value or "", DATE_FORMATS.month_only)
    except ValueError:
        raise BadRequestException(message="Bad Request on date.")
    return parsed.year, parsed.month
