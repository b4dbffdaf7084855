"""
Seed a Demo Account With Random Expenses

This script creates (or reuses) a demo user and fills its house and car
expenses with random amounts spread over the last few months, so the
summary cards, search and charts have something to show.
"""

import random
from datetime import date
from typing import Dict, List, Tuple

from app.core.config import settings
from app.core.db import build_engine, build_session_factory, init_database
from app.core.time_formats import month_bounds
from app.repositories.sql_expense_repository import (
    SqlCarExpenseRepository,
    SqlHouseExpenseRepository,
)
from app.repositories.sql_user_repository import SqlUserRepository
from app.schemas.expense_schema import ExpenseForm
from app.services.auth_service import AuthService
from app.services.expense_service import ExpenseService

# Amount ranges by expense type (in BGN)
AMOUNT_RANGES: Dict[str, Tuple[float, float]] = {
    "Electricity": (40, 250),
    "Water": (15, 80),
    "Gas": (20, 150),
    "Heating": (50, 400),
    "Internet": (25, 60),
    "Rent": (600, 1200),
    "Fuel": (60, 180),
    "Insurance": (200, 900),
    "Maintenance": (80, 600),
    "Repair": (100, 1500),
    "Tax": (50, 300),
    "Parking": (5, 60),
}
DEFAULT_RANGE = (10, 200)

NOTES = ["", "monthly bill", "paid online", "paid in cash", "invoice attached"]


def previous_months(count: int, today: date = None) -> List[Tuple[int, int]]:
    """(year, month) pairs for the current month and the `count - 1` before it"""
    today = today or date.today()
    year, month = today.year, today.month
    months = []
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def random_expense(type_id: int, type_name: str, year: int, month: int) -> ExpenseForm:
    """Generate a single expense dated inside the given month"""
    first, last = month_bounds(year, month)
    if (year, month) == (date.today().year, date.today().month):
        last = date.today()
    min_amount, max_amount = AMOUNT_RANGES.get(type_name, DEFAULT_RANGE)

    return ExpenseForm(
        type_id=type_id,
        amount=round(random.uniform(min_amount, max_amount), 2),
        expense_date=date(year, month, random.randint(first.day, last.day)),
        notes=random.choice(NOTES),
    )


def seed_expenses(service: ExpenseService, user_id, months: int, per_month: int) -> int:
    """
    Insert random expenses of one kind.

    Args:
        service: Expense service of the kind to seed
        user_id: Owner of the new expenses
        months: Number of months back to cover, current month included
        per_month: Expenses inserted per month

    Returns:
        Number of inserted expenses
    """
    types = service.list_types()
    inserted = 0

    for year, month in previous_months(months):
        for _ in range(per_month):
            expense_type = random.choice(types)
            service.create_expense(user_id, random_expense(expense_type.id, expense_type.name, year, month))
            inserted += 1

    return inserted


def seed_demo_data(username: str, password: str, months: int = 3, per_month: int = 5) -> Dict[str, int]:
    """Create the demo user if needed and seed both expense kinds"""
    engine = build_engine(settings.database_url)
    init_database(engine)
    session = build_session_factory(engine)()

    try:
        auth_service = AuthService(user_repository=SqlUserRepository(session))
        user = auth_service.get_user_by_username(username)
        if user is None:
            user = auth_service.register(username=username, password=password)

        report = {
            "house": seed_expenses(
                ExpenseService(SqlHouseExpenseRepository(session), kind="house"), user.id, months, per_month
            ),
            "car": seed_expenses(
                ExpenseService(SqlCarExpenseRepository(session), kind="car"), user.id, months, per_month
            ),
        }
    finally:
        session.close()
        engine.dispose()

    print(f"Seeded expenses for user {username}")
    for kind, count in report.items():
        print(f"   {kind}: {count} expenses")
    print(f"   Months covered: {months}")

    return report


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed a demo user with random house and car expenses")
    parser.add_argument(
        "--username",
        type=str,
        default="demo",
        help="Demo username (default: demo)",
    )
    parser.add_argument(
        "--password",
        type=str,
        default="demo123",
        help="Password used when the user has to be created (default: demo123)",
    )
    parser.add_argument(
        "--months",
        type=int,
        default=3,
        help="Number of months to cover, current month included (default: 3)",
    )
    parser.add_argument(
        "--per-month",
        type=int,
        default=5,
        help="Expenses per month and kind (default: 5)",
    )

    args = parser.parse_args()
    seed_demo_data(args.username, args.password, args.months, args.per_month)
