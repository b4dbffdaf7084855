from datetime import date

from app.schemas.expense_schema import ExpenseForm

HTMX = {"HX-Request": "true"}


def make_form(type_id=1, amount=10.0, expense_date=None, notes=""):
    return ExpenseForm(
        type_id=type_id,
        amount=amount,
        expense_date=expense_date or date.today(),
        notes=notes,
    )


def register(client, username="alice", password="secret123", email=""):
    """Register through the HTML form; the client keeps the auth cookie"""
    return client.post(
        "/register",
        data={
            "username": username,
            "password": password,
            "confirm_password": password,
            "email": email,
        },
        headers=HTMX,
    )
