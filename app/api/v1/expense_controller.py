"""
HTML handlers for house and car expenses.

Every mutation answers with HTMX fragments: the affected row plus the month
summary cards marked for an out-of-band swap.
"""
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Request, Response, status

from app.api.v1.forms import parse_expense_form
from app.core.dependencies import expense_service_provider, get_current_user_id
from app.core.exceptions import BadRequestException, NotFoundException
from app.core.templates import TEMPLATES, is_htmx_request, render, render_page
from app.services.expense_service import ExpenseService

TITLES = {"house": "House expenses", "car": "Car expenses"}


def build_expense_router(prefix: str, kind: str) -> APIRouter:
    """
    Build the expense routes for one route group.

    Args:
        prefix: URL prefix of the group, e.g. "/house"
        kind: Expense kind served by the group, "house" or "car"

    Returns:
        APIRouter with page, form and CRUD routes
    """
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    get_service = expense_service_provider(kind)

    def page_context(**extra) -> dict:
        context = {"base": prefix, "kind": kind, "title": TITLES[kind]}
        context.update(extra)
        return context

    def load_expense(service: ExpenseService, expense_id: int, user_id: UUID):
        expense = service.get_expense(expense_id, user_id)
        if expense is None:
            raise NotFoundException(message=f"Expense with ID: {expense_id} not found")
        return expense

    @router.get("", summary="Expense page for the current month")
    def get_expenses_page(
        request: Request,
        section: str = "",
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        overview = service.overview(user_id)
        context = page_context(overview=overview, summary=overview.summary)

        if section == "summary" and is_htmx_request(request):
            return render(request, TEMPLATES.components.summary, context)

        return render_page(request, TEMPLATES.pages.expenses, context, is_logged_in=True)

    @router.get("/expenses/new", summary="Create expense form")
    def get_create_form(
        request: Request,
        service: ExpenseService = Depends(get_service),
    ):
        return render(
            request,
            TEMPLATES.components.create_exp_form,
            page_context(types=service.list_types(), today=date.today()),
        )

    @router.post("/expenses", status_code=status.HTTP_201_CREATED, summary="Create expense")
    def create_expense(
        request: Request,
        type_id: str = Form("", alias="typeID"),
        expense_date: str = Form("", alias="date"),
        amount: str = Form(""),
        notes: str = Form(""),
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        form = parse_expense_form(type_id, expense_date, amount, notes)

        try:
            expense = service.create_expense(user_id, form)
        except ValueError as e:
            raise BadRequestException(message="Error creating new expense.", errors=[str(e)])

        modal = {
            "title": "Successful expense creation.",
            "message": f"{expense.type_name}: {expense.amount:.2f} BGN",
        }

        today = date.today()
        if (expense.expense_date.year, expense.expense_date.month) != (today.year, today.month):
            # not part of the visible month, nothing to swap into the table
            return render(
                request,
                TEMPLATES.components.dialog,
                page_context(modal=modal),
                status_code=status.HTTP_201_CREATED,
            )

        summary = service.monthly_summary(user_id, today.year, today.month).as_oob()
        return render(
            request,
            TEMPLATES.responses.save_exp,
            page_context(expense=expense, summary=summary, modal=modal),
            status_code=status.HTTP_201_CREATED,
        )

    @router.get("/expenses/{expense_id}", summary="Single expense row")
    def get_expense(
        request: Request,
        expense_id: int,
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        expense = load_expense(service, expense_id, user_id)
        return render(request, TEMPLATES.components.exp_row, page_context(expense=expense))

    @router.get("/expenses/{expense_id}/edit", summary="Edit expense form")
    def get_edit_form(
        request: Request,
        expense_id: int,
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        expense = load_expense(service, expense_id, user_id)
        return render(
            request,
            TEMPLATES.components.edit_exp_form,
            page_context(expense=expense, types=service.list_types()),
        )

    @router.put("/expenses/{expense_id}", summary="Edit expense")
    def edit_expense(
        request: Request,
        expense_id: int,
        type_id: str = Form("", alias="typeID"),
        expense_date: str = Form("", alias="date"),
        amount: str = Form(""),
        notes: str = Form(""),
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        form = parse_expense_form(type_id, expense_date, amount, notes)

        try:
            expense = service.edit_expense(expense_id, user_id, form)
        except ValueError as e:
            raise BadRequestException(message="Couldn't update expense", errors=[str(e)])
        if expense is None:
            raise NotFoundException(message=f"Expense with ID: {expense_id} not found")

        today = date.today()
        summary = service.monthly_summary(user_id, today.year, today.month).as_oob()
        return render(
            request,
            TEMPLATES.responses.save_exp,
            page_context(
                expense=expense,
                summary=summary,
                modal={
                    "title": "Successfully edited expense!",
                    "message": f"Expense with ID: {expense.id} updated!",
                },
            ),
        )

    @router.get("/expenses/{expense_id}/delete", summary="Delete confirmation modal")
    def get_delete_confirm(request: Request, expense_id: int):
        return render(
            request,
            TEMPLATES.components.modal_confirm,
            {
                "title": "Are you sure you want to delete this?",
                "method": "DELETE",
                "endpoint": f"{prefix}/expenses/{expense_id}",
                "target": f"#exp-{expense_id}",
                "message": f"Please confirm if you want to delete expense with ID: {expense_id}",
            },
        )

    @router.delete("/expenses/{expense_id}", summary="Delete expense")
    def delete_expense(
        request: Request,
        expense_id: int,
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        if not service.delete_expense(expense_id, user_id):
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        today = date.today()
        summary = service.monthly_summary(user_id, today.year, today.month).as_oob()
        return render(request, TEMPLATES.responses.delete_exp, page_context(summary=summary))

    return router
