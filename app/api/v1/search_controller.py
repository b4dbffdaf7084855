from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Request

from app.api.v1.forms import parse_month
from app.core.dependencies import expense_service_provider, get_current_user_id
from app.core.templates import TEMPLATES, render
from app.core.time_formats import DATE_FORMATS, month_name
from app.services.expense_service import ExpenseService


def build_search_router(prefix: str, kind: str) -> APIRouter:
    """Month search form and results for one route group"""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    get_service = expense_service_provider(kind)

    @router.get("/search", summary="Month search form")
    def get_search(request: Request):
        return render(
            request,
            TEMPLATES.components.search,
            {"base": prefix, "current_month": date.today().strftime(DATE_FORMATS.month_only)},
        )

    @router.post("/search", summary="Expenses of a month")
    def search(
        request: Request,
        month: str = Form("", alias="date"),
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        year, month_number = parse_month(month)
        results = service.search_month(user_id, year, month_number)
        return render(
            request,
            TEMPLATES.components.search_results,
            {
                "base": prefix,
                "results": results,
                "month_label": f"{month_name(month_number)} {year}",
            },
        )

    return router
