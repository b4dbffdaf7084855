from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core.dependencies import expense_service_provider, get_current_user_id
from app.core.exceptions import BadRequestException
from app.core.templates import TEMPLATES, render
from app.services.expense_service import ExpenseService


def build_chart_router(prefix: str, kind: str) -> APIRouter:
    """Chart shell and the JSON data feeding it"""
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    get_service = expense_service_provider(kind)

    @router.get("/chart", summary="Yearly chart")
    def get_chart(
        request: Request,
        service: ExpenseService = Depends(get_service),
    ):
        return render(
            request,
            TEMPLATES.components.chart,
            {"base": prefix, "year": date.today().year, "types": service.list_types()},
        )

    @router.get("/chart/data", summary="Expenses of a year as chart points")
    def get_chart_data(
        year: Optional[int] = Query(None, ge=1, le=9999),
        type_id: Optional[int] = Query(None, alias="type"),
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        points = service.chart_data(user_id, year or date.today().year, type_id=type_id)
        return JSONResponse(content=jsonable_encoder(points))

    @router.get("/chart/range", summary="Expenses between two dates")
    def get_chart_range(
        start: date,
        end: date,
        user_id: UUID = Depends(get_current_user_id),
        service: ExpenseService = Depends(get_service),
    ):
        try:
            expenses = service.expenses_between(user_id, start, end)
        except ValueError as e:
            raise BadRequestException(message="Bad Request on date range.", errors=[str(e)])
        return JSONResponse(content=jsonable_encoder(expenses))

    return router
