from fastapi import APIRouter, Request

from app.core.middleware import optional_user
from app.core.templates import TEMPLATES, render_page

router = APIRouter(tags=["pages"])


@router.get("/", summary="Landing page")
def index(request: Request):
    user = optional_user(request)
    return render_page(
        request,
        TEMPLATES.pages.index,
        {"username": user.get("username") if user else None},
        is_logged_in=user is not None,
    )
