"""
Jinja2 environment and the registry of template names.

Handlers reference templates through `TEMPLATES` rather than raw paths so a
rename only touches this module.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.core.time_formats import DATE_FORMATS, end_of_current_month, start_of_current_month

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class Pages:
    index: str = "pages/index.html"
    login: str = "pages/login.html"
    register: str = "pages/register.html"
    expenses: str = "pages/expenses.html"


@dataclass(frozen=True)
class Components:
    header: str = "components/header.html"
    summary: str = "components/summary.html"
    total_card: str = "components/total_card.html"
    highest_card: str = "components/highest_card.html"
    exp_row: str = "components/exp_row.html"
    create_exp_form: str = "components/create_exp_form.html"
    edit_exp_form: str = "components/edit_exp_form.html"
    modal: str = "components/modal.html"
    modal_error: str = "components/modal_error.html"
    modal_confirm: str = "components/modal_confirm.html"
    dialog: str = "components/dialog.html"
    search: str = "components/search.html"
    search_results: str = "components/search_results.html"
    chart: str = "components/chart.html"


@dataclass(frozen=True)
class Responses:
    """HTMX partial responses returned after a mutation"""
    login_success: str = "responses/login_success.html"
    register_success: str = "responses/register_success.html"
    save_exp: str = "responses/save_exp.html"
    delete_exp: str = "responses/delete_exp.html"


@dataclass(frozen=True)
class HTMLTemplates:
    root: str = "root.html"
    pages: Pages = Pages()
    components: Components = Components()
    responses: Responses = Responses()


TEMPLATES = HTMLTemplates()


@dataclass
class HeaderOptions:
    is_logged_in: bool = False
    is_oob: bool = False


def format_money(value: Any) -> str:
    return f"{float(value or 0):.2f}"


def format_date(value: Any) -> str:
    return value.strftime(DATE_FORMATS.output) if value else ""


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = format_money
templates.env.filters["display_date"] = format_date
templates.env.globals["start_of_current_month"] = start_of_current_month
templates.env.globals["end_of_current_month"] = end_of_current_month
templates.env.globals["date_formats"] = DATE_FORMATS


def is_htmx_request(request: Request) -> bool:
    return request.headers.get("HX-Request") == "true"


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
):
    """Render a single template (fragment or full page)."""
    return templates.TemplateResponse(
        request,
        name,
        context or {},
        status_code=status_code,
        headers=headers,
    )


def render_page(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    is_logged_in: bool = False,
    status_code: int = 200,
):
    """
    Render a page as a bare fragment for HTMX requests, or wrapped in the
    root layout (header included) for regular navigation.
    """
    if is_htmx_request(request):
        return render(request, name, context, status_code=status_code)

    layout_context = dict(context or {})
    layout_context["content_template"] = name
    layout_context["header"] = HeaderOptions(is_logged_in=is_logged_in)
    return render(request, TEMPLATES.root, layout_context, status_code=status_code)
