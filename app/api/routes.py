"""
Central place to register all API routes
Import and include routers here
"""

from fastapi import APIRouter
from app.api.v1.api_controller import router as api_router
from app.api.v1.auth_controller import router as auth_router
from app.api.v1.chart_controller import build_chart_router
from app.api.v1.expense_controller import build_expense_router
from app.api.v1.root_controller import router as root_router
from app.api.v1.search_controller import build_search_router

# Route group prefix -> expense kind. /home is kept as an alias of /house.
EXPENSE_GROUPS = {
    "/house": "house",
    "/home": "house",
    "/car": "car",
}

# Create a combined router
router = APIRouter()

# Include public routers
router.include_router(root_router)
router.include_router(auth_router)
router.include_router(api_router)

# Include protected expense routers
for prefix, kind in EXPENSE_GROUPS.items():
    router.include_router(build_search_router(prefix, kind))
    router.include_router(build_chart_router(prefix, kind))
    router.include_router(build_expense_router(prefix, kind))

__all__ = ["router"]
