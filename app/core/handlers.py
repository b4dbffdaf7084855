"""
Global exception handlers for FastAPI
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.exceptions import AppException, InternalServerErrorException, ResponseBody
from app.core.logger import get_logger
from app.core.templates import TEMPLATES, render

logger = get_logger(__name__)


def wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def register_exception_handlers(app: FastAPI):
    """Register all exception handlers to the FastAPI app"""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Render the error as a JSON envelope for the API, an error modal otherwise"""
        if isinstance(exc, InternalServerErrorException):
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)

        if wants_json(request):
            return JSONResponse(
                status_code=exc.status_code,
                content=ResponseBody(
                    message=exc.message,
                    errors=exc.errors,
                    data=None
                ).model_dump()
            )

        return render(
            request,
            TEMPLATES.components.modal_error,
            {
                "title": "Something went wrong!",
                "message": f"{exc.status_code}: {exc.message}",
                "errors": exc.errors,
            },
            status_code=exc.status_code,
        )
