from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.api.routes import router
from app.core.config import settings
from app.core.db import build_engine, build_session_factory, init_database
from app.core.handlers import register_exception_handlers
from app.core.logger import get_logger
from app.core.middleware import TokenAuthMiddleware, protected_prefixes

logger = get_logger(__name__)

OPENAPI_DESCRIPTION = "Server rendered tracker for house and car expenses"


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(settings.database_url)
    init_database(engine)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info("%s %s started in %s mode", settings.APP_NAME, settings.APP_VERSION, settings.MODE)
    try:
        yield
    finally:
        logger.info("Shutting down, disposing database engine")
        engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=OPENAPI_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    openapi_url="/openapi.json",
)


def custom_openapi():
    """Document the auth cookie and bearer header on the gated route groups"""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=OPENAPI_DESCRIPTION,
        routes=app.routes,
    )
    schema.setdefault("components", {})["securitySchemes"] = {
        "Bearer": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
        "Cookie": {"type": "apiKey", "in": "cookie", "name": settings.AUTH_COOKIE_NAME},
    }

    for path, path_item in schema["paths"].items():
        if not any(path == p or path.startswith(p + "/") for p in protected_prefixes):
            continue
        for operation in path_item.values():
            operation.setdefault("security", [{"Cookie": []}, {"Bearer": []}])

    app.openapi_schema = schema
    return schema


app.openapi = custom_openapi

register_exception_handlers(app)
app.add_middleware(TokenAuthMiddleware, prefixes=protected_prefixes)

app.include_router(router)


@app.get("/health", tags=["health"], summary="Liveness probe")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
