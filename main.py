import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from config import get_settings
from database import check_connection
from logging_config import setup_logging
from routers import places_router, users_router
from services.exceptions import (
    AuthenticationError,
    DuplicateAccountError,
    ForbiddenError,
    GeocodeError,
    NotFoundError,
    PlacesError,
)

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Error kind -> HTTP status. Anything not listed is a server-side failure.
ERROR_STATUS = [
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (AuthenticationError, 401),
    (DuplicateAccountError, 422),
    (GeocodeError, 422),
]


def status_for(exc: PlacesError) -> int:
    for kind, status_code in ERROR_STATUS:
        if isinstance(exc, kind):
            return status_code
    return 500


async def places_error_handler(request: Request, exc: PlacesError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            type(exc).__name__, request.method, request.url.path, exc.message,
            exc_info=exc.__cause__ is not None,
        )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


def health_check():
    """
    Returns:
        200: database reachable
        503: database unreachable
    """
    if check_connection():
        return {"status": "ok", "database": "connected"}
    return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "disconnected"})


def create_app() -> FastAPI:
    app = FastAPI(title="Places API")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount static uploads
    if settings.asset_backend == "local":
        upload_root = os.path.dirname(settings.upload_dir) or settings.upload_dir
        os.makedirs(settings.upload_dir, exist_ok=True)
        app.mount("/uploads", StaticFiles(directory=upload_root), name="uploads")

    app.add_exception_handler(PlacesError, places_error_handler)
    app.add_api_route("/health", health_check, methods=["GET"], summary="Database health check")
    app.include_router(users_router)
    app.include_router(places_router)

    # 404 Fallback Middleware
    @app.middleware("http")
    async def not_found_middleware(request: Request, call_next):
        try:
            response = await call_next(request)
            # "endpoint" is only set on the scope when a route matched
            if response.status_code == 404 and "endpoint" not in request.scope:
                return JSONResponse(status_code=404, content={"error": "Route not found"})
            return response
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


# App instance
app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
