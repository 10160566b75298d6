from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hopeclub.config import settings
from hopeclub.exceptions import HopeClubError
from hopeclub.routers.incidents import routes as incidents
from hopeclub.routers.points import routes as points
from hopeclub.routers.reports import routes as reports
from hopeclub.routers.store import routes as store

log = logging.getLogger(__name__)


async def hopeclub_error_handler(request: Request, exc: HopeClubError) -> JSONResponse:
    return JSONResponse(
        {"error": exc.code, "message": str(exc), "details": exc.details()},
        status_code=exc.status_code,
    )


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    app.add_exception_handler(HopeClubError, hopeclub_error_handler)

    app.include_router(points.router)
    app.include_router(store.router)
    app.include_router(incidents.router)
    app.include_router(reports.router)

    @app.get("/health", tags=["system"])
    def health():
        return {"status": "healthy", "service": settings.APP_NAME, "version": settings.APP_VERSION}

    log.debug("application created")
    return app


app = create_app()
