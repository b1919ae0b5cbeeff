import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.v1 import routes_admin, routes_auth, routes_booking, routes_health, routes_showtime
from app.core.config import settings
from app.core.exceptions import BookingError, WriteError
from app.db import session
from app.redis import close_redis

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.ENV == "development":
        await session.init_db()
    logger.info("Starting up...")
    yield
    logger.info("Shutting down...")
    await close_redis()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (routes_health.router, routes_auth.router, routes_showtime.router,
                   routes_booking.router, routes_admin.router):
        app.include_router(router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, ex: BookingError):
        content = {"error": ex.message}
        if isinstance(ex, WriteError):
            content["step"] = ex.step
            content["seat"] = ex.seat
        if ex.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {ex.message}", exc_info=ex)
        else:
            logger.info(f"{request.method} {request.url.path} rejected ({ex.status_code}): {ex.message}")
        return JSONResponse(status_code=ex.status_code, content=content)

    @app.get("/")
    async def root():
        return {"message": "Cinema booking backend is running"}

    return app


app = create_app()
