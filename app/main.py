import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import Settings, get_settings
from app.log import setup_logging
from app.middleware.tracking import TrackingMiddleware
from app.routes.contact import router as contact_router
from app.routes.dashboard import router as dashboard_router
from app.services.state import AnalyticsState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    analytics: AnalyticsState = application.state.analytics
    analytics.start()
    logger.info("Analytics tracking started")
    try:
        yield
    finally:
        await analytics.stop()


def create_app(
    settings: Settings | None = None,
    analytics: AnalyticsState | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    application = FastAPI(
        title=f"{settings.app_name} API",
        version="0.1.0",
        description="Visit counting, online visitors, contact form intake and dashboard data.",
        lifespan=lifespan,
    )
    application.state.analytics = analytics or AnalyticsState.from_settings(settings)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Outermost, so preflight requests are tracked too
    application.add_middleware(TrackingMiddleware)

    application.include_router(contact_router)
    application.include_router(dashboard_router)

    if settings.static_dir.is_dir():
        application.mount(
            "/",
            StaticFiles(directory=str(settings.static_dir), html=True),
            name="site",
        )
    else:
        logger.warning("Static directory %s not found; serving API only", settings.static_dir)

    return application


app = create_app()
