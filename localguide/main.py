"""FastAPI application entry point."""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from localguide.api.routes import router
from localguide.core.config import Settings, get_settings
from localguide.db.init_db import init_db
from localguide.db.session import make_engine, make_session_factory
from localguide.services.place_store import PlaceStore
from localguide.services.scheduler import SocialRefreshScheduler
from localguide.services.site_config import SiteConfigStore
from localguide.services.social import SocialFetcher

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app and the stores it owns; nothing is opened until startup."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title=settings.project_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    engine = make_engine(settings.database_url)
    place_store = PlaceStore(settings.places_path)
    social_fetcher = SocialFetcher(settings.twitter_bearer_token, settings.social_fetch_timeout_seconds)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.place_store = place_store
    app.state.site_config_store = SiteConfigStore(settings.config_path)
    app.state.social_fetcher = social_fetcher
    app.state.scheduler = SocialRefreshScheduler(
        place_store,
        social_fetcher,
        interval_seconds=settings.social_refresh_interval_seconds,
        fetch_timeout_seconds=settings.social_fetch_timeout_seconds,
    )

    app.include_router(router, prefix=settings.api_prefix)

    # created on startup
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed requests are plain 400s, like the other input errors."""
        return JSONResponse(status_code=400, content={"detail": "invalid request", "errors": jsonable_encoder(exc.errors())})

    @app.on_event("startup")
    async def on_startup() -> None:
        """Create storage artifacts and start the social refresh loop."""
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        init_db(app.state.engine)
        app.state.place_store.ensure_file()
        app.state.site_config_store.ensure_default()
        logger.info("places: %s, reviews: %s", settings.places_path, settings.database_url)
        if settings.social_refresh_enabled:
            app.state.scheduler.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.scheduler.stop()
        app.state.engine.dispose()
        logger.info("database connections closed")

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
