"""FastAPI dependencies resolving the stores owned by the running app."""

from collections.abc import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from localguide.core.config import Settings
from localguide.db.session import iter_session
from localguide.services.place_store import PlaceStore
from localguide.services.site_config import SiteConfigStore
from localguide.services.social import SocialFetcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    yield from iter_session(request.app.state.session_factory)


def get_place_store(request: Request) -> PlaceStore:
    return request.app.state.place_store


def get_site_config_store(request: Request) -> SiteConfigStore:
    return request.app.state.site_config_store


def get_social_fetcher(request: Request) -> SocialFetcher:
    return request.app.state.social_fetcher


def get_voter_identity(request: Request) -> str:
    """Best-effort voter key: the client's network address."""
    return request.client.host if request.client else "unknown"
