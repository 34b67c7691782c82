from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from localguide.core.config import Settings
from localguide.db.init_db import init_db
from localguide.db.session import make_engine, make_session_factory
from localguide.main import create_app
from localguide.services.place_store import PlaceStore


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "data"),
        database_url=f"sqlite:///{tmp_path / 'reviews.db'}",
        upload_dir=str(tmp_path / "uploads"),
        admin_password="secret-admin",
        twitter_bearer_token=None,
        social_refresh_enabled=False,
    )


@pytest.fixture
def db_session(tmp_path: Path):
    engine = make_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def place_store(tmp_path: Path) -> PlaceStore:
    return PlaceStore(tmp_path / "places.json")


@pytest.fixture
def sample_place() -> dict:
    return {"id": "p1", "name": "Test", "category": "gyoza", "lat": 36.55, "lng": 139.90}


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
