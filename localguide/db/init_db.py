"""Database initialization utilities."""

from pathlib import Path

from sqlalchemy.engine import Engine

from localguide import models  # noqa: F401
from localguide.db.base import Base


def init_db(engine: Engine) -> None:
    """Create the SQLite parent directory (if needed) and tables."""
    database = engine.url.database
    if engine.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)
