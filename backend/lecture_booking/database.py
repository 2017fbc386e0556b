from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from .config import settings

connect_args = {}
if settings.is_sqlite:
    # check_same_thread=False: FastAPI runs sync handlers in a thread pool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.resolved_database_url,
    connect_args=connect_args,
)


if settings.is_sqlite:
    @event.listens_for(engine, "connect")
    def enable_sqlite_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def ensure_sqlite_dir() -> None:
    """Create the directory of a file-based SQLite database if missing."""
    url = settings.resolved_database_url
    if not url.startswith("sqlite:///") or url == "sqlite:///:memory:":
        return
    Path(url.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
