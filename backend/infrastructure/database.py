"""SQLModel database configuration."""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from app.config import get_settings
from app.logger import get_logger

logger = get_logger(__name__)


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


_settings = get_settings()
DATABASE_URL = _settings.database_url

engine = build_engine(DATABASE_URL, echo=bool((_settings.database or {}).get("echo", False)))


def init_db(target: Engine | None = None) -> None:
    """Create tables if they do not exist."""
    from . import models  # noqa: F401  # ensure SQLModel metadata is loaded

    target = target or engine
    SQLModel.metadata.create_all(target)
    logger.info("Schema ready on %s", target.url.render_as_string(hide_password=True))


def SessionLocal() -> Session:
    return Session(engine)
