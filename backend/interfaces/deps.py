"""Shared settings and per-request dependencies for the routers."""
from __future__ import annotations

from typing import Iterator

from sqlmodel import Session

from app.config import AppConfig, get_settings
from app.logger import get_logger
from application.distribution_mailer import DistributionMailer
from infrastructure.database import SessionLocal

logger = get_logger(__name__)

settings = get_settings()


def get_session() -> Iterator[Session]:
    """One session per request; reports only read."""
    with SessionLocal() as session:
        yield session


def get_settings_dependency() -> AppConfig:
    return settings


def build_mailer(session: Session) -> DistributionMailer:
    return DistributionMailer(session, settings)


def apply_settings(new_settings: AppConfig) -> None:
    """Update the global settings reference used by new service instances."""
    global settings
    settings = new_settings
    logger.info("Settings applied (config version %s)", new_settings.version)


def reload_settings_from_disk() -> AppConfig:
    """Force re-read of app_config.yaml and propagate changes."""
    get_settings.cache_clear()
    fresh = get_settings()
    apply_settings(fresh)
    return fresh
