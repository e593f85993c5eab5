"""Utility script to create the database schema."""
from __future__ import annotations

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all() -> None:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.debug("Schema ensured on {}", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    try:
        create_all()
        logger.info("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
