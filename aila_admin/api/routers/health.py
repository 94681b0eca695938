"""Liveness and database connectivity report."""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from aila_admin.database.config.config import settings
from aila_admin.database.config.connection_engine import connection_engine, lawyer_connection_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _ping(engine: Engine) -> str:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "connected"
    except SQLAlchemyError as e:
        logger.warning("Database ping failed: %s", e)
        return "disconnected"


@router.get("/health")
def health():
    return {
        "status": "ok",
        "db": _ping(connection_engine),
        "lawyerDb": _ping(lawyer_connection_engine),
        "env": settings.ENVIRONMENT,
    }
