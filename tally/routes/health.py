"""Health check routes."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tally.models import IdCounter
from tally.utils.responses import fail, ok

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Ping the database and report the last id issued per record family."""

    engine = current_app.extensions["engine"]
    try:
        with Session(engine) as session:
            counters = {row.family: int(row.value) for row in session.scalars(select(IdCounter))}
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return fail("unavailable", "Database unreachable", 503)

    return ok({"status": "ok", "database": engine.dialect.name, "counters": counters})
