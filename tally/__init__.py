"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: config values applied on top of the environment config
            (tests pass DATABASE_URL and CLOCK here).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from tally.config import get_config
    from tally.db import init_db
    from tally.error_handlers import register_error_handlers
    from tally.logging_config import configure_logging
    from tally.routes.health import health_bp
    from tally.routes.lottery import lottery_bp
    from tally.routes.votes import candidates_bp, votes_bp
    from tally.services.registry import build_services

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.extensions["services"] = build_services(
        clock=app.config.get("CLOCK"),
        max_record_bytes=int(app.config["MAX_RECORD_BYTES"]),
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(votes_bp, url_prefix="/api/votes")
    app.register_blueprint(candidates_bp, url_prefix="/api/candidates")
    app.register_blueprint(lottery_bp, url_prefix="/api/lottery")

    return app
