"""Goal bingo card service (Flask application package)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied after the environment config,
            e.g. ``{"DATABASE_URL": "sqlite:///tmp/test.db"}``.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from goalbingo.config import get_config
    from goalbingo.db import init_db
    from goalbingo.error_handlers import register_error_handlers
    from goalbingo.logging_config import configure_logging
    from goalbingo.routes.bingos import bingos_bp
    from goalbingo.routes.cards import cards_bp
    from goalbingo.routes.goals import goals_bp
    from goalbingo.routes.health import health_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(cards_bp, url_prefix="/api")
    app.register_blueprint(goals_bp, url_prefix="/api")
    app.register_blueprint(bingos_bp, url_prefix="/api")

    return app
