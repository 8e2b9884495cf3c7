"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from goal_tracker.app.api.routes import api_bp
from goal_tracker.config import Settings, load_settings
from goal_tracker.core.advanced import AdvancedProjectionEngine
from goal_tracker.log import setup_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions["projection_engine"] = AdvancedProjectionEngine(seed=settings.monte_carlo_seed)

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
