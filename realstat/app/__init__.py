"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from realstat.app.api.routes import SERIES_EXTENSION, api_bp
from realstat.core.logging import configure_logging, logger
from realstat.core.series import SeriesGenerator
from realstat.core.settings import Settings, get_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance with its own series generator."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config["REALSTAT_SETTINGS"] = settings
    app.config["DEBUG"] = settings.debug
    app.extensions[SERIES_EXTENSION] = SeriesGenerator(seed=settings.series_seed)

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("%s ready (debug=%s)", settings.app_name, settings.debug)
    return app
