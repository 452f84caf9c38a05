"""Application factory and app-wide configuration."""

import logging

from flask import Flask
from flask_cors import CORS

from fincalc.app.api.routes import api_bp
from fincalc.config import CORS_ORIGINS, LOG_LEVEL


def create_app() -> Flask:
    """Build the Flask app instance."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)

    CORS(
        app,
        resources={r"/api/*": {"origins": CORS_ORIGINS}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
