"""
Flask routes orchestrator for the translation API

This module serves as a lightweight coordinator that registers
all route blueprints:

- blueprints/config_routes.py: Health checks and configuration
- blueprints/translation_routes.py: Document translation
"""
import logging
from flask import jsonify

from .blueprints import (
    create_config_blueprint,
    create_translation_blueprint
)

logger = logging.getLogger(__name__)


def configure_routes(app, get_translator):
    """
    Configure Flask routes by registering all blueprints

    Args:
        app: Flask application instance
        get_translator: Function returning the DocumentTranslator for a request
    """

    def get_provider_names():
        return get_translator().dispatcher.chain.names

    # Register config and health check routes
    config_bp = create_config_blueprint(get_provider_names)
    app.register_blueprint(config_bp)

    # Register translation routes
    translation_bp = create_translation_blueprint(get_translator)
    app.register_blueprint(translation_bp)

    # Register error handlers
    _register_error_handlers(app)


def _register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def route_not_found(error):
        return jsonify({"error": "API Endpoint not found"}), 404

    @app.errorhandler(500)
    def internal_server_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({"error": "Internal server error", "details": str(error)}), 500
