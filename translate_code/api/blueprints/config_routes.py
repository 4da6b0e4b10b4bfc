"""
Configuration and health check routes
"""
import logging
from flask import Blueprint, jsonify

from translate_code import __version__
from translate_code.config import (
    DEBUG_MODE,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    REQUEST_TIMEOUT,
    RTL_LANGUAGES
)

# Setup logger for this module
logger = logging.getLogger('config_routes')
if DEBUG_MODE:
    logger.setLevel(logging.DEBUG)


def create_config_blueprint(get_provider_names):
    """
    Create and configure the config blueprint

    Args:
        get_provider_names: Callable returning the provider chain display names
    """
    bp = Blueprint('config', __name__)

    @bp.route('/api/health', methods=['GET'])
    def health_check():
        """API health check endpoint"""
        return jsonify({
            "status": "ok",
            "message": "Translation API is running",
            "version": __version__,
            "providers": list(get_provider_names())
        })

    @bp.route('/api/config', methods=['GET'])
    def get_default_config():
        """Get default configuration values"""
        return jsonify({
            "source_language": DEFAULT_SOURCE_LANGUAGE,
            "target_language": DEFAULT_TARGET_LANGUAGE,
            "timeout": REQUEST_TIMEOUT,
            "providers": list(get_provider_names()),
            "rtl_languages": list(RTL_LANGUAGES)
        })

    return bp
