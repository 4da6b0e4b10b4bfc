"""
Flask web server for the document translation API
"""
import logging
from flask import Flask
from flask_cors import CORS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Reduce verbosity of werkzeug (Flask HTTP server logs)
logging.getLogger('werkzeug').setLevel(logging.WARNING)

from translate_code import __version__
from translate_code.config import PORT, HOST, PROVIDER_CHAIN, REQUEST_TIMEOUT, DEBUG_MODE
from translate_code.api.routes import configure_routes
from translate_code.core.dispatcher import TranslationDispatcher
from translate_code.core.events import EventBus, EventType
from translate_code.core.llm import build_provider_chain
from translate_code.core.orchestrator import DocumentTranslator


def create_translator(event_bus=None):
    """Document translator backed by the configured provider chain"""
    chain = build_provider_chain(PROVIDER_CHAIN)
    return DocumentTranslator(
        dispatcher=TranslationDispatcher(chain, timeout=REQUEST_TIMEOUT, event_bus=event_bus),
        event_bus=event_bus
    )


def _log_fallback(event):
    logger.info(
        f"[{event.data['target_language']}] Fallback to {event.data['provider']} "
        f"after {', '.join(event.data['failed_providers'])} failed"
    )


def create_app(translator=None):
    """
    Build the Flask application.

    Args:
        translator: DocumentTranslator to serve (default: configured provider chain)
    """
    app = Flask(__name__)
    CORS(app)

    if translator is None:
        event_bus = EventBus()
        event_bus.subscribe(EventType.FALLBACK_USED, _log_fallback)
        translator = create_translator(event_bus)

    configure_routes(app, lambda: translator)
    return app


def validate_configuration():
    """Validate required configuration before starting server"""
    issues = []

    if not PORT or not isinstance(PORT, int):
        issues.append("PORT must be a valid integer")
    if not PROVIDER_CHAIN:
        issues.append("PROVIDER_CHAIN must name at least one provider")

    if issues:
        logger.error("=" * 70)
        logger.error("CONFIGURATION ERROR")
        logger.error("=" * 70)
        for issue in issues:
            logger.error(f"   - {issue}")
        logger.error("   Create a .env file from .env.example and restart")
        logger.error("=" * 70)
        raise ValueError("Configuration validation failed. See errors above.")

    logger.info("Configuration validated successfully")


if __name__ == '__main__':
    validate_configuration()

    app = create_app()

    logger.info("=" * 60)
    logger.info(f"DOCUMENT TRANSLATION SERVER (Version {__version__})")
    logger.info("=" * 60)
    logger.info(f"   - Provider chain: {', '.join(PROVIDER_CHAIN)}")
    logger.info(f"   - API: http://{HOST}:{PORT}/api/translate-code")
    logger.info(f"   - Health Check: http://{HOST}:{PORT}/api/health")

    if HOST == '0.0.0.0':
        logger.warning("Server is binding to 0.0.0.0 (all network interfaces)")
        logger.warning("   For production, use a proper WSGI server like gunicorn:")
        logger.warning("   gunicorn -w 2 --bind 0.0.0.0:5000 'translation_api:create_app()'")

    app.run(debug=DEBUG_MODE, host=HOST, port=PORT)
