"""
Document translation routes
"""
import asyncio
import logging
from flask import Blueprint, request, jsonify

from translate_code.core.orchestrator import InvalidInputError

logger = logging.getLogger(__name__)


def create_translation_blueprint(get_translator):
    """
    Create and configure the translation blueprint

    Args:
        get_translator: Callable returning the DocumentTranslator to use
    """
    bp = Blueprint('translation', __name__)

    @bp.route('/api/translate-code', methods=['POST'])
    def translate_code_request():
        """
        Translate a markup document into one or more languages.

        Body: {"markup" (or "code"), "sourceLang", "targetLang": str | [str]}
        """
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        elif not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        markup = data.get('markup', data.get('code'))
        source_lang = data.get('sourceLang')
        target_lang = data.get('targetLang')

        try:
            result = asyncio.run(
                get_translator().translate_document(markup, source_lang, target_lang)
            )
        except InvalidInputError as e:
            return jsonify({"error": str(e)}), 400

        # Multi-language request: one entry per language, in request order
        if isinstance(result, list):
            return jsonify({"translations": [outcome.to_dict() for outcome in result]})

        if not result.success:
            return jsonify({"error": result.error}), 500
        return jsonify(result.to_dict())

    return bp
