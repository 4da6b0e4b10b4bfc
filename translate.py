"""
Command-line interface for HTML/CSS/JS document translation
"""
import argparse
import asyncio
import logging
import sys

from translate_code.config import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    PROVIDER_CHAIN,
    REQUEST_TIMEOUT,
    DEBUG_MODE,
    TranslationConfig
)
from translate_code.core.dispatcher import TranslationDispatcher
from translate_code.core.llm import build_provider_chain
from translate_code.core.orchestrator import DocumentTranslator, InvalidInputError
from translate_code.utils.file_utils import build_output_path, get_unique_output_path

logger = logging.getLogger('translate')


def build_parser():
    parser = argparse.ArgumentParser(
        description="Translate the visible text of an HTML/CSS/JS file, leaving the code untouched."
    )
    parser.add_argument("-i", "--input", required=True, help="Path to the input file (HTML).")
    parser.add_argument("-o", "--output", default=None,
                        help="Path to the output file. If not specified, uses input filename with suffix. "
                             "With several target languages, the language is appended to it.")
    parser.add_argument("-sl", "--source_lang", default=DEFAULT_SOURCE_LANGUAGE,
                        help=f"Source language (default: {DEFAULT_SOURCE_LANGUAGE}).")
    parser.add_argument("-tl", "--target_lang", action="append", default=None,
                        help=f"Target language, repeat for several (default: {DEFAULT_TARGET_LANGUAGE}).")
    parser.add_argument("--providers", default=",".join(PROVIDER_CHAIN),
                        help=f"Comma-separated provider chain, in failover order (default: {','.join(PROVIDER_CHAIN)}).")
    parser.add_argument("--timeout", type=float, default=REQUEST_TIMEOUT,
                        help=f"Timeout in seconds for each provider attempt (default: {REQUEST_TIMEOUT}).")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = TranslationConfig.from_cli_args(args)
    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            markup = f.read()
    except OSError as e:
        logger.error(f"Cannot read input file: {e}")
        return 1

    try:
        chain = build_provider_chain(config=config)
    except ValueError as e:
        parser.error(str(e))

    translator = DocumentTranslator(
        dispatcher=TranslationDispatcher(chain, timeout=config.timeout)
    )

    logger.info(
        f"Translating {args.input} from {config.source_language} to "
        f"{', '.join(config.target_languages)} (providers: {', '.join(p.name for p in chain)})"
    )

    try:
        outcomes = asyncio.run(translator.translate_document(
            markup, config.source_language, config.target_languages
        ))
    except InvalidInputError as e:
        logger.error(str(e))
        return 1

    multiple = len(outcomes) > 1
    exit_code = 0
    for outcome in outcomes:
        if not outcome.success:
            logger.error(f"[{outcome.target_language}] Translation failed: {outcome.error}")
            exit_code = 1
            continue

        output_path = get_unique_output_path(
            build_output_path(args.input, outcome.target_language, args.output, multiple)
        )
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(outcome.translated_markup)
        logger.info(f"[{outcome.target_language}] Written to {output_path} (provider: {outcome.provider})")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
