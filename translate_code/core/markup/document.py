"""
Markup parsing and serialization

This module turns a markup string into a BeautifulSoup tree and back. The
tree is re-serialized directly (no string offsets), so the only bytes that
change are the text nodes and attribute values the injector rewrites.

The formatter is chosen to keep the output close to what was written:
    - only &, < and > are escaped in text
    - <script> and <style> bodies are written verbatim
    - void elements keep the HTML form (<br>, not <br/>)
    - attributes keep their source order and values (no URI escaping,
      class lists are not re-joined)
    - doctypes are written back as they were declared
    - whitespace-only text is kept as written (indentation survives)
"""
import logging
import warnings
from dataclasses import dataclass, field
from typing import List

from bs4 import (
    BeautifulSoup,
    MarkupResemblesLocatorWarning,
    ParserRejectedMarkup,
    XMLParsedAsHTMLWarning,
)
from bs4.builder import HTMLTreeBuilder
from bs4.dammit import EntitySubstitution
from bs4.element import Doctype
from bs4.formatter import HTMLFormatter

from .constants import MARKUP_PARSER
from .exceptions import ParseDegraded

logger = logging.getLogger(__name__)


class SourceOrderFormatter(HTMLFormatter):
    """HTMLFormatter that writes attributes in source order instead of sorting them."""

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return [
            (key, None if self.empty_attributes_are_booleans and value == '' else value)
            for key, value in tag.attrs.items()
        ]


class SourceDoctype(Doctype):
    """Doctype written back verbatim: `<!DOCTYPE html>` or `<!doctype html>`, no trailing newline."""
    PREFIX = '<!'
    SUFFIX = '>'


OUTPUT_FORMATTER = SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)

# The document root counts as whitespace-preserving, so blank text anywhere
# in the tree is never collapsed to a single "\n" or " " while parsing
PRESERVE_WHITESPACE_TAGS = frozenset(
    HTMLTreeBuilder.DEFAULT_PRESERVE_WHITESPACE_TAGS | {BeautifulSoup.ROOT_TAG_NAME}
)


def _restore_doctypes(soup: BeautifulSoup) -> None:
    # html.parser drops the "DOCTYPE " keyword when it is upper case only
    for node in list(soup.descendants):
        if isinstance(node, Doctype) and not isinstance(node, SourceDoctype):
            text = str(node)
            if not text.lower().startswith('doctype'):
                text = f"DOCTYPE {text}" if text else "DOCTYPE"
            node.replace_with(SourceDoctype(text))


def _build_soup(markup: str) -> BeautifulSoup:
    # class="a  b" stays one string instead of a re-joined list
    return BeautifulSoup(
        markup,
        MARKUP_PARSER,
        multi_valued_attributes=None,
        preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS
    )


@dataclass
class ParsedMarkup:
    """A parsed markup document.

    Attributes:
        soup: Root of the parsed tree
        degraded: True if the parser rejected the input and an empty tree is used
        errors: Parser error messages (only set when degraded)
    """
    soup: BeautifulSoup
    degraded: bool = False
    errors: List[str] = field(default_factory=list)


def parse_markup(markup: str) -> ParsedMarkup:
    """
    Parse markup as permissively as a browser would.

    Unclosed tags, stray end tags and partial fragments are accepted as-is.
    If the parser gives up entirely, a ParseDegraded warning is issued and
    an empty tree is returned, which yields no translatable units.

    Args:
        markup: HTML document or fragment

    Returns:
        ParsedMarkup wrapping the tree
    """
    with warnings.catch_warnings():
        # Short inputs like "index.html" are markup here, not file names
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        try:
            soup = _build_soup(markup)
        except ParserRejectedMarkup as e:
            message = f"Markup could not be parsed, continuing with an empty tree: {e}"
            logger.warning(message)
            warnings.warn(message, ParseDegraded, stacklevel=2)
            return ParsedMarkup(
                soup=BeautifulSoup("", MARKUP_PARSER),
                degraded=True,
                errors=[str(e)]
            )

    _restore_doctypes(soup)
    return ParsedMarkup(soup=soup)


def serialize_markup(parsed: ParsedMarkup) -> str:
    """
    Serialize a parsed tree back to markup.

    Args:
        parsed: Tree returned by parse_markup (possibly modified)

    Returns:
        Markup string
    """
    return parsed.soup.decode(formatter=OUTPUT_FORMATTER)
