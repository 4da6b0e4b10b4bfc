"""Right-to-left layout correction for translated documents."""
import re

from .constants import RTL_DIRECTION_ATTRIBUTE, RTL_LANGUAGE_CODES, RTL_LANGUAGES

# Comments and raw-text element bodies are matched (and skipped) so an
# "<html" written inside them is never taken for the root. Quoted attribute
# values of the real start tag may contain ">".
_ROOT_SCAN = re.compile(
    r"<!--.*?(?:-->|\Z)"
    r"|<(?P<raw>script|style|textarea|title|template)\b.*?(?:</(?P=raw)\s*>|\Z)"
    r"|<html\b(?P<attrs>(?:[^>\"']|\"[^\"]*\"|'[^']*')*?)\s*/?>",
    re.IGNORECASE | re.DOTALL
)
_DIR_ATTRIBUTE = re.compile(r"(?:^|\s)dir\s*(?:=|\s|$)", re.IGNORECASE)
_QUOTED_VALUE = re.compile(r"\"[^\"]*\"|'[^']*'")


def is_rtl_language(language: str) -> bool:
    """
    Check whether a target language is written right-to-left.

    Language names match case-insensitively anywhere in the string
    ("Arabic", "Arabic (Egypt)", "العربية"); codes match the primary subtag
    exactly ("ar", "ar-EG", "fa_IR"), so "Bulgarian" never matches "ar".
    """
    if not language:
        return False

    lowered = language.strip().lower()
    if any(name.lower() in lowered for name in RTL_LANGUAGES):
        return True

    primary_subtag = re.split(r"[-_]", lowered, maxsplit=1)[0]
    return primary_subtag in RTL_LANGUAGE_CODES


def _find_root_tag(markup: str):
    for match in _ROOT_SCAN.finditer(markup):
        if match.group("attrs") is not None:
            return match
    return None


def apply_directionality(markup: str, target_language: str) -> str:
    """
    Make the <html> root advertise right-to-left layout for RTL targets.

    Adds dir="rtl" to the first <html> start tag outside comments and
    script/style bodies, when it has no dir attribute. An existing dir is
    never overridden, documents without an <html> root and non-RTL targets
    are returned unchanged. Idempotent.

    Args:
        markup: Translated markup
        target_language: Language the markup was translated into

    Returns:
        Markup, possibly with dir="rtl" on the root
    """
    if not is_rtl_language(target_language):
        return markup

    match = _find_root_tag(markup)
    if match is None:
        return markup

    # Blank out quoted values so title="dir=ltr" is not mistaken for a dir attribute
    attribute_names = _QUOTED_VALUE.sub('""', match.group("attrs"))
    if _DIR_ATTRIBUTE.search(attribute_names):
        return markup

    end = match.end("attrs")
    return f"{markup[:end]} {RTL_DIRECTION_ATTRIBUTE}{markup[end:]}"
