"""
Text extraction from HTML/CSS/JS markup.

Produces the ordered list of extraction units for a document: every text
node and translatable attribute value that is safe to send to a translator.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from .document import parse_markup
from .walker import UnitKind, iter_slots

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionUnit:
    """One translatable span.

    Attributes:
        kind: TEXT_CONTENT or ATTRIBUTE
        original_text: Source text, stripped of surrounding whitespace
        location_path: Where the span lives (e.g. "/div[1]/@title")
        ordinal_index: Position in extraction order, binds the unit to its translation
        attribute: Attribute name for ATTRIBUTE units
    """
    kind: UnitKind
    original_text: str
    location_path: str
    ordinal_index: int
    attribute: Optional[str] = None


def extract(markup: str) -> List[ExtractionUnit]:
    """
    Extract the translatable spans of a document.

    Pure and deterministic: the same markup always yields the same units in
    the same order (see walker.iter_slots for the traversal contract).

    Args:
        markup: HTML document or fragment

    Returns:
        Ordered extraction units (empty if nothing is translatable)

    Example:
        >>> [u.original_text for u in extract('<p title="Hi">Hello <b>you</b></p>')]
        ['Hi', 'Hello', 'you']
    """
    parsed = parse_markup(markup)

    units = [
        ExtractionUnit(
            kind=slot.kind,
            original_text=slot.raw_value.strip(),
            location_path=slot.location_path,
            ordinal_index=index,
            attribute=slot.attribute
        )
        for index, slot in enumerate(iter_slots(parsed.soup))
    ]

    logger.debug(f"Extracted {len(units)} translatable units")
    return units
