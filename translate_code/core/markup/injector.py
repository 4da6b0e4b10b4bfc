"""
Reinjection of translated strings into markup.

The markup is parsed again and walked with the same traversal used for
extraction; the Nth slot receives the Nth translation. Translations are
never matched by content, so identical source strings in different places
cannot collide. The tree is then re-serialized, so no character offsets are
involved.
"""
import logging
from typing import List, Sequence

from .document import parse_markup, serialize_markup
from .exceptions import InjectionError, LengthMismatchError
from .extractor import ExtractionUnit
from .walker import iter_slots

logger = logging.getLogger(__name__)


def inject(markup: str, units: Sequence[ExtractionUnit], translations: Sequence[str]) -> str:
    """
    Replace every extracted span with its translation.

    Anything that was not extracted (tags, other attributes, whitespace-only
    text, comments, script/style/code/pre subtrees) is left as it was.

    Args:
        markup: The markup the units were extracted from
        units: Extraction units, in extraction order
        translations: One translated string per unit, same order

    Returns:
        Markup with translated text

    Raises:
        LengthMismatchError: If len(units) != len(translations)
        InjectionError: If the markup does not walk the way it did at extraction
    """
    if len(units) != len(translations):
        raise LengthMismatchError(
            f"Expected {len(units)} translations, got {len(translations)}",
            expected_count=len(units),
            actual_count=len(translations)
        )

    if not units:
        return markup

    parsed = parse_markup(markup)
    slots: List = list(iter_slots(parsed.soup))

    if len(slots) != len(units):
        raise InjectionError(
            f"Markup has {len(slots)} translatable slots but {len(units)} units were given"
        )

    for slot, unit, translation in zip(slots, units, translations):
        if slot.location_path != unit.location_path or slot.kind is not unit.kind:
            raise InjectionError(
                f"Unit {unit.ordinal_index} was extracted at {unit.location_path} "
                f"but the walk reached {slot.location_path}",
                ordinal_index=unit.ordinal_index,
                expected_path=unit.location_path,
                actual_path=slot.location_path
            )
        if not isinstance(translation, str):
            raise InjectionError(
                f"Translation {unit.ordinal_index} is {type(translation).__name__}, expected str",
                ordinal_index=unit.ordinal_index
            )
        slot.replace(translation)

    logger.debug(f"Injected {len(units)} translations")
    return serialize_markup(parsed)
