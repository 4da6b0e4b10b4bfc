"""
Deterministic traversal of a parsed markup tree.

Extraction and injection both walk the tree through iter_slots(), so the Nth
slot seen while extracting is the Nth slot rewritten while injecting. The
ordinal is the only link between a source string and its translation, which
makes the walk order a contract:

    1. Pre-order, children in source order.
    2. Elements in SKIPPED_TAGS are skipped with their whole subtree,
       attributes included. Text *after* them (their tail) is still visited.
    3. For every other element, its translatable attributes come first, in
       the fixed order of TRANSLATABLE_ATTRIBUTES (not source order), then
       its children.
    4. Text nodes are visited where they occur. Comments, doctypes, CDATA
       and processing instructions are not text.
    5. Whitespace-only text nodes and attribute values are never yielded.

Location paths read like XPath:
    /div[1]/@title
    /div[1]/p[1]/text()[1]
Element steps count same-name siblings, text() steps count every text node
of the parent (whitespace-only ones included), both 1-based.
"""
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString, Script, Stylesheet

from .constants import SKIPPED_TAGS, TRANSLATABLE_ATTRIBUTES


class UnitKind(Enum):
    """Kind of translatable span."""
    TEXT_CONTENT = "text"
    ATTRIBUTE = "attribute"


@dataclass
class Slot:
    """One place in the tree that holds translatable text.

    Attributes:
        kind: TEXT_CONTENT or ATTRIBUTE
        location_path: XPath-like location of the slot
        node: The text node (TEXT_CONTENT) or owning element (ATTRIBUTE)
        attribute: Attribute name for ATTRIBUTE slots
    """
    kind: UnitKind
    location_path: str
    node: Union[NavigableString, Tag]
    attribute: Optional[str] = None

    @property
    def raw_value(self) -> str:
        """Value as written in the markup, surrounding whitespace included."""
        if self.kind is UnitKind.ATTRIBUTE:
            return self.node[self.attribute]
        return str(self.node)

    def replace(self, text: str) -> None:
        """Replace the slot content, keeping the original surrounding whitespace."""
        raw = self.raw_value
        leading = raw[:len(raw) - len(raw.lstrip())]
        trailing = raw[len(raw.rstrip()):]
        new_value = f"{leading}{text}{trailing}"

        if self.kind is UnitKind.ATTRIBUTE:
            self.node[self.attribute] = new_value
        else:
            replacement = NavigableString(new_value)
            self.node.replace_with(replacement)
            self.node = replacement


def is_text_node(node) -> bool:
    """True for plain text nodes (not comments, doctypes, script or style bodies)."""
    return (
        isinstance(node, NavigableString)
        and not isinstance(node, (PreformattedString, Script, Stylesheet))
    )


@dataclass
class _Frame:
    """Children of one element still to be visited, with its sibling counters."""
    children: Iterator
    path: str
    element_counts: Counter = field(default_factory=Counter)
    text_count: int = 0


def iter_slots(container: Tag, path: str = "") -> Iterator[Slot]:
    """
    Walk a tree and yield every non-blank translatable slot in document order.

    The walk keeps its own stack instead of recursing, so arbitrarily deep
    nesting is fine.

    Args:
        container: BeautifulSoup object or element to walk
        path: Location path of container ("" for the document)

    Yields:
        Slot objects in the traversal order documented above
    """
    # Children are copied: injection replaces text nodes as it goes
    stack: List[_Frame] = [_Frame(iter(list(container.contents)), path)]

    while stack:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            continue

        if isinstance(child, Tag):
            frame.element_counts[child.name] += 1
            child_path = f"{frame.path}/{child.name}[{frame.element_counts[child.name]}]"

            if child.name in SKIPPED_TAGS:
                continue

            for attribute in TRANSLATABLE_ATTRIBUTES:
                value = child.attrs.get(attribute)
                if isinstance(value, str) and value.strip():
                    yield Slot(
                        kind=UnitKind.ATTRIBUTE,
                        location_path=f"{child_path}/@{attribute}",
                        node=child,
                        attribute=attribute
                    )

            stack.append(_Frame(iter(list(child.contents)), child_path))

        elif is_text_node(child):
            frame.text_count += 1
            if child.strip():
                yield Slot(
                    kind=UnitKind.TEXT_CONTENT,
                    location_path=f"{frame.path}/text()[{frame.text_count}]",
                    node=child
                )
