"""Class attribute editing for themed SVG elements."""

from typing import Iterable, List, Optional
from xml.etree.ElementTree import Element


def parse_class_tokens(value: Optional[str]) -> List[str]:
    """Split a class attribute into unique tokens, keeping their order."""
    if not value:
        return []
    return list(dict.fromkeys(value.split()))


def add_classes(element: Element, class_names: Iterable[str]) -> bool:
    """
    Merge class names into an element's class attribute.

    Existing classes keep their position, new ones are appended in the order
    given and duplicates are dropped. Returns True if the attribute changed.
    """
    tokens = dict.fromkeys(parse_class_tokens(element.get('class')))
    before = len(tokens)

    for name in class_names:
        tokens.setdefault(name)

    if len(tokens) == before:
        return False

    element.set('class', ' '.join(tokens))
    return True
