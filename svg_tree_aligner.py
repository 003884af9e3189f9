#!/usr/bin/env python3
"""
SVG Tree Aligner

Walks a light and a dark SVG tree in lock-step and pairs their elements by
position among siblings.
"""

from typing import Iterable, Iterator, List, Optional, Tuple
from xml.etree.ElementTree import Element

AlignedPair = Tuple[Element, Optional[Element]]


def element_children(element: Element) -> List[Element]:
    """Child elements, skipping comments and processing instructions."""
    return [child for child in element if isinstance(child.tag, str)]


def align_children(light_parent: Element, dark_parent: Optional[Element]) -> Iterator[AlignedPair]:
    """
    Pair the children of two elements and recurse into each pair.

    Args:
        light_parent: Element from the light tree
        dark_parent: Element at the same position in the dark tree, or None

    Yields:
        (light_element, dark_element) tuples in document order. The dark side
        is None when the dark parent is missing or has fewer children.
    """
    dark_children = element_children(dark_parent) if dark_parent is not None else []

    for index, light_child in enumerate(element_children(light_parent)):
        dark_child = dark_children[index] if index < len(dark_children) else None
        yield light_child, dark_child
        yield from align_children(light_child, dark_child)

    # Extra dark children have no light counterpart and are ignored


def align_trees(light_root: Element, dark_root: Element) -> Iterator[AlignedPair]:
    """
    Align two SVG documents below their root elements.

    The roots themselves are never paired; both are assumed to be the same
    <svg> container.
    """
    return align_children(light_root, dark_root)


def count_unaligned(pairs: Iterable[AlignedPair]) -> int:
    """Count light elements that had no dark counterpart."""
    return sum(1 for _, dark in pairs if dark is None)
