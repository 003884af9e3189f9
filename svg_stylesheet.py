#!/usr/bin/env python3
"""
Dark Mode Stylesheet

Builds the conditional CSS block for generated color classes and injects it
into the root <style> element of an SVG.
"""

import xml.etree.ElementTree as ET
from typing import Iterable, Optional
from xml.etree.ElementTree import Element

from svg_color import class_name, css_color
from svg_document import local_name

DARK_MEDIA_QUERY = '(prefers-color-scheme: dark)'


def build_rule(kind: str, key: str) -> str:
    """Return a single rule such as ".fill-000000 { fill: #000000; }"."""
    return f".{class_name(kind, key)} {{ {kind}: {css_color(key)}; }}"


def build_dark_mode_css(fill_keys: Iterable[str], stroke_keys: Iterable[str],
                        media_query: str = DARK_MEDIA_QUERY) -> str:
    """
    Build the media block overriding colors in dark mode.

    Args:
        fill_keys: Dark fill color keys, in discovery order
        stroke_keys: Dark stroke color keys, in discovery order
        media_query: Condition the block is gated on

    Returns:
        CSS text with all fill rules followed by all stroke rules
    """
    lines = [f"@media {media_query} {{"]
    for key in fill_keys:
        lines.append(f"  {build_rule('fill', key)}")
    for key in stroke_keys:
        lines.append(f"  {build_rule('stroke', key)}")
    lines.append("}")
    return '\n'.join(lines) + '\n'


def find_style_element(root: Element) -> Optional[Element]:
    """Return the first <style> element directly under the root."""
    for child in root:
        if local_name(child.tag) == 'style':
            return child
    return None


def ensure_style_element(root: Element) -> Element:
    """Return the root's <style> element, inserting an empty one first if needed."""
    style = find_style_element(root)
    if style is not None:
        return style

    # Match the namespace of the root so the new element serializes unprefixed
    if isinstance(root.tag, str) and root.tag.startswith('{'):
        tag = root.tag[:root.tag.index('}') + 1] + 'style'
    else:
        tag = 'style'

    style = ET.Element(tag)
    root.insert(0, style)
    return style


def inject_stylesheet(root: Element, css: str) -> Element:
    """
    Append CSS to the root's <style> element.

    Existing rules in the element are kept; the new block goes after them.
    """
    style = ensure_style_element(root)
    style.text = (style.text or '') + '\n' + css
    return style
