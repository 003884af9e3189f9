#!/usr/bin/env python3
"""
SVG Color Keys

This module turns raw fill/stroke attribute values into comparable color keys.
"""

import hashlib
import re
from typing import Optional
from xml.etree.ElementTree import Element

COLOR_KINDS = ('fill', 'stroke')

NONE_SENTINEL = 'none'

HEX_KEY_RE = re.compile(r'^(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$')
SHORT_HEX_RE = re.compile(r'^[0-9a-f]{3}$')
CLASS_UNSAFE_RE = re.compile(r'[^a-z0-9_-]+')


def normalize_color(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a raw color attribute value into a color key.

    Args:
        raw: Attribute value such as "#ABC", "aabbcc" or "none"

    Returns:
        Lowercase key without "#", with 3-digit hex expanded to 6 digits,
        or None when the value is absent or empty
    """
    if raw is None:
        return None

    color = raw.strip().lower()
    if not color:
        return None

    if color.startswith('#'):
        color = color[1:]

    if SHORT_HEX_RE.match(color):
        color = ''.join(c * 2 for c in color)  # Expand shorthand

    return color


def is_sentinel(key: Optional[str]) -> bool:
    """Return True for keys that never produce a class or rule."""
    return not key or key == NONE_SENTINEL


def get_color(element: Optional[Element], kind: str) -> Optional[str]:
    """Return the normalized fill or stroke key of an element."""
    if element is None:
        return None
    return normalize_color(element.get(kind))


def css_color(key: str) -> str:
    """CSS value for a color key."""
    if HEX_KEY_RE.match(key):
        return f"#{key}"
    # Named colors, rgb(), currentColor and friends go through verbatim
    return key


def class_name(kind: str, key: str) -> str:
    """
    Build the class name for a dark color of the given kind.

    Hex keys and plain names map straight to "fill-aabbcc" or "fill-red".
    Characters that cannot live in a class token (spaces, parentheses, commas,
    "%") collapse to "-", and a digest of the key is appended so that keys
    such as "rgb(10,0,0)" and "rgb(10%,0,0)" still get different classes.
    """
    if not CLASS_UNSAFE_RE.search(key):
        return f"{kind}-{key}"

    readable = CLASS_UNSAFE_RE.sub('-', key).strip('-')
    digest = hashlib.sha1(key.encode('utf-8')).hexdigest()[:8]
    return f"{kind}-{readable}-{digest}" if readable else f"{kind}-{digest}"
