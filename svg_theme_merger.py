#!/usr/bin/env python3
"""
SVG Theme Merger

This module merges a light and a dark variant of the same SVG into a single
document. Elements whose dark counterpart uses a different fill or stroke get
"fill-<color>" / "stroke-<color>" classes, and a prefers-color-scheme media
block in the root <style> element switches them over in dark mode.
"""

import glob
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from xml.etree.ElementTree import Element

from svg_class_annotator import add_classes
from svg_color import COLOR_KINDS, class_name, get_color, is_sentinel
from svg_document import (
    SvgDocument,
    ThemeMergeError,
    local_name,
    parse_svg,
    read_svg_pair,
    serialize_svg,
)
from svg_stylesheet import DARK_MEDIA_QUERY, build_dark_mode_css, inject_stylesheet
from svg_tree_aligner import AlignedPair, align_trees, count_unaligned

logger = logging.getLogger(__name__)

LIGHT_SUFFIX = '-LIGHT'
DARK_SUFFIX = '-DARK'
SVG_EXTENSION = '.svg'


class ThemeMerger:
    """
    State for a single light/dark merge.

    The merge runs in two passes. extract_differences() compares aligned
    pairs and learns which light colors turn into which dark colors;
    resolve_fallbacks() then applies what was learned to the light elements
    that had no usable counterpart.
    """

    def __init__(self, media_query: str = DARK_MEDIA_QUERY):
        self.media_query = media_query
        # kind -> {light key: dark key}
        self.color_mappings: Dict[str, Dict[str, str]] = {kind: {} for kind in COLOR_KINDS}
        # kind -> dark keys in discovery order (dict used as an ordered set)
        self.generated: Dict[str, Dict[str, None]] = {kind: {} for kind in COLOR_KINDS}
        self.unmatched: List[Element] = []
        self.annotated_count = 0
        self.fallback_count = 0

    def _use_dark_color(self, kind: str, dark_key: str) -> str:
        self.generated[kind].setdefault(dark_key)
        return class_name(kind, dark_key)

    def _learn_mapping(self, kind: str, light_key: Optional[str], dark_key: str):
        if is_sentinel(light_key):
            return
        mapping = self.color_mappings[kind]
        previous = mapping.get(light_key)
        if previous is not None and previous != dark_key:
            logger.debug("Conflicting %s mapping for %s: %s replaced by %s",
                         kind, light_key, previous, dark_key)
        mapping[light_key] = dark_key

    def compare_pair(self, light: Element, dark: Optional[Element]) -> List[str]:
        """
        Return the classes a light element needs, given its dark counterpart.

        A color differs when the dark key is a real color and is not equal to
        the light key (a missing light color counts as different).
        """
        if dark is None:
            return []

        classes = []
        for kind in COLOR_KINDS:
            dark_key = get_color(dark, kind)
            if is_sentinel(dark_key):
                continue

            light_key = get_color(light, kind)
            if dark_key == light_key:
                continue

            classes.append(self._use_dark_color(kind, dark_key))
            self._learn_mapping(kind, light_key, dark_key)
            logger.debug("<%s> %s differs: %s -> %s", local_name(light.tag), kind, light_key, dark_key)

        return classes

    def extract_differences(self, pairs: Iterable[AlignedPair]):
        """First pass: annotate elements whose colors differ from their counterpart."""
        for light, dark in pairs:
            classes = self.compare_pair(light, dark)
            if classes:
                add_classes(light, classes)
                self.annotated_count += 1
            else:
                self.unmatched.append(light)

    def resolve_fallbacks(self):
        """
        Second pass: reuse learned light -> dark mappings for unmatched elements.

        Must run after extract_differences() has seen the whole document.
        """
        for light in self.unmatched:
            classes = []
            for kind in COLOR_KINDS:
                light_key = get_color(light, kind)
                if is_sentinel(light_key):
                    continue
                dark_key = self.color_mappings[kind].get(light_key)
                if dark_key is None:
                    continue
                classes.append(self._use_dark_color(kind, dark_key))

            if classes:
                add_classes(light, classes)
                self.fallback_count += 1
                logger.debug("<%s> themed from learned colors: %s", local_name(light.tag), ' '.join(classes))

        self.unmatched = []

    def build_css(self) -> str:
        return build_dark_mode_css(self.generated['fill'], self.generated['stroke'],
                                   media_query=self.media_query)

    def merge(self, light_doc: SvgDocument, dark_doc: SvgDocument) -> SvgDocument:
        """
        Merge the dark document into the light one, in place.

        Returns:
            The light document, annotated and carrying the dark mode block
        """
        pairs = list(align_trees(light_doc.root, dark_doc.root))
        logger.debug("Aligned %d light element(s), %d without a dark counterpart",
                     len(pairs), count_unaligned(pairs))

        self.extract_differences(pairs)
        self.resolve_fallbacks()

        inject_stylesheet(light_doc.root, self.build_css())
        logger.debug("Annotated %d element(s) directly and %d from learned colors; "
                     "%d fill and %d stroke rule(s)",
                     self.annotated_count, self.fallback_count,
                     len(self.generated['fill']), len(self.generated['stroke']))
        return light_doc


def merge_svg_strings(light_svg: str, dark_svg: str,
                      light_path: Optional[str] = None,
                      dark_path: Optional[str] = None) -> str:
    """
    Merge light and dark SVG markup into a single themed SVG.

    Args:
        light_svg: Markup of the light variant (kept as the output's base)
        dark_svg: Markup of the dark variant
        light_path: Source path of the light markup, for error messages
        dark_path: Source path of the dark markup, for error messages

    Returns:
        Serialized merged SVG

    Raises:
        SvgParseError: If either document is not well-formed
    """
    light_doc = parse_svg(light_svg, 'light', light_path)
    dark_doc = parse_svg(dark_svg, 'dark', dark_path)

    merged = ThemeMerger().merge(light_doc, dark_doc)
    return serialize_svg(merged)


def derive_theme_paths(base: str, light_suffix: str = LIGHT_SUFFIX,
                       dark_suffix: str = DARK_SUFFIX) -> Tuple[str, str, str]:
    """
    Work out the light, dark and output paths for a base name.

    "icons/logo" gives icons/logo-LIGHT.svg, icons/logo-DARK.svg and
    icons/logo.svg. A base ending in a path separator names a directory,
    and the files inside it are named after the directory itself.
    """
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    if base.endswith(separators):
        directory = base
        name = os.path.basename(os.path.abspath(base))
    else:
        directory = os.path.dirname(base) or '.'
        name = os.path.basename(base)

    def make_path(suffix):
        return os.path.abspath(os.path.join(directory, f"{name}{suffix}{SVG_EXTENSION}"))

    return make_path(light_suffix), make_path(dark_suffix), make_path('')


def merge_svg_files(base: str, output_path: Optional[str] = None,
                    light_suffix: str = LIGHT_SUFFIX,
                    dark_suffix: str = DARK_SUFFIX) -> str:
    """
    Merge <base>-LIGHT.svg and <base>-DARK.svg into <base>.svg.

    Nothing is written unless both inputs were read and parsed.

    Returns:
        Path of the written file

    Raises:
        MissingInputError: If either input cannot be read
        SvgParseError: If either input is not well-formed
    """
    light_path, dark_path, default_output = derive_theme_paths(base, light_suffix, dark_suffix)
    output_path = output_path or default_output

    light_svg, dark_svg = read_svg_pair(light_path, dark_path)
    merged = merge_svg_strings(light_svg, dark_svg, light_path, dark_path)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(merged)

    logger.debug("Wrote %s", output_path)
    return output_path


@dataclass
class BatchResult:
    base: str
    output_path: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def find_theme_bases(directory: str, light_suffix: str = LIGHT_SUFFIX) -> List[str]:
    """Return the base paths of every light variant found in a directory."""
    pattern = os.path.join(glob.escape(directory), f"*{light_suffix}{SVG_EXTENSION}")
    tail = len(light_suffix) + len(SVG_EXTENSION)
    return sorted(path[:-tail] for path in glob.glob(pattern))


def merge_directory(directory: str, light_suffix: str = LIGHT_SUFFIX,
                    dark_suffix: str = DARK_SUFFIX,
                    max_workers: Optional[int] = None) -> List[BatchResult]:
    """
    Merge every light/dark pair in a directory.

    Each pair is an independent merge; a failing pair is reported in its
    result and does not stop the others.
    """
    bases = find_theme_bases(directory, light_suffix)
    logger.debug("Found %d theme pair(s) in %s", len(bases), directory)

    def run(base):
        try:
            return BatchResult(base, output_path=merge_svg_files(
                base, light_suffix=light_suffix, dark_suffix=dark_suffix))
        except (ThemeMergeError, OSError) as e:
            return BatchResult(base, error=e)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(run, bases))
