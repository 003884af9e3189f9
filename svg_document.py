#!/usr/bin/env python3
"""
SVG Document I/O

Reading, parsing and serializing the SVG documents handled by the theme merger.
"""

import io
import logging
import re
import xml.etree.ElementTree as ET
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

SVG_NAMESPACE = 'http://www.w3.org/2000/svg'

XML_DECLARATION_RE = re.compile(r'^\s*(<\?xml[^>]*\?>)')
GENERATED_PREFIX_RE = re.compile(r'^ns\d+$')


class ThemeMergeError(Exception):
    """Base class for errors raised while merging SVG themes."""


def _path_listing(paths: List[str]) -> str:
    return "\n".join(f"  {path}" for path in paths)


class MissingInputError(ThemeMergeError):
    """One or both input documents could not be read or decoded."""

    def __init__(self, paths: List[str], undecodable: Optional[List[str]] = None):
        self.missing = list(paths)
        self.undecodable = list(undecodable or [])
        self.paths = self.missing + self.undecodable

        sections = []
        if self.missing:
            sections.append("Missing input files:\n" + _path_listing(self.missing))
        if self.undecodable:
            sections.append("Input files are not valid UTF-8:\n" + _path_listing(self.undecodable))
        super().__init__("\n".join(sections))


class SvgParseError(ThemeMergeError):
    """An input document is not well-formed markup."""

    def __init__(self, label: str, detail: str, path: Optional[str] = None):
        self.label = label
        self.path = path
        source = path or f"{label} document"
        super().__init__(f"Could not parse {source}: {detail}")


@dataclass
class SvgDocument:
    """A parsed SVG along with what is needed to write it back out."""
    root: Element
    declaration: Optional[str] = None
    namespaces: Dict[str, str] = field(default_factory=dict)


def local_name(tag) -> str:
    """Strip the namespace from an element tag."""
    if not isinstance(tag, str):
        return ''  # Comments and processing instructions
    return tag.split('}')[-1] if '}' in tag else tag


def collect_namespaces(svg_text: str) -> Dict[str, str]:
    """Collect namespace prefixes declared anywhere in the document."""
    namespaces = {}
    for event, elem in ET.iterparse(io.StringIO(svg_text), events=('start-ns',)):
        if event == 'start-ns':
            prefix, uri = elem
            namespaces.setdefault(prefix, uri)
    return namespaces


def parse_svg(svg_text: str, label: str = 'input', path: Optional[str] = None) -> SvgDocument:
    """
    Parse SVG markup into a mutable element tree.

    Comments and processing instructions inside the root are kept so that
    they survive serialization.

    Args:
        svg_text: SVG markup
        label: Name of the variant ("light" or "dark") used in error messages
        path: File the markup came from, if any

    Returns:
        SvgDocument holding the root element, XML declaration and namespaces

    Raises:
        SvgParseError: If the markup is not well-formed
    """
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    try:
        root = ET.fromstring(svg_text, parser=parser)
        namespaces = collect_namespaces(svg_text)
    except ET.ParseError as e:
        raise SvgParseError(label, str(e), path) from e

    match = XML_DECLARATION_RE.match(svg_text)
    declaration = match.group(1) if match else None

    logger.debug("Parsed %s document: root <%s>, %d namespace(s)",
                 label, local_name(root.tag), len(namespaces))
    return SvgDocument(root=root, declaration=declaration, namespaces=namespaces)


def serialize_svg(document: SvgDocument) -> str:
    """
    Render a (possibly mutated) document back to markup.

    The SVG namespace is always written as the default namespace, even when
    the input also bound it to a prefix (Inkscape declares both xmlns and
    xmlns:svg). ElementTree's prefix registry is process-wide, so the SVG
    namespace is never registered under any other prefix.
    """
    for prefix, uri in document.namespaces.items():
        if not prefix or uri == SVG_NAMESPACE:
            continue
        if GENERATED_PREFIX_RE.match(prefix):
            continue  # Reserved by ElementTree
        ET.register_namespace(prefix, uri)
    ET.register_namespace('', SVG_NAMESPACE)

    body = ET.tostring(document.root, encoding='unicode')
    if document.declaration:
        return f"{document.declaration}\n{body}"
    return body


def read_svg_file(path: str) -> str:
    with open(path, 'r', encoding='utf-8-sig') as f:
        return f.read()


def read_svg_pair(light_path: str, dark_path: str) -> Tuple[str, str]:
    """
    Read the light and dark documents concurrently.

    Raises:
        MissingInputError: Listing every path that could not be read or decoded
    """
    paths = [light_path, dark_path]
    with ThreadPoolExecutor(max_workers=2) as executor:
        futures = [executor.submit(read_svg_file, path) for path in paths]

    contents = []
    missing = []
    undecodable = []
    for path, future in zip(paths, futures):
        try:
            contents.append(future.result())
        except OSError as e:
            logger.debug("Could not read %s: %s", path, e)
            missing.append(path)
        except UnicodeDecodeError as e:
            logger.debug("Could not decode %s: %s", path, e)
            undecodable.append(path)

    if missing or undecodable:
        raise MissingInputError(missing, undecodable)

    return contents[0], contents[1]
