"""XML to nested mapping normalization.

This module parses CHB export XML into a namespace-free tree of
dicts, lists and coerced scalars. It is the first pipeline stage.
"""

from __future__ import annotations

import re
from typing import Any

from lxml import etree

from core.constants import ATTRIBUTES_KEY, TEXT_KEY
from core.errors import ParseError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
_BOOLEAN_VALUES = {"true": True, "false": False}


def normalize_xml(xml_text: str) -> dict[str, Any]:
    """Parse XML text into a nested, namespace-free document tree.

    The tree follows a non-explicit-array convention: a repeated child
    element becomes a list, a single child a bare value. Attributes are
    kept under ``"$"``; text beside child elements or attributes under
    ``"_"``.

    Args:
        xml_text: Complete decoded XML document.

    Returns:
        Mapping with the root element name as its single key.

    Raises:
        ParseError: If the text is empty or not well-formed XML.
    """
    root = _parse_root(xml_text)
    root_name = local_name(root.tag)
    tree = {root_name: _normalize_element(root)}
    _LOGGER.info("xml_normalized", root=root_name, characters=len(xml_text))
    return tree


def local_name(name: str) -> str:
    """Strip a ``{uri}`` qualifier or ``prefix:`` from a tag or attribute name."""
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    return name.rsplit(":", 1)[-1]


def coerce_scalar(text: str) -> int | float | bool | str:
    """Coerce leaf text to a number or boolean where its lexical form allows.

    Args:
        text: Raw element text.

    Returns:
        ``int`` for integer forms, ``float`` for decimal/exponent forms,
        ``bool`` for ``true``/``false`` in any case, else the trimmed text.
    """
    value = text.strip()
    if _INTEGER_PATTERN.fullmatch(value):
        return int(value)
    if _FLOAT_PATTERN.fullmatch(value):
        return float(value)
    boolean = _BOOLEAN_VALUES.get(value.lower())
    if boolean is not None:
        return boolean
    return value


def _parse_root(xml_text: str) -> Any:
    """Parse XML text into an lxml root element.

    Args:
        xml_text: Decoded XML text.

    Returns:
        Root element.

    Raises:
        ParseError: If parsing fails.
    """
    if not xml_text.strip():
        raise ParseError(
            "Failed to parse export XML: document is empty. "
            "Provide the complete decompressed export text."
        )
    parser = etree.XMLParser(
        encoding="utf-8",
        no_network=True,
        resolve_entities=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=True,
    )
    try:
        return etree.fromstring(xml_text.encode("utf-8"), parser)
    except etree.XMLSyntaxError as error:
        raise ParseError(
            f"Failed to parse export XML: {error}. "
            "Check that the export download and decompression completed."
        ) from error


def _normalize_element(element: Any) -> Any:
    """Convert one element and its subtree into mappings and scalars."""
    children = [child for child in element if isinstance(child.tag, str)]
    attributes = {local_name(name): value for name, value in element.attrib.items()}
    text = _collect_text(element, children)
    if not children and not attributes:
        return coerce_scalar(text)
    node: dict[str, Any] = {}
    if attributes:
        node[ATTRIBUTES_KEY] = attributes
    if text.strip():
        node[TEXT_KEY] = coerce_scalar(text)
    for child in children:
        _add_child(node, local_name(child.tag), _normalize_element(child))
    return node


def _add_child(node: dict[str, Any], name: str, value: Any) -> None:
    """Add a child value, turning repeated names into lists."""
    if name not in node:
        node[name] = value
        return
    existing = node[name]
    if isinstance(existing, list):
        existing.append(value)
    else:
        node[name] = [existing, value]


def _collect_text(element: Any, children: list[Any]) -> str:
    """Join the element's own text with the tails of its children."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in children)
    return "".join(parts)
