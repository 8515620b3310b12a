"""XML encoding for problem details documents."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Mapping

PROBLEM_NAMESPACE = "urn:ietf:rfc:7807"
PROBLEM_ELEMENT = "problem"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Unprefixed names only. Colons would bind to undeclared namespaces.
_ELEMENT_NAME = re.compile(r"[A-Za-z_][\w.-]*")


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append(parent: ET.Element, name: str, value: Any) -> None:
    if value is None:
        return
    if not _ELEMENT_NAME.fullmatch(name):
        raise ValueError(f"problem member {name!r} is not a valid XML element name")
    if isinstance(value, (list, tuple)):
        for item in value:
            _append(parent, name, item)
        return

    child = ET.SubElement(parent, name)
    if isinstance(value, Mapping):
        for key, item in value.items():
            _append(child, str(key), item)
    else:
        child.text = _text(value)


def encode_problem(fields: Mapping[str, Any]) -> bytes:
    """Encode already-dumped fields as a ``<problem>`` element (no XML declaration).

    Raises ValueError when a member name cannot be used as an element name.
    """
    root = ET.Element(PROBLEM_ELEMENT, xmlns=PROBLEM_NAMESPACE)
    for name, value in fields.items():
        _append(root, name, value)
    return ET.tostring(root, encoding="utf-8", xml_declaration=False, short_empty_elements=False)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _decode_element(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        return element.text or ""

    decoded: dict[str, Any] = {}
    for child in children:
        name = _local_name(child.tag)
        value = _decode_element(child)
        if name not in decoded:
            decoded[name] = value
        elif isinstance(decoded[name], list):
            decoded[name].append(value)
        else:
            decoded[name] = [decoded[name], value]
    return decoded


def decode_problem(data: bytes) -> dict[str, Any]:
    """Decode a ``<problem>`` document into a field mapping.

    Raises ``ET.ParseError`` for malformed XML or an unexpected root element.
    """
    root = ET.fromstring(data)
    expected = f"{{{PROBLEM_NAMESPACE}}}{PROBLEM_ELEMENT}"
    if root.tag != expected:
        raise ET.ParseError(f"expected element <{PROBLEM_ELEMENT}> in name space {PROBLEM_NAMESPACE} but have <{root.tag}>")

    decoded = _decode_element(root)
    return decoded if isinstance(decoded, dict) else {}


__all__ = ["PROBLEM_ELEMENT", "PROBLEM_NAMESPACE", "XML_HEADER", "decode_problem", "encode_problem"]
