"""
XML codec
Maps plain data (mappings, sequences, scalars) to XML documents and back
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Set

DEFAULT_ROOT_TAG = "root"
LIST_ITEM_TAG = "item"


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    if value is None:
        return

    if isinstance(value, (list, tuple)):
        # Sequences become repeated sibling elements
        for item in value:
            _append(parent, tag, item)
        return

    element = ET.SubElement(parent, tag)
    _fill(element, value)


def _fill(element: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _append(element, str(key), child)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _append(element, LIST_ITEM_TAG, item)
    elif value is not None:
        element.text = _text(value)


def dumps(data: Any, root_tag: str = DEFAULT_ROOT_TAG, encoding: str = "utf-8") -> bytes:
    """Render plain data as an XML document with a declaration"""
    root = ET.Element(root_tag)
    _fill(root, data)
    return ET.tostring(root, encoding=encoding, xml_declaration=True)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _repeated_names(children: List[ET.Element]) -> Set[str]:
    seen: Set[str] = set()
    repeated: Set[str] = set()
    for child in children:
        name = _local_name(child.tag)
        if name in seen:
            repeated.add(name)
        seen.add(name)
    return repeated


def _parse_element(element: ET.Element) -> Any:
    children = list(element)
    if not children and not element.attrib:
        return element.text

    parsed: Dict[str, Any] = {
        _local_name(key): value for key, value in element.attrib.items()
    }
    repeated = _repeated_names(children)
    for child in children:
        name = _local_name(child.tag)
        value = _parse_element(child)
        if name in repeated:
            parsed.setdefault(name, []).append(value)
        else:
            parsed[name] = value
    return parsed


def loads(content: bytes) -> Any:
    """Parse an XML document into plain data, dropping the root tag"""
    root = ET.fromstring(content)
    return _parse_element(root)
