"""XML to canonical JSON conversion."""

import asyncio
import json
from typing import Any
from xml.etree import ElementTree

from docreg.domain.document.port.converter import ContentConverterPort
from docreg.domain.shared.error import InvalidContentError

TEXT_KEY = ""


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}local"
    return tag.rsplit("}", 1)[-1]


def _element_to_value(element: ElementTree.Element) -> Any:
    children = list(element)
    text = (element.text or "").strip()
    if not children and not element.attrib:
        return text

    node: dict[str, Any] = {}
    for attr, value in element.attrib.items():
        node[_local_name(attr)] = value

    for child in children:
        name = _local_name(child.tag)
        value = _element_to_value(child)
        if name not in node:
            node[name] = value
        elif isinstance(node[name], list):
            node[name].append(value)
        else:
            node[name] = [node[name], value]

    if text:
        node[TEXT_KEY] = text
    return node


def xml_to_tree(raw: bytes) -> dict[str, Any]:
    """Parse an XML document into a JSON-compatible tree keyed by its root tag.

    Raises:
        InvalidContentError: If the input is not well-formed XML.
    """
    try:
        root = ElementTree.fromstring(raw)
    except ElementTree.ParseError as e:
        raise InvalidContentError(f"Failed to parse XML content: {e}") from e
    return {_local_name(root.tag): _element_to_value(root)}


class XmlToJsonConverter(ContentConverterPort):
    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def _convert(self, raw: bytes) -> bytes:
        tree = xml_to_tree(raw)
        return json.dumps(tree, indent=self.indent, ensure_ascii=False).encode("utf-8")

    async def convert(self, raw: bytes) -> bytes:
        return await asyncio.to_thread(self._convert, raw)
