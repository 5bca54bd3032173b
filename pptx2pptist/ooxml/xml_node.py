"""
XML-to-Object Normalizer
========================

Turns one OOXML part into a read-only ``XmlNode`` tree:

    - children are grouped by qualified tag (``p:sp``, ``a:off``) and always
      stored as lists, so repeated elements never change shape;
    - attributes live in a separate ``attrs`` mapping and stay strings;
    - every node also records the order in which its children appeared as
      ``(tag, index-within-tag)`` pairs.

Grouping by tag loses the interleaving between different tags, and for a
shape tree that interleaving is the z-order. ``ordered_children`` rebuilds the
document sequence by walking the recorded order pairs and pulling one element
at a time from each tag's list.
"""

from __future__ import annotations

from typing import Iterable
from xml.etree import ElementTree as ET

from pptx2pptist.exceptions import XmlParseError
from pptx2pptist.ooxml.namespaces import qualify


class XmlNode:
    __slots__ = ("tag", "attrs", "text", "_children", "_order")

    def __init__(self, tag: str, attrs: dict[str, str] | None = None, text: str | None = None):
        self.tag = tag
        self.attrs: dict[str, str] = attrs or {}
        self.text = text
        self._children: dict[str, list[XmlNode]] = {}
        self._order: list[tuple[str, int]] = []

    def _append(self, node: XmlNode) -> None:
        siblings = self._children.setdefault(node.tag, [])
        self._order.append((node.tag, len(siblings)))
        siblings.append(node)

    def __repr__(self) -> str:
        return f"XmlNode({self.tag!r}, attrs={self.attrs!r})"

    @property
    def tags(self) -> list[str]:
        """Child tags in first-seen order."""
        return list(self._children)

    @property
    def order(self) -> list[tuple[str, int]]:
        return list(self._order)

    def child(self, tag: str) -> XmlNode | None:
        siblings = self._children.get(tag)
        return siblings[0] if siblings else None

    def children(self, tag: str) -> list[XmlNode]:
        return list(self._children.get(tag, ()))

    def has(self, tag: str) -> bool:
        return tag in self._children

    def find(self, *path: str) -> XmlNode | None:
        """Follow a chain of first-children, e.g. ``find("p:spPr", "a:xfrm", "a:off")``."""
        node: XmlNode | None = self
        for tag in path:
            if node is None:
                return None
            node = node.child(tag)
        return node

    def attr(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)

    def int_attr(self, name: str, default: int | None = None) -> int | None:
        value = self.attrs.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def ordered_children(self, exclude: Iterable[str] = ()) -> list[XmlNode]:
        """Children in document order, skipping the excluded tags."""
        skipped = set(exclude)
        result = []
        for tag, index in self._order:
            if tag in skipped:
                continue
            result.append(self._children[tag][index])
        return result

    def text_content(self) -> str:
        return self.text or ""


def _normalize(element: ET.Element) -> XmlNode:
    attrs = {qualify(key): value for key, value in element.attrib.items()}
    node = XmlNode(qualify(element.tag), attrs, element.text)
    for sub in element:
        # Comments and processing instructions carry a callable tag
        if not isinstance(sub.tag, str):
            continue
        node._append(_normalize(sub))
    return node


def parse_xml(content: str | bytes, part_path: str = "<memory>") -> XmlNode:
    """
    Parse one XML part into an XmlNode tree.

    Raises:
        XmlParseError: The part is not well-formed XML.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise XmlParseError(part_path, cause=exc) from exc
    return _normalize(root)
