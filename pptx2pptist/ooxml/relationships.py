"""
Relationship Resolver
=====================

Every OOXML part may have a sibling ``_rels/<name>.rels`` part mapping
relationship ids (``rId3``) to targets. Targets are written relative to the
referencing part's directory; this module turns them into package paths
(``../media/image1.png`` from ``ppt/slides/slide1.xml`` becomes
``ppt/media/image1.png``).

A part without a ``.rels`` file simply has no relationships.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pptx2pptist.ooxml.xml_node import XmlNode

logger = logging.getLogger(__name__)

REL_SLIDE = "slide"
REL_SLIDE_LAYOUT = "slideLayout"
REL_SLIDE_MASTER = "slideMaster"
REL_THEME = "theme"
REL_NOTES_SLIDE = "notesSlide"
REL_IMAGE = "image"
REL_CHART = "chart"
MEDIA_TYPES = frozenset({"image", "video", "audio", "media"})


class _PartReader(Protocol):
    def exists(self, path: str) -> bool: ...

    def read_xml(self, path: str) -> XmlNode: ...


@dataclass(frozen=True)
class Relationship:
    id: str
    type: str
    target: str
    external: bool = False

    @property
    def type_name(self) -> str:
        """Short type, the segment after ``.../relationships/``."""
        return self.type.rstrip("/").rsplit("/", 1)[-1]


@dataclass
class RelationshipMap:
    part_path: str
    by_id: dict[str, Relationship] = field(default_factory=dict)

    def __contains__(self, rel_id: str) -> bool:
        return rel_id in self.by_id

    def __len__(self) -> int:
        return len(self.by_id)

    def get(self, rel_id: str | None) -> Relationship | None:
        if not rel_id:
            return None
        return self.by_id.get(rel_id)

    def target(self, rel_id: str | None) -> str | None:
        rel = self.get(rel_id)
        return rel.target if rel is not None else None

    def of_type(self, type_name: str) -> list[Relationship]:
        return [rel for rel in self.by_id.values() if rel.type_name == type_name]

    def _first_target(self, type_name: str) -> str | None:
        for rel in self.by_id.values():
            if rel.type_name == type_name and not rel.external:
                return rel.target
        return None

    @property
    def slide_layout(self) -> str | None:
        return self._first_target(REL_SLIDE_LAYOUT)

    @property
    def slide_master(self) -> str | None:
        return self._first_target(REL_SLIDE_MASTER)

    @property
    def theme(self) -> str | None:
        return self._first_target(REL_THEME)

    @property
    def notes_slide(self) -> str | None:
        return self._first_target(REL_NOTES_SLIDE)


def rels_path_for(part_path: str) -> str:
    directory, _, name = part_path.rpartition("/")
    if directory:
        return f"{directory}/_rels/{name}.rels"
    return f"_rels/{name}.rels"


def normalize_target(base_dir: str, target: str) -> str:
    """Resolve ``target`` against ``base_dir`` without escaping the package root."""
    if target.startswith("/"):
        joined = target.lstrip("/")
    elif base_dir:
        joined = f"{base_dir}/{target}"
    else:
        joined = target

    normalized: list[str] = []
    for part in joined.split("/"):
        if part == "..":
            if normalized:
                normalized.pop()
        elif part and part != ".":
            normalized.append(part)
    return "/".join(normalized)


def parse_relationships(root: XmlNode, part_path: str) -> RelationshipMap:
    base_dir = part_path.rpartition("/")[0]
    relationships = RelationshipMap(part_path=part_path)
    for rel in root.children("Relationship"):
        rel_id = rel.attr("Id")
        target = rel.attr("Target")
        if not rel_id or target is None:
            continue
        external = rel.attr("TargetMode", "").lower() == "external"
        relationships.by_id[rel_id] = Relationship(
            id=rel_id,
            type=rel.attr("Type", ""),
            target=target if external else normalize_target(base_dir, target),
            external=external,
        )
    return relationships


class RelationshipResolver:
    """Caches one RelationshipMap per part."""

    def __init__(self, reader: _PartReader):
        self._reader = reader
        self._cache: dict[str, RelationshipMap] = {}

    def resolve(self, part_path: str) -> RelationshipMap:
        if part_path in self._cache:
            return self._cache[part_path]

        rels_path = rels_path_for(part_path)
        if self._reader.exists(rels_path):
            relationships = parse_relationships(
                self._reader.read_xml(rels_path), part_path
            )
        else:
            logger.debug("No relationships for part %s", part_path)
            relationships = RelationshipMap(part_path=part_path)

        self._cache[part_path] = relationships
        return relationships
