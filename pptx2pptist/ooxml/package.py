"""
Archive Extractor
=================

Opens a PPTX ZIP container once and hands out its parts on demand: raw
bytes for media, parsed ``XmlNode`` trees for XML parts (parsed once and
cached), and relationship maps per part.

Package structure used here:

    [Content_Types].xml: content types per extension and per part
    ppt/presentation.xml: slide order (p:sldIdLst) and slide size (p:sldSz)
    ppt/_rels/presentation.xml.rels: slide, master and theme relationships
    ppt/slides/slideN.xml: slides, each with _rels/slideN.xml.rels
    ppt/slideLayouts/, ppt/slideMasters/, ppt/theme/: inherited styling
    ppt/notesSlides/: speaker notes
    ppt/media/: embedded images, audio and video
"""

from __future__ import annotations

import io
import logging
import re

from pptx2pptist.exceptions import (
    PackageCorruptedError,
    PackageEncryptedError,
    PackageInvalidError,
)
from pptx2pptist.ooxml.encryption import has_encrypted_package_entry, is_ooxml_encrypted
from pptx2pptist.ooxml.relationships import (
    REL_SLIDE,
    RelationshipMap,
    RelationshipResolver,
)
from pptx2pptist.ooxml.xml_node import XmlNode, parse_xml
from pptx2pptist.ooxml.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    open_zipfile,
)

logger = logging.getLogger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
PRESENTATION_PATH = "ppt/presentation.xml"

SLIDE_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.presentationml.slide+xml"
)

# Content type by file extension, used when [Content_Types].xml is silent
_EXTENSION_CONTENT_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "svg": "image/svg+xml",
    "emf": "image/x-emf",
    "wmf": "image/x-wmf",
    "mp4": "video/mp4",
    "m4v": "video/mp4",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "avi": "video/x-msvideo",
    "mp3": "audio/mpeg",
    "m4a": "audio/mp4",
    "wav": "audio/wav",
    "wma": "audio/x-ms-wma",
}

_SLIDE_NUMBER_RE = re.compile(r"slide(\d+)\.xml$")


class PptxPackage:
    """Read-only view over the parts of one PPTX archive."""

    def __init__(
        self,
        file_like: io.BytesIO,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    ):
        if is_ooxml_encrypted(file_like):
            raise PackageEncryptedError()

        self._zip = open_zipfile(file_like, limits=limits, source=type(self).__name__)
        try:
            self._namelist = set(self._zip.namelist())
            if has_encrypted_package_entry(self._zip):
                raise PackageEncryptedError(
                    "PPTX archive contains an EncryptedPackage entry"
                )
            for required in (CONTENT_TYPES_PATH, PRESENTATION_PATH):
                if required not in self._namelist:
                    raise PackageInvalidError(f"PPTX package is missing {required}")
        except Exception:
            self._zip.close()
            raise

        self._xml_cache: dict[str, XmlNode] = {}
        self._content_types: tuple[dict[str, str], dict[str, str]] | None = None
        self.relationships = RelationshipResolver(self)

    @property
    def namelist(self) -> set[str]:
        return self._namelist

    def exists(self, path: str) -> bool:
        return path in self._namelist

    def read_bytes(self, path: str) -> bytes:
        if path not in self._namelist:
            raise PackageCorruptedError(f"Missing part: {path}")
        return self._zip.read(path)

    def read_text(self, path: str) -> str:
        return self.read_bytes(path).decode("utf-8", errors="replace")

    def read_xml(self, path: str) -> XmlNode:
        """Parse a part once; later calls return the cached tree."""
        cached = self._xml_cache.get(path)
        if cached is not None:
            return cached
        node = parse_xml(self.read_bytes(path), path)
        self._xml_cache[path] = node
        return node

    def read_optional_xml(self, path: str | None) -> XmlNode | None:
        if not path or path not in self._namelist:
            return None
        return self.read_xml(path)

    def rels(self, part_path: str) -> RelationshipMap:
        return self.relationships.resolve(part_path)

    def close(self) -> None:
        self._zip.close()

    def _load_content_types(self) -> tuple[dict[str, str], dict[str, str]]:
        if self._content_types is None:
            defaults: dict[str, str] = {}
            overrides: dict[str, str] = {}
            root = self.read_xml(CONTENT_TYPES_PATH)
            for default in root.children("Default"):
                extension = default.attr("Extension")
                if extension:
                    defaults[extension.lower()] = default.attr("ContentType", "")
            for override in root.children("Override"):
                part_name = override.attr("PartName")
                if part_name:
                    overrides[part_name.lstrip("/")] = override.attr("ContentType", "")
            self._content_types = (defaults, overrides)
        return self._content_types

    def content_type(self, path: str) -> str:
        defaults, overrides = self._load_content_types()
        if path in overrides:
            return overrides[path]
        extension = path.rsplit(".", 1)[-1].lower() if "." in path else ""
        if extension in _EXTENSION_CONTENT_TYPES:
            return _EXTENSION_CONTENT_TYPES[extension]
        return defaults.get(extension, "application/octet-stream")

    def slide_paths(self) -> list[str]:
        """Slide parts in presentation order."""
        presentation = self.read_xml(PRESENTATION_PATH)
        presentation_rels = self.rels(PRESENTATION_PATH)

        slide_paths: list[str] = []
        sld_id_lst = presentation.child("p:sldIdLst")
        if sld_id_lst is not None:
            for sld_id in sld_id_lst.children("p:sldId"):
                rel = presentation_rels.get(sld_id.attr("r:id"))
                if rel is None or rel.type_name != REL_SLIDE:
                    continue
                if rel.target not in self._namelist:
                    raise PackageCorruptedError(
                        f"Slide part referenced but missing: {rel.target}"
                    )
                slide_paths.append(rel.target)
        if slide_paths:
            return slide_paths

        # No slide list: fall back to content type overrides sorted by number
        _, overrides = self._load_content_types()
        candidates = [
            path
            for path, content_type in overrides.items()
            if content_type == SLIDE_CONTENT_TYPE and path in self._namelist
        ]
        logger.debug("No p:sldIdLst, using %d slides from content types", len(candidates))
        return sorted(candidates, key=_slide_number)


def _slide_number(path: str) -> int:
    match = _SLIDE_NUMBER_RE.search(path)
    return int(match.group(1)) if match else 0
