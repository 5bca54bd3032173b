"""
OOXML Package Access
====================

Low-level access to PowerPoint 2007+ packages. A ``.pptx`` file is a ZIP
archive of XML parts tied together by relationship files; this package opens
the archive, guards against hostile inputs and exposes every XML part as a
normalized ``XmlNode`` tree.

Package Structure
-----------------

    presentation.pptx/
    ├── [Content_Types].xml          # part content types
    ├── _rels/.rels                  # package relationships
    └── ppt/
        ├── presentation.xml         # slide list and slide size
        ├── _rels/presentation.xml.rels
        ├── slides/slideN.xml        # one part per slide
        ├── slides/_rels/slideN.xml.rels
        ├── slideLayouts/            # layouts, one per slide type
        ├── slideMasters/            # masters with clrMap and text styles
        ├── theme/themeN.xml         # color scheme and fonts
        ├── notesSlides/             # speaker notes
        ├── charts/                  # chart parts referenced by frames
        └── media/                   # images, video and audio

Relationship targets are relative to the directory of the owning part
(``../media/image1.png`` from ``ppt/slides/slide1.xml`` is
``ppt/media/image1.png``).

Modules
-------

namespaces:
    Namespace URIs and the ``prefix:local`` tag helper.

xml_node:
    ``XmlNode``, an element tree with children grouped by qualified tag and
    a recorded document order.

relationships:
    ``.rels`` parsing and target normalization, cached per part.

encryption:
    Detection of password-protected packages (OLE containers and
    ``EncryptedPackage`` entries).

zip_bomb:
    Entry count, uncompressed size and compression ratio checks run before
    any part is read.

package:
    ``PptxPackage``, the entry point tying the above together.

Usage Example
-------------
    >>> from pptx2pptist.ooxml import PptxPackage
    >>> import io
    >>>
    >>> with open("slides.pptx", "rb") as f:
    ...     package = PptxPackage(io.BytesIO(f.read()))
    >>> presentation = package.read_xml("ppt/presentation.xml")
"""

from pptx2pptist.ooxml.package import PptxPackage
from pptx2pptist.ooxml.xml_node import XmlNode, parse_xml

__all__ = [
    "PptxPackage",
    "XmlNode",
    "parse_xml",
]
