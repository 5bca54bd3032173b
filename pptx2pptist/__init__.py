"""
pptx2pptist: PowerPoint (.pptx) to PPTist JSON converter.

Parses the OOXML package directly (no python-pptx), resolves theme, master
and layout styling, and maps shapes, text, pictures, media, lines, tables and
charts onto PPTist elements with aspect-ratio aware pixel scaling.
"""

import io
from pathlib import Path

from pptx2pptist.config import Settings
from pptx2pptist.data_types import Presentation
from pptx2pptist.exceptions import (
    ConversionError,
    PackageCorruptedError,
    PackageEncryptedError,
    PackageInvalidError,
)

__version__ = "0.1.0"


def read_pptx(file_like: io.BytesIO, path: str | None = None) -> Presentation:
    """Parse a PPTX file into the intermediate Presentation model."""
    from pptx2pptist.parsing.presentation_parser import read_pptx as _read_pptx

    return _read_pptx(file_like, path)


def convert_pptx(
    file_like: io.BytesIO, path: str | None = None, settings: Settings | None = None
) -> dict:
    """Convert a PPTX file to a PPTist document dict."""
    from pptx2pptist.conversion.assembler import convert_pptx as _convert_pptx

    return _convert_pptx(file_like, path, settings)


def convert_file(path: str | Path, settings: Settings | None = None) -> dict:
    """Convert a PPTX file on disk to a PPTist document dict."""
    path = Path(path)
    with open(path, "rb") as f:
        data = io.BytesIO(f.read())
    return convert_pptx(data, str(path), settings)


__all__ = [
    "ConversionError",
    "PackageCorruptedError",
    "PackageEncryptedError",
    "PackageInvalidError",
    "Presentation",
    "Settings",
    "__version__",
    "convert_file",
    "convert_pptx",
    "read_pptx",
]
