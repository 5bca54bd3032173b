"""Namespace URIs used by PresentationML parts and their short prefixes."""

P_URI = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_URI = "http://schemas.openxmlformats.org/drawingml/2006/main"
R_URI = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
C_URI = "http://schemas.openxmlformats.org/drawingml/2006/chart"
MC_URI = "http://schemas.openxmlformats.org/markup-compatibility/2006"
REL_URI = "http://schemas.openxmlformats.org/package/2006/relationships"
CT_URI = "http://schemas.openxmlformats.org/package/2006/content-types"

# Package-level parts use a default namespace and keep bare tag names
PREFIXES: dict[str, str] = {
    P_URI: "p",
    A_URI: "a",
    R_URI: "r",
    C_URI: "c",
    MC_URI: "mc",
    "http://schemas.microsoft.com/office/powerpoint/2010/main": "p14",
    "http://schemas.microsoft.com/office/drawing/2010/main": "a14",
    "http://schemas.openxmlformats.org/drawingml/2006/diagram": "dgm",
    "http://schemas.openxmlformats.org/drawingml/2006/picture": "pic",
    REL_URI: "",
    CT_URI: "",
}

# graphicData uri fragments
CHART_URI_MARKER = "chart"
TABLE_URI_MARKER = "table"


def qualify(clark_name: str) -> str:
    """Turn an ElementTree ``{uri}local`` name into ``prefix:local``."""
    if not clark_name.startswith("{"):
        return clark_name
    uri, _, local = clark_name[1:].partition("}")
    prefix = PREFIXES.get(uri)
    if prefix:
        return f"{prefix}:{local}"
    return local
