import io
import json
import unittest
import zipfile

import pytest

from pptx2pptist import convert_pptx, read_pptx
from pptx2pptist.config import Settings
from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converter import convert_element
from pptx2pptist.conversion.converters.group import convert_group
from pptx2pptist.data_types import GroupElement, ShapeElement, Transform
from pptx2pptist.diagnostics import (
    WARN_CHART_PARTIAL,
    WARN_ELEMENT_FAILED,
    WARN_MEDIA_UNRESOLVED,
    WARN_SLIDE_FAILED,
)
from pptx2pptist.exceptions import (
    PackageCorruptedError,
    PackageEncryptedError,
    PackageInvalidError,
)
from pptx2pptist.geometry.units import ScaleFactors
from pptx2pptist.tests.pptx_factory import (
    NSMAP,
    build_pptx,
    connector,
    picture,
    rect_shape,
    rels_xml,
    slide_xml,
)

tc = unittest.TestCase()
tc.maxDiff = None

PNG_A = b"\x89PNG\r\n\x1a\n" + b"first image"
PNG_B = b"\x89PNG\r\n\x1a\n" + b"second image"

EMPTY_TREE = (
    '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr><p:grpSpPr/>'
)


def _layout(shapes: str = "", background: str = "") -> str:
    return (
        f"<p:sldLayout {NSMAP}><p:cSld>{background}<p:spTree>{EMPTY_TREE}{shapes}"
        "</p:spTree></p:cSld></p:sldLayout>"
    )


def _by_code(document: dict) -> dict:
    return {warning["code"]: warning for warning in document["warnings"]}


def test_rect_with_alpha_fill_on_16_9_slide() -> None:
    fill = '<a:solidFill><a:srgbClr val="FF0000"><a:alpha val="50000"/></a:srgbClr></a:solidFill>'
    shape = rect_shape(2, x=914400, y=914400, cx=1828800, cy=1371600, fill=fill)

    document = convert_pptx(build_pptx([slide_xml(shape)]))

    tc.assertEqual(1280, document["width"])
    tc.assertEqual(720, document["height"])
    tc.assertEqual({"width": 12192000, "height": 6858000}, document["slideSize"])
    element = document["slides"][0]["elements"][0]
    tc.assertEqual("shape", element["type"])
    tc.assertEqual(
        (96, 96, 192, 144),
        (element["left"], element["top"], element["width"], element["height"]),
    )
    tc.assertEqual("#FF000080", element["fill"])
    tc.assertTrue(element["fill"].endswith("80"))
    tc.assertEqual("M 0 0 L 192 0 L 192 144 L 0 144 Z", element["path"])
    tc.assertEqual([192, 144], element["viewBox"])
    tc.assertEqual([], document["warnings"])


def test_4_3_slide_uses_960_canvas() -> None:
    shape = rect_shape(2, cx=9144000, cy=6858000)
    document = convert_pptx(build_pptx([slide_xml(shape)], width=9144000, height=6858000))

    element = document["slides"][0]["elements"][0]
    tc.assertEqual((960, 720), (document["width"], document["height"]))
    tc.assertEqual((960, 720), (element["width"], element["height"]))


def test_gradient_fill_is_emitted_with_first_stop_as_fill() -> None:
    fill = (
        "<a:gradFill><a:gsLst>"
        '<a:gs pos="0"><a:srgbClr val="FF0000"/></a:gs>'
        '<a:gs pos="50000"><a:srgbClr val="0000FF"/></a:gs>'
        '</a:gsLst><a:lin ang="2700000"/></a:gradFill>'
    )
    document = convert_pptx(build_pptx([slide_xml(rect_shape(2, fill=fill))]))

    element = document["slides"][0]["elements"][0]
    tc.assertEqual("#FF0000", element["fill"])
    tc.assertEqual(
        {
            "type": "linear",
            "colors": [{"pos": 0.0, "color": "#FF0000"}, {"pos": 50.0, "color": "#0000FF"}],
            "rotate": 45.0,
        },
        element["gradient"],
    )


def test_unresolved_picture_is_dropped_with_one_warning() -> None:
    slide = slide_xml(rect_shape(2) + picture(3, rel_id="rId9"))

    document = convert_pptx(build_pptx([slide]))

    elements = document["slides"][0]["elements"]
    tc.assertEqual(["shape"], [element["type"] for element in elements])
    tc.assertEqual(1, len(document["warnings"]))
    warning = document["warnings"][0]
    tc.assertEqual(WARN_MEDIA_UNRESOLVED, warning["code"])
    tc.assertEqual(1, warning["count"])
    tc.assertIn("0_rId9", warning["message"])


def test_same_relationship_id_on_two_slides_keeps_both_media() -> None:
    slides = [slide_xml(picture(3, rel_id="rId2")), slide_xml(picture(3, rel_id="rId2"))]
    rels = [
        {"rId2": ("image", "../media/image1.png")},
        {"rId2": ("image", "../media/image2.png")},
    ]
    parts = {"ppt/media/image1.png": PNG_A, "ppt/media/image2.png": PNG_B}

    presentation = read_pptx(build_pptx(slides, rels, parts))
    tc.assertEqual({"0_rId2", "1_rId2"}, set(presentation.media))
    tc.assertEqual(PNG_A, presentation.media["0_rId2"].data)
    tc.assertEqual(PNG_B, presentation.media["1_rId2"].data)
    tc.assertEqual("image/png", presentation.media["1_rId2"].content_type)

    document = convert_pptx(build_pptx(slides, rels, parts))
    sources = [slide["elements"][0]["src"] for slide in document["slides"]]
    tc.assertEqual(["0_rId2", "1_rId2"], sources)
    tc.assertNotEqual(document["media"]["0_rId2"]["data"], document["media"]["1_rId2"]["data"])
    tc.assertEqual("image/png", document["media"]["0_rId2"]["contentType"])


def test_media_payloads_can_be_left_out() -> None:
    pptx = build_pptx(
        [slide_xml(picture(3))],
        [{"rId2": ("image", "../media/image1.png")}],
        {"ppt/media/image1.png": PNG_A},
    )
    document = convert_pptx(pptx, settings=Settings(include_media=False))

    tc.assertEqual({"0_rId2": {"contentType": "image/png"}}, document["media"])


def test_document_is_json_serializable() -> None:
    pptx = build_pptx(
        [slide_xml(rect_shape(2, text="Title") + picture(3))],
        [{"rId2": ("image", "../media/image1.png")}],
        {"ppt/media/image1.png": PNG_A},
    )
    document = convert_pptx(pptx)
    tc.assertEqual(document, json.loads(json.dumps(document)))


def test_placeholder_inherits_layout_position_and_text_style() -> None:
    layout_shape = (
        '<p:sp><p:nvSpPr><p:cNvPr id="2" name="Content"/><p:cNvSpPr/><p:nvPr><p:ph idx="1"/></p:nvPr></p:nvSpPr>'
        '<p:spPr><a:xfrm><a:off x="914400" y="914400"/><a:ext cx="1828800" cy="914400"/></a:xfrm></p:spPr>'
        '<p:txBody><a:bodyPr/><a:lstStyle><a:lvl1pPr><a:defRPr sz="2400">'
        '<a:solidFill><a:srgbClr val="112233"/></a:solidFill></a:defRPr></a:lvl1pPr></a:lstStyle>'
        "<a:p/></p:txBody></p:sp>"
    )
    slide_shape = (
        '<p:sp><p:nvSpPr><p:cNvPr id="5" name="Body"/><p:cNvSpPr/><p:nvPr><p:ph idx="1"/></p:nvPr></p:nvSpPr>'
        "<p:spPr/><p:txBody><a:bodyPr/><a:lstStyle/>"
        '<a:p><a:r><a:rPr lang="en-US"/><a:t>Hello &amp; bye</a:t></a:r></a:p></p:txBody></p:sp>'
    )
    pptx = build_pptx(
        [slide_xml(slide_shape)],
        [{"rId1": ("slideLayout", "../slideLayouts/slideLayout1.xml")}],
        {"ppt/slideLayouts/slideLayout1.xml": _layout(layout_shape)},
    )

    element = convert_pptx(pptx)["slides"][0]["elements"][0]

    tc.assertEqual("text", element["type"])
    tc.assertEqual(
        (96, 96, 192, 96),
        (element["left"], element["top"], element["width"], element["height"]),
    )
    tc.assertIn("Hello &amp; bye", element["content"])
    tc.assertIn("font-size: 32px", element["content"])
    tc.assertIn("color: #112233", element["content"])
    tc.assertEqual("#112233", element["defaultColor"])
    tc.assertEqual("Arial", element["defaultFontName"])


def test_bulleted_paragraphs_become_a_list() -> None:
    shape = rect_shape(2, text="ignored").replace(
        '<a:p><a:r><a:rPr lang="en-US"/><a:t xml:space="preserve">ignored</a:t></a:r></a:p>',
        '<a:p><a:pPr><a:buChar char="&#8226;"/></a:pPr><a:r><a:t>one</a:t></a:r></a:p>'
        '<a:p><a:pPr><a:buChar char="&#8226;"/></a:pPr><a:r><a:rPr b="1"/><a:t>two</a:t></a:r></a:p>'
        "<a:p><a:r><a:t>after</a:t></a:r></a:p>",
    )
    content = convert_pptx(build_pptx([slide_xml(shape)]))["slides"][0]["elements"][0]["content"]

    tc.assertEqual(1, content.count("<ul>"))
    tc.assertEqual(2, content.count("<li>"))
    tc.assertIn("<strong>two</strong>", content)
    tc.assertTrue(content.endswith('<p style="text-align: left;">after</p>'))


def test_connector_becomes_line() -> None:
    pptx = build_pptx([slide_xml(connector(4, x=914400, y=914400, cx=914400, cy=0))])
    element = convert_pptx(pptx)["slides"][0]["elements"][0]

    tc.assertEqual("line", element["type"])
    tc.assertEqual((96, 96), (element["left"], element["top"]))
    tc.assertEqual([0, 0], element["start"])
    tc.assertEqual([96, 0], element["end"])
    tc.assertEqual("#00FF00", element["color"])
    tc.assertEqual(2.67, element["width"])


def test_group_children_are_flattened_with_group_id() -> None:
    group = (
        '<p:grpSp><p:nvGrpSpPr><p:cNvPr id="20" name="Group"/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
        '<p:grpSpPr><a:xfrm><a:off x="0" y="0"/><a:ext cx="914400" cy="914400"/>'
        '<a:chOff x="0" y="0"/><a:chExt cx="914400" cy="914400"/></a:xfrm></p:grpSpPr>'
        + rect_shape(21)
        + rect_shape(22)
        + "</p:grpSp>"
    )
    elements = convert_pptx(build_pptx([slide_xml(rect_shape(2) + group)]))["slides"][0]["elements"]

    tc.assertEqual(["2", "21", "22"], [element["id"] for element in elements])
    tc.assertNotIn("groupId", elements[0])
    tc.assertEqual(["20", "20"], [element["groupId"] for element in elements[1:]])


def test_chart_is_converted_without_data() -> None:
    frame = (
        '<p:graphicFrame><p:nvGraphicFramePr><p:cNvPr id="40" name="Chart"/>'
        "<p:cNvGraphicFramePr/><p:nvPr/></p:nvGraphicFramePr>"
        '<p:xfrm><a:off x="0" y="0"/><a:ext cx="914400" cy="914400"/></p:xfrm>'
        '<a:graphic><a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/chart">'
        '<c:chart r:id="rId3"/></a:graphicData></a:graphic></p:graphicFrame>'
    )
    chart = (
        f"<c:chartSpace {NSMAP}><c:chart><c:plotArea><c:layout/><c:pieChart/>"
        "</c:plotArea></c:chart></c:chartSpace>"
    )
    pptx = build_pptx(
        [slide_xml(frame)],
        [{"rId3": ("chart", "../charts/chart1.xml")}],
        {"ppt/charts/chart1.xml": chart},
    )
    document = convert_pptx(pptx)

    element = document["slides"][0]["elements"][0]
    tc.assertEqual("chart", element["type"])
    tc.assertEqual("pie", element["chartType"])
    tc.assertEqual([], element["data"]["series"])
    tc.assertEqual("#4472C4", element["themeColors"][0])
    tc.assertIn(WARN_CHART_PARTIAL, _by_code(document))


def test_slide_background_and_notes() -> None:
    background = (
        '<p:bg><p:bgPr><a:solidFill><a:schemeClr val="accent1"/></a:solidFill>'
        "<a:effectLst/></p:bgPr></p:bg>"
    )
    notes = (
        f"<p:notes {NSMAP}><p:cSld><p:spTree>{EMPTY_TREE}"
        '<p:sp><p:nvSpPr><p:cNvPr id="2" name="Slide Image"/><p:cNvSpPr/>'
        '<p:nvPr><p:ph type="sldImg"/></p:nvPr></p:nvSpPr><p:spPr/></p:sp>'
        '<p:sp><p:nvSpPr><p:cNvPr id="3" name="Notes"/><p:cNvSpPr/>'
        '<p:nvPr><p:ph type="body" idx="1"/></p:nvPr></p:nvSpPr><p:spPr/>'
        "<p:txBody><a:bodyPr/><a:p><a:r><a:t>First</a:t></a:r></a:p><a:p/><a:p/><a:p/>"
        "<a:p><a:r><a:t>Second</a:t></a:r></a:p></p:txBody></p:sp>"
        "</p:spTree></p:cSld></p:notes>"
    )
    pptx = build_pptx(
        [slide_xml(rect_shape(2), extra=background)],
        [{"rId5": ("notesSlide", "../notesSlides/notesSlide1.xml")}],
        {"ppt/notesSlides/notesSlide1.xml": notes},
    )
    slide = convert_pptx(pptx)["slides"][0]

    tc.assertEqual({"type": "solid", "color": "#4472C4"}, slide["background"])
    tc.assertEqual("First\n\nSecond", slide["remark"])
    tc.assertEqual("slide1", slide["id"])


def test_layout_background_image_uses_scoped_media_key() -> None:
    background = (
        '<p:bg><p:bgPr><a:blipFill><a:blip r:embed="rId2"/><a:stretch><a:fillRect/></a:stretch>'
        "</a:blipFill><a:effectLst/></p:bgPr></p:bg>"
    )
    pptx = build_pptx(
        [slide_xml(rect_shape(2))],
        [{"rId1": ("slideLayout", "../slideLayouts/slideLayout1.xml")}],
        {
            "ppt/slideLayouts/slideLayout1.xml": _layout(background=background),
            "ppt/slideLayouts/_rels/slideLayout1.xml.rels": rels_xml(
                {"rId2": ("image", "../media/bg.png")}
            ),
            "ppt/media/bg.png": PNG_A,
        },
    )
    document = convert_pptx(pptx)

    tc.assertEqual(
        {"type": "image", "image": {"src": "0_layout:rId2", "size": "cover"}},
        document["slides"][0]["background"],
    )
    tc.assertIn("0_layout:rId2", document["media"])


def test_failing_group_child_keeps_its_siblings() -> None:
    ctx = ConversionContext(scale=ScaleFactors.for_slide_size(12192000, 6858000))
    box = Transform(width=914400, height=914400)
    group = GroupElement(
        id="10",
        children=[
            ShapeElement(id="11", transform=box),
            ShapeElement(id="12", transform=box),
            ShapeElement(id="13", transform=box),
        ],
    )

    def convert(element, context):
        if element.id == "12":
            raise ValueError("broken child")
        return convert_element(element, context)

    items = convert_group(group, ctx, convert)

    tc.assertEqual(["11", "13"], [item["id"] for item in items])
    tc.assertEqual(["10", "10"], [item["groupId"] for item in items])
    tc.assertEqual(1, ctx.warnings.count(WARN_ELEMENT_FAILED))


def test_fully_transparent_shape_fill_stays_transparent() -> None:
    fill = '<a:solidFill><a:srgbClr val="FF0000"><a:alpha val="0"/></a:srgbClr></a:solidFill>'
    shape = rect_shape(2, fill=fill).replace(
        "</p:spPr>",
        '</p:spPr><p:style><a:fillRef idx="1"><a:srgbClr val="ED7D31"/></a:fillRef></p:style>',
    )
    element = convert_pptx(build_pptx([slide_xml(shape)]))["slides"][0]["elements"][0]

    tc.assertEqual("transparent", element["fill"])


def test_fully_transparent_slide_background_hides_layout_background() -> None:
    slide_background = (
        '<p:bg><p:bgPr><a:solidFill><a:srgbClr val="FFFFFF"><a:alpha val="0"/></a:srgbClr>'
        "</a:solidFill><a:effectLst/></p:bgPr></p:bg>"
    )
    layout_background = (
        '<p:bg><p:bgPr><a:solidFill><a:srgbClr val="112233"/></a:solidFill>'
        "<a:effectLst/></p:bgPr></p:bg>"
    )
    pptx = build_pptx(
        [slide_xml(rect_shape(2), extra=slide_background), slide_xml(rect_shape(2))],
        [
            {"rId1": ("slideLayout", "../slideLayouts/slideLayout1.xml")},
            {"rId1": ("slideLayout", "../slideLayouts/slideLayout1.xml")},
        ],
        {"ppt/slideLayouts/slideLayout1.xml": _layout(background=layout_background)},
    )
    slides = convert_pptx(pptx)["slides"]

    tc.assertNotIn("background", slides[0])
    tc.assertEqual({"type": "solid", "color": "#112233"}, slides[1]["background"])


def test_broken_slide_is_kept_empty_and_reported() -> None:
    pptx = build_pptx([slide_xml(rect_shape(2)), "<p:sld><p:cSld>", slide_xml(rect_shape(7))])
    document = convert_pptx(pptx)

    tc.assertEqual(["slide1", "slide2", "slide3"], [s["id"] for s in document["slides"]])
    tc.assertEqual([], document["slides"][1]["elements"])
    tc.assertEqual("7", document["slides"][2]["elements"][0]["id"])
    tc.assertEqual(1, _by_code(document)[WARN_SLIDE_FAILED]["count"])


def test_slides_follow_presentation_order() -> None:
    slides = [slide_xml(rect_shape(shape_id)) for shape_id in (11, 12, 13)]
    document = convert_pptx(build_pptx(slides))
    ids = [slide["elements"][0]["id"] for slide in document["slides"]]
    tc.assertEqual(["11", "12", "13"], ids)


def _copy_zip(source: io.BytesIO, skip: tuple[str, ...] = (), extra: dict | None = None) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(source) as zin, zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zout:
        for name in zin.namelist():
            if name not in skip:
                zout.writestr(name, zin.read(name))
        for name, data in (extra or {}).items():
            zout.writestr(name, data)
    buffer.seek(0)
    return buffer


def test_not_a_zip_is_invalid() -> None:
    with pytest.raises(PackageInvalidError) as excinfo:
        convert_pptx(io.BytesIO(b"this is not a pptx"))
    tc.assertEqual("PACKAGE_INVALID", excinfo.value.code)


def test_zip_without_presentation_part_is_invalid() -> None:
    pptx = _copy_zip(build_pptx([slide_xml("")]), skip=("ppt/presentation.xml",))
    with pytest.raises(PackageInvalidError):
        convert_pptx(pptx)


def test_encrypted_package_entry_is_rejected() -> None:
    pptx = _copy_zip(build_pptx([slide_xml("")]), extra={"EncryptedPackage": b"\x00" * 64})
    with pytest.raises(PackageEncryptedError) as excinfo:
        convert_pptx(pptx)
    tc.assertEqual("PACKAGE_ENCRYPTED", excinfo.value.code)


def test_missing_slide_part_is_corrupted() -> None:
    pptx = _copy_zip(build_pptx([slide_xml("")]), skip=("ppt/slides/slide1.xml",))
    with pytest.raises(PackageCorruptedError):
        convert_pptx(pptx)


def test_malformed_presentation_part_is_corrupted() -> None:
    pptx = _copy_zip(
        build_pptx([slide_xml(rect_shape(2))]),
        skip=("ppt/presentation.xml",),
        extra={"ppt/presentation.xml": "<p:presentation><p:sldIdLst>"},
    )
    with pytest.raises(PackageCorruptedError) as excinfo:
        convert_pptx(pptx)
    tc.assertEqual("PACKAGE_CORRUPTED", excinfo.value.code)
    tc.assertIn("ppt/presentation.xml", str(excinfo.value))


def test_missing_theme_still_converts() -> None:
    shape = rect_shape(2, fill='<a:solidFill><a:schemeClr val="accent1"/></a:solidFill>')
    document = convert_pptx(build_pptx([slide_xml(shape)], with_theme=False))

    tc.assertEqual("transparent", document["slides"][0]["elements"][0]["fill"])
    tc.assertEqual(["#000000"], document["theme"]["themeColors"])
