import types
import unittest

from pptx2pptist.diagnostics import WarningCollector
from pptx2pptist.ooxml.xml_node import parse_xml
from pptx2pptist.style.text_style import (
    TextStyleScope,
    ThemeFonts,
    resolve_flag,
    resolve_font,
    resolve_font_size,
    resolve_text_color,
    resolve_underline,
)
from pptx2pptist.tests.pptx_factory import NSMAP, THEME_XML

tc = unittest.TestCase()

CTX = types.SimpleNamespace(
    theme=parse_xml(THEME_XML), slide=None, layout=None, master=None, warnings=WarningCollector()
)


def _solid(value: str) -> str:
    return f'<a:solidFill><a:srgbClr val="{value}"/></a:solidFill>'


def _body(run_props: str = "", paragraph_props: str = "", list_style: str = ""):
    return parse_xml(
        f"<p:txBody {NSMAP}><a:bodyPr/><a:lstStyle>{list_style}</a:lstStyle>"
        f"<a:p><a:pPr>{paragraph_props}</a:pPr><a:r><a:rPr>{run_props}</a:rPr>"
        "<a:t>x</a:t></a:r></a:p></p:txBody>"
    )


def _scope(body, level: int = 0, inherited=()) -> TextStyleScope:
    paragraph = body.child("a:p")
    return TextStyleScope(
        run_props=paragraph.find("a:r", "a:rPr"),
        paragraph_props=paragraph.child("a:pPr"),
        list_style=body.child("a:lstStyle"),
        level=level,
        inherited_list_styles=inherited,
    )


def test_level_tag_is_one_based_and_clamped() -> None:
    tc.assertEqual("a:lvl1pPr", TextStyleScope().level_tag)
    tc.assertEqual("a:lvl3pPr", TextStyleScope(level=2).level_tag)
    tc.assertEqual("a:lvl9pPr", TextStyleScope(level=20).level_tag)


def test_run_color_beats_every_other_level() -> None:
    body = _body(
        run_props=_solid("FF0000"),
        paragraph_props=f"<a:defRPr>{_solid('00FF00')}</a:defRPr>",
        list_style=f"<a:lvl1pPr><a:defRPr>{_solid('0000FF')}</a:defRPr></a:lvl1pPr>",
    )
    tc.assertEqual("#FF0000", resolve_text_color(_scope(body), CTX))


def test_paragraph_default_beats_list_style() -> None:
    body = _body(
        paragraph_props=f"<a:defRPr>{_solid('00FF00')}</a:defRPr>",
        list_style=f"<a:lvl1pPr><a:defRPr>{_solid('0000FF')}</a:defRPr></a:lvl1pPr>",
    )
    tc.assertEqual("#00FF00", resolve_text_color(_scope(body), CTX))


def test_list_style_uses_paragraph_level() -> None:
    body = _body(
        list_style=(
            f"<a:lvl1pPr><a:defRPr>{_solid('0000FF')}</a:defRPr></a:lvl1pPr>"
            f"<a:lvl2pPr><a:defRPr>{_solid('123456')}</a:defRPr></a:lvl2pPr>"
        ),
    )
    tc.assertEqual("#0000FF", resolve_text_color(_scope(body, level=0), CTX))
    tc.assertEqual("#123456", resolve_text_color(_scope(body, level=1), CTX))


def test_inherited_list_styles_come_last_in_order() -> None:
    layout = parse_xml(
        f'<a:lstStyle {NSMAP}><a:lvl1pPr><a:defRPr sz="2400">{_solid("ABCDEF")}</a:defRPr></a:lvl1pPr></a:lstStyle>'
    )
    master = parse_xml(
        f'<p:bodyStyle {NSMAP}><a:lvl1pPr><a:defRPr sz="3200" b="1"/></a:lvl1pPr></p:bodyStyle>'
    )
    scope = _scope(_body(), inherited=(layout, master))

    tc.assertEqual("#ABCDEF", resolve_text_color(scope, CTX))
    tc.assertEqual(24.0, resolve_font_size(scope))
    tc.assertTrue(resolve_flag(scope, "b"))


def test_nothing_populated_resolves_to_none() -> None:
    scope = _scope(_body())
    tc.assertIsNone(resolve_text_color(scope, CTX))
    tc.assertIsNone(resolve_font_size(scope))
    tc.assertIsNone(resolve_font(scope, ThemeFonts()))
    tc.assertFalse(resolve_flag(scope, "i"))
    tc.assertFalse(resolve_underline(scope))


def test_explicit_false_flag_stops_the_chain() -> None:
    scope = TextStyleScope(
        run_props=parse_xml(f'<a:rPr {NSMAP} b="0"/>'),
        paragraph_props=parse_xml(f'<a:pPr {NSMAP}><a:defRPr b="1"/></a:pPr>'),
    )
    tc.assertFalse(resolve_flag(scope, "b"))


def test_underline_none_is_not_underlined() -> None:
    tc.assertFalse(resolve_underline(TextStyleScope(run_props=parse_xml(f'<a:rPr {NSMAP} u="none"/>'))))
    tc.assertTrue(resolve_underline(TextStyleScope(run_props=parse_xml(f'<a:rPr {NSMAP} u="sng"/>'))))


def test_theme_font_references() -> None:
    fonts = ThemeFonts.from_theme(parse_xml(THEME_XML))
    tc.assertEqual(ThemeFonts(major="Calibri Light", minor="Calibri"), fonts)

    scope = _scope(_body(run_props='<a:latin typeface="+mj-lt"/>'))
    tc.assertEqual("Calibri Light", resolve_font(scope, fonts))
    scope = _scope(_body(run_props='<a:latin typeface="Georgia"/>'))
    tc.assertEqual("Georgia", resolve_font(scope, fonts))
