from __future__ import annotations

from pptx2pptist.data_types import AudioElement, ImageElement, VideoElement
from pptx2pptist.exceptions import ElementParseError
from pptx2pptist.ooxml.xml_node import XmlNode
from pptx2pptist.parsing.context import ParsingContext
from pptx2pptist.parsing.elements.common import element_identity, resolve_transform


def _media_link(nv_pr: XmlNode | None, tag: str) -> str | None:
    if nv_pr is None:
        return None
    node = nv_pr.child(tag)
    if node is None:
        return None
    return node.attr("r:link") or node.attr("r:embed")


def _embedded_media(nv_pr: XmlNode | None) -> str | None:
    """PowerPoint 2010 ``p14:media`` extension carrying the embedded media part."""
    if nv_pr is None:
        return None
    ext_lst = nv_pr.child("p:extLst")
    if ext_lst is None:
        return None
    for ext in ext_lst.children("p:ext"):
        media = ext.child("p14:media")
        if media is not None and media.attr("r:embed"):
            return media.attr("r:embed")
    return None


def parse_picture(
    node: XmlNode, ctx: ParsingContext
) -> ImageElement | VideoElement | AudioElement:
    """
    Parse a ``p:pic``: video and audio links take precedence over the image,
    whose blip then only serves as the poster frame.
    """
    element_id, name = element_identity(node)
    sp_pr = node.child("p:spPr")
    transform = resolve_transform(
        node, sp_pr.child("a:xfrm") if sp_pr is not None else None, ctx, "picture"
    )

    blip = node.find("p:blipFill", "a:blip")
    rel_id = blip.attr("r:embed") if blip is not None else None

    nv_pr = node.find("p:nvPicPr", "p:nvPr")
    video_link = _media_link(nv_pr, "a:videoFile")
    audio_link = _media_link(nv_pr, "a:audioFile")
    embedded = _embedded_media(nv_pr)

    if video_link or (embedded and not audio_link):
        media_rel = video_link or embedded
        return VideoElement(
            id=element_id,
            name=name,
            transform=transform,
            rel_id=media_rel,
            media_key=ctx.media_key(media_rel),
            poster_key=ctx.media_key(rel_id) if rel_id else None,
        )
    if audio_link:
        return AudioElement(
            id=element_id,
            name=name,
            transform=transform,
            rel_id=audio_link,
            media_key=ctx.media_key(audio_link),
        )

    if not rel_id:
        raise ElementParseError(
            "picture", "Picture has no embedded image reference", element_id=element_id
        )
    return ImageElement(
        id=element_id,
        name=name,
        transform=transform,
        rel_id=rel_id,
        media_key=ctx.media_key(rel_id),
    )
