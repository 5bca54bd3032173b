from __future__ import annotations

from pptx2pptist.conversion.context import ConversionContext
from pptx2pptist.conversion.converters.shape import add_flips
from pptx2pptist.data_types import AudioElement, ImageElement, VideoElement
from pptx2pptist.diagnostics import WARN_MEDIA_UNRESOLVED

DEFAULT_AUDIO_COLOR = "#1E1E1E"


def _resolvable(key: str, ctx: ConversionContext) -> bool:
    if ctx.has_media(key):
        return True
    ctx.warn(
        WARN_MEDIA_UNRESOLVED,
        f"Failed to resolve media reference {key} on slide {ctx.slide_index}",
    )
    return False


def convert_image(element: ImageElement, ctx: ConversionContext) -> dict | None:
    if not _resolvable(element.media_key, ctx):
        return None
    result = {
        "id": element.id,
        "type": "image",
        **ctx.box(element.transform),
        "src": element.media_key,
        "fixedRatio": True,
    }
    add_flips(result, element)
    return result


def convert_video(element: VideoElement, ctx: ConversionContext) -> dict | None:
    if not _resolvable(element.media_key, ctx):
        return None
    result = {
        "id": element.id,
        "type": "video",
        **ctx.box(element.transform),
        "src": element.media_key,
        "autoplay": False,
    }
    if ctx.has_media(element.poster_key):
        result["poster"] = element.poster_key
    return result


def convert_audio(element: AudioElement, ctx: ConversionContext) -> dict | None:
    if not _resolvable(element.media_key, ctx):
        return None
    return {
        "id": element.id,
        "type": "audio",
        **ctx.box(element.transform),
        "src": element.media_key,
        "autoplay": False,
        "loop": False,
        "color": ctx.theme_colors[0] if ctx.theme_colors else DEFAULT_AUDIO_COLOR,
        "fixedRatio": True,
    }
