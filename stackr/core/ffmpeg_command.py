# stackr/core/ffmpeg_command.py
"""
Compile a layout into an ffmpeg command.

Input numbering: one input per visible video layer in ascending zIndex order,
then the template image (if any). The filter graph starts from a solid black
[base], overlays each scaled+padded video in turn, then chains one drawtext per
text layer, and finally puts the template on top.

Labels:
  [v{i}]            scaled/padded video i
  [tmp{i}]          running result after overlaying video i (not the last)
  [videos]          after the last video, when text follows
  [txt{i}]          running result after text i (not the last)
  [final]           layout without template
  [output]          layout with template

The output is a pure function of its arguments.
"""
from __future__ import annotations
import re
from typing import Callable, List, Optional, Sequence

from app_config import FONT_DIR
from stackr.core.logging import get_logger
from .layers import CanvasSize, Layer, TextLayer, VideoLayer
from .snapping import round_half_up

log = get_logger(__name__)

EMPTY_LAYOUT_MESSAGE = "# Add at least one visible layer first"
TEMPLATE_INPUT = "template.png"
OUTPUT_FILE = "output.mp4"
ENCODER_OPTIONS = "-c:v libx264 -pix_fmt yuv420p -crf 18 -preset medium"

# family name -> font file path
FontFileResolver = Callable[[str], str]


def default_font_file(family: str) -> str:
    # Matches the macOS system font layout; other platforms need their own resolver
    return f"{FONT_DIR}/{family}.ttf"


def input_filename(layer: VideoLayer) -> str:
    return re.sub(r"\s+", "_", layer.name.lower()) + ".mp4"


def escape_drawtext(text: str) -> str:
    return text.replace("'", "\\'").replace(":", "\\:")


def ffmpeg_color(hex_color: str) -> str:
    return hex_color.replace("#", "0x", 1)


def font_variant(layer: TextLayer) -> Optional[str]:
    if layer.bold and layer.italic:
        return f"{layer.font_family} Bold Italic"
    if layer.bold:
        return f"{layer.font_family} Bold"
    if layer.italic:
        return f"{layer.font_family} Italic"
    return None


def _px(v: float) -> int:
    return round_half_up(v)


def _drawtext(layer: TextLayer, src: str, dst: str, font_file: FontFileResolver) -> str:
    parts = [
        f"text='{escape_drawtext(layer.text)}'",
        f"fontfile='{font_file(layer.font_family)}'",
        f"fontsize={_px(layer.font_size)}",
        f"fontcolor={ffmpeg_color(layer.color)}",
        f"x={_px(layer.x)}:y={_px(layer.y)}",
    ]
    variant = font_variant(layer)
    if variant:
        parts.append(f"font='{variant}'")
    return f"    [{src}]drawtext={':'.join(parts)}[{dst}];\n"


def compile_command(layers: Sequence[Layer], canvas: CanvasSize, template_present: bool,
                    font_file: FontFileResolver = default_font_file) -> str:
    visible = sorted((l for l in layers if l.visible), key=lambda l: l.z_index)
    if not visible:
        return EMPTY_LAYOUT_MESSAGE

    videos: List[VideoLayer] = [l for l in visible if isinstance(l, VideoLayer)]
    texts: List[TextLayer] = [l for l in visible if isinstance(l, TextLayer)]

    out = ["ffmpeg \\\n"]
    for layer in videos:
        out.append(f'  -i "{input_filename(layer)}" \\\n')
    if template_present:
        out.append(f'  -i "{TEMPLATE_INPUT}" \\\n')

    out.append('  -filter_complex "\n')
    out.append(f"    color=size={_px(canvas.width)}x{_px(canvas.height)}:color=black:d=1[base];\n\n")

    for idx, layer in enumerate(videos):
        w, h = _px(layer.width), _px(layer.height)
        out.append(f"    [{idx}:v]scale={w}:{h}:force_original_aspect_ratio=decrease,\n")
        out.append(f"    pad={w}:{h}:(ow-iw)/2:(oh-ih)/2[v{idx}];\n\n")

    # With no text to follow, the last overlay writes [final] directly
    last_video_label = "videos" if texts else "final"
    current = "base"
    for idx, layer in enumerate(videos):
        nxt = last_video_label if idx == len(videos) - 1 else f"tmp{idx}"
        out.append(f"    [{current}][v{idx}]overlay={_px(layer.x)}:{_px(layer.y)}[{nxt}];\n")
        current = nxt

    for idx, layer in enumerate(texts):
        nxt = "final" if idx == len(texts) - 1 else f"txt{idx}"
        out.append(_drawtext(layer, current, nxt, font_file))
        current = nxt

    if template_present:
        out.append(f"\n    [{current}][{len(videos)}:v]overlay=0:0[output]\n")
        current = "output"

    out.append('  " \\\n')
    out.append(f'  -map "[{current}]" \\\n')
    out.append(f"  {ENCODER_OPTIONS} \\\n")
    out.append("  -shortest \\\n")
    out.append(f'  "{OUTPUT_FILE}"')

    log.info("Compiled command: %d video, %d text, template=%s", len(videos), len(texts), template_present)
    return "".join(out)
