"""
ASS script output for decoded STL cues.

The decoder exposes the script header as ``subtitle_header`` and each cue's
event payload; ``write_ass`` stitches both into a complete ``.ass`` file.
"""

from typing import Iterable, TextIO

from ebustl_decoder.models import DEFAULT_HEIGHT, DEFAULT_WIDTH, Cue
from ebustl_decoder.STLDemuxer.helpers import format_timestamp_ms

DEFAULT_STYLE = "Default"

EVENT_FIELDS = "Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def build_subtitle_header(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> str:
    """Script Info, one default style and the Events format line."""
    return (
        "[Script Info]\n"
        "; Script generated by ebustl_decoder\n"
        "ScriptType: v4.00+\n"
        f"PlayResX: {width}\n"
        f"PlayResY: {height}\n"
        "ScaledBorderAndShadow: yes\n"
        "YCbCr Matrix: None\n"
        "\n"
        "[V4+ Styles]\n"
        "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
        "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, "
        "ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, "
        "Alignment, MarginL, MarginR, MarginV, Encoding\n"
        f"Style: {DEFAULT_STYLE},Arial,30,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,"
        "0,0,0,0,100,100,0,0,1,1,1,2,10,10,10,1\n"
        "\n"
        "[Events]\n"
        f"Format: {EVENT_FIELDS}\n"
    )


def format_event_payload(cue: Cue, layer: int = 0) -> str:
    """
    Event body as stored in a subtitle rectangle:
    ReadOrder, Layer, Style, Name, MarginL, MarginR, MarginV, Effect, Text
    """
    return f"{cue.read_order},{layer},{DEFAULT_STYLE},,0,0,0,,{cue.text}"


def format_dialogue(cue: Cue, layer: int = 0) -> str:
    start = format_timestamp_ms(cue.start_pts)
    end = format_timestamp_ms(cue.end_pts)
    return f"Dialogue: {layer},{start},{end},{DEFAULT_STYLE},,0,0,0,,{cue.text}"


def write_ass(cues: Iterable[Cue], subtitle_header: str, out: TextIO) -> int:
    """Write a complete ASS script, returning the number of events written."""
    count = 0
    out.write(subtitle_header)
    for cue in cues:
        out.write(format_dialogue(cue) + "\n")
        count += 1
    return count
