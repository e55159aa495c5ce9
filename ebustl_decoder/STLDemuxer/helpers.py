"""
EBU STL Helpers - STLDemuxer
- Format probing and timecode arithmetic for the block stream reader.
"""

from typing import Tuple

from ebustl_decoder.models import DEFAULT_FRAME_RATE, Timecode


PROBE_SCORE_MAX = 100

# Source timecodes carry a fixed 10 hour offset
TIMECODE_HOUR_OFFSET = 10

STL_EXTENSIONS: Tuple[str, ...] = ("stl",)


def probe(data: bytes) -> int:
    """
    Score how likely ``data`` (the first bytes of a file) is EBU STL.

    The Disk Format Code at offset 3 starts with ``STL``.
    """
    if not data or len(data) < 6:
        return 0
    if data[3:6] == b"STL":
        return PROBE_SCORE_MAX
    return 0


def timecode_to_ms(timecode: Timecode, frame_rate: int = DEFAULT_FRAME_RATE) -> int:
    """
    Convert a TTI timecode to milliseconds.

    Out of range fields are not rejected, they just yield an out of range
    (possibly negative) timestamp.
    """
    if frame_rate <= 0:
        raise ValueError(f"Frame rate must be positive, got {frame_rate}")

    seconds = (
        (timecode.hours - TIMECODE_HOUR_OFFSET) * 3600
        + timecode.minutes * 60
        + timecode.seconds
    )
    return seconds * 1000 + timecode.frames * (1000 // frame_rate)


def timecode_bytes_to_ms(raw: bytes, frame_rate: int = DEFAULT_FRAME_RATE) -> int:
    """Convert 4 raw HH MM SS FF bytes to milliseconds."""
    return timecode_to_ms(Timecode.from_bytes(raw), frame_rate)


def format_timestamp_ms(ms: int) -> str:
    """
    Format milliseconds as ASS H:MM:SS.cc, clamping negatives to zero.
    """
    if ms < 0:
        ms = 0

    cs = ms // 10
    s, cs = divmod(cs, 100)
    h, rem = divmod(s, 3600)
    m, s = divmod(rem, 60)
    return f"{h:d}:{m:02d}:{s:02d}.{cs:02d}"
