import io
from typing import Any, BinaryIO, Dict, Iterator, Optional

from ebustl_decoder.models import DEFAULT_FRAME_RATE, Cue
from ebustl_decoder.STLDecoder.STLDecoder import STLDecoder
from ebustl_decoder.STLDemuxer.STLDemuxer import STLDemuxer


def iter_cues(
    demuxer: STLDemuxer, decoder: STLDecoder
) -> Iterator[Cue]:
    """Pull packets from ``demuxer`` and yield decoded cues in file order."""
    if demuxer.stream_info is None:
        demuxer.read_header()
    for packet in demuxer:
        yield from decoder.decode(packet)


def decode_stl_stream(
    stream: BinaryIO,
    frame_rate: int = DEFAULT_FRAME_RATE,
    detect_frame_rate: bool = False,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Demux and decode a whole STL stream.

    Returns a payload with the cues, the frame rate used, the GSI summary
    and the ASS script header.
    """
    demuxer = STLDemuxer(stream, frame_rate=frame_rate, detect_frame_rate=detect_frame_rate)
    stream_info = demuxer.read_header()
    decoder = STLDecoder(
        time_base=stream_info.time_base,
        width=width or stream_info.width,
        height=height or stream_info.height,
    )
    cues = list(iter_cues(demuxer, decoder))

    return {
        "cues": cues,
        "fps": demuxer.frame_rate,
        "gsi": demuxer.gsi,
        "subtitle_header": decoder.subtitle_header,
    }


def decode_stl_file(raw: bytes, frame_rate: int = DEFAULT_FRAME_RATE, **kwargs) -> Dict[str, Any]:
    """
    Decode STL file bytes, see ``decode_stl_stream``.
    """
    if not raw:
        raise ValueError("STL raw data in bytes is required")

    return decode_stl_stream(io.BytesIO(raw), frame_rate=frame_rate, **kwargs)
