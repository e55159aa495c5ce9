from .decoder import decode_stl_file, decode_stl_stream, iter_cues
from .models import Alignment, Color, Cue, GSISummary, Line, Packet, StreamInfo, Timecode
from .STLDecoder import STLDecoder
from .STLDemuxer import STLDemuxer, probe, timecode_to_ms
from .STLValidationWarning import STLValidationWarning

__all__ = [
    "Alignment",
    "Color",
    "Cue",
    "GSISummary",
    "Line",
    "Packet",
    "StreamInfo",
    "Timecode",
    "STLDecoder",
    "STLDemuxer",
    "STLValidationWarning",
    "decode_stl_file",
    "decode_stl_stream",
    "iter_cues",
    "probe",
    "timecode_to_ms",
]
