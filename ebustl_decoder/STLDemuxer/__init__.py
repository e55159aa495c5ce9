from .STLDemuxer import STLDemuxer, DemuxerState
from .helpers import probe, timecode_to_ms

__all__ = ["STLDemuxer", "DemuxerState", "probe", "timecode_to_ms"]
