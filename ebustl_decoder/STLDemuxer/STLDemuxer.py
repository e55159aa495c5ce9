"""
STLDemuxer - sequential EBU STL (.stl) block stream reader.

Supports EBU TECH 3264‑E (EBU STL file) format.

The demuxer skips the GSI header (first 1024 bytes) and then hands out one
packet per 128‑byte TTI block, in file order:

    Packet(
        data=b"...",        # the raw 128 byte block
        pts=1000,           # milliseconds, from the In-cue timecode
        duration=2000,      # milliseconds, Out-cue minus In-cue
        stream_index=0,
    )

A short read at the end of the file is the end of the stream, not an error.
"""

from __future__ import annotations

import enum
import logging
import warnings
from typing import BinaryIO, Iterator, Optional

from ebustl_decoder.models import (
    DEFAULT_FRAME_RATE,
    DEFAULT_HEIGHT,
    DEFAULT_TIME_BASE,
    DEFAULT_WIDTH,
    EBU_HEADER_SIZE,
    GSISummary,
    TTI_BLOCK_SIZE,
    Packet,
    StreamInfo,
)
from ebustl_decoder.STLDemuxer.helpers import probe, timecode_bytes_to_ms
from ebustl_decoder.STLDemuxer.parsers.gsi_parser import parse_gsi
from ebustl_decoder.STLValidationWarning import STLValidationWarning

logger = logging.getLogger("ebustl_decoder")

# Offsets of the In-cue and Out-cue timecodes inside a TTI block
TCI_OFFSET = 5
TCO_OFFSET = 9


class DemuxerState(enum.Enum):
    NEW = "new"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class STLDemuxer:
    """
    Reads TTI blocks from a seekable binary stream.

    Args:
        stream: Seekable binary file object positioned anywhere.
        frame_rate: Frame rate used to convert timecode frames to
                    milliseconds.
        detect_frame_rate: Derive the frame rate from the GSI Disk Format
                           Code instead of using ``frame_rate``.
    """

    def __init__(
        self,
        stream: BinaryIO,
        frame_rate: int = DEFAULT_FRAME_RATE,
        detect_frame_rate: bool = False,
    ):
        if frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {frame_rate}")

        self._stream = stream
        self._frame_rate = frame_rate
        self._detect_frame_rate = detect_frame_rate
        self._state = DemuxerState.NEW
        self._gsi: Optional[GSISummary] = None
        self._stream_info: Optional[StreamInfo] = None

    @property
    def state(self) -> DemuxerState:
        return self._state

    @property
    def frame_rate(self) -> int:
        return self._frame_rate

    @property
    def gsi(self) -> Optional[GSISummary]:
        return self._gsi

    @property
    def stream_info(self) -> Optional[StreamInfo]:
        return self._stream_info

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def read_header(self) -> StreamInfo:
        """
        Skip the GSI header and describe the subtitle stream.

        The header is summarised but not validated; a missing ``STL``
        signature only produces a warning.
        """
        self._stream.seek(0)
        header = self._stream.read(EBU_HEADER_SIZE)

        if probe(header) == 0:
            warnings.warn(
                "STL header has no 'STL' Disk Format Code at offset 3; "
                "reading TTI blocks anyway.",
                STLValidationWarning,
                stacklevel=2,
            )

        if len(header) == EBU_HEADER_SIZE:
            self._gsi = parse_gsi(header)
            if self._detect_frame_rate:
                self._frame_rate = self._gsi.frame_rate
        else:
            self._gsi = GSISummary()

        self._stream.seek(EBU_HEADER_SIZE)
        self._state = DemuxerState.POSITIONED

        self._stream_info = StreamInfo(
            width=DEFAULT_WIDTH,
            height=DEFAULT_HEIGHT,
            time_base=DEFAULT_TIME_BASE,
            frame_rate=self._frame_rate,
        )
        logger.debug(
            "STL stream opened: %s at %d fps", self._gsi.disk_format_code or "?", self._frame_rate
        )
        return self._stream_info

    def read_packet(self) -> Optional[Packet]:
        """
        Read the next TTI block.

        Returns None once the stream is exhausted.
        """
        if self._state is DemuxerState.NEW:
            self.read_header()
        if self._state is DemuxerState.EXHAUSTED:
            return None

        position = self._stream.tell()
        data = self._stream.read(TTI_BLOCK_SIZE)
        if len(data) < TTI_BLOCK_SIZE:
            # Trailing partial block or end of file
            self._state = DemuxerState.EXHAUSTED
            logger.debug("End of STL stream at offset %d", position)
            return None

        pts = timecode_bytes_to_ms(data[TCI_OFFSET : TCI_OFFSET + 4], self._frame_rate)
        pts_end = timecode_bytes_to_ms(data[TCO_OFFSET : TCO_OFFSET + 4], self._frame_rate)

        return Packet(
            data=data,
            pts=pts,
            duration=pts_end - pts,
            stream_index=0,
            position=position,
        )

    def __iter__(self) -> Iterator[Packet]:
        while True:
            packet = self.read_packet()
            if packet is None:
                return
            yield packet
