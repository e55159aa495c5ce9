"""
STLDecoder - turns TTI block packets into styled ASS cues.

For every 128‑byte block in a packet the decoder:
- splits the text field into lines with per-line colors
- resolves the screen alignment from the JC and VP bytes
- assembles ASS markup, e.g.

    {\\an2\\bord3}{\\c&H00FF00&}{\\3c&H000000&}RED\\N{\\c&HFFFFFF&}{\\3c&H000000&}BLUE

Blocks without any visible character produce no cue.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import List, Optional, Union

from ebustl_decoder.models import (
    DEFAULT_HEIGHT,
    DEFAULT_TIME_BASE,
    DEFAULT_WIDTH,
    TTI_BLOCK_SIZE,
    Cue,
    Packet,
)
from ebustl_decoder.STLDecoder.ass_writer import build_subtitle_header, format_event_payload
from ebustl_decoder.STLDecoder.helpers import build_cue_markup, resolve_alignment
from ebustl_decoder.STLDecoder.parsers.tti_block_parser import parse_tti_block

logger = logging.getLogger("ebustl_decoder")

# Offsets of the layout bytes inside a TTI block
VP_OFFSET = 13
JC_OFFSET = 14

PACKET_TIME_BASE = Fraction(1, 1000)


def rescale(value: int, src: Fraction, dst: Fraction) -> int:
    """
    Convert ``value`` ticks of ``src`` into ticks of ``dst``, rounding to
    nearest with halves away from zero.
    """
    exact = Fraction(value) * src / dst
    whole = exact.numerator // exact.denominator
    remainder = exact - whole
    if exact >= 0:
        return whole + 1 if remainder >= Fraction(1, 2) else whole
    return whole + 1 if remainder > Fraction(1, 2) else whole


class STLDecoder:
    """
    Decoding session for EBU STL subtitle packets.

    Args:
        time_base: Output time base for ``end_display_time``. Missing or
                   degenerate values fall back to 1/1000.
        width: Presentation width, 720 when not set.
        height: Presentation height, 576 when not set.
    """

    def __init__(
        self,
        time_base: Optional[Union[Fraction, tuple]] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        self.time_base = self._normalize_time_base(time_base)

        if not width or not height or width <= 0 or height <= 0:
            logger.warning(
                "Video dimensions not set, using defaults %dx%d", DEFAULT_WIDTH, DEFAULT_HEIGHT
            )
            width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT
        self.width = width
        self.height = height

        self.subtitle_header = build_subtitle_header(self.width, self.height)
        self._read_order = 0
        logger.debug("Initialized EBU STL decoder (time base %s)", self.time_base)

    @staticmethod
    def _normalize_time_base(time_base) -> Fraction:
        if time_base is None:
            return DEFAULT_TIME_BASE
        if isinstance(time_base, tuple):
            num, den = time_base
            if not num or not den:
                return DEFAULT_TIME_BASE
            return Fraction(num, den)
        if time_base == 0:
            return DEFAULT_TIME_BASE
        return Fraction(time_base)

    @property
    def read_order(self) -> int:
        """Read order tag the next cue will get."""
        return self._read_order

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def decode_block(self, tti: bytes, start_pts: int = 0, end_pts: int = 0) -> Optional[Cue]:
        """
        Decode a single TTI block, returning None when it has no visible text.
        """
        lines = parse_tti_block(tti)
        alignment = resolve_alignment(tti[JC_OFFSET], tti[VP_OFFSET])

        text = build_cue_markup(lines, alignment)
        if text is None:
            logger.debug("Dropping empty TTI block")
            return None

        logger.debug("Extracted ASS text: %s", text)
        cue = Cue(
            start_pts=start_pts,
            end_pts=end_pts,
            lines=lines,
            alignment=alignment,
            text=text,
            read_order=self._read_order,
            end_display_time=rescale(end_pts - start_pts, PACKET_TIME_BASE, self.time_base),
        )
        cue.event = format_event_payload(cue)
        self._read_order += 1
        return cue

    def decode(self, packet: Packet) -> List[Cue]:
        """
        Decode every complete TTI block in ``packet``.

        All cues share the packet's timing. Trailing bytes shorter than a
        block are ignored.
        """
        cues: List[Cue] = []
        data = packet.data
        for offset in range(0, len(data) - TTI_BLOCK_SIZE + 1, TTI_BLOCK_SIZE):
            cue = self.decode_block(
                data[offset : offset + TTI_BLOCK_SIZE],
                start_pts=packet.pts,
                end_pts=packet.end_pts,
            )
            if cue is not None:
                cues.append(cue)
        return cues
