import enum
import logging
from typing import List

from ebustl_decoder.models import (
    BACKGROUND_COLORS,
    DEFAULT_BACKGROUND,
    DEFAULT_FOREGROUND,
    FOREGROUND_COLORS,
    TTI_BLOCK_SIZE,
    TTI_TEXT_FIELD_LENGTH,
    TTI_TEXT_FIELD_OFFSET,
    EBUSTLControlCode,
    Line,
)
from ebustl_decoder.STLDecoder.helpers import decode_line_bytes

logger = logging.getLogger("ebustl_decoder")


class ScanState(enum.Enum):
    SCANNING = "scanning"
    FINISHED = "finished"


class ByteClass(enum.Enum):
    NEWLINE = "newline"
    END_OF_TEXT = "end_of_text"
    FOREGROUND = "foreground"
    BACKGROUND = "background"
    TEXT = "text"
    IGNORED = "ignored"


def classify_byte(byte: int) -> ByteClass:
    """Sort a text field byte into the category the scanner acts on."""
    if byte == EBUSTLControlCode.NEWLINE:
        return ByteClass.NEWLINE
    if byte == EBUSTLControlCode.UNUSED_SPACE:
        return ByteClass.END_OF_TEXT
    if EBUSTLControlCode.ALPHA_FIRST <= byte <= EBUSTLControlCode.ALPHA_LAST:
        return ByteClass.FOREGROUND
    if EBUSTLControlCode.BACKGROUND_FIRST <= byte <= EBUSTLControlCode.BACKGROUND_LAST:
        return ByteClass.BACKGROUND
    if byte >= EBUSTLControlCode.SPACE:
        return ByteClass.TEXT
    return ByteClass.IGNORED


class _LineScanner:
    """Per-block scan state: the open line's bytes, its colors, finished lines."""

    def __init__(self):
        self.state = ScanState.SCANNING
        self.lines: List[Line] = []
        self.line_index = 0
        self._buffer = bytearray()
        self._reset_colors()

    def _reset_colors(self) -> None:
        self.foreground = DEFAULT_FOREGROUND
        self.background = DEFAULT_BACKGROUND

    def finish_line(self) -> None:
        self.lines.append(
            Line(
                text=decode_line_bytes(bytes(self._buffer)),
                foreground=self.foreground,
                background=self.background,
            )
        )
        self._buffer.clear()

    def feed(self, byte: int) -> None:
        kind = classify_byte(byte)
        if kind is ByteClass.NEWLINE:
            self.finish_line()
            self._reset_colors()
            self.line_index += 1
        elif kind is ByteClass.END_OF_TEXT:
            self.finish_line()
            self.state = ScanState.FINISHED
        elif kind is ByteClass.FOREGROUND:
            self.foreground = FOREGROUND_COLORS[byte]
        elif kind is ByteClass.BACKGROUND:
            self.background = BACKGROUND_COLORS[byte & 0x07]
        elif kind is ByteClass.TEXT:
            self._buffer.append(byte)


# ------------------------------------------------------------------ #
# TTI text field parsing
# ------------------------------------------------------------------ #
def parse_text_field(text_raw: bytes) -> List[Line]:
    """
    Split a TTI text field into lines with resolved colors.

    Colors apply to the line they appear on and reset to white on black
    after every line break. A line break always produces a line, even an
    empty one. Scanning stops at the first end-of-text byte.
    """
    scanner = _LineScanner()
    for byte in text_raw:
        scanner.feed(byte)
        if scanner.state is ScanState.FINISHED:
            break
    else:
        # Field exhausted without a terminator
        scanner.finish_line()

    return scanner.lines


def parse_tti_block(tti: bytes) -> List[Line]:
    """Parse the text field of one 128‑byte TTI block."""
    if len(tti) != TTI_BLOCK_SIZE:
        raise ValueError(f"TTI block must be {TTI_BLOCK_SIZE} bytes, got {len(tti)}")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("TTI Block (hex): %s", tti.hex(" ").upper())

    return parse_text_field(
        tti[TTI_TEXT_FIELD_OFFSET : TTI_TEXT_FIELD_OFFSET + TTI_TEXT_FIELD_LENGTH]
    )
