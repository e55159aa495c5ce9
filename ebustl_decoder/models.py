"""
EBU STL Models - Data structures and type definitions.

Contains:
- Enums for colors, control codes and alignment
- Dataclasses for decoded lines and cues
- Demuxer output structures (stream descriptor, packets)
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from fractions import Fraction
from typing import List, Dict, Optional


EBU_HEADER_SIZE = 1024
TTI_BLOCK_SIZE = 128
TTI_TEXT_FIELD_OFFSET = 16
TTI_TEXT_FIELD_LENGTH = 112

DEFAULT_FRAME_RATE = 25
DEFAULT_WIDTH = 720
DEFAULT_HEIGHT = 576
DEFAULT_TIME_BASE = Fraction(1, 1000)


# =============================================================================
# Colors
# =============================================================================


class Color(Enum):
    """Colors a line can be drawn with."""

    WHITE = "white"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    BLACK = "black"


# Foreground spacing attributes 0x00-0x07
FOREGROUND_COLORS: Dict[int, Color] = {
    0: Color.WHITE,
    1: Color.RED,
    2: Color.GREEN,
    3: Color.YELLOW,
    4: Color.BLUE,
    5: Color.MAGENTA,
    6: Color.CYAN,
    7: Color.BLACK,
}

# Background attributes 0x10-0x17, indexed by the low 3 bits
BACKGROUND_COLORS: Dict[int, Color] = {
    0: Color.WHITE,
    1: Color.YELLOW,
    2: Color.GREEN,
    3: Color.BLUE,
    4: Color.RED,
    5: Color.MAGENTA,
    6: Color.CYAN,
    7: Color.BLACK,
}

DEFAULT_FOREGROUND = Color.WHITE
DEFAULT_BACKGROUND = Color.BLACK

# ASS colour literals are &HBBGGRR&
ASS_COLOR_CODES: Dict[Color, str] = {
    Color.WHITE: "FFFFFF",
    Color.RED: "0000FF",
    Color.GREEN: "00FF00",
    Color.YELLOW: "00FFFF",
    Color.BLUE: "FF0000",
    Color.MAGENTA: "FF00FF",
    Color.CYAN: "FFFF00",
    Color.BLACK: "000000",
}


# =============================================================================
# EBU STL Control Codes (for Text Field)
# =============================================================================


class EBUSTLControlCode(IntEnum):
    """EBU STL Text Field control codes"""

    # Foreground colors
    ALPHA_FIRST = 0x00
    ALPHA_LAST = 0x07

    # Background colors
    BACKGROUND_FIRST = 0x10
    BACKGROUND_LAST = 0x17

    # First printable byte
    SPACE = 0x20

    # Line break
    NEWLINE = 0x8A

    # End of text / unused space filler
    UNUSED_SPACE = 0x8F


class DiacriticMarker(IntEnum):
    """Non-spacing diacritic markers of the Latin character code table."""

    GRAVE = 0xC1
    ACUTE = 0xC2
    CIRCUMFLEX = 0xC3
    DIAERESIS = 0xC8


DIACRITIC_MARKER_FIRST = 0xC1
DIACRITIC_MARKER_LAST = 0xCF


# =============================================================================
# Justification Codes and Alignment
# =============================================================================


class JustificationCode(IntEnum):
    """EBU STL Justification codes"""

    UNCHANGED = 0x00
    LEFT = 0x01
    CENTERED = 0x02
    RIGHT = 0x03


class HorizontalAlignment(IntEnum):
    LEFT = 1
    CENTER = 2
    RIGHT = 3


class VerticalAlignment(IntEnum):
    TOP = 1
    MIDDLE = 2
    BOTTOM = 3


@dataclass(frozen=True)
class Alignment:
    """Screen placement of a cue on a 3x3 grid."""

    horizontal: HorizontalAlignment = HorizontalAlignment.CENTER
    vertical: VerticalAlignment = VerticalAlignment.BOTTOM

    @property
    def grid_position(self) -> int:
        """Cell index 1-9 used for the ASS ``\\an`` tag."""
        return (self.vertical - 1) * 3 + self.horizontal


# =============================================================================
# Decoded Data Structures
# =============================================================================


@dataclass(frozen=True)
class Timecode:
    """HH:MM:SS:FF timecode, one unsigned byte per field."""

    hours: int
    minutes: int
    seconds: int
    frames: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Timecode":
        return cls(raw[0], raw[1], raw[2], raw[3])


@dataclass
class Line:
    """A single line of subtitle text with its colors."""

    text: str = ""
    foreground: Color = DEFAULT_FOREGROUND
    background: Color = DEFAULT_BACKGROUND

    @property
    def has_content(self) -> bool:
        return bool(self.text)


@dataclass
class Cue:
    """A timed, styled subtitle produced from one TTI block."""

    start_pts: int  # milliseconds
    end_pts: int  # milliseconds
    lines: List[Line] = field(default_factory=list)
    alignment: Alignment = field(default_factory=Alignment)
    text: str = ""  # ASS markup
    read_order: int = 0
    end_display_time: int = 0  # in the decoder time base
    event: str = ""  # subtitle rectangle payload, ReadOrder first

    @property
    def plain_text(self) -> str:
        """Text without markup, lines joined with newlines."""
        return "\n".join(line.text for line in self.lines if line.has_content)


# =============================================================================
# Demuxer Output
# =============================================================================


@dataclass(frozen=True)
class StreamInfo:
    """Descriptor of the single subtitle track of an STL file."""

    codec_type: str = "subtitle"
    codec_name: str = "ebustl"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    time_base: Fraction = DEFAULT_TIME_BASE
    frame_rate: int = DEFAULT_FRAME_RATE


@dataclass
class Packet:
    """One raw TTI block with its timing."""

    data: bytes
    pts: int  # milliseconds
    duration: int  # milliseconds
    stream_index: int = 0
    position: Optional[int] = None  # byte offset in the source

    @property
    def end_pts(self) -> int:
        return self.pts + self.duration


@dataclass(frozen=True)
class GSISummary:
    """The header fields the demuxer reports for a file."""

    disk_format_code: str = ""  # e.g. "STL25.01"
    character_code_table: str = ""
    language: Optional[str] = None  # ISO 639-1
    title: str = ""
    frame_rate: int = DEFAULT_FRAME_RATE


# EBU Tech 3264 Language Code mapping (hex code -> ISO 639-1)
EBU_LANGUAGE_CODES: Dict[int, str] = {
    0x00: "",  # Unknown/not specified
    0x01: "sq",  # Albanian
    0x02: "br",  # Breton
    0x03: "ca",  # Catalan
    0x04: "hr",  # Croatian
    0x05: "cy",  # Welsh
    0x06: "cs",  # Czech
    0x07: "da",  # Danish
    0x08: "de",  # German
    0x09: "en",  # English
    0x0A: "es",  # Spanish
    0x0B: "eo",  # Esperanto
    0x0C: "et",  # Estonian
    0x0D: "eu",  # Basque
    0x0E: "fo",  # Faroese
    0x0F: "fr",  # French
    0x10: "fy",  # Frisian
    0x11: "ga",  # Irish
    0x12: "gd",  # Gaelic (Scottish)
    0x13: "gl",  # Galician
    0x14: "is",  # Icelandic
    0x15: "it",  # Italian
    0x16: "lb",  # Luxembourgish
    0x17: "lt",  # Lithuanian
    0x18: "lv",  # Latvian
    0x19: "mk",  # Macedonian
    0x1A: "mt",  # Maltese
    0x1B: "nl",  # Dutch
    0x1C: "no",  # Norwegian
    0x1D: "oc",  # Occitan
    0x1E: "pl",  # Polish
    0x1F: "pt",  # Portuguese
    0x20: "ro",  # Romanian
    0x21: "rm",  # Romansh
    0x22: "sr",  # Serbian
    0x23: "sk",  # Slovak
    0x24: "sl",  # Slovenian
    0x25: "fi",  # Finnish
    0x26: "sv",  # Swedish
    0x27: "tr",  # Turkish
    0x28: "nl-BE",  # Flemish
    0x29: "wa",  # Walloon
}
