"""
EBU STL Helpers - STLDecoder
- Turns parsed TTI lines into styled ASS cue text:
    - Accented Latin letters (diacritic marker + base letter)
    - Layout (justification code, vertical position -> 3x3 grid)
    - Colors (per line foreground / outline color)
"""

from typing import List, Dict, Optional, Sequence

from ebustl_decoder.models import (
    ASS_COLOR_CODES,
    DIACRITIC_MARKER_FIRST,
    DIACRITIC_MARKER_LAST,
    Alignment,
    Color,
    DiacriticMarker,
    HorizontalAlignment,
    JustificationCode,
    Line,
    VerticalAlignment,
)

# Literal bytes are read as ISO-8859-1, the codec used for CCT "00"
LITERAL_CODEC = "latin-1"

LINE_SEPARATOR = "\\N"
BORDER_TAG = "\\bord3"

# Characters that follow a backslash to form an ASS escape (\N, \n, \h)
_ASS_ESCAPE_LETTERS = ("N", "n", "h")
WORD_JOINER = "\u2060"


# =============================================================================
# Legacy Character Mapping
# =============================================================================


_ACCENTED_LETTERS: Dict[DiacriticMarker, str] = {
    DiacriticMarker.GRAVE: "ÀÈÌÒÙàèìòù",
    DiacriticMarker.ACUTE: "ÁÉÍÓÚáéíóú",
    DiacriticMarker.CIRCUMFLEX: "ÂÊÎÔÛâêîôû",
    DiacriticMarker.DIAERESIS: "ÄËÏÖÜäëïöü",
}
_BASE_LETTERS = "AEIOUaeiou"

DIACRITIC_TABLE: Dict[int, Dict[int, str]] = {
    marker: {ord(base): accented for base, accented in zip(_BASE_LETTERS, letters)}
    for marker, letters in _ACCENTED_LETTERS.items()
}


def is_diacritic_marker(byte: int) -> bool:
    return DIACRITIC_MARKER_FIRST <= byte <= DIACRITIC_MARKER_LAST


def map_diacritic(marker: int, base: int) -> Optional[str]:
    """
    Combine a diacritic marker and a base letter into one character.

    Returns None when the pair is not in the table.
    """
    return DIACRITIC_TABLE.get(marker, {}).get(base)


def decode_line_bytes(raw: bytes) -> str:
    """
    Decode the printable bytes of one line to text.

    A marker followed by a known base letter becomes the accented letter
    and both bytes are consumed. Otherwise the marker is kept as a literal
    character and the following byte is decoded on its own.
    """
    chars: List[str] = []
    i = 0
    length = len(raw)
    while i < length:
        byte = raw[i]
        if is_diacritic_marker(byte) and i + 1 < length:
            accented = map_diacritic(byte, raw[i + 1])
            if accented is not None:
                chars.append(accented)
                i += 2
                continue
        chars.append(bytes([byte]).decode(LITERAL_CODEC))
        i += 1
    return "".join(chars)


# =============================================================================
# Alignment
# =============================================================================


def resolve_horizontal_alignment(justification_code: int) -> HorizontalAlignment:
    if justification_code == JustificationCode.LEFT:
        return HorizontalAlignment.LEFT
    if justification_code == JustificationCode.RIGHT:
        return HorizontalAlignment.RIGHT
    # CENTERED, UNCHANGED and unknown codes
    return HorizontalAlignment.CENTER


def resolve_vertical_alignment(vertical_position: int) -> VerticalAlignment:
    if vertical_position < 8:
        return VerticalAlignment.BOTTOM
    if vertical_position <= 16:
        return VerticalAlignment.MIDDLE
    return VerticalAlignment.TOP


def resolve_alignment(justification_code: int, vertical_position: int) -> Alignment:
    """Derive the screen alignment of a block from its JC and VP bytes."""
    return Alignment(
        horizontal=resolve_horizontal_alignment(justification_code),
        vertical=resolve_vertical_alignment(vertical_position),
    )


# =============================================================================
# ASS Markup
# =============================================================================


def escape_ass_text(text: str) -> str:
    """
    Make decoded text print literally inside ASS markup.

    Braces are escaped so they cannot open an override block. A backslash
    in front of N, n or h gets a word joiner so it is not read as a break
    or hard space.
    """
    chars: List[str] = []
    for index, char in enumerate(text):
        if char in "{}":
            chars.append("\\" + char)
        elif char == "\\" and text[index + 1 : index + 2] in _ASS_ESCAPE_LETTERS:
            chars.append(char + WORD_JOINER)
        else:
            chars.append(char)
    return "".join(chars)


def ass_color(color: Color) -> str:
    return f"&H{ASS_COLOR_CODES[color]}&"


def foreground_tag(color: Color) -> str:
    return "{\\c" + ass_color(color) + "}"


def outline_tag(color: Color) -> str:
    return "{\\3c" + ass_color(color) + "}"


def alignment_tag(alignment: Alignment) -> str:
    return "{\\an%d%s}" % (alignment.grid_position, BORDER_TAG)


def build_cue_markup(lines: Sequence[Line], alignment: Alignment) -> Optional[str]:
    """
    Assemble ASS text for one cue.

    Every non-empty line gets its own colour tags; empty lines add nothing,
    not even a separator. Returns None when no line has visible text.
    """
    visible = [line for line in lines if line.has_content]
    if not visible:
        return None

    parts: List[str] = [alignment_tag(alignment)]
    for index, line in enumerate(visible):
        if index:
            parts.append(LINE_SEPARATOR)
        parts.append(foreground_tag(line.foreground))
        parts.append(outline_tag(line.background))
        parts.append(escape_ass_text(line.text))
    return "".join(parts)
