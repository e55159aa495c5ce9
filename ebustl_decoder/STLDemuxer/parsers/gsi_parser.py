from typing import Dict, Optional


from ebustl_decoder.models import (
    DEFAULT_FRAME_RATE,
    EBU_HEADER_SIZE,
    EBU_LANGUAGE_CODES,
    GSISummary,
)

# Frame rate digits of the Disk Format Code, "STL25.01" -> "25"
DFC_FRAME_RATES: Dict[str, int] = {"25": 25, "30": 30, "24": 24}


def _ascii_field(gsi: bytes, start: int, end: int) -> str:
    return gsi[start:end].decode("ascii", errors="replace").strip(" \x00")


def frame_rate_from_dfc(dfc: str) -> int:
    """
    Frame rate named by a Disk Format Code (STL25.01, STL30.01, STL24.01).

    Anything else is read at the default 25 fps.
    """
    return DFC_FRAME_RATES.get(dfc[3:5], DEFAULT_FRAME_RATE)


def language_from_code(code: str) -> Optional[str]:
    """ISO 639-1 code for the two hex digit EBU language code, or None."""
    if len(code) != 2:
        return None
    try:
        return EBU_LANGUAGE_CODES.get(int(code, 16)) or None
    except ValueError:
        return None


# ------------------------------------------------------------------ #
# General Subtitle Information (GSI) parsing
# ------------------------------------------------------------------ #
def parse_gsi(gsi: bytes) -> GSISummary:
    """
    Summarise the 1024-byte header.

    Nothing is validated: garbled fields come back empty and an unknown
    format code reads at 25 fps.
    """
    if len(gsi) != EBU_HEADER_SIZE:
        raise ValueError(f"GSI block must be {EBU_HEADER_SIZE} bytes, got {len(gsi)}")

    dfc = _ascii_field(gsi, 3, 11)
    return GSISummary(
        disk_format_code=dfc,
        character_code_table=_ascii_field(gsi, 12, 14),
        language=language_from_code(_ascii_field(gsi, 14, 16)),
        title=_ascii_field(gsi, 16, 48),
        frame_rate=frame_rate_from_dfc(dfc),
    )
