import io

import pytest
from ebustl_decoder import STLDecoder, STLDemuxer, decode_stl_file, decode_stl_stream, iter_cues
from ebustl_decoder.models import Color

from helpers_for_testing import make_gsi_block, make_stl_file, make_tti_block


# =============================================================================
# Tests for decode_stl_file - Input Validation
# =============================================================================


class TestDecodeStlFileValidation:
    """Tests for input validation in decode_stl_file."""

    def test_empty_input_raises_error(self):
        with pytest.raises(ValueError, match="STL raw data in bytes is required"):
            decode_stl_file(b"")

    def test_none_input_raises_error(self):
        with pytest.raises(ValueError, match="STL raw data in bytes is required"):
            decode_stl_file(None)


# =============================================================================
# Tests for decode_stl_file - End to End
# =============================================================================


class TestDecodeStlFileEndToEnd:
    """Whole-file decoding scenarios."""

    def test_hello(self):
        """
        A single centered block at row 20 should give one top/center cue
        in grid cell (1 - 1) * 3 + 2 = 2, not 7 (bottom/left).
        """
        data = make_stl_file(tti_blocks=[make_tti_block(text=b"HELLO", vp=20, jc=0x02)])

        result = decode_stl_file(data)

        cues = result["cues"]
        assert len(cues) == 1
        assert cues[0].alignment.grid_position == 2
        assert cues[0].plain_text == "HELLO"
        assert cues[0].start_pts == 1000
        assert cues[0].end_pts == 3000

    def test_color_then_break(self):
        data = make_stl_file(tti_blocks=[make_tti_block(text=b"\x02RED\x8aBLUE")])

        cue = decode_stl_file(data)["cues"][0]

        assert cue.lines[0].text == "RED"
        assert cue.lines[0].foreground is Color.GREEN
        assert cue.lines[1].text == "BLUE"
        assert cue.lines[1].foreground is Color.WHITE
        assert cue.lines[1].background is Color.BLACK

    def test_accent(self):
        data = make_stl_file(tti_blocks=[make_tti_block(text=b"\xc2e")])

        assert decode_stl_file(data)["cues"][0].plain_text == "é"

    def test_trailing_partial_block(self):
        """Header, one block and 50 stray bytes should give exactly one cue."""
        data = make_stl_file(tti_blocks=[make_tti_block()]) + b"\x20" * 50

        result = decode_stl_file(data)

        assert len(result["cues"]) == 1

    def test_empty_blocks_skipped(self):
        blocks = [
            make_tti_block(text=b"One"),
            make_tti_block(text=b"\x03\x8a"),
            make_tti_block(text=b"Two"),
        ]

        cues = decode_stl_file(make_stl_file(tti_blocks=blocks))["cues"]

        assert [cue.plain_text for cue in cues] == ["One", "Two"]
        assert [cue.read_order for cue in cues] == [0, 1]

    def test_payload_fields(self):
        result = decode_stl_file(make_stl_file())

        assert result["fps"] == 25
        assert result["gsi"].language == "en"
        assert result["subtitle_header"].startswith("[Script Info]")

    def test_detected_frame_rate_applied(self):
        """Frames should count 33 ms when the header says 30 fps."""
        gsi = make_gsi_block(dfc=b"STL30.01")
        block = make_tti_block(tci=(10, 0, 0, 3), tco=(10, 0, 1, 0))

        result = decode_stl_file(make_stl_file(gsi=gsi, tti_blocks=[block]), detect_frame_rate=True)

        assert result["fps"] == 30
        assert result["cues"][0].start_pts == 99


# =============================================================================
# Tests for iter_cues
# =============================================================================


class TestIterCues:
    """Tests for the pull-based pipeline."""

    def test_lazy_file_order(self):
        blocks = [make_tti_block(text=b"Cue %d" % n) for n in range(5)]
        demuxer = STLDemuxer(io.BytesIO(make_stl_file(tti_blocks=blocks)))
        decoder = STLDecoder(width=720, height=576)

        cues = iter_cues(demuxer, decoder)

        assert next(cues).plain_text == "Cue 0"
        assert [cue.plain_text for cue in cues] == ["Cue 1", "Cue 2", "Cue 3", "Cue 4"]

    def test_stream_input(self):
        stream = io.BytesIO(make_stl_file())

        result = decode_stl_stream(stream, width=1280, height=720)

        assert "PlayResX: 1280" in result["subtitle_header"]
        assert result["cues"][0].plain_text == "Hello World"
