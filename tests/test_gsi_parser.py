import pytest
from ebustl_decoder.models import GSISummary
from ebustl_decoder.STLDemuxer.parsers.gsi_parser import (
    frame_rate_from_dfc,
    language_from_code,
    parse_gsi,
)
from helpers_for_testing import make_gsi_block


# =============================================================================
# Tests for language_from_code
# =============================================================================


class TestLanguageFromCode:
    """Tests for EBU language code decoding."""

    @pytest.mark.parametrize("code,expected", [("09", "en"), ("0F", "fr"), ("0f", "fr"), ("08", "de")])
    def test_known_codes(self, code, expected):
        assert language_from_code(code) == expected

    def test_unspecified_code_is_none(self):
        """Code 00 means no language."""
        assert language_from_code("00") is None

    def test_unlisted_code_is_none(self):
        assert language_from_code("7E") is None

    @pytest.mark.parametrize("code", ["", "9", "ZZ", "123"])
    def test_malformed_code_is_none(self, code):
        assert language_from_code(code) is None


# =============================================================================
# Tests for frame_rate_from_dfc
# =============================================================================


class TestFrameRateFromDfc:
    """Tests for frame rate derivation from Disk Format Code."""

    @pytest.mark.parametrize(
        "dfc,expected", [("STL25.01", 25), ("STL30.01", 30), ("STL24.01", 24)]
    )
    def test_known_codes(self, dfc, expected):
        assert frame_rate_from_dfc(dfc) == expected

    def test_digits_must_follow_prefix(self):
        """Rate digits elsewhere in the code should not count."""
        assert frame_rate_from_dfc("STL23.30") == 25
        assert frame_rate_from_dfc("XSTL30.0") == 25

    def test_unknown_code_falls_back_to_25(self):
        assert frame_rate_from_dfc("STLXX.01") == 25
        assert frame_rate_from_dfc("") == 25


# =============================================================================
# Tests for parse_gsi
# =============================================================================


class TestParseGsi:
    """Tests for the GSI summary."""

    def test_fields_extracted(self):
        """Should report format code, table, language, title and rate."""
        gsi = make_gsi_block(dfc=b"STL30.01", title=b"My Show", language_code=b"0F")

        summary = parse_gsi(gsi)

        assert summary == GSISummary(
            disk_format_code="STL30.01",
            character_code_table="00",
            language="fr",
            title="My Show",
            frame_rate=30,
        )

    def test_blank_header(self):
        """An all-zero header should give an empty summary at 25 fps."""
        assert parse_gsi(bytes(1024)) == GSISummary()

    def test_summary_is_frozen(self):
        summary = parse_gsi(make_gsi_block())

        with pytest.raises(AttributeError):
            summary.title = "Other"

    def test_wrong_size_raises(self):
        """A header that is not 1024 bytes should raise ValueError."""
        with pytest.raises(ValueError, match="GSI block must be 1024 bytes"):
            parse_gsi(b"\x00" * 512)
