"""
Command-line interface: convert an EBU STL file to an ASS script.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ebustl_decoder.models import DEFAULT_FRAME_RATE
from ebustl_decoder.STLDecoder.ass_writer import write_ass
from ebustl_decoder.STLDemuxer.helpers import STL_EXTENSIONS
from ebustl_decoder.decoder import decode_stl_stream

logger = logging.getLogger("ebustl_decoder")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Convert EBU STL subtitles to ASS")
    ap.add_argument("input", help="Path to the .stl file")
    ap.add_argument("-o", "--output", help="Output .ass path (default: stdout)")
    fps = ap.add_mutually_exclusive_group()
    fps.add_argument(
        "--fps", type=int, default=DEFAULT_FRAME_RATE, help="Timecode frame rate (default: 25)"
    )
    fps.add_argument(
        "--detect-fps",
        action="store_true",
        help="Take the frame rate from the Disk Format Code in the header",
    )
    ap.add_argument("--width", type=int, help="Play resolution width (default: 720)")
    ap.add_argument("--height", type=int, help="Play resolution height (default: 576)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.fps <= 0:
        logger.error("Frame rate must be positive, got %d", args.fps)
        return 1

    if not args.input.lower().endswith(tuple("." + ext for ext in STL_EXTENSIONS)):
        logger.warning("%s does not have an .stl extension, reading it anyway", args.input)

    try:
        with open(args.input, "rb") as f:
            result = decode_stl_stream(
                f,
                frame_rate=args.fps,
                detect_frame_rate=args.detect_fps,
                width=args.width,
                height=args.height,
            )
    except OSError as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1

    cues = result["cues"]
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as out:
                count = write_ass(cues, result["subtitle_header"], out)
        except OSError as e:
            logger.error("Could not write %s: %s", args.output, e)
            return 1
        logger.info("Wrote %d cues to %s", count, args.output)
    else:
        write_ass(cues, result["subtitle_header"], sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
