from .STLDecoder import STLDecoder, rescale
from .ass_writer import build_subtitle_header, write_ass

__all__ = ["STLDecoder", "rescale", "build_subtitle_header", "write_ass"]
