"""magicsniff - magic byte content type detection.

Matches a fixed (optionally bit-masked) byte pattern within an offset
range near the start of a forward-only byte stream.
"""

from magicsniff.config import SignatureConfig, decode_magic_value, parse_offset
from magicsniff.detector import Detector, MagicDetector
from magicsniff.errors import ConfigurationError, MagicSniffError, StreamError
from magicsniff.media_type import OCTET_STREAM, MediaType
from magicsniff.stream import ByteSource, StreamSource, as_source

__all__ = [
    "OCTET_STREAM",
    "ByteSource",
    "ConfigurationError",
    "Detector",
    "MagicDetector",
    "MagicSniffError",
    "MediaType",
    "SignatureConfig",
    "StreamError",
    "StreamSource",
    "as_source",
    "decode_magic_value",
    "parse_offset",
]
