"""Declarative signature configuration and environment settings."""

from __future__ import annotations

import os
import struct
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from magicsniff.detector import MagicDetector
from magicsniff.media_type import MediaType

# Environment variable names
ENV_DEBUG = "MAGICSNIFF_DEBUG"
ENV_LOG_FORMAT = "MAGICSNIFF_LOG_FORMAT"

_TRUTHY = {"1", "true", "yes", "on"}

MagicType = Literal[
    "hex",
    "string",
    "byte",
    "big16",
    "little16",
    "big32",
    "little32",
]

# struct format and unsigned upper bound for numeric magic types
_NUMERIC_FORMATS: dict[str, tuple[str, int]] = {
    "big16": (">H", 0xFFFF),
    "little16": ("<H", 0xFFFF),
    "big32": (">I", 0xFFFFFFFF),
    "little32": ("<I", 0xFFFFFFFF),
}


def env_flag(name: str) -> bool:
    """Return True if the environment variable is set to a truthy value."""
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def decode_magic_value(value: str, magic_type: MagicType = "hex") -> bytes:
    """Decode a textual magic value into the bytes to match.

    Examples:
        decode_magic_value("25504446") -> b"%PDF"
        decode_magic_value("%PDF\\x2d", "string") -> b"%PDF-"
        decode_magic_value("0xCAFE", "little16") -> b"\\xfe\\xca"

    Raises:
        ValueError: If value cannot be decoded as magic_type.
    """
    if magic_type == "hex":
        digits = "".join(value.split())
        if digits[:2].lower() == "0x":
            digits = digits[2:]
        return bytes.fromhex(digits)

    if magic_type == "string":
        # backslash escapes (\xNN, \n, octal) map to single bytes
        return value.encode("latin-1").decode("unicode_escape").encode("latin-1")

    if magic_type == "byte":
        number = int(value.strip(), 0)
        if not 0 <= number <= 0xFF:
            raise ValueError(f"byte value out of range: {value!r}")
        return bytes([number])

    if magic_type not in _NUMERIC_FORMATS:
        raise ValueError(f"unknown magic type: {magic_type!r}")

    fmt, limit = _NUMERIC_FORMATS[magic_type]
    number = int(value.strip(), 0)
    if not 0 <= number <= limit:
        raise ValueError(f"{magic_type} value out of range: {value!r}")
    return struct.pack(fmt, number)


def parse_offset(offset: str | int) -> tuple[int, int]:
    """Parse ``"begin:end"``, ``"offset"`` or an int into an offset range.

    Raises:
        ValueError: If the offset is malformed, negative or reversed.
    """
    if isinstance(offset, int):
        begin = end = offset
    else:
        first, sep, last = offset.strip().partition(":")
        begin = int(first)
        end = int(last) if sep else begin

    if begin < 0 or end < begin:
        raise ValueError(f"invalid offset range: [{begin},{end}]")
    return begin, end


class SignatureConfig(BaseModel):
    """Validated parameters for building a MagicDetector."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    media_type: str = Field(description="Media type reported on a match")
    value: str = Field(description="Magic value, encoded according to type")
    type: MagicType = Field(default="hex", description="Encoding of value and mask")
    mask: str | None = Field(
        default=None, description="Optional bit mask, same encoding as value"
    )
    offset: str | int = Field(
        default=0, description="Start offset or inclusive 'begin:end' range"
    )

    @field_validator("media_type")
    @classmethod
    def _check_media_type(cls, v: str) -> str:
        MediaType.parse(v)
        return v

    @field_validator("offset")
    @classmethod
    def _check_offset(cls, v: str | int) -> str | int:
        parse_offset(v)
        return v

    @model_validator(mode="after")
    def _check_values(self) -> SignatureConfig:
        decode_magic_value(self.value, self.type)
        if self.mask is not None:
            decode_magic_value(self.mask, self.type)
        return self

    @property
    def pattern_bytes(self) -> bytes:
        return decode_magic_value(self.value, self.type)

    @property
    def mask_bytes(self) -> bytes | None:
        if self.mask is None:
            return None
        return decode_magic_value(self.mask, self.type)

    @property
    def offset_range(self) -> tuple[int, int]:
        return parse_offset(self.offset)

    def build(self) -> MagicDetector:
        """Build the detector.

        Raises:
            ConfigurationError: If the decoded values are inconsistent,
                e.g. mask and pattern lengths differ.
        """
        begin, end = self.offset_range
        return MagicDetector(
            MediaType.parse(self.media_type),
            self.pattern_bytes,
            self.mask_bytes,
            begin,
            end,
        )
