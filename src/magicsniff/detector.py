"""Content type detection based on magic bytes.

A MagicDetector looks for a fixed byte pattern (optionally bit-masked)
whose first byte lies within an inclusive offset range near the start of
a stream. The stream is consumed forward-only and never rewound:

    positioning -> filling -> scanning(offset) -> matched | no match

"No match" is a normal outcome and returns OCTET_STREAM instead of
raising, so callers can fall through to the next detector.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any, Protocol

import structlog

from magicsniff.errors import ConfigurationError, StreamError
from magicsniff.media_type import OCTET_STREAM, MediaType
from magicsniff.stream import as_source

if TYPE_CHECKING:
    from magicsniff.stream import ByteSource

logger = structlog.get_logger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


class Detector(Protocol):
    """A content type detection strategy.

    Implementations return OCTET_STREAM when they cannot identify the
    stream.
    """

    def detect(self, stream: Any) -> MediaType: ...


class MagicDetector:
    """Detects a media type from a magic byte pattern.

    Instances are immutable and keep no per-call state, so one detector
    can be shared across threads and streams.
    """

    __slots__ = (
        "_media_type",
        "_pattern",
        "_mask",
        "_length",
        "_offset_range_begin",
        "_offset_range_end",
    )

    def __init__(
        self,
        media_type: MediaType | str | None,
        pattern: bytes | bytearray | memoryview | None,
        mask: bytes | bytearray | memoryview | None = None,
        offset_range_begin: int = 0,
        offset_range_end: int | None = None,
    ) -> None:
        """Create a detector.

        Args:
            media_type: Media type returned on a match.
            pattern: Magic bytes to look for.
            mask: Optional bit mask ANDed with the input bytes before
                comparison. Must be as long as the pattern.
            offset_range_begin: First stream offset (inclusive) at which
                the pattern may start.
            offset_range_end: Last stream offset (inclusive) at which the
                pattern may start. Defaults to offset_range_begin.

        Raises:
            ConfigurationError: If any argument is missing or invalid.
        """
        if media_type is None:
            raise ConfigurationError("missing label")
        if isinstance(media_type, str):
            try:
                media_type = MediaType.parse(media_type)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        elif not isinstance(media_type, MediaType):
            raise ConfigurationError(
                f"label must be a MediaType, got {type(media_type).__name__}"
            )

        if pattern is None:
            raise ConfigurationError("missing pattern")
        if not isinstance(pattern, _BYTES_LIKE):
            raise ConfigurationError(
                f"pattern must be bytes, got {type(pattern).__name__}"
            )
        pattern = bytes(pattern)

        if mask is not None:
            if not isinstance(mask, _BYTES_LIKE):
                raise ConfigurationError(
                    f"mask must be bytes, got {type(mask).__name__}"
                )
            mask = bytes(mask)
            if len(mask) != len(pattern):
                raise ConfigurationError(
                    "different pattern and mask lengths: "
                    f"{len(pattern)} != {len(mask)}"
                )

        if offset_range_end is None:
            offset_range_end = offset_range_begin
        try:
            begin = operator.index(offset_range_begin)
            end = operator.index(offset_range_end)
        except TypeError as e:
            raise ConfigurationError(f"offsets must be integers: {e}") from e
        if begin < 0 or end < begin:
            raise ConfigurationError(f"invalid offset range: [{begin},{end}]")

        _set = object.__setattr__
        _set(self, "_media_type", media_type)
        _set(self, "_pattern", pattern)
        _set(self, "_mask", mask)
        _set(self, "_length", len(pattern))
        _set(self, "_offset_range_begin", begin)
        _set(self, "_offset_range_end", end)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def media_type(self) -> MediaType:
        return self._media_type

    @property
    def pattern(self) -> bytes:
        return self._pattern

    @property
    def mask(self) -> bytes | None:
        return self._mask

    @property
    def length(self) -> int:
        """Length of the comparison window."""
        return self._length

    @property
    def offset_range(self) -> tuple[int, int]:
        return (self._offset_range_begin, self._offset_range_end)

    def __repr__(self) -> str:
        mask = self._mask.hex() if self._mask is not None else None
        return (
            f"{type(self).__name__}(media_type={str(self._media_type)!r}, "
            f"pattern={self._pattern.hex()!r}, mask={mask!r}, "
            f"offset_range={self.offset_range!r})"
        )

    def detect(self, stream: ByteSource | Any) -> MediaType:
        """Detect the media type of a stream.

        Reads at most ``offset_range_end + length`` bytes. The stream is
        left open and positioned after the last byte read.

        Returns:
            The configured media type on a match, OCTET_STREAM otherwise.

        Raises:
            StreamError: If reading from the stream fails, including
                reads from a closed stream.
        """
        source = as_source(stream)
        try:
            return self._detect(source)
        except StreamError:
            raise
        # closed Python streams raise ValueError, same as StreamSource
        except (OSError, ValueError) as e:
            raise StreamError(f"failed to read from stream: {e}") from e

    def _detect(self, source: ByteSource) -> MediaType:
        begin = self._offset_range_begin
        end = self._offset_range_end
        length = self._length
        pattern = self._pattern
        mask = self._mask
        offset = 0

        # skip to the start of the offset range, falling back to read()
        while offset < begin:
            n = source.skip(begin - offset)
            if n > 0:
                offset += n
            elif source.read_byte() is not None:
                offset += 1
            else:
                logger.debug(
                    "stream ended before offset range", offset=offset
                )
                return OCTET_STREAM

        # fill in the comparison window
        window = bytearray(length)
        with memoryview(window) as view:
            while offset < begin + length:
                n = source.readinto(view[offset - begin :])
                if not n:
                    logger.debug("stream ended in window", offset=offset)
                    return OCTET_STREAM
                offset += n

        # without a mask the raw window is compared directly
        compare = bytearray(length) if mask is not None else window

        while True:
            if mask is not None:
                for i in range(length):
                    compare[i] = window[i] & mask[i]

            if compare == pattern:
                logger.debug(
                    "magic match",
                    media_type=str(self._media_type),
                    offset=offset - length,
                )
                return self._media_type

            if offset >= end + length:
                return OCTET_STREAM

            # move the window forward one byte
            c = source.read_byte()
            if c is None:
                return OCTET_STREAM
            window[:-1] = window[1:]
            window[-1] = c
            offset += 1
