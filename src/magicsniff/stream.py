"""Forward-only byte sources consumed by detectors.

Detectors never seek: they read one byte at a time, read into a buffer,
or ask the source to skip ahead. Skipping is best-effort and a source may
always report 0 bytes skipped.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

from magicsniff.errors import StreamError

if TYPE_CHECKING:
    from typing import BinaryIO

logger = structlog.get_logger(__name__)

# upper bound on bytes discarded by a single skip() call
SKIP_BUFFER_SIZE = 8192


@runtime_checkable
class ByteSource(Protocol):
    """Minimal forward-only input contract used by detectors."""

    def read_byte(self) -> int | None:
        """Read one byte, or None at end of stream."""
        ...

    def readinto(self, buffer: memoryview) -> int:
        """Read into buffer, returning bytes read (0 at end of stream)."""
        ...

    def skip(self, n: int) -> int:
        """Skip up to n bytes, returning how many were actually skipped."""
        ...


class StreamSource:
    """ByteSource over a binary file object.

    The wrapped stream is never closed or rewound. I/O failures from the
    underlying object are re-raised as StreamError.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: BinaryIO | io.RawIOBase | io.BufferedIOBase) -> None:
        self._raw = raw

    @property
    def raw(self) -> Any:
        return self._raw

    def read_byte(self) -> int | None:
        data = self._call(self._raw.read, 1)
        # non-blocking streams return None when no data is ready
        if not data:
            return None
        return data[0]

    def readinto(self, buffer: memoryview) -> int:
        if not len(buffer):
            return 0
        readinto = getattr(self._raw, "readinto", None)
        if readinto is not None:
            n = self._call(readinto, buffer)
            return n or 0

        data = self._call(self._raw.read, len(buffer))
        if not data:
            return 0
        buffer[: len(data)] = data
        return len(data)

    def skip(self, n: int) -> int:
        if n <= 0:
            return 0
        scratch = bytearray(min(n, SKIP_BUFFER_SIZE))
        with memoryview(scratch) as view:
            return self.readinto(view)

    def _call(self, fn: Any, arg: Any) -> Any:
        try:
            return fn(arg)
        except (OSError, ValueError) as e:
            logger.debug("stream read failed", error=str(e))
            raise StreamError(f"failed to read from stream: {e}") from e


def as_source(obj: object) -> ByteSource:
    """Coerce obj into a ByteSource.

    Accepts ByteSource implementations, bytes-like values and binary file
    objects.

    Raises:
        TypeError: If obj cannot be read as bytes.
    """
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return StreamSource(io.BytesIO(bytes(obj)))
    if isinstance(obj, (str, io.TextIOBase)):
        raise TypeError("text streams are not supported, pass bytes")
    if callable(getattr(obj, "read", None)):
        return StreamSource(obj)  # type: ignore[arg-type]
    raise TypeError(f"cannot read bytes from {type(obj).__name__}")
