"""Media type labels returned by detectors.

A media type is ``type/subtype`` with optional ``; key=value`` parameters:
- application/pdf
- text/plain; charset=utf-8
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# RFC 6838 restricted-name characters
_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*"
_MEDIA_TYPE_RE = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*(?:;(.*))?$")


@dataclass(frozen=True, order=True)
class MediaType:
    """Immutable, hashable media type value."""

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = field(default=())

    def __post_init__(self) -> None:
        # normalize case so equality ignores it
        object.__setattr__(self, "type", self.type.lower())
        object.__setattr__(self, "subtype", self.subtype.lower())
        object.__setattr__(
            self,
            "parameters",
            tuple(sorted((k.lower(), v) for k, v in self.parameters)),
        )

    @classmethod
    def parse(cls, text: str) -> MediaType:
        """Parse ``type/subtype[; key=value]*``.

        Raises:
            ValueError: If text is not a valid media type.
        """
        m = _MEDIA_TYPE_RE.match(text)
        if m is None:
            raise ValueError(f"invalid media type: {text!r}")

        params: list[tuple[str, str]] = []
        if m.group(3):
            for part in m.group(3).split(";"):
                part = part.strip()
                if not part:
                    continue
                key, sep, value = part.partition("=")
                if not sep or not key.strip():
                    raise ValueError(f"invalid media type parameter: {part!r}")
                params.append((key.strip(), value.strip().strip('"')))

        return cls(m.group(1), m.group(2), tuple(params))

    @property
    def base_type(self) -> MediaType:
        """This media type without parameters."""
        if not self.parameters:
            return self
        return MediaType(self.type, self.subtype)

    @property
    def parameter_map(self) -> dict[str, str]:
        return dict(self.parameters)

    def __str__(self) -> str:
        base = f"{self.type}/{self.subtype}"
        if not self.parameters:
            return base
        params = "; ".join(f"{k}={v}" for k, v in self.parameters)
        return f"{base}; {params}"


# returned by detectors that could not identify the stream
OCTET_STREAM = MediaType("application", "octet-stream")
