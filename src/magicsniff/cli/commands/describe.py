"""Describe command - validate a signature and show how it will match."""

from __future__ import annotations

from dataclasses import dataclass

from magicsniff import console
from magicsniff.cli._common import EXIT_MATCH, SignatureArgs


@dataclass
class Describe(SignatureArgs):
    """Validate a magic signature and print its parameters."""

    def run(self) -> int:
        detector = self.to_config().build()
        begin, end = detector.offset_range
        mask = detector.mask.hex() if detector.mask is not None else "-"

        console.header(str(detector.media_type))
        console.key_value("pattern", detector.pattern.hex() or "(empty)")
        console.key_value("mask", mask)
        console.key_value("offset range", f"[{begin},{end}]")
        console.key_value("window", f"{detector.length} bytes")
        console.key_value("max read", f"{end + detector.length} bytes")
        return EXIT_MATCH
