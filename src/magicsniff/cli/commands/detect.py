"""Detect command - match one magic signature against a file."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import tyro

from magicsniff import console
from magicsniff.cli._common import (
    EXIT_ERROR,
    EXIT_MATCH,
    EXIT_NO_MATCH,
    SignatureArgs,
)
from magicsniff.logging_config import get_logger

logger = get_logger("cli.detect")

STDIN_PATH = Path("-")


@dataclass
class Detect(SignatureArgs):
    """Check whether a file matches a magic signature."""

    path: tyro.conf.Positional[Path] = field(
        default=STDIN_PATH,
        metadata={"help": "File to inspect ('-' for stdin)"},
    )

    def run(self) -> int:
        """Execute the detect command."""
        detector = self.to_config().build()
        logger.debug("running detector", detector=repr(detector))

        if self.path == STDIN_PATH:
            result = detector.detect(sys.stdin.buffer)
        else:
            # may be a pipe or /dev/fd path, not only a regular file
            try:
                f = self.path.open("rb")
            except FileNotFoundError:
                console.error(f"no such file: {self.path}")
                return EXIT_ERROR
            except OSError as e:
                console.error(f"cannot open {self.path}: {e.strerror or e}")
                return EXIT_ERROR
            with f:
                result = detector.detect(f)

        console.info(str(result))
        # detect() returns the configured instance on a match
        if result is detector.media_type:
            return EXIT_MATCH
        return EXIT_NO_MATCH
