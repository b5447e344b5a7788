"""magicsniff CLI - match magic byte signatures against files.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

from typing import Annotated

import tyro
from pydantic import ValidationError

from magicsniff import console
from magicsniff.cli._common import EXIT_ERROR
from magicsniff.cli.commands.describe import Describe
from magicsniff.cli.commands.detect import Detect
from magicsniff.errors import MagicSniffError

# Type aliases for subcommand annotations
_Detect = Annotated[Detect, tyro.conf.subcommand("detect")]
_Describe = Annotated[Describe, tyro.conf.subcommand("describe")]

Command = _Detect | _Describe


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects MAGICSNIFF_DEBUG env var)
    from magicsniff.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="magicsniff",
            description="Match magic byte signatures against files.",
            args=argv,
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except ValidationError as e:
        console.error(f"invalid signature: {e}")
        return EXIT_ERROR
    except MagicSniffError as e:
        console.error(str(e))
        return EXIT_ERROR
