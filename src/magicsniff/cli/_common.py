"""Arguments shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from magicsniff.config import MagicType, SignatureConfig
from magicsniff.logging_config import configure_logging

# exit statuses
EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


@dataclass
class SignatureArgs:
    """Signature options common to all commands."""

    media_type: str = field(
        metadata={"help": "Media type reported on a match"},
    )
    value: str = field(
        metadata={"help": "Magic value (hex digits by default)"},
    )
    type: MagicType = field(
        default="hex",
        metadata={"help": "Encoding of --value and --mask"},
    )
    mask: str | None = field(
        default=None,
        metadata={"help": "Bit mask ANDed with input bytes before matching"},
    )
    offset: str = field(
        default="0",
        metadata={"help": "Start offset or inclusive range 'begin:end'"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def to_config(self) -> SignatureConfig:
        if self.debug:
            configure_logging(debug=True)
        return SignatureConfig(
            media_type=self.media_type,
            value=self.value,
            type=self.type,
            mask=self.mask,
            offset=self.offset,
        )
