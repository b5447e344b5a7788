"""Exception types raised by magicsniff."""

from __future__ import annotations


class MagicSniffError(Exception):
    """Base class for all magicsniff errors."""


class ConfigurationError(MagicSniffError, ValueError):
    """A detector was configured with invalid parameters."""


class StreamError(MagicSniffError):
    """Reading from the input stream failed during detection."""
