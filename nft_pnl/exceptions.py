"""Custom exceptions for the NFT PnL calculator."""


class PnlError(Exception):
    """Base exception for all PnL calculator errors."""


class InputError(PnlError):
    """An input file could not be read."""


class InputFormatError(InputError):
    """An input file was readable but its structure is malformed."""


class OutputError(PnlError):
    """The output file could not be written."""


class ConfigError(PnlError):
    """Missing or invalid configuration."""
