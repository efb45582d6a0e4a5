"""Configuration validators."""

from config.settings import Settings
from nft_pnl.exceptions import ConfigError
from nft_pnl.ledger import EmissionOrder

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_settings(settings: Settings) -> None:
    """Raise ConfigError if any processing setting is invalid."""
    if settings.LOG_LEVEL.upper() not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
    emission_order(settings)
    if settings.OUTPUT_INDENT < 0:
        raise ConfigError("OUTPUT_INDENT must be >= 0")


def emission_order(settings: Settings) -> EmissionOrder:
    """Resolve FLOOR_EMISSION_ORDER, raising ConfigError if unknown."""
    try:
        return EmissionOrder(settings.FLOOR_EMISSION_ORDER.lower())
    except ValueError:
        choices = ", ".join(o.value for o in EmissionOrder)
        raise ConfigError(f"FLOOR_EMISSION_ORDER must be one of {choices}") from None
