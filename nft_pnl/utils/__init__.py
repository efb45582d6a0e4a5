"""Utility modules for the nft_pnl package.

Sub-modules:
- logging: configure_logging() for structlog setup
"""

from .logging import configure_logging

__all__ = ["configure_logging"]
