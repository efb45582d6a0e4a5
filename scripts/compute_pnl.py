#!/usr/bin/env python3
# scripts/compute_pnl.py
"""Compute wallet PnL snapshots from a checkout without installing.

Usage:
    uv run python scripts/compute_pnl.py \
        data/trades.json \
        data/floor_prices.json \
        data/pnl.json

Settings (LOG_LEVEL, FLOOR_EMISSION_ORDER, OUTPUT_INDENT) come from the
environment or .env.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nft_pnl.cli import main

if __name__ == "__main__":
    sys.exit(main())
