"""
Configuration - Game constants and environment settings.

Rule constants are fixed: the board size, starting fuel and starting cells
are part of the game itself and are not meant to be tuned per session.
Environment settings only affect the adapters (API, CLI).
"""

from __future__ import annotations
import os


# =============================================================================
# Rule constants
# =============================================================================

BOARD_RADIUS = 4  # 61 cells, 5 on each side
STARTING_FUEL = 12

# Cube coordinates (q, r, s)
HUMAN_START = (-2, 4, -2)
AI_START = (2, -4, 2)

# Degrees; presentation data only
HUMAN_FACING = 30.0  # northeast
AI_FACING = 210.0  # southwest

NEGATIVE_VALUES = (-9, -8, -7, -6, -5)
POSITIVE_VALUES = (5, 6, 7, 8, 9)

# Game ends once this many active cells (or fewer) remain
MIN_ACTIVE_CELLS = 2

# Pause before the AI acts in interactive front-ends
DEFAULT_AI_DELAY = 1.0


# =============================================================================
# Environment
# =============================================================================

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def default_seed() -> int | None:
    """Seed for new sessions from HEXFUEL_SEED, or None for a random game."""
    raw = os.getenv("HEXFUEL_SEED")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"HEXFUEL_SEED must be an integer, got {raw!r}")
