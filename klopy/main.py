from __future__ import annotations

import random

from klopy.config import configure_logging, load_settings
from klopy.game import GameState


def create_game(rng: random.Random | None = None) -> GameState:
    """Build a game configured from the environment (and .env, if present)."""
    settings = load_settings()
    configure_logging(settings)
    return GameState(settings=settings, rng=rng)
