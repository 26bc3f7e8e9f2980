"""Pydantic models exchanged with the presentation layer."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from klopy.board import CellState


class GamePhase(str, Enum):
    SETUP = "setup"
    PLACEMENT = "placement"
    PLAYING = "playing"
    ENDED = "ended"


class ActionKind(str, Enum):
    PLACE = "place"
    BIRTH = "birth"
    ATTACK = "attack"


class IgnoreReason(str, Enum):
    NOT_STARTED = "not_started"
    GAME_OVER = "game_over"
    OUT_OF_BOUNDS = "out_of_bounds"
    CELL_OCCUPIED = "cell_occupied"
    NO_ACTIONS_LEFT = "no_actions_left"
    ILLEGAL_TARGET = "illegal_target"


# ---------------------------------------------------------------------------
# Click results
# ---------------------------------------------------------------------------

class Accepted(BaseModel):
    type: Literal["accepted"] = "accepted"
    action: ActionKind
    row: int
    col: int


class Ignored(BaseModel):
    type: Literal["ignored"] = "ignored"
    reason: IgnoreReason


ClickResult = Accepted | Ignored


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

class PlayerProfile(BaseModel):
    id: int
    name: str
    color: str


class PlayerView(PlayerProfile):
    score: int = 0


class CellView(BaseModel):
    state: CellState
    owner: int | None = None


class LegalActionsView(BaseModel):
    birth: list[tuple[int, int]] = Field(default_factory=list)
    attack: list[tuple[int, int]] = Field(default_factory=list)


class LogEntry(BaseModel):
    text: str
    time: float


class GameSnapshot(BaseModel):
    phase: GamePhase
    grid_size: int
    cell_size: int
    board: list[list[CellView]]
    current_player: int | None
    actions_left: int
    placement_order: list[int]
    players: list[PlayerView]
    legal_actions: LegalActionsView
    winner: int | None = None
    is_tie: bool = False


# Palette of the original game; a two-player game uses the first two entries
PLAYER_PALETTE = [
    PlayerProfile(id=1, name="Green bugs", color="#00ff88"),
    PlayerProfile(id=2, name="Blue bugs", color="#00d4ff"),
    PlayerProfile(id=3, name="Purple bugs", color="#b84dff"),
    PlayerProfile(id=4, name="Orange bugs", color="#ff6b35"),
]
