"""Game logic: phases, turn budget, move validation and end detection."""

from __future__ import annotations

import logging
import random
import time

from klopy.board import Board, active, infected
from klopy.config import Settings
from klopy.encirclement import Conversion, resolve_encirclements
from klopy.models import (
    PLAYER_PALETTE,
    Accepted,
    ActionKind,
    CellView,
    ClickResult,
    GamePhase,
    GameSnapshot,
    Ignored,
    IgnoreReason,
    LegalActionsView,
    LogEntry,
    PlayerProfile,
    PlayerView,
)
from klopy.moves import NO_ACTIONS, LegalActions, compute_actions, has_presence
from klopy.scoring import score_board, winner

_LOGGER = logging.getLogger(__name__)


class GameState:
    """A single two-player game, driven by clicks from the UI.

    Every accepted click is applied completely (board, legal actions,
    scores, turn handover) before ``submit_click`` returns. Rejected
    clicks leave the state untouched.
    """

    def __init__(self, settings: Settings | None = None, rng: random.Random | None = None):
        self.settings = settings or Settings()
        self.rng = rng or random.Random()
        self.players: list[PlayerProfile] = PLAYER_PALETTE[:2]
        self.reset()

    # -- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        self.phase = GamePhase.SETUP
        self.grid_size = self.settings.default_grid_size
        self.cell_size = self.settings.cell_size_for(self.grid_size)
        self.board = Board.empty(self.grid_size)
        self.current_player: int | None = None
        self.actions_left = self.settings.actions_per_turn
        self.placement_order: tuple[int, ...] = ()
        self.legal_actions: LegalActions = NO_ACTIONS
        self.scores = {p.id: 0 for p in self.players}
        self.winner: int | None = None
        self.log_entries: list[LogEntry] = []

    def start_game(self, size: int, cell_pixel_size: int | None = None) -> GameSnapshot:
        if size not in self.settings.grid_sizes:
            raise ValueError(f"Grid size {size} is not one of {self.settings.grid_sizes}")

        self.reset()
        self.grid_size = size
        self.cell_size = cell_pixel_size or self.settings.cell_size_for(size)
        self.board = Board.empty(size)

        order = [p.id for p in self.players]
        self.rng.shuffle(order)
        self.placement_order = tuple(order)
        self.current_player = order[0]
        self.phase = GamePhase.PLACEMENT

        _LOGGER.info("Game started on %dx%d board, placement order %s", size, size, order)
        self._log(f"{self.player_name(order[0])} places the starting bug first")
        return self.get_snapshot()

    def resume(self, board: Board, current_player: int, actions_left: int | None = None) -> GameSnapshot:
        """Continue play from an arbitrary position (puzzles, tests).

        The position is settled exactly as after a regular move, so a stuck
        or exhausted player is handled before this returns.
        """
        if board.size not in self.settings.grid_sizes:
            raise ValueError(f"Grid size {board.size} is not one of {self.settings.grid_sizes}")
        if current_player not in self.player_ids:
            raise ValueError(f"Unknown player {current_player}")
        if actions_left is None:
            actions_left = self.settings.actions_per_turn
        if not 0 <= actions_left <= self.settings.actions_per_turn:
            raise ValueError(f"actions_left must be within 0..{self.settings.actions_per_turn}")

        self.reset()
        self.grid_size = board.size
        self.cell_size = self.settings.cell_size_for(board.size)
        self.board = board
        self.placement_order = (current_player, self.other_player(current_player))
        self.current_player = current_player
        self.actions_left = actions_left
        self.phase = GamePhase.PLAYING
        self._after_change()
        return self.get_snapshot()

    @property
    def is_game_over(self) -> bool:
        return self.phase is GamePhase.ENDED

    @property
    def player_ids(self) -> list[int]:
        return [p.id for p in self.players]

    def player_name(self, player_id: int) -> str:
        for p in self.players:
            if p.id == player_id:
                return p.name
        return f"Player {player_id}"

    def other_player(self, player_id: int) -> int:
        for pid in self.player_ids:
            if pid != player_id:
                return pid
        raise ValueError(f"No opponent for player {player_id}")

    # -- input -------------------------------------------------------------

    def validate_click(self, row: int, col: int) -> IgnoreReason | None:
        """Return the reason a click would be ignored, or None if valid."""
        if self.phase is GamePhase.SETUP:
            return IgnoreReason.NOT_STARTED
        if self.phase is GamePhase.ENDED:
            return IgnoreReason.GAME_OVER
        if not _is_coord(row) or not _is_coord(col) or not self.board.in_bounds(row, col):
            return IgnoreReason.OUT_OF_BOUNDS

        if self.phase is GamePhase.PLACEMENT:
            if not self.board.cell(row, col).is_empty:
                return IgnoreReason.CELL_OCCUPIED
            return None

        if self.actions_left == 0:
            return IgnoreReason.NO_ACTIONS_LEFT
        if (row, col) not in compute_actions(self.board, self.current_player):
            return IgnoreReason.ILLEGAL_TARGET
        return None

    def submit_click(self, row: int, col: int) -> ClickResult:
        reason = self.validate_click(row, col)
        if reason is not None:
            _LOGGER.debug("Ignored click (%r, %r): %s", row, col, reason.value)
            return Ignored(reason=reason)

        if self.phase is GamePhase.PLACEMENT:
            result = self._place(row, col)
        else:
            result = self._act(row, col)
        self._after_change()
        return result

    # -- transitions -------------------------------------------------------

    def _place(self, row: int, col: int) -> Accepted:
        player = self.current_player
        self.board = self.board.with_cells({(row, col): active(player)})
        self._log(f"{self.player_name(player)} placed the starting bug at [{row}, {col}]")

        first, second = self.placement_order
        if player == first:
            self.current_player = second
            self._log(f"{self.player_name(second)} places the starting bug")
        else:
            self.current_player = first
            self.phase = GamePhase.PLAYING
            self.actions_left = self.settings.actions_per_turn
            _LOGGER.info("Placement finished, player %s moves first", first)
            self._log(f"Game started! {self.player_name(first)} moves")
        return Accepted(action=ActionKind.PLACE, row=row, col=col)

    def _act(self, row: int, col: int) -> Accepted:
        player = self.current_player
        name = self.player_name(player)
        if self.board.cell(row, col).is_empty:
            self.board = self.board.with_cells({(row, col): active(player)})
            action = ActionKind.BIRTH
            self._log(f"{name} gave birth to a bug at [{row}, {col}]")
        else:
            self.board = self.board.with_cells({(row, col): infected(player)})
            action = ActionKind.ATTACK
            self._log(f"{name} infected a bug at [{row}, {col}]")
        self.actions_left -= 1
        return Accepted(action=action, row=row, col=col)

    def _after_change(self) -> None:
        self._rescore()
        if self.phase is GamePhase.PLAYING:
            self._advance()

    def _advance(self) -> None:
        """Settle the turn: hand over exhausted turns, refresh legal actions,
        skip a player who is stuck, and end the game when someone is out."""
        while self.phase is GamePhase.PLAYING:
            if self.actions_left == 0:
                self._end_turn()
                continue

            player = self.current_player
            if not has_presence(self.board, player):
                self._end_game()
                return

            self.legal_actions = compute_actions(self.board, player)
            if not self.legal_actions.can_move:
                self._log(f"{self.player_name(player)} cannot make a move")
                self.actions_left = 0
                continue
            return

    def _end_turn(self) -> None:
        self.board, conversions = resolve_encirclements(self.board, self.player_ids)
        for conversion in conversions:
            self._log_conversion(conversion)
        self._rescore()

        for pid in self.player_ids:
            if not has_presence(self.board, pid) or not compute_actions(self.board, pid).can_move:
                self._end_game()
                return

        nxt = self.other_player(self.current_player)
        self.current_player = nxt
        self.actions_left = self.settings.actions_per_turn
        self._log(f"{self.player_name(nxt)} to move")

    def _end_game(self) -> None:
        self.phase = GamePhase.ENDED
        self.legal_actions = NO_ACTIONS
        self.winner = winner(self.scores)
        _LOGGER.info("Game over, scores %s, winner %s", self.scores, self.winner)
        if self.winner is not None:
            name = self.player_name(self.winner).upper()
            self._log(f"{name} WIN! Score: {self.scores[self.winner]}")
        else:
            score_line = " - ".join(str(self.scores[pid]) for pid in self.player_ids)
            self._log(f"Tie! Score: {score_line}")

    def _rescore(self) -> None:
        self.scores = score_board(self.board, self.player_ids)

    # -- output ------------------------------------------------------------

    def _log(self, text: str) -> None:
        self.log_entries.append(LogEntry(text=text, time=time.time()))

    def _log_conversion(self, conversion: Conversion) -> None:
        name = self.player_name(conversion.attacker)
        if conversion.count == 1:
            self._log(f"Encirclement! {name} infected 1 bug")
        else:
            self._log(f"Mass encirclement! {name} infected {conversion.count} bugs")

    def get_log(self) -> list[str]:
        return [entry.text for entry in self.log_entries]

    def get_snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phase=self.phase,
            grid_size=self.grid_size,
            cell_size=self.cell_size,
            board=[
                [CellView(state=cell.state, owner=cell.owner) for cell in row]
                for row in self.board.cells
            ],
            current_player=self.current_player,
            actions_left=self.actions_left,
            placement_order=list(self.placement_order),
            players=[
                PlayerView(id=p.id, name=p.name, color=p.color, score=self.scores[p.id])
                for p in self.players
            ],
            legal_actions=LegalActionsView(
                birth=sorted(self.legal_actions.birth),
                attack=sorted(self.legal_actions.attack),
            ),
            winner=self.winner,
            is_tie=self.is_game_over and self.winner is None,
        )


def _is_coord(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
