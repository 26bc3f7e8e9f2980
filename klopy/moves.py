"""Legal move computation: births and attacks for a player."""

from __future__ import annotations

from dataclasses import dataclass

from klopy.board import Board, CellState, Coord


@dataclass(frozen=True)
class LegalActions:
    birth: frozenset[Coord] = frozenset()
    attack: frozenset[Coord] = frozenset()

    @property
    def can_move(self) -> bool:
        return bool(self.birth or self.attack)

    def __contains__(self, coord: Coord) -> bool:
        return coord in self.birth or coord in self.attack


NO_ACTIONS = LegalActions()


def compute_actions(board: Board, player_id: int) -> LegalActions:
    """Scan the whole board for cells the player may act on.

    A birth target is an empty cell next to anything the player owns.
    An attack target is an enemy *active* cell next to anything the player
    owns; infected cells are never attackable.
    """
    birth = set()
    attack = set()
    for row, col in board.coords():
        cell = board.cell(row, col)
        if cell.state is CellState.EMPTY:
            if board.is_adjacent_to_player(row, col, player_id):
                birth.add((row, col))
        elif cell.state is CellState.ACTIVE and cell.owner != player_id:
            if board.is_adjacent_to_player(row, col, player_id):
                attack.add((row, col))
    return LegalActions(birth=frozenset(birth), attack=frozenset(attack))


def can_move(board: Board, player_id: int) -> bool:
    return compute_actions(board, player_id).can_move


def has_presence(board: Board, player_id: int) -> bool:
    """True if the player still owns at least one active cell."""
    for row, col in board.coords():
        cell = board.cell(row, col)
        if cell.state is CellState.ACTIVE and cell.owner == player_id:
            return True
    return False
