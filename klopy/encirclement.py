"""Encirclement detection: convert enemy groups fully enclosed by one player."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

from klopy.board import Board, Cell, CellState, Coord, infected

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    attacker: int
    cells: frozenset[Coord]

    @property
    def count(self) -> int:
        return len(self.cells)


def find_groups(board: Board, player_id: int) -> list[frozenset[Coord]]:
    """Split the player's active cells into maximal 4-connected groups."""
    groups = []
    visited: set[Coord] = set()
    for start in board.coords():
        if start in visited or not _is_active_of(board, start, player_id):
            continue
        group = {start}
        visited.add(start)
        queue = deque([start])
        while queue:
            row, col = queue.popleft()
            for nb in board.neighbors(row, col):
                if nb not in visited and _is_active_of(board, nb, player_id):
                    visited.add(nb)
                    group.add(nb)
                    queue.append(nb)
        groups.append(frozenset(group))
    return groups


def group_boundary(board: Board, group: frozenset[Coord]) -> set[Coord]:
    """In-board cells touching the group from outside."""
    boundary = set()
    for row, col in group:
        for nb in board.neighbors(row, col):
            if nb not in group:
                boundary.add(nb)
    return boundary


def is_enclosed(board: Board, group: frozenset[Coord], attacker: int) -> bool:
    """True when every boundary cell of ``group`` belongs to ``attacker``.

    Off-board neighbours impose nothing, so groups against an edge need
    fewer attacker cells. A group with no boundary at all (it fills the
    board) is not enclosed by anyone.
    """
    boundary = group_boundary(board, group)
    if not boundary:
        return False
    return all(board.owned_by(r, c, attacker) for r, c in boundary)


def find_enclosed(board: Board, attacker: int, player_ids: Iterable[int]) -> frozenset[Coord]:
    """Cells of every other player's groups that ``attacker`` encloses."""
    to_infect: set[Coord] = set()
    for enemy in player_ids:
        if enemy == attacker:
            continue
        for group in find_groups(board, enemy):
            if is_enclosed(board, group, attacker):
                to_infect.update(group)
    return frozenset(to_infect)


def resolve_encirclements(board: Board, player_ids: Iterable[int]) -> tuple[Board, list[Conversion]]:
    """Run one encirclement pass for every player as attacker.

    All conversions are found against the board as it was before the pass
    and then applied together.
    """
    player_ids = list(player_ids)
    conversions = []
    for attacker in player_ids:
        cells = find_enclosed(board, attacker, player_ids)
        if cells:
            conversions.append(Conversion(attacker=attacker, cells=cells))

    updates: dict[Coord, Cell] = {}
    for conversion in conversions:
        _LOGGER.info("Player %s encircled %d cell(s)", conversion.attacker, conversion.count)
        for coord in conversion.cells:
            updates[coord] = infected(conversion.attacker)
    return board.with_cells(updates), conversions


def _is_active_of(board: Board, coord: Coord, player_id: int) -> bool:
    cell = board.cell(*coord)
    return cell.state is CellState.ACTIVE and cell.owner == player_id
