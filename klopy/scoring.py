"""Territory scoring derived from the board."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from klopy.board import Board


def score_board(board: Board, player_ids: Iterable[int]) -> dict[int, int]:
    """Count owned cells per player, active and infected alike."""
    scores = {pid: 0 for pid in player_ids}
    for row, col in board.coords():
        owner = board.cell(row, col).owner
        if owner in scores:
            scores[owner] += 1
    return scores


def winner(scores: Mapping[int, int]) -> int | None:
    """Return the player with the strictly highest score, or None on a tie."""
    if not scores:
        return None
    best = max(scores.values())
    leaders = [pid for pid, score in scores.items() if score == best]
    if len(leaders) != 1:
        return None
    return leaders[0]
