"""Unit tests for legal birth/attack computation."""

from klopy.moves import can_move, compute_actions, has_presence


class TestComputeActions:
    def test_birth_around_single_cell(self, make_board):
        board = make_board(
            "...",
            ".A.",
            "...",
        )
        actions = compute_actions(board, 1)
        assert actions.birth == {(0, 1), (1, 0), (1, 2), (2, 1)}
        assert actions.attack == frozenset()

    def test_attack_only_adjacent_active_enemies(self, make_board):
        board = make_board(
            "AB.",
            "b..",
            "..B",
        )
        actions = compute_actions(board, 1)
        assert (0, 1) in actions.attack
        # infected enemy cells are never attackable
        assert (1, 0) not in actions.attack
        # not adjacent to anything player 1 owns
        assert (2, 2) not in actions.attack

    def test_infected_cells_anchor_births(self, make_board):
        board = make_board(
            "a..",
            "...",
            "..B",
        )
        actions = compute_actions(board, 1)
        assert actions.birth == {(0, 1), (1, 0)}

    def test_infected_cells_anchor_attacks(self, make_board):
        board = make_board(
            "aB.",
            "...",
            "...",
        )
        assert compute_actions(board, 1).attack == {(0, 1)}

    def test_own_cells_never_targets(self, make_board):
        board = make_board(
            "AA.",
            "...",
            "...",
        )
        actions = compute_actions(board, 1)
        assert (0, 0) not in actions
        assert (0, 1) not in actions
        assert (0, 2) in actions

    def test_player_without_cells_has_nothing(self, make_board):
        board = make_board(
            "A..",
            "...",
            "...",
        )
        actions = compute_actions(board, 2)
        assert not actions.can_move


class TestPresence:
    def test_active_cell_gives_presence(self, make_board):
        board = make_board(
            "A..",
            "...",
            "..b",
        )
        assert has_presence(board, 1)

    def test_infected_only_is_not_presence(self, make_board):
        board = make_board(
            "A..",
            "...",
            "..b",
        )
        assert not has_presence(board, 2)

    def test_stuck_player_cannot_move(self, make_board):
        board = make_board(
            "Ab.",
            "b..",
            "..B",
        )
        assert has_presence(board, 1)
        assert not can_move(board, 1)
        assert can_move(board, 2)
