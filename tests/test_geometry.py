"""Tests pour la géométrie du plateau et les accesseurs en lecture (TRN-001)."""

import pytest

from tourney.engine.board import Board
from tourney.engine.errors import ModeViolation
from tourney.engine.rules import KNIGHT_DELTAS


class TestConstruction:
    """Dimensions, allocation et cycle de vie du plateau."""

    def test_dimensions(self):
        board = Board(8, 6)
        assert board.width == 8
        assert board.height == 6
        assert board.size == 48
        assert len(board) == 48

    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-2, 3)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            Board(width, height)

    def test_new_board_is_empty_and_undirected(self):
        board = Board(4, 4)
        assert board.is_undirected
        assert not board.is_directed
        assert board.has_storage
        assert all(board[i] is None for i in board.cells())
        assert list(board) == [None] * 16

    def test_odd_board_has_no_storage(self):
        """Un plateau de taille impaire ne peut pas porter de tourney."""
        board = Board(3, 3)
        assert not board.has_storage
        assert board.move_table() == []
        assert board[0] is None
        assert not board.insert_undirected(0, 5)
        assert not board.is_tour()
        assert not board.is_tourney()

    def test_from_move_table_copies_entries(self):
        move = [1, 2, 3, 0]
        board = Board.from_move_table(move, 4, 1)
        move[0] = 3  # la table source n'est pas partagée
        assert board.move_table() == [1, 2, 3, 0]
        assert board.is_undirected

    def test_from_move_table_accepts_none_for_empty_cells(self):
        board = Board.from_move_table([1, None, None, None], 4, 1)
        assert board[0] == 1
        assert board[1] is None

    def test_from_move_table_length_mismatch(self):
        with pytest.raises(ValueError):
            Board.from_move_table([1, 0], 4, 1)

    @pytest.mark.parametrize("move", [[1, -2, 3, 0], [1, 2, 3, 4], [1, 2, 3, -5]])
    def test_from_move_table_rejects_off_board_entries(self, move):
        """Seules UNUSED et les cases du plateau sont des entrées valides."""
        with pytest.raises(ValueError):
            Board.from_move_table(move, 4, 1)

    def test_from_tables_rejects_off_board_secondary(self):
        with pytest.raises(ValueError):
            Board.from_tables(4, 1, [1, 0, 3, 2], [1, 0, 3, 9])

    def test_from_tables_on_odd_board(self):
        """Même contrat de longueur que from_move_table, tables ignorées ensuite."""
        board = Board.from_tables(3, 1, [-1, -1, -1])
        assert board.is_undirected
        assert not board.has_storage

        directed = Board.from_tables(3, 1, [-1, -1, -1], [-1, -1, -1])
        assert directed.is_directed
        assert not directed.has_storage

        with pytest.raises(ValueError):
            Board.from_tables(3, 1, [])

    def test_copy_is_independent(self):
        board = Board(4, 1)
        board.insert_undirected(0, 1)
        clone = board.copy()
        clone.insert_undirected(2, 3)
        assert board[2] is None
        assert clone[0] == 1

    def test_clear_resets_to_empty_undirected(self):
        board = Board(4, 1)
        board.make_directed()
        assert board.insert_directed(0, 1)
        board.clear()
        assert board.is_undirected
        assert board.move_table() == [-1, -1, -1, -1]


class TestCoordinates:
    """Bornes, conversion index <-> coordonnées et deltas."""

    def test_range_predicates(self):
        board = Board(5, 4)
        assert board.cell_index_in_range(0)
        assert board.cell_index_in_range(19)
        assert not board.cell_index_in_range(20)
        assert not board.cell_index_in_range(-1)
        assert board.in_range_x(4) and not board.in_range_x(5)
        assert board.in_range_y(3) and not board.in_range_y(4)

    def test_row_major_index(self):
        board = Board(5, 4)
        assert board.coords(7) == (2, 1)
        assert board.cell_index(2, 1) == 7

    def test_destination(self):
        board = Board(8, 8)
        assert board.destination(0, (2, 1)) == 10
        assert board.destination(0, (1, 2)) == 17
        assert board.destination(0, (2, -1)) is None
        assert board.destination(0, (-1, 2)) is None
        assert board.destination(64, (1, 2)) is None

    def test_destination_does_not_wrap_rows(self):
        board = Board(8, 8)
        # (7, 0) + (2, 1) sortirait à droite, pas sur la ligne suivante
        assert board.destination(7, (2, 1)) is None

    def test_move_index_recovers_every_delta(self):
        board = Board(5, 6)
        for cell in board.cells():
            for idx, delta in enumerate(KNIGHT_DELTAS):
                dest = board.destination(cell, delta)
                if dest is not None:
                    assert board.move_index(cell, dest) == idx

    def test_move_index_not_a_knight_move(self):
        board = Board(5, 6)
        assert board.move_index(0, 1) is None
        assert board.move_index(0, 0) is None
        assert board.move_index(0, 30) is None
        assert board.move_index(-1, 7) is None

    def test_is_knight_move(self):
        board = Board(8, 8)
        assert board.is_knight_move(0, 10)
        assert board.is_knight_move(10, 0)
        assert not board.is_knight_move(0, 9)
        assert not board.is_knight_move(0, 64)
        # (7, 0) -> (1, 1): dx = -6, pas de coup malgré la différence d'index
        assert not board.is_knight_move(7, 9)


class TestUndirectedQueries:
    """Prédicats d'occupation utilisés par les heuristiques externes."""

    def test_is_on_board(self):
        board = Board(8, 8)
        assert board.is_on_board(0, (2, 1))
        assert not board.is_on_board(0, (-2, 1))
        assert not board.is_on_board(99, (2, 1))

    def test_is_unused_reports_off_board_as_used(self):
        board = Board(4, 4)
        assert board.is_unused(0)
        assert not board.is_unused(16)
        assert not board.is_unused(-1)
        assert not board.is_unused(0, (-1, 2))
        assert board.is_unused(0, (2, 1))

    def test_getitem_reports_off_board_as_unused(self):
        """board[i] hors plateau vaut None alors que is_unused(i) est faux."""
        board = Board(4, 4)
        assert board[16] is None
        assert not board.is_unused(16)

    def test_available_move_count(self):
        board = Board(8, 8)
        assert board.available_move_count(0) == 2
        assert board.available_move_count(27) == 8
        assert board.insert_undirected(10, 20)
        assert board.available_move_count(0) == 1
        assert board.available_move_count(64) == 0

    def test_undirected_queries_reject_directed_board(self):
        board = Board(4, 4)
        board.make_directed()
        with pytest.raises(ModeViolation):
            board.is_on_board(0, (2, 1))
        with pytest.raises(ModeViolation):
            board.is_unused(0)
        with pytest.raises(ModeViolation):
            board.available_move_count(0)
        with pytest.raises(ModeViolation):
            board[0]
