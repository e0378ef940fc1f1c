"""Tests for Board, Position and Piece value types."""

import pytest

from rookery.core.board import Board, home_row
from rookery.core.enums import Color, PieceKind
from rookery.core.piece import Piece
from rookery.core.types import (
    Position,
    all_positions,
    is_on_board,
    parse_square,
    square_name,
)


class TestPosition:
    def test_square_names(self) -> None:
        assert square_name(Position(7, 4)) == "e1"
        assert square_name(Position(0, 0)) == "a8"
        assert square_name(Position(0, 7)) == "h8"
        assert square_name(Position(7, 0)) == "a1"

    def test_parse_square(self) -> None:
        assert parse_square("e4") == Position(4, 4)
        assert parse_square("h1") == Position(7, 7)

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "a0", "e44", "E4"])
    def test_parse_square_rejects_garbage(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)

    def test_square_name_off_board_raises(self) -> None:
        with pytest.raises(ValueError):
            square_name(Position(8, 0))

    def test_offset_may_leave_board(self) -> None:
        pos = Position(0, 0).offset(-1, 2)
        assert pos == Position(-1, 2)
        assert not is_on_board(pos)
        assert str(pos) == "(-1, 2)"

    def test_str_is_square_name(self) -> None:
        assert str(Position(6, 4)) == "e2"

    def test_all_positions_row_major(self) -> None:
        squares = all_positions()
        assert len(squares) == 64
        assert squares[0] == Position(0, 0)
        assert squares[1] == Position(0, 1)
        assert squares[-1] == Position(7, 7)


class TestPiece:
    def test_letters(self) -> None:
        assert str(Piece(PieceKind.KNIGHT, Color.WHITE)) == "N"
        assert str(Piece(PieceKind.KNIGHT, Color.BLACK)) == "n"
        assert str(Piece(PieceKind.PAWN, Color.BLACK)) == "p"

    def test_symbol(self) -> None:
        assert Piece(PieceKind.KING, Color.WHITE).symbol == "♔"
        assert Piece(PieceKind.QUEEN, Color.BLACK).symbol == "♛"

    def test_moved_returns_new_value(self) -> None:
        rook = Piece(PieceKind.ROOK, Color.WHITE)
        moved = rook.moved()
        assert moved.has_moved
        assert not rook.has_moved
        assert moved.moved() is moved

    def test_has_moved_is_part_of_equality(self) -> None:
        rook = Piece(PieceKind.ROOK, Color.WHITE)
        assert rook != rook.moved()
        assert rook.moved().with_moved(False) == rook


class TestBoardAccess:
    def test_off_board_read_is_none(self) -> None:
        board = Board.initial()
        assert board[Position(-1, 0)] is None
        assert board[Position(0, 8)] is None

    def test_off_board_write_raises(self) -> None:
        board = Board.empty()
        with pytest.raises(IndexError):
            board[Position(8, 8)] = Piece(PieceKind.KING, Color.WHITE)

    def test_empty_board(self) -> None:
        board = Board.empty()
        assert list(board.occupied()) == []
        assert board.find_king(Color.WHITE) is None

    def test_equality(self) -> None:
        assert Board.initial() == Board.initial()
        assert Board.initial() != Board.empty()


class TestInitialBoard:
    def test_piece_count(self) -> None:
        board = Board.initial()
        assert len(list(board.occupied())) == 32
        assert len(board.pieces(Color.WHITE)) == 16
        assert len(board.pieces(Color.BLACK)) == 16

    def test_home_rows(self) -> None:
        assert home_row(Color.WHITE) == 7
        assert home_row(Color.BLACK) == 0

    def test_kings_and_queens(self) -> None:
        board = Board.initial()
        assert board[parse_square("e1")] == Piece(PieceKind.KING, Color.WHITE)
        assert board[parse_square("d1")] == Piece(PieceKind.QUEEN, Color.WHITE)
        assert board[parse_square("e8")] == Piece(PieceKind.KING, Color.BLACK)
        assert board[parse_square("d8")] == Piece(PieceKind.QUEEN, Color.BLACK)

    def test_pawn_rows(self) -> None:
        board = Board.initial()
        for col in range(8):
            assert board[Position(6, col)] == Piece(PieceKind.PAWN, Color.WHITE)
            assert board[Position(1, col)] == Piece(PieceKind.PAWN, Color.BLACK)

    def test_nothing_has_moved(self) -> None:
        board = Board.initial()
        assert all(not piece.has_moved for _, piece in board.occupied())

    def test_find_king(self) -> None:
        board = Board.initial()
        assert board.find_king(Color.WHITE) == Position(7, 4)
        assert board.find_king(Color.BLACK) == Position(0, 4)

    def test_pieces_row_major(self) -> None:
        squares = Board.initial().pieces(Color.BLACK)
        assert squares[0] == Position(0, 0)
        assert squares[-1] == Position(1, 7)


class TestBoardCopy:
    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[parse_square("e2")] = None
        assert board[parse_square("e2")] is not None
        assert clone != board

    def test_rows_snapshot(self) -> None:
        board = Board.initial()
        rows = board.rows()
        rows[0][0] = None
        assert board[Position(0, 0)] is not None

    def test_repr_draws_ranks(self) -> None:
        text = repr(Board.initial())
        lines = text.splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[-1] == "  a b c d e f g h"
