"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from rookery.core.board import Board, home_row
from rookery.core.enums import CastlingRights, Color, PieceKind
from rookery.core.execution import apply_move, castle_rook_squares
from rookery.core.move import Move
from rookery.core.types import Position, is_on_board

# Offsets are (d_row, d_col).
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

_SLIDING_DIRS: dict[PieceKind, tuple[tuple[int, int], ...]] = {
    PieceKind.BISHOP: BISHOP_DIRS,
    PieceKind.ROOK: ROOK_DIRS,
    PieceKind.QUEEN: QUEEN_DIRS,
}

_KING_HOME_COL = 4


def pawn_direction(color: Color) -> int:
    """Row step of a forward pawn move."""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The opponent's home rank."""
    return home_row(color.opposite)


class MoveGenerator:
    """Move generation and attack queries over one board context.

    The context is the board plus the last executed move (for en passant)
    and the castling rights in force.  Nothing is mutated; legality is
    checked by simulating each candidate on a copy.
    """

    __slots__ = ("_board", "_last_move", "_castling")

    def __init__(
        self,
        board: Board,
        last_move: Move | None = None,
        castling: CastlingRights = CastlingRights.ALL,
    ) -> None:
        self._board = board
        self._last_move = last_move
        self._castling = castling

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(
        self, pos: Position, include_castling: bool = True
    ) -> list[Move]:
        """Moves obeying piece movement rules; may leave own king in check.

        Castling generation queries attacks, which in turn generate moves, so
        attack detection always passes ``include_castling=False``.
        """
        piece = self._board[pos]
        if piece is None:
            return []

        moves: list[Move] = []
        kind = piece.kind
        if kind == PieceKind.PAWN:
            self._gen_pawn(pos, piece.color, moves)
        elif kind == PieceKind.KNIGHT:
            self._gen_steps(pos, piece.color, KNIGHT_OFFSETS, moves)
        elif kind == PieceKind.KING:
            self._gen_steps(pos, piece.color, KING_OFFSETS, moves)
            if include_castling:
                self._gen_castling(pos, piece.color, piece.has_moved, moves)
        else:
            self._gen_sliding(pos, piece.color, _SLIDING_DIRS[kind], moves)
        return moves

    def legal_moves(self, pos: Position, color: Color) -> list[Move]:
        """Strictly legal moves for the *color* piece on *pos*.

        An empty square or a square holding the other side's piece yields
        an empty list.
        """
        piece = self._board[pos]
        if piece is None or piece.color != color:
            return []

        legal: list[Move] = []
        append_legal = legal.append
        for move in self.pseudo_legal_moves(pos, include_castling=True):
            outcome = apply_move(self._board, move, color, self._castling)
            after = MoveGenerator(outcome.board, outcome.move, outcome.castling)
            if not after.is_in_check(color):
                append_legal(move)
        return legal

    def all_legal_moves(self, color: Color) -> list[Move]:
        """Every legal move for *color*, row-major by origin square."""
        moves: list[Move] = []
        for pos in self._board.pieces(color):
            moves.extend(self.legal_moves(pos, color))
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?  False without a king."""
        king_pos = self._board.find_king(color)
        if king_pos is None:
            return False
        return self.is_square_attacked(king_pos, color.opposite)

    def is_square_attacked(self, target: Position, by_color: Color) -> bool:
        """Is *target* attacked by any piece of *by_color*?

        Pawns attack their two forward diagonals whether or not those squares
        are occupied, which differs from their move rule.
        """
        for pos, piece in self._board.occupied():
            if piece.color != by_color:
                continue
            if piece.kind == PieceKind.PAWN:
                if (
                    target.row == pos.row + pawn_direction(by_color)
                    and abs(target.col - pos.col) == 1
                ):
                    return True
                continue
            for move in self.pseudo_legal_moves(pos, include_castling=False):
                if move.to_pos == target:
                    return True
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pos: Position, color: Color, moves: list[Move]) -> None:
        board = self._board
        direction = pawn_direction(color)

        one_step = pos.offset(direction, 0)
        if is_on_board(one_step) and board.is_empty(one_step):
            self._add_pawn_move(pos, one_step, color, moves)
            if pos.row == pawn_start_row(color):
                two_step = pos.offset(2 * direction, 0)
                if is_on_board(two_step) and board.is_empty(two_step):
                    moves.append(Move(pos, two_step))

        for d_col in (-1, 1):
            cap = pos.offset(direction, d_col)
            if not is_on_board(cap):
                continue
            target = board[cap]
            if target is not None and target.color != color:
                self._add_pawn_move(pos, cap, color, moves)

        ep_target = self._en_passant_target(pos, color)
        if ep_target is not None:
            moves.append(Move(pos, ep_target, is_en_passant=True))

    @staticmethod
    def _add_pawn_move(
        pos: Position, to_pos: Position, color: Color, moves: list[Move]
    ) -> None:
        if to_pos.row == promotion_row(color):
            for kind in PROMOTION_KINDS:
                moves.append(Move(pos, to_pos, promotion=kind))
        else:
            moves.append(Move(pos, to_pos))

    def _en_passant_target(self, pos: Position, color: Color) -> Position | None:
        last = self._last_move
        if last is None:
            return None
        board = self._board
        enemy = board[last.to_pos]
        if enemy is None or enemy.kind != PieceKind.PAWN or enemy.color == color:
            return None
        if abs(last.from_pos.row - last.to_pos.row) != 2:
            return None
        if pos.row != last.to_pos.row or abs(pos.col - last.to_pos.col) != 1:
            return None
        target = Position(pos.row + pawn_direction(color), last.to_pos.col)
        if not is_on_board(target) or not board.is_empty(target):
            return None
        return target

    def _gen_steps(
        self,
        pos: Position,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_pos = pos.offset(d_row, d_col)
            if not is_on_board(to_pos):
                continue
            target = board[to_pos]
            if target is None or target.color != color:
                moves.append(Move(pos, to_pos))

    def _gen_sliding(
        self,
        pos: Position,
        color: Color,
        directions: tuple[tuple[int, int], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_pos = pos.offset(d_row, d_col)
            while is_on_board(to_pos):
                target = board[to_pos]
                if target is None:
                    moves.append(Move(pos, to_pos))
                    to_pos = to_pos.offset(d_row, d_col)
                    continue
                if target.color != color:
                    moves.append(Move(pos, to_pos))
                break

    def _gen_castling(
        self, king_pos: Position, color: Color, king_moved: bool, moves: list[Move]
    ) -> None:
        if king_moved or not self._castling & CastlingRights.both(color):
            return
        row = home_row(color)
        if king_pos != Position(row, _KING_HOME_COL):
            return

        opponent = color.opposite
        if self.is_square_attacked(king_pos, opponent):
            return

        board = self._board
        for kingside in (True, False):
            if not self._castling.allows(color, kingside):
                continue
            rook_from, _ = castle_rook_squares(row, kingside)
            rook = board[rook_from]
            if (
                rook is None
                or rook.kind != PieceKind.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue

            between = range(5, 7) if kingside else range(1, 4)
            if any(not board.is_empty(Position(row, c)) for c in between):
                continue

            # King passes through f/d and lands on g/c
            path = (5, 6) if kingside else (3, 2)
            if any(self.is_square_attacked(Position(row, c), opponent) for c in path):
                continue

            moves.append(
                Move(king_pos, Position(row, path[-1]), is_castling=True)
            )


# ── Functional API ───────────────────────────────────────────────────────────


def pseudo_legal_moves(
    board: Board,
    pos: Position,
    last_move: Move | None,
    castling: CastlingRights,
    include_castling: bool = True,
) -> list[Move]:
    return MoveGenerator(board, last_move, castling).pseudo_legal_moves(
        pos, include_castling
    )


def is_square_attacked(
    board: Board,
    pos: Position,
    attacker: Color,
    last_move: Move | None,
    castling: CastlingRights,
) -> bool:
    return MoveGenerator(board, last_move, castling).is_square_attacked(pos, attacker)


def is_king_in_check(
    board: Board,
    color: Color,
    last_move: Move | None,
    castling: CastlingRights,
) -> bool:
    return MoveGenerator(board, last_move, castling).is_in_check(color)


def legal_moves(
    board: Board,
    pos: Position,
    color: Color,
    last_move: Move | None,
    castling: CastlingRights,
) -> list[Move]:
    return MoveGenerator(board, last_move, castling).legal_moves(pos, color)


def all_legal_moves(
    board: Board,
    color: Color,
    last_move: Move | None,
    castling: CastlingRights,
) -> list[Move]:
    return MoveGenerator(board, last_move, castling).all_legal_moves(color)
