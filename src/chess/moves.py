"""
Geometry of the movement rules

Key idea: one shape predicate per piece type, looked up in MOVEMENT_RULES.

A shape predicate only answers "is this the shape of move this piece type makes?".
It does NOT look at other pieces: no blocking, no captures, no check. Whether the
move is then executed is decided by the Game.
"""

from dataclasses import dataclass
from typing import Callable

from src.chess.pieces import FORWARD_DIRECTION, Piece, PieceId
from src.chess.square import Square
from src.core.shared_types import Color, PieceType

# (piece color, from square, to square) -> is the shape allowed
ShapeRuleFn = Callable[[Color, Square, Square], bool]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made: which piece goes where"""

    piece_id: PieceId
    to_square: Square


def _deltas(from_square: Square, to_square: Square) -> tuple[int, int]:
    """Absolute distance along the ranks and along the files"""
    return (
        abs(to_square.rank - from_square.rank),
        abs(to_square.file - from_square.file),
    )


# --- MOVEMENT RULES ---
def pawn_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """
    A pawn moves a single square forward, on the same file.

    NOTE: no double step from the starting rank, no diagonal captures, no promotion.
    """
    return (
        to_square.rank - from_square.rank == FORWARD_DIRECTION[color]
        and to_square.file == from_square.file
    )


def rook_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """Rooks stay on their rank or on their file (pieces in between are ignored)"""
    return to_square.rank == from_square.rank or to_square.file == from_square.file


def knight_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """Knights jump in an L: two squares one way, one square the other way"""
    d_rank, d_file = _deltas(from_square, to_square)
    return (d_rank, d_file) in ((2, 1), (1, 2))


def bishop_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    d_rank, d_file = _deltas(from_square, to_square)
    return d_rank == d_file


def queen_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """The Queen combines the rook shape and the bishop shape"""
    return rook_shape(color, from_square, to_square) or bishop_shape(
        color, from_square, to_square
    )


def king_shape(color: Color, from_square: Square, to_square: Square) -> bool:
    """
    The King steps to any neighbouring square.

    NOTE: staying on the same square also fits this shape and is accepted.
    """
    d_rank, d_file = _deltas(from_square, to_square)
    return d_rank <= 1 and d_file <= 1


MOVEMENT_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: pawn_shape,
    PieceType.KNIGHT: knight_shape,
    PieceType.BISHOP: bishop_shape,
    PieceType.ROOK: rook_shape,
    PieceType.QUEEN: queen_shape,
    PieceType.KING: king_shape,
}


def is_valid_shape(piece: Piece, to_square: Square) -> bool:
    """Dispatch to the rule of the piece's type. Targets off the board never fit any shape."""
    if not to_square.is_within_bounds():
        return False
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(piece.color, piece.square, to_square)


def forward_one(piece: Piece) -> Square:
    """The square straight ahead of a piece, seen from its owner's side of the board"""
    return piece.square.offset(FORWARD_DIRECTION[piece.color], 0)
