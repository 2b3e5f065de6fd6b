"""Outcomes reported back to callers instead of raising (or printing) on a failed operation"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.chess.pieces import PieceId
from src.chess.square import Square


@dataclass(frozen=True)
class OutOfBounds:
    """A board operation was asked about a square that is not on the board"""

    square: Square


class RejectReason(StrEnum):
    OUT_OF_BOUNDS = "target square is not on the board"
    INVALID_SHAPE = "piece does not move like that"


@dataclass(frozen=True)
class MoveAccepted:
    piece_id: PieceId
    from_square: Square
    to_square: Square
    # Occupant of the target square that got overwritten (there are no captures, the piece simply leaves the board)
    displaced: Optional[PieceId] = None
    # Another piece wiped from the cell the mover left (the mover itself had been overwritten there earlier)
    cleared: Optional[PieceId] = None

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class MoveRejected:
    piece_id: PieceId
    from_square: Square
    to_square: Square
    reason: RejectReason

    @property
    def accepted(self) -> bool:
        return False


MoveResult = MoveAccepted | MoveRejected
