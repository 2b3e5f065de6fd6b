"""Defines the chess pieces: a kind, an owner and the square it currently stands on"""

from dataclasses import dataclass
from typing import Any, Self

from src.chess.square import Square
from src.core.exceptions import GameStateError
from src.core.shared_types import Color, PieceType

# Index into the game's piece arena. The board and the players only ever hold these.
PieceId = int

# Pawns only ever move towards the opponent: White up the board, Black down.
FORWARD_DIRECTION: dict[Color, int] = {
    Color.WHITE: 1,
    Color.BLACK: -1,
}

# Board rendering only distinguishes the owner of a piece
COLOR_TO_SYMBOL: dict[Color, str] = {
    Color.WHITE: "W",
    Color.BLACK: "B",
}
EMPTY_SYMBOL = "."


@dataclass
class Piece:
    type: PieceType
    color: Color
    square: Square

    def symbol(self) -> str:
        return COLOR_TO_SYMBOL[self.color]

    def move_to(self, square: Square) -> None:
        self.square = square

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Inverse of `to_dict` (used by the snapshots stored in the repository)"""
        try:
            return cls(
                type=PieceType(data["type"]),
                color=Color(data["color"]),
                square=Square(int(data["rank"]), int(data["file"])),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise GameStateError(f"Cannot restore piece from {data!r}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "color": self.color.value,
            "rank": self.square.rank,
            "file": self.square.file,
        }
