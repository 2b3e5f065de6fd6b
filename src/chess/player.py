"""A player: a name, a color and the (ids of the) pieces it controls"""

from dataclasses import dataclass, field

from src.chess.pieces import PieceId
from src.core.shared_types import Color


@dataclass
class Player:
    name: str
    color: Color
    piece_ids: list[PieceId] = field(default_factory=list)

    def add_piece(self, piece_id: PieceId) -> None:
        """Pieces keep the order in which they were handed out during setup"""
        self.piece_ids.append(piece_id)

    def pieces(self) -> list[PieceId]:
        return list(self.piece_ids)

    def label(self) -> str:
        return f"{self.name} ({self.color.name})"
