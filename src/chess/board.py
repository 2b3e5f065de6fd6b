"""The Game board: an 8x8 grid of cells, each holding at most one piece id"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.pieces import EMPTY_SYMBOL, Piece, PieceId
from src.chess.results import OutOfBounds
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import GameStateError

Cell = Optional[PieceId]
Grid = list[list[Cell]]


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass
class Board:
    """
    The board only holds references (ids) into the piece arena owned by the Game.
    Every operation bounds-checks its square and answers OutOfBounds instead of raising.
    """

    grid: Grid = field(default_factory=_empty_grid)

    @classmethod
    def from_grid(cls, grid: Grid) -> Self:
        """Rebuild a board from a stored grid (rank by rank, file by file)"""
        if len(grid) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in grid
        ):
            raise GameStateError(
                f"Board grid must be {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]}."
            )
        return cls([list(row) for row in grid])

    def to_grid(self) -> Grid:
        return [list(row) for row in self.grid]

    def get(self, square: Square) -> Cell | OutOfBounds:
        """Id of the piece on this square (None if empty)"""
        if not square.is_within_bounds():
            return OutOfBounds(square)
        return self.grid[square.rank][square.file]

    def place(self, piece_id: PieceId, square: Square) -> Optional[OutOfBounds]:
        """Write the piece into the cell, replacing whatever was referenced there"""
        if not square.is_within_bounds():
            return OutOfBounds(square)
        self.grid[square.rank][square.file] = piece_id
        return None

    def remove(self, square: Square) -> Cell | OutOfBounds:
        """Clear the cell and return the id that was stored there"""
        if not square.is_within_bounds():
            return OutOfBounds(square)
        piece_id = self.grid[square.rank][square.file]
        self.grid[square.rank][square.file] = None
        return piece_id

    def occupied_squares(self) -> list[Square]:
        return [
            Square(rank, file)
            for rank, row in enumerate(self.grid)
            for file, cell in enumerate(row)
            if cell is not None
        ]

    def render(self, pieces: list[Piece]) -> str:
        """
        Human readable board: one rank per line (rank 0 first), cells separated by a space.
        Occupied cells show the owner's symbol, empty cells a dot.
        """
        return "\n".join(
            " ".join(
                EMPTY_SYMBOL if cell is None else pieces[cell].symbol() for cell in row
            )
            for row in self.grid
        )
