"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidRequestError

# Chess board is always 8x8. (ranks, files)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """Zero-based (rank, file). Rank 0 is White's back rank, file 0 is the a-file.

    NOTE: no validation on creation. Off-board squares are allowed to exist so the Board can report them as such.
    """

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0].lower()) - ord("a")
        rank = int(sq[1]) - 1
        square = cls(rank, file)
        if not square.is_within_bounds():
            raise InvalidRequestError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        """Off-board squares have no name, they are written as raw (rank,file)"""
        if not self.is_within_bounds():
            return f"({self.rank},{self.file})"
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_rank: int, d_file: int) -> Square:
        return Square(self.rank + d_rank, self.file + d_file)
