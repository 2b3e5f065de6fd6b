"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe snapshot of a game used between API, Service, DB, and Game layers.

    * pieces: the piece arena, in setup order. The index of a piece is its id.
    * board: 8x8 grid of piece ids (None for an empty cell), rank 0 first.
    """

    registered_players: dict[PieceColor, PlayerName]
    pieces: list[dict[str, Any]]
    board: list[list[Optional[int]]]
    turn: PieceColor
    turns_played: int
