"""Where games are kept between requests. The service only depends on this Protocol."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Stores the latest snapshot of each game, keyed by a generated id"""

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a fresh snapshot under a new id; return what was stored and the id."""
        ...

    def get_game(self, game_id: UUID) -> GameModel | None: ...

    def save_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the snapshot of a known game. None if the id is unknown."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the game and return its last snapshot. None if the id is unknown."""
        ...

    def list_game_ids(self) -> list[UUID]:
        """Ids of all stored games, oldest first."""
        ...
