"""GameRepository backed by a SQL database through SQLAlchemy"""

from uuid import UUID, uuid4

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """One row per game. Saving a game replaces the snapshot columns of its row."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        row = DBGame(id=uuid4())
        self._write(row, game)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        logger.debug(f"Stored new game {row.id}")
        return self._read(row), row.id

    def get_game(self, game_id: UUID) -> GameModel | None:
        row = self.db.get(DBGame, game_id)
        return self._read(row) if row is not None else None

    def save_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        row = self.db.get(DBGame, game_id)
        if row is None:
            return None
        self._write(row, game)
        self.db.commit()
        self.db.refresh(row)
        logger.debug(f"Saved game {game_id} after {game.turns_played} turns")
        return self._read(row)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        row = self.db.get(DBGame, game_id)
        if row is None:
            return None
        last_snapshot = self._read(row)
        self.db.delete(row)
        self.db.commit()
        logger.debug(f"Deleted game {game_id}")
        return last_snapshot

    def list_game_ids(self) -> list[UUID]:
        query = select(DBGame.id).order_by(DBGame.created_at)
        return list(self.db.scalars(query))

    @staticmethod
    def _write(row: DBGame, game: GameModel) -> None:
        """Copy the snapshot onto the row (fresh containers, so the JSON columns register the change)"""
        row.registered_players = dict(game.registered_players)
        row.pieces = [dict(piece) for piece in game.pieces]
        row.board = [list(cells) for cells in game.board]
        row.turn = game.turn
        row.turns_played = game.turns_played

    @staticmethod
    def _read(row: DBGame) -> GameModel:
        return GameModel(
            registered_players=dict(row.registered_players),
            pieces=[dict(piece) for piece in row.pieces],
            board=[list(cells) for cells in row.board],
            turn=row.turn,
            turns_played=row.turns_played,
        )
