"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.chess.square import Square
from src.core.shared_types import Color, PieceType

PieceColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    white_player: PlayerName = "Alice"
    black_player: PlayerName = "Bob"

    @field_validator(*["white_player", "black_player"])
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Player name cannot be empty.")
        return value

    @model_validator(mode="after")
    def validate_distinct_players(self) -> Self:
        # turns are checked by name, so two players with the same name could both move
        if self.white_player == self.black_player:
            raise ValueError(
                f"Both players are called {self.white_player!r}, pick different names."
            )
        return self


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        # raises InvalidRequestError (a ValueError) if this is not a square on the board
        return Square.from_algebraic(value).to_algebraic()


class DemoTurnRequest(BaseModel):
    """Let the turn player play the demo move (first piece, one square forward)"""

    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceOnBoard(BaseModel):
    square: str
    type: PieceType
    color: Color


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    turn: Color
    turns_played: int
    board: str
    pieces: list[PieceOnBoard]


class MoveResponse(BaseModel):
    game: GameResponse
    from_square: str
    to_square: str
    accepted: bool
    rejection_reason: Optional[str] = None
    displaced_piece: bool = False
    cleared_piece: bool = False


class ListGamesResponse(BaseModel):
    game_ids: list[UUID]
