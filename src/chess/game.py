"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating what happens in a turn: looking up the piece, asking its movement rule
about the target square and, if the shape fits, updating the board -->
passes the outcome to the service layer, which can then pass it onwards to the API layer.
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from loguru import logger

from src.chess.board import Board
from src.chess.moves import Move, forward_one, is_valid_shape
from src.chess.pieces import Piece, PieceId
from src.chess.player import Player
from src.chess.results import (
    MoveAccepted,
    MoveRejected,
    MoveResult,
    OutOfBounds,
    RejectReason,
)
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Color, PieceType

BACK_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_DIMENSIONS[0] - 1}
PAWN_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: BOARD_DIMENSIONS[0] - 2}

# The order in which each player receives its pieces (and so the order of Player.piece_ids)
STARTING_LAYOUT: list[tuple[PieceType, tuple[int, ...]]] = [
    (PieceType.PAWN, tuple(range(BOARD_DIMENSIONS[1]))),
    (PieceType.ROOK, (0, 7)),
    (PieceType.KNIGHT, (1, 6)),
    (PieceType.BISHOP, (2, 5)),
    (PieceType.QUEEN, (3,)),
    (PieceType.KING, (4,)),
]


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    pieces: list[Piece]  # the arena: a piece's id is its index in this list
    players: dict[Color, Player]
    turn: Color
    turns_played: int = 0

    @classmethod
    def empty(cls, white_name: str = "Alice", black_name: str = "Bob") -> Self:
        """Two players, no pieces. White moves first."""
        return cls(
            board=Board(),
            pieces=[],
            players={
                Color.WHITE: Player(white_name, Color.WHITE),
                Color.BLACK: Player(black_name, Color.BLACK),
            },
            turn=Color.WHITE,
        )

    @classmethod
    def new_game(cls, white_name: str = "Alice", black_name: str = "Bob") -> Self:
        """Standard starting layout. Every piece is handed to its player and placed on the board."""
        game = cls.empty(white_name, black_name)
        for color in (Color.WHITE, Color.BLACK):
            for piece_type, files in STARTING_LAYOUT:
                rank = (
                    PAWN_RANK[color]
                    if piece_type == PieceType.PAWN
                    else BACK_RANK[color]
                )
                for file in files:
                    game.add_piece(Piece(piece_type, color, Square(rank, file)))
        logger.debug(f"Set up a new game with {len(game.pieces)} pieces")
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            players = {
                Color(color): Player(name, Color(color))
                for color, name in model.registered_players.items()
            }
            turn = Color(model.turn)
        except ValueError as e:
            raise GameStateError(f"Invalid color in game snapshot: {e}") from e

        if set(players) != {Color.WHITE, Color.BLACK}:
            raise GameStateError(
                f"A game needs exactly one white and one black player, got: {model.registered_players}"
            )

        pieces = [Piece.from_dict(data) for data in model.pieces]
        for piece_id, piece in enumerate(pieces):
            players[piece.color].add_piece(piece_id)

        board = Board.from_grid(model.board)
        for square in board.occupied_squares():
            piece_id = board.get(square)
            if not 0 <= piece_id < len(pieces) or pieces[piece_id].square != square:
                raise GameStateError(
                    f"Board cell {square.to_algebraic()} references piece {piece_id}, which does not stand there."
                )

        return cls(board, pieces, players, turn, model.turns_played)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            registered_players={
                color.value: player.name for color, player in self.players.items()
            },
            pieces=[piece.to_dict() for piece in self.pieces],
            board=self.board.to_grid(),
            turn=self.turn.value,
            turns_played=self.turns_played,
        )

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    def piece(self, piece_id: PieceId) -> Piece:
        if not 0 <= piece_id < len(self.pieces):
            raise GameStateError(f"Unknown piece id: {piece_id}")
        return self.pieces[piece_id]

    def piece_at(self, square: Square) -> Optional[Piece] | OutOfBounds:
        """Resolve the id stored on the board into the piece itself"""
        cell = self.board.get(square)
        if cell is None or isinstance(cell, OutOfBounds):
            return cell
        return self.pieces[cell]

    def add_piece(self, piece: Piece) -> PieceId:
        """Hand the piece to the player of its color and put it on the board."""
        if not piece.square.is_within_bounds():
            raise GameStateError(f"Cannot place {piece} outside of the board.")
        if self.board.get(piece.square) is not None:
            raise GameStateError(
                f"Cannot place {piece}: square {piece.square.to_algebraic()} is already taken."
            )

        piece_id = len(self.pieces)
        self.pieces.append(piece)
        self.players[piece.color].add_piece(piece_id)
        self.board.place(piece_id, piece.square)
        return piece_id

    def attempt_move(self, move: Move) -> MoveResult:
        """
        Execute the move if the piece's movement rule allows the shape.
        -----

        On success exactly one cell is cleared, one cell is written and the piece's square is updated.
        Whatever stood on the target square is overwritten (reported as `displaced`).
        On rejection nothing changes.
        """
        piece = self.piece(move.piece_id)
        from_square = piece.square

        rejection = self._rejection_reason(move.piece_id, move.to_square)
        if rejection is not None:
            logger.info(
                f"Rejected move of piece {move.piece_id} {from_square.to_algebraic()}->{move.to_square.to_algebraic()}: {rejection}"
            )
            return MoveRejected(move.piece_id, from_square, move.to_square, rejection)

        left_behind = self.board.remove(from_square)
        displaced = self.board.get(move.to_square)
        piece.move_to(move.to_square)
        self.board.place(move.piece_id, move.to_square)

        logger.debug(
            f"{piece.color.name} {piece.type.value} {from_square.to_algebraic()}->{move.to_square.to_algebraic()}"
        )
        if displaced is not None:
            logger.warning(
                f"Piece {displaced} was overwritten on {move.to_square.to_algebraic()} and left the board"
            )
        # a piece that was overwritten earlier no longer owns its cell: whoever stands there is wiped
        cleared = None if left_behind == move.piece_id else left_behind
        if cleared is not None:
            logger.warning(
                f"Piece {move.piece_id} was no longer on {from_square.to_algebraic()}, piece {cleared} got cleared from there instead"
            )
        return MoveAccepted(
            move.piece_id, from_square, move.to_square, displaced, cleared
        )

    def take_turn(self, move: Move) -> MoveResult:
        """Attempt the move, then hand the turn to the opponent (whether or not the move was accepted)."""
        result = self.attempt_move(move)
        self._switch_turn()
        return result

    def demo_move(self) -> Move:
        """The move the demo plays: the turn player's first piece steps straight ahead."""
        player = self.current_player
        if not player.piece_ids:
            raise GameStateError(f"{player.label()} has no pieces to move.")
        piece_id = player.piece_ids[0]
        return Move(piece_id, forward_one(self.pieces[piece_id]))

    def render(self) -> str:
        return self.board.render(self.pieces)

    # -- PRIVATE HELPERS ---
    def _rejection_reason(
        self, piece_id: PieceId, to_square: Square
    ) -> Optional[RejectReason]:
        piece = self.pieces[piece_id]
        if not to_square.is_within_bounds():
            return RejectReason.OUT_OF_BOUNDS
        if not is_valid_shape(piece, to_square):
            return RejectReason.INVALID_SHAPE
        return None

    def _switch_turn(self) -> None:
        self.turn = self.turn.opponent
        self.turns_played += 1


def step(game: Game, move: Move) -> tuple[Game, MoveResult]:
    """
    Pure version of a turn: play the move on a copy of the game.
    The game that was passed in is left untouched.
    """
    next_game = deepcopy(game)
    result = next_game.take_turn(move)
    return next_game, result
