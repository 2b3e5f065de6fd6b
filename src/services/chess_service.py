"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

from uuid import UUID

from loguru import logger

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    DemoTurnRequest,
    GameResponse,
    GetGameRequest,
    ListGamesResponse,
    MoveRequest,
    MoveResponse,
    PieceOnBoard,
)
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.results import MoveAccepted, MoveRejected, MoveResult
from src.chess.square import Square
from src.core.exceptions import (
    InvalidRequestError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.db.repository import GameRepository


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up the starting position for two players and store it."""

        new_game = Game.new_game(
            white_name=request.white_player, black_name=request.black_player
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            f"Created game {game_id}: {request.white_player} vs {request.black_player}"
        )
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        Only the turn player may move, and only one of its own pieces.
        A move with the wrong shape is not an error: the response reports it as rejected and the turn still passes.
        """
        game = Game.from_model(self._fetch_game(request.game_id))

        # make sure it is your turn
        turn_player = game.current_player
        if request.player_name != turn_player.name:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {turn_player.name} to make a move first."
            )

        from_square = Square.from_algebraic(request.from_square)
        piece_id = game.board.get(from_square)
        if piece_id is None or piece_id not in turn_player.piece_ids:
            raise InvalidRequestError(
                f"{turn_player.label()} has no piece on {request.from_square}."
            )

        move = Move(piece_id, Square.from_algebraic(request.to_square))
        return self._play(request.game_id, game, move)

    def play_demo_turn(self, request: DemoTurnRequest) -> MoveResponse:
        """The turn player moves its first piece one square forward."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._play(request.game_id, game, game.demo_move())

    def list_games(self) -> ListGamesResponse:
        """Show all recorded games."""
        return ListGamesResponse(game_ids=self.repo.list_game_ids())

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _play(self, game_id: UUID, game: Game, move: Move) -> MoveResponse:
        """Take the turn, store the new snapshot and describe the outcome."""
        result = game.take_turn(move)
        self.repo.save_game(game_id, game.to_model())
        return self._create_move_response(game_id, game, result)

    def _create_move_response(
        self, game_id: UUID, game: Game, result: MoveResult
    ) -> MoveResponse:
        response = MoveResponse(
            game=self._create_game_response(game_id, game),
            from_square=result.from_square.to_algebraic(),
            to_square=result.to_square.to_algebraic(),
            accepted=result.accepted,
        )
        if isinstance(result, MoveRejected):
            response.rejection_reason = result.reason.value
        elif isinstance(result, MoveAccepted):
            response.displaced_piece = result.displaced is not None
            response.cleared_piece = result.cleared is not None
        return response

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            players={color.value: player.name for color, player in game.players.items()},
            turn=game.turn,
            turns_played=game.turns_played,
            board=game.render(),
            pieces=self._pieces_on_board(game),
        )

    def _pieces_on_board(self, game: Game) -> list[PieceOnBoard]:
        """Pieces that got overwritten (and so left the board) are not listed."""
        pieces: list[PieceOnBoard] = []
        for square in game.board.occupied_squares():
            piece = game.pieces[game.board.get(square)]
            pieces.append(
                PieceOnBoard(
                    square=square.to_algebraic(), type=piece.type, color=piece.color
                )
            )
        return pieces

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
