"""Unit tests for /src/chess/game.py"""

from copy import deepcopy

import pytest

from src.chess.game import Game, step
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.results import MoveAccepted, MoveRejected, OutOfBounds, RejectReason
from src.chess.square import Square
from src.core.exceptions import GameStateError

BACK_RANK_ORDER = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


@pytest.fixture
def game() -> Game:
    return Game.new_game()


@pytest.fixture
def empty_game() -> Game:
    return Game.empty()


def snapshot(game: Game) -> tuple:
    """Everything a move could change"""
    return (
        game.board.to_grid(),
        [deepcopy(piece) for piece in game.pieces],
        game.turn,
        game.turns_played,
    )


def changed_cells(before: list, after: list) -> set[Square]:
    return {
        Square(rank, file)
        for rank in range(8)
        for file in range(8)
        if before[rank][file] != after[rank][file]
    }


# -- CREATION LOGIC --
def test_starting_position(game: Game) -> None:
    assert len(game.pieces) == 32
    assert len(game.board.occupied_squares()) == 32
    assert game.turn == Color.WHITE
    assert game.turns_played == 0

    for file, piece_type in enumerate(BACK_RANK_ORDER):
        white = game.piece_at(Square(0, file))
        black = game.piece_at(Square(7, file))
        assert (white.type, white.color) == (piece_type, Color.WHITE)
        assert (black.type, black.color) == (piece_type, Color.BLACK)
        assert game.piece_at(Square(1, file)) == Piece(
            PieceType.PAWN, Color.WHITE, Square(1, file)
        )
        assert game.piece_at(Square(6, file)) == Piece(
            PieceType.PAWN, Color.BLACK, Square(6, file)
        )

    for rank in range(2, 6):
        for file in range(8):
            assert game.piece_at(Square(rank, file)) is None


def test_named_squares_in_starting_position(game: Game) -> None:
    assert game.piece_at(Square(0, 0)).type == PieceType.ROOK
    assert game.piece_at(Square(0, 7)).type == PieceType.ROOK
    assert game.piece_at(Square(0, 4)) == Piece(PieceType.KING, Color.WHITE, Square(0, 4))
    assert game.piece_at(Square(7, 3)) == Piece(
        PieceType.QUEEN, Color.BLACK, Square(7, 3)
    )


@pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
def test_players_own_their_pieces(game: Game, color: Color) -> None:
    player = game.players[color]
    assert player.color == color
    assert len(player.pieces()) == 16
    assert all(game.piece(piece_id).color == color for piece_id in player.pieces())
    # pawns are handed out first, from the a-file onwards
    first_piece = game.piece(player.pieces()[0])
    assert first_piece.type == PieceType.PAWN
    assert first_piece.square.file == 0


def test_board_and_pieces_agree(game: Game) -> None:
    for square in game.board.occupied_squares():
        assert game.pieces[game.board.get(square)].square == square


def test_add_piece_checks_the_square(empty_game: Game) -> None:
    empty_game.add_piece(Piece(PieceType.KING, Color.WHITE, Square(0, 4)))
    with pytest.raises(GameStateError):
        empty_game.add_piece(Piece(PieceType.QUEEN, Color.WHITE, Square(0, 4)))
    with pytest.raises(GameStateError):
        empty_game.add_piece(Piece(PieceType.QUEEN, Color.WHITE, Square(8, 4)))
    assert len(empty_game.pieces) == 1
    assert empty_game.players[Color.WHITE].pieces() == [0]


def test_piece_at_off_board(game: Game) -> None:
    assert game.piece_at(Square(-1, 0)) == OutOfBounds(Square(-1, 0))
    assert game.piece_at(Square(8, 0)) == OutOfBounds(Square(8, 0))


def test_unknown_piece_id(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.piece(32)
    with pytest.raises(GameStateError):
        game.attempt_move(Move(-1, Square(3, 3)))


# -- MOVE EXECUTION --
def test_accepted_move_touches_exactly_two_cells(game: Game) -> None:
    knight_id = game.board.get(Square(0, 1))
    before = game.board.to_grid()

    result = game.attempt_move(Move(knight_id, Square(2, 2)))

    assert result == MoveAccepted(knight_id, Square(0, 1), Square(2, 2), displaced=None)
    assert result.accepted
    assert changed_cells(before, game.board.to_grid()) == {Square(0, 1), Square(2, 2)}
    assert game.board.get(Square(0, 1)) is None
    assert game.board.get(Square(2, 2)) == knight_id
    assert game.piece(knight_id).square == Square(2, 2)


@pytest.mark.parametrize(
    "from_square, to_square, reason",
    [
        (Square(0, 1), Square(1, 1), RejectReason.INVALID_SHAPE),  # knight
        (Square(1, 4), Square(3, 4), RejectReason.INVALID_SHAPE),  # pawn double step
        (Square(0, 0), Square(-1, 0), RejectReason.OUT_OF_BOUNDS),  # rook
        (Square(7, 0), Square(8, 0), RejectReason.OUT_OF_BOUNDS),  # rook
    ],
)
def test_rejected_move_changes_nothing(
    game: Game, from_square: Square, to_square: Square, reason: RejectReason
) -> None:
    piece_id = game.board.get(from_square)
    before = snapshot(game)

    result = game.attempt_move(Move(piece_id, to_square))

    assert result == MoveRejected(piece_id, from_square, to_square, reason)
    assert not result.accepted
    assert snapshot(game) == before


@pytest.mark.parametrize("to_square", [Square(0, -100), Square(10**7, 0)])
def test_far_off_board_target_is_rejected(game: Game, to_square: Square) -> None:
    """Rejected as a result, also when the square is too far off to have any name"""
    rook_id = game.board.get(Square(0, 0))
    before = snapshot(game)

    result = game.attempt_move(Move(rook_id, to_square))

    assert result == MoveRejected(
        rook_id, Square(0, 0), to_square, RejectReason.OUT_OF_BOUNDS
    )
    assert snapshot(game) == before


def test_sliding_pieces_ignore_pieces_in_between(game: Game) -> None:
    """No path blocking: the rook on a1 jumps over the pawn on a2"""
    rook_id = game.board.get(Square(0, 0))
    result = game.attempt_move(Move(rook_id, Square(4, 0)))
    assert result.accepted
    assert game.piece_at(Square(1, 0)).type == PieceType.PAWN

    bishop_id = game.board.get(Square(0, 2))
    assert game.attempt_move(Move(bishop_id, Square(3, 5))).accepted

    queen_id = game.board.get(Square(0, 3))
    assert game.attempt_move(Move(queen_id, Square(5, 3))).accepted


def test_king_null_move_is_accepted(game: Game) -> None:
    king_id = game.board.get(Square(0, 4))
    before = game.board.to_grid()
    result = game.attempt_move(Move(king_id, Square(0, 4)))
    assert result == MoveAccepted(king_id, Square(0, 4), Square(0, 4))
    assert game.board.to_grid() == before


def test_move_onto_occupied_square_overwrites(game: Game) -> None:
    """There are no captures: the occupant is dropped from the board, but stays with its player"""
    queen_id = game.board.get(Square(0, 3))
    black_queen_id = game.board.get(Square(7, 3))

    result = game.attempt_move(Move(queen_id, Square(7, 3)))

    assert result == MoveAccepted(queen_id, Square(0, 3), Square(7, 3), black_queen_id)
    assert game.board.get(Square(7, 3)) == queen_id
    assert black_queen_id in game.players[Color.BLACK].pieces()
    assert len(game.board.occupied_squares()) == 31


def test_overwritten_piece_still_moves(game: Game) -> None:
    """
    The overwritten piece keeps its old square. Moving it clears that cell, which now holds
    the piece that overwrote it: that piece leaves the board (reported as `cleared`).
    """
    queen_id = game.board.get(Square(0, 3))
    black_queen_id = game.board.get(Square(7, 3))
    black_pawn_id = game.board.get(Square(6, 3))
    game.attempt_move(Move(queen_id, Square(7, 3)))
    before = game.board.to_grid()

    result = game.attempt_move(Move(black_queen_id, Square(6, 3)))

    assert result == MoveAccepted(
        black_queen_id,
        Square(7, 3),
        Square(6, 3),
        displaced=black_pawn_id,
        cleared=queen_id,
    )
    assert changed_cells(before, game.board.to_grid()) == {Square(7, 3), Square(6, 3)}
    assert game.board.get(Square(7, 3)) is None
    assert game.board.get(Square(6, 3)) == black_queen_id
    assert game.piece(black_queen_id).square == Square(6, 3)
    # the white queen is off the board but still believes it stands on d8
    assert game.piece(queen_id).square == Square(7, 3)
    assert queen_id in game.players[Color.WHITE].pieces()


def test_regular_move_clears_nothing_else(game: Game) -> None:
    knight_id = game.board.get(Square(7, 6))
    result = game.attempt_move(Move(knight_id, Square(5, 5)))
    assert result.cleared is None
    assert result.displaced is None


# -- TURNS --
def test_turns_alternate(game: Game) -> None:
    assert game.current_player.color == Color.WHITE
    game.take_turn(game.demo_move())
    assert game.turn == Color.BLACK
    assert game.current_player.name == "Bob"
    game.take_turn(game.demo_move())
    assert game.turn == Color.WHITE
    assert game.turns_played == 2


def test_rejected_move_still_passes_the_turn(game: Game) -> None:
    knight_id = game.board.get(Square(0, 1))
    result = game.take_turn(Move(knight_id, Square(1, 1)))
    assert not result.accepted
    assert game.turn == Color.BLACK
    assert game.turns_played == 1


def test_demo_move(game: Game) -> None:
    """First piece of the turn player (a-pawn), one square forward"""
    white_pawn = game.players[Color.WHITE].pieces()[0]
    assert game.demo_move() == Move(white_pawn, Square(2, 0))
    game.take_turn(game.demo_move())
    black_pawn = game.players[Color.BLACK].pieces()[0]
    assert game.demo_move() == Move(black_pawn, Square(5, 0))


def test_demo_without_pieces(empty_game: Game) -> None:
    with pytest.raises(GameStateError):
        empty_game.demo_move()


def test_demo_sequence(game: Game) -> None:
    """
    The a-pawns walk towards each other. White's pawn arrives on a5 where the black pawn stands
    and overwrites it. The black pawn still thinks it is on a5: its next step to a4 clears a5,
    so the white pawn is wiped from the board.
    """
    results = [game.take_turn(game.demo_move()) for _ in range(6)]
    white_pawn, black_pawn = (game.players[c].pieces()[0] for c in Color)

    assert all(r.accepted for r in results)
    assert results[4].displaced == black_pawn
    assert results[5] == MoveAccepted(
        black_pawn, Square(4, 0), Square(3, 0), displaced=None, cleared=white_pawn
    )
    assert game.piece(black_pawn).square == Square(3, 0)
    assert game.board.get(Square(3, 0)) == black_pawn
    assert game.board.get(Square(4, 0)) is None
    assert game.piece(white_pawn).square == Square(4, 0)


def test_demo_both_pawns_keep_walking(game: Game) -> None:
    """Every demo turn is accepted until the pawns run into the edge of the board"""
    results = [game.take_turn(game.demo_move()) for _ in range(12)]
    white_pawn, black_pawn = (game.players[c].pieces()[0] for c in Color)

    assert all(r.accepted for r in results)
    # white's pawn reappears on a6 after being wiped, then runs over the rook on a8
    assert game.board.get(Square(7, 0)) == white_pawn
    # black's pawn ends on a1, over White's rook
    assert game.board.get(Square(0, 0)) == black_pawn
    assert results[11].displaced == game.players[Color.WHITE].pieces()[8]


def test_demo_runs_off_the_board(game: Game) -> None:
    """Both pawns keep going until the next step would leave the board"""
    results = [game.take_turn(game.demo_move()) for _ in range(20)]
    white_results = results[::2]
    white_pawn = game.players[Color.WHITE].pieces()[0]

    assert game.piece(white_pawn).square == Square(7, 0)
    assert white_results[-1] == MoveRejected(
        white_pawn, Square(7, 0), Square(8, 0), RejectReason.OUT_OF_BOUNDS
    )
    black_pawn = game.players[Color.BLACK].pieces()[0]
    assert results[-1] == MoveRejected(
        black_pawn, Square(0, 0), Square(-1, 0), RejectReason.OUT_OF_BOUNDS
    )


# -- PURE TRANSITION --
def test_step_leaves_the_input_untouched(game: Game) -> None:
    before = snapshot(game)
    next_game, result = step(game, game.demo_move())

    assert snapshot(game) == before
    assert result.accepted
    assert next_game.turn == Color.BLACK
    assert next_game.board.get(Square(2, 0)) == result.piece_id
    assert game.board.get(Square(2, 0)) is None


def test_step_is_deterministic(game: Game) -> None:
    move = game.demo_move()
    first, first_result = step(game, move)
    second, second_result = step(game, move)
    assert first == second
    assert first_result == second_result


# -- CONVERSION TO AND FROM GameModel --
def test_model_roundtrip(game: Game) -> None:
    game.take_turn(game.demo_move())
    model = game.to_model()

    assert model.registered_players == {"white": "Alice", "black": "Bob"}
    assert model.turn == "black"
    assert model.turns_played == 1
    assert len(model.pieces) == 32

    restored = Game.from_model(model)
    assert restored == game
    assert restored.to_model() == model


def test_model_roundtrip_keeps_overwritten_pieces(game: Game) -> None:
    for _ in range(6):
        game.take_turn(game.demo_move())
    restored = Game.from_model(game.to_model())
    assert restored.players == game.players
    assert restored.board == game.board
    assert restored.demo_move() == game.demo_move()


def test_model_with_inconsistent_board(game: Game) -> None:
    model = game.to_model()
    model.board[3][3] = 0  # piece 0 stands on a2, not on d4
    with pytest.raises(GameStateError):
        Game.from_model(model)


def test_model_with_unknown_piece_id(game: Game) -> None:
    model = game.to_model()
    model.board[3][3] = 99
    with pytest.raises(GameStateError):
        Game.from_model(model)


@pytest.mark.parametrize(
    "players, turn",
    [
        ({"white": "Alice"}, "white"),
        ({"white": "Alice", "green": "Bob"}, "white"),
        ({"white": "Alice", "black": "Bob"}, "purple"),
    ],
)
def test_model_with_invalid_players(game: Game, players: dict, turn: str) -> None:
    model = game.to_model()
    model.registered_players = players
    model.turn = turn
    with pytest.raises(GameStateError):
        Game.from_model(model)


def test_render_starting_position(game: Game) -> None:
    lines = game.render().split("\n")
    assert lines[0] == lines[1] == " ".join(["W"] * 8)
    assert lines[6] == lines[7] == " ".join(["B"] * 8)
    assert lines[3] == " ".join(["."] * 8)
