"""
Console driver for the demo game.

Each side keeps pushing its first piece one square forward. The driver owns all the output and decides
when to stop (after --max-turns, or when the process is interrupted).
"""

import argparse
import sys
from itertools import count
from typing import Callable, Optional
from uuid import UUID

from loguru import logger

from src.chess.game import Game
from src.chess.results import MoveRejected
from src.core.config import IN_MEMORY_DATABASE_URL, Settings
from src.db.database import build_session_factory
from src.db.sql_repository import SQLGameRepository


def parse_args(
    settings: Settings, argv: Optional[list[str]] = None
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Two players take turns moving their first piece forward."
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=settings.max_turns,
        help="Stop after this many turns (default: play until interrupted)",
    )
    parser.add_argument(
        "--white", default=settings.white_name, help="Name of the white player"
    )
    parser.add_argument(
        "--black", default=settings.black_name, help="Name of the black player"
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Log level of the messages written to stderr",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help=f"Store the final position in the database at {settings.database_url!r}",
    )
    args = parser.parse_args(argv)
    if args.save and settings.database_url == IN_MEMORY_DATABASE_URL:
        parser.error("--save needs a persistent database, set CHESS_DATABASE_URL")
    return args


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def run_demo(
    game: Game, max_turns: Optional[int] = None, echo: Callable[[str], None] = print
) -> Game:
    """Play demo turns on the game, writing the board after the setup and after every turn."""
    echo(game.render())
    turns = range(max_turns) if max_turns is not None else count()
    for _ in turns:
        echo(f"Current Player: {game.current_player.label()}")
        result = game.take_turn(game.demo_move())
        if isinstance(result, MoveRejected):
            echo(f"Invalid move! {result.reason.value}")
        echo(game.render())
    return game


def save_game(game: Game, settings: Settings) -> UUID:
    session_factory = build_session_factory(settings)
    with session_factory() as db:
        _, game_id = SQLGameRepository(db).create_game(game.to_model())
    return game_id


def main(argv: Optional[list[str]] = None) -> None:
    settings = Settings()
    args = parse_args(settings, argv)
    configure_logging(args.log_level)

    game = Game.new_game(white_name=args.white, black_name=args.black)
    try:
        run_demo(game, args.max_turns)
    except KeyboardInterrupt:
        logger.info(f"Stopped after {game.turns_played} turns")

    if args.save:
        game_id = save_game(game, settings)
        print(f"Saved game {game_id} to {settings.database_url}")


if __name__ == "__main__":
    main()
