"""Runtime settings, read from the environment (and a .env file if there is one)"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

IN_MEMORY_DATABASE_URL = "sqlite:///:memory:"
DEFAULT_DATABASE_URL = "sqlite:///chess.db"


def _optional_int(value: Optional[str]) -> Optional[int]:
    # unset or empty means: no limit
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class Settings:
    database_url: str = field(
        default_factory=lambda: os.getenv("CHESS_DATABASE_URL", DEFAULT_DATABASE_URL)
    )
    # None: the demo keeps playing until the process is stopped
    max_turns: Optional[int] = field(
        default_factory=lambda: _optional_int(os.getenv("CHESS_MAX_TURNS"))
    )
    white_name: str = field(
        default_factory=lambda: os.getenv("CHESS_WHITE_NAME", "Alice")
    )
    black_name: str = field(default_factory=lambda: os.getenv("CHESS_BLACK_NAME", "Bob"))
    log_level: str = field(
        default_factory=lambda: os.getenv("CHESS_LOG_LEVEL", "WARNING")
    )
    echo_sql: bool = field(
        default_factory=lambda: os.getenv("CHESS_ECHO_SQL", "false").lower() == "true"
    )
