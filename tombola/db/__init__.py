from tombola.db.database import get_session, init_db
from tombola.db.operations import (
    delete_game,
    get_saved_game,
    load_game,
    save_game,
    saved_game_to_snapshot,
)

__all__ = [
    "delete_game",
    "get_saved_game",
    "get_session",
    "init_db",
    "load_game",
    "save_game",
    "saved_game_to_snapshot",
]
