"""
Saved game operations.

A saved game is a single record keyed by a storage key; saving again under
the same key overwrites it.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tombola.config import settings
from tombola.models.db import SavedGameDB
from tombola.models.snapshot import GameSnapshot
from tombola.services.game_session import GameSession

logger = logging.getLogger(__name__)


async def get_saved_game(session: AsyncSession, storage_key: str) -> SavedGameDB | None:
    """Get the record stored under a key, or None."""
    result = await session.execute(
        select(SavedGameDB).where(SavedGameDB.storage_key == storage_key)
    )
    return result.scalar_one_or_none()


async def save_game(
    session: AsyncSession,
    game: GameSession,
    storage_key: str | None = None,
) -> SavedGameDB:
    """
    Insert or update the saved game for a key.

    Defaults to the configured storage key.
    """
    key = storage_key or settings.storage_key
    snapshot = game.to_snapshot()
    payload = snapshot.model_dump(mode="json")

    record = await get_saved_game(session, key)
    if record is None:
        record = SavedGameDB(storage_key=key)
        session.add(record)

    record.mode = payload["mode"]
    record.cards = payload["cards"]
    record.active_numbers = payload["active_numbers"]
    await session.flush()

    logger.debug("Saved game under %s (%d active numbers)", key, len(snapshot.active_numbers))
    return record


async def load_game(session: AsyncSession, storage_key: str | None = None) -> GameSession | None:
    """
    Restore the game saved under a key.

    Returns None if nothing is saved. Prize state is recomputed.
    """
    record = await get_saved_game(session, storage_key or settings.storage_key)
    if record is None:
        return None
    return GameSession.from_snapshot(saved_game_to_snapshot(record))


async def delete_game(session: AsyncSession, storage_key: str | None = None) -> bool:
    """
    Delete the game saved under a key.

    Returns True if a record was deleted.
    """
    result = await session.execute(
        delete(SavedGameDB).where(SavedGameDB.storage_key == (storage_key or settings.storage_key))
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


def saved_game_to_snapshot(record: SavedGameDB) -> GameSnapshot:
    """Convert a database record to a snapshot (validated by pydantic)."""
    return GameSnapshot.model_validate(
        {
            "mode": record.mode,
            "cards": record.cards or [],
            "active_numbers": record.active_numbers or [],
        }
    )
