"""Perk data-access layer.

Pure store operations — no validation, no HTTP concerns. Each function takes
a session, flushes its own writes and returns models. Unique-constraint
violations surface as ``DuplicateKeyError``; the caller picks the message.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from perks.exceptions import DuplicateKeyError
from perks.models import Perk

_NEWEST_FIRST = Perk.created_at.desc()


async def list_perks(db: AsyncSession) -> list[Perk]:
    """Return every perk, newest first."""
    result = await db.execute(select(Perk).order_by(_NEWEST_FIRST))
    return list(result.scalars().all())


async def find_perks_by_title(db: AsyncSession, title: str) -> list[Perk]:
    """Return perks whose title equals ``title`` exactly, newest first."""
    stmt = select(Perk).where(Perk.title == title).order_by(_NEWEST_FIRST)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_perk(db: AsyncSession, perk_id: uuid.UUID) -> Perk | None:
    return await db.get(Perk, perk_id)


# SQLSTATE for unique_violation; SQLite only reports it in the message text.
_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "sqlstate", None) == _UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


async def _flush(db: AsyncSession, message: str) -> None:
    """Flush pending writes; other integrity errors propagate unchanged."""
    try:
        await db.flush()
    except IntegrityError as exc:
        if not _is_unique_violation(exc):
            raise
        raise DuplicateKeyError(message) from exc


async def create_perk(db: AsyncSession, fields: dict[str, Any], duplicate_message: str) -> Perk:
    """Insert a perk; id and timestamps are assigned on flush."""
    perk = Perk(**fields)
    db.add(perk)
    await _flush(db, duplicate_message)
    return perk


async def update_perk_title(
    db: AsyncSession, perk_id: uuid.UUID, title: str, duplicate_message: str
) -> Perk | None:
    """Set only ``title`` on the perk; return None when it does not exist."""
    perk = await db.get(Perk, perk_id)
    if perk is None:
        return None
    perk.title = title
    await _flush(db, duplicate_message)
    return perk


async def delete_perk(db: AsyncSession, perk_id: uuid.UUID) -> bool:
    """Delete the perk; return False when nothing matched."""
    perk = await db.get(Perk, perk_id)
    if perk is None:
        return False
    await db.delete(perk)
    await db.flush()
    return True
