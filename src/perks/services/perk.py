"""Perk business logic.

Each function performs exactly one store operation and turns a missing record
or a rule violation into a domain exception. Identifiers arrive as raw path
strings; anything that is not a UUID cannot match a perk and is reported as
not found.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from perks.exceptions import DuplicateKeyError, NotFoundError, ValidationFailedError
from perks.logging import get_logger
from perks.models import Perk
from perks.repositories import perk as perk_repo
from perks.schemas.perk import PerkCreate, PerkTitleUpdate

logger = get_logger(__name__)

ENTITY = "Perk"
TITLE_QUERY_REQUIRED = "Title query parameter is required"
TITLE_FIELD_REQUIRED = "Title field is required for this update endpoint."
DUPLICATE_ON_CREATE = "Duplicate perk for this merchant"
DUPLICATE_ON_UPDATE = "Duplicate title already exists"


def _parse_id(perk_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(perk_id)
    except ValueError:
        logger.info("perk_not_found", perk_id=perk_id, reason="malformed_id")
        raise NotFoundError(ENTITY, perk_id) from None


def _not_found(perk_id: object) -> NotFoundError:
    logger.info("perk_not_found", perk_id=str(perk_id))
    return NotFoundError(ENTITY, perk_id)


async def list_perks(db: AsyncSession) -> list[Perk]:
    perks = await perk_repo.list_perks(db)
    logger.info("perks_listed", count=len(perks))
    return perks


async def filter_perks(db: AsyncSession, title: str | None) -> list[Perk]:
    """Return perks whose title matches exactly; an empty list is a valid result."""
    if not title:
        raise ValidationFailedError(TITLE_QUERY_REQUIRED)
    perks = await perk_repo.find_perks_by_title(db, title)
    logger.info("perks_filtered", title=title, count=len(perks))
    return perks


async def get_perk(db: AsyncSession, perk_id: str) -> Perk:
    key = _parse_id(perk_id)
    perk = await perk_repo.get_perk(db, key)
    if perk is None:
        raise _not_found(key)
    return perk


async def create_perk(db: AsyncSession, payload: PerkCreate) -> Perk:
    """Persist a validated perk with defaults filled in."""
    try:
        perk = await perk_repo.create_perk(db, payload.model_dump(), DUPLICATE_ON_CREATE)
    except DuplicateKeyError:
        logger.info("perk_duplicate", title=payload.title, merchant=payload.merchant)
        raise
    logger.info("perk_created", perk_id=str(perk.id), title=perk.title)
    return perk


async def update_perk_title(db: AsyncSession, perk_id: str, payload: PerkTitleUpdate) -> Perk:
    """Change only the title of an existing perk.

    Every other column is left as stored, whatever else the client sent.
    """
    if payload.title is None:
        raise ValidationFailedError(TITLE_FIELD_REQUIRED)
    key = _parse_id(perk_id)
    try:
        perk = await perk_repo.update_perk_title(db, key, payload.title, DUPLICATE_ON_UPDATE)
    except DuplicateKeyError:
        logger.info("perk_duplicate", perk_id=str(key), title=payload.title)
        raise
    if perk is None:
        raise _not_found(key)
    logger.info("perk_title_updated", perk_id=str(key), title=perk.title)
    return perk


async def delete_perk(db: AsyncSession, perk_id: str) -> None:
    key = _parse_id(perk_id)
    if not await perk_repo.delete_perk(db, key):
        raise _not_found(key)
    logger.info("perk_deleted", perk_id=str(key))
