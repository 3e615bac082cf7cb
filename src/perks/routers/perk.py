"""Perk endpoints."""

from fastapi import APIRouter, Query

from perks.dependencies import DB
from perks.schemas.perk import DeleteAck, PerkCreate, PerkEnvelope, PerkResponse, PerkTitleUpdate
from perks.services import perk as perk_service

router = APIRouter(prefix="/perks", tags=["perks"])


@router.get("", response_model=list[PerkResponse], status_code=200)
async def list_perks(db: DB, title: str | None = Query(None)) -> list[PerkResponse]:
    """List all perks newest first, or filter by exact title when ``title`` is given."""
    if title is None:
        perks = await perk_service.list_perks(db)
    else:
        perks = await perk_service.filter_perks(db, title)
    return [PerkResponse.model_validate(perk) for perk in perks]


# Declared before /{perk_id} so "filter" is not taken for an id.
@router.get("/filter", response_model=list[PerkResponse], status_code=200)
async def filter_perks(db: DB, title: str | None = Query(None)) -> list[PerkResponse]:
    """Perks whose title equals ``title`` exactly; 400 when it is missing."""
    perks = await perk_service.filter_perks(db, title)
    return [PerkResponse.model_validate(perk) for perk in perks]


@router.get("/{perk_id}", response_model=PerkEnvelope, status_code=200)
async def get_perk(db: DB, perk_id: str) -> PerkEnvelope:
    perk = await perk_service.get_perk(db, perk_id)
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.post("", response_model=PerkEnvelope, status_code=201)
async def create_perk(db: DB, payload: PerkCreate) -> PerkEnvelope:
    perk = await perk_service.create_perk(db, payload)
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.api_route("/{perk_id}", methods=["PATCH", "PUT"], response_model=PerkEnvelope)
async def update_perk(
    db: DB, perk_id: str, payload: PerkTitleUpdate | None = None
) -> PerkEnvelope:
    """Update the title of a perk. Only ``title`` may be sent."""
    perk = await perk_service.update_perk_title(db, perk_id, payload or PerkTitleUpdate())
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.delete("/{perk_id}", response_model=DeleteAck, status_code=200)
async def delete_perk(db: DB, perk_id: str) -> DeleteAck:
    await perk_service.delete_perk(db, perk_id)
    return DeleteAck(ok=True)
