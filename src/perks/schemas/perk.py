"""Perk request and response schemas.

Field rules are declared once as ``Annotated`` aliases and composed into the
models each endpoint needs. ``PerkTitleUpdate`` reuses only the ``Title`` rule.
JSON keys are camelCase (``discountPercent``); snake_case names are accepted
on input too.
"""

import uuid
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

from perks.models import PerkCategory

Title = Annotated[str, StringConstraints(min_length=2)]
Description = str
Category = PerkCategory
DiscountPercent = Annotated[float, Field(ge=0, le=100)]
Merchant = str


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PerkCreate(_CamelModel):
    """Input perk for POST /perks. Unknown fields are ignored."""

    title: Title
    description: Description = ""
    category: Category = PerkCategory.OTHER
    discount_percent: DiscountPercent = 0
    merchant: Merchant | None = None


class PerkTitleUpdate(_CamelModel):
    """Body for the title-only update endpoint. Unknown fields are rejected.

    ``title`` is optional at the schema level so the service can report a
    missing title with its own message. A body without ``title`` is reduced
    to ``{}`` first, so that message wins over the unknown-field error.
    """

    model_config = ConfigDict(extra="forbid")

    title: Title | None = None

    @model_validator(mode="before")
    @classmethod
    def _missing_title_first(cls, data: Any) -> Any:
        if isinstance(data, dict) and "title" not in data:
            return {}
        return data


class PerkResponse(_CamelModel):
    """Full perk record as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    category: PerkCategory
    discount_percent: float
    merchant: str | None
    created_at: datetime
    updated_at: datetime


class PerkEnvelope(BaseModel):
    """Single perk wrapped as {"perk": {...}}."""

    perk: PerkResponse


class DeleteAck(BaseModel):
    ok: bool = True
