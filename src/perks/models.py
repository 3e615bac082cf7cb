"""SQLAlchemy models for the perk store.

Perk ids are UUIDs generated client-side and never interpreted by callers.
Timestamps are set in Python rather than with ``server_default`` so that
``created_at`` keeps sub-second precision on every backend, which the
newest-first ordering depends on.
"""

import uuid
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, DateTime, Float, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from perks.db.session import Base


class PerkCategory(StrEnum):
    FOOD = "food"
    TECH = "tech"
    TRAVEL = "travel"
    FITNESS = "fitness"
    OTHER = "other"


def _utcnow() -> datetime:
    return datetime.now(UTC)


_CATEGORY_VALUES = ", ".join(f"'{category.value}'" for category in PerkCategory)


class Perk(Base):
    __tablename__ = "perks"
    __table_args__ = (
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="discount_percent_range",
        ),
        CheckConstraint(f"category IN ({_CATEGORY_VALUES})", name="category_allowed"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, unique=True)
    description: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(String(20), default=PerkCategory.OTHER.value)
    discount_percent: Mapped[float] = mapped_column(Float, default=0)
    merchant: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
