"""FastAPI dependencies used by the perk router and the health check.

``DB`` injects the request-scoped perk store session. It lives here rather
than in main.py because main.py imports the perk router.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from perks.db.session import get_db

DB = Annotated[AsyncSession, Depends(get_db)]
