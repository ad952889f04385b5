"""SQLModel ORM tables mirroring the domain entities."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class RevenueModel(SQLModel, table=True):
    record_id: str = Field(primary_key=True)
    month: str = Field(index=True)
    year: int = Field(index=True)
    revenue: float = Field(default=0.0, ge=0)
    source: str = Field(default="manual")
    description: Optional[str] = None
    created_at: datetime = Field(index=True)
    updated_at: datetime
