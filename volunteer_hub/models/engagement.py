"""Volunteer-Company engagement (join table).

One row per related pair. No row means no relation; ``status`` is either
``pending`` (applied) or ``active`` (approved).
"""

from datetime import datetime, timezone
from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


class Engagement(SQLModel, table=True):
    __tablename__ = "engagements"
    __table_args__ = (
        sa.CheckConstraint("status IN ('pending', 'active')", name="engagement_status_valid"),
    )

    volunteer_id: uuid.UUID = Field(foreign_key="volunteers.id", primary_key=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", primary_key=True, index=True)
    status: str = Field(nullable=False, default="pending")  # pending | active
    applied_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
    approved_at: Optional[datetime] = Field(default=None, sa_type=sa.DateTime(timezone=True))
