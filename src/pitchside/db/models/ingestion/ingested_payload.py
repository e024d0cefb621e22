from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from pitchside.db.base import Base


class IngestedPayload(Base):
    __tablename__ = "ingested_payloads"

    id: Mapped[int] = mapped_column(primary_key=True)

    provider: Mapped[str] = mapped_column(String, nullable=False)  # e.g., "api_football"
    entity_type: Mapped[str] = mapped_column(String, nullable=False)  # "player"
    entity_key: Mapped[str] = mapped_column(String, nullable=False)  # provider id

    fetched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payload_json: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_ingested_payloads_lookup", "provider", "entity_type", "entity_key", "fetched_at"),
    )
