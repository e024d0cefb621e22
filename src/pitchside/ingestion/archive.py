from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from pitchside.db.enums import IngestedEntityEnum, ProviderEnum
from pitchside.db.models.ingestion.ingested_payload import IngestedPayload


def archive_payloads(
    session: Session,
    entity_type: IngestedEntityEnum,
    items: Iterable[tuple[int, dict[str, Any]]],
    *,
    provider: ProviderEnum = ProviderEnum.API_FOOTBALL,
) -> None:
    """Stage raw provider records keyed by entity id; the caller commits."""

    now = datetime.now(tz=UTC)
    for entity_id, item in items:
        session.add(
            IngestedPayload(
                provider=provider.value,
                entity_type=entity_type.value,
                entity_key=str(entity_id),
                fetched_at=now,
                payload_json=item,
            )
        )
