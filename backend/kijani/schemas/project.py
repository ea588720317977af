"""
Pydantic v2 schemas for the Project resource.

Separation:
  • ProjectCreate / ProjectUpdate: what the CLIENT sends.
  • ProjectOut: full record, camelCase keys (ownerId, createdAt, ...).
  • ProjectSummary: the public listing shape.

owner_id is never accepted from the client; it is always the
authenticated user.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ── Request schemas ─────────────────────────────────────────
class ProjectCreate(BaseModel):
    """Payload accepted by POST /api/projects."""

    title: str = Field(..., min_length=1, max_length=500, examples=["Riverbank cleanup"])
    description: str | None = Field(default=None, examples=["Monthly volunteer drive"])
    metadata: dict[str, Any] | None = Field(
        default=None,
        examples=[{"region": "Nairobi", "tags": ["water"]}],
        description="Arbitrary key/value document; defaults to {}.",
    )


class ProjectUpdate(BaseModel):
    """
    Payload accepted by PUT /api/projects/{id}.

    Every field is optional; absent or null fields leave the stored value
    untouched.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    metadata: dict[str, Any] | None = None


# ── Response schemas ────────────────────────────────────────
class ProjectSummary(BaseModel):
    """Row of GET /api/projects."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None


class ProjectOut(BaseModel):
    """Full project record."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    title: str
    description: str | None
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        # Maps to the ORM attribute `metadata_` (column name is `metadata`)
        validation_alias="metadata_",
        serialization_alias="metadata",
    )
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
