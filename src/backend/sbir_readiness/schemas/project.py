"""
Schemas for project intake, the dashboard listing and the draft editor.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sbir_readiness.schemas.common import BaseSchema


class ProjectIntake(BaseSchema):
    """New project intake form."""

    title: str = Field(min_length=3)
    agency: str = Field(min_length=2)
    problem: str = Field(min_length=30)
    solution: str = Field(min_length=30)
    team: str = Field(min_length=10)
    commercialization: str = Field(min_length=30)


class ProjectListItem(BaseSchema):
    id: UUID
    title: str
    agency: str
    created_at: datetime


class ProjectResponse(BaseModel):
    """Stored project; text is returned exactly as saved."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    agency: str
    problem: str
    solution: str
    team: str
    commercialization: str
    draft: str
    last_scores: list[dict[str, Any]] | None = None
    created_at: datetime
    updated_at: datetime


class DraftUpdate(BaseModel):
    text: str
