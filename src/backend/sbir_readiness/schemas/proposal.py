"""
Schemas for the user-entered side of an evaluation: proposal facts,
criterion ratings and milestones.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class Rating(str, Enum):
    """Ordinal rating labels, best to worst."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    ACCEPTABLE = "Acceptable"
    MARGINAL = "Marginal"
    POOR = "Poor"


class EditableSchema(BaseModel):
    """Mutable camelCase record edited through the workspace."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class ProposalMetadata(EditableSchema):
    """Facts about one proposal that the mandatory gate checks against."""

    title: str = ""
    company: str = ""
    topic_number: str = ""
    cost_total: float = Field(default=0, ge=0, description="Total SBIR cost in USD")
    pop_months: float = Field(default=0, ge=0, description="Period of performance in months")
    tv_pages: float = Field(default=0, ge=0, description="Technical volume pages excl. cover/TOC/glossary")
    cm_signed: bool = False
    rcf_present: bool = False
    fwa_present: bool = False
    vol7_present: bool = False
    pow_ok: bool = False


class ProposalMetadataUpdate(EditableSchema):
    """Partial update of ProposalMetadata."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    company: str | None = None
    topic_number: str | None = None
    cost_total: float | None = Field(default=None, ge=0)
    pop_months: float | None = Field(default=None, ge=0)
    tv_pages: float | None = Field(default=None, ge=0)
    cm_signed: bool | None = None
    rcf_present: bool | None = None
    fwa_present: bool | None = None
    vol7_present: bool | None = None
    pow_ok: bool | None = None


class MilestoneEntry(EditableSchema):
    id: str
    title: str
    description: str = ""
    rd_centric: bool = True
    measurable: bool = False
    start: date | None = None
    end: date | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def blank_date_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_serializer("start", "end")
    def serialize_date(self, v: date | None) -> str:
        return v.isoformat() if v else ""


class MilestoneUpdate(EditableSchema):
    """Partial update of a milestone; the id is fixed."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    rd_centric: bool | None = None
    measurable: bool | None = None
    start: date | None = None
    end: date | None = None

    @field_validator("title", "description", "rd_centric", "measurable")
    @classmethod
    def not_null(cls, v):
        # Only dates can be cleared; omitted fields never reach this check
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("start", "end", mode="before")
    @classmethod
    def blank_date_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RatingUpdate(BaseModel):
    rating: Rating


class PhaseUpdate(BaseModel):
    phase: str
