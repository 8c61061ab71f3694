"""
Schemas for solicitation rulepacks and technology-area catalogs.

These documents drive the evaluator: a new release of the solicitation
instructions is loaded as JSON without code changes.
"""

from typing import Literal

from pydantic import Field, model_validator

from sbir_readiness.schemas.common import DocumentSchema

Phase = Literal["Phase I", "Phase II", "D2P2"]

# ProposalMetadata fields a gate rule may reference, by document name
MetadataField = Literal[
    "costTotal",
    "popMonths",
    "tvPages",
    "cmSigned",
    "rcfPresent",
    "fwaPresent",
    "vol7Present",
    "powOk",
]

# Caps a gate rule may compare against, by document name
ConfigCap = Literal["costCapUSD", "maxPoPMonths", "techVolumeMaxPages"]

GateOperator = Literal["le", "lt", "ge", "gt", "eq", "is_true"]


class CriterionLimit(DocumentSchema):
    """Display/threshold limit attached to a gate criterion."""

    kind: Literal["number", "months", "pages"]
    value: float


class GateRule(DocumentSchema):
    """
    Declarative pass/fail rule for a gate criterion.

    Compares one ProposalMetadata field against a literal `value`, or
    against the rulepack cap named by `cap`. `is_true` needs neither.
    """

    field: MetadataField
    op: GateOperator = "le"
    value: float | None = None
    cap: ConfigCap | None = None

    @model_validator(mode="after")
    def check_threshold_source(self) -> "GateRule":
        if self.op != "is_true" and self.value is not None and self.cap is not None:
            raise ValueError("rule takes either 'value' or 'cap', not both")
        return self


class MandatoryCriterion(DocumentSchema):
    """A binary gate criterion; hard disqualifier when required and unmet."""

    id: str = Field(min_length=1)
    label: str
    extractor_key: str | None = None
    limit: CriterionLimit | None = None
    required: bool = False
    rule: GateRule | None = None


class RubricCriterion(DocumentSchema):
    id: str = Field(min_length=1)
    label: str
    description: str | None = None
    weight: float = Field(description="Weight within the category, nominally 0-1")
    how_to_excellence: str | None = None


class Category(DocumentSchema):
    """Weighted group of scoring criteria."""

    id: str = Field(min_length=1)
    label: str
    weight: float = Field(description="Weight of the category overall, nominally 0-1")
    criteria: list[RubricCriterion] = Field(default_factory=list)


class MilestoneRule(DocumentSchema):
    id: str
    label: str
    rule: str


class PagePolicy(DocumentSchema):
    tech_volume_max_pages: int | None = None
    excludes: list[str] = Field(default_factory=list)


class References(DocumentSchema):
    tri_url: str | None = None
    baa_url: str | None = None


class SolicitationMeta(DocumentSchema):
    name: str
    version: str
    component: Literal["DAF", "USSF", "DoD"]
    open_date: str | None = None
    close_date: str | None = None


class SolicitationConfig(DocumentSchema):
    """
    Versioned solicitation rulepack.

    `unknownCriterionPolicy` decides how a gate criterion with no rule and
    no built-in meaning evaluates: `fail_closed` reports it unmet.
    """

    meta: SolicitationMeta
    phases_supported: list[Phase] = Field(min_length=1)
    mandatory: list[MandatoryCriterion] = Field(default_factory=list)
    additional: list[MandatoryCriterion] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    milestone_rules: list[MilestoneRule] = Field(default_factory=list)
    page_policy: PagePolicy | None = None
    cost_cap_usd: float | None = Field(default=None, alias="costCapUSD")
    max_pop_months: int | None = Field(default=None, alias="maxPoPMonths")
    references: References | None = None
    unknown_criterion_policy: Literal["fail_closed", "fail_open"] = "fail_closed"

    def cap(self, name: ConfigCap) -> float | None:
        """Look up a cap by its document name."""
        if name == "costCapUSD":
            return self.cost_cap_usd
        if name == "maxPoPMonths":
            return self.max_pop_months
        if self.page_policy is None:
            return None
        return self.page_policy.tech_volume_max_pages


class TechnologyArea(DocumentSchema):
    id: str
    label: str
    keywords: list[str] = Field(default_factory=list)


class TechnologyAreaCatalog(DocumentSchema):
    """Critical technology areas, used for tagging and display only."""

    version: str
    areas: list[TechnologyArea] = Field(default_factory=list)
