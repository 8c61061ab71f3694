"""
Rubric evaluation engine.

Pure functions over a solicitation rulepack and the user-entered proposal
state:
- mandatory gate pass/fail and disqualification
- weighted overall score
- milestone quality flags and timeline checks
- readiness snapshot export

Nothing here keeps state; the workspace passes everything in.
"""

import math
import operator
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from dateutil.relativedelta import relativedelta
from pydantic.alias_generators import to_camel

from sbir_readiness.schemas.evaluation import (
    CategoryScore,
    GateEvaluation,
    MilestoneAssessment,
    MilestoneFlag,
    ScoreBreakdown,
)
from sbir_readiness.schemas.proposal import MilestoneEntry, ProposalMetadata, Rating
from sbir_readiness.schemas.solicitation import (
    Category,
    GateRule,
    MandatoryCriterion,
    SolicitationConfig,
    TechnologyAreaCatalog,
)

RATING_SCORES: dict[Rating, float] = {
    Rating.EXCELLENT: 1.0,
    Rating.GOOD: 0.8,
    Rating.ACCEPTABLE: 0.6,
    Rating.MARGINAL: 0.4,
    Rating.POOR: 0.2,
}

DEFAULT_RATING = Rating.ACCEPTABLE

# Gate rules for the criterion ids rulepacks have always used
BUILTIN_GATE_RULES: dict[str, GateRule] = {
    "costCap": GateRule(field="costTotal", op="le", cap="costCapUSD"),
    "popCap": GateRule(field="popMonths", op="le", cap="maxPoPMonths"),
    "pages": GateRule(field="tvPages", op="le", cap="techVolumeMaxPages"),
    "cmSigned": GateRule(field="cmSigned", op="is_true"),
    "rcf": GateRule(field="rcfPresent", op="is_true"),
    "fwa": GateRule(field="fwaPresent", op="is_true"),
    "vol7": GateRule(field="vol7Present", op="is_true"),
    "pow": GateRule(field="powOk", op="is_true"),
}

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "le": operator.le,
    "lt": operator.lt,
    "ge": operator.ge,
    "gt": operator.gt,
    "eq": operator.eq,
}

_METADATA_ATTRS: dict[str, str] = {to_camel(name): name for name in ProposalMetadata.model_fields}


def clamp01(n: float) -> float:
    return max(0.0, min(1.0, n))


def rating_to_score(rating: Rating | str | None) -> float:
    """Map an ordinal rating to its 0.2-1.0 score; missing means Acceptable."""
    if rating is None:
        return RATING_SCORES[DEFAULT_RATING]
    return RATING_SCORES[Rating(rating)]


# -----------------------------
# Mandatory gate
# -----------------------------

def resolve_gate_rule(criterion: MandatoryCriterion) -> GateRule | None:
    """Explicit rule first, then the built-in rule for well-known ids."""
    if criterion.rule is not None:
        return criterion.rule
    return BUILTIN_GATE_RULES.get(criterion.id)


def _rule_threshold(
    rule: GateRule,
    criterion: MandatoryCriterion,
    config: SolicitationConfig,
) -> float | None:
    if rule.value is not None:
        return rule.value
    if rule.cap is not None:
        return config.cap(rule.cap)
    if criterion.limit is not None:
        return criterion.limit.value
    return None


def check_criterion(
    criterion: MandatoryCriterion,
    config: SolicitationConfig,
    metadata: ProposalMetadata,
) -> bool:
    """
    Evaluate one gate criterion against the proposal metadata.

    A numeric rule with no configured threshold is satisfied. A criterion
    with neither an explicit nor a built-in rule follows the rulepack's
    unknownCriterionPolicy.
    """
    rule = resolve_gate_rule(criterion)
    if rule is None:
        return config.unknown_criterion_policy == "fail_open"

    actual = getattr(metadata, _METADATA_ATTRS[rule.field])
    if rule.op == "is_true":
        return bool(actual)

    threshold = _rule_threshold(rule, criterion, config)
    if threshold is None:
        return True
    return bool(_COMPARATORS[rule.op](actual, threshold))


def evaluate_mandatory(config: SolicitationConfig, metadata: ProposalMetadata) -> GateEvaluation:
    """
    Derive per-criterion pass/fail and the overall disqualified flag.

    Disqualified iff some required mandatory criterion is unmet. Additional
    (advisory) criteria are reported separately and never disqualify.
    """
    results = {m.id: check_criterion(m, config, metadata) for m in config.mandatory}
    advisory = {m.id: check_criterion(m, config, metadata) for m in config.additional}
    disqualified = any(m.required and not results[m.id] for m in config.mandatory)

    return GateEvaluation(
        results=results,
        advisory=advisory,
        disqualified=disqualified,
        passing=sum(1 for ok in results.values() if ok),
        total=len(config.mandatory),
    )


# -----------------------------
# Weighted score
# -----------------------------

def category_subtotal(category: Category, ratings: Mapping[str, Rating]) -> float:
    """Weighted rating sum of one category, clamped to [0, 1]."""
    return clamp01(math.fsum(
        rating_to_score(ratings.get(c.id)) * c.weight for c in category.criteria
    ))


def score_breakdown(categories: Sequence[Category], ratings: Mapping[str, Rating]) -> ScoreBreakdown:
    """
    Per-category subtotals and the weighted overall score.

    Weights are used as given: a rulepack whose weights do not sum to 1
    yields a score that is not normalised to 100.
    """
    rows = []
    for category in categories:
        subtotal = category_subtotal(category, ratings)
        rows.append(CategoryScore(
            id=category.id,
            label=category.label,
            weight=category.weight,
            subtotal=subtotal,
            contribution=subtotal * category.weight,
        ))
    total = math.fsum(row.contribution for row in rows)
    return ScoreBreakdown(overall=round(total * 100, 1), categories=rows)


def weighted_score(categories: Sequence[Category], ratings: Mapping[str, Rating]) -> float:
    return score_breakdown(categories, ratings).overall


# -----------------------------
# Milestones
# -----------------------------

def milestone_flag(milestone: MilestoneEntry) -> MilestoneFlag:
    return "Strong" if milestone.rd_centric and milestone.measurable else "Needs Work"


def milestone_timeline_issues(
    milestones: Sequence[MilestoneEntry],
    max_pop_months: int | None,
) -> dict[str, list[str]]:
    """
    Advisory date checks per milestone id.

    The performance window starts at the earliest milestone start and
    runs max_pop_months. These checks never change a milestone's flag.
    """
    starts = [m.start for m in milestones if m.start is not None]
    window_end: date | None = None
    if starts and max_pop_months:
        window_end = min(starts) + relativedelta(months=max_pop_months)

    issues: dict[str, list[str]] = {}
    for m in milestones:
        found = []
        if m.start is None or m.end is None:
            found.append("missing start or end date")
        elif m.end < m.start:
            found.append("ends before it starts")
        if window_end is not None and m.end is not None and m.end > window_end:
            found.append(f"ends after the {max_pop_months}-month period of performance")
        issues[m.id] = found
    return issues


def assess_milestones(
    milestones: Sequence[MilestoneEntry],
    max_pop_months: int | None,
) -> list[MilestoneAssessment]:
    issues = milestone_timeline_issues(milestones, max_pop_months)
    return [
        MilestoneAssessment(
            id=m.id,
            title=m.title,
            flag=milestone_flag(m),
            timeline_issues=issues[m.id],
        )
        for m in milestones
    ]


# -----------------------------
# Technology areas
# -----------------------------

def match_technology_areas(catalog: TechnologyAreaCatalog, text: str) -> list[dict[str, Any]]:
    """Areas whose label or keyword hints appear in the text (case-insensitive)."""
    haystack = text.lower()
    matches = []
    for area in catalog.areas:
        hits = [k for k in area.keywords if k.lower() in haystack]
        if area.label.lower() in haystack or hits:
            matches.append({"id": area.id, "label": area.label, "matched": hits})
    return matches


# -----------------------------
# Readiness snapshot
# -----------------------------

def build_snapshot(
    *,
    config: SolicitationConfig,
    catalog: TechnologyAreaCatalog,
    phase: str,
    metadata: ProposalMetadata,
    ratings: Mapping[str, Rating],
    milestones: Iterable[MilestoneEntry],
) -> dict[str, Any]:
    """Readiness report as a JSON-ready dict."""
    gate = evaluate_mandatory(config, metadata)
    return {
        "configMeta": config.meta.model_dump(mode="json", by_alias=True, exclude_none=True),
        "phase": phase,
        "proposalMeta": metadata.model_dump(mode="json", by_alias=True),
        "mandatoryResults": gate.results,
        "disqualified": gate.disqualified,
        "ratings": {cid: Rating(r).value for cid, r in ratings.items()},
        "overallScore": weighted_score(config.categories, ratings),
        "milestones": [m.model_dump(mode="json", by_alias=True) for m in milestones],
        "ousdreVersion": catalog.version,
    }


def snapshot_filename(title: str) -> str:
    """readiness_<title>.json with whitespace runs collapsed to underscores."""
    name = re.sub(r"\s+", "_", title or "proposal")
    return f"readiness_{name}.json"
