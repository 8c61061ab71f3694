"""
Evaluator workspace.

Owns the mutable state of one evaluation session (loaded rulepack and
catalog, selected phase, proposal metadata, ratings, milestones) and
hands it to the pure functions in `services.evaluation`.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from sbir_readiness.core.exceptions import (
    ConfigurationException,
    EntityNotFoundException,
    ValidationException,
)
from sbir_readiness.core.logging import LoggerMixin
from sbir_readiness.data.defaults import (
    DEFAULT_MILESTONES,
    DEFAULT_SOLICITATION,
    DEFAULT_TECHNOLOGY_AREAS,
)
from sbir_readiness.schemas.evaluation import EvaluationResponse, WorkspaceResponse
from sbir_readiness.schemas.proposal import (
    MilestoneEntry,
    MilestoneUpdate,
    ProposalMetadata,
    ProposalMetadataUpdate,
    Rating,
)
from sbir_readiness.schemas.solicitation import SolicitationConfig, TechnologyAreaCatalog
from sbir_readiness.services import evaluation

DocumentT = TypeVar("DocumentT", bound=BaseModel)

DEFAULT_PHASE = "D2P2"


def parse_document(model: type[DocumentT], text: str, document: str) -> DocumentT:
    """
    Parse and validate a JSON document.

    Raises:
        ConfigurationException: If the text is not valid JSON or does not
            match the document schema
    """
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationException(document, errors[0] if errors else str(e), errors) from e


def decode_document(body: bytes, document: str) -> str:
    """Decode a request body as UTF-8; undecodable bytes make the document malformed."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConfigurationException(document, "Document is not valid UTF-8", [str(e)]) from e


class Workspace(LoggerMixin):
    """In-memory state of a single evaluation session."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Restore the built-in rulepack, catalog and demo milestones."""
        self.config = SolicitationConfig.model_validate(DEFAULT_SOLICITATION)
        self.catalog = TechnologyAreaCatalog.model_validate(DEFAULT_TECHNOLOGY_AREAS)
        self.phase: str = DEFAULT_PHASE
        self.metadata = ProposalMetadata()
        self.ratings: dict[str, Rating] = {}
        self.milestones = [MilestoneEntry.model_validate(m) for m in DEFAULT_MILESTONES]
        self.config_text = json.dumps(DEFAULT_SOLICITATION, indent=2)
        self.catalog_text = json.dumps(DEFAULT_TECHNOLOGY_AREAS, indent=2)

    # -----------------------------
    # Configuration documents
    # -----------------------------

    def load_config(self, text: str) -> SolicitationConfig:
        """
        Replace the solicitation rulepack from JSON text.

        On failure the previous rulepack stays active.
        """
        config = parse_document(SolicitationConfig, text, "solicitation")
        self.config = config
        self.config_text = text
        if self.phase not in config.phases_supported:
            self.logger.info(
                "Selected phase not supported by new rulepack",
                phase=self.phase,
                fallback=config.phases_supported[0],
            )
            self.phase = config.phases_supported[0]
        self.logger.info(
            "Solicitation loaded",
            name=config.meta.name,
            version=config.meta.version,
            mandatory=len(config.mandatory),
            categories=len(config.categories),
        )
        return config

    def load_catalog(self, text: str) -> TechnologyAreaCatalog:
        """Replace the technology-area catalog from JSON text."""
        catalog = parse_document(TechnologyAreaCatalog, text, "technology area catalog")
        self.catalog = catalog
        self.catalog_text = text
        self.logger.info("Technology area catalog loaded", version=catalog.version, areas=len(catalog.areas))
        return catalog

    # -----------------------------
    # User input
    # -----------------------------

    def set_phase(self, phase: str) -> None:
        if phase not in self.config.phases_supported:
            raise ValidationException(
                f"Phase '{phase}' is not supported by {self.config.meta.name}",
                {"phase": [f"expected one of {', '.join(self.config.phases_supported)}"]},
            )
        self.phase = phase

    def update_metadata(self, patch: ProposalMetadataUpdate) -> ProposalMetadata:
        for field, value in patch.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(self.metadata, field, value)
        return self.metadata

    def set_rating(self, criterion_id: str, rating: Rating) -> None:
        if criterion_id not in self._criterion_ids():
            raise EntityNotFoundException("Criterion", criterion_id)
        self.ratings[criterion_id] = rating

    def add_milestone(self) -> MilestoneEntry:
        n = len(self.milestones) + 1
        milestone = MilestoneEntry(
            id=f"m{n}",
            title=f"M{n}: New Milestone",
            rd_centric=True,
            measurable=False,
        )
        self.milestones.append(milestone)
        return milestone

    def update_milestone(self, milestone_id: str, patch: MilestoneUpdate) -> MilestoneEntry:
        for i, milestone in enumerate(self.milestones):
            if milestone.id == milestone_id:
                try:
                    updated = MilestoneEntry.model_validate(
                        {**milestone.model_dump(), **patch.model_dump(exclude_unset=True)}
                    )
                except ValidationError as e:
                    raise ValidationException(
                        f"Invalid update for milestone '{milestone_id}'",
                        {".".join(str(p) for p in err["loc"]): [err["msg"]] for err in e.errors()},
                    ) from e
                self.milestones[i] = updated
                return updated
        raise EntityNotFoundException("Milestone", milestone_id)

    def _criterion_ids(self) -> set[str]:
        return {c.id for cat in self.config.categories for c in cat.criteria}

    # -----------------------------
    # Derived values
    # -----------------------------

    def evaluate(self) -> EvaluationResponse:
        gate = evaluation.evaluate_mandatory(self.config, self.metadata)
        self.logger.debug(
            "Gate evaluated",
            passing=gate.passing,
            total=gate.total,
            disqualified=gate.disqualified,
        )
        return EvaluationResponse(
            gate=gate,
            score=evaluation.score_breakdown(self.config.categories, self.ratings),
            milestones=evaluation.assess_milestones(self.milestones, self.config.max_pop_months),
        )

    def state(self) -> WorkspaceResponse:
        return WorkspaceResponse(
            config_meta=self.config.meta,
            catalog_version=self.catalog.version,
            phase=self.phase,
            metadata=self.metadata,
            ratings=self.ratings,
            milestones=self.milestones,
            evaluation=self.evaluate(),
        )

    def snapshot(self) -> dict[str, Any]:
        return evaluation.build_snapshot(
            config=self.config,
            catalog=self.catalog,
            phase=self.phase,
            metadata=self.metadata,
            ratings=self.ratings,
            milestones=self.milestones,
        )

    def snapshot_filename(self) -> str:
        return evaluation.snapshot_filename(self.metadata.title)


# Global workspace instance
_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """Get or create the process-wide workspace."""
    global _workspace

    if _workspace is None:
        _workspace = Workspace()
    return _workspace
