import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from sbir_readiness.core.exceptions import (
    ConfigurationException,
    EntityNotFoundException,
    ValidationException,
)
from sbir_readiness.data.defaults import DEFAULT_SOLICITATION, DEFAULT_TECHNOLOGY_AREAS
from sbir_readiness.schemas.proposal import (
    MilestoneUpdate,
    ProposalMetadataUpdate,
    Rating,
)
from sbir_readiness.services.workspace import decode_document


def rulepack(**changes) -> str:
    data = json.loads(json.dumps(DEFAULT_SOLICITATION))
    data.update(changes)
    return json.dumps(data)


class TestLoadConfig:
    def test_replaces_rulepack(self, workspace):
        new_meta = {"name": "DoD 25.4 BAA", "version": "2025-10-01", "component": "DoD"}

        config = workspace.load_config(rulepack(meta=new_meta, costCapUSD=2_000_000))

        assert workspace.config is config
        assert config.meta.name == "DoD 25.4 BAA"
        assert config.cost_cap_usd == 2_000_000
        assert json.loads(workspace.config_text)["costCapUSD"] == 2_000_000

    def test_malformed_json_keeps_previous_rulepack(self, workspace):
        previous = workspace.config
        previous_text = workspace.config_text

        with pytest.raises(ConfigurationException) as exc_info:
            workspace.load_config('{"meta": {"name": "broken"')

        assert workspace.config is previous
        assert exc_info.value.status_code == 422
        assert workspace.config_text == previous_text
        assert exc_info.value.details["document"] == "solicitation"

    def test_schema_violation_keeps_previous_rulepack(self, workspace):
        previous = workspace.config

        with pytest.raises(ConfigurationException) as exc_info:
            workspace.load_config(rulepack(categories=[{"id": "TECH", "label": "Tech", "weight": "heavy"}]))

        assert workspace.config is previous
        assert any("categories.0.weight" in e for e in exc_info.value.details["errors"])

    def test_unsupported_phase_falls_back(self, workspace):
        assert workspace.phase == "D2P2"

        workspace.load_config(rulepack(phasesSupported=["Phase I", "Phase II"]))

        assert workspace.phase == "Phase I"

    def test_load_catalog(self, workspace):
        catalog = dict(DEFAULT_TECHNOLOGY_AREAS, version="2025-01-15")

        workspace.load_catalog(json.dumps(catalog))

        assert workspace.catalog.version == "2025-01-15"

    def test_malformed_catalog_keeps_previous(self, workspace):
        previous = workspace.catalog

        with pytest.raises(ConfigurationException):
            workspace.load_catalog("not json")

        assert workspace.catalog is previous


class TestUserInput:
    def test_set_phase_rejects_unsupported(self, workspace):
        workspace.load_config(rulepack(phasesSupported=["Phase I"]))

        with pytest.raises(ValidationException):
            workspace.set_phase("D2P2")

    def test_update_metadata_is_partial(self, workspace):
        workspace.update_metadata(ProposalMetadataUpdate(title="Mesh", cost_total=1_180_000))
        workspace.update_metadata(ProposalMetadataUpdate(tv_pages=14))

        assert workspace.metadata.title == "Mesh"
        assert workspace.metadata.cost_total == 1_180_000
        assert workspace.metadata.tv_pages == 14

    def test_set_rating_unknown_criterion(self, workspace):
        with pytest.raises(EntityNotFoundException):
            workspace.set_rating("nope", Rating.GOOD)

    def test_add_milestone(self, workspace):
        milestone = workspace.add_milestone()

        assert milestone.id == "m3"
        assert milestone.title == "M3: New Milestone"
        assert milestone.rd_centric is True
        assert milestone.measurable is False
        assert [m.id for m in workspace.milestones] == ["m1", "m2", "m3"]

    def test_update_milestone(self, workspace):
        updated = workspace.update_milestone("m2", MilestoneUpdate(measurable=False, start="2025-07-01"))

        assert updated.measurable is False
        assert updated.start.isoformat() == "2025-07-01"
        assert workspace.milestones[1] is updated

    def test_update_unknown_milestone(self, workspace):
        with pytest.raises(EntityNotFoundException):
            workspace.update_milestone("m9", MilestoneUpdate(title="x"))

    def test_invalid_merged_milestone_is_not_stored(self, workspace):
        before = workspace.milestones[0]
        patch = MilestoneUpdate.model_construct(title=None)

        with pytest.raises(ValidationException):
            workspace.update_milestone("m1", patch)

        assert workspace.milestones[0] is before

    def test_update_rejects_explicit_null(self):
        with pytest.raises(PydanticValidationError):
            MilestoneUpdate.model_validate({"measurable": None})

        assert MilestoneUpdate.model_validate({"end": None}).end is None


def test_evaluate_reflects_state(workspace):
    workspace.update_metadata(ProposalMetadataUpdate(cost_total=1_180_000, tv_pages=14, cm_signed=False))
    workspace.update_milestone("m1", MilestoneUpdate(measurable=False))

    result = workspace.evaluate()

    assert result.gate.results["costCap"] is True
    assert result.gate.results["pages"] is True
    assert result.gate.results["cmSigned"] is False
    assert result.gate.disqualified is True
    assert result.score.overall == 60.0
    assert [m.flag for m in result.milestones] == ["Needs Work", "Strong"]


def test_reset_restores_defaults(workspace):
    workspace.update_metadata(ProposalMetadataUpdate(title="Mesh"))
    workspace.add_milestone()

    workspace.reset()

    assert workspace.metadata.title == ""
    assert len(workspace.milestones) == 2


def test_decode_document_rejects_invalid_utf8():
    assert decode_document('{"version": "é"}'.encode(), "technology area catalog") == '{"version": "é"}'

    with pytest.raises(ConfigurationException) as exc_info:
        decode_document(b'{"version": "\xff"}', "technology area catalog")

    assert exc_info.value.details["document"] == "technology area catalog"
