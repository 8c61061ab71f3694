import json

import pytest

from sbir_readiness.data.defaults import DEFAULT_SOLICITATION
from sbir_readiness.services.scoring import ScoringService, get_scoring_service
from sbir_readiness.main import app

from conftest import API, SCORED, FakeOpenAI

INTAKE = {
    "title": "Autonomous ISR Mesh",
    "agency": "AFWERX",
    "problem": "Contested environments deny persistent ISR coverage to forward units.",
    "solution": "A self-healing mesh of attritable sensors with on-board fusion.",
    "team": "PI with 10 years of RF mesh research.",
    "commercialization": "Dual-use sales to wildfire and border monitoring agencies.",
}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "configured" in response.json()["components"]["scoring"]


class TestSolicitation:
    def test_get_active_rulepack(self, client):
        response = client.get(f"{API}/solicitation")

        assert response.status_code == 200
        body = response.json()
        assert body["costCapUSD"] == 1_250_000
        assert body["maxPoPMonths"] == 21
        assert body["pagePolicy"]["techVolumeMaxPages"] == 15

    def test_load_rulepack(self, client):
        data = dict(DEFAULT_SOLICITATION, costCapUSD=1_000_000)

        response = client.put(f"{API}/solicitation", content=json.dumps(data))

        assert response.status_code == 200
        assert client.get(f"{API}/solicitation").json()["costCapUSD"] == 1_000_000

    def test_malformed_rulepack_is_rejected(self, client):
        response = client.put(f"{API}/solicitation", content="{not json")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "CONFIG_PARSE_ERROR"
        assert client.get(f"{API}/solicitation").json()["meta"]["name"] == "AFX25.5 Release 8 (Amendment 1)"

    def test_non_utf8_rulepack_is_rejected(self, client):
        response = client.put(f"{API}/solicitation", content=b'{"meta": {"name": "\xff"}}')

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "CONFIG_PARSE_ERROR"
        assert client.get(f"{API}/solicitation").json()["meta"]["name"] == "AFX25.5 Release 8 (Amendment 1)"


class TestCatalog:
    def test_get_catalog(self, client):
        body = client.get(f"{API}/catalog").json()

        assert body["version"] == "2023-03-21"
        assert len(body["areas"]) == 14

    def test_malformed_catalog_is_rejected(self, client):
        response = client.put(f"{API}/catalog", content='{"areas": []}')

        assert response.status_code == 422
        assert client.get(f"{API}/catalog").json()["version"] == "2023-03-21"

    def test_non_utf8_catalog_is_rejected(self, client):
        response = client.put(f"{API}/catalog", content=b'{"version": "\xfe", "areas": []}')

        assert response.status_code == 422
        assert response.json()["error"]["details"]["document"] == "technology area catalog"
        assert client.get(f"{API}/catalog").json()["version"] == "2023-03-21"

    def test_tags(self, client):
        response = client.post(f"{API}/catalog/tags", json={"text": "Quantum Science sensors"})

        assert response.json()["areas"] == [{"id": "quant", "label": "Quantum Science", "matched": []}]


class TestWorkspace:
    def test_disqualification_example(self, client):
        client.patch(
            f"{API}/workspace/metadata",
            json={"costTotal": 1_180_000, "tvPages": 14, "cmSigned": False},
        )

        gate = client.get(f"{API}/workspace/evaluation").json()["gate"]

        assert gate["results"]["costCap"] is True
        assert gate["results"]["pages"] is True
        assert gate["results"]["cmSigned"] is False
        assert gate["disqualified"] is True

    def test_metadata_patch_rejects_unknown_fields(self, client):
        response = client.patch(f"{API}/workspace/metadata", json={"salary": 5})

        assert response.status_code == 422

    def test_rating_updates_score(self, client):
        response = client.put(f"{API}/workspace/ratings/tech_approach", json={"rating": "Excellent"})

        assert response.status_code == 200
        # 0.35 criterion weight x 0.4 step x 0.45 category weight = +6.3
        assert response.json()["score"]["overall"] == 66.3

    def test_invalid_rating_label(self, client):
        response = client.put(f"{API}/workspace/ratings/tech_approach", json={"rating": "Superb"})

        assert response.status_code == 422

    def test_unknown_criterion(self, client):
        response = client.put(f"{API}/workspace/ratings/nope", json={"rating": "Good"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ENTITY_NOT_FOUND"

    def test_phase(self, client):
        assert client.put(f"{API}/workspace/phase", json={"phase": "Phase II"}).json()["phase"] == "Phase II"
        assert client.put(f"{API}/workspace/phase", json={"phase": "Phase III"}).status_code == 422

    def test_milestones(self, client):
        created = client.post(f"{API}/workspace/milestones")
        assert created.status_code == 201
        assert created.json()["id"] == "m3"

        updated = client.patch(
            f"{API}/workspace/milestones/m3",
            json={"measurable": True, "start": "2025-07-01", "end": "2025-06-01"},
        )
        assert updated.json()["end"] == "2025-06-01"

        milestones = client.get(f"{API}/workspace/evaluation").json()["milestones"]
        assert milestones[2]["flag"] == "Strong"
        assert milestones[2]["timeline_issues"] == ["ends before it starts"]

    def test_milestone_null_fields_are_rejected(self, client):
        response = client.patch(
            f"{API}/workspace/milestones/m1",
            json={"title": None, "rdCentric": None},
        )

        assert response.status_code == 422
        state = client.get(f"{API}/workspace")
        assert state.status_code == 200
        assert state.json()["milestones"][0]["title"] == "M1: Architecture & Test Plan"
        assert state.json()["milestones"][0]["rdCentric"] is True
        assert client.get(f"{API}/workspace/export").status_code == 200

    def test_milestone_dates_can_be_cleared(self, client):
        client.patch(f"{API}/workspace/milestones/m1", json={"start": "2025-07-01"})

        response = client.patch(f"{API}/workspace/milestones/m1", json={"start": None})

        assert response.status_code == 200
        assert response.json()["start"] == ""

    def test_export(self, client):
        client.patch(f"{API}/workspace/metadata", json={"title": "Autonomous ISR Mesh"})

        response = client.get(f"{API}/workspace/export")

        assert response.status_code == 200
        assert 'filename="readiness_Autonomous_ISR_Mesh.json"' in response.headers["content-disposition"]
        snapshot = response.json()
        assert snapshot["overallScore"] == 60.0
        assert snapshot["proposalMeta"]["title"] == "Autonomous ISR Mesh"
        assert snapshot["phase"] == "D2P2"

    def test_reset(self, client):
        client.patch(f"{API}/workspace/metadata", json={"title": "Mesh"})

        client.post(f"{API}/workspace/reset")

        assert client.get(f"{API}/workspace").json()["metadata"]["title"] == ""


class TestScoreDemo:
    def test_success(self, client):
        response = client.post(f"{API}/score-demo", json={"text": "Background: ..."})

        assert response.status_code == 200
        assert response.json() == SCORED

    def test_failure_shape(self, client, settings):
        failing = ScoringService(settings, client=FakeOpenAI(error=RuntimeError("invalid api key")))
        app.dependency_overrides[get_scoring_service] = lambda: failing

        response = client.post(f"{API}/score-demo", json={"text": "Background: ..."})

        assert response.status_code == 500
        assert response.json() == {"error": "invalid api key", "items": []}

    def test_busy_shape(self, client, scorer):
        scorer._in_flight = True

        response = client.post(f"{API}/score-demo", json={"text": "x"})

        assert response.status_code == 409
        assert response.json() == {"error": "A scoring request is already in progress", "items": []}


class TestProjects:
    def test_intake_dashboard_and_editor(self, client):
        created = client.post(f"{API}/projects", json=INTAKE)
        assert created.status_code == 201
        project = created.json()
        assert project["draft"].startswith("Background: ...")

        listing = client.get(f"{API}/projects").json()
        assert [p["title"] for p in listing] == ["Autonomous ISR Mesh"]

        draft = client.put(f"{API}/projects/{project['id']}/draft", json={"text": "Technical Approach: mesh"})
        assert draft.json()["draft"] == "Technical Approach: mesh"

        scored = client.post(f"{API}/projects/{project['id']}/score")
        assert scored.json() == SCORED
        assert client.get(f"{API}/projects/{project['id']}").json()["last_scores"] == SCORED["items"]

    def test_intake_validation(self, client):
        response = client.post(f"{API}/projects", json=dict(INTAKE, problem="too short"))

        assert response.status_code == 422

    def test_unknown_project(self, client):
        response = client.get(f"{API}/projects/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404

    @pytest.mark.parametrize(
        "items",
        ["not available", [1, 2], [{"criterion_key": "Approach"}]],
        ids=["string", "scalars", "missing-fields"],
    )
    def test_malformed_items_are_not_recorded(self, client, settings, items):
        project = client.post(f"{API}/projects", json=INTAKE).json()
        malformed = ScoringService(settings, client=FakeOpenAI(content=json.dumps({"items": items})))
        app.dependency_overrides[get_scoring_service] = lambda: malformed

        response = client.post(f"{API}/projects/{project['id']}/score")

        assert response.status_code == 500
        assert response.json() == {"error": "Malformed scoring response", "items": []}
        stored = client.get(f"{API}/projects/{project['id']}")
        assert stored.status_code == 200
        assert stored.json()["last_scores"] is None


def test_error_responses_are_documented():
    paths = app.openapi()["paths"]

    not_found = paths[f"{API}/projects/{{project_id}}"]["get"]["responses"]["404"]
    parse_error = paths[f"{API}/solicitation"]["put"]["responses"]["422"]

    for response in (not_found, parse_error):
        schema = response["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorResponse")
