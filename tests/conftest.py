import json
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from sbir_readiness.core.config import Settings
from sbir_readiness.main import app
from sbir_readiness.schemas.proposal import ProposalMetadata
from sbir_readiness.schemas.solicitation import SolicitationConfig
from sbir_readiness.data.defaults import DEFAULT_SOLICITATION
from sbir_readiness.services.projects import ProjectStore, get_project_store
from sbir_readiness.services.scoring import ScoringService, get_scoring_service
from sbir_readiness.services.workspace import Workspace, get_workspace

API = "/api/v1"


def completion(content: str | None) -> SimpleNamespace:
    """Minimal stand-in for an OpenAI chat completion response."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return completion(self.content)


class FakeOpenAI:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


SCORED = {
    "items": [
        {"criterion_key": "Significance", "score": 4.0, "rationale": "Clear operational gap."},
        {"criterion_key": "Approach", "score": 3.5, "rationale": "Milestones lack acceptance criteria."},
    ]
}


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test", log_format="console")


@pytest.fixture
def config() -> SolicitationConfig:
    return SolicitationConfig.model_validate(DEFAULT_SOLICITATION)


@pytest.fixture
def metadata() -> ProposalMetadata:
    """A proposal that clears every built-in gate."""
    return ProposalMetadata(
        title="Autonomous ISR Mesh",
        cost_total=1_180_000,
        pop_months=18,
        tv_pages=14,
        cm_signed=True,
        rcf_present=True,
    )


@pytest.fixture
def workspace() -> Workspace:
    return Workspace()


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI(content=json.dumps(SCORED))


@pytest.fixture
def scorer(settings: Settings, fake_openai: FakeOpenAI) -> ScoringService:
    return ScoringService(settings, client=fake_openai)


@pytest.fixture
def client(workspace: Workspace, scorer: ScoringService) -> Iterator[TestClient]:
    store = ProjectStore()
    app.dependency_overrides[get_workspace] = lambda: workspace
    app.dependency_overrides[get_project_store] = lambda: store
    app.dependency_overrides[get_scoring_service] = lambda: scorer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
