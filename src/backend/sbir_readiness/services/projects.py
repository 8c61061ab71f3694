"""
Project store for intake, dashboard and draft editing.

Projects live in memory for the life of the process.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sbir_readiness.core.exceptions import EntityNotFoundException
from sbir_readiness.core.logging import LoggerMixin
from sbir_readiness.data.defaults import DEFAULT_DRAFT
from sbir_readiness.schemas.project import ProjectIntake


@dataclass
class Project:
    """A proposal project created from an intake form."""
    title: str
    agency: str
    problem: str
    solution: str
    team: str
    commercialization: str
    id: UUID = field(default_factory=uuid4)
    draft: str = DEFAULT_DRAFT
    last_scores: list[dict[str, Any]] | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class ProjectStore(LoggerMixin):
    def __init__(self) -> None:
        self._projects: dict[UUID, Project] = {}

    def create(self, intake: ProjectIntake) -> Project:
        project = Project(**intake.model_dump())
        self._projects[project.id] = project
        self.logger.info("Project created", project_id=str(project.id), title=project.title)
        return project

    def list_projects(self) -> list[Project]:
        """Projects, newest first."""
        return sorted(self._projects.values(), key=lambda p: p.created_at, reverse=True)

    def get(self, project_id: UUID) -> Project:
        project = self._projects.get(project_id)
        if project is None:
            raise EntityNotFoundException("Project", str(project_id))
        return project

    def update_draft(self, project_id: UUID, text: str) -> Project:
        project = self.get(project_id)
        project.draft = text
        project.touch()
        return project

    def record_scores(self, project_id: UUID, items: list[dict[str, Any]]) -> Project:
        project = self.get(project_id)
        project.last_scores = items
        project.touch()
        return project


# Global project store instance
_store: ProjectStore | None = None


def get_project_store() -> ProjectStore:
    """Get or create the process-wide project store."""
    global _store

    if _store is None:
        _store = ProjectStore()
    return _store
