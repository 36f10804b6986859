"""Contract for the GitHub Actions API client the locator is built with.

`GitHubActionsClient` in rest_client.py is the shipped implementation; tests
pass small fakes that satisfy the same protocol.
"""
from __future__ import annotations
from typing import List, Protocol, runtime_checkable

from ..models import Repo, RunArtifact, Workflow, WorkflowRun


@runtime_checkable
class ActionsClient(Protocol):
    def list_workflows(self, repo: Repo) -> List[Workflow]:  # pragma: no cover - interface definition
        ...

    def list_workflow_runs(self, repo: Repo, workflow_id: int, status: str = "success", per_page: int = 1) -> List[WorkflowRun]:  # pragma: no cover - interface definition
        ...

    def list_run_artifacts(self, repo: Repo, run_id: int) -> List[RunArtifact]:  # pragma: no cover - interface definition
        ...

    def download_artifact(self, repo: Repo, artifact_id: int, archive_format: str = "zip") -> bytes:  # pragma: no cover - interface definition
        ...
