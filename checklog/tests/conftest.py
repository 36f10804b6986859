"""Global pytest fixtures.
 - Sets env vars to disable logging side effects.
 - Provides a scripted fake GitHub Actions client and zip payload builder.
"""
from __future__ import annotations
import io
import os
import zipfile
import pytest

from checklog.history.models import RunArtifact, Workflow, WorkflowRun


@pytest.fixture(autouse=True, scope="session")
def test_env_setup():
    os.environ.setdefault('CHECKLOG_DISABLE_FILE_LOGS', '1')
    os.environ.setdefault('CHECKLOG_DISABLE_EVENTS', '1')
    yield


def make_zip(files: dict) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w') as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


class FakeActionsClient:
    """Scripted stand-in for GitHubActionsClient; records every call."""

    def __init__(self, workflows=None, runs=None, artifacts=None, payload=b"", download_error=None):
        self.workflows = workflows or []
        self.runs = runs or []
        self.artifacts = artifacts or {}
        self.payload = payload
        self.download_error = download_error
        self.calls = []

    def list_workflows(self, repo):
        self.calls.append(('list_workflows', repo.full_name))
        return list(self.workflows)

    def list_workflow_runs(self, repo, workflow_id, status="success", per_page=1):
        self.calls.append(('list_workflow_runs', workflow_id, status, per_page))
        return list(self.runs)

    def list_run_artifacts(self, repo, run_id):
        self.calls.append(('list_run_artifacts', run_id))
        return list(self.artifacts.get(run_id, []))

    def download_artifact(self, repo, artifact_id, archive_format="zip"):
        self.calls.append(('download_artifact', artifact_id, archive_format))
        if self.download_error is not None:
            raise self.download_error
        return self.payload

    def close(self):
        self.calls.append(('close',))


@pytest.fixture
def zip_payload():
    return make_zip


@pytest.fixture
def fake_client_factory():
    return FakeActionsClient


@pytest.fixture
def ci_workflows():
    return [Workflow(id=1, name="Release"), Workflow(id=7, name="CI", path=".github/workflows/ci.yml")]


@pytest.fixture
def latest_run():
    return WorkflowRun(id=555, name="CI", run_started_at="2026-10-16T08:00:00Z")


@pytest.fixture
def history_artifact():
    return RunArtifact(id=9001, name="check-history", size_in_bytes=210)
