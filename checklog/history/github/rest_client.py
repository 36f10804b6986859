"""GitHub Actions REST adapter.

Covers the four endpoints the locator needs:

  GET /repos/{owner}/{repo}/actions/workflows
  GET /repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs
  GET /repos/{owner}/{repo}/actions/runs/{run_id}/artifacts
  GET /repos/{owner}/{repo}/actions/artifacts/{artifact_id}/{archive_format}

List endpoints answer with an envelope such as
{"total_count": 2, "workflows": [{"id": 1, "name": "CI", ...}, ...]}.
The download endpoint answers 302 to a short-lived blob URL; httpx drops the
Authorization header when it follows a redirect to another host.

No retries here. A failed call raises a GitHubError subclass and the caller
decides what to do with it.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

import httpx

from ..errors import (
    GitHubAuthError,
    GitHubHTTPError,
    GitHubNetworkError,
    GitHubRateLimitError,
)
from ..models import Repo, RunArtifact, Workflow, WorkflowRun

logger = logging.getLogger("github")

API_VERSION = "2022-11-28"
PAGE_SIZE = 100


def _check_status(resp: httpx.Response, what: str):
    status = resp.status_code
    if status in (401, 403):
        raise GitHubAuthError(f"Unauthorized for {what} (check GITHUB_TOKEN scopes: actions:read)")
    if status == 429:
        raise GitHubRateLimitError(f"Rate limited by GitHub while requesting {what} (HTTP 429)")
    if 400 <= status < 600:
        raise GitHubHTTPError(status, f"GitHub upstream error {status} for {what}")


class GitHubActionsClient:
    """Small synchronous client over httpx.

    Pass `client` to reuse an existing httpx.Client (it will not be closed here).
    """

    def __init__(self, token: Optional[str] = None, api_url: str = "https://api.github.com", timeout: float = 20.0, client: Optional[httpx.Client] = None):
        self.api_url = api_url.rstrip("/")
        headers = {"Accept": "application/vnd.github+json", "X-GitHub-Api-Version": API_VERSION}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout, headers=headers, follow_redirects=True)
        else:
            client.headers.update(headers)
        self._client = client

    def close(self):
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        url = f"{self.api_url}{path}"
        try:
            resp = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise GitHubNetworkError(f"Network error contacting GitHub ({path}): {e}") from e
        _check_status(resp, path)
        return resp

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        resp = self._get(path, params)
        try:
            data = resp.json()
        except ValueError as e:
            raise GitHubHTTPError(resp.status_code, f"Invalid JSON from GitHub for {path}") from e
        if not isinstance(data, dict):
            raise GitHubHTTPError(resp.status_code, f"Unexpected payload from GitHub for {path}")
        return data

    def _paginate(self, path: str, key: str) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._get_json(path, {"per_page": PAGE_SIZE, "page": page})
            batch = data.get(key) or []
            items.extend(batch)
            total = data.get("total_count")
            if len(batch) < PAGE_SIZE or (isinstance(total, int) and len(items) >= total):
                break
            page += 1
        return items

    def list_workflows(self, repo: Repo) -> List[Workflow]:
        raw = self._paginate(f"/repos/{repo.owner}/{repo.name}/actions/workflows", "workflows")
        return [Workflow.model_validate(w) for w in raw]

    def list_workflow_runs(self, repo: Repo, workflow_id: int, status: str = "success", per_page: int = 1) -> List[WorkflowRun]:
        # one page only: callers ask for the newest `per_page` runs
        data = self._get_json(
            f"/repos/{repo.owner}/{repo.name}/actions/workflows/{workflow_id}/runs",
            {"status": status, "per_page": per_page},
        )
        return [WorkflowRun.model_validate(r) for r in data.get("workflow_runs") or []]

    def list_run_artifacts(self, repo: Repo, run_id: int) -> List[RunArtifact]:
        raw = self._paginate(f"/repos/{repo.owner}/{repo.name}/actions/runs/{run_id}/artifacts", "artifacts")
        return [RunArtifact.model_validate(a) for a in raw]

    def download_artifact(self, repo: Repo, artifact_id: int, archive_format: str = "zip") -> bytes:
        resp = self._get(f"/repos/{repo.owner}/{repo.name}/actions/artifacts/{artifact_id}/{archive_format}")
        logger.debug(f"Downloaded artifact {artifact_id} ({len(resp.content)} bytes)")
        return resp.content
