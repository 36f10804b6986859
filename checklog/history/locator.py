"""Find and read the history artifact left by the latest successful run.

Lookup order:
  1. workflow whose display name matches exactly (first match)
  2. newest successful run of that workflow (the query asks for one)
  3. artifact in that run named like the configured artifact name

A miss at any step returns None: that is the normal first-run situation and
callers should read it as "no history yet". Client, archive and file errors
are raised instead.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from .archive import save_and_extract
from .errors import ArtifactReadError
from .github.base import ActionsClient
from .logging_config import log_event
from .models import Repo

_logger = logging.getLogger("artifacts")


@dataclass
class ArtifactLocator:
    client: ActionsClient
    artifact_name: str
    work_dir: Path
    logger: logging.Logger = field(default=_logger)

    @property
    def archive_path(self) -> Path:
        return Path(self.work_dir) / f"{self.artifact_name}.zip"

    @property
    def extract_dir(self) -> Path:
        return Path(self.work_dir) / self.artifact_name

    def locate(self, repo: Repo, workflow_name: str) -> Optional[str]:
        log = self.logger
        log.info(f"Looking for previous artifact of workflow: {workflow_name}")
        workflows = self.client.list_workflows(repo)
        log.info(f"Available workflows: {[w.name for w in workflows]}")
        workflow = next((w for w in workflows if w.name == workflow_name), None)
        if workflow is None:
            log.error(f"No workflow named '{workflow_name}' found in {repo.full_name}")
            log_event('artifact_absent', reason='workflow_not_found', workflow=workflow_name)
            return None
        log.info(f"Found workflow {workflow.name} (id={workflow.id})")

        runs = self.client.list_workflow_runs(repo, workflow.id, status="success", per_page=1)
        if not runs:
            log.error("No successful runs detected. Is this the first run?")
            log_event('artifact_absent', reason='no_successful_runs', workflow=workflow_name)
            return None
        log.info(f"Found {len(runs)} runs: {[r.run_started_at for r in runs]}")

        for run in runs:
            log.info(f"Searching for artifact in {run.name}: {run.id} - {run.run_started_at}")
            artifacts = self.client.list_run_artifacts(repo, run.id)
            names = [a.name for a in artifacts]
            log.info(f"Found {len(artifacts)} artifacts: {names}")
            artifact = next((a for a in artifacts if a.name == self.artifact_name), None)
            if artifact is None:
                log.info(f"Found no artifact named {self.artifact_name} in {run.name}: {run.id}")
                log_event('artifact_absent', reason='artifact_not_in_run', run_id=run.id, available=names)
                return None
            payload = self.client.download_artifact(repo, artifact.id, archive_format="zip")
            save_and_extract(payload, self.archive_path, self.extract_dir)
            location = (self.extract_dir / f"{self.artifact_name}.json").resolve()
            log.info(f"Artifact downloaded to {location}")
            text = self._read(location)
            log.debug(f"Previous artifact: {text}")
            log_event('artifact_located', run_id=run.id, artifact_id=artifact.id, bytes=len(payload))
            return text
        return None

    def _read(self, location: Path) -> str:
        try:
            return location.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ArtifactReadError(f"Archive did not contain {location.name}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ArtifactReadError(f"Could not read {location}: {e}") from e
