"""Serialize this run's check results as the next history artifact.

Each call writes a fresh snapshot of the given results. Merging in earlier
history is up to the caller.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple
import contextlib
import logging
import os

from .errors import ArtifactWriteError
from .logging_config import log_event
from .models import Artifact

logger = logging.getLogger("artifacts")


@dataclass
class ArtifactWriter:
    artifact_name: str
    output_dir: Path = Path(".")

    @property
    def path(self) -> Path:
        return Path(self.output_dir) / f"{self.artifact_name}.json"

    def write(self, reports: Iterable[Tuple[str, bool]], timestamp_ms: Optional[int] = None) -> Path:
        artifact = Artifact.from_reports(reports, timestamp_ms=timestamp_ms)
        body = artifact.to_json()
        path = self.path
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                f.write(body)
                f.flush()
                os.fsync(f.fileno())
            # readers of the well-known path see the old file or the new one, never a partial write
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise ArtifactWriteError(f"Failed writing artifact {path}: {e}") from e
        logger.info(f"Wrote {len(artifact.entries)} check results to {path}")
        log_event('artifact_written', path=str(path), checks=len(artifact.entries))
        return path
