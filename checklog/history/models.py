from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, List, Literal, Optional, Tuple
import json

from pydantic import BaseModel, Field, TypeAdapter


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class StatusPoint(BaseModel):
    result: Literal[0, 1]  # 0 = passed, 1 = failed
    timestamp: int  # epoch milliseconds at generation time


class CheckRecord(BaseModel):
    name: str
    status: List[StatusPoint] = Field(min_length=1)


_RECORDS = TypeAdapter(List[CheckRecord])


class Artifact(BaseModel):
    """In-memory view of one run's history artifact.

    On disk the artifact is the bare JSON array of records, not an object
    wrapping `entries`.
    """

    entries: List[CheckRecord] = Field(default_factory=list)

    @classmethod
    def from_reports(cls, reports: Iterable[Tuple[str, bool]], timestamp_ms: Optional[int] = None) -> "Artifact":
        ts = now_ms() if timestamp_ms is None else timestamp_ms
        entries = [
            CheckRecord(name=name, status=[StatusPoint(result=0 if passed else 1, timestamp=ts)])
            for name, passed in reports
        ]
        return cls(entries=entries)

    @classmethod
    def from_json(cls, text: str) -> "Artifact":
        return cls(entries=_RECORDS.validate_json(text))

    def to_payload(self) -> list:
        return _RECORDS.dump_python(self.entries, mode="json")

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=False)


# GitHub Actions REST shapes (only the fields we read)

class Repo(BaseModel):
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> "Repo":
        owner, sep, name = (full_name or "").strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Repository must look like 'owner/name', got {full_name!r}")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Workflow(BaseModel):
    id: int
    name: str
    path: Optional[str] = None
    state: Optional[str] = None


class WorkflowRun(BaseModel):
    id: int
    name: Optional[str] = None
    run_started_at: Optional[datetime] = None


class RunArtifact(BaseModel):
    id: int
    name: str
    size_in_bytes: Optional[int] = None
    expired: bool = False
