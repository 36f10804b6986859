import pytest
from pydantic import ValidationError

from checklog.history.models import Artifact, CheckRecord, Repo, StatusPoint, WorkflowRun


@pytest.mark.parametrize("value", [2, -1, 3])
def test_status_result_limited_to_zero_or_one(value):
    with pytest.raises(ValidationError):
        StatusPoint(result=value, timestamp=1)


def test_check_record_requires_a_status_point():
    with pytest.raises(ValidationError):
        CheckRecord(name="lint", status=[])


def test_from_json_rejects_empty_status():
    with pytest.raises(ValidationError):
        Artifact.from_json('[{"name": "lint", "status": []}]')


def test_from_json_reads_multi_point_history():
    text = '[{"name":"unit","status":[{"result":1,"timestamp":1},{"result":0,"timestamp":2}]}]'
    art = Artifact.from_json(text)
    assert [p.result for p in art.entries[0].status] == [1, 0]


@pytest.mark.parametrize("raw,owner,name", [
    ("octo/widgets", "octo", "widgets"),
    (" octo/widgets ", "octo", "widgets"),
])
def test_repo_parse(raw, owner, name):
    repo = Repo.parse(raw)
    assert (repo.owner, repo.name) == (owner, name)
    assert repo.full_name == f"{owner}/{name}"


@pytest.mark.parametrize("raw", ["", "widgets", "/widgets", "octo/", "a/b/c"])
def test_repo_parse_rejects(raw):
    with pytest.raises(ValueError):
        Repo.parse(raw)


def test_workflow_run_ignores_extra_fields():
    run = WorkflowRun.model_validate({"id": 5, "name": "CI", "run_started_at": "2026-10-01T10:00:00Z", "head_sha": "abc"})
    assert run.run_started_at.year == 2026
