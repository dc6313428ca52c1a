"""Tests for JobService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from resumectl.core.exceptions import ResourceNotFoundError, ValidationError
from resumectl.models.job import Job
from resumectl.services.jobs import JobService, filter_jobs

JOB = {
    "_id": "j1",
    "title": "Staff Nurse",
    "company_name": "Acme Health",
    "location": "Leeds",
    "job_type": "Full-time",
    "requirements": ["NMC registration"],
    "archived": False,
}


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


class TestJobService:
    """Tests for JobService."""

    def test_list_unwraps_data(self, client: MagicMock):
        client.get.return_value.json.return_value = {
            "data": [JOB, {**JOB, "_id": "j2", "archived": True}]
        }

        jobs = JobService(client).list()

        client.get.assert_called_once_with("job")
        assert [j.id for j in jobs] == ["j1", "j2"]
        assert jobs[1].archived is True

    def test_list_accepts_bare_array(self, client: MagicMock):
        client.get.return_value.json.return_value = [JOB]

        assert len(JobService(client).list()) == 1

    def test_get(self, client: MagicMock):
        client.get.return_value.json.return_value = {"data": JOB}

        job = JobService(client).get("j1")

        client.get.assert_called_once_with("job/j1")
        assert job.company_name == "Acme Health"
        assert job.requirements == ["NMC registration"]

    def test_get_empty_body_is_not_found(self, client: MagicMock):
        client.get.return_value.json.return_value = {"data": None}

        with pytest.raises(ResourceNotFoundError):
            JobService(client).get("missing")

    def test_create(self, client: MagicMock):
        client.post.return_value.json.return_value = {"data": JOB}

        job = JobService(client).create(
            " Staff Nurse ", "Acme Health", "Leeds", "Full-time", ["NMC registration"]
        )

        client.post.assert_called_once_with(
            "job",
            json={
                "title": "Staff Nurse",
                "company_name": "Acme Health",
                "location": "Leeds",
                "job_type": "Full-time",
                "requirements": ["NMC registration"],
            },
        )
        assert job is not None
        assert job.id == "j1"

    def test_create_without_echo_returns_none(self, client: MagicMock):
        client.post.return_value.json.return_value = {"message": "Job created"}

        assert JobService(client).create("T", "C", "L", "Contract", ["x"]) is None

    def test_create_requires_a_requirement(self, client: MagicMock):
        with pytest.raises(ValidationError, match="At least one requirement"):
            JobService(client).create("T", "C", "L", "Contract", [])
        client.post.assert_not_called()

    def test_create_rejects_blank_requirement(self, client: MagicMock):
        with pytest.raises(ValidationError, match="Requirement cannot be empty"):
            JobService(client).create("T", "C", "L", "Contract", ["ok", "  "])

    def test_create_rejects_blank_title(self, client: MagicMock):
        with pytest.raises(ValidationError, match="title is required"):
            JobService(client).create("  ", "C", "L", "Contract", ["x"])

    def test_update_sends_only_given_fields(self, client: MagicMock):
        client.put.return_value.json.return_value = {"data": {**JOB, "location": "Remote"}}

        job = JobService(client).update("j1", location="Remote", title=None)

        client.put.assert_called_once_with("job/j1", json={"location": "Remote"})
        assert job is not None
        assert job.location == "Remote"

    def test_update_requirements(self, client: MagicMock):
        JobService(client).update("j1", requirements=["A", "B"])

        client.put.assert_called_once_with("job/j1", json={"requirements": ["A", "B"]})

    def test_update_nothing(self, client: MagicMock):
        with pytest.raises(ValidationError, match="Nothing to update"):
            JobService(client).update("j1", title=None)
        client.put.assert_not_called()

    def test_update_unknown_field(self, client: MagicMock):
        with pytest.raises(ValidationError):
            JobService(client).update("j1", salary="lots")

    def test_archive_and_unarchive(self, client: MagicMock):
        service = JobService(client)

        assert service.archive("j1") is True
        assert service.unarchive("j1") is True

        assert [c.args[0] for c in client.patch.call_args_list] == [
            "job/j1/archive",
            "job/j1/unarchive",
        ]

    def test_ranking(self, client: MagicMock):
        client.get.return_value.json.return_value = {
            "data": {
                "resultFiles": [
                    {"_id": "r1", "fileName": "a.pdf", "rank": 41.5},
                    {"_id": "r2", "fileName": "b.pdf", "rank": 88},
                ],
                "updatedAt": "2024-05-03T10:00:00Z",
            }
        }

        ranking = JobService(client).ranking("j1")

        client.get.assert_called_once_with("job/j1/candidates/rank")
        assert [r.id for r in ranking.ordered()] == ["r2", "r1"]
        assert ranking.updated_at is not None

    def test_ranking_empty(self, client: MagicMock):
        client.get.return_value.json.return_value = {"data": None}

        assert JobService(client).ranking("j1").result_files == []

    def test_rerank_then_fetches(self, client: MagicMock):
        client.get.return_value.json.return_value = {"data": {"resultFiles": []}}

        JobService(client).rerank("j1")

        client.put.assert_called_once_with("job/j1/candidates/rank")
        client.get.assert_called_once_with("job/j1/candidates/rank")


class TestFilterJobs:
    """Tests for client-side job filtering."""

    def _jobs(self) -> list[Job]:
        return [
            Job.model_validate(JOB),
            Job.model_validate(
                {**JOB, "_id": "j2", "title": "Data Engineer", "location": "Remote"}
            ),
            Job.model_validate({**JOB, "_id": "j3", "archived": True}),
        ]

    def test_search_matches_any_field(self):
        assert [j.id for j in filter_jobs(self._jobs(), "remote")] == ["j2"]
        assert [j.id for j in filter_jobs(self._jobs(), "ACME")] == ["j1", "j2", "j3"]

    def test_active_only(self):
        assert [j.id for j in filter_jobs(self._jobs(), active_only=True)] == ["j1", "j2"]

    def test_no_filters(self):
        assert len(filter_jobs(self._jobs())) == 3
