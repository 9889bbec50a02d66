"""Unit tests for workflow run and job lookups."""

from typing import Any, Dict, List, Optional
from unittest.mock import patch

import pytest

from ghacli.iostreams import ColorScheme
from ghacli.repo import Repo
from ghacli.run_shared import (
    Job,
    Run,
    actions_url,
    get_job,
    get_run,
    get_runs_with_filter,
    prompt_for_run,
    run_symbol,
)

from .test_utils import API_ROOT, TEST_REPO, FakeApi


def runs_page(start: int, count: int, conclusion: str = "failure") -> List[Dict[str, Any]]:
    """Build ``count`` completed run payloads with consecutive IDs."""
    return [
        {"id": start + i, "status": "completed", "conclusion": conclusion}
        for i in range(count)
    ]


class TestModels:
    def test_run_from_dict_normalizes_nulls(self) -> None:
        run = Run.from_dict(
            {"id": "12", "status": "in_progress", "conclusion": None, "name": "CI"}
        )

        assert run.id == 12
        assert run.conclusion == ""
        assert run.title == "CI"

    def test_run_title_prefers_display_title(self) -> None:
        run = Run.from_dict(
            {"id": 1, "status": "completed", "display_title": "Fix bug", "name": "CI"}
        )

        assert run.title == "Fix bug"

    def test_job_from_dict(self) -> None:
        job = Job.from_dict({"id": 99, "run_id": 55, "name": "build", "conclusion": None})

        assert job == Job(id=99, run_id=55, name="build", status="", conclusion="")


class TestLookups:
    def test_actions_url_for_enterprise_host(self) -> None:
        repo = Repo(owner="team", name="svc", host="ghe.example.com")

        assert (
            actions_url(repo, "runs/1")
            == "https://ghe.example.com/api/v3/repos/team/svc/actions/runs/1"
        )

    def test_get_run(self) -> None:
        api = FakeApi({("GET", "/runs/123"): {"id": 123, "status": "completed"}})
        with patch("ghacli.run_shared.make_api_request", api):
            run = get_run(TEST_REPO, "123")

        assert run.id == 123
        assert api.urls() == [f"{API_ROOT}/runs/123"]

    def test_get_job(self) -> None:
        api = FakeApi({("GET", "/jobs/99"): {"id": 99, "run_id": 55}})
        with patch("ghacli.run_shared.make_api_request", api):
            job = get_job(TEST_REPO, "99")

        assert job.run_id == 55


class TestGetRunsWithFilter:
    def test_stops_at_limit(self) -> None:
        api = FakeApi({("GET", "/actions/runs"): {"workflow_runs": runs_page(1, 100)}})
        with patch("ghacli.run_shared.make_api_request", api):
            runs = get_runs_with_filter(TEST_REPO, 10, lambda run: True)

        assert [run.id for run in runs] == list(range(1, 11))
        assert len(api.calls) == 1

    def test_pages_until_enough_matches(self) -> None:
        pages = {
            1: runs_page(1, 3, conclusion="success"),
            2: runs_page(4, 3),
            3: runs_page(7, 3),
        }

        def page(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
            assert params is not None
            return {"workflow_runs": pages[params["page"]]}

        api = FakeApi({("GET", "/actions/runs"): page})
        with patch("ghacli.run_shared.make_api_request", api):
            runs = get_runs_with_filter(
                TEST_REPO, 4, lambda run: run.conclusion != "success", page_size=3
            )

        assert [run.id for run in runs] == [4, 5, 6, 7]
        assert [params["page"] for _, _, params in api.calls] == [1, 2, 3]
        assert all(params["per_page"] == 3 for _, _, params in api.calls)

    def test_short_page_ends_listing(self) -> None:
        api = FakeApi({("GET", "/actions/runs"): {"workflow_runs": runs_page(1, 2)}})
        with patch("ghacli.run_shared.make_api_request", api):
            runs = get_runs_with_filter(TEST_REPO, 10, lambda run: run.id == 2)

        assert [run.id for run in runs] == [2]
        assert len(api.calls) == 1

    def test_empty_repository(self) -> None:
        api = FakeApi({("GET", "/actions/runs"): {"workflow_runs": []}})
        with patch("ghacli.run_shared.make_api_request", api):
            assert get_runs_with_filter(TEST_REPO, 10, lambda run: True) == []


class TestPrompt:
    @pytest.mark.parametrize(
        "status,conclusion,symbol",
        [
            ("completed", "success", "✓"),
            ("completed", "failure", "X"),
            ("completed", "timed_out", "X"),
            ("completed", "cancelled", "-"),
            ("completed", "skipped", "-"),
            ("in_progress", "", "*"),
        ],
    )
    def test_run_symbol(self, status: str, conclusion: str, symbol: str) -> None:
        run = Run(id=1, status=status, conclusion=conclusion)

        assert run_symbol(ColorScheme(False), run) == symbol

    def test_prompt_returns_selected_run_id(self, capsys: pytest.CaptureFixture) -> None:
        runs = [
            Run(id=7, status="completed", conclusion="failure", display_title="First"),
            Run(id=8, status="completed", conclusion="cancelled", display_title="Second"),
        ]
        with patch("ghacli.run_shared.click.prompt", return_value=2) as prompt:
            chosen = prompt_for_run(ColorScheme(False), runs)

        assert chosen == "8"
        assert prompt.call_args.kwargs["default"] == 1
        output = capsys.readouterr().out
        assert "First" in output
        assert "Second" in output


class TestMalformedPayloads:
    @pytest.mark.parametrize("payload", [{}, {"id": None}, {"id": "abc"}])
    def test_run_without_usable_id(self, payload: Dict[str, Any]) -> None:
        with pytest.raises(ValueError, match="malformed run payload"):
            Run.from_dict(payload)

    def test_job_without_run_id(self) -> None:
        with pytest.raises(ValueError, match="'run_id'"):
            Job.from_dict({"id": 3})
