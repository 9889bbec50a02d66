"""Workflow run and job lookups shared by the ``run`` commands."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import click
from tabulate import tabulate

from .iostreams import ColorScheme
from .repo import Repo
from .utils import get_base_url, make_api_request

# Run statuses
QUEUED = "queued"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
REQUESTED = "requested"
WAITING = "waiting"
PENDING = "pending"

# Run conclusions
ACTION_REQUIRED = "action_required"
CANCELLED = "cancelled"
FAILURE = "failure"
NEUTRAL = "neutral"
SKIPPED = "skipped"
STALE = "stale"
STARTUP_FAILURE = "startup_failure"
SUCCESS = "success"
TIMED_OUT = "timed_out"

RUNS_PAGE_SIZE = 100


def _int_field(data: Dict[str, Any], key: str, kind: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"malformed {kind} payload: missing or invalid '{key}'") from exc


@dataclass
class Run:
    """A workflow run as returned by the Actions API."""

    id: int
    status: str
    conclusion: str = ""
    name: str = ""
    display_title: str = ""
    head_branch: str = ""
    event: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Run":
        """Create a Run from an API payload.

        Raises:
            ValueError: If an ID is missing or not a number
        """
        return cls(
            id=_int_field(data, "id", "run"),
            status=data.get("status") or "",
            conclusion=data.get("conclusion") or "",
            name=data.get("name") or "",
            display_title=data.get("display_title") or "",
            head_branch=data.get("head_branch") or "",
            event=data.get("event") or "",
            created_at=data.get("created_at") or "",
        )

    @property
    def title(self) -> str:
        """Return the commit or PR title of the run, falling back to the workflow name."""
        return self.display_title or self.name


@dataclass
class Job:
    """A single job belonging to a workflow run."""

    id: int
    run_id: int
    name: str = ""
    status: str = ""
    conclusion: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        """Create a Job from an API payload.

        Raises:
            ValueError: If an ID is missing or not a number
        """
        return cls(
            id=_int_field(data, "id", "job"),
            run_id=_int_field(data, "run_id", "job"),
            name=data.get("name") or "",
            status=data.get("status") or "",
            conclusion=data.get("conclusion") or "",
        )


def actions_url(repo: Repo, path: str) -> str:
    """Return the full API URL for a path under ``repos/<owner>/<name>/actions``."""
    return f"{get_base_url(repo.host)}repos/{repo.full_name}/actions/{path}"


def get_run(repo: Repo, run_id: str) -> Run:
    """Fetch a single workflow run.

    Raises:
        requests.RequestException: If the request fails
        ValueError: If the response is not a valid payload
    """
    url = actions_url(repo, f"runs/{run_id}")
    resp = make_api_request("GET", url, host=repo.host)
    return Run.from_dict(resp.json())


def get_job(repo: Repo, job_id: str) -> Job:
    """Fetch a single job, including the ID of the run it belongs to.

    Raises:
        requests.RequestException: If the request fails
        ValueError: If the response is not a valid payload
    """
    url = actions_url(repo, f"jobs/{job_id}")
    resp = make_api_request("GET", url, host=repo.host)
    return Job.from_dict(resp.json())


def get_runs_with_filter(
    repo: Repo,
    limit: int,
    predicate: Callable[[Run], bool],
    page_size: int = RUNS_PAGE_SIZE,
) -> List[Run]:
    """Page through recent runs, newest first, keeping those that match.

    Args:
        repo: Repository to list runs for
        limit: Maximum number of matching runs to return
        predicate: Returns True for runs to keep
        page_size: Runs requested per page

    Returns:
        At most ``limit`` matching runs

    Raises:
        requests.RequestException: If a request fails
        ValueError: If the response is not a valid payload
    """
    url = actions_url(repo, "runs")
    filtered: List[Run] = []
    page = 1

    while len(filtered) < limit:
        resp = make_api_request(
            "GET",
            url,
            params={"per_page": page_size, "page": page},
            host=repo.host,
        )
        runs = resp.json().get("workflow_runs", [])

        for item in runs:
            run = Run.from_dict(item)
            if predicate(run):
                filtered.append(run)
                if len(filtered) == limit:
                    break

        if len(runs) < page_size:
            break
        page += 1

    return filtered


def run_symbol(cs: ColorScheme, run: Run) -> str:
    """Return a one-character status marker for a run."""
    if run.status != COMPLETED:
        return cs.yellow("*")
    if run.conclusion == SUCCESS:
        return cs.success_icon()
    if run.conclusion in (SKIPPED, CANCELLED, NEUTRAL):
        return cs.gray("-")
    return cs.failure_icon()


def prompt_for_run(cs: ColorScheme, runs: List[Run]) -> str:
    """Let the user pick one of ``runs`` and return its ID.

    Raises:
        click.Abort: If the user aborts the prompt
    """
    rows = []
    for index, run in enumerate(runs, start=1):
        rows.append(
            [
                index,
                run_symbol(cs, run),
                run.title,
                run.name,
                run.head_branch,
                run.event,
                cs.cyan(str(run.id)),
            ]
        )
    click.echo(
        tabulate(
            rows,
            headers=["", "", "TITLE", "WORKFLOW", "BRANCH", "EVENT", "ID"],
            tablefmt="plain",
        )
    )
    choice: Optional[int] = click.prompt(
        "Select a workflow run",
        type=click.IntRange(1, len(runs)),
        default=1,
    )
    assert choice is not None
    return str(runs[choice - 1].id)
