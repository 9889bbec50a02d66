"""CLI commands for GitHub Actions workflow runs.

Provides ``ghacli run rerun``, which asks GitHub to re-execute a completed
workflow run, only its failed jobs, or a single job.
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional

import click
import requests

from .iostreams import IOStreams, get_io_streams
from .repo import Repo, resolve_base_repo
from .run_shared import (
    COMPLETED,
    STARTUP_FAILURE,
    SUCCESS,
    Job,
    Run,
    actions_url,
    get_job,
    get_run,
    get_runs_with_filter,
    prompt_for_run,
)
from .utils import (
    CommandError,
    ExitCodes,
    exit_code_for_error,
    get_status_code,
    make_api_request,
)

PROMPT_RUN_LIMIT = 10


@dataclass
class RerunOptions:
    """Resolved input for a rerun request."""

    run_id: Optional[str] = None
    job_id: Optional[str] = None
    only_failed: bool = False
    prompt: bool = False


def resolve_rerun_options(
    io: IOStreams,
    run_id: Optional[str],
    job_id: Optional[str],
    only_failed: bool,
) -> RerunOptions:
    """Decide which run or job a rerun targets from the raw command-line input.

    A job ID always wins over a run ID. With neither, the run is chosen
    interactively, which needs a terminal that can prompt.

    Raises:
        click.UsageError: If no ID was given and prompting is not possible
    """
    opts = RerunOptions(job_id=job_id or None, only_failed=only_failed)

    if not run_id and not opts.job_id:
        if not io.can_prompt():
            raise click.UsageError("run or job ID required when not running interactively")
        opts.prompt = True
    elif run_id:
        opts.run_id = run_id

    if opts.run_id and opts.job_id:
        opts.run_id = None
        if io.can_prompt():
            cs = io.color_scheme()
            click.echo(
                f"{cs.warning_icon()} both run and job IDs specified; ignoring run ID",
                err=True,
            )

    return opts


def is_rerunnable(run: Run) -> bool:
    """Return True for completed runs that did not succeed.

    Startup failures mean the workflow file itself is invalid, and those runs
    can never be rerun.
    """
    if run.status != COMPLETED:
        return False
    return run.conclusion not in (SUCCESS, STARTUP_FAILURE)


def rerun_run(repo: Repo, run: Run, only_failed: bool) -> None:
    """Request a rerun of a whole run, or only its failed jobs.

    Raises:
        CommandError: If GitHub rejects the request
    """
    verb = "rerun-failed-jobs" if only_failed else "rerun"
    url = actions_url(repo, f"runs/{run.id}/{verb}")

    try:
        make_api_request("POST", url, host=repo.host)
    except requests.RequestException as exc:
        if get_status_code(exc) == 403:
            raise CommandError(
                f"run {run.id} cannot be rerun; its workflow file may be broken",
                ExitCodes.PERMISSION_DENIED,
            ) from exc
        raise CommandError(f"failed to rerun: {exc}", exit_code_for_error(exc)) from exc


def rerun_job(repo: Repo, job: Job) -> None:
    """Request a rerun of a single job.

    Raises:
        CommandError: If GitHub rejects the request
    """
    url = actions_url(repo, f"jobs/{job.id}/rerun")

    try:
        make_api_request("POST", url, host=repo.host)
    except requests.RequestException as exc:
        if get_status_code(exc) == 403:
            raise CommandError(
                f"job {job.id} cannot be rerun", ExitCodes.PERMISSION_DENIED
            ) from exc
        raise CommandError(f"failed to rerun: {exc}", exit_code_for_error(exc)) from exc


def run_rerun(io: IOStreams, repo: Repo, opts: RerunOptions) -> None:
    """Carry out a resolved rerun request and report the result.

    Raises:
        CommandError: On any lookup or rerun failure
        click.Abort: If the interactive run picker is aborted
    """
    cs = io.color_scheme()
    run_id = opts.run_id
    selected_job: Optional[Job] = None

    if opts.job_id:
        try:
            with io.progress_indicator():
                selected_job = get_job(repo, opts.job_id)
        except (requests.RequestException, ValueError) as exc:
            raise CommandError(f"failed to get job: {exc}", exit_code_for_error(exc)) from exc
        run_id = str(selected_job.run_id)

    if opts.prompt:
        try:
            runs = get_runs_with_filter(repo, PROMPT_RUN_LIMIT, is_rerunnable)
        except (requests.RequestException, ValueError) as exc:
            raise CommandError(f"failed to get runs: {exc}", exit_code_for_error(exc)) from exc
        if not runs:
            raise CommandError("no recent runs have failed; please specify a specific run ID")
        run_id = prompt_for_run(cs, runs)

    if selected_job is not None:
        rerun_job(repo, selected_job)
        if io.is_stdout_tty():
            click.echo(
                f"{cs.success_icon()} Requested rerun of job {cs.cyan(str(selected_job.id))} "
                f"on run {cs.cyan(str(selected_job.run_id))}"
            )
        return

    assert run_id is not None
    try:
        with io.progress_indicator():
            run = get_run(repo, run_id)
    except (requests.RequestException, ValueError) as exc:
        raise CommandError(f"failed to get run: {exc}", exit_code_for_error(exc)) from exc

    rerun_run(repo, run, opts.only_failed)
    if io.is_stdout_tty():
        only_failed_msg = "(failed jobs) " if opts.only_failed else ""
        click.echo(
            f"{cs.success_icon()} Requested rerun {only_failed_msg}of run {cs.cyan(str(run.id))}"
        )


def register_run_commands(cli: Any) -> None:
    """Register the 'run' command group and its subcommands."""

    @cli.group()
    @click.option(
        "--repo",
        "-R",
        metavar="[HOST/]OWNER/REPO",
        help="Select another repository using the [HOST/]OWNER/REPO format",
    )
    @click.pass_context
    def run(ctx: click.Context, repo: Optional[str]) -> None:
        """View and manage GitHub Actions workflow runs."""
        ctx.ensure_object(dict)
        ctx.obj["repo"] = repo

    @run.command(name="rerun")
    @click.argument("run_id", required=False, metavar="[<run-id>]")
    @click.option(
        "--failed", "only_failed", is_flag=True, default=False, help="Rerun only failed jobs"
    )
    @click.option(
        "--job",
        "-j",
        "job_id",
        metavar="<job-id>",
        help="Rerun a specific job from a run, including dependencies",
    )
    @click.pass_context
    def rerun(
        ctx: click.Context, run_id: Optional[str], only_failed: bool, job_id: Optional[str]
    ) -> None:
        """Rerun a failed run.

        Reruns the entire run, only the failed jobs (--failed), or a single job
        (--job). A job ID takes precedence over a run ID. Without either, a
        recent failed run is picked interactively.
        """
        io = get_io_streams()
        opts = resolve_rerun_options(io, run_id, job_id, only_failed)

        try:
            repo = resolve_base_repo(ctx.obj.get("repo") if ctx.obj else None)
        except ValueError as exc:
            click.echo(f"✗ failed to determine base repo: {exc}", err=True)
            sys.exit(ExitCodes.INVALID_INPUT)

        try:
            run_rerun(io, repo, opts)
        except CommandError as exc:
            click.echo(f"✗ {exc}", err=True)
            sys.exit(exc.exit_code)
