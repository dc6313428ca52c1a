"""Job description commands for resumectl."""

from __future__ import annotations

from typing import Optional

import click

from resumectl.cli.common import Context, global_options, handle_errors, require_auth
from resumectl.core.output import OutputFormat, print_output, print_success
from resumectl.models.job import Job, RankedResume
from resumectl.services.jobs import JobService, filter_jobs

JOB_LABELS = {
    "id": "ID",
    "title": "Title",
    "company_name": "Company",
    "location": "Location",
    "job_type": "Type",
    "archived": "Archived",
}


@click.group()
def job() -> None:
    """Manage job descriptions and ranked candidates."""
    pass


@job.command("list")
@click.option("--search", "-s", default=None, help="Filter by title, company, location or type")
@click.option("--active-only", is_flag=True, help="Hide archived jobs")
@global_options
@require_auth
@handle_errors
def job_list(ctx: Context, search: Optional[str], active_only: bool) -> None:
    """List job descriptions.

    Example:
        resumectl job list
        resumectl job list --search nurse --active-only
        resumectl job list -q  # IDs only
    """
    jobs = filter_jobs(JobService(ctx.get_client()).list(), search, active_only)

    print_output(
        [j.to_row(Job.table_columns()) for j in jobs],
        format=ctx.output_format,
        columns=Job.table_columns(),
        column_labels=JOB_LABELS,
        title=f"Job Descriptions ({len(jobs)})",
        quiet=ctx.quiet,
    )


@job.command("show")
@click.argument("job_id")
@global_options
@require_auth
@handle_errors
def job_show(ctx: Context, job_id: str) -> None:
    """Show a job description.

    Example:
        resumectl job show 65a1b2c3
    """
    record = JobService(ctx.get_client()).get(job_id)
    print_output(record.to_dict(), format=ctx.output_format, quiet=ctx.quiet)


@job.command("create")
@click.option("--title", required=True, help="Job title")
@click.option("--company", "company_name", required=True, help="Company name")
@click.option("--location", required=True, help="Job location")
@click.option("--type", "job_type", required=True, help="Job type, e.g. Full-time")
@click.option(
    "--requirement", "-r", "requirements", multiple=True, help="Requirement (repeatable)"
)
@global_options
@require_auth
@handle_errors
def job_create(
    ctx: Context,
    title: str,
    company_name: str,
    location: str,
    job_type: str,
    requirements: tuple[str, ...],
) -> None:
    """Create a job description.

    Example:
        resumectl job create --title "Staff Nurse" --company Acme --location Leeds \\
            --type Full-time -r "NMC registration" -r "2 years ward experience"
    """
    created = JobService(ctx.get_client()).create(
        title, company_name, location, job_type, requirements
    )
    if created is None:
        print_success(f"Job created: {title.strip()}")
        return
    if ctx.quiet:
        click.echo(created.id)
        return
    print_success(f"Job created: {created.title} ({created.id})")


@job.command("update")
@click.argument("job_id")
@click.option("--title", default=None, help="Job title")
@click.option("--company", "company_name", default=None, help="Company name")
@click.option("--location", default=None, help="Job location")
@click.option("--type", "job_type", default=None, help="Job type")
@click.option(
    "--requirement",
    "-r",
    "requirements",
    multiple=True,
    help="Replacement requirement (repeatable; replaces the whole list)",
)
@global_options
@require_auth
@handle_errors
def job_update(
    ctx: Context,
    job_id: str,
    title: Optional[str],
    company_name: Optional[str],
    location: Optional[str],
    job_type: Optional[str],
    requirements: tuple[str, ...],
) -> None:
    """Update fields of a job description.

    Example:
        resumectl job update 65a1b2c3 --location Remote
    """
    JobService(ctx.get_client()).update(
        job_id,
        requirements=requirements or None,
        title=title,
        company_name=company_name,
        location=location,
        job_type=job_type,
    )
    print_success(f"Job updated: {job_id}")


@job.command("archive")
@click.argument("job_id")
@global_options
@require_auth
@handle_errors
def job_archive(ctx: Context, job_id: str) -> None:
    """Archive a job description."""
    JobService(ctx.get_client()).archive(job_id)
    print_success(f"Job archived: {job_id}")


@job.command("unarchive")
@click.argument("job_id")
@global_options
@require_auth
@handle_errors
def job_unarchive(ctx: Context, job_id: str) -> None:
    """Restore an archived job description."""
    JobService(ctx.get_client()).unarchive(job_id)
    print_success(f"Job restored: {job_id}")


@job.command("rank")
@click.argument("job_id")
@click.option("--refresh", is_flag=True, help="Re-rank résumés before listing")
@global_options
@require_auth
@handle_errors
def job_rank(ctx: Context, job_id: str, refresh: bool) -> None:
    """List résumés ranked against a job, best match first.

    Example:
        resumectl job rank 65a1b2c3
        resumectl job rank 65a1b2c3 --refresh
    """
    service = JobService(ctx.get_client())
    ranking = service.rerank(job_id) if refresh else service.ranking(job_id)

    rows = [r.to_row(RankedResume.table_columns()) for r in ranking.ordered()]
    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_output(
            {"job_id": job_id, "updated_at": ranking.updated_at, "data": rows},
            format=ctx.output_format,
        )
        return

    updated = f", updated {ranking.updated_at:%Y-%m-%d %H:%M}" if ranking.updated_at else ""
    print_output(
        rows,
        format=ctx.output_format,
        columns=RankedResume.table_columns(),
        column_labels={
            "rank": "Match %",
            "id": "ID",
            "file_name": "File",
            "top_skills": "Top Skills",
            "job_titles": "Job Titles",
        },
        title=f"Ranked Résumés ({len(rows)}{updated})",
        quiet=ctx.quiet,
    )
