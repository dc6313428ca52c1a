"""Résumé commands for resumectl."""

from __future__ import annotations

from typing import Optional

import click

from resumectl.cli.common import (
    Context,
    confirm_destructive,
    global_options,
    handle_errors,
    require_auth,
)
from resumectl.core.output import OutputFormat, print_output, print_success
from resumectl.models.resume import Resume
from resumectl.services.resumes import SORT_ORDERS, ResumeService, filter_resumes, sort_resumes

RESUME_LABELS = {
    "id": "ID",
    "file_name": "File",
    "top_skills": "Top Skills",
    "job_titles": "Job Titles",
    "created_at": "Uploaded",
}


@click.group()
def resume() -> None:
    """Browse and manage stored résumés."""
    pass


@resume.command("list")
@click.option("--page", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--limit", type=click.IntRange(min=1), default=10, help="Résumés per page")
@click.option("--search", "-s", default=None, help="Filter by name, summary, skills or titles")
@click.option("--sort", type=click.Choice(SORT_ORDERS), default="newest", help="Sort by upload time")
@global_options
@require_auth
@handle_errors
def resume_list(
    ctx: Context, page: int, limit: int, search: Optional[str], sort: str
) -> None:
    """List résumés one page at a time.

    Search and sort apply to the fetched page.

    Example:
        resumectl resume list --page 2 --limit 20
        resumectl resume list --search python --sort oldest
    """
    result = ResumeService(ctx.get_client()).list(page=page, limit=limit)
    resumes = sort_resumes(filter_resumes(result.data, search), sort)

    rows = [r.to_row(Resume.table_columns()) for r in resumes]
    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_output(
            {"data": rows, "total": result.total, "page": page, "pages": result.pages},
            format=ctx.output_format,
        )
        return

    print_output(
        rows,
        format=ctx.output_format,
        columns=Resume.table_columns(),
        column_labels=RESUME_LABELS,
        title=f"Résumés (page {page} of {result.pages}, {result.total} total)",
        quiet=ctx.quiet,
    )


@resume.command("delete")
@click.argument("resume_id")
@confirm_destructive("Delete this résumé?")
@global_options
@require_auth
@handle_errors
def resume_delete(ctx: Context, resume_id: str, dry_run: bool) -> None:
    """Delete a résumé.

    Example:
        resumectl resume delete 64f1c0ffee --yes
    """
    if dry_run:
        print_success(f"Would delete résumé {resume_id}")
        return

    ResumeService(ctx.get_client()).delete(resume_id)
    print_success(f"Deleted résumé {resume_id}")


@resume.command("show")
@click.argument("resume_id")
@global_options
@require_auth
@handle_errors
def resume_show(ctx: Context, resume_id: str) -> None:
    """Show one résumé with its extracted summary.

    Example:
        resumectl resume show 64f1c0ffee
    """
    record = ResumeService(ctx.get_client()).get(resume_id)
    print_output(record.to_dict(), format=ctx.output_format, quiet=ctx.quiet)


@resume.command("search")
@click.argument("query")
@global_options
@require_auth
@handle_errors
def resume_search(ctx: Context, query: str) -> None:
    """Search every stored résumé on the server.

    Unlike ``list --search``, this is not limited to one page.

    Example:
        resumectl resume search "react native"
    """
    resumes = ResumeService(ctx.get_client()).search(query)

    print_output(
        [r.to_row(Resume.table_columns()) for r in resumes],
        format=ctx.output_format,
        columns=Resume.table_columns(),
        column_labels=RESUME_LABELS,
        title=f"Search results for {query!r} ({len(resumes)})",
        quiet=ctx.quiet,
    )


@resume.command("archive")
@click.argument("resume_id")
@global_options
@require_auth
@handle_errors
def resume_archive(ctx: Context, resume_id: str) -> None:
    """Archive a résumé."""
    ResumeService(ctx.get_client()).archive(resume_id)
    print_success(f"Archived résumé {resume_id}")


@resume.command("unarchive")
@click.argument("resume_id")
@global_options
@require_auth
@handle_errors
def resume_unarchive(ctx: Context, resume_id: str) -> None:
    """Restore an archived résumé."""
    ResumeService(ctx.get_client()).unarchive(resume_id)
    print_success(f"Restored résumé {resume_id}")
