"""Candidate commands for resumectl."""

from __future__ import annotations

from typing import Optional

import click

from resumectl.cli.common import Context, global_options, handle_errors, require_auth
from resumectl.core.output import OutputFormat, print_output, print_success
from resumectl.models.candidate import Candidate
from resumectl.services.candidates import CandidateService


@click.group()
def candidate() -> None:
    """Browse and edit candidate profiles."""
    pass


@candidate.command("list")
@click.option("--query", "-s", default=None, help="Server-side search text")
@click.option("--page", type=click.IntRange(min=1), default=1, help="Page number")
@click.option("--limit", type=click.IntRange(min=1), default=10, help="Candidates per page")
@global_options
@require_auth
@handle_errors
def candidate_list(ctx: Context, query: Optional[str], page: int, limit: int) -> None:
    """List candidates.

    Example:
        resumectl candidate list --query python
        resumectl candidate list --page 2 -o json
    """
    candidates = CandidateService(ctx.get_client()).list(query=query, page=page, limit=limit)

    print_output(
        [c.to_row(Candidate.table_columns()) for c in candidates],
        format=ctx.output_format,
        columns=Candidate.table_columns(),
        column_labels={
            "id": "ID",
            "name": "Name",
            "email": "Email",
            "skills": "Skills",
            "created_at": "Added",
        },
        title=f"Candidates (page {page})",
        quiet=ctx.quiet,
    )


@candidate.command("show")
@click.argument("candidate_id")
@global_options
@require_auth
@handle_errors
def candidate_show(ctx: Context, candidate_id: str) -> None:
    """Show a candidate with experience, strengths and gaps.

    Example:
        resumectl candidate show 65c0ffee
    """
    record = CandidateService(ctx.get_client()).get(candidate_id)
    if ctx.output_format == OutputFormat.JSON:
        print_output(record.to_dict(), format=ctx.output_format, quiet=ctx.quiet)
        return
    print_output(record.details(), format=ctx.output_format, quiet=ctx.quiet)


@candidate.command("update")
@click.argument("candidate_id")
@click.option("--name", default=None, help="Full name")
@click.option("--email", default=None, help="Email address")
@click.option("--skill", "skills", multiple=True, help="Skill (repeatable; replaces the list)")
@global_options
@require_auth
@handle_errors
def candidate_update(
    ctx: Context,
    candidate_id: str,
    name: Optional[str],
    email: Optional[str],
    skills: tuple[str, ...],
) -> None:
    """Update a candidate's name, email or skills.

    Example:
        resumectl candidate update 65c0ffee --email jane@example.org --skill Python
    """
    CandidateService(ctx.get_client()).update(
        candidate_id, name=name, email=email, skills=list(skills) or None
    )
    print_success(f"Candidate updated: {candidate_id}")
