"""Main CLI entry point for resumectl."""

from __future__ import annotations

import click

from resumectl import __version__
from resumectl.cli.candidate import candidate
from resumectl.cli.common import Context, global_options, handle_errors, require_auth
from resumectl.cli.config_cmd import config
from resumectl.cli.job import job
from resumectl.cli.resume import resume
from resumectl.cli.upload import upload
from resumectl.core.output import OutputFormat, print_output, print_success
from resumectl.services.candidates import CandidateService

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="resumectl")
def cli() -> None:
    """resumectl - Bulk résumé upload for the recruiting backend.

    Get started:

      resumectl config init        # Create config file

      export RESUMECTL_TOKEN=...   # API token from the web app

      resumectl upload ./resumes   # Validate and upload in batches

    Use --help on any command for more information.
    """
    pass


cli.add_command(config)
cli.add_command(upload)
cli.add_command(resume)
cli.add_command(job)
cli.add_command(candidate)


# =============================================================================
# Top-Level Commands
# =============================================================================


@cli.command("dashboard")
@global_options
@require_auth
@handle_errors
def dashboard(ctx: Context) -> None:
    """Show candidate and processing counters.

    Example:
        resumectl dashboard
        resumectl dashboard -o json
    """
    stats = CandidateService(ctx.get_client()).dashboard()
    print_output(
        stats.summary(),
        format=ctx.output_format,
        column_labels={
            "total_candidates": "Total Candidates",
            "processed_today": "Processed Today",
            "pending_process": "Pending",
            "estimated_time": "Estimated Time",
        },
        title="Dashboard",
    )


@cli.group()
def health() -> None:
    """Server health and connectivity checks."""
    pass


@health.command("ping")
@global_options
@handle_errors
def health_ping(ctx: Context) -> None:
    """Check server connectivity and token."""
    client = ctx.get_client()
    result = client.ping()
    result["authenticated"] = client.is_authenticated

    if ctx.output_format == OutputFormat.JSON:
        print_output(result, format=OutputFormat.JSON)
        return

    print_success(f"Server reachable: {result['url']}")
    print_output(
        {
            "status": result["status"],
            "latency": f"{result['latency_ms']}ms",
            "authenticated": result["authenticated"],
        },
        format=OutputFormat.TABLE,
    )


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
