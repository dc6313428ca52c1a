"""Config commands for resumectl."""

from __future__ import annotations

import click

from resumectl.core.config import CONFIG_FILE, Config
from resumectl.core.exceptions import ResumeCtlError
from resumectl.core.output import (
    OutputFormat,
    print_error,
    print_key_value,
    print_output,
    print_success,
)
from resumectl.core.validation import validate_server_url


@click.group()
def config() -> None:
    """Manage resumectl configuration."""
    pass


@config.command("init")
@click.option("--url", prompt="Backend API URL", help="Backend API base URL")
@click.option("--profile", default="default", help="Profile name")
@click.option("--batch-size", type=click.IntRange(min=1), default=5, help="Files per upload request")
@click.option("--force", is_flag=True, help="Overwrite existing profile")
def config_init(url: str, profile: str, batch_size: int, force: bool) -> None:
    """Create configuration file with a new profile.

    The API token is never written to the file; provide it with
    RESUMECTL_TOKEN.

    Example:
        resumectl config init --url http://localhost:8000/api/v1
    """
    try:
        url = validate_server_url(url)
        cfg = Config.load(CONFIG_FILE) if CONFIG_FILE.exists() else Config()
    except ResumeCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    if cfg.has_profile(profile) and not force:
        print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
        raise SystemExit(1)

    cfg.add_profile(name=profile, url=url, batch_size=batch_size)
    if len(cfg.profiles) == 1:
        cfg.default_profile = profile
    cfg.save(CONFIG_FILE)

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value({"profile": profile, "url": url, "batch_size": batch_size})


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    try:
        cfg = Config.load(CONFIG_FILE)
    except ResumeCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    rows = [
        {"name": name, "default": name == cfg.default_profile, **p.to_dict()}
        for name, p in cfg.profiles.items()
    ]
    if output == "json":
        print_output(
            {"default_profile": cfg.default_profile, "profiles": rows},
            format=OutputFormat.JSON,
        )
        return

    print_output(
        rows,
        format=OutputFormat.TABLE,
        columns=["name", "default", "url", "verify_ssl", "timeout", "batch_size"],
        title=f"Profiles ({CONFIG_FILE})",
    )


@config.command("use-profile")
@click.argument("name")
def config_use_profile(name: str) -> None:
    """Set the default profile."""
    try:
        cfg = Config.load(CONFIG_FILE)
        cfg.set_default_profile(name)
    except ResumeCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    cfg.save(CONFIG_FILE)
    print_success(f"Default profile set to '{name}'")
