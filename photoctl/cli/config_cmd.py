"""Config commands for photoctl."""

from __future__ import annotations

import click

from photoctl.core.config import CONFIG_FILE, DEFAULT_WORKERS, Config
from photoctl.core.exceptions import PhotoCtlError
from photoctl.core.output import OutputFormat, print_error, print_key_value, print_output, print_success
from photoctl.core.timeouts import DEFAULT_UPLOAD_TIMEOUT_SECONDS
from photoctl.core.validation import validate_server_url, validate_timeout, validate_workers


@click.group()
def config() -> None:
    """Manage photoctl configuration."""
    pass


@config.command("init")
@click.option("--url", prompt="Photo store URL", help="Photo store base URL")
@click.option("--profile", default="default", help="Profile name")
@click.option("--workers", type=int, default=DEFAULT_WORKERS, help="Concurrent uploads")
@click.option(
    "--timeout",
    type=int,
    default=DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    help="Upload timeout in seconds",
)
@click.option("--no-verify-ssl", is_flag=True, help="Disable SSL verification")
@click.option("--force", is_flag=True, help="Overwrite existing profile")
def config_init(
    url: str,
    profile: str,
    workers: int,
    timeout: int,
    no_verify_ssl: bool,
    force: bool,
) -> None:
    """Create configuration file with a new profile.

    Example:
        photoctl config init --url http://localhost:8080
    """
    try:
        url = validate_server_url(url)
        workers = validate_workers(workers)
        timeout = validate_timeout(timeout)
    except PhotoCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    if CONFIG_FILE.exists():
        cfg = Config.load()
        if cfg.has_profile(profile) and not force:
            print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
            raise SystemExit(1)
    else:
        cfg = Config()

    cfg.add_profile(
        name=profile,
        url=url,
        verify_ssl=not no_verify_ssl,
        timeout=timeout,
        workers=workers,
    )

    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save()

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value(
        {
            "profile": profile,
            "url": url,
            "workers": workers,
            "timeout": f"{timeout}s",
        }
    )


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    try:
        cfg = Config.load()
    except PhotoCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    if not cfg.profiles:
        print_error("No configuration found. Run 'photoctl config init' first.")
        raise SystemExit(1)

    data = {
        "config_file": str(CONFIG_FILE),
        "default_profile": cfg.default_profile,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")
    click.echo()
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(
            {
                "url": profile.url,
                "verify_ssl": profile.verify_ssl,
                "timeout": f"{profile.timeout}s",
                "workers": profile.workers,
            }
        )
        click.echo()


@config.command("use-context")
@click.argument("profile")
def config_use_context(profile: str) -> None:
    """Switch the active profile.

    Example:
        photoctl config use-context staging
    """
    try:
        cfg = Config.load()
    except PhotoCtlError as e:
        print_error(str(e))
        raise SystemExit(1)

    if not cfg.has_profile(profile):
        print_error(f"Profile '{profile}' not found.")
        click.echo(f"Available profiles: {', '.join(cfg.profiles.keys())}")
        raise SystemExit(1)

    cfg.set_default_profile(profile)
    cfg.save()

    print_success(f"Switched to profile '{profile}'")
