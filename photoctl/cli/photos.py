"""Photo gallery commands for photoctl."""

from __future__ import annotations

import click

from photoctl.cli.common import Context, global_options, handle_errors
from photoctl.core.output import OutputFormat, console, print_output

PHOTO_COLUMNS = ["photo_id", "file_name", "tags", "created_at"]
PHOTO_LABELS = {"photo_id": "ID", "file_name": "File", "tags": "Tags", "created_at": "Created"}


@click.group()
def photos() -> None:
    """Browse photos in the store."""
    pass


@photos.command("list")
@click.option(
    "--tag",
    "-t",
    "tags",
    multiple=True,
    help="Filter by tag (repeatable or comma-separated)",
)
@global_options
@handle_errors
def photos_list(ctx: Context, tags: tuple[str, ...]) -> None:
    """List stored photos, newest first.

    Example:
        photoctl photos list
        photoctl photos list --tag beach,sunset
    """
    from photoctl.services.photos import PhotoService

    service = PhotoService(ctx.get_client())
    rows = [p.to_dict() for p in service.list(list(tags))]

    print_output(
        rows,
        format=ctx.output_format,
        columns=PHOTO_COLUMNS,
        column_labels=PHOTO_LABELS,
        quiet=ctx.quiet,
        id_field="photo_id",
    )


@photos.command("search")
@click.argument("query")
@global_options
@handle_errors
def photos_search(ctx: Context, query: str) -> None:
    """Search photos with a free-text query.

    The store turns the query into tags and returns the matching photos.

    Example:
        photoctl photos search "dogs at the beach"
    """
    from photoctl.services.photos import PhotoService

    result = PhotoService(ctx.get_client()).search(query)

    if ctx.output_format == OutputFormat.JSON and not ctx.quiet:
        print_output(result.to_dict(), format=OutputFormat.JSON)
        return

    if not ctx.quiet:
        console.print(f"Tags: {', '.join(result.tags) or '-'}")

    print_output(
        [p.to_dict() for p in result.photos],
        format=ctx.output_format,
        columns=PHOTO_COLUMNS,
        column_labels=PHOTO_LABELS,
        quiet=ctx.quiet,
        id_field="photo_id",
    )
