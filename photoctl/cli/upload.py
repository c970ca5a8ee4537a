"""Upload command for photoctl."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

import click
from rich.progress import Progress, TaskID

from photoctl.cli.common import Context, ExitCode, global_options, handle_errors
from photoctl.core.output import (
    OutputFormat,
    console,
    create_progress,
    print_output,
    print_success,
    print_table,
    print_warning,
)
from photoctl.core.validation import validate_workers
from photoctl.models.item import ItemStatus, UploadItem

STATUS_LABELS = {
    ItemStatus.QUEUED: "[dim]Queued[/dim]",
    ItemStatus.ENCODING: "[blue]Processing[/blue]",
    ItemStatus.UPLOADING: "[blue]Uploading[/blue]",
    ItemStatus.SUCCESS: "[green]Done[/green]",
    ItemStatus.ERROR: "[red]Failed[/red]",
}


class UploadDisplay:
    """Live per-item progress bars fed by item change notifications.

    Only reads the item snapshots it is given; it never touches the service.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._progress: Optional[Progress] = None
        self._tasks: dict[str, TaskID] = {}

    def attach(self, progress: Progress, items: list[UploadItem]) -> None:
        with self._lock:
            self._progress = progress
            self._tasks = {
                item.id: progress.add_task(
                    item.source.name,
                    total=100,
                    completed=item.progress,
                    status=STATUS_LABELS[item.status],
                )
                for item in items
            }

    def detach(self) -> None:
        with self._lock:
            self._progress = None
            self._tasks = {}

    def __call__(self, item: UploadItem) -> None:
        with self._lock:
            progress = self._progress
            task_id = self._tasks.get(item.id)
        if progress is None or task_id is None:
            return
        progress.update(task_id, completed=item.progress, status=STATUS_LABELS[item.status])


def _run_with_display(ctx: Context, display: UploadDisplay, service, run) -> None:
    """Run one batch pass, rendering live bars when output allows it."""
    if ctx.output_format != OutputFormat.TABLE or ctx.quiet:
        run()
        return

    with create_progress() as progress:
        display.attach(progress, service.items)
        try:
            run()
        finally:
            display.detach()


@click.command("upload")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--workers",
    "-w",
    type=int,
    default=None,
    help="Concurrent uploads (default: profile setting, 4)",
)
@click.option(
    "--retry-rounds",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Re-run failed items up to N more times after the first pass",
)
@click.option(
    "--confirm-retry",
    is_flag=True,
    help="Ask before each retry round",
)
@global_options
@handle_errors
def upload(
    ctx: Context,
    files: tuple[Path, ...],
    workers: Optional[int],
    retry_rounds: int,
    confirm_retry: bool,
) -> None:
    """Upload images to the photo store.

    Each file is encoded and sent concurrently; failed items can be
    retried without re-sending the ones that succeeded.

    Example:
        photoctl upload a.jpg b.png
        photoctl upload photos/*.jpg --workers 8 --retry-rounds 1
        photoctl upload a.jpg -o json
    """
    from photoctl.services.uploads import UploadService

    workers = validate_workers(workers if workers is not None else ctx.get_profile().workers)
    client = ctx.get_client(workers)
    display = UploadDisplay()
    show_messages = ctx.output_format == OutputFormat.TABLE and not ctx.quiet

    def on_success() -> None:
        if show_messages:
            print_success("All uploads stored")

    with UploadService(
        client,
        workers=workers,
        on_success=on_success,
        on_change=display,
    ) as service:
        service.select(files)
        _run_with_display(ctx, display, service, service.submit)

        for round_no in range(1, retry_rounds + 1):
            failed = service.summary.failed
            if not failed:
                break
            if confirm_retry and not click.confirm(
                f"Retry {failed} failed item(s)? (round {round_no}/{retry_rounds})",
                default=True,
            ):
                break
            _run_with_display(ctx, display, service, service.retry_failed)

        _report(ctx, service)
        summary = service.summary

    if summary.failed:
        raise SystemExit(ExitCode.GENERAL_ERROR)


def _report(ctx: Context, service) -> None:
    items = service.items
    summary = service.summary

    if ctx.quiet:
        stored = [i.to_dict() for i in items if i.status is ItemStatus.SUCCESS]
        print_output(stored, quiet=True, id_field="photo_id")
        return

    if ctx.output_format == OutputFormat.JSON:
        print_output(
            {
                "summary": summary.to_dict(),
                "message": service.message,
                "items": [i.to_dict() for i in items],
            },
            format=OutputFormat.JSON,
        )
        return

    print_table(
        [
            {
                "name": i.source.name,
                "status": STATUS_LABELS[i.status],
                "progress": f"{i.progress}%",
                "detail": i.error if i.error else ", ".join(i.record.tags) if i.record else "",
            }
            for i in items
        ],
        ["name", "status", "progress", "detail"],
        column_labels={"detail": "Tags / Error"},
    )
    console.print(
        f"Total: {summary.total} · Uploading: {summary.in_progress} · "
        f"Success: {summary.success} · Failed: {summary.failed}"
    )
    if service.message:
        print_warning(service.message)
