"""Task management commands."""

import typer

from eisenboard.config import get_config_manager
from eisenboard.services import task_service_scope
from eisenboard.utils.typer_helpers import SuggestingGroup
from eisenboard.utils.ui.formatters import (
    board_to_dict,
    format_board,
    format_output,
    format_info,
    format_success,
    format_task,
    format_task_list,
    task_to_dict,
)

from .decorators import bucket_arg, command_wrapper, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")

BUCKET_HELP = "Bucket: ui, uni, nui, nun, today (or the full bucket name)"


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    bucket: str = typer.Argument("ui", help=BUCKET_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Add a task at the bottom of a bucket."""
    output = resolve_output(output, json_opt)
    with task_service_scope() as service:
        task = await service.create_task(title, bucket_arg(bucket))

    if output == "pretty":
        format_success(f"Added #{task.id} to {task.bucket.value} at position {task.position}")
    else:
        format_output(task_to_dict(task), output)


@app.command("board")
@command_wrapper
async def show_board(
    all_tasks: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Show the board: four quadrants plus Today."""
    output = resolve_output(output, json_opt)
    config = get_config_manager().config
    include_completed = all_tasks or config.board.show_completed

    with task_service_scope() as service:
        board = await service.list_board(include_completed=include_completed)

    if output == "pretty":
        format_board(board, color=config.output.color)
    else:
        format_output(board_to_dict(board), output)


@app.command("completed")
@command_wrapper
async def list_completed(
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum tasks to show"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """List completed tasks, most recently updated first."""
    output = resolve_output(output, json_opt)
    config = get_config_manager().config

    with task_service_scope() as service:
        tasks = await service.list_completed(limit or config.board.completed_limit)

    if output == "pretty":
        format_task_list(tasks, "Completed Tasks", color=config.output.color)
    else:
        format_output([task_to_dict(t) for t in tasks], output)


@app.command("toggle")
@command_wrapper
async def toggle_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Mark a task done, or open again."""
    output = resolve_output(output, json_opt)
    with task_service_scope() as service:
        task = await service.toggle_task(task_id)

    if output == "pretty":
        format_success(f"Task #{task.id} marked {'done' if task.completed else 'open'}")
    else:
        format_output(task_to_dict(task), output)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    title: str = typer.Argument(..., help="New title"),
) -> None:
    """Change a task's title."""
    with task_service_scope() as service:
        await service.edit_task_title(task_id, title)

    format_success(f"Task #{task_id} updated")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
) -> None:
    """Delete a task. Deleting a missing task is not an error."""
    with task_service_scope() as service:
        await service.delete_task(task_id)

    format_success(f"Task #{task_id} deleted")


@app.command("move")
@command_wrapper
async def move_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    bucket: str = typer.Argument(..., help=BUCKET_HELP),
    index: int | None = typer.Option(
        None, "--index", "-i", help="Zero-based slot in the target bucket (default: top)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Move a task to another bucket.

    Positions of the other tasks are not shifted; follow up with
    ``tasks reorder`` to renumber the target bucket.
    """
    output = resolve_output(output, json_opt)
    config = get_config_manager().config
    with task_service_scope() as service:
        task = await service.move_task(task_id, bucket_arg(bucket), index)

    format_task(task, output, color=config.output.color)
    if output == "pretty":
        format_info(f"Run 'eisenboard tasks reorder {task.bucket.value} ...' to renumber the bucket")


@app.command("reorder")
@command_wrapper
async def reorder_bucket(
    bucket: str = typer.Argument(..., help=BUCKET_HELP),
    task_ids: list[int] = typer.Argument(..., help="Task IDs in their new order"),
) -> None:
    """Renumber a bucket: the listed tasks get positions 1..N."""
    with task_service_scope() as service:
        await service.reorder_bucket(bucket_arg(bucket), task_ids)

    format_success(f"Reordered {len(task_ids)} task(s)")
