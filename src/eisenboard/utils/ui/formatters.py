"""Output formatters for different formats."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from eisenboard.models import BOARD_ORDER, Bucket, Category, Task, category_for_bucket

from .console import get_console

OUTPUT_FORMATS = ("pretty", "json", "yaml")

BUCKET_TITLES = {
    Bucket.URGENT_IMPORTANT: "Urgent & Important",
    Bucket.URGENT_NOT_IMPORTANT: "Urgent & Not Important",
    Bucket.TODAY: "Today's Tasks",
    Bucket.NOT_URGENT_IMPORTANT: "Not Urgent & Important",
    Bucket.NOT_URGENT_NOT_IMPORTANT: "Not Urgent & Not Important",
}

# Today cards are painted with the colour of the category they carry.
CATEGORY_COLORS = {
    Category.URGENT_IMPORTANT: "red",
    Category.URGENT_NOT_IMPORTANT: "yellow",
    Category.NOT_URGENT_IMPORTANT: "green",
    Category.NOT_URGENT_NOT_IMPORTANT: "blue",
}


def task_to_dict(task: Task) -> dict[str, Any]:
    """Plain, JSON-safe representation of a task."""
    return task.model_dump(mode="json")


def board_to_dict(board: Mapping[Bucket, Sequence[Task]]) -> dict[str, list[dict[str, Any]]]:
    """Plain representation of a grouped board, keyed by bucket token."""
    return {bucket.value: [task_to_dict(t) for t in tasks] for bucket, tasks in board.items()}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console = get_console()
        console.print(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        if isinstance(value, bool):
            formatted_value = "✓" if value else "✗"
        elif isinstance(value, dict):
            formatted_value = ", ".join(f"{k}={v}" for k, v in value.items())
        elif value is None:
            formatted_value = "-"
        else:
            formatted_value = str(value)
        table.add_row(formatted_key, formatted_value)

    get_console().print(table)


def _task_label(task: Task, color: bool) -> Text:
    check = "✓" if task.completed else "○"
    label = Text()
    label.append("● ", style=CATEGORY_COLORS[task.category] if color else None)
    label.append(f"{check} {task.title} ", style="dim strike" if task.completed else None)
    label.append(f"#{task.id}", style="dim")
    return label


def format_board(board: Mapping[Bucket, Sequence[Task]], color: bool = True) -> None:
    """Render the board as five columns in board order."""
    table = Table(show_header=True, header_style="bold", expand=True)
    for bucket in BOARD_ORDER:
        category = category_for_bucket(bucket)
        style = CATEGORY_COLORS[category] if category else "magenta"
        table.add_column(
            f"{BUCKET_TITLES[bucket]} ({len(board.get(bucket, ()))})",
            header_style=style if color else None,
            overflow="fold",
        )

    columns = [list(board.get(bucket, ())) for bucket in BOARD_ORDER]
    depth = max((len(c) for c in columns), default=0)
    for row in range(depth):
        table.add_row(
            *(
                _task_label(column[row], color) if row < len(column) else Text("")
                for column in columns
            )
        )

    get_console().print(table)


def format_task_list(tasks: Sequence[Task], title: str, color: bool = True) -> None:
    """Render a flat list of tasks (the completed panel)."""
    console = get_console()
    if not tasks:
        console.print(f"[yellow]No {title.lower()}[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Bucket")
    table.add_column("Updated", style="dim")
    for task in tasks:
        bucket = Text(task.bucket.value, style=CATEGORY_COLORS[task.category] if color else None)
        table.add_row(
            str(task.id), task.title, bucket, task.updated_at.strftime("%Y-%m-%d %H:%M")
        )

    console.print(table)


def format_task(task: Task, output_format: str = "pretty", color: bool = True) -> None:
    """Display one task in the requested format."""
    if output_format in ("json", "yaml"):
        format_output(task_to_dict(task), output_format)
        return
    console = get_console()
    console.print(_task_label(task, color))
    console.print(f"  [dim]{task.bucket.value} · position {task.position}[/dim]")


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
