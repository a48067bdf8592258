"""Main entry point for the eisenboard CLI."""

import typer

from eisenboard import __version__
from eisenboard.commands import config_command, tasks_command
from eisenboard.utils.typer_helpers import SuggestingGroup
from eisenboard.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="eisenboard",
    cls=SuggestingGroup,
    help="An Eisenhower-matrix task board for the terminal",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(tasks_command.app, name="tasks", help="Task management commands")
app.add_typer(config_command.app, name="config", help="Configuration management")


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]eisenboard[/bold] version [cyan]{__version__}[/cyan]")


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    bucket: str = typer.Argument("ui", help=tasks_command.BUCKET_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """
    Quick add a task.

    Examples:
      eisenboard add "Buy milk" uni
      eisenboard add "File taxes" today
    """
    # Delegate to tasks command
    tasks_command.add_task(title=title, bucket=bucket, output=output, json_opt=json)


@app.command("board")
def board(
    all_tasks: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
) -> None:
    """Show the board."""
    tasks_command.show_board(all_tasks=all_tasks, output=output, json_opt=json)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
