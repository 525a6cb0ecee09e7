"""Command line interface for the habit ledger."""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .errors import HabitLedgerError, InvalidDateError
from .infra.database import bootstrap_database
from .logging_config import setup_logging
from .models.todo import TodoList
from .services.dates import parse_day, today_iso
from .services.export_csv import export_completions_csv
from .services.habits import HabitTracker


class AppContext:
    """Per-invocation state: configuration, the resolved day, and a lazy tracker."""

    def __init__(self, config: BaseConfig, today: str) -> None:
        self.config = config
        self.today = today
        self._tracker: Optional[HabitTracker] = None

    @property
    def tracker(self) -> HabitTracker:
        if self._tracker is None:
            _, session_factory = bootstrap_database(self.config)
            self._tracker = HabitTracker(session_factory)
        return self._tracker


pass_app = click.make_pass_decorator(AppContext)


def _day_param(ctx, param, value):  # noqa: ARG001 - click callback signature
    if value is None:
        return None
    try:
        return parse_day(value)
    except InvalidDateError as exc:
        raise click.BadParameter(str(exc)) from exc


def _handle_errors(func):
    """Turn domain errors into clean CLI failures."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HabitLedgerError as exc:
            raise click.ClickException(str(exc)) from exc
        except ValueError as exc:
            raise click.UsageError(str(exc)) from exc

    return wrapper


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the database and logs (default: $HABITLEDGER_DATA_DIR or ./instance).",
)
@click.option("--database-url", default=None, help="SQLAlchemy URL overriding the default SQLite file.")
@click.option(
    "--today",
    default=None,
    callback=_day_param,
    help="Treat this YYYY-MM-DD day as today.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path], database_url: Optional[str], today: Optional[str]) -> None:
    """Track daily habits, streaks and achievements."""

    config = BaseConfig(data_dir=data_dir, database_url=database_url)
    setup_logging(config)
    ctx.obj = AppContext(config, today or today_iso())


@cli.command("init-db")
@pass_app
def init_db(app: AppContext) -> None:
    """Create the database schema."""

    bootstrap_database(app.config)
    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.group()
def habits() -> None:
    """Manage habits."""


@habits.command("add")
@click.argument("name")
@pass_app
@_handle_errors
def habits_add(app: AppContext, name: str) -> None:
    habit = app.tracker.add_habit(name, today=app.today)
    click.echo(f"{habit.id}\t{habit.name}")


@habits.command("list")
@click.option("--json", "as_json", is_flag=True, default=False)
@pass_app
@_handle_errors
def habits_list(app: AppContext, as_json: bool) -> None:
    rows = app.tracker.list_habits()
    if as_json:
        _echo_json([habit.to_dict() for habit in rows])
        return
    for habit in rows:
        status = f"deleted {habit.deleted_date}" if habit.deleted else "active"
        click.echo(f"{habit.id}\t{habit.name}\tsince {habit.created_date}\t{status}")


@habits.command("rename")
@click.argument("habit_id")
@click.argument("name")
@pass_app
@_handle_errors
def habits_rename(app: AppContext, habit_id: str, name: str) -> None:
    habit = app.tracker.rename_habit(habit_id, name)
    click.echo(f"{habit.id}\t{habit.name}")


@habits.command("delete")
@click.argument("habit_id")
@pass_app
@_handle_errors
def habits_delete(app: AppContext, habit_id: str) -> None:
    habit = app.tracker.delete_habit(habit_id, today=app.today)
    click.echo(f"Deleted {habit.name} ({habit.id}) on {habit.deleted_date}")


@habits.command("reorder")
@click.argument("habit_ids", nargs=-1, required=True)
@pass_app
@_handle_errors
def habits_reorder(app: AppContext, habit_ids: tuple[str, ...]) -> None:
    for habit in app.tracker.reorder_habits(habit_ids):
        click.echo(f"{habit.sort_order}\t{habit.id}\t{habit.name}")


@cli.group()
def todos() -> None:
    """Manage the work and home to-do lists."""


_list_option = click.option(
    "--list",
    "list_name",
    type=click.Choice([item.value for item in TodoList]),
    required=True,
    help="Which to-do list to use.",
)


@todos.command("add")
@click.argument("name")
@_list_option
@pass_app
@_handle_errors
def todos_add(app: AppContext, name: str, list_name: str) -> None:
    todo = app.tracker.add_todo(list_name, name, today=app.today)
    click.echo(f"{todo.id}\t{todo.name}")


@todos.command("list")
@_list_option
@click.option("--json", "as_json", is_flag=True, default=False)
@pass_app
@_handle_errors
def todos_list(app: AppContext, list_name: str, as_json: bool) -> None:
    items = app.tracker.list_todos(list_name)
    if as_json:
        _echo_json([todo.to_dict() for todo in items])
        return
    for todo in items:
        click.echo(f"{todo.id}\t{todo.name}\tsince {todo.created_date}")


@todos.command("remove")
@click.argument("todo_id")
@_list_option
@pass_app
@_handle_errors
def todos_remove(app: AppContext, todo_id: str, list_name: str) -> None:
    app.tracker.remove_todo(list_name, todo_id)
    click.echo(f"Removed {todo_id} from {list_name}")


@cli.command("day")
@click.argument("day", required=False, callback=_day_param)
@click.option("--json", "as_json", is_flag=True, default=False)
@pass_app
@_handle_errors
def day_view(app: AppContext, day: Optional[str], as_json: bool) -> None:
    """Show the habits of a day and whether each was done."""

    entries = app.tracker.day_view(day or app.today)
    if as_json:
        _echo_json([entry.to_dict() for entry in entries])
        return
    for entry in entries:
        mark = "x" if entry.completed else " "
        click.echo(f"[{mark}] {entry.habit_id}\t{entry.name}")


def _toggle(app: AppContext, day: str, habit_id: str, completed: bool) -> None:
    outcome = app.tracker.toggle_completion(day, habit_id, completed)
    for key in outcome.awarded:
        scope = key.habit_id or "global"
        click.echo(f"Achievement earned: {key.type.value} ({scope}) on {key.earned_date}")
    if outcome.revoked:
        click.echo(f"Achievements revoked: {outcome.revoked}")


@cli.command("done")
@click.argument("day", callback=_day_param)
@click.argument("habit_id")
@pass_app
@_handle_errors
def mark_done(app: AppContext, day: str, habit_id: str) -> None:
    """Mark a habit completed on DAY."""

    _toggle(app, day, habit_id, True)


@cli.command("undo")
@click.argument("day", callback=_day_param)
@click.argument("habit_id")
@pass_app
@_handle_errors
def mark_undone(app: AppContext, day: str, habit_id: str) -> None:
    """Clear a habit's completion on DAY."""

    _toggle(app, day, habit_id, False)


@cli.command("streaks")
@click.argument("day", required=False, callback=_day_param)
@click.option("--json", "as_json", is_flag=True, default=False)
@pass_app
@_handle_errors
def streaks(app: AppContext, day: Optional[str], as_json: bool) -> None:
    """Show current streaks as of DAY (default today)."""

    results = app.tracker.streaks(day or app.today, today=app.today)
    if as_json:
        _echo_json([item.to_dict() for item in results])
        return
    for item in results:
        unit = "day" if item.streak == 1 else "days"
        click.echo(f"{item.name}\t{item.streak} {unit}")


@cli.command("achievements")
@click.option("--json", "as_json", is_flag=True, default=False)
@pass_app
@_handle_errors
def achievements(app: AppContext, as_json: bool) -> None:
    """Summarise earned achievements."""

    summary = app.tracker.achievements()
    if as_json:
        _echo_json(summary.to_dict())
        return
    click.echo("Global")
    for item in summary.global_achievements:
        click.echo(f"  {item.type}\t{item.count}\t{item.latest_date or '-'}")
    for entry in summary.per_habit:
        click.echo(entry.name)
        for item in entry.achievements:
            click.echo(f"  {item.type}\t{item.count}\t{item.latest_date or '-'}")


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@pass_app
@_handle_errors
def export(app: AppContext, output: Path) -> None:
    """Write the completion grid to a CSV file."""

    habits_rows, completions = app.tracker.export_rows()
    path = export_completions_csv(habits=habits_rows, completions=completions, output_path=output)
    click.echo(f"Export written: {path}")


def main() -> None:
    cli(prog_name="habitledger")


__all__ = ["cli", "main"]
