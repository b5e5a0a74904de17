"""Interactive CLI application."""
import os
import sys
from datetime import date

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.prompt import Prompt, IntPrompt, Confirm

from dottrack.db import resolve_db_path
from dottrack.dashboard import day_stats, get_summary, get_unit_progress, month_stats, success_band
from dottrack.models import CORRECT, INCORRECT
from dottrack.project import build_units, create_project, find_unit, is_valid_question, set_unit_count
from dottrack.review_queue import is_overdue
from dottrack.status import filter_questions, status_of
from dottrack.storage import Storage
from dottrack.tracker import Tracker

console = Console()

STATUS_STYLE = {CORRECT: "green", INCORRECT: "red"}
BAND_STYLE = {"high": "green", "medium": "yellow", "low": "red", "none": "dim"}


def configure_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or os.environ.get("DOTTRACK_LOG_LEVEL", "WARNING"),
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("units", "Progress per unit"),
        ("mark", "Advance a question's status"),
        ("list", "List questions by unit and filter"),
        ("review", "Work through due reviews"),
        ("stats", "Today's numbers + accuracy"),
        ("history", "Per-day marks for a month"),
        ("reset", "Delete the project and start over"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def _ask_count(prompt: str, default: int, minimum: int = 0) -> int:
    while True:
        value = IntPrompt.ask(prompt, default=default)
        if value >= minimum:
            return value
        console.print(f"[red]Enter a number of at least {minimum}.[/red]")


def cmd_setup(storage: Storage) -> Tracker:
    console.print(Panel(
        "[bold]Welcome to DotTrack[/bold]\n[dim]Set up your practice structure once.[/dim]",
        title="Setup", border_style="blue",
    ))
    name = Prompt.ask("Project name", default="My Practice Project")
    unit_count = _ask_count("Total units", default=10, minimum=1)
    default_count = _ask_count("Default questions per unit", default=20)
    units = build_units(unit_count, default_count)
    if Confirm.ask("Adjust question counts per unit?", default=False):
        for i, unit in enumerate(units):
            value = Prompt.ask(f"Unit {unit.name} questions", default=str(unit.count))
            units = set_unit_count(units, i, value)
    project = create_project(name, units)
    storage.save_project(project)
    console.print(f"[green]Created {project.name} with {len(units)} units.[/green]")
    return Tracker(storage, project)


def cmd_units(tracker: Tracker):
    table = Table(title=tracker.project.name)
    table.add_column("Unit", style="cyan")
    table.add_column("Questions", justify="right")
    table.add_column("Correct", justify="right", style="green")
    table.add_column("Incorrect", justify="right", style="red")
    table.add_column("Unattempted", justify="right", style="dim")
    for u in get_unit_progress(tracker.project, tracker.status_map()):
        table.add_row(u["name"], str(u["total"]), str(u["correct"]), str(u["incorrect"]), str(u["unattempted"]))
    console.print(table)


def _has_units(tracker: Tracker) -> bool:
    if not tracker.project.units:
        console.print("[yellow]This project has no units. Use 'reset' to set it up again.[/yellow]")
        return False
    return True


def _ask_question(tracker: Tracker) -> tuple[str, int] | None:
    if not _has_units(tracker):
        return None
    unit_id = Prompt.ask("Unit id", choices=[u.id for u in tracker.project.units])
    question_index = IntPrompt.ask("Question number")
    if not is_valid_question(tracker.project, unit_id, question_index):
        console.print(f"[red]Unit {unit_id} has no question {question_index}.[/red]")
        return None
    return unit_id, question_index


def cmd_mark(tracker: Tracker):
    picked = _ask_question(tracker)
    if picked is None:
        return
    unit_id, question_index = picked
    status = tracker.advance(unit_id, question_index)
    style = STATUS_STYLE.get(status, "dim")
    console.print(f"{unit_id} #{question_index} → [{style}]{status}[/{style}]")


def cmd_list(tracker: Tracker):
    if not _has_units(tracker):
        return
    unit_id = Prompt.ask("Unit id", choices=["all"] + [u.id for u in tracker.project.units], default="all")
    practice_filter = Prompt.ask("Show", choices=["all", "incorrect", "unattempted"], default="all")
    units = tracker.project.units if unit_id == "all" else [find_unit(tracker.project, unit_id)]
    status_map = tracker.status_map()
    shown = 0
    for unit in units:
        indexes = filter_questions(unit, status_map, practice_filter)
        if not indexes:
            continue
        parts = []
        for i in indexes:
            style = STATUS_STYLE.get(status_of(status_map, unit.id, i), "dim")
            parts.append(f"[{style}]{i}[/{style}]")
        console.print(f"Unit {unit.name}: " + " ".join(parts))
        shown += 1
    if not shown:
        console.print("[dim]No questions match.[/dim]")


def cmd_review(tracker: Tracker):
    today = tracker.storage.today()
    due = tracker.due_reviews(today)
    if not due:
        console.print("[green]All caught up! No reviews due today.[/green]")
        return
    console.print(f"\n[bold]Review Queue[/bold]: {len(due)} due\n")
    for item in due:
        unit = find_unit(tracker.project, item.unit_id)
        label = "Overdue" if is_overdue(item, today) else "Due Today"
        console.print(Panel(
            f"Unit {unit.name if unit else '?'} #{item.question_index}  [dim]+{item.interval} days[/dim]",
            title=label, border_style="red" if label == "Overdue" else "cyan",
        ))
        answer = Prompt.ask("Got it or still wrong?", choices=["got", "wrong", "skip"], default="skip")
        if answer == "got":
            tracker.mark_resolved(item.unit_id, item.question_index)
            console.print("[green]Resolved.[/green]")
        elif answer == "wrong":
            tracker.mark_still_wrong(item.unit_id, item.question_index)
            console.print("[red]Back tomorrow.[/red]")


def cmd_stats(tracker: Tracker):
    today = tracker.storage.today()
    summary = get_summary(tracker.project, tracker.status_map(), tracker.state.queue, today)
    stats = day_stats(tracker.state.attempts, today)
    band = BAND_STYLE[success_band(stats)]
    accuracy = f"{summary['accuracy']}%" if summary["accuracy"] is not None else "-"
    console.print(f"\n  Today: [{band}]{stats.total} marks[/{band}] "
                  f"([green]{stats.correct}[/green] / [red]{stats.incorrect}[/red])")
    console.print(f"  Scheduled Reviews: [bold]{summary['reviews_due']}[/bold]  |  "
                  f"Questions Done: [bold]{summary['questions_done']}[/bold] of {summary['questions_total']}  |  "
                  f"Accuracy: [bold]{accuracy}[/bold]")


def cmd_history(tracker: Tracker):
    today = date.fromisoformat(tracker.storage.today())
    year = IntPrompt.ask("Year", default=today.year)
    month = IntPrompt.ask("Month", choices=[str(m) for m in range(1, 13)], default=today.month)
    days = [d for d in month_stats(tracker.state.attempts, year, month) if d.total]
    if not days:
        console.print(f"[dim]No practice recorded in {year}-{month:02d}.[/dim]")
        return
    table = Table(title=f"History {year}-{month:02d}")
    table.add_column("Date", style="cyan")
    table.add_column("Marks", justify="right")
    table.add_column("Correct", justify="right", style="green")
    table.add_column("Incorrect", justify="right", style="red")
    for d in days:
        band = BAND_STYLE[success_band(d)]
        table.add_row(d.date, f"[{band}]{d.total}[/{band}]", str(d.correct), str(d.incorrect))
    console.print(table)


def cmd_reset(tracker: Tracker) -> bool:
    if not Confirm.ask("[red]Delete the project and all history?[/red]", default=False):
        return False
    tracker.storage.delete_project()
    return True


def main():
    configure_logging()
    storage = Storage(resolve_db_path())
    storage.initialize()

    project = storage.load_project()
    tracker = Tracker.load(storage, project) if project else None

    while True:
        if tracker is None:
            try:
                tracker = cmd_setup(storage)
            except KeyboardInterrupt:
                console.print("\n[dim]Setup cancelled.[/dim]")
                break
            except Exception as e:
                console.print(f"[red]Setup failed: {e}[/red]")
                continue
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="review").strip().lower()
        try:
            if choice == "units":
                cmd_units(tracker)
            elif choice == "mark":
                cmd_mark(tracker)
            elif choice == "list":
                cmd_list(tracker)
            elif choice == "review":
                cmd_review(tracker)
            elif choice == "stats":
                cmd_stats(tracker)
            elif choice == "history":
                cmd_history(tracker)
            elif choice == "reset":
                if cmd_reset(tracker):
                    # The old state belongs to the deleted project
                    tracker = None
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Keep practicing![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
