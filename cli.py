"""
CLI Interface module for Calorie Tracker.
Handles all user interaction and display formatting.
"""

import sys
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich import box

from app_logging import configure_logging
from config import Config
from models import ValidationError
from storage import SqliteStore
from tracker import PersistenceError, Tracker, TrackerView

console = Console()

EMPTY_MESSAGE = "No food items added yet."
RESET_QUESTION = ("Are you sure you want to reset the calorie tracker? "
                  "This action cannot be undone.")


# ============== Helper Functions ==============

def clear_screen():
    """Clear the console screen."""
    console.clear()


def print_header(title: str):
    """Print a styled header."""
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", box=box.DOUBLE))
    console.print()


def print_success(message: str):
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def format_calories(value) -> str:
    """Format a calorie value without a trailing .0 for whole numbers."""
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.1f}"
    return f"{int(value):,}"


# ============== Rendering ==============

def render_tracker(view: TrackerView, out: Optional[Console] = None):
    """Print the food list and the running total."""
    out = out or console

    if view.is_empty:
        out.print(f"[dim]{EMPTY_MESSAGE}[/dim]")
    else:
        table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
        table.add_column("#", style="dim", width=4)
        table.add_column("Food", style="cyan", min_width=20)
        table.add_column("Calories", justify="right")

        for number, entry in enumerate(view.entries, start=1):
            table.add_row(str(number), entry.name, f"{format_calories(entry.calories)} calories")

        out.print(table)

    out.print(f"[bold]Total:[/bold] {format_calories(view.total)} calories")


# ============== Menus ==============

def add_food_menu(tracker: Tracker):
    """Ask for a food and its calories, then add it."""
    print_header("Add Food")

    name = Prompt.ask("Food name", default="", show_default=False).strip()
    calories = Prompt.ask("Calories", default="", show_default=False).strip()

    if not name or not calories:
        print_error("Food name and calories are required.")
        return

    try:
        entry = tracker.add_food(name, calories)
    except ValidationError as e:
        print_error(str(e))
        return
    print_success(f"Added '{entry.name}' ({format_calories(entry.calories)} calories)")


def remove_food_menu(tracker: Tracker):
    """Remove an entry by its row number in the list."""
    print_header("Remove Food")

    entries = tracker.entries
    if not entries:
        print_warning(EMPTY_MESSAGE)
        return

    render_tracker(tracker.view())
    choice = Prompt.ask("Item number to remove (Enter to cancel)", default="",
                        show_default=False).strip()
    if not choice:
        return
    if not choice.isdigit() or not 1 <= int(choice) <= len(entries):
        print_error(f"Choose a number between 1 and {len(entries)}.")
        return

    entry = entries[int(choice) - 1]
    tracker.remove_food(entry.id)
    print_success(f"Removed '{entry.name}'.")


def reset_menu(tracker: Tracker):
    """Clear the tracker after an explicit confirmation."""
    if tracker.reset(lambda: Confirm.ask(RESET_QUESTION, default=False)):
        print_success("Calorie tracker reset.")
    else:
        print_warning("Reset cancelled.")


def main_menu(tracker: Tracker):
    """Display and handle main menu."""
    actions = {
        "1": add_food_menu,
        "2": remove_food_menu,
        "3": reset_menu,
    }

    while True:
        console.print()
        console.print("  [1] Add Food")
        console.print("  [2] Remove Food")
        console.print("  [3] Reset Tracker")
        console.print("  [0] Exit")
        console.print()

        choice = Prompt.ask("Choice", choices=["0", "1", "2", "3"], default="1")

        if choice == "0":
            console.print("[cyan]Goodbye! Keep tracking![/cyan]")
            break

        try:
            actions[choice](tracker)
        except PersistenceError as e:
            print_error(f"{e} Your changes are kept for this session.")


def show_tracker(view: TrackerView):
    """Listener that redraws the tracker after every change."""
    clear_screen()
    console.print(Panel(
        "[bold cyan]Calorie Tracker[/bold cyan]\n[dim]Keep a running total of what you eat[/dim]",
        box=box.DOUBLE
    ))
    render_tracker(view)


def build_tracker(config: Config) -> Tracker:
    """Create a tracker backed by the configured SQLite file."""
    store = SqliteStore(config.database_path)
    return Tracker(store, key=config.storage_key)


def run():
    """Entry point for the CLI."""
    try:
        config = Config.from_env()
        configure_logging(config.log_level)
        tracker = build_tracker(config)
        tracker.subscribe(show_tracker)
        tracker.initialize()
        main_menu(tracker)
    except KeyboardInterrupt:
        console.print("\n[cyan]Goodbye![/cyan]")
        sys.exit(0)
    except Exception as e:
        console.print(f"[red]Fatal error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    run()
