"""
Practice Planner: terminal interface.

A Rich terminal shell around the planning core.

Commands:
- practice-planner today          - Show today's schedule and streak
- practice-planner shuffle        - Draw a different schedule for today
- practice-planner practice       - Run today's practice session
- practice-planner history        - Show recent practice history
- practice-planner streak         - Show the current streak
- practice-planner skills ...     - List, show, add and remove skills
- practice-planner settings ...   - Show and change settings
- practice-planner reset-history  - Clear practice history
- practice-planner reset          - Restore default settings and skills
"""
from __future__ import annotations

import random
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.live import Live
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .clock import Clock, SystemClock
from .config import Settings, get_settings
from .defaults import default_configuration
from .errors import PlannerError
from .models import PlannerConfiguration, Skill
from .planner import PracticePlanner
from .session import PracticeSession, SessionEvent
from .storage import PlannerStore


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="practice-planner",
    help="Practice Planner: daily skill practice sessions",
    no_args_is_help=True,
)
skills_app = typer.Typer(help="Manage the skills you practice", no_args_is_help=True)
settings_app = typer.Typer(help="Show and change practice settings", no_args_is_help=True)
app.add_typer(skills_app, name="skills")
app.add_typer(settings_app, name="settings")

console = Console()
clock: Clock = SystemClock()


# =============================================================================
# Helpers
# =============================================================================

def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr (and an optional log file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB", retention=3)


def _default_config(settings: Settings) -> PlannerConfiguration:
    return default_configuration(
        practice_minutes=settings.default_practice_minutes,
        repeat_threshold=settings.default_repeat_days,
        skills_per_day=settings.default_skills_per_day,
    )


def _load_planner(settings: Settings) -> tuple[PlannerStore, PracticePlanner]:
    store = PlannerStore(settings.data_dir)

    def ring(skill: Skill) -> None:
        if settings.bell:
            console.bell()

    planner = PracticePlanner.from_store(
        store,
        _default_config(settings),
        clock.now(),
        rng=random.Random(settings.random_seed),
        on_skill_complete=ring,
    )
    return store, planner


@contextmanager
def _planner_errors() -> Iterator[None]:
    """Report planner errors as a message and exit code 1."""
    try:
        yield
    except PlannerError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1) from e


def format_duration(delta: timedelta) -> str:
    """Format a duration as HH:MM:SS (negative values clamp to zero)."""
    total = max(0, int(delta.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def _schedule_table(skills: list[Skill], title: str = "Today's Skills") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim")
    table.add_column("Skill", style="bold")
    table.add_column("Exercises")
    for i, skill in enumerate(skills, 1):
        table.add_row(str(i), skill.name, str(len(skill.exercises)))
    return table


def _render_session(session: PracticeSession) -> Panel:
    done, total = session.progress()
    skill = session.current_skill
    exercise = session.current_exercise
    body = Markdown(exercise.text) if exercise and exercise.text else Markdown(f"# {skill.name}")
    status = "[yellow]PAUSED[/yellow]  " if session.is_paused else ""
    exercise_label = ""
    if exercise is not None:
        exercise_label = f"  |  {exercise.name} ({(session.exercise_index or 0) + 1}/{len(skill.exercises)})"
    return Panel(
        body,
        title=f"Skill {done + 1}/{total}  |  [bold]{skill.name}[/bold]{exercise_label}",
        title_align="left",
        subtitle=f"{status}Time left: [bold]{format_duration(session.time_left)}[/bold]  [dim](Ctrl+C for menu)[/dim]",
        border_style="cyan",
        padding=(1, 2),
    )


# =============================================================================
# Practice Loop
# =============================================================================

def _run_session(session: PracticeSession, settings: Settings) -> bool:
    """
    Tick the session until it completes or is stopped.

    Returns:
        True if the session completed, False if it was stopped
    """
    while session.is_active:
        try:
            with Live(_render_session(session), console=console, refresh_per_second=8) as live:
                while session.is_active:
                    event = session.tick(clock.now())
                    if event is SessionEvent.COMPLETED:
                        break
                    if event is SessionEvent.ADVANCED:
                        logger.debug(f"Now practicing {session.current_skill.name}")
                    live.update(_render_session(session))
                    time.sleep(settings.tick_interval_seconds)
        except KeyboardInterrupt:
            session.pause(clock.now())
            if not _pause_menu(session):
                return False
    return True


def _pause_menu(session: PracticeSession) -> bool:
    """
    Interactive menu shown while paused.

    Returns:
        False if the user stopped the session, True otherwise
    """
    while session.is_active:
        console.print(_render_session(session))
        try:
            choice = Prompt.ask(
                "[bold]Paused[/bold] - resume (r), next exercise (n), previous exercise (p), skip skill (s), quit (q)",
                choices=["r", "n", "p", "s", "q"],
                default="r",
            )
        except KeyboardInterrupt:
            # Ctrl+C at the menu quits
            choice = "q"
        now = clock.now()
        if choice == "r":
            session.resume(now)
            return True
        if choice == "n":
            session.next_exercise()
        elif choice == "p":
            session.previous_exercise()
        elif choice == "s":
            session.advance(now)
        elif choice == "q":
            session.stop(now)
            console.print("\n[yellow]Practice stopped. Today's schedule is kept.[/yellow]")
            return False
    return True


# =============================================================================
# Commands
# =============================================================================

@app.command()
def today() -> None:
    """Show today's schedule (drawing it if needed) and the streak."""
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        now = clock.now()
        skills = planner.todays_schedule(now)
        planner.save(store)

    console.print(_schedule_table(skills))
    console.print(
        f"\n{planner.config.practice_duration.total_seconds() / 60:.0f} minutes per skill  |  "
        f"Streak: [bold green]{planner.streak(now)}[/bold green] days"
    )


@app.command()
def shuffle() -> None:
    """Draw a different schedule for today."""
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        skills = planner.shuffle(clock.now())
        planner.save(store)
    console.print(_schedule_table(skills, title="Shuffled Skills"))


@app.command()
def practice(
    yes: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Start without asking",
    ),
) -> None:
    """
    Run today's practice session.

    Each scheduled skill is practiced for the configured time. Press
    Ctrl+C to pause, browse exercises, skip a skill or stop.
    """
    settings = get_settings()
    store, planner = _load_planner(settings)

    with _planner_errors():
        skills = planner.todays_schedule(clock.now())
        planner.save(store)

    console.print("\n[bold cyan]Practice Planner[/bold cyan]", style="bold")
    console.print("=" * 40)
    console.print(_schedule_table(skills))
    minutes = planner.config.practice_duration.total_seconds() / 60
    console.print(f"\n{len(skills)} skills x {minutes:.0f} min\n")

    if not yes and not Confirm.ask("Start practicing?", default=True):
        console.print("Well, okay then.")
        raise typer.Exit(0)

    with _planner_errors():
        planner.start_practice(clock.now())
        completed = _run_session(planner.session, settings)

    planner.save(store)
    if completed:
        console.print(Panel(
            f"[bold]Finished practicing for today![/bold]\n\n"
            f"Skills practiced: {len(skills)}\n"
            f"Streak: {planner.streak(clock.now())} days",
            title="Summary",
            border_style="green",
        ))


@app.command()
def history(
    days: Optional[int] = typer.Option(
        None,
        "--days", "-d",
        help="Number of days to show",
    ),
) -> None:
    """Show skills practiced over recent days."""
    settings = get_settings()
    _, planner = _load_planner(settings)
    with _planner_errors():
        window = days if days is not None else settings.history_display_days
        recent = planner.recent_history(clock.now(), window)

    if not recent:
        console.print("[bold]No history[/bold]")
        return

    table = Table(title="Practice History")
    table.add_column("Date", style="bold")
    table.add_column("Skills")
    for day, names in recent.items():
        table.add_row(day.isoformat(), ", ".join(names))
    console.print(table)


@app.command()
def streak() -> None:
    """Show the number of consecutive days practiced."""
    settings = get_settings()
    _, planner = _load_planner(settings)
    console.print(f"Streak: [bold green]{planner.streak(clock.now())}[/bold green] days")


@app.command("reset-history")
def reset_history(
    confirm: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Skip confirmation",
    ),
) -> None:
    """Clear all practice history. This cannot be undone."""
    if not confirm and not Confirm.ask("Reset ALL practice history? This cannot be undone!", default=False):
        raise typer.Exit(0)
    settings = get_settings()
    store, planner = _load_planner(settings)
    planner.reset_history()
    planner.save(store)
    console.print("[green]Practice history has been reset.[/green]")


@app.command()
def reset(
    confirm: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Skip confirmation",
    ),
) -> None:
    """Restore default settings and skills, and clear history."""
    if not confirm and not Confirm.ask(
        "Reset settings and history to defaults? This cannot be undone!", default=False
    ):
        raise typer.Exit(0)
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        planner.reset_settings(_default_config(settings))
    planner.save(store)
    console.print("[green]Settings and history have been reset to defaults.[/green]")


# =============================================================================
# Skills
# =============================================================================

@skills_app.command("list")
def list_skills() -> None:
    """List configured skills."""
    settings = get_settings()
    _, planner = _load_planner(settings)

    table = Table(title="Skills")
    table.add_column("Skill", style="bold")
    table.add_column("Exercises")
    table.add_column("Last practiced", style="dim")
    for skill in planner.config.skills:
        last = planner.history.last_practiced(skill.name)
        table.add_row(skill.name, str(len(skill.exercises)), last.date().isoformat() if last else "never")
    console.print(table)


@skills_app.command("show")
def show_skill(name: str = typer.Argument(..., help="Skill name")) -> None:
    """Show every exercise of a skill."""
    settings = get_settings()
    _, planner = _load_planner(settings)
    with _planner_errors():
        skill = planner.config.get_skill(name)

    for i, exercise in enumerate(skill.exercises, 1):
        console.print(Panel(
            Markdown(exercise.text or exercise.name),
            title=f"{skill.name}  |  {exercise.name} ({i}/{len(skill.exercises)})",
            title_align="left",
            border_style="cyan",
        ))


@skills_app.command("add")
def add_skill(
    name: str = typer.Argument(..., help="Skill name"),
    exercise: Optional[List[str]] = typer.Option(
        None,
        "--exercise", "-e",
        help="Exercise text (markdown); repeat for several exercises",
    ),
) -> None:
    """Add a skill."""
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        skill = Skill.from_texts(name, exercise or [f"# {name}\n\nPractice {name}."])
        planner.add_skill(skill)
    planner.save(store)
    console.print(f"[green]Added skill {skill.name} with {len(skill.exercises)} exercises[/green]")


@skills_app.command("remove")
def remove_skill(
    name: str = typer.Argument(..., help="Skill name"),
    confirm: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Skip confirmation",
    ),
) -> None:
    """Remove a skill. This cannot be undone."""
    if not confirm and not Confirm.ask(f"Delete skill '{name}'? This cannot be undone!", default=False):
        raise typer.Exit(0)
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        planner.delete_skill(name)
    planner.save(store)
    console.print(f"[green]Deleted skill {name}[/green]")


# =============================================================================
# Settings
# =============================================================================

@settings_app.command("show")
def show_settings() -> None:
    """Show practice settings."""
    settings = get_settings()
    _, planner = _load_planner(settings)
    config = planner.config

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Minutes per skill", f"{config.practice_duration.total_seconds() / 60:g}")
    table.add_row("Skills per day", str(config.skills_per_day))
    table.add_row("Repeat every (days)", str(config.repeat_threshold))
    table.add_row("Skills configured", str(len(config.skills)))
    table.add_row("Data directory", str(settings.data_dir))
    console.print(table)


@settings_app.command("set")
def set_settings(
    minutes: Optional[int] = typer.Option(None, "--minutes", "-m", help="Minutes per skill"),
    per_day: Optional[int] = typer.Option(None, "--per-day", "-n", help="Skills per day"),
    repeat_days: Optional[int] = typer.Option(None, "--repeat-days", "-r", help="Max days between repeats"),
) -> None:
    """Change practice settings."""
    settings = get_settings()
    store, planner = _load_planner(settings)
    with _planner_errors():
        planner.update_settings(
            practice_minutes=minutes,
            skills_per_day=per_day,
            repeat_threshold=repeat_days,
        )
    planner.save(store)
    console.print("[green]Settings saved.[/green]")


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
