"""CLI Entry Point - Main command interface.

This module provides the main entry point for the SleepCheck CLI application.
It wires settings, the text generator and an assessment session together and
hands them to the rich quiz interface.
"""

import asyncio
import logging

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console
from rich.prompt import Confirm

from src.shared.config import Settings, get_settings
from src.shared.exceptions import ConfigurationError, SleepCheckException

# Main application
app = typer.Typer(
    name="sleepcheck",
    help="SleepCheck - AI-assisted assessment of last night's sleep",
    no_args_is_help=True,
    pretty_exceptions_enable=True,
)
console = Console()

logger = logging.getLogger(__name__)


def run_async(coro):
    """Helper to run async functions in sync context."""
    return asyncio.run(coro)


def load_settings() -> Settings:
    """Load settings, reporting invalid environment values as a ConfigurationError."""
    try:
        return get_settings()
    except SettingsValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@app.command("assess")
def assess(
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Skip the text generator and use built-in questions and local scoring",
    ),
) -> None:
    """Take today's sleep assessment.

    Generates questions about last night's sleep, collects your answers and
    shows a score with personalized recommendations.
    """
    from src.cli.ui import display_score_card, run_assessment
    from src.modules.assessment import AssessmentSession, SessionPhase
    from src.modules.llm.service import create_oracle

    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    if not offline and not settings.has_llm_credentials:
        console.print("[yellow]ANTHROPIC_API_KEY not set; running offline.[/yellow]")
        offline = True

    oracle = None if offline else create_oracle(settings)
    session = AssessmentSession(oracle, settings)

    display_score_card(session.result, title="Current Sleep Score")

    async def _run() -> None:
        while True:
            snapshot = await run_assessment(session)
            if snapshot.phase == SessionPhase.COMPLETE:
                display_score_card(snapshot.result, title="Your Sleep Assessment Results")
            if not Confirm.ask("\nTake the assessment again?", default=False):
                break

    try:
        run_async(_run())
    except SleepCheckException as e:
        logger.debug("Assessment aborted: %s", e.to_dict())
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command("questions")
def questions() -> None:
    """Show the built-in question set used when generation is unavailable."""
    from src.cli.ui import display_questions
    from src.modules.assessment import default_questions

    display_questions(default_questions())


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """SleepCheck - AI-assisted assessment of last night's sleep.

    Use 'sleepcheck --help' to see all available commands.

    Quick start:
      sleepcheck assess            - Take today's sleep assessment
      sleepcheck assess --offline  - Assess without the text generator
    """
    if verbose:
        level = logging.DEBUG
    else:
        try:
            level = load_settings().log_level
        except ConfigurationError:
            # The command itself reports the configuration problem
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
