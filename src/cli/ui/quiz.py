"""Quiz Interface - Interactive sleep assessment in the terminal."""

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt

from src.modules.assessment import AssessmentSession, SessionPhase, SessionSnapshot

console = Console()

BACK_COMMANDS = ("back", "b")
NEXT_COMMANDS = ("next", "n")
QUIT_COMMANDS = ("quit", "q")


class SleepQuizInterface:
    """Renders session snapshots and reads the user's choices."""

    def display_header(self) -> None:
        """Display quiz header."""
        console.print(Panel.fit(
            "[bold blue]Sleep Assessment[/bold blue]\n"
            "Answer these questions about your sleep last night.",
            border_style="blue",
        ))
        console.print("[dim]Type a number to answer, 'b' to go back, 'n' to keep an earlier answer, 'q' to cancel.[/dim]\n")

    def display_question(self, snapshot: SessionSnapshot) -> None:
        """Display the current question and its options."""
        question = snapshot.current_question
        if question is None:
            return

        header = f"Question {snapshot.current_index + 1} of {len(snapshot.questions)}"
        console.print()
        console.print(Panel(
            f"[bold]{question.text}[/bold]",
            title=f"[bold blue]{header}[/bold blue]",
            border_style="blue",
            padding=(1, 2),
        ))

        previous = snapshot.answers.get(snapshot.current_index)
        for i, option in enumerate(question.options, 1):
            marker = "[green]*[/green]" if option == previous else " "
            console.print(f" {marker}[cyan][{i}][/cyan] {option}")

    def get_choice(self, option_count: int) -> Tuple[str, Optional[int]]:
        """Get the user's choice.

        Returns:
            Tuple of (command, option_index) where command is "answer",
            "back", "next" or "quit"
        """
        while True:
            raw = Prompt.ask("\n[bold]Your answer[/bold]").strip().lower()

            if raw in QUIT_COMMANDS:
                return "quit", None
            if raw in BACK_COMMANDS:
                return "back", None
            if raw in NEXT_COMMANDS:
                return "next", None
            if raw.isdigit() and 1 <= int(raw) <= option_count:
                return "answer", int(raw) - 1

            console.print(f"[red]Please enter a number from 1 to {option_count}, 'b', 'n' or 'q'[/red]")


@contextmanager
def spinner(description: str) -> Iterator[None]:
    """Show a spinner while the session waits on the text generator."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description=description, total=None)
        yield


async def run_assessment(
    session: AssessmentSession,
    interface: Optional[SleepQuizInterface] = None,
) -> SessionSnapshot:
    """Run one interactive attempt on the session.

    Returns:
        The final snapshot: COMPLETE, or IDLE if the user cancelled
    """
    interface = interface or SleepQuizInterface()
    interface.display_header()

    with spinner("Preparing your personalized sleep questions..."):
        snapshot = await session.start()

    while snapshot.phase == SessionPhase.ANSWERING:
        interface.display_question(snapshot)
        question = snapshot.current_question
        command, choice = interface.get_choice(len(question.options))

        if command == "quit":
            snapshot = session.cancel()
            console.print("\n[yellow]Assessment cancelled.[/yellow]")
            break

        if command == "back":
            if snapshot.current_index == 0:
                console.print("[dim]Already at the first question.[/dim]")
                continue
            snapshot = session.previous()
            continue

        if command == "next":
            if snapshot.current_index not in snapshot.answers or snapshot.is_last_question:
                console.print("[dim]Answer this question to continue.[/dim]")
                continue
            snapshot = session.next()
            continue

        value = question.options[choice]
        if snapshot.is_last_question:
            with spinner("Analyzing your responses..."):
                snapshot = await session.answer(snapshot.current_index, value)
        else:
            snapshot = await session.answer(snapshot.current_index, value)

    return snapshot
