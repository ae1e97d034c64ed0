"""Display Utilities - Rich output formatting for sleep results."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.modules.assessment import (
    AssessmentResult,
    CategoryBand,
    Question,
    ResultSource,
    ScoreTier,
    category_band,
    format_baseline_delta,
    format_last_assessed,
    rate_score,
)

console = Console()

BAND_COLORS = {
    CategoryBand.STRONG: "green",
    CategoryBand.STEADY: "blue",
    CategoryBand.WATCH: "yellow",
    CategoryBand.WEAK: "red",
}

TIER_COLORS = {
    ScoreTier.EXCELLENT: "green",
    ScoreTier.GOOD: "blue",
    ScoreTier.FAIR: "yellow",
    ScoreTier.POOR: "red",
}


def display_progress_bar(score: int, width: int = 10) -> str:
    """Segmented bar, one segment per 10 points."""
    filled = min(width, max(0, -(-score // 10)))
    return "[blue]" + "█" * filled + "[/blue]" + "[dim]" + "░" * (width - filled) + "[/dim]"


def display_score_card(result: AssessmentResult, title: str = "Sleep Analysis") -> None:
    """Display the overall score, category breakdown and recommendations."""
    rating = rate_score(result.overall_score)
    color = TIER_COLORS[rating.tier]

    console.print()
    console.print(Panel.fit(
        f"[bold {color}]{result.overall_score}[/bold {color}][dim]/100[/dim]  "
        f"[cyan]{format_baseline_delta(result.overall_score)}[/cyan]\n"
        f"{display_progress_bar(result.overall_score)}\n"
        f"{rating.message}\n"
        f"[dim]Sleep Score • {format_last_assessed(result.completed_at)}[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style=color,
    ))

    if result.analysis:
        console.print(Panel(
            result.analysis,
            title="[bold]AI Analysis[/bold]",
            border_style="magenta",
        ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category", min_width=12)
    table.add_column("Score", justify="right", width=7)
    table.add_column("", min_width=12)

    for name, value in result.categories.items():
        band_color = BAND_COLORS[category_band(value)]
        table.add_row(
            name,
            f"[{band_color}]{value}[/{band_color}]",
            display_progress_bar(value),
        )

    console.print(table)

    console.print("\n[bold]Recommendations[/bold]")
    for i, recommendation in enumerate(result.recommendations, 1):
        console.print(f"  [cyan]{i}.[/cyan] {recommendation}")

    if result.source != ResultSource.ORACLE:
        console.print(f"\n[dim]Scores computed locally ({result.source.value}).[/dim]")


def display_questions(questions: list[Question]) -> None:
    """Display a question set with its options."""
    for i, question in enumerate(questions, 1):
        console.print(f"\n[bold]{i}. {question.text}[/bold]")
        for option in question.options:
            console.print(f"   [dim]-[/dim] {option}")
