"""CLI for the Practice Recommendation Engine.

Provides a command-line interface for scoring a user profile against the
meditation practice catalog.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .config import ConfigError, RecommenderConfig, resolve_config
from .engine import (
    CatalogError,
    ProfileError,
    generate_report,
    load_catalog,
    load_default_catalog,
    load_profile,
    profile_from_answers,
    score_practice,
    validate_catalog,
    validate_profile,
)
from .schema import Practice, PracticeScore, RecommendationReport, UserProfile

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_catalog(catalog: Optional[str]) -> dict[str, Practice]:
    return load_catalog(catalog) if catalog else load_default_catalog()


def _load_config(config: Optional[str]) -> RecommenderConfig:
    return resolve_config(Path(config) if config else None)


def _build_profile(profile: Optional[str], answer: tuple) -> UserProfile:
    """Profile file (if any) with command-line answers applied on top."""
    base = load_profile(profile) if profile else UserProfile()

    user_answers = {}
    for ans in answer:
        if "=" in ans:
            key, value = ans.split("=", 1)
            user_answers[key.strip()] = value.strip()
        else:
            console.print(f"[yellow]Ignoring malformed answer (expected question_id=value): {ans}[/yellow]")

    return profile_from_answers(user_answers, base=base) if user_answers else base


@click.group()
@click.version_option(version="1.0.0", prog_name="practice-recommender")
def main():
    """Meditation Practice Recommendation Engine.

    Matches assessment answers against the practice catalog and returns a
    ranked, explained recommendation.
    """
    pass


@main.command("recommend")
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog JSON file (default: bundled catalog)"
)
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True),
    help="Path to a user profile JSON file"
)
@click.option(
    "--answer", "-a",
    multiple=True,
    help="Assessment answer (format: question_id=value), applied over the profile"
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to a recommender YAML config"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show score breakdowns and debug logging"
)
def recommend_cmd(
    catalog: Optional[str],
    profile: Optional[str],
    answer: tuple,
    config: Optional[str],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Recommend practices for a user profile.

    Examples:
        practice-recommender recommend -p profile.json
        practice-recommender recommend -a primary-goals=stress-reduction,focus -a time-available=5-10
    """
    _configure_logging(verbose)

    try:
        practices = _load_catalog(catalog)
        user_profile = _build_profile(profile, answer)
        report = generate_report(practices, user_profile, _load_config(config))
    except (CatalogError, ConfigError, ProfileError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if json_output:
        output_json(report, out)
    else:
        display_report(report, verbose)
        if out:
            output_json(report, out)
            console.print(f"\n[green]Results saved to {out}[/green]")


@main.command("score")
@click.option(
    "--id", "practice_id",
    required=True,
    help="Practice ID to score"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog JSON file (default: bundled catalog)"
)
@click.option(
    "--profile", "-p",
    type=click.Path(exists=True),
    help="Path to a user profile JSON file"
)
@click.option(
    "--answer", "-a",
    multiple=True,
    help="Assessment answer (format: question_id=value)"
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to a recommender YAML config"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug logging for each dimension"
)
def score_cmd(
    practice_id: str,
    catalog: Optional[str],
    profile: Optional[str],
    answer: tuple,
    config: Optional[str],
    verbose: bool,
):
    """Score a single practice and show its breakdown."""
    _configure_logging(verbose)

    try:
        practices = _load_catalog(catalog)
        practice = practices.get(practice_id)
        if practice is None:
            console.print(f"[red]Practice not found: {practice_id}[/red]")
            sys.exit(1)
        score = score_practice(practice, _build_profile(profile, answer), _load_config(config))
    except (CatalogError, ConfigError, ProfileError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    display_score(practice, score)


@main.command("validate")
@click.option(
    "--catalog", "-c",
    type=click.Path(),
    help="Path to a practice catalog JSON file"
)
@click.option(
    "--profile", "-p",
    type=click.Path(),
    help="Path to a user profile JSON file"
)
def validate_cmd(catalog: Optional[str], profile: Optional[str]):
    """Validate catalog and/or profile files.

    Examples:
        practice-recommender validate -c practices.json
        practice-recommender validate -p profile.json
    """
    if not catalog and not profile:
        console.print("[yellow]Please specify --catalog and/or --profile to validate[/yellow]")
        return

    all_valid = True

    if catalog:
        is_valid, issues = validate_catalog(catalog)
        if is_valid:
            console.print(f"[green]✓ Catalog valid: {catalog}[/green]")
        else:
            console.print(f"[red]✗ Catalog invalid: {catalog}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if profile:
        is_valid, issues = validate_profile(profile)
        if is_valid:
            console.print(f"[green]✓ Profile valid: {profile}[/green]")
        else:
            console.print(f"[red]✗ Profile invalid: {profile}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("inspect")
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog JSON file (default: bundled catalog)"
)
@click.option(
    "--id", "practice_id",
    help="Show details for specific practice ID"
)
@click.option(
    "--approach",
    help="Filter by approach tag"
)
@click.option(
    "--context",
    help="Filter by cultural context"
)
def inspect_cmd(
    catalog: Optional[str],
    practice_id: Optional[str],
    approach: Optional[str],
    context: Optional[str],
):
    """Inspect the practice catalog."""
    try:
        practices = _load_catalog(catalog)
    except CatalogError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if practice_id:
        practice = practices.get(practice_id)
        if practice is None:
            console.print(f"[red]Practice not found: {practice_id}[/red]")
            sys.exit(1)
        display_practice_detail(practice)
        return

    filtered = list(practices.values())
    if approach:
        approach_lower = approach.lower()
        filtered = [p for p in filtered if any(a.value == approach_lower for a in p.tags.approach)]
    if context:
        context_lower = context.lower()
        filtered = [p for p in filtered if p.tags.cultural_context.value == context_lower]

    console.print(f"\nShowing {len(filtered)} of {len(practices)} practices:\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Approach")
    table.add_column("Structure")
    table.add_column("Difficulty")
    table.add_column("Context")

    for practice in filtered:
        tags = practice.tags
        table.add_row(
            practice.id,
            practice.name,
            ", ".join(a.value for a in tags.approach),
            tags.structure.value,
            tags.difficulty_level.value,
            tags.cultural_context.value,
        )

    console.print(table)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="recommender-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default recommender configuration file.

    Example:
        practice-recommender init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Config file created: {out}")
    console.print("\nThis file configures:")
    console.print("  • scoring_weights - How much each dimension contributes to the overall score")
    console.print("  • goal_matching - Credit per matched goal keyword")
    console.print("  • reasoning - When a dimension is called out as a strength")
    console.print("  • report - Alternative, not-recommended and hybrid thresholds")
    console.print("\nThe recommender will look for config in this order:")
    console.print("  1. PRACTICE_RECOMMENDER_CONFIG environment variable")
    console.print("  2. ./recommender-config.yaml (current directory)")
    console.print("  3. ~/.config/practice-recommender/config.yaml")


def _score_color(score: float) -> str:
    if score > 0.6:
        return "green"
    if score >= 0.5:
        return "yellow"
    return "red"


def display_report(report: RecommendationReport, verbose: bool):
    """Display a recommendation report in formatted text."""
    top = report.top_recommendation
    color = _score_color(top.score.overall_score)

    console.print(Panel(
        f"[bold cyan]{top.practice.name}[/bold cyan]\n"
        f"Match: [{color}]{top.score.overall_score:.0%}[/{color}]\n\n"
        f"{top.why.strip()}",
        title="Top Recommendation",
    ))

    if top.next_steps:
        console.print("\n[bold]Next Steps:[/bold]")
        for step in top.next_steps:
            console.print(f"  [green]•[/green] {step}")

    if top.score.concerns:
        console.print("\n[bold]Concerns:[/bold]")
        for concern in top.score.concerns:
            console.print(f"  [yellow]•[/yellow] {concern}")

    if top.score.adaptations:
        console.print("\n[bold]Adaptations:[/bold]")
        for adaptation in top.score.adaptations:
            console.print(f"  [cyan]•[/cyan] {adaptation}")

    if verbose:
        console.print()
        console.print(_breakdown_table(top.score))

    if report.alternatives:
        console.print("\n[bold]Alternatives:[/bold]\n")
        for i, alt in enumerate(report.alternatives, 1):
            console.print(
                f"  [bold cyan]{i}. {alt.practice.name}[/bold cyan] "
                f"[bold]{alt.score.overall_score:.0%}[/bold]"
            )
            if verbose:
                console.print(f"     {alt.why.strip()}")

    if report.hybrid_approach:
        hybrid = report.hybrid_approach
        console.print(Panel(
            f"{hybrid.description}\n\n"
            f"Practices: {', '.join(hybrid.practices)}\n"
            f"Schedule: {hybrid.schedule}",
            title="Hybrid Approach",
        ))

    if report.not_recommended:
        console.print("\n[bold]Not Recommended:[/bold]")
        for entry in report.not_recommended:
            console.print(f"  [red]•[/red] {entry.why} [dim]({entry.score.overall_score:.0%})[/dim]")


def _breakdown_table(score: PracticeScore) -> Table:
    table = Table(show_header=True, header_style="bold", title="Score Breakdown")
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    for dimension, value in score.breakdown.items():
        label = dimension.replace("_", " ").title()
        table.add_row(label, f"[{_score_color(value)}]{value:.2f}[/{_score_color(value)}]")
    table.add_row("[bold]Overall[/bold]", f"[bold]{score.overall_score:.2f}[/bold]")
    return table


def display_score(practice: Practice, score: PracticeScore):
    """Display a single practice score."""
    console.print(f"\n[bold cyan]{practice.name}[/bold cyan]\n")
    console.print(_breakdown_table(score))

    if score.reasoning:
        console.print(f"\n{score.reasoning.strip()}")

    for label, items, bullet in (
        ("Concerns", score.concerns, "yellow"),
        ("Adaptations", score.adaptations, "cyan"),
    ):
        if items:
            console.print(f"\n[bold]{label}:[/bold]")
            for item in items:
                console.print(f"  [{bullet}]•[/{bullet}] {item}")


def display_practice_detail(practice: Practice):
    """Display detailed practice information."""
    tree = Tree(f"[bold cyan]{practice.name}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {practice.id}")
    if practice.tradition:
        identity.add(f"Tradition: {practice.tradition}")

    tags = practice.tags
    classification = tree.add("[bold]Classification[/bold]")
    classification.add(f"Approach: {', '.join(a.value for a in tags.approach)}")
    classification.add(f"Structure: {tags.structure.value}")
    classification.add(f"Difficulty: {tags.difficulty_level.value}")
    classification.add(f"Time to Results: {tags.time_to_results.value}")
    classification.add(f"Cultural Context: {tags.cultural_context.value}")
    classification.add(f"Teacher Required: {'yes' if tags.teacher_required else 'no'}")
    classification.add(f"Retreat Friendly: {'yes' if tags.retreat_friendly else 'no'}")

    if practice.goals:
        goals = tree.add("[bold]Goals[/bold]")
        for goal in practice.goals:
            goals.add(goal)

    benefits = practice.benefits
    if benefits.cognitive or benefits.emotional or benefits.physical:
        branch = tree.add("[bold]Benefits[/bold]")
        for label, phrases in (
            ("Cognitive", benefits.cognitive),
            ("Emotional", benefits.emotional),
            ("Physical", benefits.physical),
        ):
            if phrases:
                kind = branch.add(label)
                for phrase in phrases:
                    kind.add(phrase)

    resources = practice.resources
    if resources.books or resources.apps:
        branch = tree.add("[bold]Resources[/bold]")
        for book in resources.books:
            branch.add(f'Book: "{book.title}" by {book.author}')
        for app in resources.apps:
            branch.add(f"App: {app}")

    console.print(tree)


def output_json(report: RecommendationReport, out_path: Optional[str]):
    """Output report as JSON."""
    json_str = report.model_dump_json(indent=2, by_alias=True)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
