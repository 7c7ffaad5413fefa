#!/usr/bin/env python3
"""Thought Clusters - CLI Entry Point.

Group your notes into topics, locally, without any AI service.
"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Check for required dependencies
def check_dependencies():
    """Check if required dependencies are installed."""
    missing = []

    try:
        import click
    except ImportError:
        missing.append("click")

    try:
        import rich
    except ImportError:
        missing.append("rich")

    try:
        import yaml
    except ImportError:
        missing.append("pyyaml")

    try:
        from dotenv import load_dotenv
    except ImportError:
        missing.append("python-dotenv")

    if missing:
        print("Missing required dependencies:")
        for dep in missing:
            print(f"  - {dep}")
        print("\nInstall them with:")
        print(f"  pip install {' '.join(missing)}")
        print("\nOr install the project:")
        print("  pip install -e .")
        sys.exit(1)


# Only import heavy dependencies after checking
check_dependencies()

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from thought_clusters.config import Config, get_config, reload_config, ensure_directories
from thought_clusters.thoughts import ThoughtValidationError, load_thoughts
from thought_clusters.analysis import (
    cluster_topics,
    clusters_to_json_format,
    format_cluster_summary,
    tokenize,
)


console = Console()


def setup_logging(verbose: bool) -> None:
    """Configure logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def resolve_output_path(output: str, config: Config) -> Path:
    """Place relative output paths under the configured output directory."""
    output_path = Path(output)
    if output_path.is_absolute():
        return output_path
    return Path(config.output.directory) / output_path


@click.group()
@click.version_option(version="0.1.0", prog_name="thought-clusters")
@click.option("--config", "config_path", default=None, help="Path to a YAML config file")
def cli(config_path: str | None):
    """Thought Clusters - Group your notes into topics."""
    if config_path:
        try:
            reload_config(config_path)
        except FileNotFoundError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)


@cli.command()
@click.argument("thoughts_file", type=click.Path(dir_okay=False))
@click.option("--min-size", "-m", default=None, type=click.IntRange(min=1), help="Minimum thoughts per cluster")
@click.option("--threshold", "-t", default=None, type=float, help="Similarity threshold for merging")
@click.option(
    "--format", "-f", "output_format", default=None,
    type=click.Choice(["table", "markdown", "json"]), help="Output format",
)
@click.option("--output", "-o", default=None, help="Write results to this file (relative to the output directory)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cluster(
    thoughts_file: str,
    min_size: int | None,
    threshold: float | None,
    output_format: str | None,
    output: str | None,
    verbose: bool,
):
    """Cluster thoughts from a JSON or YAML file into topics."""
    setup_logging(verbose)
    config = get_config()

    clustering_config = config.clustering
    if threshold is not None:
        clustering_config = replace(clustering_config, similarity_threshold=threshold)
    output_format = output_format or config.output.format

    try:
        thoughts = load_thoughts(thoughts_file, max_thoughts=clustering_config.max_thoughts)
    except (FileNotFoundError, ThoughtValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    clusters = cluster_topics(thoughts, min_cluster_size=min_size, config=clustering_config)

    if output:
        output_path = resolve_output_path(output, config)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_format == "json":
            output_path.write_text(json.dumps(clusters_to_json_format(clusters), indent=2))
        else:
            output_path.write_text(format_cluster_summary(clusters))
        console.print(f"[green]Results saved to:[/green] {output_path}")
        return

    if output_format == "json":
        click.echo(json.dumps(clusters_to_json_format(clusters), indent=2))
        return

    if not clusters:
        console.print("[yellow]No topic clusters found.[/yellow]")
        console.print("[dim]Add more related thoughts, or lower --min-size.[/dim]")
        return

    if output_format == "markdown":
        console.print(Markdown(format_cluster_summary(clusters)))
        return

    console.print(f"\n[bold]Topic Clusters[/bold] ({len(clusters)} clusters from {len(thoughts)} thoughts)\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim")
    table.add_column("Label", style="cyan")
    table.add_column("Thoughts", justify="right")
    table.add_column("Coherence", justify="right")
    table.add_column("Keywords")

    for i, topic in enumerate(clusters, 1):
        table.add_row(
            str(i),
            topic.label,
            str(topic.size),
            f"{topic.coherence:.2f}",
            ", ".join(topic.keywords),
        )

    console.print(table)

    if verbose:
        for topic in clusters:
            console.print(f"[dim]{topic.id}: {', '.join(topic.thought_ids)}[/dim]")


@cli.command()
@click.argument("text")
def tokens(text: str):
    """Show how a piece of text is tokenized."""
    words = tokenize(text)
    if not words:
        console.print("[yellow]No tokens kept.[/yellow]")
        return
    console.print(" ".join(words))


@cli.command()
def check():
    """Show the effective configuration."""
    config = get_config()

    console.print(Panel(
        f"Similarity threshold: {config.clustering.similarity_threshold}\n"
        f"Min cluster size: {config.clustering.min_cluster_size}\n"
        f"Max keywords: {config.clustering.max_keywords}\n"
        f"Label keywords: {config.clustering.label_keywords}\n"
        f"Max thoughts: {config.clustering.max_thoughts}",
        title="Clustering",
        border_style="cyan",
    ))

    output_dir = Path(config.output.directory)
    if output_dir.exists():
        console.print(f"[green]✓[/green] Output directory: {output_dir}")
    else:
        console.print(f"[yellow]![/yellow] Output directory: {output_dir} (created by init)")
    console.print(f"  Output format: {config.output.format}")


@cli.command()
def init():
    """Create the output directory."""
    config = get_config()
    ensure_directories(config)
    console.print(f"[green]✓[/green] Created output directory: {config.output.directory}")


if __name__ == "__main__":
    cli()
