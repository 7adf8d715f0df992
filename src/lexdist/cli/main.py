"""Main Typer application."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="lexdist",
    help="Lexical distance between languages: distance matrix, UPGMA tree and threshold graph.",
    no_args_is_help=True,
)

_ALGORITHM_HELP = "Override the distance algorithm (levenshtein, damerau_levenshtein, jaro_winkler, lcs)"


@app.command()
def build_matrix(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
    algorithm: str = typer.Option(None, "--algorithm", "-a", help=_ALGORITHM_HELP),
    output: str = typer.Option(None, "--output", "-o", help="CSV output path"),
) -> None:
    """Build the language distance matrix and export it as CSV and JSON."""
    from .build_cmd import run_build_matrix

    run_build_matrix(config, algorithm, output)


@app.command()
def build_tree(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
    algorithm: str = typer.Option(None, "--algorithm", "-a", help=_ALGORITHM_HELP),
    output: str = typer.Option(None, "--output", "-o", help="Tree JSON output path"),
) -> None:
    """Cluster languages with UPGMA and print the tree as Newick."""
    from .build_cmd import run_build_tree

    run_build_tree(config, algorithm, output)


@app.command()
def build_graph(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
    algorithm: str = typer.Option(None, "--algorithm", "-a", help=_ALGORITHM_HELP),
    threshold: float = typer.Option(
        None, "--threshold", "-t", help="Maximum distance for an edge, between 0 and 1"
    ),
    output: str = typer.Option(None, "--output", "-o", help="Graph JSON output path"),
) -> None:
    """Connect languages whose distance is at or below a threshold."""
    from .build_cmd import run_build_graph

    run_build_graph(config, algorithm, threshold, output)


@app.command()
def list_algorithms() -> None:
    """List the available word distance algorithms."""
    from lexdist.distance.registry import available_algorithms, create_algorithm

    for algorithm_type in available_algorithms():
        algo = create_algorithm(algorithm_type)
        typer.echo(f"{algorithm_type.value:<20} {algo.name}: {algo.description}")


if __name__ == "__main__":
    app()
