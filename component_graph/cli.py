"""Click CLI with scan, resolve, render, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from component_graph.models import (
    DependencyScope,
    DependencyType,
    DiagramFormat,
    PipelineConfig,
)
from component_graph.pipeline import run_pipeline, run_resolve, run_scan

_FORMAT_CHOICES = [fmt.value for fmt in DiagramFormat]
_TYPE_CHOICES = [t.value for t in DependencyType]
_SCOPE_CHOICES = [s.value for s in DependencyScope]

_TYPE_COLORS = {
    DependencyType.DIRECT: "green",
    DependencyType.REDUNDANT: "yellow",
    DependencyType.INDIRECT: "blue",
}

_input_paths = click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path),
)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """component-graph: Resolve and draw dependency graphs of compiled components."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_input_paths
def scan(paths: tuple[Path, ...]):
    """List the components found under PATHS."""
    try:
        batch = run_scan(PipelineConfig(inputs=list(paths)))
    except ValueError as e:
        raise click.ClickException(str(e))

    if not batch:
        click.echo("No components found.")
        return

    click.echo(f"\nFound {len(batch)} component(s):\n")
    for record in batch.values():
        click.echo(
            f"  {click.style(record.kind.value, fg='cyan'):>20}  "
            f"{record.name} {click.style(record.version, dim=True)}  "
            f"({len(record.references)} reference(s))"
        )


@cli.command()
@_input_paths
@click.option("--type", "-t", "types", multiple=True, type=click.Choice(_TYPE_CHOICES),
              help="Only show this dependency type (repeatable)")
@click.option("--scope", "-s", "scopes", multiple=True, type=click.Choice(_SCOPE_CHOICES),
              help="Only show this scope (repeatable)")
def resolve(paths: tuple[Path, ...], types: tuple[str, ...], scopes: tuple[str, ...]):
    """Resolve and print every classified edge."""
    try:
        result = run_resolve(PipelineConfig(inputs=list(paths)))
    except ValueError as e:
        raise click.ClickException(str(e))

    edges = result.filter(
        types=[DependencyType(t) for t in types] if types else None,
        scopes=[DependencyScope(s) for s in scopes] if scopes else None,
    )
    if not edges:
        click.echo("No edges.")
        return

    for root in result.roots:
        root_edges = [e for e in edges if e.root_name == root]
        if not root_edges:
            continue
        click.echo(click.style(root, fg="cyan"))
        for edge in root_edges:
            click.echo(
                f"  {click.style(edge.dependency_type.value, fg=_TYPE_COLORS[edge.dependency_type]):>20}  "
                f"{edge.target_name} {edge.target_version}  "
                f"{click.style(f'chain {edge.shortest_chain}..{edge.longest_chain}', dim=True)}  "
                f"{edge.scope.value}"
            )
        click.echo()

    click.echo("Summary:")
    for dep_type, count in result.count_by_type().items():
        click.echo(f"  {dep_type.value}: {count}")


@cli.command()
@_input_paths
@click.option("-o", "--output", "output_dir", type=click.Path(path_type=Path),
              default="diagrams", help="Output directory")
@click.option("--format", "-f", "formats", multiple=True, type=click.Choice(_FORMAT_CHOICES),
              help="Diagram format (repeatable, default dot)")
@click.option("--styles", "styles_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON file with name -> style rules")
@click.option("--all-edges", is_flag=True, help="Draw every edge, not only direct included ones")
@click.option("--no-csv", is_flag=True, help="Skip writing the CSV edge table")
@click.option("--name", "diagram_name", default="dependencies", help="Base name of output files")
def render(
    paths: tuple[Path, ...],
    output_dir: Path,
    formats: tuple[str, ...],
    styles_file: Path | None,
    all_edges: bool,
    no_csv: bool,
    diagram_name: str,
):
    """Resolve PATHS and write diagrams plus a CSV edge table."""
    config = PipelineConfig(
        inputs=list(paths),
        output_dir=output_dir,
        formats=[DiagramFormat(f) for f in formats] or [DiagramFormat.DOT],
        styles_file=styles_file,
        write_csv=not no_csv,
        diagram_name=diagram_name,
    )
    if all_edges:
        config.dependency_types = list(DependencyType)
        config.scopes = list(DependencyScope)

    def progress(stage: str, current: int, total: int):
        if total > 0:
            click.echo(f"  {stage}: {current}/{total}", nl=(current == total))
        else:
            click.echo(f"  {stage}...")

    try:
        result = run_pipeline(config, progress=progress)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"\nDone! Created {len(result.files_created)} file(s) in {result.output_dir}")
    for f in result.files_created:
        click.echo(f"  {f}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the JSON web API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web API. "
            "Install with: pip install 'component-graph[web]'"
        )

    from component_graph.web import create_app

    click.echo(f"Starting component-graph API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
