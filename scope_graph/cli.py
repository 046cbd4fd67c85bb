"""Click CLI with show, dependents, check-remove and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from scope_graph import __version__
from scope_graph.models import VERSION_DELIMITER, ComponentId, GraphConfig
from scope_graph.repository import JsonRepository
from scope_graph.analysis.dependency_graph import DependencyGraphBuilder
from scope_graph.analysis.graph_models import DependencyGraph
from scope_graph.analysis.queries import (
    find_dependents,
    find_transitive_dependents,
    get_component,
    get_component_version,
    get_component_versions,
)
from scope_graph.analysis.removal import check_removable

_scope_dir = click.argument(
    "scope_dir", type=click.Path(exists=True, file_okay=False, path_type=Path),
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--max-concurrency", type=int, default=None, help="Limit parallel version loads")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, max_concurrency: int | None):
    """scope-graph: query the dependency graph of a component scope."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = GraphConfig(max_concurrency=max_concurrency)


def _load(config: GraphConfig, scope_dir: Path) -> DependencyGraph:
    try:
        return DependencyGraphBuilder(config).build_sync(JsonRepository(scope_dir))
    except (ValueError, FileNotFoundError) as e:
        raise click.ClickException(str(e))


def _parse_ids(raw_ids: tuple[str, ...]) -> list[ComponentId]:
    try:
        return [ComponentId.parse(raw) for raw in raw_ids]
    except ValueError as e:
        raise click.UsageError(str(e))


@cli.command()
@_scope_dir
@click.argument("component_id")
@click.pass_obj
def show(config: GraphConfig, scope_dir: Path, component_id: str):
    """Show a component's versions, or one version's dependencies."""
    graph = _load(config, scope_dir)
    (cid,) = _parse_ids((component_id,))

    if cid.version is None:
        component = get_component(graph, cid)
        if component is None:
            raise click.ClickException(f"Component not found: {cid}")
        versions = get_component_versions(graph, cid) or []
        click.echo(click.style(cid.to_string_without_version(), fg="cyan"))
        loaded = {key.rpartition(VERSION_DELIMITER)[2] for key in graph.children.get(cid.to_string_without_version(), [])}
        for label in component.versions:
            marker = "" if label in loaded else click.style("  (missing)", dim=True)
            click.echo(f"  {label}{marker}")
        click.echo(f"\n{len(versions)} of {len(component.versions)} version(s) loaded")
        return

    version = get_component_version(graph, cid)
    if version is None:
        raise click.ClickException(f"Version not found: {cid}")
    click.echo(click.style(str(cid), fg="cyan"))
    if not version.flattened_dependencies:
        click.echo("  no dependencies")
    for dep in version.flattened_dependencies:
        click.echo(f"  requires {dep}")


@cli.command()
@_scope_dir
@click.argument("component_ids", nargs=-1, required=True)
@click.option("--transitive", is_flag=True, help="Follow dependents of dependents")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON")
@click.pass_obj
def dependents(
    config: GraphConfig,
    scope_dir: Path,
    component_ids: tuple[str, ...],
    transitive: bool,
    as_json: bool,
):
    """List the component versions that require COMPONENT_IDS."""
    ids = _parse_ids(component_ids)
    graph = _load(config, scope_dir)

    if transitive:
        result = {}
        for cid in ids:
            found = find_transitive_dependents(graph, cid)
            if found.all_transitive:
                result[found.root_id] = sorted(found.all_transitive)
    else:
        result = {key: sorted(set(value)) for key, value in find_dependents(graph, ids).items()}

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    if not result:
        click.echo("No dependents found.")
        return
    for key, sources in result.items():
        click.echo(click.style(key, fg="cyan"))
        for source in sources:
            click.echo(f"  {source}")


@cli.command("check-remove")
@_scope_dir
@click.argument("component_ids", nargs=-1, required=True)
@click.pass_obj
def check_remove(config: GraphConfig, scope_dir: Path, component_ids: tuple[str, ...]):
    """Check whether COMPONENT_IDS can be removed without breaking dependents."""
    ids = _parse_ids(component_ids)
    graph = _load(config, scope_dir)
    report = check_removable(graph, ids)

    for key in report.removable:
        click.echo(f"{click.style('ok', fg='green')}       {key}")
    for key, sources in report.blocked.items():
        click.echo(f"{click.style('blocked', fg='red')}  {key} (required by {', '.join(sources)})")

    if not report.is_safe:
        raise SystemExit(1)


@cli.command()
@click.option("--port", "-p", default=8430, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the web API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web API. "
            "Install with: pip install 'scope-graph[web]'"
        )

    from scope_graph.web import create_app

    click.echo(f"Starting scope-graph API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
