from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml

from ..core.chain import find_conflicting_keys, get_source_hierarchy
from ..core.errors import ConfscopeError
from ..core.resolver import Resolver
from ..core.types import SCOPE_LOCAL, SCOPE_PROJECT, SCOPE_USER
from ..logging import configure_logging

app = typer.Typer(help="Confscope CLI")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for stderr output"),
    log_format: str = typer.Option("console", "--log-format", help="console or json"),
):
    configure_logging(log_level=log_level, log_format=log_format)


def _resolver(settings: Optional[Path]) -> Resolver:
    return Resolver.from_settings_file(settings)


def _document(path: Path) -> Dict[str, Any]:
    # YAML is a superset of JSON, so one parser covers both
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        typer.echo(f"Error: cannot parse {path}: {e}", err=True)
        raise typer.Exit(code=1)
    if data is None:
        return {}
    if not isinstance(data, dict):
        typer.echo(f"Error: {path} must contain a mapping", err=True)
        raise typer.Exit(code=1)
    return data


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command()
def classify(
    user: Path = typer.Argument(..., help="User-scope document (JSON or YAML)"),
    project: Path = typer.Argument(..., help="Project-scope document (JSON or YAML)"),
    include: Optional[str] = typer.Option(None, "--include", help="Only keys matching this regex"),
    depth: int = typer.Option(0, "--depth", min=0, help="Split server, agent and setting values this many levels further"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
):
    try:
        r = _resolver(settings)
        result = r.classify(
            r.scope_entries(SCOPE_USER, _document(user), path=str(user), include=include, depth=depth),
            r.scope_entries(SCOPE_PROJECT, _document(project), path=str(project), include=include, depth=depth),
        )
    except ConfscopeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _emit(result.to_dict())


@app.command()
def resolve(
    user: Path = typer.Argument(..., help="User-scope document (JSON or YAML)"),
    project: Path = typer.Argument(..., help="Project-scope document (JSON or YAML)"),
    local: Optional[Path] = typer.Option(None, "--local", help="Local-scope document"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
):
    try:
        r = _resolver(settings)
        local_entries = []
        if local is not None:
            local_entries = r.scope_entries(SCOPE_LOCAL, _document(local), path=str(local))
        chain = r.resolve(
            r.scope_entries(SCOPE_USER, _document(user), path=str(user)),
            r.scope_entries(SCOPE_PROJECT, _document(project), path=str(project)),
            local_entries,
        )
    except ConfscopeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _emit(chain.to_dict())


@app.command()
def stats(
    user: Path = typer.Argument(..., help="User-scope document (JSON or YAML)"),
    project: Path = typer.Argument(..., help="Project-scope document (JSON or YAML)"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
):
    try:
        r = _resolver(settings)
        summary = r.stats(
            r.scope_entries(SCOPE_USER, _document(user), path=str(user)),
            r.scope_entries(SCOPE_PROJECT, _document(project), path=str(project)),
        )
    except ConfscopeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _emit(summary.to_dict())


@app.command()
def sources(
    user: Path = typer.Argument(..., help="User-scope document (JSON or YAML)"),
    project: Path = typer.Argument(..., help="Project-scope document (JSON or YAML)"),
    local: Optional[Path] = typer.Option(None, "--local", help="Local-scope document"),
    settings: Optional[Path] = typer.Option(None, "--settings"),
):
    """Show which scope sets each key and which keys more than one scope sets."""
    try:
        r = _resolver(settings)
        local_entries = []
        if local is not None:
            local_entries = r.scope_entries(SCOPE_LOCAL, _document(local), path=str(local))
        chain = r.resolve(
            r.scope_entries(SCOPE_USER, _document(user), path=str(user)),
            r.scope_entries(SCOPE_PROJECT, _document(project), path=str(project)),
            local_entries,
        )
    except ConfscopeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _emit({"hierarchy": get_source_hierarchy(chain), "conflicts": find_conflicting_keys(chain)})


if __name__ == "__main__":
    app()
