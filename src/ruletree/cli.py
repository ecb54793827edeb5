# src/ruletree/cli.py
"""ruletree Command Line Interface.

Entry point for the ruletree CLI tool. Converts rule configuration YAML to
repository tuples and back, offline, for inspection and migration scripts.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer
import yaml
from pydantic import ValidationError

from ruletree import __version__
from ruletree.contracts import RepositoryTuple, RuleTreeError
from ruletree.core.config import RuleTreeSettings, load_settings
from ruletree.core.descriptors import get_tuple_entity
from ruletree.core.logging import configure_logging
from ruletree.core.yaml_engine import marshal, unmarshal

if TYPE_CHECKING:
    from ruletree.contracts import RuleConfiguration
    from ruletree.engine import TupleSwapperEngine
    from ruletree.plugins import RuleNodePathRegistry

__all__ = [
    "app",
]

# Module-level singleton for the node path registry
_registry_cache: RuleNodePathRegistry | None = None


def _get_registry() -> RuleNodePathRegistry:
    """Get initialized node path registry (singleton).

    Returns:
        RuleNodePathRegistry with all built-in rule types registered
    """
    global _registry_cache

    from ruletree.plugins import RuleNodePathRegistry

    if _registry_cache is None:
        registry = RuleNodePathRegistry()
        registry.register_builtin_rules()
        _registry_cache = registry
    return _registry_cache


def _get_engine(ctx: typer.Context) -> TupleSwapperEngine:
    from ruletree.engine import TupleSwapperEngine

    settings = ctx.obj if isinstance(ctx.obj, RuleTreeSettings) else RuleTreeSettings()
    return TupleSwapperEngine(_get_registry(), settings)


app = typer.Typer(
    name="ruletree",
    help="ruletree: rule configuration <-> coordination tree tuples.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ruletree version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to ruletree settings YAML.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """ruletree: rule configuration <-> coordination tree tuples."""
    try:
        loaded = load_settings(settings)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        _echo_validation_errors("Settings errors:", e)
        raise typer.Exit(1) from None

    configure_logging(
        json_output=json_logs or loaded.json_logs,
        level="DEBUG" if verbose else loaded.log_level,
    )
    ctx.obj = loaded


def _echo_validation_errors(heading: str, error: ValidationError) -> None:
    typer.echo(heading, err=True)
    for each in error.errors():
        loc = ".".join(str(part) for part in each["loc"])
        typer.echo(f"  - {loc}: {each['msg']}", err=True)


def _resolve_rule(rule: str) -> type[RuleConfiguration]:
    from ruletree.rules import BUILTIN_RULE_CONFIGURATIONS

    try:
        return BUILTIN_RULE_CONFIGURATIONS[rule]
    except KeyError:
        available = ", ".join(sorted(BUILTIN_RULE_CONFIGURATIONS))
        typer.echo(f"Error: Unknown rule type '{rule}'. Available: {available}", err=True)
        raise typer.Exit(1) from None


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        typer.echo(f"Error: File not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        typer.echo(f"YAML syntax error in {path}: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def encode(
    ctx: typer.Context,
    config_file: Path = typer.Argument(..., help="Rule configuration YAML."),
    rule: str = typer.Option(..., "--rule", "-r", help="Rule type of the configuration."),
) -> None:
    """Encode a rule configuration into repository tuples (YAML list on stdout)."""
    config_type = _resolve_rule(rule)
    raw = _read_yaml(config_file)
    try:
        config = config_type.model_validate(raw if raw is not None else {})
    except ValidationError as e:
        _echo_validation_errors("Configuration errors:", e)
        raise typer.Exit(1) from None

    try:
        tuples = _get_engine(ctx).swap_to_tuples(config)
    except RuleTreeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    payload = [{"path": each.path, "value": each.value} for each in tuples]
    typer.echo(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), nl=False)


@app.command()
def decode(
    ctx: typer.Context,
    tuples_file: Path = typer.Argument(..., help="YAML list of {path, value} tuples."),
    rule: str = typer.Option(..., "--rule", "-r", help="Rule type to rebuild."),
) -> None:
    """Decode repository tuples into a rule configuration (YAML on stdout)."""
    config_type = _resolve_rule(rule)
    if not tuples_file.exists():
        typer.echo(f"Error: File not found: {tuples_file}", err=True)
        raise typer.Exit(1)

    try:
        tuples = unmarshal(tuples_file.read_text(encoding="utf-8"), list[RepositoryTuple])
        config = _get_engine(ctx).swap_to_object(tuples, config_type)
    except RuleTreeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if config is None:
        typer.echo(f"Rule '{rule}' is not configured.")
        return
    typer.echo(marshal(config), nl=False)


@app.command("rules")
def list_rules() -> None:
    """List built-in rule types and how they are stored."""
    from ruletree.rules import BUILTIN_RULE_CONFIGURATIONS

    for rule_type, config_type in sorted(BUILTIN_RULE_CONFIGURATIONS.items()):
        entity = get_tuple_entity(config_type)
        if entity is None:
            continue
        if entity.is_global:
            storage = "global"
        elif entity.is_singleton:
            storage = "singleton"
        else:
            storage = f"fields ({len(entity.fields)})"
        typer.echo(f"{rule_type:<22} {config_type.__name__:<40} {storage}")


if __name__ == "__main__":
    app()
