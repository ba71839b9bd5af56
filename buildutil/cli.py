"""Thin CLI wrapper for buildutil.

This module provides the command-line interface using Typer.
All decision logic is delegated to the buildutil.builds modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from buildutil import __version__
from buildutil.api.schema import Build
from buildutil.builds import (
    BuildNumberNotFoundError,
    build_config_builds,
    build_name_for_config_version,
    build_number,
    build_run_policy,
    config_name_for_build,
    get_build_name,
    get_input_reference,
    is_build_complete,
    is_paused,
    merge_trusted_env_without_duplicates,
    version_for_build,
)
from buildutil.config import (
    get_settings,
    get_trusted_env_whitelist,
    print_settings_json,
)
from buildutil.io import (
    FileBuildLister,
    load_build,
    load_build_config,
    load_env_list,
    load_pod,
    model_to_json_string,
)

app = typer.Typer(
    name="buildutil",
    help="Build decision helpers - phase, run policy, naming and trusted env",
    no_args_is_help=True,
)
console = Console()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Errors raised while reading or validating input documents
_LOAD_ERRORS = (OSError, ValueError, yaml.YAMLError)


def _print_json(text: str) -> None:
    console.print(text, soft_wrap=True, markup=False, highlight=False)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"buildutil version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override the configured log level"),
    ] = None,
) -> None:
    """Build decision helpers - phase, run policy, naming and trusted env."""
    try:
        settings = get_settings()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")

    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        _fail(f"Invalid log level '{log_level}'. Use one of: {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    # Report the names in force; .env never contributes to the whitelist
    settings = get_settings().model_copy(
        update={"trusted_env_names": sorted(get_trusted_env_whitelist())}
    )
    if json_output:
        _print_json(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print(f"  Log level:           {settings.log_level}")
        console.print(
            f"  Trusted env names:   {', '.join(settings.trusted_env_names) or '(none)'}"
        )


builds_app = typer.Typer(help="Inspect builds and build history")
app.add_typer(builds_app, name="builds")


def _describe_build(build: Build) -> dict[str, object]:
    """Collect every decision for a build into a JSON-friendly dict."""
    number: int | None = None
    number_error: str | None = None
    try:
        number = build_number(build)
    except (BuildNumberNotFoundError, ValueError) as e:
        number_error = str(e)

    reference = get_input_reference(build.spec.strategy)
    return {
        "namespace": build.metadata.namespace,
        "name": build.metadata.name,
        "phase": build.status.phase,
        "complete": is_build_complete(build),
        "run_policy": build_run_policy(build).value,
        "config_name": config_name_for_build(build),
        "version": version_for_build(build),
        "build_number": number,
        "build_number_error": number_error,
        "input_reference": reference.model_dump(by_alias=True, exclude_none=True)
        if reference is not None
        else None,
    }


@builds_app.command("inspect")
def builds_inspect(
    path: Annotated[Path, typer.Argument(help="Path to build YAML/JSON file")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show phase, run policy, owning config and input image of a build."""
    try:
        build = load_build(path)
    except _LOAD_ERRORS as e:
        _fail(f"Failed to load build: {e}")

    info = _describe_build(build)

    if json_output:
        _print_json(json.dumps(info, indent=2))
        return

    console.print(f"[bold]Build {info['namespace']}/{info['name']}[/bold]")
    console.print(f"  Phase:        {info['phase']}")
    console.print(f"  Complete:     {info['complete']}")
    console.print(f"  Run policy:   {info['run_policy']}")
    console.print(f"  Config:       {info['config_name'] or '(none)'}")
    console.print(f"  Version:      {info['version']}")
    if info["build_number_error"]:
        console.print(
            f"  Build number: [yellow]{escape(str(info['build_number_error']))}[/yellow]"
        )
    else:
        console.print(f"  Build number: {info['build_number']}")
    reference = info["input_reference"]
    if isinstance(reference, dict):
        console.print(
            f"  Input image:  {reference.get('kind', '')} {reference.get('name', '')}"
        )
    else:
        console.print("  Input image:  (none)")


def _is_active(build: Build) -> bool:
    return not is_build_complete(build)


@builds_app.command("list")
def builds_list(
    path: Annotated[Path, typer.Argument(help="Path to build list YAML/JSON file")],
    config_name: Annotated[
        str,
        typer.Option("--config", "-c", help="Build config name"),
    ],
    namespace: Annotated[
        str,
        typer.Option("--namespace", "-n", help="Namespace (empty for all)"),
    ] = "",
    active: Annotated[
        bool,
        typer.Option("--active", help="Only builds that are not complete"),
    ] = False,
    complete: Annotated[
        bool,
        typer.Option("--complete", help="Only builds that are complete"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the builds of a build config."""
    if active and complete:
        _fail("--active and --complete are mutually exclusive")

    filter_func = None
    if active:
        filter_func = _is_active
    elif complete:
        filter_func = is_build_complete

    try:
        result = build_config_builds(
            FileBuildLister(path), namespace, config_name, filter_func
        )
    except _LOAD_ERRORS as e:
        _fail(f"Failed to list builds: {e}")

    if json_output:
        _print_json(model_to_json_string(result))
        return

    if not result.items:
        console.print("[yellow]No builds found[/yellow]")
        return

    console.print(f"[bold]Found {len(result.items)} build(s):[/bold]")
    for build in result.items:
        console.print(
            f"  [green]{build.metadata.namespace}/{build.metadata.name}[/green] "
            f"{build.status.phase} (version {version_for_build(build)})"
        )


@builds_app.command("next-name")
def builds_next_name(
    config_name: Annotated[str, typer.Argument(help="Build config name")],
    version: Annotated[int, typer.Argument(help="Build version")],
) -> None:
    """Print the name of the version-th build of a config."""
    console.print(build_name_for_config_version(config_name, version), markup=False)


configs_app = typer.Typer(help="Inspect build configs")
app.add_typer(configs_app, name="configs")


@configs_app.command("paused")
def configs_paused(
    path: Annotated[Path, typer.Argument(help="Path to build config YAML/JSON file")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show whether a build config is paused."""
    try:
        build_config = load_build_config(path)
    except _LOAD_ERRORS as e:
        _fail(f"Failed to load build config: {e}")

    paused = is_paused(build_config)
    if json_output:
        _print_json(
            json.dumps({"name": build_config.metadata.name, "paused": paused})
        )
    elif paused:
        console.print(f"[yellow]{build_config.metadata.name} is paused[/yellow]")
    else:
        console.print(f"[green]{build_config.metadata.name} is not paused[/green]")


pods_app = typer.Typer(help="Inspect build pods")
app.add_typer(pods_app, name="pods")


@pods_app.command("build-name")
def pods_build_name(
    path: Annotated[Path, typer.Argument(help="Path to pod YAML/JSON file")],
) -> None:
    """Print the name of the build a pod executes."""
    try:
        pod = load_pod(path)
    except _LOAD_ERRORS as e:
        _fail(f"Failed to load pod: {e}")

    name = get_build_name(pod)
    if not name:
        _fail(f"Pod {pod.metadata.name} is not a build pod")
    console.print(name, markup=False)


env_app = typer.Typer(help="Trusted environment handling")
app.add_typer(env_app, name="env")


@env_app.command("merge")
def env_merge(
    source: Annotated[
        Path, typer.Argument(help="Untrusted env list (YAML/JSON, 'env' key)")
    ],
    output: Annotated[
        Path, typer.Argument(help="Trusted env list (YAML/JSON, 'env' key)")
    ],
    source_precedence: Annotated[
        bool,
        typer.Option(
            "--source-precedence/--no-source-precedence",
            help="Let source values override output values",
        ),
    ] = True,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Merge whitelisted variables from SOURCE into OUTPUT and print the result."""
    try:
        source_env = load_env_list(source)
        merged = load_env_list(output)
    except _LOAD_ERRORS as e:
        _fail(f"Failed to load environment: {e}")

    merge_trusted_env_without_duplicates(source_env, merged, source_precedence)

    if json_output:
        _print_json(model_to_json_string(merged))
        return

    for env in merged:
        console.print(f"{env.name}={env.value}", markup=False, highlight=False)


__all__ = ["app"]
