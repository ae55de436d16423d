"""``forge`` command: compile stacks into classified streams and packages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cluster_forge.compiler import (
    EnvelopeTemplates,
    ForgeError,
    ObjectCompilation,
    ObjectCompiler,
    PackageCompilation,
    PackageCompiler,
    Stream,
    load_envelopes,
)
from cluster_forge.compiler.artifacts import decode
from cluster_forge.compiler.objects import artifact_path
from cluster_forge.core.config import ForgeConfig, load_forge_config

console = Console()
err_console = Console(stderr=True)

# Concatenation order of classified artifacts when building a package.
PACKAGE_STREAM_ORDER = (Stream.CRD, Stream.SECRET, Stream.OBJECT)

app = typer.Typer(
    name="forge",
    help="Package per-resource Kubernetes manifests into deployable artifacts.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("cluster_forge")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False))


@app.callback()
def callback(
    ctx: typer.Context,
    root: Path = typer.Option(
        Path("."),
        "--root",
        help="Project root holding forge.yaml and the working/output/packages directories",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every routing decision"),
) -> None:
    """Package per-resource Kubernetes manifests into deployable artifacts."""
    _configure_logging(verbose)
    try:
        ctx.obj = load_forge_config(root.resolve())
    except ForgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _envelopes(config: ForgeConfig) -> EnvelopeTemplates:
    return load_envelopes(config.template_dir)


def _print_objects_summary(result: ObjectCompilation) -> None:
    table = Table(title=f"Compiled {result.package_name}", show_header=True)
    table.add_column("Stream", style="cyan")
    table.add_column("Manifests", justify="right", style="magenta")
    table.add_column("Artifact")
    for stream in Stream:
        table.add_row(stream.value, str(len(result.routed[stream])), str(result.artifact(stream)))
    console.print(table)

    for entry in result.skipped:
        console.print(f"[dim]Skipped {entry.name} ({entry.reason})[/dim]")
    for error in result.normalization_errors:
        console.print(f"[yellow]Warning:[/yellow] {error}")


def _print_package_summary(result: PackageCompilation) -> None:
    console.print(f"[green]✓[/green] Package written to {result.package_file}")
    if result.normalization_error is not None:
        console.print(f"[yellow]Warning:[/yellow] {result.normalization_error}")


def _run_objects(config: ForgeConfig, name: str) -> ObjectCompilation:
    config.ensure_output_dirs()
    compiler = ObjectCompiler(_envelopes(config), config.output_dir)
    return compiler.compile(name, config.manifest_dir(name))


def _collect_streams(config: ForgeConfig, name: str) -> str:
    parts: list[str] = []
    for stream in PACKAGE_STREAM_ORDER:
        path = artifact_path(config.output_dir, name, stream)
        if not path.exists():
            raise FileNotFoundError(f"{path} not found; run 'forge objects {name}' first")
        text = decode(path.read_bytes())
        if text and not text.endswith("\n"):
            text += "\n"
        parts.append(text)
    return "".join(parts)


def _run_package(config: ForgeConfig, name: str, content: str) -> PackageCompilation:
    config.ensure_output_dirs()
    compiler = PackageCompiler(_envelopes(config), config.packages_dir)
    return compiler.compile(name, content)


@app.command("objects")
def objects_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Stack name; manifests are read from <working_dir>/<name>"),
) -> None:
    """Route a stack's manifests into the object, CRD and secret streams."""
    config: ForgeConfig = ctx.obj
    try:
        result = _run_objects(config, name)
    except (ForgeError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _print_objects_summary(result)


@app.command("package")
def package_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Package name"),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="YAML to wrap; defaults to the stack's compiled crd, secret and object streams",
    ),
) -> None:
    """Wrap YAML content in the package header and footer."""
    config: ForgeConfig = ctx.obj
    try:
        if input_file is not None:
            content = decode(input_file.read_bytes())
        else:
            content = _collect_streams(config, name)
        result = _run_package(config, name, content)
    except (ForgeError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _print_package_summary(result)


@app.command("compile")
def compile_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Stack name"),
) -> None:
    """Compile a stack's streams, then aggregate them into one package."""
    config: ForgeConfig = ctx.obj
    try:
        objects = _run_objects(config, name)
        package = _run_package(config, name, _collect_streams(config, name))
    except (ForgeError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _print_objects_summary(objects)
    _print_package_summary(package)


def main() -> None:
    app()


__all__ = ["app", "main"]
