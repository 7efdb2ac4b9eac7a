"""CLI commands for creating, validating and inspecting containers."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from wrappy.config.loader import containers_root, load_config
from wrappy.container import (
    ContainerError,
    ValidationReport,
    ViolationKind,
    create_container_structure,
    discover_containers,
    inspect_container_structure,
    load_container,
)
from wrappy.container.manifest import Container

console = Console()

_SUGGESTIONS = {
    ViolationKind.MANIFEST_MISSING: (
        "Add a manifest.json with name, version and description, "
        "or start over with [bold]wrappy create[/bold]"
    ),
    ViolationKind.MANIFEST_INVALID_JSON: "Check manifest.json for trailing commas or unquoted keys",
    ViolationKind.MANIFEST_UNREADABLE: "Check that manifest.json is readable UTF-8",
    ViolationKind.MANIFEST_FIELD: "Fix the listed fields in manifest.json",
    ViolationKind.DIRECTORY_MISSING: "Create the missing directory inside the container",
    ViolationKind.NOT_A_DIRECTORY: "Replace the file with a directory of the same name",
    ViolationKind.DIRECTORY_UNREADABLE: "Check the directory permissions",
    ViolationKind.SCRIPT_MISSING: "Add an executable scripts/default.sh launch script",
}


def create_command(
    name: str,
    version: str,
    description: str,
    author: str = "",
    tags: list[str] | None = None,
    base_dir: str | None = None,
    atomic: bool = False,
) -> Path:
    """Create a container and report where it was written."""
    config = load_config()
    base_path = Path(base_dir).expanduser() if base_dir else containers_root(config)
    atomic = atomic or config.containers.atomic_create

    manifest = {
        "name": name,
        "version": version,
        "description": description,
        "author": author,
        "tags": tags or [],
    }

    try:
        container_path = create_container_structure(base_path, manifest, atomic=atomic)
    except ContainerError as e:
        console.print(f"[red]Error creating container: {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/green] Created container [bold cyan]{name}[/bold cyan]")
    console.print(f"  Path: {container_path}")
    console.print("  Next: put your application in content/ and edit scripts/default.sh")
    return container_path


def validate_command(path: str = ".", verbose: bool = False) -> None:
    """Validate a container directory and print every finding."""
    container_path = Path(path).expanduser()
    console.print(f"Validating container at [bold]{container_path}[/bold]")

    report = inspect_container_structure(container_path)

    for warning in report.warnings:
        console.print(f"  [yellow]⚠[/yellow] {warning.message}")

    if not report.is_valid:
        _print_errors(report, verbose)
        raise typer.Exit(1)

    if not verbose:
        console.print("[green]✓ Container is valid[/green]")
        return

    try:
        container = load_container(container_path)
    except ContainerError as e:
        console.print(f"[red]✗ Structure is valid but the container failed to load: {e}[/red]")
        raise typer.Exit(1) from None

    console.print("[green]✓ Container is valid[/green]")
    _print_details(container)


def show_command(path: str = ".") -> None:
    """Print a loaded container's manifest and configuration."""
    try:
        container = load_container(Path(path).expanduser())
    except ContainerError as e:
        console.print(f"[red]Error loading container: {e}[/red]")
        raise typer.Exit(1) from None

    _print_details(container)

    p = container.permissions
    console.print("  Permissions (config/permissions.json):")
    console.print(f"    API: {', '.join(p.api) or 'none'}")
    console.print(f"    Resources: {', '.join(p.resources) or 'none'}")
    console.print(f"    Network: {p.network}")
    console.print(f"    Read: {', '.join(p.filesystem.read) or 'none'}")
    console.print(f"    Write: {', '.join(p.filesystem.write) or 'none'}")

    env = container.environment
    console.print("  Environment (config/environment.json):")
    console.print(f"    Working directory: {env.working_directory}")
    if env.path:
        console.print(f"    PATH: {':'.join(env.path)}")
    for key, value in env.variables.items():
        console.print(f"    {key}={value}")


def list_command(base_dir: str | None = None) -> None:
    """List valid containers under a root directory."""
    root = Path(base_dir).expanduser() if base_dir else containers_root(load_config())
    containers = discover_containers(root)

    if not containers:
        console.print(f"[dim]No containers found in {root}.[/dim]")
        return

    table = Table(title=f"Containers in {root}")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Description")
    table.add_column("Scripts", style="green")

    for container in containers:
        m = container.manifest
        table.add_row(m.name, m.version, m.description, ", ".join(m.scripts) or "-")

    console.print(table)


def _print_errors(report: ValidationReport, verbose: bool) -> None:
    console.print(f"[red]✗ Container validation failed ({len(report.errors)} error(s)):[/red]")
    for violation in report.errors:
        console.print(f"  [red]•[/red] {violation.message}")

    if not verbose:
        console.print("[dim]Run with --verbose for suggestions.[/dim]")
        return

    console.print("\n[bold]Suggestions:[/bold]")
    seen = set()
    for violation in report.errors:
        if violation.kind in seen:
            continue
        seen.add(violation.kind)
        console.print(f"  [yellow]→[/yellow] {_SUGGESTIONS[violation.kind]}")


def _print_details(container: Container) -> None:
    m = container.manifest
    console.print(f"\n[bold cyan]{m.name}[/bold cyan] v{m.version}")
    if m.semver() is None:
        console.print("  [dim]note: version is not major.minor.patch[/dim]")
    if m.description:
        console.print(f"  {m.description}")
    if m.author:
        console.print(f"  Author: {m.author}")
    if m.tags:
        console.print(f"  Tags: {', '.join(m.tags)}")
    console.print(f"  Path: {container.path}")

    console.print("  Scripts:")
    for script_name, script_path in m.scripts.items():
        console.print(f"    {script_name}: {script_path}")

    if m.dependencies:
        console.print("  Dependencies:")
        for dependency in m.dependencies:
            console.print(f"    {dependency}")
