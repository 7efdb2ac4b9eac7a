"""Main CLI application using Typer."""

import sys

import typer
from rich.console import Console

from wrappy import __version__

app = typer.Typer(
    name="wrappy",
    help="Wrappy - portable application containers",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def setup(
    debug: bool = typer.Option(False, "--debug", help="Show debug logging"),
):
    """Configure logging before any command runs."""
    from wrappy.cli.log_setup import configure_logging
    from wrappy.config.loader import load_config

    configure_logging(level=load_config().logging.level, verbose=debug)


@app.command()
def version():
    """Show wrappy version."""
    console.print(f"wrappy version {__version__}")


@app.command()
def create(
    name: str = typer.Argument(..., help="Container name (becomes the directory name)"),
    container_version: str = typer.Option(..., "--version", "-V", help="Container version"),
    description: str = typer.Option(..., "--description", "-d", help="Short description"),
    author: str = typer.Option("", "--author", "-a", help="Container author"),
    tags: list[str] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    base_dir: str = typer.Option(
        None,
        "--base-dir",
        "-b",
        help="Directory to create the container in (default: containers.root_dir)",
    ),
    atomic: bool = typer.Option(
        False,
        "--atomic",
        help="Build in a temporary directory and rename into place",
    ),
):
    """Create a new container."""
    from wrappy.cli.container_cmd import create_command

    create_command(
        name=name,
        version=container_version,
        description=description,
        author=author,
        tags=tags,
        base_dir=base_dir,
        atomic=atomic,
    )


@app.command()
def validate(
    path: str = typer.Argument(".", help="Container directory"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show container details and fix suggestions"
    ),
):
    """Check a container directory against the layout contract."""
    from wrappy.cli.container_cmd import validate_command

    validate_command(path=path, verbose=verbose)


@app.command()
def show(
    path: str = typer.Argument(".", help="Container directory"),
):
    """Show a container's manifest, permissions and environment."""
    from wrappy.cli.container_cmd import show_command

    show_command(path=path)


@app.command("list")
def list_containers(
    base_dir: str = typer.Option(
        None,
        "--base-dir",
        "-b",
        help="Directory holding containers (default: containers.root_dir)",
    ),
):
    """List valid containers."""
    from wrappy.cli.container_cmd import list_command

    list_command(base_dir=base_dir)


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
