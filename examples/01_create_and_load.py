"""
Create and Load Example
=======================

Creates a container in a temporary directory, validates it, and loads it
back, printing what the loader sees.

Usage:
    python examples/01_create_and_load.py
"""

import tempfile

from wrappy.container import (
    create_container_structure,
    load_container,
    validate_container_structure,
)


def main():
    """Create, validate and load a container."""
    with tempfile.TemporaryDirectory() as base:
        path = create_container_structure(
            base,
            {
                "name": "demo",
                "version": "1.0.0",
                "description": "A demo container",
                "tags": ["example"],
            },
        )
        print(f"Created {path}")

        report = validate_container_structure(path)
        print(f"Valid: {report.is_valid}")

        container = load_container(path)
        print(f"Name: {container.manifest.name} v{container.manifest.version}")
        print(f"Default script: {container.default_script_path}")
        print(f"Working directory: {container.environment.working_directory}")
        print(f"Network allowed: {container.permissions.network}")


if __name__ == "__main__":
    main()
