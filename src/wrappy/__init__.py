"""Wrappy - portable application containers.

A container is a directory with a manifest, launch scripts, content and
config. Wrappy creates, validates and loads them.

Key modules:

- :mod:`wrappy.container` - Layout engine: builder, validator, loader and models
- :mod:`wrappy.config` - User configuration (~/.wrappy/wrappy.yaml)
- :mod:`wrappy.cli` - Command-line interface
"""

__version__ = "0.1.0"
