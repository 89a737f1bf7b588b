"""addonforge CLI — Typer-based command-line interface.

Provides the ``addonforge`` command with subcommands for validating
packages, showing their descriptors, comparing versions of the same
add-on, checking host/runtime compatibility and scanning directories.

All output uses Rich for formatted terminal display.
"""
