"""outhash CLI — Typer-based command-line interface.

Provides the ``outhash`` command with subcommands for rehashing an emitted
build directory, verifying file names against content, and printing digests.

All output uses Rich for formatted terminal display.
"""
