"""Subcommands registered on the ``pipelogs`` Typer app."""
