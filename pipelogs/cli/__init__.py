"""pipelogs CLI — Typer-based command-line interface.

Provides the ``pipelogs`` command with subcommands for listing the
builds in a cluster snapshot, streaming a build's logs and reading an
archived log from the storage bucket.

All output uses Rich for formatted terminal display.
"""
