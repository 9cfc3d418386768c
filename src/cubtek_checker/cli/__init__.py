"""Command-line interface package for the CubTEK checker."""

from .app import CheckReport, build_parser, create_service, main, render_table, run

__all__ = [
    "CheckReport",
    "build_parser",
    "create_service",
    "main",
    "render_table",
    "run",
]
