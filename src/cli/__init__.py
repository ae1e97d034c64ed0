"""CLI Module - Command-line interface for the SleepCheck application.

This module provides a rich interactive CLI built with Typer and Rich.

Usage:
    sleepcheck --help              Show all commands
    sleepcheck assess              Take today's sleep assessment
    sleepcheck assess --offline    Assess using built-in questions and local scoring
    sleepcheck questions           Show the built-in question set
"""

from src.cli.main import app, main

__all__ = ["app", "main"]
