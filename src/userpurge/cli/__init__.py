"""CLI module for userpurge."""

from .commands import OperationHandler
from .main import cli, main

__all__ = ["OperationHandler", "cli", "main"]
