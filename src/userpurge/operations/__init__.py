"""Deletion operations for userpurge."""

from userpurge.operations.workflow import DeletionWorkflow

__all__ = ["DeletionWorkflow"]
