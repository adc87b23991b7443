"""Data models for userpurge."""

from userpurge.models.config import APIConfig, AppConfig, UserStoreConfig
from userpurge.models.user import UserHandle
from userpurge.models.workflow import (
    DeletionOutcome,
    DeletionSummary,
    ExtractionResult,
    Message,
    OutcomeStatus,
    Severity,
    WorkflowState,
)

__all__ = [
    # User models
    "UserHandle",
    # Config models
    "UserStoreConfig",
    "APIConfig",
    "AppConfig",
    # Workflow models
    "WorkflowState",
    "OutcomeStatus",
    "Severity",
    "Message",
    "ExtractionResult",
    "DeletionOutcome",
    "DeletionSummary",
]
