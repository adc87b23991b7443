"""userpurge - bulk user deletion from a CSV of usernames."""

# Core functionality
from .core.config import get_app_config, get_store_config, get_upload_dir
from .core.exceptions import (
    ConfigError,
    DeleteError,
    EmptyResultError,
    ExtractError,
    FileOperationError,
    NoCandidatesError,
    NoFileError,
    StagingError,
    UserPurgeError,
    UserStoreError,
    WorkflowError,
)
from .core.interfaces import UserRepositoryProtocol
from .core.repositories import (
    InMemoryUserRepository,
    JsonFileUserRepository,
    RestUserRepository,
)

# Models
from .models import (
    DeletionOutcome,
    DeletionSummary,
    ExtractionResult,
    Message,
    OutcomeStatus,
    Severity,
    UserHandle,
    WorkflowState,
)

# Operations
from .operations.workflow import DeletionWorkflow

# Utilities
from .utils.csv_utils import CsvUsernameExtractor, extract_usernames
from .utils.file_utils import UploadTransport
from .utils.messenger import Messenger

__version__ = "1.0.0"

__all__ = [
    # Core
    "get_app_config",
    "get_store_config",
    "get_upload_dir",
    "UserRepositoryProtocol",
    "InMemoryUserRepository",
    "JsonFileUserRepository",
    "RestUserRepository",
    # Exceptions
    "UserPurgeError",
    "ConfigError",
    "ExtractError",
    "NoFileError",
    "EmptyResultError",
    "WorkflowError",
    "NoCandidatesError",
    "DeleteError",
    "FileOperationError",
    "StagingError",
    "UserStoreError",
    # Models
    "UserHandle",
    "WorkflowState",
    "OutcomeStatus",
    "Severity",
    "Message",
    "ExtractionResult",
    "DeletionOutcome",
    "DeletionSummary",
    # Operations
    "DeletionWorkflow",
    # Utilities
    "CsvUsernameExtractor",
    "extract_usernames",
    "UploadTransport",
    "Messenger",
]
