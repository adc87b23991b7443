"""Core functionality for userpurge."""

from userpurge.core.exceptions import (
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
from userpurge.core.config import (
    API_RATE_LIMIT,
    API_TIMEOUT,
    check_env_file,
    get_app_config,
    get_store_config,
    get_upload_dir,
)
from userpurge.core.interfaces import UserRepositoryProtocol

__all__ = [
    "UserPurgeError",
    "ConfigError",
    "ExtractError",
    "NoFileError",
    "StagingError",
    "EmptyResultError",
    "WorkflowError",
    "NoCandidatesError",
    "DeleteError",
    "FileOperationError",
    "UserStoreError",
    "API_RATE_LIMIT",
    "API_TIMEOUT",
    "check_env_file",
    "get_app_config",
    "get_store_config",
    "get_upload_dir",
    "UserRepositoryProtocol",
]
