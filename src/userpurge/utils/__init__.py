"""Utilities module for userpurge."""

from .csv_utils import CsvUsernameExtractor, extract_usernames, parse_usernames
from .display_utils import (
    confirm_action,
    confirm_production_operation,
    display_candidates,
    display_summary,
    print_messages,
    print_section_header,
)
from .file_utils import (
    UploadTransport,
    read_file_bytes,
    validate_extension,
    validate_file_path,
)
from .logging_utils import get_logger, log_operation, setup_logging
from .messenger import Messenger

__all__ = [
    # CSV utilities
    "CsvUsernameExtractor",
    "extract_usernames",
    "parse_usernames",
    # Display utilities
    "confirm_action",
    "confirm_production_operation",
    "display_candidates",
    "display_summary",
    "print_messages",
    "print_section_header",
    # File utilities
    "UploadTransport",
    "read_file_bytes",
    "validate_extension",
    "validate_file_path",
    # Logging utilities
    "get_logger",
    "log_operation",
    "setup_logging",
    # Messages
    "Messenger",
]
