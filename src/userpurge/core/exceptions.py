"""Custom exception hierarchy for the userpurge bulk user deletion tool."""


class UserPurgeError(Exception):
    """Base exception for userpurge.

    This is the root exception class for all userpurge-specific errors.
    All other custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigError(UserPurgeError):
    """Configuration errors.

    Raised when user store settings are missing or malformed.
    """


class ExtractError(UserPurgeError):
    """Errors raised while turning an uploaded CSV into candidate usernames."""


class NoFileError(ExtractError):
    """No file was supplied, or the supplied file could not be read."""

    def __init__(
        self,
        message: str = "Please upload a valid CSV file.",
        details: str | None = None,
    ):
        super().__init__(message, details)


class EmptyResultError(ExtractError):
    """The CSV parsed cleanly but contained no usernames.

    This is a soft condition: it is reported to the operator as a warning
    and is never raised out of the extractor.
    """

    def __init__(
        self,
        message: str = "No valid usernames found in the CSV file.",
        details: str | None = None,
    ):
        super().__init__(message, details)


class WorkflowError(UserPurgeError):
    """Invalid transition requested on a deletion workflow."""


class NoCandidatesError(WorkflowError):
    """Execution requested with no validated candidates pending."""

    def __init__(
        self,
        message: str = "No valid usernames found to delete.",
        details: str | None = None,
    ):
        super().__init__(message, details)


class DeleteError(UserPurgeError):
    """Failure to delete a single resolved account.

    Collected per handle in the deletion summary rather than raised.
    """

    def __init__(
        self,
        message: str,
        username: str | None = None,
        user_id: str | None = None,
        details: str | None = None,
    ):
        """Initialize the delete error.

        Args:
            message: The main error message
            username: The candidate username being processed
            user_id: The account that failed to delete
            details: Optional additional details about the error
        """
        self.username = username
        self.user_id = user_id
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with account context."""
        parts = [self.message]

        if self.username:
            parts.append(f"Username: {self.username}")

        if self.user_id:
            parts.append(f"User ID: {self.user_id}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class FileOperationError(UserPurgeError):
    """File operation errors.

    Raised when staging or reading an uploaded file fails.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the file operation error.

        Args:
            message: The main error message
            file_path: The file path that caused the error
            operation: The file operation that failed (stage, read, etc.)
            details: Optional additional details about the error
        """
        self.file_path = file_path
        self.operation = operation
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with file context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.file_path:
            parts.append(f"File: {self.file_path}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class StagingError(FileOperationError):
    """An accepted upload could not be copied into the upload directory."""


class UserStoreError(UserPurgeError):
    """User store API errors.

    Raised when a remote user store rejects or fails a request.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        """Initialize the user store error.

        Args:
            message: The main error message
            status_code: The HTTP status code from the API response
            endpoint: The API endpoint that failed
            details: Optional additional details about the error
        """
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with API context."""
        parts = [self.message]

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)
