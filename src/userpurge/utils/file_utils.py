"""File operation utilities for staging uploaded CSV files."""

import os
import shutil
from datetime import datetime
from pathlib import Path

from ..core.exceptions import FileOperationError, StagingError
from .logging_utils import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = (".csv",)
UPLOAD_PREFIX = "users-to-delete_"


def validate_file_path(file_path: str | Path, operation: str = "access") -> Path:
    """Validate a file path for the specified operation.

    Args:
        file_path: Path to validate
        operation: Type of operation (read, write, access)

    Returns:
        Path object if valid

    Raises:
        FileOperationError: If path is invalid for the operation
    """
    try:
        path = Path(file_path).resolve()
    except (OSError, ValueError) as e:
        raise FileOperationError(f"Invalid file path '{file_path}': {e}") from e

    if operation == "read":
        if not path.exists():
            raise FileOperationError(f"File not found: {path}")
        if not path.is_file():
            raise FileOperationError(f"Path is not a file: {path}")
        if not os.access(path, os.R_OK):
            raise FileOperationError(f"Permission denied reading file: {path}")
    elif operation == "write":
        if not path.is_dir():
            raise FileOperationError(f"Directory does not exist: {path}")
        if not os.access(path, os.W_OK):
            raise FileOperationError(
                f"Permission denied writing to directory: {path}"
            )

    return path


def validate_extension(file_path: str | Path) -> None:
    """Reject files whose extension is not an allowed upload type.

    Raises:
        FileOperationError: If the extension is not allowed
    """
    suffix = Path(file_path).suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise FileOperationError(
            "Only files with the following extensions are allowed: "
            + ", ".join(ext.lstrip(".") for ext in ALLOWED_EXTENSIONS),
            file_path=str(file_path),
            operation="stage",
        )


def unique_upload_name() -> str:
    """Build a time-based staged file name."""
    return f"{UPLOAD_PREFIX}{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.csv"


class UploadTransport:
    """Stages uploaded CSV files in a working directory.

    Each upload is copied under a unique time-based name so concurrent or
    repeated uploads never overwrite each other.
    """

    def __init__(self, upload_dir: str | Path, keep_files: bool = False):
        """Initialize the transport.

        Args:
            upload_dir: Directory staged uploads are written to
            keep_files: Whether staged copies survive :meth:`discard`
        """
        self.upload_dir = Path(upload_dir)
        self.keep_files = keep_files

    def receive(self, file_path: str | Path) -> Path:
        """Validate an uploaded file and copy it into the upload directory.

        Args:
            file_path: Path of the uploaded file

        Returns:
            Path: Location of the staged copy

        Raises:
            FileOperationError: If the file is not an allowed, readable upload
            StagingError: If the copy into the upload directory fails
        """
        validate_extension(file_path)
        source = validate_file_path(file_path, "read")
        target_dir = validate_file_path(self.upload_dir, "write")

        destination = target_dir / unique_upload_name()
        while destination.exists():
            destination = target_dir / unique_upload_name()

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise StagingError(
                "Could not stage uploaded file",
                file_path=str(source),
                operation="stage",
                details=str(e),
            ) from e

        logger.info(
            f"Staged upload {source.name} as {destination.name}",
            extra={"file_path": str(destination), "operation": "stage_upload"},
        )
        return destination

    def discard(self, staged_path: Path) -> None:
        """Remove a staged upload unless the transport keeps files."""
        if self.keep_files:
            return
        try:
            staged_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(
                f"Could not remove staged upload {staged_path}: {e}",
                extra={"file_path": str(staged_path)},
            )


def read_file_bytes(file_path: str | Path) -> bytes:
    """Read a whole file as bytes.

    Raises:
        FileOperationError: If the file cannot be read
    """
    path = validate_file_path(file_path, "read")
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileOperationError(
            "Could not read file", file_path=str(path), operation="read", details=str(e)
        ) from e
