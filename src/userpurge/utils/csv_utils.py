"""CSV processing utilities for turning uploads into candidate usernames."""

import csv
import io
from pathlib import Path
from typing import BinaryIO

from ..core.exceptions import FileOperationError, NoFileError
from ..models.workflow import ExtractionResult
from .file_utils import read_file_bytes
from .logging_utils import get_logger

logger = get_logger(__name__)

CsvSource = bytes | str | Path | BinaryIO | None


def _read_source(source: CsvSource) -> bytes:
    """Load raw bytes from any supported upload source.

    Raises:
        NoFileError: If no source was given or it cannot be read
    """
    if source is None:
        raise NoFileError()

    if isinstance(source, bytes | bytearray):
        return bytes(source)

    if isinstance(source, str | Path):
        try:
            return read_file_bytes(source)
        except FileOperationError as e:
            raise NoFileError(details=str(e)) from e

    try:
        data = source.read()
    except (OSError, ValueError) as e:
        raise NoFileError(details=f"Could not read upload: {e}") from e

    if not isinstance(data, bytes):
        raise NoFileError(details="Upload must be opened in binary mode")
    return data


def _decode(data: bytes) -> str:
    """Decode upload bytes as UTF-8, tolerating a byte order mark.

    Raises:
        NoFileError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise NoFileError(details=f"File is not valid UTF-8 text: {e}") from e


def parse_usernames(
    text: str, has_header: bool = False, deduplicate: bool = False
) -> tuple[list[str], int]:
    """Parse the first field of every CSV record into a username list.

    Args:
        text: CSV text
        has_header: Whether the first record is a header and must be skipped
        deduplicate: Whether to keep only the first occurrence of each name

    Returns:
        tuple: (usernames in file order, number of records read)
    """
    usernames: list[str] = []
    seen: set[str] = set()
    rows_read = 0

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",")
    for index, row in enumerate(reader):
        if index == 0 and has_header:
            continue
        rows_read += 1
        if not row:
            continue

        username = row[0].strip()
        if not username:
            continue
        if deduplicate:
            if username in seen:
                continue
            seen.add(username)
        usernames.append(username)

    return usernames, rows_read


class CsvUsernameExtractor:
    """Extracts candidate usernames from an uploaded CSV file.

    Only the first field of each comma-delimited record is read. Values are
    trimmed, blanks are dropped and file order is kept. Usernames are not
    validated here; the user store decides what exists.
    """

    def __init__(self, has_header: bool = False, deduplicate: bool = False):
        """Initialize the extractor.

        Args:
            has_header: Skip the first record of every file
            deduplicate: Keep only the first occurrence of repeated names
        """
        self.has_header = has_header
        self.deduplicate = deduplicate

    def extract(self, source: CsvSource) -> ExtractionResult:
        """Extract usernames from an upload.

        Args:
            source: Raw bytes, a file path, a binary file object, or None

        Returns:
            ExtractionResult: Parsed usernames; its ``warning`` is set when
            the file held none

        Raises:
            NoFileError: If no source was supplied or it cannot be read or parsed
        """
        text = _decode(_read_source(source))
        try:
            usernames, rows_read = parse_usernames(
                text, has_header=self.has_header, deduplicate=self.deduplicate
            )
        except csv.Error as e:
            raise NoFileError(details=f"Could not parse CSV: {e}") from e
        result = ExtractionResult(usernames=tuple(usernames), rows_read=rows_read)

        if result.is_empty:
            logger.warning(
                f"No usernames found in {rows_read} CSV rows",
                extra={"operation": "extract_usernames"},
            )
        else:
            logger.info(
                f"Extracted {result.count} usernames from {rows_read} CSV rows",
                extra={"operation": "extract_usernames"},
            )
        return result


def extract_usernames(
    source: CsvSource, has_header: bool = False, deduplicate: bool = False
) -> list[str]:
    """Convenience wrapper returning the extracted usernames as a list."""
    extractor = CsvUsernameExtractor(has_header=has_header, deduplicate=deduplicate)
    return list(extractor.extract(source).usernames)
