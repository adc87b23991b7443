"""Protocol interfaces for the collaborators of a deletion workflow."""

from typing import Protocol

from ..models.user import UserHandle
from ..models.workflow import ExtractionResult


class UserRepositoryProtocol(Protocol):
    """Protocol for the account store usernames are resolved against."""

    def find_by_name(self, name: str) -> list[UserHandle]:
        """Find accounts by username.

        Args:
            name: Username to look up

        Returns:
            List[UserHandle]: Matching accounts; empty when none exist
        """
        ...

    def delete(self, handle: UserHandle) -> None:
        """Delete one account.

        Args:
            handle: Account to delete

        Raises:
            Exception: Any failure; callers isolate failures per handle
        """
        ...


class ExtractorProtocol(Protocol):
    """Protocol for turning an uploaded file into candidate usernames."""

    def extract(self, source: object) -> ExtractionResult:
        """Parse candidate usernames from an upload.

        Raises:
            NoFileError: If the source is missing or unreadable
        """
        ...
