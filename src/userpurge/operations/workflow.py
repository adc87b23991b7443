"""Two-phase bulk deletion workflow: validate an upload, then execute it."""

from pathlib import Path

from ..core.exceptions import (
    DeleteError,
    FileOperationError,
    NoCandidatesError,
    NoFileError,
    StagingError,
)
from ..core.interfaces import ExtractorProtocol, UserRepositoryProtocol
from ..models.user import UserHandle
from ..models.workflow import (
    DeletionOutcome,
    DeletionSummary,
    OutcomeStatus,
    WorkflowState,
)
from ..utils.csv_utils import CsvSource, CsvUsernameExtractor
from ..utils.file_utils import UploadTransport
from ..utils.logging_utils import get_logger, log_operation
from ..utils.messenger import Messenger

logger = get_logger(__name__)


class DeletionWorkflow:
    """Per-session state machine for bulk user deletion.

    ``AWAITING_UPLOAD`` accepts uploads only. A non-empty upload moves the
    workflow to ``VALIDATED``, where the candidates can be reviewed and
    executed. Execution moves it to ``EXECUTED`` and consumes the
    candidates, so a second execution is rejected. A new upload is accepted
    in any state and replaces the pending candidates.
    """

    def __init__(
        self,
        repository: UserRepositoryProtocol,
        extractor: ExtractorProtocol | None = None,
        transport: UploadTransport | None = None,
        messenger: Messenger | None = None,
        skip_inactive: bool = False,
    ):
        """Initialize the workflow.

        Args:
            repository: User store usernames are resolved and deleted in
            extractor: CSV parser (defaults to :class:`CsvUsernameExtractor`)
            transport: Upload staging used by :meth:`submit_upload`
            messenger: Sink for operator-facing messages
            skip_inactive: Leave inactive accounts in place instead of
                deleting them
        """
        self.repository = repository
        self.extractor = extractor or CsvUsernameExtractor()
        self.transport = transport
        self.messenger = messenger or Messenger()
        self.skip_inactive = skip_inactive

        self._state = WorkflowState.AWAITING_UPLOAD
        self._candidates: tuple[str, ...] = ()
        self._summary: DeletionSummary | None = None

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def can_execute(self) -> bool:
        return self._state is WorkflowState.VALIDATED

    @property
    def summary(self) -> DeletionSummary | None:
        """Summary of the last execution, if the workflow has executed."""
        return self._summary

    def submit_csv(self, source: CsvSource) -> WorkflowState:
        """Parse an upload and, if it holds usernames, make them pending.

        Extraction problems are reported through the messenger and leave the
        current state untouched.

        Args:
            source: Raw bytes, a file path, a binary file object, or None

        Returns:
            WorkflowState: State after the upload
        """
        try:
            result = self.extractor.extract(source)
        except NoFileError as e:
            logger.error(str(e), extra={"operation": "submit_csv"})
            self.messenger.add_error(e.message)
            return self._state

        if result.warning is not None:
            self.messenger.add_warning(result.warning.message)
            return self._state

        self._candidates = result.usernames
        self._summary = None
        self._state = WorkflowState.VALIDATED
        self.messenger.add_message(
            f"CSV file validated successfully. Found {result.count} usernames."
        )
        return self._state

    def submit_upload(self, file_path: str | Path) -> WorkflowState:
        """Stage an uploaded file through the transport and submit it.

        Args:
            file_path: Path of the uploaded file

        Returns:
            WorkflowState: State after the upload
        """
        if self.transport is None:
            return self.submit_csv(file_path)

        try:
            staged = self.transport.receive(file_path)
        except StagingError as e:
            logger.error(
                f"Could not stage upload: {e}",
                extra={"operation": "submit_upload", "file_path": str(file_path)},
            )
            self.messenger.add_error(
                f"An error occurred while processing the file: {e.message}"
            )
            return self._state
        except FileOperationError as e:
            logger.error(
                f"Upload rejected: {e}",
                extra={"operation": "submit_upload", "file_path": str(file_path)},
            )
            self.messenger.add_error(f"{NoFileError().message} {e.message}")
            return self._state

        try:
            return self.submit_csv(staged)
        finally:
            self.transport.discard(staged)

    def confirmation_view(self) -> tuple[str, ...]:
        """Return the pending candidates for operator review.

        Raises:
            NoCandidatesError: If nothing is validated
        """
        if not self.can_execute:
            raise NoCandidatesError(details=f"Workflow is {self._state.value}")
        return self._candidates

    def execute(self) -> DeletionSummary:
        """Delete every account matching a pending candidate.

        Each account is deleted independently: a failure is recorded in the
        summary and processing continues with the next account.

        Returns:
            DeletionSummary: Outcome of the run

        Raises:
            NoCandidatesError: If nothing is validated, including after a
                previous execution
        """
        if not self.can_execute:
            self.messenger.add_error(NoCandidatesError().message)
            raise NoCandidatesError(details=f"Workflow is {self._state.value}")

        return self._run()

    @log_operation("execute_deletion")
    def _run(self) -> DeletionSummary:
        candidates = self._candidates
        # Consume the candidates before touching the store
        self._candidates = ()
        self._state = WorkflowState.EXECUTED

        outcomes: list[DeletionOutcome] = []
        for username in candidates:
            outcomes.extend(self._process_username(username))

        summary = DeletionSummary.from_outcomes(outcomes)
        self._summary = summary
        self._report(summary)
        return summary

    def _process_username(self, username: str) -> list[DeletionOutcome]:
        try:
            handles = self.repository.find_by_name(username)
        except Exception as e:
            error = DeleteError("Lookup failed", username=username, details=str(e))
            logger.error(str(error), extra={"username": username})
            return [
                DeletionOutcome(
                    username=username,
                    status=OutcomeStatus.FAILED,
                    reason=str(e),
                    error=error,
                )
            ]

        if not handles:
            logger.info(f"User not found: {username}", extra={"username": username})
            return [DeletionOutcome(username=username, status=OutcomeStatus.NOT_FOUND)]

        return [self._delete_handle(username, handle) for handle in handles]

    def _delete_handle(self, username: str, handle: UserHandle) -> DeletionOutcome:
        context = {"username": username, "user_id": handle.user_id}

        if self.skip_inactive and not handle.active:
            logger.info(f"Skipping inactive user {handle}", extra=context)
            return DeletionOutcome(
                username=username,
                status=OutcomeStatus.SKIPPED,
                user_id=handle.user_id,
                reason="inactive",
            )

        try:
            self.repository.delete(handle)
        except Exception as e:
            error = DeleteError(
                "Delete failed",
                username=username,
                user_id=handle.user_id,
                details=str(e),
            )
            logger.error(str(error), extra=context)
            return DeletionOutcome(
                username=username,
                status=OutcomeStatus.FAILED,
                user_id=handle.user_id,
                reason=str(e),
                error=error,
            )

        logger.info(f"Deleted user {handle}", extra=context)
        return DeletionOutcome(
            username=username, status=OutcomeStatus.DELETED, user_id=handle.user_id
        )

    def _report(self, summary: DeletionSummary) -> None:
        self.messenger.add_message(f"Deleted {summary.deleted} users.")
        if summary.not_found:
            self.messenger.add_warning(
                "The following usernames were not found: "
                + ", ".join(summary.not_found)
            )
        if summary.skipped:
            self.messenger.add_warning(f"Skipped {summary.skipped} inactive users.")
        if summary.failures:
            self.messenger.add_error(
                f"Failed to delete {summary.failed} users: "
                + ", ".join(
                    error.user_id or error.username or "?"
                    for error in summary.failures
                )
            )
