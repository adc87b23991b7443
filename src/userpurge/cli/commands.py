"""Command handlers for CLI operations."""

from pathlib import Path

import click

from ..core.config import get_store_config, get_upload_dir
from ..core.interfaces import UserRepositoryProtocol
from ..core.repositories import (
    InMemoryUserRepository,
    JsonFileUserRepository,
    RestUserRepository,
)
from ..models.workflow import DeletionSummary, WorkflowState
from ..operations.workflow import DeletionWorkflow
from ..utils.csv_utils import CsvUsernameExtractor
from ..utils.display_utils import (
    confirm_action,
    confirm_production_operation,
    display_candidates,
    display_summary,
    print_messages,
    print_section_header,
)
from ..utils.file_utils import UploadTransport
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class OperationHandler:
    """Handles CLI operations for bulk user deletion.

    Builds a :class:`DeletionWorkflow` per command and maps its states to
    what the operator sees: candidates are listed once validated, and the
    delete prompt only appears while the workflow can execute.
    """

    def __init__(
        self,
        has_header: bool = False,
        deduplicate: bool = False,
        skip_inactive: bool = False,
        keep_uploads: bool = False,
    ):
        """Initialize the operation handler.

        Args:
            has_header: Skip the first CSV record
            deduplicate: Drop repeated usernames
            skip_inactive: Leave inactive accounts in place
            keep_uploads: Keep staged copies of uploaded files
        """
        self.has_header = has_header
        self.deduplicate = deduplicate
        self.skip_inactive = skip_inactive
        self.keep_uploads = keep_uploads

    def _build_repository(
        self, env: str, store_file: Path | None
    ) -> UserRepositoryProtocol:
        """Select the user store for this run.

        Args:
            env: Environment ('dev' or 'prod')
            store_file: Optional JSON user store overriding the remote store

        Returns:
            UserRepositoryProtocol: Repository to resolve usernames against
        """
        if store_file is not None:
            return JsonFileUserRepository(store_file)
        return RestUserRepository(get_store_config(env))

    def _build_workflow(self, repository: UserRepositoryProtocol) -> DeletionWorkflow:
        return DeletionWorkflow(
            repository=repository,
            extractor=CsvUsernameExtractor(
                has_header=self.has_header, deduplicate=self.deduplicate
            ),
            transport=UploadTransport(get_upload_dir(), keep_files=self.keep_uploads),
            skip_inactive=self.skip_inactive,
        )

    def _upload(self, workflow: DeletionWorkflow, input_file: Path) -> bool:
        """Upload and validate a CSV, then show the result.

        Returns:
            bool: True if candidates are pending
        """
        print_section_header("Upload & Validate")
        state = workflow.submit_upload(input_file)
        print_messages(workflow.messenger.drain())

        if state is not WorkflowState.VALIDATED:
            return False

        display_candidates(workflow.confirmation_view())
        return True

    def handle_validate(self, input_file: Path) -> bool:
        """Validate a CSV without touching any user store.

        Args:
            input_file: Uploaded CSV file

        Returns:
            bool: True if the file yielded usernames
        """
        workflow = self._build_workflow(InMemoryUserRepository())
        return self._upload(workflow, input_file)

    def handle_delete(
        self,
        input_file: Path,
        env: str,
        store_file: Path | None = None,
        assume_yes: bool = False,
        show_outcomes: bool = False,
    ) -> DeletionSummary | None:
        """Validate a CSV, confirm with the operator and delete the accounts.

        Args:
            input_file: Uploaded CSV file
            env: Environment ('dev' or 'prod')
            store_file: Optional JSON user store overriding the remote store
            assume_yes: Skip the confirmation prompt (not in production)
            show_outcomes: List every per-account outcome

        Returns:
            DeletionSummary | None: Summary, or None if nothing was executed
        """
        repository = self._build_repository(env, store_file)
        workflow = self._build_workflow(repository)

        if not self._upload(workflow, input_file):
            return None

        total = len(workflow.confirmation_view())
        if env == "prod" and store_file is None:
            if not confirm_production_operation(total):
                click.echo("Operation cancelled by user.")
                return None
        elif not assume_yes and not confirm_action(
            f"Delete all accounts matching these {total} usernames?"
        ):
            click.echo("Operation cancelled by user.")
            return None

        print_section_header("Delete Users")
        summary = workflow.execute()
        print_messages(workflow.messenger.drain())
        display_summary(summary, show_outcomes=show_outcomes)

        logger.info(
            "Deletion run finished",
            extra={"operation": "delete_users", **summary.get_summary()},
        )
        return summary

