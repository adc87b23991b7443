"""Tests for the upload, confirm and execute deletion workflow."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from userpurge.core.exceptions import DeleteError, NoCandidatesError
from userpurge.models.user import UserHandle
from userpurge.models.workflow import OutcomeStatus, Severity, WorkflowState
from userpurge.operations.workflow import DeletionWorkflow
from userpurge.utils.csv_utils import CsvUsernameExtractor
from userpurge.utils.file_utils import UploadTransport


def _mock_repository(matches):
    """Build a repository mock resolving names from a dict."""
    repository = MagicMock()
    repository.find_by_name.side_effect = lambda name: list(matches.get(name, []))
    return repository


class TestSubmitCsv:
    """Test uploads and the transitions they cause."""

    def test_initial_state(self, repository):
        workflow = DeletionWorkflow(repository)
        assert workflow.state is WorkflowState.AWAITING_UPLOAD
        assert workflow.can_execute is False
        assert workflow.summary is None

    def test_valid_upload_moves_to_validated(self, repository):
        workflow = DeletionWorkflow(repository)

        state = workflow.submit_csv(b"alice\n\n  bob  \nalice\n")

        assert state is WorkflowState.VALIDATED
        assert workflow.confirmation_view() == ("alice", "bob", "alice")
        messages = workflow.messenger.messages
        assert messages[-1].severity is Severity.STATUS
        assert messages[-1].text == "CSV file validated successfully. Found 3 usernames."

    def test_empty_upload_stays_awaiting_with_warning(self, repository):
        workflow = DeletionWorkflow(repository)

        state = workflow.submit_csv(b"\n  \n")

        assert state is WorkflowState.AWAITING_UPLOAD
        warnings = workflow.messenger.by_severity(Severity.WARNING)
        assert [w.text for w in warnings] == ["No valid usernames found in the CSV file."]

    def test_missing_file_stays_awaiting_with_error(self, repository):
        workflow = DeletionWorkflow(repository)

        state = workflow.submit_csv(None)

        assert state is WorkflowState.AWAITING_UPLOAD
        errors = workflow.messenger.by_severity(Severity.ERROR)
        assert [e.text for e in errors] == ["Please upload a valid CSV file."]

    def test_unparseable_upload_stays_awaiting_with_error(self, repository):
        workflow = DeletionWorkflow(repository)

        state = workflow.submit_csv(b"bob\n" + b"x" * 200_000 + b"\n")

        assert state is WorkflowState.AWAITING_UPLOAD
        errors = workflow.messenger.by_severity(Severity.ERROR)
        assert [e.text for e in errors] == ["Please upload a valid CSV file."]

    def test_unparseable_resubmit_keeps_pending_candidates(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")

        state = workflow.submit_csv(b"x" * 200_000 + b"\n")

        assert state is WorkflowState.VALIDATED
        assert workflow.confirmation_view() == ("bob",)

    def test_failed_resubmit_keeps_pending_candidates(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")

        assert workflow.submit_csv(None) is WorkflowState.VALIDATED
        assert workflow.submit_csv(b"") is WorkflowState.VALIDATED
        assert workflow.confirmation_view() == ("bob",)

    def test_resubmit_replaces_candidates(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")

        workflow.submit_csv(b"carol\ndave\n")

        assert workflow.confirmation_view() == ("carol", "dave")

    def test_resubmit_after_execute_restarts(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")
        workflow.execute()

        state = workflow.submit_csv(b"dupe\n")

        assert state is WorkflowState.VALIDATED
        assert workflow.summary is None
        assert workflow.execute().deleted == 2

    def test_extractor_options_are_used(self, repository):
        workflow = DeletionWorkflow(
            repository, extractor=CsvUsernameExtractor(has_header=True, deduplicate=True)
        )
        workflow.submit_csv(b"username\nbob\nbob\n")
        assert workflow.confirmation_view() == ("bob",)


class TestSubmitUpload:
    """Test uploads staged through the transport."""

    def test_upload_is_staged_and_discarded(self, repository, write_csv, upload_dir):
        transport = UploadTransport(upload_dir)
        workflow = DeletionWorkflow(repository, transport=transport)

        state = workflow.submit_upload(write_csv("bob\ncarol\n"))

        assert state is WorkflowState.VALIDATED
        assert workflow.confirmation_view() == ("bob", "carol")
        assert list(upload_dir.iterdir()) == []

    def test_upload_kept_when_requested(self, repository, write_csv, upload_dir):
        transport = UploadTransport(upload_dir, keep_files=True)
        workflow = DeletionWorkflow(repository, transport=transport)

        workflow.submit_upload(write_csv("bob\n"))

        staged = list(upload_dir.iterdir())
        assert len(staged) == 1
        assert staged[0].name.startswith("users-to-delete_")
        assert staged[0].suffix == ".csv"

    def test_wrong_extension_is_rejected(self, repository, write_csv, upload_dir):
        workflow = DeletionWorkflow(repository, transport=UploadTransport(upload_dir))

        state = workflow.submit_upload(write_csv("bob\n", name="users.txt"))

        assert state is WorkflowState.AWAITING_UPLOAD
        errors = workflow.messenger.by_severity(Severity.ERROR)
        assert len(errors) == 1
        assert errors[0].text.startswith("Please upload a valid CSV file.")

    def test_staging_failure_reports_processing_error(
        self, repository, write_csv, upload_dir
    ):
        workflow = DeletionWorkflow(repository, transport=UploadTransport(upload_dir))

        with patch(
            "userpurge.utils.file_utils.shutil.copyfile",
            side_effect=OSError("disk full"),
        ):
            state = workflow.submit_upload(write_csv("bob\n"))

        assert state is WorkflowState.AWAITING_UPLOAD
        errors = workflow.messenger.by_severity(Severity.ERROR)
        assert [e.text for e in errors] == [
            "An error occurred while processing the file: Could not stage uploaded file"
        ]

    def test_without_transport_reads_path_directly(self, repository, write_csv):
        workflow = DeletionWorkflow(repository)
        assert workflow.submit_upload(write_csv("bob\n")) is WorkflowState.VALIDATED


class TestConfirmationView:
    """Test the read-only review step."""

    def test_requires_validated_state(self, repository):
        workflow = DeletionWorkflow(repository)
        with pytest.raises(NoCandidatesError):
            workflow.confirmation_view()

    def test_is_not_available_after_execute(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")
        workflow.execute()
        with pytest.raises(NoCandidatesError):
            workflow.confirmation_view()

    def test_does_not_touch_repository(self):
        repository = _mock_repository({})
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")

        workflow.confirmation_view()

        repository.find_by_name.assert_not_called()
        repository.delete.assert_not_called()


class TestExecute:
    """Test deletion runs."""

    def test_execute_without_upload_fails(self, repository):
        workflow = DeletionWorkflow(repository)
        with pytest.raises(NoCandidatesError):
            workflow.execute()
        assert workflow.state is WorkflowState.AWAITING_UPLOAD

    def test_execute_after_empty_upload_fails(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"")
        with pytest.raises(NoCandidatesError):
            workflow.execute()

    def test_execute_twice_fails(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")
        workflow.execute()

        with pytest.raises(NoCandidatesError):
            workflow.execute()
        assert workflow.state is WorkflowState.EXECUTED

    def test_rejected_execute_is_not_logged_as_failed_run(self, repository, caplog):
        workflow = DeletionWorkflow(repository)

        with caplog.at_level(logging.INFO, logger="userpurge"):
            with pytest.raises(NoCandidatesError):
                workflow.execute()

        messages = [r.getMessage() for r in caplog.records]
        assert "Starting execute_deletion" not in messages
        assert not any(m.startswith("Failed execute_deletion") for m in messages)
        assert all(r.exc_info is None for r in caplog.records)

    def test_run_is_logged_as_operation(self, repository, caplog):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\n")

        with caplog.at_level(logging.INFO, logger="userpurge"):
            workflow.execute()

        messages = [r.getMessage() for r in caplog.records]
        assert "Starting execute_deletion" in messages
        assert "Completed execute_deletion" in messages

    def test_found_and_not_found(self):
        bob = UserHandle(user_id="1", name="bob")
        repository = _mock_repository({"bob": [bob]})
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\ncarol\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.not_found == ("carol",)
        repository.delete.assert_called_once_with(bob)
        assert workflow.state is WorkflowState.EXECUTED
        assert workflow.summary is summary

    def test_name_with_multiple_accounts_deletes_all(self):
        first = UserHandle(user_id="2", name="dupe")
        second = UserHandle(user_id="3", name="dupe")
        repository = _mock_repository({"dupe": [first, second]})
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"dupe\n")

        summary = workflow.execute()

        assert summary.deleted == 2
        assert [c.args[0] for c in repository.delete.call_args_list] == [first, second]

    def test_duplicate_usernames_are_harmless(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\nbob\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.not_found == ("bob",)

    def test_lookup_order_follows_candidates(self):
        repository = _mock_repository({})
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"c\na\nb\n")

        summary = workflow.execute()

        assert [c.args[0] for c in repository.find_by_name.call_args_list] == [
            "c",
            "a",
            "b",
        ]
        assert summary.not_found == ("c", "a", "b")

    def test_delete_failure_does_not_abort_batch(self):
        broken = UserHandle(user_id="1", name="bob")
        fine = UserHandle(user_id="2", name="carol")
        repository = _mock_repository({"bob": [broken], "carol": [fine]})

        def delete(handle):
            if handle is broken:
                raise RuntimeError("storage offline")

        repository.delete.side_effect = delete
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\ncarol\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.failed == 1
        assert summary.has_failures
        error = summary.failures[0]
        assert isinstance(error, DeleteError)
        assert error.username == "bob"
        assert error.user_id == "1"
        assert "storage offline" in str(error)
        assert repository.delete.call_count == 2

    def test_lookup_failure_does_not_abort_batch(self):
        carol = UserHandle(user_id="2", name="carol")
        repository = MagicMock()

        def find(name):
            if name == "bob":
                raise ConnectionError("timeout")
            return [carol]

        repository.find_by_name.side_effect = find
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\ncarol\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.failed == 1
        assert summary.outcomes[0].status is OutcomeStatus.FAILED
        assert summary.outcomes[0].username == "bob"

    def test_skip_inactive(self, repository):
        workflow = DeletionWorkflow(repository, skip_inactive=True)
        workflow.submit_csv(b"sleepy\nbob\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.skipped == 1
        assert summary.outcomes[0].reason == "inactive"
        assert [u.name for u in repository.users] == ["dupe", "dupe", "sleepy"]

    def test_inactive_accounts_deleted_by_default(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"sleepy\n")

        summary = workflow.execute()

        assert summary.deleted == 1
        assert summary.skipped == 0

    def test_execution_messages(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"bob\nghost\nphantom\n")
        workflow.messenger.drain()

        workflow.execute()

        texts = [(m.severity, m.text) for m in workflow.messenger.messages]
        assert texts == [
            (Severity.STATUS, "Deleted 1 users."),
            (
                Severity.WARNING,
                "The following usernames were not found: ghost, phantom",
            ),
        ]

    def test_repository_is_updated(self, repository):
        workflow = DeletionWorkflow(repository)
        workflow.submit_csv(b"dupe\n")

        workflow.execute()

        assert [u.name for u in repository.users] == ["bob", "sleepy"]
