"""Tests for data models."""

import pytest

from userpurge.core.exceptions import DeleteError, EmptyResultError
from userpurge.models.config import APIConfig, AppConfig, UserStoreConfig
from userpurge.models.user import UserHandle
from userpurge.models.workflow import (
    DeletionOutcome,
    DeletionSummary,
    ExtractionResult,
    Message,
    OutcomeStatus,
    Severity,
)


class TestUserHandle:
    """Test UserHandle model."""

    def test_defaults_to_active(self):
        handle = UserHandle(user_id="42", name="alice")
        assert handle.active is True
        assert str(handle) == "alice (42)"

    def test_from_store_data_with_active_flag(self):
        handle = UserHandle.from_store_data(
            {"user_id": "7", "name": "bob", "active": False}
        )
        assert handle == UserHandle(user_id="7", name="bob", active=False)

    def test_from_store_data_with_alternate_keys(self):
        handle = UserHandle.from_store_data({"id": 9, "username": "carol", "status": 0})
        assert handle.user_id == "9"
        assert handle.name == "carol"
        assert handle.active is False

    def test_from_store_data_status_active(self):
        handle = UserHandle.from_store_data({"id": 1, "name": "d", "status": "active"})
        assert handle.active is True

    def test_to_dict_round_trips_through_from_store_data(self):
        handle = UserHandle(user_id="1", name="erin", active=False)
        assert UserHandle.from_store_data(handle.to_dict()) == handle


class TestExtractionResult:
    """Test ExtractionResult model."""

    def test_non_empty_has_no_warning(self):
        result = ExtractionResult(usernames=("a", "b"), rows_read=2)
        assert result.count == 2
        assert result.is_empty is False
        assert result.warning is None

    def test_empty_has_warning(self):
        result = ExtractionResult(rows_read=4)
        assert isinstance(result.warning, EmptyResultError)
        assert "4 rows read" in str(result.warning)


class TestDeletionSummary:
    """Test DeletionSummary aggregation."""

    def test_empty_summary(self):
        summary = DeletionSummary.from_outcomes([])
        assert summary.deleted == 0
        assert summary.not_found == ()
        assert summary.skipped == 0
        assert summary.failed == 0
        assert summary.has_failures is False

    def test_counts_per_status(self):
        error = DeleteError("Delete failed", username="eve", user_id="5")
        outcomes = [
            DeletionOutcome("dupe", OutcomeStatus.DELETED, user_id="2"),
            DeletionOutcome("dupe", OutcomeStatus.DELETED, user_id="3"),
            DeletionOutcome("carol", OutcomeStatus.NOT_FOUND),
            DeletionOutcome("sleepy", OutcomeStatus.SKIPPED, user_id="4", reason="inactive"),
            DeletionOutcome("ghost", OutcomeStatus.NOT_FOUND),
            DeletionOutcome("eve", OutcomeStatus.FAILED, user_id="5", error=error),
        ]

        summary = DeletionSummary.from_outcomes(outcomes)

        assert summary.deleted == 2
        assert summary.not_found == ("carol", "ghost")
        assert summary.skipped == 1
        assert summary.failures == (error,)
        assert summary.outcomes == tuple(outcomes)
        assert summary.get_summary() == {
            "deleted": 2,
            "not_found": 2,
            "skipped": 1,
            "failed": 1,
        }

    def test_outcome_string(self):
        assert str(DeletionOutcome("bob", OutcomeStatus.DELETED, user_id="1")) == (
            "DELETED bob (1)"
        )
        assert str(DeletionOutcome("carol", OutcomeStatus.NOT_FOUND)) == "NOT_FOUND carol"
        assert str(
            DeletionOutcome("s", OutcomeStatus.SKIPPED, user_id="4", reason="inactive")
        ) == "SKIPPED s (4): inactive"


class TestMessage:
    """Test Message model."""

    def test_default_severity(self):
        message = Message("hello")
        assert message.severity is Severity.STATUS
        assert str(message) == "[status] hello"


class TestConfigModels:
    """Test configuration models."""

    def test_store_config_from_env_vars_dev(self):
        config = UserStoreConfig.from_env_vars(
            {"DEV_USERSTORE_URL": "https://dev.example.com/api/", "DEV_USERSTORE_TOKEN": "t"},
            "dev",
        )
        assert config.base_url == "https://dev.example.com/api"
        assert config.get_api_url("users") == "https://dev.example.com/api/users"
        assert config.get_api_url("/users/1") == "https://dev.example.com/api/users/1"
        assert config.validate() is True

    def test_store_config_from_env_vars_prod(self):
        config = UserStoreConfig.from_env_vars(
            {"USERSTORE_URL": "https://example.com", "USERSTORE_TOKEN": "t"}, "prod"
        )
        assert config.environment == "prod"

    def test_store_config_missing_values(self):
        with pytest.raises(ValueError, match="DEV_USERSTORE_URL"):
            UserStoreConfig.from_env_vars({}, "dev")
        with pytest.raises(ValueError, match="USERSTORE_TOKEN"):
            UserStoreConfig.from_env_vars({"USERSTORE_URL": "https://x"}, "prod")

    def test_store_config_validate_rejects_bad_url(self):
        config = UserStoreConfig(base_url="ftp://x", api_token="t", environment="dev")
        assert config.validate() is False

    def test_store_config_redacts_token(self):
        config = UserStoreConfig(base_url="https://x", api_token="secret", environment="dev")
        assert config.to_dict()["api_token"] == "***REDACTED***"

    def test_api_config(self):
        assert APIConfig().get_requests_per_second() == 2.0
        assert APIConfig(rate_limit=0).get_requests_per_second() == float("inf")

    def test_app_config_defaults(self, tmp_path):
        config = AppConfig(upload_dir=str(tmp_path))
        assert config.api is not None
        result = config.to_dict()
        assert result["upload_dir"] == str(tmp_path)
        assert "store" not in result
        assert result["api"]["requests_per_second"] == 2.0
