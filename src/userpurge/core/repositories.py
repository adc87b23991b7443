"""User store implementations of the user repository protocol."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any
from urllib.parse import quote

from ..models.config import UserStoreConfig
from ..models.user import UserHandle
from ..utils.logging_utils import get_logger
from ..utils.request_utils import make_rate_limited_request
from .exceptions import FileOperationError, UserStoreError

logger = get_logger(__name__)


class InMemoryUserRepository:
    """User repository backed by a list held in memory."""

    def __init__(self, users: Iterable[UserHandle] = ()):
        self._users: list[UserHandle] = list(users)

    @property
    def users(self) -> list[UserHandle]:
        return list(self._users)

    def add(self, handle: UserHandle) -> None:
        self._users.append(handle)

    def find_by_name(self, name: str) -> list[UserHandle]:
        return [user for user in self._users if user.name == name]

    def delete(self, handle: UserHandle) -> None:
        if handle not in self._users:
            raise KeyError(f"User {handle.user_id} does not exist")
        self._users.remove(handle)


class JsonFileUserRepository(InMemoryUserRepository):
    """User repository persisted to a JSON file.

    The file holds a list of records with ``user_id``, ``name`` and
    ``active`` keys. Every delete rewrites the file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> list[UserHandle]:
        try:
            with open(self.path, encoding="utf-8") as f:
                records = json.load(f)
        except FileNotFoundError as e:
            raise FileOperationError(
                "User store file not found", file_path=str(self.path), operation="read"
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise FileOperationError(
                "Could not read user store file",
                file_path=str(self.path),
                operation="read",
                details=str(e),
            ) from e

        if not isinstance(records, list):
            raise FileOperationError(
                "User store file must contain a JSON list",
                file_path=str(self.path),
                operation="read",
            )
        return [UserHandle.from_store_data(record) for record in records]

    def _save(self, users: list[UserHandle]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([user.to_dict() for user in users], f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise FileOperationError(
                "Could not write user store file",
                file_path=str(self.path),
                operation="write",
                details=str(e),
            ) from e

    def delete(self, handle: UserHandle) -> None:
        if handle not in self._users:
            raise KeyError(f"User {handle.user_id} does not exist")
        remaining = list(self._users)
        remaining.remove(handle)
        # Memory only follows a successful write
        self._save(remaining)
        self._users = remaining


class RestUserRepository:
    """User repository backed by a remote HTTP user store.

    Expects ``GET {base_url}/users?name=<name>`` to return a JSON list of
    user records (or an object with a ``users`` list) and
    ``DELETE {base_url}/users/<user_id>`` to remove one account.
    """

    def __init__(self, config: UserStoreConfig):
        self.config = config

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_token}",
            "Content-Type": "application/json",
            "User-Agent": "userpurge/1.0 (bulk user deletion tool)",
        }

    def find_by_name(self, name: str) -> list[UserHandle]:
        url = self.config.get_api_url("users")
        response = make_rate_limited_request(
            "GET", url, self.headers, params={"name": name}
        )
        try:
            payload: Any = response.json()
        except ValueError as e:
            raise UserStoreError(
                "User store returned invalid JSON", endpoint=url, details=str(e)
            ) from e

        records = payload.get("users", []) if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            raise UserStoreError("Unexpected user lookup response", endpoint=url)

        # Some stores match loosely; keep exact name matches only
        handles = [UserHandle.from_store_data(record) for record in records]
        matches = [handle for handle in handles if handle.name == name]
        logger.debug(
            f"Found {len(matches)} account(s) named {name}",
            extra={"username": name, "api_endpoint": url},
        )
        return matches

    def delete(self, handle: UserHandle) -> None:
        url = self.config.get_api_url(f"users/{quote(handle.user_id, safe='')}")
        make_rate_limited_request("DELETE", url, self.headers)
