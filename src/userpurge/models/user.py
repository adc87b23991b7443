"""User data models for the user store."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserHandle:
    """Opaque reference to an account resolved from the user store.

    Names are not unique in every store, so a single username may resolve
    to several handles.
    """

    user_id: str
    name: str
    active: bool = True

    @classmethod
    def from_store_data(cls, data: dict[str, Any]) -> "UserHandle":
        """Create a UserHandle from a user store record.

        Args:
            data: Record as returned by a user store (API or JSON file)

        Returns:
            UserHandle: Handle with parsed data
        """
        status = data.get("status")
        if "active" in data:
            active = bool(data["active"])
        elif status is not None:
            active = str(status).lower() in ("1", "active", "enabled")
        else:
            active = True

        return cls(
            user_id=str(data.get("user_id", data.get("id", ""))),
            name=str(data.get("name", data.get("username", ""))),
            active=active,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the handle to its store record format."""
        return {"user_id": self.user_id, "name": self.name, "active": self.active}

    def __str__(self) -> str:
        return f"{self.name} ({self.user_id})"
