"""Operator-facing message collection, mirrored to the log."""

import logging

from ..models.workflow import Message, Severity
from .logging_utils import get_logger

_LOG_LEVELS = {
    Severity.STATUS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Messenger:
    """Collects status, warning and error messages for the operator.

    Messages accumulate until :meth:`drain` hands them to the presentation
    layer.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._messages: list[Message] = []
        self._logger = logger or get_logger(__name__)

    def add(self, text: str, severity: Severity = Severity.STATUS) -> Message:
        message = Message(text=text, severity=severity)
        self._messages.append(message)
        self._logger.log(_LOG_LEVELS[severity], text)
        return message

    def add_message(self, text: str) -> Message:
        return self.add(text, Severity.STATUS)

    def add_warning(self, text: str) -> Message:
        return self.add(text, Severity.WARNING)

    def add_error(self, text: str) -> Message:
        return self.add(text, Severity.ERROR)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def by_severity(self, severity: Severity) -> list[Message]:
        return [m for m in self._messages if m.severity is severity]

    def drain(self) -> list[Message]:
        """Return all pending messages and clear them."""
        messages, self._messages = self._messages, []
        return messages
