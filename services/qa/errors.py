"""Error kinds raised by the question-answer session engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
	INVALID_INPUT = "invalid_input"
	NO_ACTIVE_DOCUMENT = "no_active_document"
	REMOTE_UNAVAILABLE = "remote_unavailable"
	TIMEOUT = "timeout"
	SESSION_CONFLICT = "session_conflict"


_DEFAULT_MESSAGES = {
	ErrorKind.INVALID_INPUT: "Invalid input.",
	ErrorKind.NO_ACTIVE_DOCUMENT: "Please upload a PDF first.",
	ErrorKind.REMOTE_UNAVAILABLE: "Remote service unavailable.",
	ErrorKind.TIMEOUT: "Timed out waiting for an answer.",
	ErrorKind.SESSION_CONFLICT: "This session is already bound to another document; start a new session.",
}


class QAError(Exception):
	"""Base error carrying an ErrorKind."""

	kind: ErrorKind = ErrorKind.INVALID_INPUT

	def __init__(self, message: Optional[str] = None, *, kind: Optional[ErrorKind] = None) -> None:
		if kind is not None:
			self.kind = kind
		self.message = message or _DEFAULT_MESSAGES[self.kind]
		super().__init__(self.message)


class InvalidInput(QAError):
	kind = ErrorKind.INVALID_INPUT


class NoActiveDocument(QAError):
	kind = ErrorKind.NO_ACTIVE_DOCUMENT


class RemoteUnavailable(QAError):
	"""Network or service failure; absorbed by the resolver and registrar."""

	kind = ErrorKind.REMOTE_UNAVAILABLE


class RequestTimeout(QAError):
	kind = ErrorKind.TIMEOUT


class SessionConflict(QAError):
	"""The session cannot take a new document in its current state."""

	kind = ErrorKind.SESSION_CONFLICT
