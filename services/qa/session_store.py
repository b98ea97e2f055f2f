"""Append-only message log for a single Q&A session."""

from __future__ import annotations

from typing import List, Tuple

from models.session_models import SessionMessage


class SessionStore:
	"""Ordered conversation history; messages are never removed or reordered."""

	def __init__(self) -> None:
		self._messages: List[SessionMessage] = []

	def append(self, message: SessionMessage) -> None:
		"""Append a message at the end of the log."""
		self._messages.append(message)

	def snapshot(self) -> Tuple[SessionMessage, ...]:
		"""Return all messages so far, in append order."""
		return tuple(self._messages)

	def __len__(self) -> int:
		return len(self._messages)
