"""Lifecycle of one question submission within a Q&A session."""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from models.document_record import Document
from models.session_models import Answer, MessageRole, SessionMessage, SessionState
from services.qa.answer_resolver import AnswerResolver
from services.qa.errors import NoActiveDocument, RequestTimeout, SessionConflict

LOGGER = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to get answer from backend."
CANCELLED_MESSAGE = "The question was cancelled before an answer arrived."


class LifecycleState(str, Enum):
	IDLE = "idle"
	SUBMITTING = "submitting"
	RESOLVED = "resolved"
	FAILED = "failed"


StateListener = Callable[[LifecycleState], None]


class RequestLifecycleController:
	"""Drive ``IDLE -> SUBMITTING -> (RESOLVED | FAILED) -> IDLE`` for one session.

	At most one question is in flight. A submit while another is pending is
	ignored rather than queued, so messages land in the store in call order.
	``timeout`` (seconds) is optional; when it expires the request fails with
	a system message instead of waiting indefinitely on the resolver.
	"""

	def __init__(
		self,
		session: SessionState,
		resolver: AnswerResolver,
		*,
		timeout: Optional[float] = None,
	) -> None:
		self.session = session
		self.resolver = resolver
		self.timeout = timeout if timeout and timeout > 0 else None
		self.state = LifecycleState.IDLE
		self.last_outcome: Optional[LifecycleState] = None
		self.last_answer: Optional[Answer] = None
		self._listeners: List[StateListener] = []
		self._sequence = itertools.count(1)

	@property
	def pending(self) -> bool:
		return self.state is LifecycleState.SUBMITTING

	def subscribe(self, listener: StateListener) -> None:
		"""Call ``listener`` with every state the controller enters."""
		self._listeners.append(listener)

	def check_can_attach(self, document_id: Optional[str] = None) -> None:
		"""Raise ``SessionConflict`` if the session cannot take a new document.

		A session keeps one document once questions have been asked about it,
		and never changes document while a question is in flight.
		"""
		if self.pending:
			raise SessionConflict("A question is still being answered; wait for it before uploading.")
		current = self.session.active_document_id
		if current and len(self.session.store) and current != document_id:
			raise SessionConflict()

	def attach_document(self, document: Document) -> None:
		"""Make ``document`` the target of subsequent questions."""
		self.check_can_attach(document.id)
		self.session.active_document = document

	def set_draft(self, text: str) -> None:
		self.session.draft = text

	async def submit(self, text: Optional[str] = None) -> Optional[SessionMessage]:
		"""Submit ``text`` (or the current draft) and return the reply message.

		Returns None when the submission is a no-op: blank text, or another
		question still in flight.

		Raises:
			NoActiveDocument: no document is attached to the session.
		"""
		question = (self.session.draft if text is None else text).strip()
		if not question or self.pending:
			return None
		document_id = self.session.active_document_id
		if not document_id:
			raise NoActiveDocument()

		self.session.store.append(self._message(MessageRole.QUESTION, question))
		self.session.draft = ""

		started = time.perf_counter()
		reply: Optional[SessionMessage] = None
		outcome = LifecycleState.FAILED
		try:
			self._enter(LifecycleState.SUBMITTING)
			try:
				answer = await self._resolve(document_id, question)
			except asyncio.CancelledError:
				LOGGER.warning("Question cancelled in session %s", self.session.session_id)
				reply = self._message(MessageRole.SYSTEM, CANCELLED_MESSAGE)
				raise
			except Exception as exc:  # pylint: disable=broad-exception-caught
				LOGGER.error("Answer resolution failed for session %s: %s", self.session.session_id, exc)
				reply = self._message(MessageRole.SYSTEM, str(exc) or GENERIC_FAILURE_MESSAGE)
			else:
				self.last_answer = answer
				reply = self._message(MessageRole.ANSWER, answer.text)
				outcome = LifecycleState.RESOLVED
		finally:
			# Every question gets exactly one reply and the session always returns to IDLE.
			if reply is None:
				reply = self._message(MessageRole.SYSTEM, GENERIC_FAILURE_MESSAGE)
			self.session.store.append(reply)
			self.last_outcome = outcome
			try:
				self._enter(outcome)
			finally:
				self._enter(LifecycleState.IDLE)
		LOGGER.info(
			"Question %s in session %s after %.3fs",
			outcome.value,
			self.session.session_id,
			time.perf_counter() - started,
		)
		return reply

	async def _resolve(self, document_id: str, question: str) -> Answer:
		if self.timeout is None:
			return await self.resolver.resolve(document_id, question)
		try:
			return await asyncio.wait_for(self.resolver.resolve(document_id, question), self.timeout)
		except asyncio.TimeoutError as exc:
			raise RequestTimeout() from exc

	def _message(self, role: MessageRole, content: str) -> SessionMessage:
		message_id = f"{self.session.session_id}-{next(self._sequence)}"
		return SessionMessage(id=message_id, role=role, content=content)

	def _enter(self, state: LifecycleState) -> None:
		self.state = state
		for listener in self._listeners:
			listener(state)
