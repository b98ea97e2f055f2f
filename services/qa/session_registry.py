"""Simple in-memory registry of Q&A sessions."""

from __future__ import annotations

from typing import Dict, Optional
from uuid import uuid4

from models.document_record import Document
from models.session_models import SessionState
from services.qa.answer_resolver import AnswerResolver
from services.qa.request_lifecycle import RequestLifecycleController
from services.qa.session_store import SessionStore


class SessionRegistry:
	"""Own one lifecycle controller per session for the lifetime of the process."""

	def __init__(self, resolver: AnswerResolver, *, answer_timeout: Optional[float] = None) -> None:
		self.resolver = resolver
		self.answer_timeout = answer_timeout
		self._sessions: Dict[str, RequestLifecycleController] = {}

	def create(self, document: Optional[Document] = None) -> RequestLifecycleController:
		"""Create a new session, optionally already bound to a document."""
		session_id = uuid4().hex
		state = SessionState(session_id=session_id, store=SessionStore(), active_document=document)
		controller = RequestLifecycleController(state, self.resolver, timeout=self.answer_timeout)
		self._sessions[session_id] = controller
		return controller

	def get(self, session_id: str) -> RequestLifecycleController:
		"""Return a session's controller or raise KeyError if missing."""
		controller = self._sessions.get(session_id)
		if controller is None:
			raise KeyError(f"Session {session_id} not found")
		return controller

	def end(self, session_id: str) -> SessionState:
		"""Drop a session; its history goes with it."""
		controller = self.get(session_id)
		del self._sessions[session_id]
		return controller.session
