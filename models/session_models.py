"""Session domain models for document question answering."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
	from models.document_record import Document
	from services.qa.session_store import SessionStore


class MessageRole(str, Enum):
	QUESTION = "question"
	ANSWER = "answer"
	SYSTEM = "system"


class AnswerSource(str, Enum):
	"""Where an answer or registration came from."""

	REMOTE = "remote"
	FALLBACK = "fallback"


@dataclass(frozen=True)
class SessionMessage:
	"""One immutable entry in a session conversation."""

	id: str
	role: MessageRole
	content: str
	created_at: float = field(default_factory=lambda: time.time())

	def to_dict(self) -> dict:
		return {
			"id": self.id,
			"role": self.role.value,
			"content": self.content,
			"created_at": self.created_at,
		}


@dataclass(frozen=True)
class Answer:
	"""Answer text tagged with the path that produced it."""

	text: str
	source: AnswerSource


@dataclass
class SessionState:
	"""In-memory state for one document Q&A session."""

	session_id: str
	store: SessionStore
	active_document: Optional[Document] = None
	draft: str = ""
	created_at: float = field(default_factory=lambda: time.time())

	@property
	def active_document_id(self) -> Optional[str]:
		return self.active_document.id if self.active_document else None
