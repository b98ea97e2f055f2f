"""Resolve answers from the remote service or the local fallback tables."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Mapping, Optional, Sequence

from models.session_models import Answer, AnswerSource
from services.qa.errors import RemoteUnavailable
from services.qa.fallback_answers import GENERIC_ANSWERS, KNOWN_ANSWERS
from services.qa.remote_service import RemoteDocumentService

LOGGER = logging.getLogger(__name__)


class AnswerResolver:
	"""Produce an answer for a question about a registered document.

	With a ``remote`` service the question is dispatched to ``POST /ask``; when
	the service is unavailable, or when no service is configured (offline
	mode), the answer comes from two fallback tiers:

	1. an exact, case-sensitive match of the trimmed question in ``known_answers``;
	2. otherwise a uniformly random pick from ``generic_answers``.

	``rng`` is the random source for tier 2; pass a seeded ``random.Random``
	(or a stub exposing ``randrange``) to make selection deterministic.
	"""

	def __init__(
		self,
		remote: Optional[RemoteDocumentService] = None,
		*,
		rng: Optional[random.Random] = None,
		known_answers: Mapping[str, str] = KNOWN_ANSWERS,
		generic_answers: Sequence[str] = GENERIC_ANSWERS,
		simulated_latency: float = 0.0,
	) -> None:
		if not generic_answers:
			raise ValueError("generic_answers must not be empty.")
		self.remote = remote
		self.rng = rng or random.Random()
		self.known_answers = dict(known_answers)
		self.generic_answers = tuple(generic_answers)
		self.simulated_latency = simulated_latency

	@property
	def offline(self) -> bool:
		return self.remote is None

	async def resolve(self, document_id: str, question: str) -> Answer:
		"""Return the answer for ``question``, tagged with its source."""
		trimmed = question.strip()
		if self.remote is not None:
			try:
				text = await self.remote.ask(document_id, trimmed)
			except RemoteUnavailable as exc:
				LOGGER.warning("Answer service unavailable, using fallback answer: %s", exc)
			else:
				return Answer(text=text, source=AnswerSource.REMOTE)
		elif self.simulated_latency > 0:
			await asyncio.sleep(self.simulated_latency)
		return Answer(text=self.fallback_answer(trimmed), source=AnswerSource.FALLBACK)

	def fallback_answer(self, question: str) -> str:
		"""Tier-1 exact lookup, then tier-2 random generic answer.

		``question`` is matched as given; ``resolve`` trims it before calling.
		"""
		known = self.known_answers.get(question)
		if known is not None:
			return known
		return self.generic_answers[self.rng.randrange(len(self.generic_answers))]
