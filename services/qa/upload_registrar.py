"""Register uploaded PDFs with the remote service or a local stub."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Tuple, Union

from models.document_record import Document, Registration, UploadedFile
from models.session_models import AnswerSource
from services.qa.errors import RemoteUnavailable
from services.qa.fallback_answers import PLACEHOLDER_DOCUMENT_ID
from services.qa.remote_service import RemoteDocumentService
from utils.upload_validation import select_single_pdf

LOGGER = logging.getLogger(__name__)


class UploadRegistrar:
	"""Turn exactly one uploaded PDF into a registered ``Document``.

	Validation runs before any network or stub interaction. When the remote
	service fails, the registrar returns ``placeholder_id`` tagged as a
	fallback registration instead of raising, unless
	``fallback_on_failure`` is disabled.
	"""

	def __init__(
		self,
		remote: Optional[RemoteDocumentService] = None,
		*,
		fallback_on_failure: bool = True,
		placeholder_id: str = PLACEHOLDER_DOCUMENT_ID,
		simulated_latency: float = 0.0,
	) -> None:
		self.remote = remote
		self.fallback_on_failure = fallback_on_failure
		self.placeholder_id = placeholder_id
		self.simulated_latency = simulated_latency

	async def register(
		self,
		files: Union[UploadedFile, Iterable[UploadedFile]],
		*,
		page_count: int = 0,
	) -> Registration:
		"""Validate ``files`` and register the single PDF they contain."""
		upload = select_single_pdf(files)
		document_id, source = await self._mint_id(upload)
		document = Document(
			id=document_id,
			name=upload.name,
			size_bytes=upload.size_bytes,
			page_count=max(0, int(page_count)),
		)
		LOGGER.info("Registered %s as %s (%s)", upload.name, document_id, source.value)
		return Registration(document=document, source=source)

	async def _mint_id(self, upload: UploadedFile) -> Tuple[str, AnswerSource]:
		if self.remote is None:
			if self.simulated_latency > 0:
				await asyncio.sleep(self.simulated_latency)
			return self.placeholder_id, AnswerSource.FALLBACK
		try:
			document_id = await self.remote.upload(upload.name, upload.content, upload.mime_type)
		except RemoteUnavailable as exc:
			if not self.fallback_on_failure:
				raise
			LOGGER.warning("Upload service unavailable, returning placeholder id: %s", exc)
			return self.placeholder_id, AnswerSource.FALLBACK
		return document_id, AnswerSource.REMOTE
