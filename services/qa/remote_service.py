"""HTTP client for the remote upload and answering endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from services.qa.errors import RemoteUnavailable

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


def _extract_field(payload: Any, *keys: str) -> str:
	"""Return the first non-empty string value among ``keys``."""
	if not isinstance(payload, dict):
		raise RemoteUnavailable("Remote service returned a non-object payload.")
	for key in keys:
		value = payload.get(key)
		if isinstance(value, str) and value:
			return value
	raise RemoteUnavailable(f"Remote response is missing '{keys[0]}'.")


class RemoteDocumentService:
	"""Thin wrapper over ``httpx.AsyncClient`` for ``POST /upload`` and ``POST /ask``.

	Any transport error, non-2xx status or malformed body is raised as
	``RemoteUnavailable`` so callers can take their fallback branch.
	"""

	def __init__(
		self,
		base_url: Optional[str] = None,
		*,
		timeout: float = 30.0,
		client: Optional[httpx.AsyncClient] = None,
	) -> None:
		if client is None and not base_url:
			raise ValueError("base_url or an httpx.AsyncClient is required.")
		self._owns_client = client is None
		self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout, headers=DEFAULT_HEADERS)

	async def upload(self, filename: str, content: bytes, mime_type: str) -> str:
		"""Register a document and return the id minted by the service."""
		payload = await self._post("/upload", files={"file": (filename, content, mime_type)})
		return _extract_field(payload, "documentId", "document_id")

	async def ask(self, document_id: str, question: str) -> str:
		"""Return the service's answer for ``question`` about ``document_id``."""
		payload = await self._post("/ask", json={"document_id": document_id, "question": question})
		return _extract_field(payload, "answer")

	async def aclose(self) -> None:
		if self._owns_client:
			await self.client.aclose()

	async def _post(self, path: str, **kwargs: Any) -> Dict[str, Any]:
		try:
			response = await self.client.post(path, **kwargs)
			response.raise_for_status()
		except httpx.HTTPStatusError as exc:
			LOGGER.warning("POST %s failed with HTTP %s", path, exc.response.status_code)
			raise RemoteUnavailable(f"POST {path} failed with HTTP {exc.response.status_code}") from exc
		except httpx.HTTPError as exc:
			LOGGER.warning("POST %s failed: %s", path, exc)
			raise RemoteUnavailable(f"POST {path} failed: {exc}") from exc
		try:
			return response.json()
		except ValueError as exc:
			raise RemoteUnavailable(f"POST {path} returned invalid JSON.") from exc
