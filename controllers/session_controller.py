"""Session lifecycle helpers for document Q&A."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request, UploadFile

from dal.document_dal import DocumentDAL
from models.document_record import UploadedFile
from models.session_models import MessageRole
from services.qa.errors import InvalidInput, NoActiveDocument, SessionConflict
from services.qa.fallback_answers import SUGGESTED_QUESTIONS
from services.qa.request_lifecycle import RequestLifecycleController
from services.qa.session_registry import SessionRegistry
from services.qa.upload_registrar import UploadRegistrar


def _registry(request: Request) -> SessionRegistry:
	return request.app.state.session_registry


def _controller(request: Request, session_id: str) -> RequestLifecycleController:
	try:
		return _registry(request).get(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc


def session_view(controller: RequestLifecycleController) -> Dict[str, Any]:
	"""Serializable view of a session for the presentation layer."""
	session = controller.session
	document = session.active_document
	return {
		"session_id": session.session_id,
		"document": document.to_dict() if document else None,
		"state": controller.state.value,
		"pending": controller.pending,
		"last_outcome": controller.last_outcome.value if controller.last_outcome else None,
		"draft": session.draft,
		"message_count": len(session.store),
		"suggested_questions": list(SUGGESTED_QUESTIONS),
	}


async def start_session(request: Request, document_id: Optional[str] = None) -> Dict[str, Any]:
	"""Create a new session, bound to a catalogued document when one is given."""
	document = None
	if document_id:
		registration = await DocumentDAL(request.app.state.db_initializer).get_document(document_id)
		if registration is None:
			raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
		document = registration.document
	controller = _registry(request).create(document)
	return session_view(controller)


async def get_session(request: Request, session_id: str) -> Dict[str, Any]:
	return session_view(_controller(request, session_id))


async def list_messages(request: Request, session_id: str) -> Dict[str, Any]:
	"""Return the conversation snapshot in append order."""
	controller = _controller(request, session_id)
	messages = [msg.to_dict() for msg in controller.session.store.snapshot()]
	return {"session_id": session_id, "messages": messages}


async def set_draft(request: Request, session_id: str, text: str) -> Dict[str, Any]:
	controller = _controller(request, session_id)
	controller.set_draft(text)
	return {"session_id": session_id, "draft": controller.session.draft}


async def upload_document(
	request: Request,
	session_id: str,
	files: List[UploadFile],
	page_count: int = 0,
) -> Dict[str, Any]:
	"""Validate and register an uploaded PDF, then make it the session's document."""
	controller = _controller(request, session_id)
	registrar: UploadRegistrar = request.app.state.upload_registrar
	try:
		controller.check_can_attach()
	except SessionConflict as exc:
		raise HTTPException(status_code=409, detail=exc.message) from exc

	uploads: List[UploadedFile] = []
	for upload in files:
		content = await upload.read()
		uploads.append(
			UploadedFile(
				name=upload.filename or "document.pdf",
				mime_type=upload.content_type or "",
				size_bytes=len(content),
				content=content,
			)
		)

	try:
		registration = await registrar.register(uploads, page_count=page_count)
	except InvalidInput as exc:
		raise HTTPException(status_code=400, detail=exc.message) from exc

	try:
		controller.attach_document(registration.document)
	except SessionConflict as exc:
		raise HTTPException(status_code=409, detail=exc.message) from exc
	await DocumentDAL(request.app.state.db_initializer).save_registration(registration)
	return {
		"session_id": session_id,
		"document": registration.document.to_dict(),
		"source": registration.source.value,
	}


async def ask_question(request: Request, session_id: str, question: Optional[str]) -> Dict[str, Any]:
	"""Submit a question (or the current draft) and return the reply."""
	controller = _controller(request, session_id)
	try:
		reply = await controller.submit(question)
	except NoActiveDocument as exc:
		raise HTTPException(status_code=409, detail=exc.message) from exc

	answer = controller.last_answer if reply is not None and reply.role is MessageRole.ANSWER else None
	return {
		"session_id": session_id,
		"accepted": reply is not None,
		"reply": reply.to_dict() if reply else None,
		"answer_source": answer.source.value if answer else None,
		"message_count": len(controller.session.store),
	}


async def end_session(request: Request, session_id: str) -> Dict[str, Any]:
	try:
		state = _registry(request).end(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return {"session_id": session_id, "ended": True, "message_count": len(state.store)}
