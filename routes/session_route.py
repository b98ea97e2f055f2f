"""FastAPI routes for document Q&A sessions."""

from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from pydantic import BaseModel

from controllers.session_controller import (
	ask_question,
	end_session,
	get_session,
	list_messages,
	set_draft,
	start_session,
	upload_document,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


class StartPayload(BaseModel):
	document_id: Optional[str] = None


class DraftPayload(BaseModel):
	text: str = ""


class QuestionPayload(BaseModel):
	question: Optional[str] = None


@router.post("")
async def start_session_route(request: Request, payload: StartPayload):
	try:
		return await start_session(request, payload.document_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{session_id}")
async def get_session_route(request: Request, session_id: str):
	return await get_session(request, session_id)


@router.get("/{session_id}/messages")
async def list_messages_route(request: Request, session_id: str):
	return await list_messages(request, session_id)


@router.put("/{session_id}/draft")
async def set_draft_route(request: Request, session_id: str, payload: DraftPayload):
	return await set_draft(request, session_id, payload.text)


@router.post("/{session_id}/documents")
async def upload_document_route(
	request: Request,
	session_id: str,
	files: List[UploadFile] = File(default=[]),
	page_count: int = Form(0),
):
	try:
		return await upload_document(request, session_id, files, page_count)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/questions")
async def ask_question_route(request: Request, session_id: str, payload: QuestionPayload):
	try:
		return await ask_question(request, session_id, payload.question)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{session_id}")
async def end_session_route(request: Request, session_id: str):
	return await end_session(request, session_id)
