"""FastAPI routes for the document dashboard."""

from fastapi import APIRouter, Request

from controllers.document_controller import get_document, list_documents

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", summary="List documents registered since startup")
async def list_documents_route(request: Request, limit: int = 100, offset: int = 0):
    return await list_documents(request, limit=limit, offset=offset)


@router.get("/{document_id}")
async def get_document_route(request: Request, document_id: str):
    return await get_document(request, document_id)
