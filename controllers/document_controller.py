"""Controllers for the document dashboard."""

from fastapi import Request, HTTPException
from typing import Dict, Any

from dal.document_dal import DocumentDAL


def _registration_view(registration) -> Dict[str, Any]:
    return {**registration.document.to_dict(), "source": registration.source.value}


async def list_documents(request: Request, limit: int = 100, offset: int = 0) -> Dict[str, Any]:
    """Return documents registered since the application started.

    Args:
        request: FastAPI Request (used to access app.state.db_initializer).
        limit: Maximum number of documents to return.
        offset: Documents to skip.

    Returns:
        A dict with the documents under `documents`, newest first.
    """
    document_dal = DocumentDAL(request.app.state.db_initializer)
    registrations = await document_dal.list_documents(limit=limit, offset=offset)
    return {"documents": [_registration_view(r) for r in registrations]}


async def get_document(request: Request, document_id: str) -> Dict[str, Any]:
    """Controller to fetch one catalogued document.

    Raises:
        HTTPException(404) if the document is not registered.
    """
    document_dal = DocumentDAL(request.app.state.db_initializer)
    registration = await document_dal.get_document(document_id)
    if registration is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return _registration_view(registration)
