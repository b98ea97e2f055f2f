from __future__ import annotations

import time
from dataclasses import dataclass, field

from models.session_models import AnswerSource


PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class UploadedFile:
    """A file handed over by the presentation layer for registration.

    Attributes:
        name: Original filename.
        mime_type: Declared content type (e.g. ``application/pdf``).
        size_bytes: Payload size in bytes.
        content: Raw payload; may be empty when only metadata is known.
    """

    name: str
    mime_type: str
    size_bytes: int
    content: bytes = b""


@dataclass(frozen=True)
class Document:
    """A registered document, immutable once created.

    Attributes:
        id: Opaque identifier returned by upload registration.
        name: Filename shown to the user.
        size_bytes: Size of the uploaded payload.
        page_count: Number of pages, as supplied by the caller (0 when unknown).
        uploaded_at: Unix timestamp (seconds) of the registration.
    """

    id: str
    name: str
    size_bytes: int
    page_count: int = 0
    uploaded_at: float = field(default_factory=lambda: time.time())

    @property
    def size_label(self) -> str:
        """Human readable size such as ``2.4 MB``."""
        size = float(self.size_bytes)
        for unit in ("B", "KB", "MB"):
            if size < 1024:
                return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} GB"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "size_bytes": self.size_bytes,
            "size_label": self.size_label,
            "page_count": self.page_count,
            "uploaded_at": self.uploaded_at,
        }


@dataclass(frozen=True)
class Registration:
    """Outcome of an upload registration.

    Attributes:
        document: The registered document.
        source: ``remote`` when the service minted the id, ``fallback`` when
            the placeholder id was used.
    """

    document: Document
    source: AnswerSource

    @property
    def document_id(self) -> str:
        return self.document.id
