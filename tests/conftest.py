import pytest

from models.document_record import Document, UploadedFile


@pytest.fixture
def pdf_upload():
    return UploadedFile(name="paper.pdf", mime_type="application/pdf", size_bytes=8, content=b"%PDF-1.4")


@pytest.fixture
def text_upload():
    return UploadedFile(name="notes.txt", mime_type="text/plain", size_bytes=5, content=b"hello")


@pytest.fixture
def document():
    return Document(id="doc-1", name="paper.pdf", size_bytes=2048, page_count=12)
