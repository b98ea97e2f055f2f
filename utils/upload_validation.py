"""Validation helpers for uploaded documents."""

from typing import Iterable, List, Union

from models.document_record import PDF_MIME_TYPE, UploadedFile
from services.qa.errors import InvalidInput


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case a content type and drop parameters such as ``charset``."""
    return (mime_type or "").lower().split(";", 1)[0].strip()


def is_pdf(upload: UploadedFile) -> bool:
    return normalize_mime_type(upload.mime_type) == PDF_MIME_TYPE


def select_single_pdf(files: Union[UploadedFile, Iterable[UploadedFile]]) -> UploadedFile:
    """Return the one PDF in ``files`` or raise ``InvalidInput``.

    Exactly one file is accepted and it must be declared as
    ``application/pdf``. Any other file type in the submission rejects the
    whole submission.
    """
    uploads: List[UploadedFile] = [files] if isinstance(files, UploadedFile) else list(files)
    if not uploads:
        raise InvalidInput("Please upload a PDF file.")
    if not all(is_pdf(upload) for upload in uploads):
        raise InvalidInput("Please upload PDF files only.")
    if len(uploads) > 1:
        raise InvalidInput("Please upload one PDF file at a time.")
    return uploads[0]
