from __future__ import annotations

from concurrent.futures import Future

from ..core.enums import DocumentStatus
from ..core.exceptions import NotFoundError, ValidationError
from .jobs import ExtractionJobQueue
from .model import Document
from .repository import DocumentRepository


class DocumentService:
    def __init__(self, documents: DocumentRepository, jobs: ExtractionJobQueue):
        self._documents = documents
        self._jobs = jobs

    def get(self, document_id: int) -> Document:
        document = self._documents.get_by_id(int(document_id))
        if not document:
            raise NotFoundError("Document not found.")
        return document

    def request_extraction(self, document_id: int) -> Future:
        """Queue a (re-)extraction. Also the manual recovery path for failed runs."""

        document = self.get(document_id)
        if document.status != DocumentStatus.APPROVED:
            raise ValidationError("Only approved documents can be extracted.", field="status")
        return self._jobs.dispatch(document.document_id)
