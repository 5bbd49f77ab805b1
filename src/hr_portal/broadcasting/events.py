from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import ADMIN_EXTRACTION_CHANNEL, EXTRACTION_COMPLETED_EVENT
from ..documents.model import Document


@dataclass(frozen=True)
class PdfExtractionCompleted:
    """Published once a document is extracted and searchable."""

    document: Document

    def broadcast_on(self) -> str:
        return ADMIN_EXTRACTION_CHANNEL

    def broadcast_as(self) -> str:
        return EXTRACTION_COMPLETED_EVENT

    def broadcast_with(self) -> dict:
        doc = self.document
        return {
            "document_id": doc.document_id,
            "file_name": doc.file_name,
            "extraction_status": doc.extraction_status.value if doc.extraction_status else None,
            "has_content": bool(doc.content),
            "message": f"{doc.file_name} has been extracted and is now ready for smart search!",
        }
