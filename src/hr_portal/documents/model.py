from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..core.enums import DocumentStatus, ExtractionStatus


@dataclass(frozen=True)
class Document:
    """Stored document. The pipeline owns content, embedding and extraction_status."""

    document_id: int
    file_name: str
    stored_name: str
    mime_type: str
    status: DocumentStatus
    extraction_status: Optional[ExtractionStatus] = None
    content: Optional[str] = None
    embedding: Optional[List[float]] = None

    def to_dict(self) -> dict:
        return {
            "id": self.document_id,
            "file_name": self.file_name,
            "mime_type": self.mime_type,
            "status": self.status.value,
            "extraction_status": self.extraction_status.value if self.extraction_status else None,
            "has_content": bool(self.content),
            "has_embedding": bool(self.embedding),
        }

    def to_search_document(self) -> dict:
        body = {
            "id": self.document_id,
            "file_name": self.file_name,
            "mime_type": self.mime_type,
            "content": self.content or "",
        }
        if self.embedding:
            body["_vectors"] = {"default": self.embedding}
        return body


class PipelineResult(str, Enum):
    SKIPPED = "skipped"
    FAILED = "failed"
    COMPLETED = "completed"
    # Content persisted, embedding missing.
    DEGRADED = "degraded"


@dataclass(frozen=True)
class PipelineOutcome:
    document_id: int
    result: PipelineResult
    indexed: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class EmbeddingResult:
    vector: Optional[List[float]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.vector)
