from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..core.enums import DocumentStatus, ExtractionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Document
from .repository import DocumentRepository

_COLUMNS = "document_id, file_name, stored_name, mime_type, status, extraction_status, content, embedding"


def _to_document(row: Dict[str, Any]) -> Document:
    embedding = row.get("embedding")
    return Document(
        document_id=int(row["document_id"]),
        file_name=row["file_name"],
        stored_name=row["stored_name"],
        mime_type=row["mime_type"],
        status=DocumentStatus(row["status"]),
        extraction_status=ExtractionStatus(row["extraction_status"]) if row.get("extraction_status") else None,
        content=row.get("content"),
        embedding=json.loads(embedding) if embedding else None,
    )


class MySQLDocumentRepository(DocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, stale_after_minutes: int = 30):
        self._conn_factory = conn_factory
        self._stale_after_minutes = int(stale_after_minutes)

    def get_by_id(self, document_id: int) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM documents WHERE document_id=%s", (document_id,))
            row = fetchone(cur)
            return _to_document(row) if row else None

    def begin_extraction(self, document_id: int) -> bool:
        # A run killed mid-flight leaves 'processing' behind; it is taken over once stale.
        # updated_at is set explicitly so a takeover still counts as a changed row.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE documents
                SET extraction_status=%s, updated_at=CURRENT_TIMESTAMP
                WHERE document_id=%s
                  AND (extraction_status IS NULL
                       OR extraction_status<>%s
                       OR updated_at < NOW() - INTERVAL %s MINUTE)
                """,
                (
                    ExtractionStatus.PROCESSING.value,
                    document_id,
                    ExtractionStatus.PROCESSING.value,
                    self._stale_after_minutes,
                ),
            )
            return cur.rowcount == 1

    def save_extraction(self, document_id: int, *, content: str, embedding: Optional[List[float]]) -> None:
        # No embedding this run: any previous vector is cleared.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE documents SET content=%s, embedding=%s, extraction_status=%s WHERE document_id=%s",
                (
                    content,
                    json.dumps(embedding) if embedding else None,
                    ExtractionStatus.COMPLETED.value,
                    document_id,
                ),
            )

    def mark_failed(self, document_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE documents SET extraction_status=%s WHERE document_id=%s",
                (ExtractionStatus.FAILED.value, document_id),
            )
