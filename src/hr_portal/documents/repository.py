from __future__ import annotations

from typing import List, Optional, Protocol

from .model import Document


class DocumentRepository(Protocol):
    def get_by_id(self, document_id: int) -> Optional[Document]:
        raise NotImplementedError

    def begin_extraction(self, document_id: int) -> bool:
        """Compare-and-swap the document into ``processing``.

        Returns False when another run already holds it in ``processing``. A
        ``processing`` marker left by a run that died is taken over once stale.
        """

        raise NotImplementedError

    def save_extraction(self, document_id: int, *, content: str, embedding: Optional[List[float]]) -> None:
        """Persist content and embedding (None clears it) and mark ``completed`` in one update."""

        raise NotImplementedError

    def mark_failed(self, document_id: int) -> None:
        raise NotImplementedError
