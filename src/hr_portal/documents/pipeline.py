from __future__ import annotations

import logging
from pathlib import Path

from ..broadcasting.broadcaster import Broadcaster
from ..broadcasting.events import PdfExtractionCompleted
from ..core.enums import DocumentStatus
from ..core.exceptions import EmbeddingFailed, ExtractionFailed, ExtractionInProgress
from .collaborators import EmbeddingClient, SearchIndexer, TextExtractor
from .model import Document, EmbeddingResult, PipelineOutcome, PipelineResult
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """Extract -> embed -> persist -> index -> notify, for one approved document.

    Extraction and persistence decide success; embedding and indexing are
    best effort. A run never leaves the document in ``processing``.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        extractor: TextExtractor,
        embedder: EmbeddingClient,
        indexer: SearchIndexer,
        broadcaster: Broadcaster,
        *,
        storage_dir: str | Path = ".",
    ):
        self._documents = documents
        self._extractor = extractor
        self._embedder = embedder
        self._indexer = indexer
        self._broadcaster = broadcaster
        self._storage_dir = Path(storage_dir)

    def run(self, document_id: int) -> PipelineOutcome:
        document = self._documents.get_by_id(int(document_id))
        if not document:
            logger.warning("Document %s not found, extraction skipped", document_id)
            return PipelineOutcome(document_id=document_id, result=PipelineResult.SKIPPED, error="not found")

        if document.status != DocumentStatus.APPROVED:
            logger.info("Document %s is %s, extraction skipped", document_id, document.status.value)
            return PipelineOutcome(document_id=document_id, result=PipelineResult.SKIPPED, error="not approved")

        try:
            self._begin(document_id)
        except ExtractionInProgress as e:
            logger.warning("Document %s: %s", document_id, e)
            return PipelineOutcome(document_id=document_id, result=PipelineResult.SKIPPED, error=str(e))

        logger.info("Document %s: extraction started (%s)", document_id, document.file_name)
        try:
            content = self._extract(document)
            embedding = self._embed(document_id, content)
            self._documents.save_extraction(document_id, content=content, embedding=embedding.vector)
        except ExtractionFailed as e:
            self._mark_failed(document_id)
            logger.warning("Document %s: extraction failed: %s", document_id, e)
            return PipelineOutcome(document_id=document_id, result=PipelineResult.FAILED, error=str(e))
        except Exception as e:
            self._mark_failed(document_id)
            logger.error("Document %s: extraction job failed: %s", document_id, e, exc_info=True)
            return PipelineOutcome(document_id=document_id, result=PipelineResult.FAILED, error=str(e))

        result = PipelineResult.COMPLETED if embedding.ok else PipelineResult.DEGRADED
        logger.info(
            "Document %s: extraction completed, %s chars, embedding=%s",
            document_id,
            len(content),
            "yes" if embedding.ok else "no",
        )

        indexed = self._index_and_notify(document_id)
        return PipelineOutcome(document_id=document_id, result=result, indexed=indexed, error=embedding.error)

    def _begin(self, document_id: int) -> None:
        if not self._documents.begin_extraction(document_id):
            raise ExtractionInProgress("Extraction already in progress, run skipped.")

    def _extract(self, document: Document) -> str:
        text = self._extractor.extract_text(document, self._storage_dir / document.stored_name)
        if not text or not text.strip():
            raise ExtractionFailed("No content could be extracted.")
        return text

    def _embed(self, document_id: int, content: str) -> EmbeddingResult:
        try:
            vector = self._embedder.embed(content)
        except EmbeddingFailed as e:
            logger.warning("Document %s: embedding failed, continuing without it: %s", document_id, e)
            return EmbeddingResult(error=str(e))
        if not vector:
            logger.warning("Document %s: embedding was empty, continuing without it", document_id)
            return EmbeddingResult(error="empty embedding")
        return EmbeddingResult(vector=list(vector))

    def _mark_failed(self, document_id: int) -> None:
        try:
            self._documents.mark_failed(document_id)
        except Exception:
            # Left in processing; a later run takes it over once stale.
            logger.exception("Document %s: could not record the failed extraction", document_id)

    def _index_and_notify(self, document_id: int) -> bool:
        try:
            document = self._documents.get_by_id(document_id)
            self._indexer.index(document)
        except Exception as e:
            logger.error("Document %s: indexing failed, left unsearchable: %s", document_id, e)
            return False

        try:
            self._broadcaster.publish(PdfExtractionCompleted(document))
        except Exception:
            logger.exception("Document %s: completion notification failed", document_id)
        return True
