from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from .model import PipelineOutcome
from .pipeline import ExtractionPipeline

logger = logging.getLogger(__name__)


class ExtractionJobQueue:
    """Runs pipeline jobs off the request thread.

    With ``synchronous=True`` jobs run inline (used by tests and one-off scripts).
    """

    def __init__(self, pipeline: ExtractionPipeline, *, max_workers: int = 2, synchronous: bool = False):
        self._pipeline = pipeline
        self._synchronous = synchronous
        self._executor = None if synchronous else ThreadPoolExecutor(
            max_workers=max(1, int(max_workers)),
            thread_name_prefix="extraction",
        )

    def dispatch(self, document_id: int) -> Future:
        logger.info("Queued extraction for document %s", document_id)
        if self._executor is None:
            future: Future = Future()
            try:
                future.set_result(self._run(document_id))
            except Exception as e:
                future.set_exception(e)
            return future
        return self._executor.submit(self._run, document_id)

    def _run(self, document_id: int) -> PipelineOutcome:
        try:
            outcome = self._pipeline.run(document_id)
        except Exception:
            logger.exception("Extraction job for document %s crashed", document_id)
            raise
        logger.info(
            "Extraction job for document %s finished: %s (indexed=%s)",
            document_id,
            outcome.result.value,
            outcome.indexed,
        )
        return outcome

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
