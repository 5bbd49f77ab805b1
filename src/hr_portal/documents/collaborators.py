"""HTTP-backed collaborators used by the extraction pipeline.

Each one is a black box behind a small Protocol so tests can swap in fakes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol

import requests

from ..core.constants import DEFAULT_EMBEDDING_MAX_CHARS, DEFAULT_EMBEDDING_MODEL, DEFAULT_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import EmbeddingFailed, IndexingFailed
from .model import Document

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

SUPPORTED_MIME_TYPES = frozenset({PDF_MIME, DOCX_MIME, PPTX_MIME})

# Spreadsheets are stored but never extracted.
EXCLUDED_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-excel",
    }
)


def is_extractable(mime_type: str) -> bool:
    return mime_type in SUPPORTED_MIME_TYPES and mime_type not in EXCLUDED_MIME_TYPES


class TextExtractor(Protocol):
    def extract_text(self, document: Document, path: Path) -> Optional[str]:
        raise NotImplementedError


class EmbeddingClient(Protocol):
    def embed(self, text: str) -> List[float]:
        raise NotImplementedError


class SearchIndexer(Protocol):
    def index(self, document: Document) -> None:
        raise NotImplementedError


def _auth_headers(api_key: Optional[str]) -> dict:
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


class HttpTextExtractor:
    """Uploads the stored file to an extraction service and returns its text."""

    def __init__(self, api_url: str, *, api_key: Optional[str] = None, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS):
        self._api_url = api_url
        self._api_key = api_key
        self._timeout = timeout

    def extract_text(self, document: Document, path: Path) -> Optional[str]:
        if document.mime_type in EXCLUDED_MIME_TYPES:
            logger.info("Document %s: %s is excluded from extraction", document.document_id, document.mime_type)
            return None
        if not is_extractable(document.mime_type):
            logger.warning("Document %s: unsupported mime type %s", document.document_id, document.mime_type)
            return None

        path = Path(path)
        if not path.is_file():
            logger.error("Document %s: stored file not found at %s", document.document_id, path)
            return None

        with path.open("rb") as fh:
            resp = requests.post(
                self._api_url,
                files={"file": (document.file_name, fh, document.mime_type)},
                headers=_auth_headers(self._api_key),
                timeout=self._timeout,
            )
        resp.raise_for_status()

        text = (resp.json() or {}).get("text")
        if not isinstance(text, str):
            return None
        return text.strip() or None


class HttpEmbeddingClient:
    """OpenAI-compatible ``/embeddings`` client."""

    def __init__(
        self,
        api_url: str,
        *,
        api_key: Optional[str] = None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        max_chars: int = DEFAULT_EMBEDDING_MAX_CHARS,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ):
        self._url = api_url.rstrip("/") + "/embeddings"
        self._api_key = api_key
        self._model = model
        self._max_chars = int(max_chars)
        self._timeout = timeout

    def embed(self, text: str) -> List[float]:
        try:
            resp = requests.post(
                self._url,
                json={"model": self._model, "input": text[: self._max_chars]},
                headers=_auth_headers(self._api_key),
                timeout=self._timeout,
            )
            resp.raise_for_status()
            vector = resp.json()["data"][0]["embedding"]
        except requests.RequestException as e:
            raise EmbeddingFailed(f"Embedding request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise EmbeddingFailed(f"Unexpected embedding response: {e}") from e

        if not vector:
            raise EmbeddingFailed("Embedding response was empty.")
        return [float(x) for x in vector]


class MeilisearchIndexer:
    """Pushes documents into a Meilisearch index over its REST API."""

    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        index_name: str = "documents",
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ):
        self._url = f"{url.rstrip('/')}/indexes/{index_name}/documents"
        self._api_key = api_key
        self._timeout = timeout

    def index(self, document: Document) -> None:
        try:
            resp = requests.post(
                self._url,
                params={"primaryKey": "id"},
                json=[document.to_search_document()],
                headers=_auth_headers(self._api_key),
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise IndexingFailed(f"Indexing request failed: {e}") from e
