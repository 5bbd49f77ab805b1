"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Device/platform capture window, independent of the configured work hours.
SCAN_WINDOW_START = time(6, 0)
SCAN_WINDOW_END = time(20, 0)
OUT_OF_WINDOW_MESSAGE = "Scan falls outside the supported time window (06:00-20:00)."

DEFAULT_LATE_GRACE_MINUTES = 0
SCAN_TRANSACTION_ATTEMPTS = 3

BIOMETRIC_LOGS_PER_PAGE = 20

ADMIN_EXTRACTION_CHANNEL = "admin.pdf-extraction"
EXTRACTION_COMPLETED_EVENT = "PdfExtractionCompleted"

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-large"
DEFAULT_EMBEDDING_MAX_CHARS = 30000
DEFAULT_HTTP_TIMEOUT_SECONDS = 120
