import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ATTENDANCE_GRACE_MINUTES = 0
ATTENDANCE_DEFAULT_TIME_IN = None
ATTENDANCE_DEFAULT_TIME_OUT = None
ATTENDANCE_DEFAULT_BREAK_MINUTES = 0
ATTENDANCE_DEFAULT_BREAK_IS_COUNTED = False

DOCUMENT_STORAGE_DIR = os.getenv("DOCUMENT_STORAGE_DIR", "storage/documents")
EXTRACTION_API_URL = "http://extractor.invalid/extract"
EXTRACTION_API_KEY = None
EMBEDDING_API_URL = "http://embeddings.invalid/v1"
EMBEDDING_API_KEY = None
EMBEDDING_MODEL = "text-embedding-3-large"
EMBEDDING_MAX_CHARS = 30000
SEARCH_URL = "http://search.invalid"
SEARCH_API_KEY = None
# Jobs run inline so tests can assert on the outcome.
EXTRACTION_WORKERS = 0
