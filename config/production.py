import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ATTENDANCE_GRACE_MINUTES = int(os.getenv("ATTENDANCE_GRACE_MINUTES", "0"))
# No defaults: scans fail with 503 until attendance settings are created.
ATTENDANCE_DEFAULT_TIME_IN = os.getenv("ATTENDANCE_DEFAULT_TIME_IN")
ATTENDANCE_DEFAULT_TIME_OUT = os.getenv("ATTENDANCE_DEFAULT_TIME_OUT")
ATTENDANCE_DEFAULT_BREAK_MINUTES = int(os.getenv("ATTENDANCE_DEFAULT_BREAK_MINUTES", "0"))
ATTENDANCE_DEFAULT_BREAK_IS_COUNTED = bool(int(os.getenv("ATTENDANCE_DEFAULT_BREAK_IS_COUNTED", "0")))

DOCUMENT_STORAGE_DIR = os.getenv("DOCUMENT_STORAGE_DIR", "/var/lib/hr_portal/documents")
EXTRACTION_API_URL = os.getenv("EXTRACTION_API_URL", "")
EXTRACTION_API_KEY = os.getenv("EXTRACTION_API_KEY")
EMBEDDING_API_URL = os.getenv("EMBEDDING_API_URL", "https://api.openai.com/v1")
EMBEDDING_API_KEY = os.getenv("EMBEDDING_API_KEY")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-large")
EMBEDDING_MAX_CHARS = int(os.getenv("EMBEDDING_MAX_CHARS", "30000"))
SEARCH_URL = os.getenv("SEARCH_URL", "")
SEARCH_API_KEY = os.getenv("SEARCH_API_KEY")
EXTRACTION_WORKERS = int(os.getenv("EXTRACTION_WORKERS", "4"))
