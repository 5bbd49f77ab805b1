import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

ATTENDANCE_GRACE_MINUTES = int(os.getenv("ATTENDANCE_GRACE_MINUTES", "0"))
# Used only while no attendance settings row exists.
ATTENDANCE_DEFAULT_TIME_IN = os.getenv("ATTENDANCE_DEFAULT_TIME_IN", "08:00")
ATTENDANCE_DEFAULT_TIME_OUT = os.getenv("ATTENDANCE_DEFAULT_TIME_OUT", "17:00")
ATTENDANCE_DEFAULT_BREAK_MINUTES = int(os.getenv("ATTENDANCE_DEFAULT_BREAK_MINUTES", "60"))
ATTENDANCE_DEFAULT_BREAK_IS_COUNTED = bool(int(os.getenv("ATTENDANCE_DEFAULT_BREAK_IS_COUNTED", "0")))

DOCUMENT_STORAGE_DIR = os.getenv("DOCUMENT_STORAGE_DIR", "storage/documents")
EXTRACTION_API_URL = os.getenv("EXTRACTION_API_URL", "http://localhost:8001/extract")
EXTRACTION_API_KEY = os.getenv("EXTRACTION_API_KEY")
EMBEDDING_API_URL = os.getenv("EMBEDDING_API_URL", "https://api.openai.com/v1")
EMBEDDING_API_KEY = os.getenv("EMBEDDING_API_KEY")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-large")
EMBEDDING_MAX_CHARS = int(os.getenv("EMBEDDING_MAX_CHARS", "30000"))
SEARCH_URL = os.getenv("SEARCH_URL", "http://localhost:7700")
SEARCH_API_KEY = os.getenv("SEARCH_API_KEY")
EXTRACTION_WORKERS = int(os.getenv("EXTRACTION_WORKERS", "2"))
