from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceResolver
from .attendance.summary import AttendanceSummaryService
from .attendance_settings.model import AttendanceSetting
from .attendance_settings.mysql_settings_repository import MySQLAttendanceSettingRepository
from .attendance_settings.repository import AttendanceSettingRepository
from .attendance_settings.service import AttendanceSettingsService
from .biometrics.mysql_biometric_repository import MySQLBiometricLogRepository
from .biometrics.repository import BiometricLogRepository
from .biometrics.service import BiometricLogService
from .broadcasting.broadcaster import Broadcaster
from .broadcasting.channels import register_channels
from .calendar_events.mysql_calendar_repository import MySQLEventCategoryRepository
from .calendar_events.repository import EventCategoryRepository
from .calendar_events.service import CalendarService
from .common.datetime_utils import parse_hhmm
from .database.connection import DBConfig, DatabaseConnection
from .documents.collaborators import (
    EmbeddingClient,
    HttpEmbeddingClient,
    HttpTextExtractor,
    MeilisearchIndexer,
    SearchIndexer,
    TextExtractor,
)
from .documents.jobs import ExtractionJobQueue
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.pipeline import ExtractionPipeline
from .documents.repository import DocumentRepository
from .documents.service import DocumentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    settings_repo: AttendanceSettingRepository
    attendance_repo: AttendanceRepository
    biometric_repo: BiometricLogRepository
    documents_repo: DocumentRepository
    categories_repo: EventCategoryRepository

    auth_service: AuthService
    settings_service: AttendanceSettingsService
    attendance_resolver: AttendanceResolver
    attendance_summary: AttendanceSummaryService
    biometric_log_service: BiometricLogService
    broadcaster: Broadcaster
    extraction_pipeline: ExtractionPipeline
    extraction_jobs: ExtractionJobQueue
    document_service: DocumentService
    calendar_service: CalendarService


def _setting(settings: Any, name: str, default: Any = None) -> Any:
    return getattr(settings, name, default) if settings is not None else default


def fallback_attendance_setting(settings: Any) -> Optional[AttendanceSetting]:
    """Configured policy used while no attendance settings row exists."""

    time_in = _setting(settings, "ATTENDANCE_DEFAULT_TIME_IN")
    time_out = _setting(settings, "ATTENDANCE_DEFAULT_TIME_OUT")
    if not time_in or not time_out:
        return None
    return AttendanceSetting(
        setting_id=None,
        required_time_in=parse_hhmm(time_in, "ATTENDANCE_DEFAULT_TIME_IN"),
        required_time_out=parse_hhmm(time_out, "ATTENDANCE_DEFAULT_TIME_OUT"),
        break_duration_minutes=int(_setting(settings, "ATTENDANCE_DEFAULT_BREAK_MINUTES", 0)),
        break_is_counted=bool(_setting(settings, "ATTENDANCE_DEFAULT_BREAK_IS_COUNTED", False)),
    )


def assemble_container(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    settings_repo: AttendanceSettingRepository,
    attendance_repo: AttendanceRepository,
    biometric_repo: BiometricLogRepository,
    documents_repo: DocumentRepository,
    categories_repo: EventCategoryRepository,
    extractor: TextExtractor,
    embedder: EmbeddingClient,
    indexer: SearchIndexer,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories and collaborators."""

    auth_service = AuthService(users_repo, employees_repo)
    settings_service = AttendanceSettingsService(
        settings_repo,
        auth_service,
        fallback=fallback_attendance_setting(settings),
    )
    grace_minutes = int(_setting(settings, "ATTENDANCE_GRACE_MINUTES", 0))
    attendance_resolver = AttendanceResolver(
        attendance_repo,
        employees_repo,
        biometric_repo,
        settings_service,
        strategy_factory=AttendanceStrategyFactory(grace_minutes=grace_minutes),
    )
    attendance_summary = AttendanceSummaryService(attendance_repo, employees_repo, settings_service)
    biometric_log_service = BiometricLogService(biometric_repo)

    broadcaster = Broadcaster()
    register_channels(broadcaster, auth_service)

    extraction_pipeline = ExtractionPipeline(
        documents_repo,
        extractor,
        embedder,
        indexer,
        broadcaster,
        storage_dir=_setting(settings, "DOCUMENT_STORAGE_DIR", "."),
    )
    workers = int(_setting(settings, "EXTRACTION_WORKERS", 2))
    extraction_jobs = ExtractionJobQueue(extraction_pipeline, max_workers=workers, synchronous=workers <= 0)
    document_service = DocumentService(documents_repo, extraction_jobs)

    calendar_service = CalendarService(categories_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        biometric_repo=biometric_repo,
        documents_repo=documents_repo,
        categories_repo=categories_repo,
        auth_service=auth_service,
        settings_service=settings_service,
        attendance_resolver=attendance_resolver,
        attendance_summary=attendance_summary,
        biometric_log_service=biometric_log_service,
        broadcaster=broadcaster,
        extraction_pipeline=extraction_pipeline,
        extraction_jobs=extraction_jobs,
        document_service=document_service,
        calendar_service=calendar_service,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        settings_repo=MySQLAttendanceSettingRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        biometric_repo=MySQLBiometricLogRepository(conn),
        documents_repo=MySQLDocumentRepository(conn),
        categories_repo=MySQLEventCategoryRepository(conn),
        extractor=HttpTextExtractor(
            str(_setting(settings, "EXTRACTION_API_URL", "")),
            api_key=_setting(settings, "EXTRACTION_API_KEY"),
        ),
        embedder=HttpEmbeddingClient(
            str(_setting(settings, "EMBEDDING_API_URL", "")),
            api_key=_setting(settings, "EMBEDDING_API_KEY"),
            model=_setting(settings, "EMBEDDING_MODEL", "text-embedding-3-large"),
            max_chars=int(_setting(settings, "EMBEDDING_MAX_CHARS", 30000)),
        ),
        indexer=MeilisearchIndexer(
            str(_setting(settings, "SEARCH_URL", "")),
            api_key=_setting(settings, "SEARCH_API_KEY"),
        ),
        settings=settings,
    )
