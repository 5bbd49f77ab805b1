from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from hr_portal.attendance.model import AttendanceRecord
from hr_portal.attendance_settings.model import AttendanceSetting
from hr_portal.biometrics.model import BiometricLog
from hr_portal.calendar_events.model import EventCategory
from hr_portal.container import assemble_container
from hr_portal.core.enums import AttendanceRemarks, ExtractionStatus, Role
from hr_portal.documents.model import Document
from hr_portal.employees.model import Employee
from hr_portal.main import create_app
from hr_portal.users.model import User

ADMIN_PASSWORD = "admin-secret"
EMPLOYEE_PASSWORD = "employee-secret"


class InMemoryUsers:
    def __init__(self, users):
        self._by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)


class InMemoryEmployees:
    def __init__(self, employees):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.employee_code == employee_code), None)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email), None)

    def list_active(self):
        return [e for e in self._by_id.values() if e.is_active]


class InMemorySettings:
    def __init__(self):
        self.rows: dict[int, AttendanceSetting] = {}
        self._id = 0

    def get_active(self) -> Optional[AttendanceSetting]:
        return self.rows[min(self.rows)] if self.rows else None

    def get_by_id(self, setting_id: int) -> Optional[AttendanceSetting]:
        return self.rows.get(setting_id)

    def exists(self) -> bool:
        return bool(self.rows)

    def create(self, setting: AttendanceSetting) -> int:
        self._id += 1
        self.rows[self._id] = replace(setting, setting_id=self._id)
        return self._id

    def update(self, setting: AttendanceSetting) -> None:
        self.rows[setting.setting_id] = setting


class InMemoryBiometricLogs:
    def __init__(self):
        self.rows: dict[int, BiometricLog] = {}
        self._id = 0
        self._lock = threading.Lock()

    def create(self, *, employee_code, scan_time, source) -> BiometricLog:
        with self._lock:
            self._id += 1
            log = BiometricLog(log_id=self._id, employee_code=employee_code, scan_time=scan_time, source=source)
            self.rows[self._id] = log
            return log

    def get_by_id(self, log_id: int) -> Optional[BiometricLog]:
        return self.rows.get(log_id)

    def delete_by_id(self, log_id: int) -> bool:
        return self.rows.pop(log_id, None) is not None

    def list_page(self, *, page: int, per_page: int):
        items = sorted(self.rows.values(), key=lambda log: (log.scan_time, log.log_id), reverse=True)
        start = (page - 1) * per_page
        return items[start : start + per_page], len(items)

    def list_between(self, *, start=None, end=None):
        items = sorted(self.rows.values(), key=lambda log: (log.scan_time, log.log_id))
        return [
            log
            for log in items
            if (start is None or log.scan_time.date() >= start) and (end is None or log.scan_time.date() <= end)
        ]


class InMemoryAttendance:
    def __init__(self):
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self.rows.values() if r.attendance_id == attendance_id), None)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.rows.get((employee_id, work_date))

    def list_for_date(self, work_date: date):
        return [r for (_, d), r in self.rows.items() if d == work_date]

    def apply_scan(self, *, employee_id, work_date, decide) -> AttendanceRecord:
        with self._lock:
            current = self.rows.get((employee_id, work_date))
            new = decide(current)
            if current is None:
                self._id += 1
                new = replace(new, attendance_id=self._id)
            else:
                new = replace(new, attendance_id=current.attendance_id)
            self.rows[(employee_id, work_date)] = new
            return new

    def create_if_absent(self, record: AttendanceRecord) -> bool:
        with self._lock:
            key = (record.employee_id, record.work_date)
            if key in self.rows:
                return False
            self._id += 1
            self.rows[key] = replace(record, attendance_id=self._id)
            return True

    def mark_missing_time_out(self, work_date: date) -> int:
        changed = 0
        for key, r in list(self.rows.items()):
            if key[1] != work_date or r.time_in is None or r.time_out is not None:
                continue
            if r.remarks == AttendanceRemarks.MISSING_TIME_OUT:
                continue
            self.rows[key] = replace(r, remarks=AttendanceRemarks.MISSING_TIME_OUT)
            changed += 1
        return changed

    def count_by_status(self, employee_id: int, *, status, start: date, end: date) -> int:
        return sum(
            1
            for (eid, d), r in self.rows.items()
            if eid == employee_id and r.status == status and start <= d <= end
        )


class InMemoryDocuments:
    def __init__(self, documents=(), *, stale_after=timedelta(minutes=30)):
        self.rows: dict[int, Document] = {d.document_id: d for d in documents}
        self.history: list[tuple[int, Optional[ExtractionStatus]]] = []
        self.updated_at: dict[int, datetime] = {}
        self.stale_after = stale_after

    def add(self, document: Document, *, updated_at: Optional[datetime] = None) -> Document:
        self.rows[document.document_id] = document
        self.updated_at[document.document_id] = updated_at or datetime.now()
        return document

    def _set(self, document_id: int, **changes) -> None:
        self.rows[document_id] = replace(self.rows[document_id], **changes)
        self.updated_at[document_id] = datetime.now()
        self.history.append((document_id, self.rows[document_id].extraction_status))

    def get_by_id(self, document_id: int) -> Optional[Document]:
        return self.rows.get(document_id)

    def begin_extraction(self, document_id: int) -> bool:
        if self.rows[document_id].extraction_status == ExtractionStatus.PROCESSING:
            touched = self.updated_at.get(document_id, datetime.now())
            if datetime.now() - touched <= self.stale_after:
                return False
        self._set(document_id, extraction_status=ExtractionStatus.PROCESSING)
        return True

    def save_extraction(self, document_id: int, *, content, embedding) -> None:
        self._set(
            document_id,
            content=content,
            embedding=list(embedding) if embedding else None,
            extraction_status=ExtractionStatus.COMPLETED,
        )

    def mark_failed(self, document_id: int) -> None:
        self._set(document_id, extraction_status=ExtractionStatus.FAILED)


class InMemoryCategories:
    def __init__(self):
        self.rows: dict[int, EventCategory] = {}
        self.event_counts: dict[int, int] = {}
        self._id = 0

    def get_by_id(self, category_id: int) -> Optional[EventCategory]:
        return self.rows.get(category_id)

    def name_taken(self, name: str, *, exclude_id=None) -> bool:
        return any(c.name == name and c.category_id != exclude_id for c in self.rows.values())

    def create(self, category: EventCategory) -> int:
        self._id += 1
        self.rows[self._id] = replace(category, category_id=self._id)
        return self._id

    def update(self, category: EventCategory) -> None:
        self.rows[category.category_id] = category

    def count_events(self, category_id: int) -> int:
        return self.event_counts.get(category_id, 0)

    def delete(self, category_id: int) -> None:
        self.rows.pop(category_id, None)


class FakeExtractor:
    def __init__(self, text="Employee handbook: leave policy and benefits."):
        self.text = text
        self.calls = []

    def extract_text(self, document, path):
        self.calls.append((document.document_id, path))
        if isinstance(self.text, Exception):
            raise self.text
        return self.text


class FakeEmbedder:
    def __init__(self, vector=(0.1, 0.2, 0.3)):
        self.vector = vector
        self.calls = []

    def embed(self, text):
        self.calls.append(text)
        if isinstance(self.vector, Exception):
            raise self.vector
        return list(self.vector) if self.vector is not None else []


class FakeIndexer:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.indexed = []

    def index(self, document):
        if self.error:
            raise self.error
        self.indexed.append(document)


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._rows = []
        self.rowcount = 0
        self.lastrowid = None

    def execute(self, sql, params=()):
        self._db.statements.append((" ".join(sql.split()), tuple(params)))
        reply = self._db.replies.pop(0) if self._db.replies else {}
        if isinstance(reply, Exception):
            raise reply
        self._rows = list(reply.get("rows", []))
        self.rowcount = reply.get("rowcount", len(self._rows))
        self.lastrowid = reply.get("lastrowid")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        self._db.closed += 1


class FakeConnectionFactory:
    """Stands in for DatabaseConnection.

    Each executed statement consumes the next reply: a dict with ``rows``,
    ``rowcount`` and ``lastrowid``, or an exception to raise.
    """

    def __init__(self, replies=()):
        self.replies = list(replies)
        self.statements = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0

    def connect(self, *, with_database=True):
        return FakeConnection(self)


@pytest.fixture
def admin_user():
    return User(
        user_id=1,
        name="Ada Admin",
        email="admin@hr.local",
        password_hash=generate_password_hash(ADMIN_PASSWORD),
    )


@pytest.fixture
def employee_user():
    return User(
        user_id=2,
        name="Eve Employee",
        email="employee@hr.local",
        password_hash=generate_password_hash(EMPLOYEE_PASSWORD),
    )


@pytest.fixture
def users(admin_user, employee_user):
    return InMemoryUsers([admin_user, employee_user])


@pytest.fixture
def employees():
    return InMemoryEmployees(
        [
            Employee(1, "EMP-0001", "Ada Admin", "admin@hr.local", Role.ADMIN),
            Employee(2, "EMP-0002", "Eve Employee", "employee@hr.local", Role.EMPLOYEE),
        ]
    )


@pytest.fixture
def settings_repo():
    return InMemorySettings()


@pytest.fixture
def logs_repo():
    return InMemoryBiometricLogs()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def documents_repo():
    return InMemoryDocuments()


@pytest.fixture
def categories_repo():
    return InMemoryCategories()


@pytest.fixture
def fake_db():
    return FakeConnectionFactory()


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def indexer():
    return FakeIndexer()


@pytest.fixture
def app_settings(tmp_path):
    return SimpleNamespace(
        ATTENDANCE_GRACE_MINUTES=0,
        DOCUMENT_STORAGE_DIR=str(tmp_path),
        EXTRACTION_WORKERS=0,
    )


@pytest.fixture
def office_hours(settings_repo):
    """08:00-22:00 policy, 60 minute uncounted break."""

    settings_repo.create(
        AttendanceSetting(
            setting_id=None,
            required_time_in=time(8, 0),
            required_time_out=time(22, 0),
            break_duration_minutes=60,
            break_is_counted=False,
        )
    )
    return settings_repo.get_active()


@pytest.fixture
def container(
    users,
    employees,
    settings_repo,
    attendance_repo,
    logs_repo,
    documents_repo,
    categories_repo,
    extractor,
    embedder,
    indexer,
    app_settings,
):
    return assemble_container(
        users_repo=users,
        employees_repo=employees,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        biometric_repo=logs_repo,
        documents_repo=documents_repo,
        categories_repo=categories_repo,
        extractor=extractor,
        embedder=embedder,
        indexer=indexer,
        settings=app_settings,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    resp = c.post("/login", json={"email": "admin@hr.local", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return c


@pytest.fixture
def employee_client(app):
    c = app.test_client()
    resp = c.post("/login", json={"email": "employee@hr.local", "password": EMPLOYEE_PASSWORD})
    assert resp.status_code == 200
    return c
