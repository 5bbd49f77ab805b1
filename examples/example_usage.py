"""Example: drive the service layer directly, without Flask.

Controllers are thin; the attendance rules live in ``AttendanceResolver``.
"""

import importlib
from datetime import date, time

from dotenv import load_dotenv

from config import get_settings_module

from hr_portal.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    result = container.attendance_resolver.record_scan(
        work_date=date.today(),
        scan_time=time(8, 5),
        employee_code="EMP-0002",
    )
    print(result.outcome.value, result.attendance.to_dict() if result.attendance else None)


if __name__ == "__main__":
    main()
