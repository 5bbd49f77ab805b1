from datetime import time

from hr_portal.attendance.factory import AttendanceStrategyFactory
from hr_portal.attendance.model import AttendanceRecord
from hr_portal.attendance.strategies.late_strategy import LateStrategy
from hr_portal.attendance.strategies.normal_strategy import NormalStrategy
from hr_portal.attendance_settings.model import AttendanceSetting
from hr_portal.core.enums import AttendanceRemarks, AttendanceStatus

SETTINGS = AttendanceSetting(setting_id=1, required_time_in=time(8, 0), required_time_out=time(17, 0))


def test_factory_checkin_exactly_on_required_time_is_present():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(scan_time=time(8, 0), settings=SETTINGS)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(scan_time=time(8, 0), settings=SETTINGS).status == AttendanceStatus.PRESENT


def test_factory_checkin_one_minute_after_is_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(scan_time=time(8, 1), settings=SETTINGS)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(scan_time=time(8, 1), settings=SETTINGS).status == AttendanceStatus.LATE


def test_factory_checkin_within_grace_is_present():
    factory = AttendanceStrategyFactory(grace_minutes=5)

    assert isinstance(factory.for_checkin(scan_time=time(8, 5), settings=SETTINGS), NormalStrategy)
    assert isinstance(factory.for_checkin(scan_time=time(8, 6), settings=SETTINGS), LateStrategy)


def test_factory_checkout_keeps_late_status():
    record = AttendanceRecord(
        attendance_id=1,
        employee_id=1,
        work_date=None,
        time_in=time(8, 30),
        time_out=None,
        status=AttendanceStatus.LATE,
        remarks=AttendanceRemarks.INCOMPLETE,
    )
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(record=record, settings=SETTINGS)

    assert strategy.decide_checkout(record=record, settings=SETTINGS).status == AttendanceStatus.LATE
