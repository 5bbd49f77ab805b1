from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceSetting


class AttendanceSettingRepository(Protocol):
    def get_active(self) -> Optional[AttendanceSetting]:
        """Most recently created settings row."""

        raise NotImplementedError

    def get_by_id(self, setting_id: int) -> Optional[AttendanceSetting]:
        raise NotImplementedError

    def exists(self) -> bool:
        raise NotImplementedError

    def create(self, setting: AttendanceSetting) -> int:
        raise NotImplementedError

    def update(self, setting: AttendanceSetting) -> None:
        raise NotImplementedError
