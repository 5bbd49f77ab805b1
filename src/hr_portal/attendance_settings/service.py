from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_bool, require_non_negative_int
from ..core.exceptions import MissingConfigurationError, NotFoundError, ValidationError
from ..users.service import AuthService
from .model import AttendanceSetting
from .repository import AttendanceSettingRepository

logger = logging.getLogger(__name__)

CORE_FIELDS = ("required_time_in", "required_time_out", "break_duration_minutes", "break_is_counted")
THRESHOLD_FIELDS = (
    "late_threshold_warning",
    "late_threshold_memo",
    "absent_threshold_warning",
    "absent_threshold_memo",
)


def _clean_fields(payload: Mapping[str, Any], *, require_core: bool) -> dict:
    """Validate the submitted fields; omitted ones are left out of the result."""

    fields: dict = {}
    for name in CORE_FIELDS + THRESHOLD_FIELDS:
        if name not in payload:
            if require_core and name in CORE_FIELDS:
                raise ValidationError(f"The {name} field is required.", field=name)
            continue

        value = payload[name]
        if name in ("required_time_in", "required_time_out"):
            fields[name] = parse_hhmm(str(value) if value is not None else "", name)
        elif name == "break_is_counted":
            fields[name] = require_bool(value, name)
        else:
            fields[name] = require_non_negative_int(value, name)
    return fields


def _check_invariants(setting: AttendanceSetting) -> AttendanceSetting:
    if setting.required_time_out <= setting.required_time_in:
        raise ValidationError(
            "The required time out field must be a date after required time in.",
            field="required_time_out",
        )
    return setting


class AttendanceSettingsService:
    """Use cases: read and change the attendance policy.

    Every change re-confirms the acting user's password, because the policy
    drives late/present classification and worked hours for every employee.
    """

    def __init__(
        self,
        settings: AttendanceSettingRepository,
        auth: AuthService,
        *,
        fallback: Optional[AttendanceSetting] = None,
    ):
        self._settings = settings
        self._auth = auth
        self._fallback = fallback

    def get_active(self) -> Optional[AttendanceSetting]:
        return self._settings.get_active()

    def get(self, setting_id: int) -> AttendanceSetting:
        setting = self._settings.get_by_id(int(setting_id))
        if not setting:
            raise NotFoundError("Attendance settings not found.")
        return setting

    def resolve_for_scan(self) -> AttendanceSetting:
        """Settings value handed to the resolver for one scan.

        Falls back to the configured defaults; there is no built-in policy.
        """

        active = self._settings.get_active()
        if active:
            return active
        if self._fallback:
            return self._fallback
        raise MissingConfigurationError(
            "Attendance settings are not configured. Create them before recording attendance."
        )

    def create(self, *, user_id: int, payload: Mapping[str, Any]) -> AttendanceSetting:
        self._auth.confirm_password(user_id, payload.get("password"))

        if self._settings.exists():
            raise ValidationError("Attendance settings already exist. Please update the existing record.")

        fields = _clean_fields(payload, require_core=True)
        setting = _check_invariants(AttendanceSetting(setting_id=None, **fields))
        setting_id = self._settings.create(setting)

        logger.info("Attendance settings %s created by user_id=%s: %s", setting_id, user_id, fields)
        return replace(setting, setting_id=setting_id)

    def update(self, *, user_id: int, setting_id: int, payload: Mapping[str, Any]) -> AttendanceSetting:
        self._auth.confirm_password(user_id, payload.get("password"))

        current = self.get(setting_id)
        fields = _clean_fields(payload, require_core=False)
        updated = _check_invariants(replace(current, **fields))
        self._settings.update(updated)

        logger.info("Attendance settings %s updated by user_id=%s: %s", setting_id, user_id, fields)
        return updated
