"""Per-row attendance state machine.

A row moves EMPTY -> CHECKED_IN -> COMPLETE, one scan per step. A row with no
time in (e.g. an Absent placeholder written by day finalization) is EMPTY.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .model import AttendanceRecord


class AttendanceState(str, Enum):
    EMPTY = "empty"
    CHECKED_IN = "checked_in"
    COMPLETE = "complete"


# COMPLETE has no outgoing transition: further scans are rejected.
TRANSITIONS = {
    AttendanceState.EMPTY: AttendanceState.CHECKED_IN,
    AttendanceState.CHECKED_IN: AttendanceState.COMPLETE,
}


def state_of(record: Optional[AttendanceRecord]) -> AttendanceState:
    if record is None or record.time_in is None:
        return AttendanceState.EMPTY
    if record.time_out is None:
        return AttendanceState.CHECKED_IN
    return AttendanceState.COMPLETE


def next_state(record: Optional[AttendanceRecord]) -> Optional[AttendanceState]:
    return TRANSITIONS.get(state_of(record))
