"""
Attendance events, records and the point sheet.

The server owns the records and their point values; this module fetches them
and derives everything the attendance tables need (per-cell points, colours,
totals), keeping the view layer focused on rendering.
"""
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from domain.constants import (
    EVENT_TYPES, DEFAULT_EVENT_COLOR, LEVEL_COLORS, DEFAULT_LEVEL_COLOR, LEVELS,
    GREEN, TEAL, YELLOW, ORANGE, RED, GRAY,
)
from domain.models import (
    AttendanceEvent, AttendanceRecord, AbsenceRequest, ClubMember,
    event_from_dict, record_from_dict, absence_request_from_dict, club_member_from_dict,
)
from services.api import ApiClient
from utils.dates import combine_date_time, event_datetime, format_date


# --- API calls ---

def list_club_members(client: ApiClient) -> List[ClubMember]:
    data = client.get("/api/club-members", fallback="Failed to load club members")
    return [club_member_from_dict(m) for m in data or []]


def delete_club_member(client: ApiClient, member_id: str) -> None:
    client.delete(f"/api/club-members/{member_id}", fallback="Failed to remove dancer")


def list_events(client: ApiClient) -> List[AttendanceEvent]:
    data = client.get("/api/attendance/events", fallback="Failed to load events")
    return [event_from_dict(e) for e in data or []]


def get_event(client: ApiClient, event_id: str) -> AttendanceEvent:
    return event_from_dict(client.get(f"/api/attendance/events/{event_id}",
                                      fallback="Event not found"))


def create_event(client: ApiClient, name: str, date: dt.date, time: Optional[dt.time] = None,
                 event_type: str = "practice", points_value: int = 1,
                 description: str = "") -> Dict[str, Any]:
    if not (name or "").strip() or date is None:
        raise ValueError("Event name and date are required")
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")
    return client.post("/api/attendance/events", json={
        "name": name.strip(),
        "date": combine_date_time(date, time),
        "type": event_type,
        "pointsValue": int(points_value),
        "description": (description or "").strip(),
    }, fallback="Failed to create event")


def delete_event(client: ApiClient, event_id: str) -> None:
    client.delete(f"/api/attendance/events/{event_id}", fallback="Failed to delete event")


def list_records(client: ApiClient) -> List[AttendanceRecord]:
    data = client.get("/api/attendance/records", fallback="Failed to load attendance records")
    return [record_from_dict(r) for r in data or []]


def check_in(client: ApiClient, event_id: str) -> None:
    """Dancer self check-in from the QR code page; identity comes from the token."""
    client.post("/api/attendance/records", json={"eventId": event_id, "status": "present"},
                fallback="Failed to submit attendance. Please try again.")


def initial_attendance(members: List[ClubMember]) -> Dict[str, str]:
    return {m.id: "present" for m in members}


def bulk_update(client: ApiClient, event_id: str, attendance_data: Dict[str, str]) -> None:
    client.post("/api/attendance/bulk-update",
                json={"eventId": event_id, "attendanceData": attendance_data},
                fallback="Failed to record attendance")


@dataclass
class DancerSheet:
    dancer: Dict[str, Any]
    events: List[AttendanceEvent] = field(default_factory=list)
    records: List[AttendanceRecord] = field(default_factory=list)
    requests: List[AbsenceRequest] = field(default_factory=list)

    def record_for(self, event_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in self.records if r.event_id == event_id), None)

    def request_for(self, event_id: str) -> Optional[AbsenceRequest]:
        return next((r for r in self.requests if r.event_id == event_id), None)

    def points_for(self, event_id: str):
        record = self.record_for(event_id)
        return record.points if record else 0

    @property
    def total_points(self):
        return sum(r.points for r in self.records)


def dancer_sheet(client: ApiClient) -> DancerSheet:
    """The signed-in dancer's own events, records and absence requests."""
    data = client.get("/api/dancer/attendance", fallback="Failed to load attendance data")
    return DancerSheet(
        dancer=data.get("dancer") or {},
        events=sort_events([event_from_dict(e) for e in data.get("events") or []], newest_first=True),
        records=[record_from_dict(r) for r in data.get("records") or []],
        requests=[absence_request_from_dict(r) for r in data.get("requests") or []],
    )


# --- Presentation helpers ---

def event_type_color(event_type: str) -> str:
    return EVENT_TYPES.get(event_type, {}).get("color", DEFAULT_EVENT_COLOR)


def event_type_label(event_type: str) -> str:
    return EVENT_TYPES.get(event_type, {}).get("label", event_type)


def level_color(level: str) -> str:
    return LEVEL_COLORS.get(level, DEFAULT_LEVEL_COLOR)


def level_order(level: str) -> int:
    return LEVELS.index(level) + 1 if level in LEVELS else len(LEVELS) + 1


def sort_events(events: List[AttendanceEvent], newest_first: bool = False) -> List[AttendanceEvent]:
    return sorted(events, key=lambda e: event_datetime(e.date), reverse=newest_first)


def sort_members(members: List[ClubMember]) -> List[ClubMember]:
    return sorted(members, key=lambda m: (level_order(m.level), m.name.lower()))


def members_for_level(members: List[ClubMember], level: str) -> List[ClubMember]:
    return [m for m in members if m.level == level]


def find_record(records: List[AttendanceRecord], member: ClubMember,
                event_id: str) -> Optional[AttendanceRecord]:
    """Match by dancer id first, then by name and level (QR check-ins carry no id)."""
    for r in records:
        if r.dancer_id == member.id and r.event_id == event_id:
            return r
    for r in records:
        if r.dancer_name == member.name and r.dancer_level == member.level and r.event_id == event_id:
            return r
    return None


def _belongs_to(record: AttendanceRecord, member: ClubMember) -> bool:
    return record.dancer_id == member.id or (
        record.dancer_name == member.name and record.dancer_level == member.level)


def total_points(records: List[AttendanceRecord], member: ClubMember):
    return sum(r.points for r in records if _belongs_to(r, member))


def practice_points_available(events: List[AttendanceEvent]) -> int:
    return sum(e.points_value or 0 for e in events if e.type == "practice")


def practice_points_earned(records: List[AttendanceRecord], events: List[AttendanceEvent],
                           member: ClubMember):
    practice_ids = {e.id for e in events if e.type == "practice"}
    return sum(r.points for r in records if r.event_id in practice_ids and _belongs_to(r, member))


_ADMIN_REVIEW_COLORS = {
    "approved-missing": ORANGE,
    "approved-excused": TEAL,
    "partial-excused": YELLOW,
    "denied-excused": RED,
}
_ADMIN_REVIEW_LABELS = {
    "approved-missing": "Pending Make-up",
    "approved-excused": "Can earn 2 make-up",
    "partial-excused": "Can earn 1 make-up",
    "denied-excused": "Can earn 1 make-up",
}
_COORDINATOR_ZERO_COLORS = {
    "approved-missing": TEAL,
    "partial-excused": YELLOW,
    "denied-excused": RED,
}


def point_cell(points, record: Optional[AttendanceRecord],
               coordinator: bool = False) -> Tuple[str, str, Optional[str]]:
    """Text, background colour and optional review label for one sheet cell."""
    from_request = bool(record and record.from_absence_request)
    reviewed = (record.reviewed_status if record else None) or ""
    label = _ADMIN_REVIEW_LABELS.get(reviewed) if from_request and not coordinator else None
    if points > 0:
        return f"+{points:g}", GREEN, label
    if points == 0 and from_request:
        if coordinator:
            return "0", _COORDINATOR_ZERO_COLORS.get(reviewed, GRAY), None
        return "0", _ADMIN_REVIEW_COLORS.get(reviewed, GRAY), label
    if points < 0:
        if not from_request:
            return f"{points:g}", RED, None
        if coordinator:
            return f"{points:g}", TEAL if "approved" in reviewed else RED, None
        return f"{points:g}", _ADMIN_REVIEW_COLORS.get(reviewed, GRAY), label
    return "", GRAY, None


_DANCER_STATUS_LABELS = {
    "approved-missing": "Excused (-1 pt)",
    "approved-excused": "Excused (0 pts, +2 max)",
    "partial-excused": "Partial (0 pts, +1 max)",
    "denied-excused": "Denied (-1 pt, +1 max)",
}


def dancer_status(record: Optional[AttendanceRecord]) -> Tuple[str, str]:
    """Colour and label of an event row on the dancer's own point sheet."""
    if record is None:
        return RED, ""
    if record.status in ("present", "present-approved"):
        return GREEN, ""
    if record.from_absence_request:
        reviewed = record.reviewed_status or ""
        label = _DANCER_STATUS_LABELS.get(reviewed, "")
        if reviewed in ("approved-missing", "approved-excused"):
            return TEAL, label
        if reviewed == "partial-excused":
            return YELLOW, label
        return RED, label
    return RED, ""


def point_sheet_frame(members: List[ClubMember], events: List[AttendanceEvent],
                      records: List[AttendanceRecord]) -> pd.DataFrame:
    """Member x event grid of points with a running total column."""
    rows = []
    for m in members:
        row = {"Dancer": m.name, "Level": m.level}
        for e in events:
            record = find_record(records, m, e.id)
            row[f"{e.name} ({format_date(e.date)})"] = record.points if record else 0
        row["Total"] = total_points(records, m)
        rows.append(row)
    columns = ["Dancer", "Level"] + [f"{e.name} ({format_date(e.date)})" for e in events] + ["Total"]
    return pd.DataFrame(rows, columns=columns)
