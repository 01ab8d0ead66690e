import datetime as dt

import pytest

from domain.constants import GRAY, GREEN, ORANGE, RED, TEAL, YELLOW
from domain.models import AttendanceEvent, AttendanceRecord, ClubMember
from services import attendance
from tests.conftest import FakeClient


def member(i, level="Level 1"):
    return ClubMember(id=f"m{i}", name=f"Dancer {i}", level=level)


def record(event_id, points, dancer_id=None, name="", level="", reviewed=None, from_request=False,
           status="present"):
    return AttendanceRecord(id=f"r-{event_id}-{dancer_id or name}", event_id=event_id, dancer_id=dancer_id,
                            dancer_name=name, dancer_level=level, status=status, points=points,
                            from_absence_request=from_request, reviewed_status=reviewed)


def test_find_record_prefers_id_then_name_and_level():
    m = member(1)
    by_name = record("e1", 1, name="Dancer 1", level="Level 1")
    by_id = record("e1", 2, dancer_id="m1")
    assert attendance.find_record([by_name, by_id], m, "e1") is by_id
    assert attendance.find_record([by_name], m, "e1") is by_name
    assert attendance.find_record([by_name], member(1, level="Level 2"), "e1") is None


def test_totals_and_practice_points():
    m = member(1)
    events = [
        AttendanceEvent(id="e1", name="Practice", date="2024-09-01", type="practice", points_value=1),
        AttendanceEvent(id="e2", name="Game", date="2024-09-02", type="game", points_value=2),
    ]
    records = [record("e1", 1, dancer_id="m1"), record("e2", 2, dancer_id="m1"), record("e1", 1, dancer_id="m2")]
    assert attendance.total_points(records, m) == 3
    assert attendance.practice_points_available(events) == 1
    assert attendance.practice_points_earned(records, events, m) == 1


@pytest.mark.parametrize("points,reviewed,from_request,coordinator,color", [
    (1, None, False, False, GREEN),
    (-1, None, False, False, RED),
    (-1, "approved-missing", True, False, ORANGE),
    (0, "approved-excused", True, False, TEAL),
    (0, "partial-excused", True, False, YELLOW),
    (-1, "denied-excused", True, False, RED),
    (0, "approved-missing", True, True, TEAL),
    (-1, "approved-missing", True, True, TEAL),
    (-1, "denied-excused", True, True, RED),
    (0, None, False, False, GRAY),
])
def test_point_cell_colors(points, reviewed, from_request, coordinator, color):
    r = record("e1", points, dancer_id="m1", reviewed=reviewed, from_request=from_request)
    _, cell_color, _ = attendance.point_cell(points, r, coordinator=coordinator)
    assert cell_color == color


def test_point_cell_labels_only_for_admin():
    r = record("e1", -1, dancer_id="m1", reviewed="approved-missing", from_request=True)
    assert attendance.point_cell(-1, r) == ("-1", ORANGE, "Pending Make-up")
    assert attendance.point_cell(-1, r, coordinator=True)[2] is None
    assert attendance.point_cell(0, None) == ("", GRAY, None)


def test_dancer_status():
    assert attendance.dancer_status(None) == (RED, "")
    assert attendance.dancer_status(record("e1", 1, status="present")) == (GREEN, "")
    excused = record("e1", 0, status="excused", reviewed="approved-excused", from_request=True)
    assert attendance.dancer_status(excused) == (TEAL, "Excused (0 pts, +2 max)")


def test_sort_members_and_events():
    members = [member(2, "Level 3"), member(1, "Level 1"), member(3, "Level 1")]
    assert [m.id for m in attendance.sort_members(members)] == ["m1", "m3", "m2"]
    events = [AttendanceEvent(id="old", name="a", date="2024-01-01"),
              AttendanceEvent(id="new", name="b", date="2024-05-01")]
    assert [e.id for e in attendance.sort_events(events, newest_first=True)] == ["new", "old"]


def test_point_sheet_frame_has_total_column():
    members = [member(1)]
    events = [AttendanceEvent(id="e1", name="Practice", date="2024-09-01")]
    frame = attendance.point_sheet_frame(members, events, [record("e1", 1, dancer_id="m1")])
    assert list(frame.columns) == ["Dancer", "Level", "Practice (Sep 01, 2024)", "Total"]
    assert frame.iloc[0]["Total"] == 1


def test_create_event_validates_and_posts():
    client = FakeClient()
    with pytest.raises(ValueError):
        attendance.create_event(client, "  ", dt.date(2024, 9, 1))
    with pytest.raises(ValueError):
        attendance.create_event(client, "Practice", dt.date(2024, 9, 1), event_type="party")
    attendance.create_event(client, " Practice ", dt.date(2024, 9, 1), dt.time(18, 0), "practice", 2)
    body = client.sent("POST", "/api/attendance/events")
    assert body == {"name": "Practice", "date": "2024-09-01T18:00", "type": "practice",
                    "pointsValue": 2, "description": ""}


def test_dancer_sheet_lookups():
    client = FakeClient({("GET", "/api/dancer/attendance"): {
        "dancer": {"name": "Dancer 1", "level": "Level 1"},
        "events": [{"id": "e1", "name": "P1", "date": "2024-09-01"}, {"id": "e2", "name": "P2", "date": "2024-09-08"}],
        "records": [{"id": "r1", "eventId": "e1", "points": 1}],
        "requests": [{"id": "q1", "eventId": "e2", "dancerName": "Dancer 1", "dancerLevel": "Level 1",
                      "requestType": "missing"}],
    }})
    sheet = attendance.dancer_sheet(client)
    assert [e.id for e in sheet.events] == ["e2", "e1"]
    assert sheet.points_for("e1") == 1
    assert sheet.points_for("e2") == 0
    assert sheet.request_for("e2").id == "q1"
    assert sheet.total_points == 1
