import pytest

from domain.models import AbsenceRequest
from services import absences
from tests.conftest import FakeClient


def test_review_options_depend_on_request_type():
    missing = absences.review_options("missing")
    assert [(o.status, o.final_points) for o in missing] == [("approved", -1)]
    excused = absences.review_options("excused")
    assert [(o.status, o.final_points) for o in excused] == [("approved", 0), ("partial", 0), ("denied", -1)]
    assert absences.review_options("unknown") == []


def test_excused_request_needs_proof():
    client = FakeClient()
    with pytest.raises(ValueError, match="proof"):
        absences.submit_request(client, "e1", "Dancer 1", "Level 1", "excused")
    with pytest.raises(ValueError, match="required"):
        absences.submit_request(client, "e1", " ", "Level 1", "missing")
    assert client.calls == []


def test_submit_request_returns_new_id_and_inlines_proof():
    client = FakeClient({("POST", "/api/absence-requests"): {"id": "q9"}})
    request_id = absences.submit_request(client, "e1", " Dancer 1 ", "Level 1", "excused",
                                         "doctor", b"img", "image/png")
    assert request_id == "q9"
    body = client.sent("POST", "/api/absence-requests")
    assert body["dancerName"] == "Dancer 1"
    assert body["proofUrl"].startswith("data:image/png;base64,")


def test_makeup_requires_coordinator_confirmation():
    client = FakeClient()
    with pytest.raises(ValueError, match="coordinator"):
        absences.submit_makeup_file(client, "e1", "Dancer 1", "Level 1", "work.pdf", b"x", "application/pdf",
                                    sent_to_coordinator=False)
    with pytest.raises(ValueError, match="upload"):
        absences.submit_makeup_file(client, "e1", "Dancer 1", "Level 1", "", b"", "", sent_to_coordinator=True)


def test_multipart_makeup_defaults_to_pending_request():
    client = FakeClient()
    absences.submit_makeup_file(client, "e1", "Dancer 1", "Level 1", "work.pdf", b"x", "application/pdf", True)
    _, _, kwargs = client.calls[-1]
    assert kwargs["data"]["absenceRequestId"] == "pending"
    assert kwargs["data"]["sentToCoordinator"] == "true"
    assert kwargs["files"]["makeUpFile"][0] == "work.pdf"


def test_inline_makeup_needs_an_absence_request():
    client = FakeClient()
    with pytest.raises(ValueError, match="No absence request"):
        absences.submit_makeup_inline(client, "e1", None, {}, b"x", "image/png", True)
    req = AbsenceRequest(id="q1", event_id="e1", dancer_name="Dancer 1", dancer_level="Level 1",
                         request_type="missing")
    absences.submit_makeup_inline(client, "e1", req, {}, b"x", "image/png", True)
    body = client.sent("POST", "/api/make-up-submissions")
    assert body["absenceRequestId"] == "q1"
    assert body["dancerLevel"] == "Level 1"


@pytest.mark.parametrize("raw,expected", [(3, 3), (-2, 0), (25, 10), ("7", 7), (None, 1)])
def test_clamp_makeup_points(raw, expected):
    assert absences.clamp_makeup_points(raw) == expected


def test_denied_makeup_awards_no_points():
    client = FakeClient()
    absences.review_makeup(client, "s1", approved=False, points=5)
    assert client.sent("PUT", "/api/make-up-submissions/s1") == {"approved": False, "pointsAwarded": 0}


def test_list_requests_filters_by_level():
    client = FakeClient({("GET", "/api/absence-requests"): [
        {"id": "a", "dancerLevel": "Level 1"}, {"id": "b", "dancerLevel": "Level 2"},
    ]})
    assert [r.id for r in absences.list_requests(client, level="Level 2")] == ["b"]
    assert len(absences.list_requests(client)) == 2
