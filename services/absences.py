"""
Absence requests and make-up submissions.

Dancers file a request for a missed event (missing practice or excused
absence) and may then submit make-up work. Admins review both; coordinators
see the ones for their own level.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from domain.constants import MAKEUP_POINTS_RANGE, REQUEST_TYPES
from domain.models import (
    AbsenceRequest, MakeUpSubmission, absence_request_from_dict, makeup_from_dict,
)
from services.api import ApiClient
from utils.formatting import to_data_url


@dataclass(frozen=True)
class ReviewOption:
    label: str
    status: str
    final_points: int


_REVIEW_OPTIONS = {
    "missing": [ReviewOption("Approve Missing (-1)", "approved", -1)],
    "excused": [
        ReviewOption("Approve Excused (0)", "approved", 0),
        ReviewOption("Partial (0)", "partial", 0),
        ReviewOption("Deny (-1)", "denied", -1),
    ],
}


def review_options(request_type: str) -> List[ReviewOption]:
    return _REVIEW_OPTIONS.get(request_type, [])


def list_requests(client: ApiClient, level: Optional[str] = None) -> List[AbsenceRequest]:
    data = client.get("/api/absence-requests", fallback="Failed to load absence requests")
    requests_ = [absence_request_from_dict(r) for r in data or []]
    if level:
        requests_ = [r for r in requests_ if r.dancer_level == level]
    return requests_


def list_makeups(client: ApiClient, level: Optional[str] = None) -> List[MakeUpSubmission]:
    data = client.get("/api/make-up-submissions", fallback="Failed to load make-up submissions")
    makeups = [makeup_from_dict(m) for m in data or []]
    if level:
        makeups = [m for m in makeups if m.dancer_level == level]
    return makeups


def submit_request(client: ApiClient, event_id: str, dancer_name: str, dancer_level: str,
                   request_type: str, reason: str = "", proof: Optional[bytes] = None,
                   proof_mime: str = "") -> Optional[str]:
    """File an absence request; returns the new request id when the server reports one."""
    if not event_id or not (dancer_name or "").strip() or not (dancer_level or "").strip():
        raise ValueError("Please fill in all required fields")
    if request_type not in REQUEST_TYPES:
        raise ValueError(f"Unknown request type: {request_type}")
    if request_type == "excused" and not proof:
        raise ValueError("Please upload proof for excused absence")
    data = client.post("/api/absence-requests", json={
        "eventId": event_id,
        "dancerName": dancer_name.strip(),
        "dancerLevel": dancer_level.strip(),
        "requestType": request_type,
        "reason": (reason or "").strip(),
        "proofUrl": to_data_url(proof, proof_mime) if proof else "",
    }, fallback="Failed to submit absence request. Please try again.")
    if isinstance(data, dict):
        return data.get("id")
    if isinstance(data, str):
        return data
    return None


def submit_makeup_file(client: ApiClient, event_id: str, dancer_name: str, dancer_level: str,
                       file_name: str, file_bytes: bytes, mime_type: str,
                       sent_to_coordinator: bool, absence_request_id: Optional[str] = None) -> None:
    """Multipart upload used by the public absence page."""
    if not sent_to_coordinator:
        raise ValueError("Please confirm you have sent the make-up to your coordinator")
    if not file_bytes:
        raise ValueError("Please upload your make-up work")
    client.post("/api/make-up-submissions", files={
        "makeUpFile": (file_name, file_bytes, mime_type or "application/octet-stream"),
    }, data={
        "absenceRequestId": absence_request_id or "pending",
        "eventId": event_id or "",
        "dancerName": dancer_name.strip(),
        "dancerLevel": dancer_level.strip(),
        "sentToCoordinator": "true",
    }, fallback="Failed to submit make-up")


def submit_makeup_inline(client: ApiClient, event_id: str, request: Optional[AbsenceRequest],
                         dancer: Dict[str, Any], file_bytes: Optional[bytes], mime_type: str,
                         sent_to_coordinator: bool) -> None:
    """JSON submission from the dancer's own attendance page, file sent as a data URL."""
    if not sent_to_coordinator:
        raise ValueError("Please confirm you have sent the make-up to your coordinator")
    if request is None:
        raise ValueError("No absence request found for this event")
    client.post("/api/make-up-submissions", json={
        "absenceRequestId": request.id,
        "eventId": event_id,
        "dancerName": dancer.get("name") or request.dancer_name,
        "dancerLevel": dancer.get("level") or request.dancer_level,
        "makeUpUrl": to_data_url(file_bytes, mime_type) if file_bytes else "",
        "sentToCoordinator": True,
    }, fallback="Failed to submit make-up work")


def review_request(client: ApiClient, request_id: str, option: ReviewOption) -> None:
    client.put(f"/api/absence-requests/{request_id}",
               json={"status": option.status, "finalPoints": option.final_points},
               fallback="Failed to update absence request")


def clamp_makeup_points(points) -> int:
    low, high = MAKEUP_POINTS_RANGE
    try:
        value = int(points)
    except (TypeError, ValueError):
        value = 1
    return max(low, min(high, value))


def review_makeup(client: ApiClient, submission_id: str, approved: bool, points=1) -> None:
    client.put(f"/api/make-up-submissions/{submission_id}", json={
        "approved": approved,
        "pointsAwarded": clamp_makeup_points(points) if approved else 0,
    }, fallback="Failed to update make-up submission")
