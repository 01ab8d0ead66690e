from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any


def _get(d: Dict[str, Any], *keys, default=None):
    """Return the first present key (API payloads mix camelCase and legacy names)."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


@dataclass
class SessionUser:
    id: str
    email: str
    role: str
    name: str = ""
    position: Optional[str] = None
    level: Optional[str] = None
    club_id: Optional[str] = None
    can_access_admin: bool = False
    requires_password_change: bool = False


def session_user_from_dict(d: Dict[str, Any]) -> SessionUser:
    """Build the signed-in user from a login response `user` object."""
    return SessionUser(
        id=str(_get(d, "id", default="")),
        email=_get(d, "email", default=""),
        role=_get(d, "role", default=""),
        name=_get(d, "name", default=""),
        position=_get(d, "position"),
        level=_get(d, "level"),
        club_id=_get(d, "clubId"),
        can_access_admin=bool(_get(d, "canAccessAdmin", default=False)),
        requires_password_change=bool(
            _get(d, "requiresPasswordChange", default=False)),
    )


@dataclass
class AttendanceEvent:
    id: str
    name: str
    date: Any
    type: str = "practice"
    points_value: int = 1
    description: str = ""


def event_from_dict(d: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        date=d.get("date"),
        type=d.get("type") or "practice",
        points_value=int(_get(d, "pointsValue", default=1)),
        description=d.get("description") or "",
    )


@dataclass
class AttendanceRecord:
    id: str
    event_id: str
    dancer_id: Optional[str] = None
    dancer_name: str = ""
    dancer_level: str = ""
    status: str = "present"
    points: float = 0
    from_absence_request: bool = False
    reviewed_status: Optional[str] = None


def record_from_dict(d: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(d.get("id", "")),
        event_id=str(_get(d, "eventId", default="")),
        dancer_id=_get(d, "dancerId"),
        dancer_name=_get(d, "dancerName", default=""),
        dancer_level=_get(d, "dancerLevel", default=""),
        status=d.get("status") or "present",
        points=d.get("points") or 0,
        from_absence_request=bool(_get(d, "fromAbsenceRequest", default=False)),
        reviewed_status=_get(d, "reviewedStatus"),
    )


@dataclass
class AbsenceRequest:
    id: str
    event_id: str
    dancer_name: str
    dancer_level: str
    request_type: str  # missing | excused
    reason: str = ""
    event_name: str = ""
    proof_url: Optional[str] = None
    status: str = "pending"  # pending | approved | partial | denied
    submitted_at: Any = None


def absence_request_from_dict(d: Dict[str, Any]) -> AbsenceRequest:
    return AbsenceRequest(
        id=str(d.get("id", "")),
        event_id=str(_get(d, "eventId", default="")),
        dancer_name=_get(d, "dancerName", default=""),
        dancer_level=_get(d, "dancerLevel", default=""),
        request_type=_get(d, "requestType", default="missing"),
        reason=d.get("reason") or "",
        event_name=_get(d, "eventName", default=""),
        proof_url=_get(d, "proofUrl"),
        status=d.get("status") or "pending",
        submitted_at=_get(d, "submittedAt", "createdAt"),
    )


@dataclass
class MakeUpSubmission:
    id: str
    dancer_name: str
    dancer_level: str
    event_id: str = ""
    event_name: str = ""
    absence_request_id: Optional[str] = None
    make_up_url: Optional[str] = None
    sent_to_coordinator: bool = False
    status: str = "pending"
    points_awarded: Optional[float] = None
    submitted_at: Any = None


def makeup_from_dict(d: Dict[str, Any]) -> MakeUpSubmission:
    return MakeUpSubmission(
        id=str(d.get("id", "")),
        dancer_name=_get(d, "dancerName", default=""),
        dancer_level=_get(d, "dancerLevel", default=""),
        event_id=str(_get(d, "eventId", default="")),
        event_name=_get(d, "eventName", default=""),
        absence_request_id=_get(d, "absenceRequestId"),
        make_up_url=_get(d, "makeUpUrl", "fileUrl"),
        sent_to_coordinator=bool(_get(d, "sentToCoordinator", default=False)),
        status=d.get("status") or "pending",
        points_awarded=_get(d, "pointsAwarded"),
        submitted_at=_get(d, "submittedAt", "createdAt"),
    )


@dataclass
class ClubMember:
    id: str
    name: str
    level: str = ""
    email: str = ""
    audition_number: str = ""
    audition_name: str = ""
    average_score: float = 0.0
    previous_member: str = ""
    scores: Dict[str, Any] = field(default_factory=dict)


def club_member_from_dict(d: Dict[str, Any]) -> ClubMember:
    return ClubMember(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        level=_get(d, "level", "assignedLevel", default=""),
        email=d.get("email") or "",
        audition_number=str(_get(d, "auditionNumber", default="")),
        audition_name=_get(d, "auditionName", default=""),
        average_score=float(_get(d, "averageScore", default=0) or 0),
        previous_member=_get(d, "previousMember", default=""),
        scores=d.get("scores") or {},
    )


@dataclass
class Audition:
    id: str
    name: str
    date: Any = None
    status: str = "draft"
    dancer_count: int = 0


def audition_from_dict(d: Dict[str, Any]) -> Audition:
    return Audition(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        date=d.get("date"),
        status=d.get("status") or "draft",
        dancer_count=int(_get(d, "dancerCount", default=0) or 0),
    )


@dataclass
class Dancer:
    id: str
    name: str
    audition_number: str = ""
    email: str = ""
    phone: str = ""
    shirt_size: str = ""
    group: str = "Unassigned"
    hidden: bool = False
    average_score: float = 0.0
    rank: Optional[int] = None
    scores: Dict[str, Any] = field(default_factory=dict)


def dancer_from_dict(d: Dict[str, Any]) -> Dancer:
    return Dancer(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        audition_number=str(_get(d, "auditionNumber", default="")),
        email=d.get("email") or "",
        phone=d.get("phone") or "",
        shirt_size=_get(d, "shirtSize", default=""),
        group=d.get("group") or "Unassigned",
        hidden=bool(d.get("hidden", False)),
        average_score=float(_get(d, "averageScore", default=0) or 0),
        rank=d.get("rank"),
        scores=d.get("scores") or {},
    )


@dataclass
class Judge:
    id: str
    name: str
    email: str
    role: str = "judge"
    position: str = ""
    active: bool = True


@dataclass
class Club:
    id: str
    name: str
    slug: str
    active: bool = True
    is_default: bool = False


def club_from_dict(d: Dict[str, Any]) -> Club:
    return Club(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        slug=d.get("slug", ""),
        active=bool(d.get("active", True)),
        is_default=bool(_get(d, "isDefault", default=False)),
    )


@dataclass
class FormQuestion:
    id: str
    text: str
    type: str = "text"  # text | yesno | multiplechoice | consent
    required: bool = False
    order: int = 0
    options: List[str] = field(default_factory=list)


def form_question_from_dict(d: Dict[str, Any]) -> FormQuestion:
    return FormQuestion(
        id=str(d.get("id", "")),
        text=_get(d, "text", "question", default=""),
        type=d.get("type") or "text",
        required=bool(d.get("required", False)),
        order=int(d.get("order") or 0),
        options=list(d.get("options") or []),
    )


@dataclass
class FileItem:
    id: str
    type: str  # video | makeup
    name: str
    size: int = 0
    mime_type: str = ""
    created_at: Any = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
