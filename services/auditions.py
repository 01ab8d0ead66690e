"""
Auditions, judges, dancers, score submission and deliberations.
"""
import json
import math
import statistics
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from domain.constants import (
    AUDITION_STATUSES, JUDGE_ROLE_OPTIONS, LEVELS, MAX_VIDEO_BYTES, SCORE_CATEGORIES,
    UNASSIGNED_GROUP, DANCERS_PER_GROUP_VIEW,
)
from domain.models import (
    Audition, Dancer, Judge, audition_from_dict, dancer_from_dict,
)
from services.api import ApiClient, ApiError
from utils.log import get_logger

logger = get_logger("auditions")


# --- Auditions ---

def list_auditions(client: ApiClient) -> List[Audition]:
    data = client.get("/api/auditions", fallback="Failed to load auditions")
    return [audition_from_dict(a) for a in data or []]


def current_audition(auditions: List[Audition]) -> Optional[Audition]:
    """First active audition, else the first one listed."""
    active = next((a for a in auditions if a.status == "active"), None)
    return active or (auditions[0] if auditions else None)


def get_audition(client: ApiClient, audition_id: str) -> Dict[str, Any]:
    return client.get(f"/api/auditions/{audition_id}", fallback="Failed to load audition details")


def create_audition(client: ApiClient, name: str, date, judges: Optional[List[str]] = None) -> Audition:
    if not (name or "").strip() or not date:
        raise ValueError("Audition name and date are required")
    data = client.post("/api/auditions", json={
        "name": name.strip(),
        "date": str(date),
        "judges": judges or [],
    }, fallback="Failed to create audition")
    return audition_from_dict(data)


def set_audition_status(client: ApiClient, audition_id: str, status: str) -> None:
    if status not in AUDITION_STATUSES:
        raise ValueError(f"Unknown audition status: {status}")
    if status == "archived":
        client.post(f"/api/archive/audition/{audition_id}", fallback="Failed to archive audition")
        return
    client.put(f"/api/auditions/{audition_id}/status", json={"status": status},
               fallback="Failed to update audition status")


def delete_audition(client: ApiClient, audition_id: str) -> None:
    client.delete(f"/api/auditions/{audition_id}", fallback="Failed to delete audition")


def complete_deliberations(client: ApiClient, audition_id: str) -> None:
    """Finalise the saved level assignments and move dancers into the club."""
    audition = get_audition(client, audition_id)
    client.post(f"/api/auditions/{audition_id}/submit-deliberations",
                json={"levelAssignments": audition.get("deliberationsProgress") or {}},
                fallback="Failed to complete deliberations")


def qr_code_pdf(client: ApiClient, audition_id: str, audition_name: str) -> bytes:
    return client.get("/api/export/qr-code-pdf",
                      params={"auditionId": audition_id, "auditionName": audition_name or "Audition"},
                      raw=True, fallback="Failed to download PDF")


def export_results(client: ApiClient, fmt: str = "csv") -> bytes:
    if fmt not in ("csv", "excel"):
        raise ValueError(f"Unknown export format: {fmt}")
    return client.get(f"/api/export/{fmt}", raw=True, fallback="Failed to export results")


# --- Judges ---

def list_judges(client: ApiClient) -> List[Judge]:
    data = client.get("/api/judges", fallback="Failed to load judges")
    return [Judge(id=str(j.get("id", "")), name=j.get("name", ""), email=j.get("email", ""),
                  role=j.get("role") or "judge", position=j.get("position") or "",
                  active=bool(j.get("active", True)))
            for j in data or []]


def create_judge(client: ApiClient, name: str, email: str, role: str = "judge",
                 position: str = "") -> Dict[str, Any]:
    if not (name or "").strip() or not (email or "").strip():
        raise ValueError("Judge name and email are required")
    if role not in JUDGE_ROLE_OPTIONS:
        raise ValueError(f"Unknown role: {role}")
    return client.post("/api/judges", json={
        "name": name.strip(), "email": email.strip().lower(), "role": role, "position": position,
    }, fallback="Failed to add judge")


def set_judge_active(client: ApiClient, judge_id: str, active: bool) -> None:
    client.put(f"/api/judges/{judge_id}/status", json={"active": active},
               fallback="Failed to update judge status")


def delete_judge(client: ApiClient, judge_id: str) -> None:
    client.delete(f"/api/judges/{judge_id}", fallback="Failed to delete judge")


# --- Dancers ---

def list_dancers(client: ApiClient) -> List[Dancer]:
    data = client.get("/api/dancers", fallback="Failed to fetch dancers")
    return [dancer_from_dict(d) for d in data or []]


def dancers_with_scores(client: ApiClient, audition_id: str) -> List[Dancer]:
    data = client.get("/api/dancers-with-scores", params={"auditionId": audition_id},
                      fallback="Failed to load dancers")
    return [dancer_from_dict(d) for d in data or []]


def add_dancer(client: ApiClient, audition_id: str, form: Dict[str, str]) -> None:
    if not (form.get("name") or "").strip() or not (form.get("auditionNumber") or "").strip():
        raise ValueError("Name and Audition Number are required")
    client.post("/api/dancers", json={**form, "auditionId": audition_id},
                fallback="Failed to add dancer")


def upload_dancers(client: ApiClient, file_name: str, content: bytes) -> Dict[str, Any]:
    """Bulk import from a CSV/Excel sheet; returns {count, warnings}."""
    data = client.post("/api/dancers/upload", files={"file": (file_name, content)},
                       fallback="Failed to upload dancers")
    return {"count": len(data.get("dancers") or []), "warnings": data.get("warnings") or []}


def format_group(group: str) -> str:
    """'3' -> 'Group 3'; named groups pass through."""
    group = (group or "").strip()
    if group in (UNASSIGNED_GROUP, "Eboard") or group.startswith("Group "):
        return group
    return f"Group {group}"


def assign_group(client: ApiClient, dancer_id: str, group: str) -> str:
    formatted = format_group(group)
    client.put(f"/api/dancers/{dancer_id}", json={"group": formatted},
               fallback="Failed to update group")
    return formatted


def delete_dancer(client: ApiClient, dancer_id: str) -> None:
    client.delete(f"/api/dancers/{dancer_id}", fallback="Failed to delete dancer")


def set_dancer_hidden(client: ApiClient, dancer_id: str, hidden: bool) -> None:
    client.put(f"/api/dancers/{dancer_id}/hide", json={"hidden": hidden},
               fallback="Failed to update dancer")


def _number_key(dancer: Dancer):
    try:
        return (0, int(dancer.audition_number))
    except (TypeError, ValueError):
        return (1, 0)


def groups_of(dancers: List[Dancer]) -> List[str]:
    return sorted({d.group for d in dancers if d.group})


def dancers_in_group(dancers: List[Dancer], group: str,
                     limit: Optional[int] = DANCERS_PER_GROUP_VIEW) -> List[Dancer]:
    """Dancers on the floor together, ordered by audition number."""
    members = sorted((d for d in dancers if d.group == group), key=_number_key)
    return members[:limit]


def recording_groups(dancers: List[Dancer]) -> List[str]:
    return [g for g in groups_of(dancers) if g != UNASSIGNED_GROUP]


def recording_group(groups: List[str], requested: Optional[str]) -> Optional[str]:
    """The `?group=` choice when it names a real group, else the first one."""
    if requested in groups:
        return requested
    return groups[0] if groups else None


def videos_for_group(videos: List[Dict[str, Any]], group: str) -> List[Dict[str, Any]]:
    return [v for v in videos if v.get("group") == group]


# --- Videos ---

def list_videos(client: ApiClient, audition_id: str) -> List[Dict[str, Any]]:
    return client.get(f"/api/auditions/{audition_id}/videos", fallback="Failed to load videos") or []


def upload_video(client: ApiClient, audition_id: str, group: str, group_dancers: List[Dancer],
                 file_name: str, content: bytes, mime_type: str) -> None:
    if not (mime_type or "").startswith("video/"):
        raise ValueError("Please select a video file")
    if len(content) > MAX_VIDEO_BYTES:
        raise ValueError("Video file is too large. Maximum size is 500MB")
    if not group:
        raise ValueError("Please select a video file and group")
    numbers = ", ".join(d.audition_number for d in group_dancers)
    client.post(f"/api/auditions/{audition_id}/videos",
                files={"video": (file_name, content, mime_type)},
                data={
                    "group": group,
                    "dancerIds": json.dumps([d.id for d in group_dancers]),
                    "description": f"Video for {group} - Dancers {numbers}",
                }, fallback="Failed to upload video")


def delete_video(client: ApiClient, video_id: str) -> None:
    client.delete(f"/api/videos/{video_id}", fallback="Failed to delete video")


# --- Scores ---

@dataclass
class SubmissionStatus:
    submitted: bool = False
    has_scores: bool = False
    scores: Dict[str, float] = field(default_factory=dict)
    comments: str = ""


def empty_scores() -> Dict[str, float]:
    return {c: 0.0 for c in SCORE_CATEGORIES}


def submission_status(client: ApiClient, dancer_id: str) -> SubmissionStatus:
    try:
        data = client.get(f"/api/scores/submission-status/{dancer_id}")
    except ApiError as e:
        logger.warning("submission status for %s unavailable: %s", dancer_id, e)
        return SubmissionStatus(scores=empty_scores())
    scores = empty_scores()
    scores.update({k: float(v) for k, v in (data.get("scores") or {}).items() if k in scores})
    return SubmissionStatus(
        submitted=bool(data.get("submitted")),
        has_scores=bool(data.get("hasScores")),
        scores=scores,
        comments=data.get("comments") or "",
    )


def submit_scores(client: ApiClient, dancer_id: str, scores: Dict[str, float], comments: str = "") -> None:
    if not any((v or 0) > 0 for v in scores.values()):
        raise ValueError("Please enter at least one score before submitting")
    try:
        client.post("/api/scores", json={"dancerId": dancer_id, "scores": scores, "comments": comments},
                    fallback="Failed to submit scores")
    except ApiError as e:
        if e.status == 400:
            raise ApiError('You have already submitted scores for this dancer. Use "Unsubmit" to make changes.',
                           status=400) from e
        raise


def unsubmit_scores(client: ApiClient, dancer_id: str) -> None:
    client.put(f"/api/scores/unsubmit/{dancer_id}", json={}, fallback="Failed to unsubmit scores")


def scoring_format(client: ApiClient) -> str:
    try:
        return client.get("/api/settings").get("scoringFormat") or "slider"
    except ApiError as e:
        logger.warning("could not load scoring format: %s", e)
        return "slider"


def user_permissions(client: ApiClient) -> Dict[str, Any]:
    try:
        return client.get("/api/user/permissions") or {}
    except ApiError as e:
        logger.warning("could not load permissions: %s", e)
        return {}


# --- Deliberations ---

@dataclass
class Deliberation:
    """Level assignments for one audition. Counts are kept in step with assignments."""
    assignments: Dict[str, str] = field(default_factory=dict)
    confirmed: Set[str] = field(default_factory=set)
    # Manual ranking; empty means the score order is used
    order: List[str] = field(default_factory=list)

    @property
    def level_counts(self) -> Dict[str, int]:
        counts = {level: 0 for level in LEVELS}
        for level in self.assignments.values():
            counts[level] = counts.get(level, 0) + 1
        return counts

    def move(self, dancer_id: str, level: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown level: {level}")
        self.assignments[dancer_id] = level
        # A moved dancer needs to be confirmed again
        self.confirmed.discard(dancer_id)

    def toggle_confirmed(self, dancer_id: str) -> None:
        if dancer_id in self.confirmed:
            self.confirmed.discard(dancer_id)
        else:
            self.confirmed.add(dancer_id)

    def ordered(self, dancers: List[Dancer]) -> List[Dancer]:
        """Dancers in manual order; anyone not yet placed keeps their position at the end."""
        if not self.order:
            return list(dancers)
        position = {dancer_id: i for i, dancer_id in enumerate(self.order)}
        return sorted(dancers, key=lambda d: position.get(d.id, len(position)))

    def shift(self, dancer_id: str, offset: int, dancers: List[Dancer]) -> None:
        """Move a dancer `offset` places up (negative) or down the manual order."""
        order = [d.id for d in self.ordered(dancers)]
        if dancer_id not in order:
            return
        i = order.index(dancer_id)
        j = max(0, min(len(order) - 1, i + offset))
        order.insert(j, order.pop(i))
        self.order = order

    def ready_error(self, dancers: List[Dancer]) -> Optional[str]:
        ids = {d.id for d in dancers}
        if not ids.issubset(self.assignments):
            return "Please assign every dancer to a level before submitting"
        if not ids.issubset(self.confirmed):
            return "Please confirm all dancer level assignments before submitting"
        return None


def auto_assign(dancers: List[Dancer]) -> Dict[str, str]:
    """Split dancers by descending average score into four equal-sized levels."""
    ranked = sorted(dancers, key=lambda d: d.average_score, reverse=True)
    per_level = math.ceil(len(ranked) / len(LEVELS)) if ranked else 0
    assignments = {}
    for i, d in enumerate(ranked):
        assignments[d.id] = LEVELS[min(i // per_level, len(LEVELS) - 1)]
    return assignments


def load_deliberation(client: ApiClient, audition_id: str, dancers: List[Dancer]) -> Deliberation:
    """Saved assignments when present, otherwise an automatic split."""
    try:
        data = client.get(f"/api/deliberations/{audition_id}")
    except ApiError as e:
        logger.info("no saved deliberations for %s: %s", audition_id, e)
        data = {}
    saved = (data or {}).get("levelAssignments") or {}
    if saved:
        return Deliberation(assignments=dict(saved))
    return Deliberation(assignments=auto_assign(dancers))


def submit_deliberation(client: ApiClient, audition_id: str, deliberation: Deliberation,
                        dancers: List[Dancer]) -> None:
    error = deliberation.ready_error(dancers)
    if error:
        raise ValueError(error)
    client.post(f"/api/deliberations/{audition_id}", json={
        "levelAssignments": deliberation.assignments,
        "levelCounts": deliberation.level_counts,
    }, fallback="Failed to submit deliberations")


def consistency_label(std_dev: float) -> str:
    """How tightly the average scores within one level cluster."""
    if std_dev > 2.0:
        return "Low"
    if std_dev > 1.0:
        return "Moderate"
    return "High"


def level_statistics(dancers: List[Dancer], deliberation: Deliberation) -> Dict[str, Dict[str, Any]]:
    """Spread of average scores per level; levels with nobody in them are left out."""
    result = {}
    for level in LEVELS:
        scores = [d.average_score for d in dancers if deliberation.assignments.get(d.id) == level]
        if not scores:
            continue
        ordered = sorted(scores)
        std_dev = statistics.pstdev(scores)
        result[level] = {
            "count": len(scores),
            "mean": statistics.fmean(scores),
            "median": ordered[int(len(ordered) * 0.5)],
            "p25": ordered[int(len(ordered) * 0.25)],
            "p75": ordered[int(len(ordered) * 0.75)],
            "std_dev": std_dev,
            "min": ordered[0],
            "max": ordered[-1],
            "range": ordered[-1] - ordered[0],
            "consistency": consistency_label(std_dev),
        }
    return result


def judge_breakdown(dancer: Dancer) -> List[Dict[str, Any]]:
    """One row per judge sheet; the lowest and highest totals are flagged when judges disagree."""
    sheets = [(judge, s) for judge, s in (dancer.scores or {}).items()
              if isinstance(s, dict) and isinstance(s.get("total"), (int, float))]
    if not sheets:
        return []
    totals = [float(s["total"]) for _, s in sheets]
    low, high = min(totals), max(totals)
    rows = []
    for judge, sheet in sheets:
        total = float(sheet["total"])
        mark = None
        if low != high:
            mark = "lowest" if total == low else "highest" if total == high else None
        rows.append({
            "judge": judge,
            "total": total,
            "scores": {cat: float(sheet.get(cat) or 0) for cat in SCORE_CATEGORIES},
            "comments": sheet.get("comments") or "",
            "mark": mark,
        })
    return rows
