"""
This service module contains the business logic for the admin dashboard.
It covers club settings, stored files, end-of-season cleanup and club member
statistics, keeping the view layer clean and focused on UI rendering.
"""
import copy
import statistics
from typing import Any, Dict, List, Optional

from domain.constants import (
    DEFAULT_CLUB_NAME, RESET_CONFIRMATION_PHRASE, SCORING_FORMATS, SHIRT_SIZES, LEVELS,
)
from domain.models import ClubMember, FileItem
from services.api import ApiClient, ApiError
from utils.dates import parse_timestamp
from utils.log import get_logger

logger = get_logger("admin")

DEFAULT_CUSTOM_TEXTS = {
    "attendanceSheetTitle": "Attendance Sheet",
    "pointSheetTitle": "Point Sheet",
    "missingPracticeLabel": "Missing Practice",
    "excusedAbsenceLabel": "Excused Absence",
    "requestButtonLabel": "Request",
    "submitRequestLabel": "Submit Request",
    "pendingLabel": "Pending",
    "approvedLabel": "Approved",
    "deniedLabel": "Denied",
    "makeUpSubmissionLabel": "Make-Up Submissions",
    "submitMakeUpLabel": "Submit Make-Up Work",
    "absenceRequestInstructions": "Submit proof of your make-up work to earn points back for the missed practice.",
    "absenceRequestsTabLabel": "Absence Requests",
    "makeUpSubmissionsTabLabel": "Make-Up Submissions",
}

DEFAULT_SECTIONS: Dict[str, Dict[str, Any]] = {
    "auditionSettings": {
        "defaultGroupSize": 5,
        "autoAssignGroups": False,
        "requireMinimumJudges": True,
        "minimumJudgesCount": 3,
        "allowMultipleSessions": True,
        "defaultStatus": "draft",
    },
    "scoringSettings": {
        "totalPossibleScore": 32,
        "allowDecimalScores": True,
        "showScoreBreakdown": True,
    },
    "dancerSettings": {
        "shirtSizeOptions": SHIRT_SIZES,
        "previousLevelOptions": LEVELS,
        "autoNumberingEnabled": False,
        "autoNumberingStart": 1,
        "allowSelfRegistration": True,
        "allowDuplicateAuditionNumbers": False,
    },
    "attendanceSettings": {
        "pointPerPractice": 1,
        "excusedAbsencePoints": 0,
        "unexcusedAbsencePoints": 0,
        "makeUpWorkEnabled": True,
        "makeUpWorkPointsMultiplier": 1.0,
        "requiredMakeUpProof": True,
        "maxPointsPerPractice": 1,
        "attendanceTrackingEnabled": True,
    },
    "videoSettings": {
        "videoRecordingEnabled": True,
        "maxVideoSizeMB": 500,
        "requireVideoDescription": False,
        "autoGroupVideos": True,
        "videoRetentionDays": 365,
        "allowVideoDownload": True,
    },
    "notificationSettings": {
        "emailNotificationsEnabled": False,
        "notifyOnNewDancer": False,
        "notifyOnScoreSubmission": False,
        "notifyOnAbsenceRequest": True,
        "notifyOnMakeUpSubmission": True,
        "adminEmail": "",
    },
    "appearanceSettings": {
        "clubName": DEFAULT_CLUB_NAME,
        "siteTitle": "DanceScore Pro",
        "primaryColor": "#B380FF",
        "secondaryColor": "#FFB3D1",
        "logoUrl": "",
        "showLogoInHeader": True,
    },
    "systemSettings": {
        "dateFormat": "MM/DD/YYYY",
        "timeFormat": "12h",
        "firstDayOfWeek": "Sunday",
        "sessionTimeoutMinutes": 60,
    },
    "securitySettings": {
        "requireEmailVerificationForLogin": True,
        "emailVerificationCodeExpiryMinutes": 10,
        "maxVerificationAttempts": 5,
    },
}

SECTION_TITLES = {
    "auditionSettings": "Audition",
    "scoringSettings": "Scoring & Rubric",
    "dancerSettings": "Dancer Registration",
    "attendanceSettings": "Attendance & Points",
    "videoSettings": "Video",
    "notificationSettings": "Notifications",
    "appearanceSettings": "Appearance",
    "systemSettings": "System",
    "securitySettings": "Security & Verification",
}


# --- Settings ---

def merge_settings(server: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overlay the server's settings on the defaults, section by section."""
    server = server or {}
    merged: Dict[str, Any] = {
        "scoringFormat": server.get("scoringFormat") or "slider",
        "editMode": bool(server.get("editMode", False)),
        "customTexts": {**DEFAULT_CUSTOM_TEXTS, **(server.get("customTexts") or {})},
    }
    for section, defaults in DEFAULT_SECTIONS.items():
        merged[section] = {**copy.deepcopy(defaults), **(server.get(section) or {})}
    return merged


def get_settings(client: ApiClient) -> Dict[str, Any]:
    return merge_settings(client.get("/api/settings", fallback="Failed to load settings"))


def update_settings(client: ApiClient, changes: Dict[str, Any]) -> None:
    client.put("/api/settings", json=changes, fallback="Failed to update settings")


def set_scoring_format(client: ApiClient, fmt: str) -> None:
    if fmt not in SCORING_FORMATS:
        raise ValueError(f"Unknown scoring format: {fmt}")
    update_settings(client, {"scoringFormat": fmt})


def test_email_config(client: ApiClient) -> Dict[str, Any]:
    """Returns {'success': bool, 'message': str}; never raises for server-side failures."""
    try:
        data = client.post("/api/auth/test-email-config",
                           fallback="Failed to test email configuration. Check server logs.")
    except ApiError as e:
        return {"success": False, "message": e.message}
    ok = bool(data.get("success") and data.get("emailConfigured"))
    default = ("Email service is configured and ready to use." if ok else
               "Email service is not configured. Please set up SMTP environment variables.")
    return {"success": ok, "message": data.get("message") or default}


# --- Files ---

def _file_from_dict(d: Dict[str, Any], kind: str) -> FileItem:
    return FileItem(
        id=str(d.get("id", "")),
        type=kind,
        name=d.get("name") or d.get("fileName") or d.get("id", ""),
        size=int(d.get("size") or 0),
        mime_type=d.get("mimeType") or "",
        created_at=d.get("createdAt") or d.get("recordedAt"),
        url=d.get("url"),
        extra=d,
    )


def _sort_key(item: FileItem):
    parsed = parse_timestamp(item.created_at)
    return parsed.timestamp() if parsed else 0


def list_files(client: ApiClient) -> Dict[str, List[FileItem]]:
    """Stored videos and make-up files, each list newest first, plus an 'all' merge."""
    data = client.get("/api/files", fallback="Failed to load files")
    videos = [_file_from_dict(v, "video") for v in data.get("videos") or []]
    makeups = [_file_from_dict(m, "makeup") for m in data.get("makeUpSubmissions") or []]
    return {
        "all": sorted(videos + makeups, key=_sort_key, reverse=True),
        "videos": sorted(videos, key=_sort_key, reverse=True),
        "makeup": sorted(makeups, key=_sort_key, reverse=True),
    }


def delete_file(client: ApiClient, item: FileItem) -> None:
    kind = "video" if item.type == "video" else "makeup"
    client.delete(f"/api/files/{kind}/{item.id}", fallback="Failed to delete file")


def download_url(item: FileItem, token: Optional[str]) -> Optional[str]:
    """Video streams authenticate through a query token; make-up files use their stored URL."""
    if not item.url:
        return None
    if item.type == "video" and token:
        sep = "&" if "?" in item.url else "?"
        return f"{item.url}{sep}token={token}"
    return item.url


def file_icon(item: FileItem) -> str:
    if item.type == "video":
        return "🎥"
    mime = item.mime_type or ""
    if "pdf" in mime:
        return "📄"
    if "image" in mime:
        return "🖼️"
    if "word" in mime:
        return "📝"
    return "📎"


# --- Danger zone ---

def clear_club_members(client: ApiClient) -> None:
    logger.warning("clearing all club members")
    client.delete("/api/club-members/clear", fallback="Failed to clear club members")


def clear_auditions(client: ApiClient) -> None:
    logger.warning("clearing all auditions")
    client.delete("/api/auditions/clear", fallback="Failed to clear auditions")


def reset_database(client: ApiClient, confirmation: str) -> None:
    if confirmation != RESET_CONFIRMATION_PHRASE:
        raise ValueError("Reset cancelled - confirmation text did not match")
    logger.warning("performing full database reset")
    client.delete("/api/database/reset", fallback="Failed to perform full reset")


# --- Club member statistics ---

def _judge_totals(member: ClubMember) -> List[float]:
    return [float(s["total"]) for s in (member.scores or {}).values()
            if isinstance(s, dict) and isinstance(s.get("total"), (int, float))]


def percentile_label(pct: int) -> str:
    if pct >= 90:
        return "Excellent"
    if pct >= 75:
        return "Very Good"
    if pct >= 60:
        return "Good"
    if pct >= 40:
        return "Average"
    return "Needs Work"


def agreement_label(std_dev: float) -> str:
    """How closely the judges agreed on a dancer."""
    std_dev = round(std_dev, 2)
    if std_dev > 2.5:
        return "Low"
    if std_dev > 1.5:
        return "Moderate"
    return "High"


def member_stats(member: ClubMember, members: List[ClubMember]) -> Optional[Dict[str, Any]]:
    """Rank, percentile and judge-score spread for one member; None without judge scores."""
    totals = _judge_totals(member)
    if not totals:
        return None
    ordered = sorted(totals)
    all_scores = sorted(m.average_score for m in members)
    percentile = 0
    if len(all_scores) > 1:
        percentile = round(sum(1 for s in all_scores if s < member.average_score) / len(all_scores) * 100)
    ranked = sorted(members, key=lambda m: m.average_score, reverse=True)
    rank = next((i for i, m in enumerate(ranked, start=1) if m.id == member.id), 0)
    std_dev = statistics.pstdev(totals)
    return {
        "rank": rank,
        "percentile": percentile,
        "percentile_label": percentile_label(percentile),
        "agreement": agreement_label(std_dev),
        "mean": statistics.fmean(totals),
        "std_dev": std_dev,
        "min": ordered[0],
        "max": ordered[-1],
        "median": ordered[int(len(ordered) * 0.5)],
        "p25": ordered[int(len(ordered) * 0.25)],
        "p75": ordered[int(len(ordered) * 0.75)],
    }


_IMPROVEMENT_THRESHOLDS = [
    ("kick", "Kick", 3.0, 4, "high"),
    ("jump", "Jump", 3.0, 4, "high"),
    ("turn", "Turn", 3.0, 4, "high"),
    ("performance", "Performance", 3.0, 4, "high"),
    ("execution", "Execution", 5.0, 8, "medium"),
    ("technique", "Technique", 5.0, 8, "medium"),
]


def improvement_areas(member: ClubMember) -> List[Dict[str, Any]]:
    """Categories averaging below threshold, high priority first then lowest score."""
    sheets = [s for s in (member.scores or {}).values()
              if isinstance(s, dict) and isinstance(s.get("total"), (int, float))]
    if not sheets:
        return []
    areas = []
    for key, label, threshold, maximum, priority in _IMPROVEMENT_THRESHOLDS:
        avg = sum(float(s.get(key) or 0) for s in sheets) / len(sheets)
        if avg < threshold:
            areas.append({"category": label, "score": avg, "max": maximum, "priority": priority})
    return sorted(areas, key=lambda a: (0 if a["priority"] == "high" else 1, a["score"]))


def overview_counts(auditions: list, judges: list, members: list,
                    requests: list, makeups: list) -> Dict[str, int]:
    return {
        "auditions": len(auditions),
        "active_auditions": sum(1 for a in auditions if a.status == "active"),
        "judges": sum(1 for j in judges if j.active),
        "club_members": len(members),
        "pending_requests": sum(1 for r in requests if r.status == "pending"),
        "pending_makeups": sum(1 for m in makeups if m.status == "pending"),
    }
