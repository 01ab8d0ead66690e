import pytest

from domain.models import Audition, ClubMember, FileItem, Judge
from services import admin
from services.api import ApiError
from tests.conftest import FakeClient


def test_merge_settings_overlays_server_values():
    merged = admin.merge_settings({
        "scoringFormat": "checkbox",
        "customTexts": {"pendingLabel": "Waiting"},
        "attendanceSettings": {"pointPerPractice": 2},
    })
    assert merged["scoringFormat"] == "checkbox"
    assert merged["customTexts"]["pendingLabel"] == "Waiting"
    assert merged["customTexts"]["approvedLabel"] == "Approved"
    assert merged["attendanceSettings"]["pointPerPractice"] == 2
    assert merged["attendanceSettings"]["makeUpWorkEnabled"] is True
    assert admin.merge_settings(None)["scoringFormat"] == "slider"


def test_merge_settings_does_not_share_default_lists():
    first = admin.merge_settings({})
    first["dancerSettings"]["shirtSizeOptions"].append("XXXL")
    assert "XXXL" not in admin.merge_settings({})["dancerSettings"]["shirtSizeOptions"]


def test_set_scoring_format_validates():
    client = FakeClient()
    with pytest.raises(ValueError):
        admin.set_scoring_format(client, "stars")
    admin.set_scoring_format(client, "input")
    assert client.sent("PUT", "/api/settings") == {"scoringFormat": "input"}


def test_email_config_check_never_raises():
    client = FakeClient({("POST", "/api/auth/test-email-config"): ApiError("SMTP down", status=500)})
    assert admin.test_email_config(client) == {"success": False, "message": "SMTP down"}
    client = FakeClient({("POST", "/api/auth/test-email-config"): {"success": True, "emailConfigured": True}})
    result = admin.test_email_config(client)
    assert result["success"]
    assert "configured" in result["message"]


def test_list_files_newest_first():
    client = FakeClient({("GET", "/api/files"): {
        "videos": [{"id": "v1", "createdAt": "2024-01-01T00:00:00Z", "size": 10}],
        "makeUpSubmissions": [{"id": "m1", "createdAt": {"_seconds": 1800000000}, "fileName": "work.pdf"}],
    }})
    files = admin.list_files(client)
    assert [f.id for f in files["all"]] == ["m1", "v1"]
    assert files["makeup"][0].name == "work.pdf"
    assert files["videos"][0].type == "video"


def test_download_url_adds_token_for_videos():
    video = FileItem(id="v1", type="video", name="clip", url="https://files.test/v1?x=1")
    assert admin.download_url(video, "tok") == "https://files.test/v1?x=1&token=tok"
    makeup = FileItem(id="m1", type="makeup", name="work", url="https://files.test/m1")
    assert admin.download_url(makeup, "tok") == "https://files.test/m1"
    assert admin.download_url(FileItem(id="x", type="makeup", name="x"), "tok") is None


def test_reset_requires_exact_phrase():
    client = FakeClient()
    with pytest.raises(ValueError, match="did not match"):
        admin.reset_database(client, "reset")
    assert client.calls == []
    admin.reset_database(client, "RESET")
    assert client.calls[-1][:2] == ("DELETE", "/api/database/reset")


def member(mid, avg, totals=()):
    scores = {f"j{i}": {"total": t, "kick": 2, "jump": 4, "turn": 4, "performance": 4,
                        "execution": 8, "technique": 8}
              for i, t in enumerate(totals)}
    return ClubMember(id=mid, name=mid, average_score=avg, scores=scores)


def test_member_stats_rank_percentile_and_agreement():
    members = [member("a", 30.0, (29, 30, 31)), member("b", 20.0, (20,)), member("c", 10.0, (10,))]
    stats = admin.member_stats(members[0], members)
    assert stats["rank"] == 1
    assert stats["percentile"] == 67
    assert stats["percentile_label"] == "Good"
    assert stats["agreement"] == "High"
    assert (stats["min"], stats["median"], stats["max"]) == (29, 30, 31)
    assert admin.member_stats(member("d", 0.0), members) is None


@pytest.mark.parametrize("std,label", [(3.0, "Low"), (2.0, "Moderate"), (1.5, "High")])
def test_agreement_label(std, label):
    assert admin.agreement_label(std) == label


def test_improvement_areas_puts_high_priority_first():
    areas = admin.improvement_areas(member("a", 28.0, (28,)))
    assert [a["category"] for a in areas] == ["Kick"]
    assert admin.improvement_areas(member("b", 0.0)) == []


def test_overview_counts():
    counts = admin.overview_counts(
        [Audition(id="a1", name="Fall", status="active"), Audition(id="a2", name="Spring")],
        [Judge(id="j1", name="J", email="j@x.test", active=True),
         Judge(id="j2", name="K", email="k@x.test", active=False)],
        [member("m", 1.0)], [], [],
    )
    assert counts["auditions"] == 2
    assert counts["active_auditions"] == 1
    assert counts["judges"] == 1
    assert counts["club_members"] == 1
