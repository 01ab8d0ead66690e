import pytest

from domain.models import Dancer
from services import auditions, rubric
from services.api import ApiError
from tests.conftest import FakeClient


def dancer(i, score=0.0, group="Group 1", number=None):
    return Dancer(id=f"d{i}", name=f"Dancer {i}", audition_number=str(number or i), group=group,
                  average_score=score)


def test_rubric_total_and_checkbox_scores():
    assert rubric.TOTAL_POSSIBLE == 32
    assert rubric.score_from_checkboxes("kick", ["attempt", "alignment"]) == 1.5
    assert rubric.score_from_checkboxes("kick", ["attempt", "attempt"]) == 0.5
    everything = [cid for cid, _, _ in rubric.RUBRIC_CRITERIA["execution"][1]]
    assert rubric.score_from_checkboxes("execution", everything) == 8


@pytest.mark.parametrize("category,score", [
    ("kick", 2.5), ("kick", 0), ("performance", 2.4), ("execution", 8), ("technique", 4.8),
])
def test_saved_score_reappears_as_checked_criteria(category, score):
    checked = rubric.criteria_for_score(category, score)
    assert rubric.score_from_checkboxes(category, checked) == score


def test_auto_assign_splits_into_four_levels_by_score():
    dancers = [dancer(i, score=float(i)) for i in range(1, 10)]
    assignments = auditions.auto_assign(dancers)
    # nine dancers -> three per level, highest scores first
    assert assignments["d9"] == assignments["d8"] == assignments["d7"] == "Level 1"
    assert assignments["d3"] == "Level 3"
    assert assignments["d1"] == "Level 3"
    assert auditions.auto_assign([]) == {}


def test_deliberation_counts_follow_moves_and_confirmation_resets():
    delib = auditions.Deliberation(assignments={"d1": "Level 1", "d2": "Level 1"})
    delib.toggle_confirmed("d1")
    delib.move("d1", "Level 2")
    assert delib.level_counts == {"Level 1": 1, "Level 2": 1, "Level 3": 0, "Level 4": 0}
    assert "d1" not in delib.confirmed
    with pytest.raises(ValueError):
        delib.move("d1", "Level 9")


def test_deliberation_ready_error():
    dancers = [dancer(1), dancer(2)]
    delib = auditions.Deliberation(assignments={"d1": "Level 1"})
    assert "assign every dancer" in delib.ready_error(dancers)
    delib.move("d2", "Level 2")
    assert "confirm all" in delib.ready_error(dancers)
    delib.toggle_confirmed("d1")
    delib.toggle_confirmed("d2")
    assert delib.ready_error(dancers) is None


def test_load_deliberation_prefers_saved_assignments():
    client = FakeClient({("GET", "/api/deliberations/a1"): {"levelAssignments": {"d1": "Level 4"}}})
    delib = auditions.load_deliberation(client, "a1", [dancer(1, 9.0)])
    assert delib.assignments == {"d1": "Level 4"}

    client = FakeClient({("GET", "/api/deliberations/a1"): ApiError("not found", status=404)})
    delib = auditions.load_deliberation(client, "a1", [dancer(1, 9.0)])
    assert delib.assignments == {"d1": "Level 1"}


def test_submit_deliberation_posts_counts():
    client = FakeClient()
    dancers = [dancer(1)]
    delib = auditions.Deliberation(assignments={"d1": "Level 2"}, confirmed={"d1"})
    auditions.submit_deliberation(client, "a1", delib, dancers)
    body = client.sent("POST", "/api/deliberations/a1")
    assert body["levelCounts"]["Level 2"] == 1


def test_manual_order_shifts_and_clamps():
    dancers = [dancer(1), dancer(2), dancer(3)]
    delib = auditions.Deliberation()
    assert delib.ordered(dancers) == dancers
    delib.shift("d3", -1, dancers)
    assert [d.id for d in delib.ordered(dancers)] == ["d1", "d3", "d2"]
    delib.shift("d1", -5, dancers)
    assert [d.id for d in delib.ordered(dancers)] == ["d1", "d3", "d2"]
    delib.shift("d1", 10, dancers)
    assert [d.id for d in delib.ordered(dancers)] == ["d3", "d2", "d1"]
    # someone added later goes to the end
    assert [d.id for d in delib.ordered(dancers + [dancer(4)])][-1] == "d4"


def test_level_statistics_and_consistency():
    dancers = [dancer(1, 20.0), dancer(2, 22.0), dancer(3, 24.0), dancer(4, 10.0)]
    delib = auditions.Deliberation(assignments={"d1": "Level 1", "d2": "Level 1", "d3": "Level 1",
                                                "d4": "Level 3"})
    stats = auditions.level_statistics(dancers, delib)
    assert set(stats) == {"Level 1", "Level 3"}
    level1 = stats["Level 1"]
    assert level1["count"] == 3
    assert level1["mean"] == 22.0
    assert level1["median"] == 22.0
    assert level1["p25"] == 20.0
    assert level1["p75"] == 24.0
    assert level1["range"] == 4.0
    assert level1["consistency"] == "Moderate"
    assert stats["Level 3"]["consistency"] == "High"
    assert auditions.consistency_label(2.01) == "Low"
    assert auditions.consistency_label(1.0) == "High"


def test_judge_breakdown_flags_lowest_and_highest():
    d = dancer(1)
    d.scores = {
        "Ana": {"kick": 3, "total": 20, "comments": "sharp"},
        "Ben": {"kick": 2, "total": 15},
        "Cy": {"kick": 4, "total": 18},
        "broken": "n/a",
    }
    rows = {r["judge"]: r for r in auditions.judge_breakdown(d)}
    assert set(rows) == {"Ana", "Ben", "Cy"}
    assert rows["Ana"]["mark"] == "highest"
    assert rows["Ben"]["mark"] == "lowest"
    assert rows["Cy"]["mark"] is None
    assert rows["Ana"]["scores"]["kick"] == 3.0
    assert rows["Ana"]["scores"]["turn"] == 0.0
    assert rows["Ana"]["comments"] == "sharp"

    d.scores = {"Ana": {"total": 18}, "Ben": {"total": 18}}
    assert all(r["mark"] is None for r in auditions.judge_breakdown(d))
    assert auditions.judge_breakdown(dancer(2)) == []


def test_groups_and_group_members_sorted_by_number():
    dancers = [dancer(1, number=12), dancer(2, number=3), dancer(3, group="Group 2"), dancer(4, number="x")]
    assert auditions.groups_of(dancers) == ["Group 1", "Group 2"]
    assert [d.id for d in auditions.dancers_in_group(dancers, "Group 1")] == ["d2", "d1", "d4"]
    many = [dancer(i) for i in range(1, 9)]
    assert len(auditions.dancers_in_group(many, "Group 1")) == 5
    assert len(auditions.dancers_in_group(many, "Group 1", limit=None)) == 8


def test_recording_group_choice_skips_unassigned():
    dancers = [dancer(1, group="Group 2"), dancer(2, group="Unassigned"), dancer(3, group="Group 1")]
    groups = auditions.recording_groups(dancers)
    assert groups == ["Group 1", "Group 2"]
    assert auditions.recording_group(groups, "Group 2") == "Group 2"
    assert auditions.recording_group(groups, "Unassigned") == "Group 1"
    assert auditions.recording_group(groups, None) == "Group 1"
    assert auditions.recording_group([], "Group 1") is None


def test_videos_for_group():
    videos = [{"id": "v1", "group": "Group 1"}, {"id": "v2", "group": "Group 2"}]
    assert [v["id"] for v in auditions.videos_for_group(videos, "Group 2")] == ["v2"]


@pytest.mark.parametrize("raw,expected", [("3", "Group 3"), ("Group 4", "Group 4"),
                                          ("Unassigned", "Unassigned"), ("Eboard", "Eboard")])
def test_format_group(raw, expected):
    assert auditions.format_group(raw) == expected


def test_submit_scores_rejects_empty_and_explains_duplicates():
    with pytest.raises(ValueError):
        auditions.submit_scores(FakeClient(), "d1", auditions.empty_scores())
    client = FakeClient({("POST", "/api/scores"): ApiError("dup", status=400)})
    with pytest.raises(ApiError, match="Unsubmit"):
        auditions.submit_scores(client, "d1", {"kick": 3.0})


def test_submission_status_fills_missing_categories():
    client = FakeClient({("GET", "/api/scores/submission-status/d1"): {
        "submitted": True, "scores": {"kick": 3, "bogus": 9}, "comments": "nice"}})
    status = auditions.submission_status(client, "d1")
    assert status.submitted
    assert status.scores["kick"] == 3.0
    assert status.scores["turn"] == 0.0
    assert "bogus" not in status.scores


def test_archive_uses_archive_endpoint():
    client = FakeClient()
    auditions.set_audition_status(client, "a1", "archived")
    assert client.calls[-1][:2] == ("POST", "/api/archive/audition/a1")
    auditions.set_audition_status(client, "a1", "active")
    assert client.sent("PUT", "/api/auditions/a1/status") == {"status": "active"}
    with pytest.raises(ValueError):
        auditions.set_audition_status(client, "a1", "paused")


def test_upload_video_checks_type_and_describes_group():
    client = FakeClient()
    with pytest.raises(ValueError):
        auditions.upload_video(client, "a1", "Group 1", [], "clip.txt", b"x", "text/plain")
    auditions.upload_video(client, "a1", "Group 1", [dancer(1, number=4), dancer(2, number=7)],
                           "clip.mp4", b"x", "video/mp4")
    _, _, kwargs = client.calls[-1]
    assert kwargs["data"]["description"] == "Video for Group 1 - Dancers 4, 7"
