"""Checkbox rubric used when the club scores with the 'checkbox' format."""
from typing import Dict, Iterable, List, Tuple

# category -> (max score, [(criterion id, label, weight)])
_TECHNICAL = [
    ("attempt", "Attempt", 0.5),
    ("alignment", "Alignment", 1.0),
    ("control", "Control", 1.0),
    ("engagement", "Engagement", 1.0),
    ("difficulty", "Difficulty", 0.5),
]

RUBRIC_CRITERIA: Dict[str, Tuple[float, List[Tuple[str, str, float]]]] = {
    "kick": (4, _TECHNICAL),
    "jump": (4, _TECHNICAL),
    "turn": (4, _TECHNICAL),
    "performance": (4, [
        ("effort", "Effort", 0.8),
        ("energy", "Energy", 0.8),
        ("confidence", "Confidence", 0.8),
        ("facials", "Facials", 0.8),
        ("personality", "Personality", 0.8),
    ]),
    "execution": (8, [
        ("retention", "Retention", 1.6),
        ("precision", "Precision", 1.6),
        ("musicality", "Musicality", 1.6),
        ("clarity", "Clarity", 1.6),
        ("consistency", "Consistency", 1.6),
    ]),
    "technique": (8, [
        ("attempted", "Attempted", 1.6),
        ("control", "Control", 1.6),
        ("alignment", "Alignment", 1.6),
        ("engagement", "Engagement", 1.6),
        ("heightPower", "Height/Power", 1.6),
    ]),
}

TOTAL_POSSIBLE = sum(max_score for max_score, _ in RUBRIC_CRITERIA.values())


def max_score(category: str) -> float:
    return RUBRIC_CRITERIA[category][0]


def score_from_checkboxes(category: str, checked: Iterable[str]) -> float:
    """Sum the weights of the checked criteria, rounded to one decimal, capped at the category max."""
    maximum, criteria = RUBRIC_CRITERIA[category]
    weights = {cid: weight for cid, _, weight in criteria}
    total = sum(weights.get(cid, 0) for cid in set(checked))
    return min(round(total, 1), maximum)


def criteria_for_score(category: str, score: float) -> List[str]:
    """Criteria to pre-check so a saved score shows up again, taken in rubric order."""
    remaining = float(score or 0)
    checked = []
    for cid, _, weight in RUBRIC_CRITERIA[category][1]:
        if weight <= remaining + 1e-9:
            checked.append(cid)
            remaining -= weight
    return checked
