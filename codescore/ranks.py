"""Score tiers: readability labels, cumulative-score levels, milestone progress."""

from __future__ import annotations

from dataclasses import dataclass

from codescore.text_scan import clamp


@dataclass(frozen=True)
class Level:
    name: str
    min_score: int


LEVELS = (
    Level("Grand Master", 1000),
    Level("Master Transformer", 500),
    Level("Code Wizard", 200),
    Level("Code Adept", 100),
    Level("Apprentice", 0),
)
MILESTONES = (100, 200, 500, 1000)

# (min score, label, color), highest first
READABILITY_TIERS = (
    (80, "Excellent", "green"),
    (60, "Good", "blue"),
    (40, "Fair", "yellow"),
    (20, "Poor", "orange"),
    (0, "Very Poor", "red"),
)


def _readability_tier(score: float) -> tuple[int, str, str]:
    score = clamp(score, 0, 100)
    for tier in READABILITY_TIERS:
        if score >= tier[0]:
            return tier
    return READABILITY_TIERS[-1]


def readability_label(score: float) -> str:
    return _readability_tier(score)[1]


def readability_color(score: float) -> str:
    return _readability_tier(score)[2]


def level_for(total_score: float) -> Level:
    for level in LEVELS:
        if total_score >= level.min_score:
            return level
    return LEVELS[-1]


def next_milestone(total_score: float) -> int | None:
    for milestone in MILESTONES:
        if total_score < milestone:
            return milestone
    return None


def milestone_progress(total_score: float) -> float:
    """Percent of the way from the previous milestone to the next (100.0 once all are passed)."""
    total_score = max(0, total_score)
    target = next_milestone(total_score)
    if target is None:
        return 100.0
    index = MILESTONES.index(target)
    floor = MILESTONES[index - 1] if index > 0 else 0
    return (total_score - floor) / (target - floor) * 100
