"""Ranking and summarizing scored transformations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from codescore.text_scan import round_half_up


@dataclass
class HistoryEntry:
    transformer_id: str
    score: int
    timestamp: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.transformer_id.replace("-", " ").capitalize()


@dataclass(frozen=True)
class HistorySummary:
    transformations: int
    total_score: int
    average_points: int


def entry_score(entry: Any) -> float:
    """Score of a mapping entry (``entry["score"]``) or an object entry (``entry.score``)."""
    if isinstance(entry, Mapping):
        return entry["score"]
    return entry.score


def get_leaderboard(entries: Sequence[Any], limit: int | None = None) -> list[Any]:
    """Entries by score, highest first; ties keep their input order."""
    ranked = sorted(entries, key=entry_score, reverse=True)
    if limit is not None and limit > 0:
        return ranked[:limit]
    return ranked


def summarize_history(entries: Iterable[Any]) -> HistorySummary:
    scores = [entry_score(e) for e in entries]
    total = sum(scores)
    average = round_half_up(total / len(scores)) if scores else 0
    return HistorySummary(transformations=len(scores), total_score=total, average_points=average)
