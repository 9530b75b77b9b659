"""codescore: heuristic scoring for code transformations."""

from codescore.challenge import ChallengeResult, ScoreBreakdown, assess_formatting, get_challenge_score
from codescore.leaderboard import HistoryEntry, HistorySummary, get_leaderboard, summarize_history
from codescore.readability import calculate_readability_score
from codescore.text_scan import VariableNameStats, analyze_variable_names
from codescore.transform import (
    DEFAULT_BASE_POINTS,
    TRANSFORMATION_POINTS,
    Transformer,
    TransformScore,
    calculate_bonus_points,
    calculate_complexity_factor,
    calculate_score,
    explain_score,
)

__all__ = [
    "DEFAULT_BASE_POINTS",
    "TRANSFORMATION_POINTS",
    "ChallengeResult",
    "HistoryEntry",
    "HistorySummary",
    "ScoreBreakdown",
    "TransformScore",
    "Transformer",
    "VariableNameStats",
    "analyze_variable_names",
    "assess_formatting",
    "calculate_bonus_points",
    "calculate_complexity_factor",
    "calculate_readability_score",
    "calculate_score",
    "explain_score",
    "get_challenge_score",
    "get_leaderboard",
    "summarize_history",
]
