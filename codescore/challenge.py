"""Before/after comparison score for challenge mode (e.g. deobfuscation).

Not keyed by transformer. Starts from 50 and adds four independent
components: token-count ratio, variable-name length improvement, eval
removal and formatting. The total is rounded and clamped to 0-100; the
components are reported unclamped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from codescore.text_scan import (
    analyze_variable_names,
    clamp,
    count_eval_calls,
    count_indentation_issues,
    count_long_lines,
    count_tokens,
    round_half_up,
)

logger = logging.getLogger(__name__)

BASE_SCORE = 50
MAX_NAME_BONUS = 25
MAX_INDENT_BONUS = 15
MAX_LONG_LINE_BONUS = 10


@dataclass
class ScoreBreakdown:
    token_count: int = 0
    variable_name_improvement: int = 0
    eval_removal: int = 0
    formatting: int = 0
    total: int = 0

    def components(self) -> int:
        return self.token_count + self.variable_name_improvement + self.eval_removal + self.formatting

    def as_dict(self) -> dict[str, int]:
        return {
            "tokenCount": self.token_count,
            "variableNameImprovement": self.variable_name_improvement,
            "evalRemoval": self.eval_removal,
            "formatting": self.formatting,
            "total": self.total,
        }


@dataclass(frozen=True)
class ChallengeResult:
    score: int
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    def as_dict(self) -> dict:
        return {"score": self.score, "breakdown": self.breakdown.as_dict()}


def _token_count_component(original: str, transformed: str) -> int:
    before = count_tokens(original)
    after = count_tokens(transformed)
    if before == 0:
        # No baseline: unchanged emptiness is neutral, anything added is growth.
        return -5 if after > 0 else 0
    ratio = after / before
    if ratio < 0.8:
        return 15
    if ratio <= 1.2:
        return 10
    if ratio > 1.5:
        return -5
    return 0


def _variable_name_component(original: str, transformed: str) -> int:
    before = analyze_variable_names(original).avg_length
    after = analyze_variable_names(transformed).avg_length
    if after <= before:
        return 0
    return min(MAX_NAME_BONUS, round_half_up((after - before) * 8))


def _eval_removal_component(original: str, transformed: str) -> int:
    before = count_eval_calls(original)
    after = count_eval_calls(transformed)
    if before > 0 and after == 0:
        return 20
    if before > after:
        return 10
    if after > 0:
        return -10
    return 0


def assess_formatting(original: str, transformed: str) -> int:
    """Points for output that looks better laid out than the input.

    +10 when the line count grew by more than 20%, up to +15 for indentation
    issues removed, and up to +10 (2 per line) for lines over 100 characters
    removed.
    """
    score = 0

    if len(transformed.split("\n")) > len(original.split("\n")) * 1.2:
        score += 10

    indent_fixed = count_indentation_issues(original) - count_indentation_issues(transformed)
    if indent_fixed > 0:
        score += min(MAX_INDENT_BONUS, indent_fixed)

    long_fixed = count_long_lines(original) - count_long_lines(transformed)
    if long_fixed > 0:
        score += min(MAX_LONG_LINE_BONUS, long_fixed * 2)

    return score


def get_challenge_score(original: str, transformed: str) -> ChallengeResult:
    original = original or ""
    transformed = transformed or ""

    breakdown = ScoreBreakdown(
        token_count=_token_count_component(original, transformed),
        variable_name_improvement=_variable_name_component(original, transformed),
        eval_removal=_eval_removal_component(original, transformed),
        formatting=assess_formatting(original, transformed),
    )
    breakdown.total = round_half_up(clamp(BASE_SCORE + breakdown.components(), 0, 100))
    logger.debug("challenge breakdown: %s", breakdown.as_dict())
    return ChallengeResult(score=breakdown.total, breakdown=breakdown)
