"""Absolute 0-100 readability rating for a single code snapshot.

Starts at 100. Penalties: dynamic code evaluation, one-letter declarations,
four-deep brace nesting, long sources. Rewards: descriptive declarations and
short function bodies. Each signal is summed over the whole text before the
result is rounded and clamped.
"""

from __future__ import annotations

import logging
import re

from codescore.text_scan import ASCII_BOUNDARY, clamp, count_matches, round_half_up

logger = logging.getLogger(__name__)

EVAL_RE = re.compile(r"eval\s*\(")
FUNCTION_CONSTRUCTOR_RE = re.compile(r"new\s+Function\s*\(")
SINGLE_CHAR_VAR_RE = re.compile(
    ASCII_BOUNDARY + r"(var|let|const)\s+([a-zA-Z])" + ASCII_BOUNDARY
)
# Four `{` with no brace of either kind between them. Not a parser.
DEEP_NESTING_RE = re.compile(r"\{[^{}]*\{[^{}]*\{[^{}]*\{")
DESCRIPTIVE_VAR_RE = re.compile(
    ASCII_BOUNDARY
    + r"(var|let|const)\s+([a-z][a-zA-Z0-9]*[A-Z][a-zA-Z0-9]*|[a-zA-Z]+_[a-zA-Z]+)"
    + ASCII_BOUNDARY
)
NAMED_FUNCTION_RE = re.compile(
    r"function\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*\([^)]*\)\s*\{([^}]*)\}"
)
ARROW_FUNCTION_RE = re.compile(r"\([^)]*\)\s*=>\s*\{([^}]*)\}")

MAX_SCORE = 100
LONG_SOURCE_CHARS = 500
SHORT_BODY_LINES = 15


def _short_bodies(pattern: re.Pattern[str], code: str) -> int:
    """Count matches whose last group (the body) spans fewer than SHORT_BODY_LINES lines."""
    count = 0
    for match in pattern.finditer(code):
        body = match.group(match.re.groups)
        if body.count("\n") + 1 < SHORT_BODY_LINES:
            count += 1
    return count


def calculate_readability_score(code: object) -> int:
    if not isinstance(code, str) or not code:
        return 0

    dynamic_eval = count_matches(EVAL_RE, code) + count_matches(FUNCTION_CONSTRUCTOR_RE, code)
    single_char = count_matches(SINGLE_CHAR_VAR_RE, code)
    deep_nesting = count_matches(DEEP_NESTING_RE, code)
    descriptive = count_matches(DESCRIPTIVE_VAR_RE, code)
    short_functions = _short_bodies(NAMED_FUNCTION_RE, code)
    short_arrows = _short_bodies(ARROW_FUNCTION_RE, code)

    score = MAX_SCORE
    score -= dynamic_eval * 10
    score -= single_char * 5
    score -= deep_nesting * 5
    if len(code) > LONG_SOURCE_CHARS:
        score -= 5
    score += descriptive * 10
    score += (short_functions + short_arrows) * 5

    logger.debug(
        "readability: eval=%d single_char=%d deep=%d descriptive=%d short_fn=%d short_arrow=%d raw=%d",
        dynamic_eval, single_char, deep_nesting, descriptive, short_functions, short_arrows, score,
    )
    return round_half_up(clamp(score, 0, MAX_SCORE))
