"""Line and token scanning primitives shared by every scorer.

All helpers are lexical: braces inside strings or comments are counted like
any other brace. Callers depend on that approximation, so keep it.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

TOKEN_SPLIT_RE = re.compile(r"[\s()\[\]{};,.+\-*/=!<>&|^%?:~]+")
# JS `\b` without the `u` flag only knows ASCII word characters.
ASCII_BOUNDARY = r"(?a:\b)"
VAR_DECLARATION_RE = re.compile(
    ASCII_BOUNDARY + r"(var|let|const)\s+([a-zA-Z_$][a-zA-Z0-9_$]*)" + ASCII_BOUNDARY
)
EVAL_CALL_RE = re.compile(r"eval\s*\(")

INDENT_WIDTH = 2
LONG_LINE_CHARS = 100


@dataclass(frozen=True)
class VariableNameStats:
    count: int
    avg_length: float
    short_names: int
    descriptive_names: int


def round_half_up(value: float) -> int:
    """Round halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def count_occurrences(text: str, needle: str) -> int:
    """Count substring hits, resuming one character after each hit (overlaps count)."""
    if not needle:
        return 0
    count = 0
    pos = text.find(needle)
    while pos != -1:
        count += 1
        pos = text.find(needle, pos + 1)
    return count


def count_matches(pattern: re.Pattern[str] | str, text: str) -> int:
    """Count non-overlapping regex matches."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    return sum(1 for _ in compiled.finditer(text))


def count_tokens(code: str) -> int:
    """Number of runs of characters between whitespace/punctuation separators."""
    return sum(1 for token in TOKEN_SPLIT_RE.split(code) if token)


def count_indentation_issues(code: str) -> int:
    """Count non-blank lines whose leading whitespace differs from the expected depth.

    Expected depth starts at 0, grows by one after a line ending in ``{`` and
    shrinks by one (never below 0) after a line starting with ``}``. The
    check for a line happens before its own brace adjusts the depth, so a
    closing line is expected one level deeper than its opener.
    """
    issues = 0
    depth = 0
    for line in code.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        actual = len(line) - len(line.lstrip())
        if actual != depth * INDENT_WIDTH:
            issues += 1
        if stripped.endswith("{"):
            depth += 1
        elif stripped.startswith("}"):
            depth = max(0, depth - 1)
    return issues


def max_nesting_level(code: str) -> int:
    """Peak running brace depth, applying each line's net change before checking."""
    level = 0
    peak = 0
    for line in code.split("\n"):
        level += line.count("{") - line.count("}")
        peak = max(peak, level)
    return peak


def count_long_lines(code: str, limit: int = LONG_LINE_CHARS) -> int:
    return sum(1 for line in code.split("\n") if len(line.strip()) > limit)


def count_eval_calls(code: str) -> int:
    return count_matches(EVAL_CALL_RE, code)


def size_reduction(original: str, transformed: str) -> float:
    """Signed fraction of the original length removed; 0.0 for an empty original."""
    if not original:
        return 0.0
    return (len(original) - len(transformed)) / len(original)


def extract_variable_names(code: str) -> list[str]:
    """Names introduced by ``var``/``let``/``const``, in source order."""
    return [m.group(2) for m in VAR_DECLARATION_RE.finditer(code)]


def average_length(names: list[str]) -> float:
    if not names:
        return 0.0
    return sum(len(name) for name in names) / len(names)


def analyze_variable_names(code: str) -> VariableNameStats:
    names = extract_variable_names(code)
    return VariableNameStats(
        count=len(names),
        avg_length=average_length(names),
        short_names=sum(1 for name in names if len(name) <= 2),
        descriptive_names=sum(
            1 for name in names
            if len(name) > 3 and (any(ch.isupper() for ch in name) or "_" in name)
        ),
    )
