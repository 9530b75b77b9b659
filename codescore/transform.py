"""Points for a single applied transformation.

score = round(base_points * complexity_factor + bonus_points)

Base points come from a fixed table keyed by transformer id. The complexity
factor rewards larger inputs and larger changes. Bonus points come from one
rule per known transformer; ids without a rule get no bonus.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from codescore.text_scan import (
    analyze_variable_names,
    count_indentation_issues,
    count_matches,
    count_occurrences,
    extract_variable_names,
    max_nesting_level,
    round_half_up,
    size_reduction,
)

logger = logging.getLogger(__name__)


class Transformer(enum.StrEnum):
    FORMAT = "format"
    MINIFY = "minify"
    ES6_TO_ES5 = "es6-to-es5"
    JSX_TO_JS = "jsx-to-js"
    RENAME_VARIABLES = "rename-variables"
    FLATTEN_CONTROL_FLOW = "flatten-control-flow"
    REMOVE_DEAD_CODE = "remove-dead-code"


TRANSFORMATION_POINTS: Mapping[str, int] = MappingProxyType({
    Transformer.FORMAT.value:               10,
    Transformer.MINIFY.value:               20,
    Transformer.ES6_TO_ES5.value:           30,
    Transformer.JSX_TO_JS.value:            40,
    Transformer.RENAME_VARIABLES.value:     25,
    Transformer.FLATTEN_CONTROL_FLOW.value: 35,
    Transformer.REMOVE_DEAD_CODE.value:     30,
})
DEFAULT_BASE_POINTS = 5

# (threshold, factor), checked top-down; first threshold exceeded wins.
LENGTH_TIERS = ((1000, 1.5), (500, 1.25), (200, 1.1))
CHANGE_TIERS = ((0.5, 1.5), (0.3, 1.3), (0.1, 1.1))
MINIFY_TIERS = ((0.5, 30), (0.3, 20), (0.1, 10))
DEAD_CODE_SIZE_TIERS = ((0.2, 20), (0.1, 10), (0.05, 5))

_CONSTANT_FALSE_IF_RE = re.compile(r"if\s*\(\s*(false|0)\s*\)")
_EMPTY_BLOCK_RE = re.compile(r"\{\s*\}")

BonusRule = Callable[[str, str], float]
BONUS_RULES: dict[str, BonusRule] = {}


@dataclass(frozen=True)
class TransformScore:
    transformer_id: str
    base_points: int
    complexity_factor: float
    bonus_points: float
    score: int


def bonus_rule(transformer_id: str) -> Callable[[BonusRule], BonusRule]:
    """Register ``fn(original, transformed) -> bonus`` for a transformer id."""
    def register(fn: BonusRule) -> BonusRule:
        BONUS_RULES[str(transformer_id)] = fn
        return fn
    return register


def _tier(value: float, tiers: tuple[tuple[float, float], ...], default: float = 0) -> float:
    for threshold, result in tiers:
        if value > threshold:
            return result
    return default


def base_points(transformer_id: str, points: Mapping[str, int] | None = None) -> int:
    """Base points for a transformer id; ``points`` entries override the built-in table."""
    if points and transformer_id in points:
        return points[transformer_id]
    return TRANSFORMATION_POINTS.get(transformer_id, DEFAULT_BASE_POINTS)


def calculate_complexity_factor(original: str, transformed: str) -> float:
    original = original or ""
    transformed = transformed or ""
    length_factor = _tier(len(original), LENGTH_TIERS, default=1.0)
    if original:
        change = abs(len(transformed) - len(original)) / len(original)
    else:
        change = 0.0
    change_factor = _tier(change, CHANGE_TIERS, default=1.0)
    return length_factor * change_factor


def calculate_bonus_points(original: str, transformed: str, transformer_id: str) -> float:
    rule = BONUS_RULES.get(transformer_id)
    if rule is None:
        return 0
    return rule(original or "", transformed or "")


def explain_score(
    original: str,
    transformed: str,
    transformer_id: str,
    *,
    points: Mapping[str, int] | None = None,
) -> TransformScore:
    """Score a transformation and keep the parts that produced it."""
    base = base_points(transformer_id, points)
    factor = calculate_complexity_factor(original, transformed)
    bonus = calculate_bonus_points(original, transformed, transformer_id)
    score = round_half_up(base * factor + bonus)
    logger.debug(
        "transform %s: base=%s factor=%.3f bonus=%s -> %s",
        transformer_id, base, factor, bonus, score,
    )
    return TransformScore(
        transformer_id=transformer_id,
        base_points=base,
        complexity_factor=factor,
        bonus_points=bonus,
        score=score,
    )


def calculate_score(
    original: str,
    transformed: str,
    transformer_id: str,
    *,
    points: Mapping[str, int] | None = None,
) -> int:
    """Points earned by applying ``transformer_id`` to ``original``.

    Not floored at zero: rules that reward reductions also penalize
    regressions, so a transformation that makes things worse can go negative.
    """
    return explain_score(original, transformed, transformer_id, points=points).score


# ── Per-transformer bonus rules ─────────────────────────────


@bonus_rule(Transformer.FORMAT)
def _format_bonus(original: str, transformed: str) -> float:
    removed = count_indentation_issues(original) - count_indentation_issues(transformed)
    return removed * 2 if removed > 0 else 0


@bonus_rule(Transformer.MINIFY)
def _minify_bonus(original: str, transformed: str) -> float:
    return _tier(size_reduction(original, transformed), MINIFY_TIERS)


@bonus_rule(Transformer.ES6_TO_ES5)
def _es6_to_es5_bonus(original: str, transformed: str) -> float:
    def let_const(code: str) -> int:
        return count_occurrences(code, "let ") + count_occurrences(code, "const ")

    arrows = count_occurrences(original, "=>") - count_occurrences(transformed, "=>")
    declarations = let_const(original) - let_const(transformed)
    return arrows * 5 + declarations * 3


@bonus_rule(Transformer.JSX_TO_JS)
def _jsx_to_js_bonus(original: str, transformed: str) -> float:
    return (count_occurrences(original, "<") - count_occurrences(transformed, "<")) * 5


@bonus_rule(Transformer.RENAME_VARIABLES)
def _rename_variables_bonus(original: str, transformed: str) -> float:
    before = analyze_variable_names(original)
    after = analyze_variable_names(transformed)
    bonus = 0
    if after.avg_length > before.avg_length:
        bonus += round_half_up((after.avg_length - before.avg_length) * 10)
    bonus += (_single_char_names(original) - _single_char_names(transformed)) * 5
    return bonus


def _single_char_names(code: str) -> int:
    return sum(1 for name in extract_variable_names(code) if len(name) == 1)


@bonus_rule(Transformer.FLATTEN_CONTROL_FLOW)
def _flatten_control_flow_bonus(original: str, transformed: str) -> float:
    flattened = max_nesting_level(original) - max_nesting_level(transformed)
    return flattened * 10 if flattened > 0 else 0


@bonus_rule(Transformer.REMOVE_DEAD_CODE)
def _remove_dead_code_bonus(original: str, transformed: str) -> float:
    unreachable = (
        count_matches(_CONSTANT_FALSE_IF_RE, original)
        - count_matches(_CONSTANT_FALSE_IF_RE, transformed)
    )
    empty_blocks = (
        count_matches(_EMPTY_BLOCK_RE, original)
        - count_matches(_EMPTY_BLOCK_RE, transformed)
    )
    shrink = _tier(size_reduction(original, transformed), DEAD_CODE_SIZE_TIERS)
    return unreachable * 15 + empty_blocks * 5 + shrink
