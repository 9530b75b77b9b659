"""challenge command: before/after score with itemized breakdown."""

from __future__ import annotations

import argparse

from ..challenge import get_challenge_score
from ..utils import colorize, print_table
from ._helpers import print_json, read_code_pair

_ROWS = (
    ("Token count", "token_count"),
    ("Variable names", "variable_name_improvement"),
    ("Eval removal", "eval_removal"),
    ("Formatting", "formatting"),
)


def cmd_challenge(args: argparse.Namespace) -> None:
    original, transformed = read_code_pair(args)
    result = get_challenge_score(original, transformed)

    if getattr(args, "json", False):
        print_json(result.as_dict())
        return

    print(colorize(f"\n  Challenge score: {result.score}/100\n", "bold"))
    rows = [[label, f"{getattr(result.breakdown, attr):+d}"] for label, attr in _ROWS]
    print_table(["Component", "Points"], rows)
