"""score command: points for one applied transformation."""

from __future__ import annotations

import argparse
from dataclasses import asdict

from ..config import transformer_points
from ..transform import explain_score
from ..utils import colorize
from ._helpers import print_json, read_code_pair


def cmd_score(args: argparse.Namespace) -> None:
    original, transformed = read_code_pair(args)
    result = explain_score(
        original, transformed, args.transformer,
        points=transformer_points(args.config),
    )

    if getattr(args, "json", False):
        print_json(asdict(result))
        return

    color = "green" if result.score > 0 else "red"
    print(colorize(f"\n  {result.transformer_id}: {result.score} pts", color))
    print(colorize(
        f"  base {result.base_points} × complexity {result.complexity_factor:.2f}"
        f" + bonus {result.bonus_points:g}",
        "dim",
    ))
