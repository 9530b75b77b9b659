"""readability command: absolute 0-100 rating for one file."""

from __future__ import annotations

import argparse

from ..ranks import readability_color, readability_label
from ..readability import calculate_readability_score
from ..utils import colorize
from ._helpers import print_json, read_code_input


def cmd_readability(args: argparse.Namespace) -> None:
    code = read_code_input(args.file, max_chars=args.config.get("max_input_chars", 0))
    score = calculate_readability_score(code)
    label = readability_label(score)

    if getattr(args, "json", False):
        print_json({"score": score, "label": label, "color": readability_color(score)})
        return

    print(colorize(f"\n  Readability: {score}/100 ({label})", readability_color(score)))
