"""leaderboard command: rank scored transformations and show progress."""

from __future__ import annotations

import argparse
from dataclasses import asdict

from ..leaderboard import get_leaderboard, summarize_history
from ..ranks import level_for, milestone_progress, next_milestone
from ..utils import colorize, print_table
from ._helpers import load_history, print_json

TIME_FORMAT = "%Y-%m-%d %H:%M"


def cmd_leaderboard(args: argparse.Namespace) -> None:
    entries = load_history(args.history)
    limit = args.limit if args.limit is not None else args.config.get("leaderboard_limit", 0)
    ranked = get_leaderboard(entries, limit=limit)
    summary = summarize_history(entries)
    level = level_for(summary.total_score)
    milestone = next_milestone(summary.total_score)
    progress = milestone_progress(summary.total_score)

    if getattr(args, "json", False):
        print_json({
            "leaderboard": [
                {
                    "rank": i,
                    "transformer_id": e.transformer_id,
                    "score": e.score,
                    "timestamp": e.timestamp.isoformat() if e.timestamp else None,
                }
                for i, e in enumerate(ranked, 1)
            ],
            "summary": asdict(summary),
            "level": level.name,
            "next_milestone": milestone,
            "milestone_progress": round(progress, 1),
        })
        return

    if not ranked:
        print(colorize("\n  No transformations applied yet.", "yellow"))
        return

    print(colorize(f"\n  Leaderboard ({len(ranked)} of {summary.transformations})\n", "bold"))
    stamped = any(e.timestamp is not None for e in ranked)
    rows = []
    for i, e in enumerate(ranked, 1):
        row = [str(i), e.display_name, f"{e.score:+} pts"]
        if stamped:
            row.append(e.timestamp.strftime(TIME_FORMAT) if e.timestamp else "")
        rows.append(row)
    headers = ["#", "Transformation", "Score"] + (["When"] if stamped else [])
    print_table(headers, rows)

    print(colorize(
        f"\n  Total {summary.total_score} pts · avg {summary.average_points} pts · {level.name}",
        "cyan",
    ))
    if milestone is not None:
        print(colorize(f"  Next: {milestone} ({progress:.0f}% there)", "dim"))
