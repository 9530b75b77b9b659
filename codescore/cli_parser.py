"""Parser construction for the CLI entrypoint."""

from __future__ import annotations

import argparse

USAGE_EXAMPLES = """
commands:
  score ORIGINAL TRANSFORMED -t ID   Points for one applied transformation
  readability FILE                   Absolute 0-100 readability rating
  challenge ORIGINAL TRANSFORMED     Before/after challenge score with breakdown
  leaderboard HISTORY                Rank a JSON list of scored transformations
  config show|set|unset              Show/set/unset project configuration

examples:
  codescore score app.js app.min.js --transformer minify
  codescore readability src/app.js --json
  codescore challenge obfuscated.js cleaned.js
  cat app.js | codescore readability -
  codescore leaderboard history.json --limit 5
  codescore config set transformer_points prettify=15
  codescore config set max_input_chars unlimited
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="codescore",
        description="codescore: heuristic code transformation scoring",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _add_score_parser(sub)
    _add_readability_parser(sub)
    _add_challenge_parser(sub)
    _add_leaderboard_parser(sub)
    _add_config_parser(sub)
    return parser


def _add_score_parser(sub) -> None:
    parser = sub.add_parser("score", help="Points for one applied transformation")
    parser.add_argument("original", type=str, help="Original code file ('-' for stdin)")
    parser.add_argument("transformed", type=str, help="Transformed code file ('-' for stdin)")
    parser.add_argument(
        "-t", "--transformer",
        type=str,
        required=True,
        metavar="ID",
        help="Transformer id (format, minify, es6-to-es5, ...). Unknown ids score 5 base points.",
    )
    parser.add_argument("--json", action="store_true", help="Output the score and its parts as JSON")


def _add_readability_parser(sub) -> None:
    parser = sub.add_parser("readability", help="Absolute 0-100 readability rating")
    parser.add_argument("file", type=str, help="Code file ('-' for stdin)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def _add_challenge_parser(sub) -> None:
    parser = sub.add_parser("challenge", help="Before/after challenge score with breakdown")
    parser.add_argument("original", type=str, help="Original (e.g. obfuscated) code file")
    parser.add_argument("transformed", type=str, help="Transformed code file")
    parser.add_argument("--json", action="store_true", help="Output score and breakdown as JSON")


def _add_leaderboard_parser(sub) -> None:
    parser = sub.add_parser("leaderboard", help="Rank a JSON list of scored transformations")
    parser.add_argument("history", type=str, help="JSON file holding a list of {transformer_id, score} entries")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max rows to show (default: config leaderboard_limit; 0 = all)",
    )
    parser.add_argument("--json", action="store_true", help="Output ranking and summary as JSON")


def _add_config_parser(sub) -> None:
    parser = sub.add_parser("config", help="Show/set/unset project configuration")
    config_sub = parser.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Show all config values")

    set_parser = config_sub.add_parser("set", help="Set a config value")
    set_parser.add_argument("config_key", type=str, help="Config key name")
    set_parser.add_argument("config_value", type=str, help="Value to set")

    unset_parser = config_sub.add_parser("unset", help="Reset a config key to default")
    unset_parser.add_argument("config_key", type=str, help="Config key name")
