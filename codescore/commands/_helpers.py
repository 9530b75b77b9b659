"""Shared helpers used by multiple command modules."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..leaderboard import HistoryEntry

LOGGER = logging.getLogger(__name__)


class InputTooLargeError(ValueError):
    """Code input exceeds the configured max_input_chars."""


class LeaderboardLoadError(ValueError):
    """History file could not be read as a list of scored entries."""


def read_code_input(source: str, *, max_chars: int = 0) -> str:
    """Read code from a file path, or stdin for ``-``.

    Raises InputTooLargeError when ``max_chars`` is positive and exceeded.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(errors="replace")
    if max_chars and len(text) > max_chars:
        LOGGER.debug("Rejecting %s: %d chars > %d", source, len(text), max_chars)
        raise InputTooLargeError(
            f"{source} is {len(text):,} characters; max_input_chars is {max_chars:,} "
            "(raise it with `codescore config set max_input_chars N`)"
        )
    return text


def read_code_pair(args) -> tuple[str, str]:
    if args.original == "-" and args.transformed == "-":
        raise ValueError("Only one of ORIGINAL/TRANSFORMED can be read from stdin")
    max_chars = args.config.get("max_input_chars", 0)
    return (
        read_code_input(args.original, max_chars=max_chars),
        read_code_input(args.transformed, max_chars=max_chars),
    )


def _parse_timestamp(raw: Any, index: int) -> datetime | None:
    """ISO-8601 string or epoch milliseconds; absent means no timestamp."""
    if raw is None:
        return None
    error = LeaderboardLoadError(f"Entry {index} has an invalid timestamp: {raw!r}")
    try:
        if isinstance(raw, str):
            return datetime.fromisoformat(raw)
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise error from exc
    raise error


def _parse_entry(raw: Any, index: int) -> HistoryEntry:
    if not isinstance(raw, dict):
        raise LeaderboardLoadError(f"Entry {index} is not an object")
    score = raw.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise LeaderboardLoadError(f"Entry {index} has no numeric score")
    transformer_id = raw.get("transformer_id", raw.get("transformerId", "unknown"))
    return HistoryEntry(
        transformer_id=str(transformer_id),
        score=score,
        timestamp=_parse_timestamp(raw.get("timestamp"), index),
    )


def load_history(path: str) -> list[HistoryEntry]:
    """Load a JSON list of ``{transformer_id, score, timestamp?}`` entries."""
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, UnicodeDecodeError) as exc:
        raise LeaderboardLoadError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LeaderboardLoadError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise LeaderboardLoadError(f"{path} must contain a JSON list of entries")
    return [_parse_entry(raw, i) for i, raw in enumerate(data)]


def print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))
