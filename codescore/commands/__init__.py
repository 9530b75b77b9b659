"""Central command registry for CLI command handler resolution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

CommandHandler = Callable[[Any], None]

_COMMAND_HANDLERS: dict[str, CommandHandler] | None = None


def _build_handlers() -> dict[str, CommandHandler]:
    """Import all command modules and build the handler dict on first access."""
    from codescore.commands.challenge import cmd_challenge
    from codescore.commands.config_cmd import cmd_config
    from codescore.commands.leaderboard import cmd_leaderboard
    from codescore.commands.readability import cmd_readability
    from codescore.commands.score import cmd_score

    return {
        "score": cmd_score,
        "readability": cmd_readability,
        "challenge": cmd_challenge,
        "leaderboard": cmd_leaderboard,
        "config": cmd_config,
    }


def get_command_handlers() -> dict[str, CommandHandler]:
    global _COMMAND_HANDLERS
    if _COMMAND_HANDLERS is None:
        _COMMAND_HANDLERS = _build_handlers()
    return _COMMAND_HANDLERS
