"""config command: show/set/unset project configuration."""

from __future__ import annotations

import argparse
import json
import sys
from typing import NoReturn

from .. import config as config_mod
from ..utils import colorize


def cmd_config(args: argparse.Namespace) -> None:
    action = getattr(args, "config_action", None)
    if action == "set":
        _config_set(args)
    elif action == "unset":
        _config_unset(args)
    else:
        _config_show(args)


def _config_show(args: argparse.Namespace) -> None:
    config = getattr(args, "config", None) or config_mod.load_config()
    print(colorize("\n  Config (.codescore/config.json)\n", "bold"))
    for key, schema in config_mod.CONFIG_SCHEMA.items():
        value = config.get(key, schema.default)
        marker = "" if value == schema.default else colorize("  (modified)", "yellow")
        print(f"  {key:<20} {json.dumps(value)}{marker}")
        print(colorize(f"  {'':<20} {schema.description}", "dim"))


def _config_set(args: argparse.Namespace) -> None:
    config = config_mod.load_config()
    try:
        config_mod.set_config_value(config, args.config_key, args.config_value)
    except KeyError as e:
        _unknown_key(e)
    config_mod.save_config(config)
    print(colorize(f"  Set {args.config_key} = {json.dumps(config[args.config_key])}", "green"))


def _config_unset(args: argparse.Namespace) -> None:
    config = config_mod.load_config()
    try:
        config_mod.unset_config_value(config, args.config_key)
    except KeyError as e:
        _unknown_key(e)
    config_mod.save_config(config)
    print(colorize(f"  Reset {args.config_key} to default", "green"))


def _unknown_key(e: KeyError) -> NoReturn:
    print(colorize(f"  {e.args[0]}", "red", sys.stderr), file=sys.stderr)
    known = ", ".join(config_mod.CONFIG_SCHEMA)
    print(colorize(f"  Known keys: {known}", "dim", sys.stderr), file=sys.stderr)
    sys.exit(1)
