"""Tests for the codescore CLI: parser, command handlers, error exits."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

import codescore.config as config_mod
from codescore.cli import create_parser, main
from codescore.commands import config_cmd, get_command_handlers
from codescore.commands._helpers import (
    InputTooLargeError,
    LeaderboardLoadError,
    load_history,
    read_code_input,
)
from codescore.utils import print_table


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    path = tmp_path / ".codescore" / "config.json"
    monkeypatch.setattr(config_mod, "CONFIG_FILE", path)
    return path


def _write(tmp_path, name: str, text: str) -> str:
    p = tmp_path / name
    p.write_text(text)
    return str(p)


# ===========================================================================
# parser
# ===========================================================================

class TestParser:
    def test_score_requires_transformer(self, capsys):
        with pytest.raises(SystemExit) as exc:
            create_parser().parse_args(["score", "a.js", "b.js"])
        assert exc.value.code == 2

    def test_score_args(self):
        args = create_parser().parse_args(["score", "a.js", "b.js", "-t", "minify", "--json"])
        assert args.command == "score"
        assert args.transformer == "minify"
        assert args.json is True

    def test_command_required(self, capsys):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_every_command_has_a_handler(self):
        assert set(get_command_handlers()) == {"score", "readability", "challenge", "leaderboard", "config"}


# ===========================================================================
# score / readability / challenge
# ===========================================================================

class TestScoringCommands:
    def test_score_json(self, tmp_path, capsys):
        original = _write(tmp_path, "a.js", "let x = 1;")
        transformed = _write(tmp_path, "b.js", "let xValue = 1;")
        main(["score", original, transformed, "-t", "rename-variables", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["score"] == 88
        assert payload["base_points"] == 25
        assert payload["bonus_points"] == 55

    def test_score_uses_configured_points(self, tmp_path, capsys, _isolated_config):
        config_mod.save_config({"transformer_points": {"prettify": 15}}, _isolated_config)
        original = _write(tmp_path, "a.js", "abc")
        main(["score", original, original, "-t", "prettify", "--json"])
        assert json.loads(capsys.readouterr().out)["score"] == 15

    def test_score_text(self, tmp_path, capsys):
        original = _write(tmp_path, "a.js", "abc")
        main(["score", original, original, "-t", "unknown-id"])
        out = capsys.readouterr().out
        assert "unknown-id: 5 pts" in out
        assert "base 5" in out

    def test_readability_json(self, tmp_path, capsys):
        path = _write(tmp_path, "a.js", "eval('x');")
        main(["readability", path, "--json"])
        assert json.loads(capsys.readouterr().out) == {
            "score": 90, "label": "Excellent", "color": "green",
        }

    def test_readability_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("let x = 1;"))
        main(["readability", "-"])
        assert "Readability: 95/100 (Excellent)" in capsys.readouterr().out

    def test_challenge_json(self, tmp_path, capsys):
        original = _write(tmp_path, "a.js", "eval(x);")
        transformed = _write(tmp_path, "b.js", "const y = x;")
        main(["challenge", original, transformed, "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["score"] == 78
        assert payload["breakdown"]["evalRemoval"] == 20

    def test_challenge_table(self, tmp_path, capsys):
        original = _write(tmp_path, "a.js", "eval(x);")
        transformed = _write(tmp_path, "b.js", "const y = x;")
        main(["challenge", original, transformed])
        out = capsys.readouterr().out
        assert "Challenge score: 78/100" in out
        assert "Eval removal" in out
        assert "+20" in out


# ===========================================================================
# leaderboard
# ===========================================================================

class TestLeaderboardCommand:
    def _history(self, tmp_path) -> str:
        entries = [
            {"transformerId": "format", "score": 12},
            {"transformer_id": "minify", "score": 63},
            {"transformer_id": "jsx-to-js", "score": 40},
        ]
        return _write(tmp_path, "history.json", json.dumps(entries))

    def test_json(self, tmp_path, capsys):
        main(["leaderboard", self._history(tmp_path), "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert [row["transformer_id"] for row in payload["leaderboard"]] == ["minify", "jsx-to-js", "format"]
        assert payload["summary"] == {"transformations": 3, "total_score": 115, "average_points": 38}
        assert payload["level"] == "Code Adept"
        assert payload["next_milestone"] == 200
        assert payload["milestone_progress"] == 15.0

    def test_limit(self, tmp_path, capsys):
        main(["leaderboard", self._history(tmp_path), "--limit", "1", "--json"])
        assert len(json.loads(capsys.readouterr().out)["leaderboard"]) == 1

    def test_text(self, tmp_path, capsys):
        main(["leaderboard", self._history(tmp_path)])
        out = capsys.readouterr().out
        assert "Jsx to js" in out
        assert "Code Adept" in out

    def test_empty_history(self, tmp_path, capsys):
        main(["leaderboard", _write(tmp_path, "h.json", "[]")])
        assert "No transformations applied yet." in capsys.readouterr().out

    def test_bad_history_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["leaderboard", _write(tmp_path, "h.json", '{"score": 1}')])
        assert exc.value.code == 1
        assert "JSON list" in capsys.readouterr().err

    def test_negative_scores_keep_their_sign(self, tmp_path, capsys):
        entries = [
            {"transformer_id": "es6-to-es5", "score": -5},
            {"transformer_id": "format", "score": 12},
        ]
        main(["leaderboard", _write(tmp_path, "h.json", json.dumps(entries))])
        out = capsys.readouterr().out
        assert "+12 pts" in out
        assert "-5 pts" in out
        assert "+-5" not in out

    def test_timestamps_shown(self, tmp_path, capsys):
        entries = [
            {"transformer_id": "format", "score": 12, "timestamp": "2024-05-01T09:30:00"},
            {"transformer_id": "minify", "score": 63},
        ]
        path = _write(tmp_path, "h.json", json.dumps(entries))
        main(["leaderboard", path])
        out = capsys.readouterr().out
        assert "When" in out
        assert "2024-05-01 09:30" in out

        main(["leaderboard", path, "--json"])
        rows = json.loads(capsys.readouterr().out)["leaderboard"]
        assert rows[0]["timestamp"] is None
        assert rows[1]["timestamp"] == "2024-05-01T09:30:00"

    def test_no_when_column_without_timestamps(self, tmp_path, capsys):
        main(["leaderboard", self._history(tmp_path)])
        assert "When" not in capsys.readouterr().out

    def test_string_limit_in_config_uses_default(self, tmp_path, capsys, _isolated_config):
        _isolated_config.parent.mkdir(parents=True)
        _isolated_config.write_text(json.dumps({"leaderboard_limit": "1"}))
        main(["leaderboard", self._history(tmp_path), "--json"])
        assert len(json.loads(capsys.readouterr().out)["leaderboard"]) == 3


class TestLoadHistory:
    def test_missing_file(self, tmp_path):
        with pytest.raises(LeaderboardLoadError):
            load_history(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        with pytest.raises(LeaderboardLoadError):
            load_history(_write(tmp_path, "h.json", "nope"))

    @pytest.mark.parametrize("raw", ['[1]', '[{"score": "10"}]', '[{"score": true}]', '[{}]'])
    def test_bad_entries(self, tmp_path, raw):
        with pytest.raises(LeaderboardLoadError):
            load_history(_write(tmp_path, "h.json", raw))

    def test_unknown_transformer_default(self, tmp_path):
        entries = load_history(_write(tmp_path, "h.json", '[{"score": 3}]'))
        assert entries[0].transformer_id == "unknown"
        assert entries[0].score == 3

    def test_iso_timestamp(self, tmp_path):
        raw = '[{"score": 3, "timestamp": "2024-05-01T09:30:00Z"}]'
        entry = load_history(_write(tmp_path, "h.json", raw))[0]
        assert entry.timestamp == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def test_epoch_millisecond_timestamp(self, tmp_path):
        raw = '[{"score": 3, "timestamp": 1000}]'
        entry = load_history(_write(tmp_path, "h.json", raw))[0]
        assert entry.timestamp == datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)

    def test_missing_timestamp(self, tmp_path):
        entry = load_history(_write(tmp_path, "h.json", '[{"score": 3}]'))[0]
        assert entry.timestamp is None

    @pytest.mark.parametrize("stamp", ['"yesterday"', "true", "{}", "[1]"])
    def test_bad_timestamp(self, tmp_path, stamp):
        raw = f'[{{"score": 3, "timestamp": {stamp}}}]'
        with pytest.raises(LeaderboardLoadError, match="invalid timestamp"):
            load_history(_write(tmp_path, "h.json", raw))


# ===========================================================================
# input size guard
# ===========================================================================

class TestInputGuard:
    def test_read_code_input_limit(self, tmp_path):
        path = _write(tmp_path, "a.js", "x" * 10)
        assert read_code_input(path, max_chars=10) == "x" * 10
        assert read_code_input(path, max_chars=0) == "x" * 10
        with pytest.raises(InputTooLargeError):
            read_code_input(path, max_chars=9)

    def test_too_large_exits(self, tmp_path, capsys, _isolated_config):
        config_mod.save_config({"max_input_chars": 5}, _isolated_config)
        path = _write(tmp_path, "a.js", "let value = 1;")
        with pytest.raises(SystemExit) as exc:
            main(["readability", path])
        assert exc.value.code == 1
        assert "max_input_chars" in capsys.readouterr().err

    def test_missing_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["readability", str(tmp_path / "missing.js")])
        assert exc.value.code == 1

    def test_both_stdin_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["challenge", "-", "-"])
        assert exc.value.code == 1
        assert "stdin" in capsys.readouterr().err


# ===========================================================================
# config
# ===========================================================================

class TestConfigCommand:
    def test_routes_set(self, monkeypatch):
        calls: list[str] = []
        monkeypatch.setattr(config_cmd, "_config_set", lambda _args: calls.append("set"))
        monkeypatch.setattr(config_cmd, "_config_unset", lambda _args: calls.append("unset"))
        monkeypatch.setattr(config_cmd, "_config_show", lambda _args: calls.append("show"))

        config_cmd.cmd_config(SimpleNamespace(config_action="set"))
        config_cmd.cmd_config(SimpleNamespace(config_action="unset"))
        config_cmd.cmd_config(SimpleNamespace(config_action=None))
        assert calls == ["set", "unset", "show"]

    def test_set_persists(self, capsys, _isolated_config):
        main(["config", "set", "leaderboard_limit", "3"])
        assert json.loads(_isolated_config.read_text())["leaderboard_limit"] == 3
        assert "Set leaderboard_limit = 3" in capsys.readouterr().out

    def test_unset_persists(self, capsys, _isolated_config):
        main(["config", "set", "leaderboard_limit", "3"])
        main(["config", "unset", "leaderboard_limit"])
        assert json.loads(_isolated_config.read_text())["leaderboard_limit"] == 10

    def test_show_marks_modified(self, capsys):
        main(["config", "set", "max_input_chars", "unlimited"])
        capsys.readouterr()
        main(["config", "show"])
        out = capsys.readouterr().out
        assert "max_input_chars" in out
        assert "(modified)" in out

    def test_unknown_key_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["config", "set", "nope", "1"])
        assert exc.value.code == 1
        assert "Unknown config key: nope" in capsys.readouterr().err

    def test_unset_unknown_key_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["config", "unset", "nope"])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "Unknown config key: nope" in err
        assert "leaderboard_limit" in err


# ===========================================================================
# error reporting
# ===========================================================================

class TestErrorReporting:
    def test_handler_key_error_is_not_swallowed(self, monkeypatch):
        def broken(_args):
            raise KeyError("missing")

        monkeypatch.setitem(get_command_handlers(), "readability", broken)
        with pytest.raises(KeyError):
            main(["readability", "-"])

    def test_value_error_exits_with_message(self, monkeypatch, capsys):
        def broken(_args):
            raise ValueError("bad input")

        monkeypatch.setitem(get_command_handlers(), "readability", broken)
        with pytest.raises(SystemExit) as exc:
            main(["readability", "-"])
        assert exc.value.code == 1
        assert "bad input" in capsys.readouterr().err


# ===========================================================================
# table output
# ===========================================================================

class TestPrintTable:
    def test_columns_sized_to_widest_cell(self, capsys):
        print_table(["#", "Name"], [["1", "Format"], ["10", "X"]])
        assert capsys.readouterr().out.splitlines() == [
            "  #   Name",
            "  " + "─" * 10,
            "  1   Format",
            "  10  X",
        ]

    def test_no_rows_prints_nothing(self, capsys):
        print_table(["#"], [])
        assert capsys.readouterr().out == ""
