"""Tests for CLI commands."""

import json
import sys
from pathlib import Path
from textwrap import dedent
from unittest.mock import patch

import pytest
import yaml

from prompt_engine.cli import EXIT_CANCELLED, main
from prompt_engine.tui.loop import CANCELLED
from prompt_engine.tui.terminal import TerminalKeySource


class FakeQuestion:
    """Stands in for question() and records how it was called."""

    def __init__(self, answer) -> None:
        self.answer = answer
        self.calls: list[tuple] = []

    async def __call__(self, prompt_type, label, *args, **kwargs):
        self.calls.append((prompt_type, label, args, kwargs))
        return self.answer


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every command away from real config and .env files."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestAskCommands:
    """Tests for the question subcommands."""

    def test_list_prints_answer(self, capsys) -> None:
        """The chosen value is printed on stdout."""
        fake = FakeQuestion("b")

        with patch("prompt_engine.cli.question", fake):
            main(["list", "Pick one", "a", "b"])

        assert capsys.readouterr().out == "b\n"
        prompt_type, label, args, kwargs = fake.calls[0]
        assert (prompt_type, label, args) == ("list", "Pick one", (["a", "b"],))
        assert kwargs["config"].window_size == 7

    def test_prompt_drawn_on_stderr(self, capsys) -> None:
        """The prompt draws on stderr so stdout carries only the answer."""
        fake = FakeQuestion("Ada")

        with patch("prompt_engine.cli.question", fake):
            main(["input", "Name"])

        io = fake.calls[0][3]["io"]
        assert io.output is sys.stderr
        assert isinstance(io.keys, TerminalKeySource)
        assert capsys.readouterr().out == "Ada\n"

    def test_checkbox_json(self, capsys) -> None:
        """--json prints the answer as JSON."""
        with patch("prompt_engine.cli.question", FakeQuestion(["a", "c"])):
            main(["checkbox", "Pick", "a", "b", "c", "--json"])

        assert json.loads(capsys.readouterr().out) == ["a", "c"]

    def test_checkbox_one_per_line(self, capsys) -> None:
        """Without --json each selected value is printed on its own line."""
        with patch("prompt_engine.cli.question", FakeQuestion(["a", "c"])):
            main(["checkbox", "Pick", "a", "b", "c"])

        assert capsys.readouterr().out == "a\nc\n"

    def test_options_file(self, tmp_path: Path) -> None:
        """--options-file passes the YAML mapping through."""
        options_file = tmp_path / "options.yaml"
        options_file.write_text(
            dedent("""
                Cheese:
                  value: cheese
                  selected: true
                Crackers:
                  value: crackers
                  requires: Cheese
            """).strip(),
            encoding="utf-8",
        )
        fake = FakeQuestion([])

        with patch("prompt_engine.cli.question", fake):
            main(["checkbox", "Snacks?", "-f", str(options_file)])

        options = fake.calls[0][2][0]
        assert options["Crackers"] == {"value": "crackers", "requires": "Cheese"}

    def test_options_file_must_be_collection(self, tmp_path: Path) -> None:
        """A scalar options file is rejected."""
        options_file = tmp_path / "options.yaml"
        options_file.write_text("just text", encoding="utf-8")

        with patch("prompt_engine.cli.question", FakeQuestion(None)):
            with pytest.raises(SystemExit) as exc_info:
                main(["list", "Pick", "-f", str(options_file)])

        assert exc_info.value.code == 2

    def test_window_size_flag(self) -> None:
        """--window-size overrides the configured window."""
        fake = FakeQuestion("a")

        with patch("prompt_engine.cli.question", fake):
            main(["list", "Pick", "a", "-n", "3"])

        assert fake.calls[0][3]["config"].window_size == 3

    def test_input_default(self) -> None:
        """--default is passed as the input default."""
        fake = FakeQuestion("x")

        with patch("prompt_engine.cli.question", fake):
            main(["input", "Name?", "-d", "anon"])

        assert fake.calls[0][:3] == ("input", "Name?", ("anon",))

    def test_password_hidden(self) -> None:
        """--hidden disables the mask."""
        fake = FakeQuestion("pw")

        with patch("prompt_engine.cli.question", fake):
            main(["password", "Password?", "--hidden"])

        assert fake.calls[0][2] == (False,)

    @pytest.mark.parametrize(
        "flags,default",
        [([], None), (["--yes"], True), (["--no"], False)],
    )
    def test_confirm_default(self, flags: list[str], default, capsys) -> None:
        """--yes / --no set the confirm default."""
        fake = FakeQuestion(True)

        with patch("prompt_engine.cli.question", fake):
            main(["confirm", "Continue?", *flags])

        assert fake.calls[0][2] == (default,)
        assert capsys.readouterr().out == "True\n"

    def test_cancelled_exit_status(self, capsys) -> None:
        """A cancelled prompt exits with status 130 and prints nothing."""
        with patch("prompt_engine.cli.question", FakeQuestion(CANCELLED)):
            with pytest.raises(SystemExit) as exc_info:
                main(["input", "Name?"])

        assert exc_info.value.code == EXIT_CANCELLED
        assert capsys.readouterr().out == ""

    def test_config_file_applies(self, tmp_path: Path) -> None:
        """-c loads the given YAML config."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("window_size: 4\n", encoding="utf-8")
        fake = FakeQuestion("a")

        with patch("prompt_engine.cli.question", fake):
            main(["-c", str(config_file), "list", "Pick", "a"])

        assert fake.calls[0][3]["config"].window_size == 4

    def test_invalid_config(self, tmp_path: Path, capsys) -> None:
        """An invalid config exits with status 2."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("window_size: 0\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config_file), "input", "Name?"])

        assert exc_info.value.code == 2
        assert "Invalid configuration" in capsys.readouterr().err


class TestKeysCommand:
    """Tests for the keys command."""

    def test_table(self, capsys) -> None:
        """Every action is listed with its chords."""
        main(["keys"])

        err = capsys.readouterr().err
        assert "cancel" in err
        assert "Ctrl+c" in err
        assert "page_down" in err


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_defaults(self, capsys) -> None:
        """Without files the defaults are shown."""
        main(["config", "show"])

        err = capsys.readouterr().err
        assert "No config file found" in err
        assert "window_size: 7" in err

    def test_show_file(self, tmp_path: Path, capsys) -> None:
        """An explicit config file is reported and shown."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("window_size: 5\n", encoding="utf-8")

        main(["-c", str(config_file), "config", "show"])

        err = capsys.readouterr().err
        assert "Loaded from" in err
        assert "window_size: 5" in err

    def test_init(self, tmp_path: Path) -> None:
        """init writes a config file with the default keybindings."""
        output = tmp_path / "prompt-engine.yaml"

        main(["config", "init", "-o", str(output)])

        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["window_size"] == 7
        assert data["keybindings"]["cancel"] == ["ctrl+c"]

    def test_init_refuses_overwrite(self, tmp_path: Path) -> None:
        """init does not overwrite an existing file."""
        output = tmp_path / "prompt-engine.yaml"
        output.write_text("window_size: 3\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["config", "init", "-o", str(output)])

        assert exc_info.value.code == 1
        assert output.read_text(encoding="utf-8") == "window_size: 3\n"


class TestHelp:
    """Tests for running without a command."""

    def test_no_command_prints_help(self, capsys) -> None:
        """No subcommand prints usage."""
        main([])

        assert "usage: prompt-engine" in capsys.readouterr().out
