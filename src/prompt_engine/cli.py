"""
Command-line interface for the prompt engine.

Asks a single question from a shell script and prints the answer, or
inspects the active configuration and keybindings.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from prompt_engine.config import PromptConfig, config_search_paths, load_config
from prompt_engine.logging import setup_logging
from prompt_engine.prompts import question
from prompt_engine.tui.keybindings import KeybindingsManager
from prompt_engine.tui.loop import CANCELLED
from prompt_engine.tui.terminal import PromptIO, TerminalKeySource, terminal_rows

# Prompts draw on stdout, everything else goes to stderr
console = Console(stderr=True)

EXIT_CANCELLED = 130


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Ask interactive questions in the terminal",
        prog="prompt-engine",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a YAML config file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Choice prompts
    for name, help_text in (("list", "Pick one option"), ("checkbox", "Mark any number of options")):
        choice_parser = subparsers.add_parser(name, help=help_text)
        choice_parser.add_argument("label", help="Question text")
        choice_parser.add_argument("options", nargs="*", help="Option labels")
        choice_parser.add_argument(
            "-f",
            "--options-file",
            help="YAML mapping of label to value or to {value, selected, requires}",
        )
        choice_parser.add_argument(
            "-n",
            "--window-size",
            type=int,
            help="Number of options shown at once",
        )
        choice_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Text prompts
    input_parser = subparsers.add_parser("input", help="Ask for a line of text")
    input_parser.add_argument("label", help="Question text")
    input_parser.add_argument("-d", "--default", help="Answer used for a blank line")
    input_parser.add_argument("--json", action="store_true", help="Output as JSON")

    password_parser = subparsers.add_parser("password", help="Ask for a secret")
    password_parser.add_argument("label", help="Question text")
    password_parser.add_argument("-m", "--mask", default="*", help="Mask pattern")
    password_parser.add_argument(
        "--hidden",
        action="store_true",
        help="Do not echo anything while typing",
    )
    password_parser.add_argument("--json", action="store_true", help="Output as JSON")

    confirm_parser = subparsers.add_parser("confirm", help="Ask a yes/no question")
    confirm_parser.add_argument("label", help="Question text")
    default_group = confirm_parser.add_mutually_exclusive_group()
    default_group.add_argument("-y", "--yes", action="store_true", help="Default to yes")
    default_group.add_argument("-N", "--no", action="store_true", help="Default to no")
    confirm_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Keybindings
    subparsers.add_parser("keys", help="Show the active keybindings")

    # Config command with subcommands
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")
    config_subparsers.add_parser("show", help="Show current configuration")
    config_init_parser = config_subparsers.add_parser("init", help="Initialize a new config file")
    config_init_parser.add_argument(
        "-o",
        "--output",
        default="prompt-engine.yaml",
        help="Output file path",
    )

    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        setup_logging("DEBUG")
    else:
        setup_logging("WARNING")

    load_dotenv()

    if args.command in ("list", "checkbox", "input", "password", "confirm"):
        config = _load_config(args.config)
        result = asyncio.run(cmd_ask(args, config))
        _print_answer(result, args.json)
    elif args.command == "keys":
        cmd_keys(_load_config(args.config))
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


def _load_config(path: str | None) -> PromptConfig:
    try:
        return load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(2)


def _read_options(args: argparse.Namespace) -> Any:
    """Options from ``--options-file`` if given, else the positional labels."""
    if args.options_file:
        with open(args.options_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, (dict, list)):
            console.print(f"[red]Options file must hold a mapping or a list: {args.options_file}[/red]")
            sys.exit(2)
        return data
    return list(args.options)


def _stderr_rows() -> int | None:
    try:
        fd = sys.stderr.fileno()
    except OSError:
        return None
    return terminal_rows(fd)


def _prompt_io() -> PromptIO:
    """Terminal capabilities drawing on stderr, leaving stdout to the answer."""
    return PromptIO(
        keys=TerminalKeySource(),
        output=sys.stderr,
        rows=_stderr_rows,
    )


async def cmd_ask(args: argparse.Namespace, config: PromptConfig) -> Any:
    """Ask the question selected by the subcommand."""
    io = _prompt_io()
    if args.command in ("list", "checkbox"):
        if args.window_size is not None:
            config.window_size = max(1, args.window_size)
        return await question(args.command, args.label, _read_options(args), io=io, config=config)
    if args.command == "input":
        return await question("input", args.label, args.default, io=io, config=config)
    if args.command == "password":
        substitute: bool | str = False if args.hidden else args.mask
        return await question("password", args.label, substitute, io=io, config=config)

    default = True if args.yes else False if args.no else None
    return await question("confirm", args.label, default, io=io, config=config)


def _print_answer(result: Any, as_json: bool) -> None:
    if result is CANCELLED:
        sys.exit(EXIT_CANCELLED)

    if as_json:
        print(json.dumps(result))
    elif isinstance(result, list):
        for item in result:
            print(item)
    elif result is not None:
        print(result)


def cmd_keys(config: PromptConfig) -> None:
    """Show the active keybindings in every platform notation."""
    manager = config.build_keybindings()

    table = Table(title="Keybindings")
    table.add_column("Action", style="cyan")
    table.add_column("Linux")
    table.add_column("Windows", style="dim")
    table.add_column("macOS", style="dim")

    for action in manager.actions():
        combos = manager.combos(action)
        table.add_row(
            action,
            ", ".join(c.to_string_linux() for c in combos),
            ", ".join(c.to_string_windows() for c in combos),
            ", ".join(c.to_string_mac() for c in combos),
        )

    console.print(table)


def cmd_config(args: argparse.Namespace) -> None:
    """Configuration management commands."""
    if args.config_command == "show":
        _config_show(args.config)
    elif args.config_command == "init":
        _config_init(args.output)
    else:
        console.print("[yellow]Usage: prompt-engine config <show|init>[/yellow]")


def _config_show(path: str | None) -> None:
    """Show current configuration."""
    loaded_from = Path(path) if path else next(
        (p for p in config_search_paths() if p.is_file()), None
    )
    config = _load_config(path)

    if loaded_from is None:
        console.print("[dim]No config file found. Using defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from: {loaded_from}[/dim]\n")

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True))


def _config_init(output: str) -> None:
    """Initialize a new config file."""
    output_path = Path(output)

    if output_path.exists():
        console.print(f"[red]File already exists: {output_path}[/red]")
        sys.exit(1)

    default_config = PromptConfig().to_dict()
    manager = KeybindingsManager()
    default_config["keybindings"] = {action: manager.get_keys(action) for action in manager.actions()}

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    console.print(f"[green]Created config file: {output_path}[/green]")


if __name__ == "__main__":
    main()
