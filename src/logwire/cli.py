"""Where: src/logwire/cli.py
What: Command line tool to pre-flight or apply a logging configuration file.
Why: Catch configuration mistakes before an application starts with them.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from logwire.config.configurator import LoggerSettings, collect_blocks, parse_settings
from logwire.config.loader import configure_from_file, load_config
from logwire.domain.errors import HandlerIOError, InvalidConfigError, UnknownLevelError
from logwire.domain.levels import Level, lookup
from logwire.logger import get_logger


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="logwire",
            description="Validate or apply a logwire logging configuration file.",
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        check_parser = subparsers.add_parser(
            "check",
            help="Validate a configuration file without changing any logger",
        )
        _ = check_parser.add_argument(
            "config",
            nargs="?",
            type=Path,
            help="Configuration file (defaults to $LOGWIRE_CONFIG or ./logwire.toml)",
            metavar="CONFIG",
        )

        apply_parser = subparsers.add_parser(
            "apply",
            help="Apply a configuration file and optionally emit a test message",
        )
        _ = apply_parser.add_argument("config", nargs="?", type=Path, metavar="CONFIG")
        _ = apply_parser.add_argument(
            "--emit",
            nargs=2,
            metavar=("LEVEL", "MESSAGE"),
            help="Log MESSAGE at LEVEL through the configured logger",
        )
        _ = apply_parser.add_argument(
            "--node",
            default="",
            help="Logger used by --emit (default: the root logger)",
        )
        return parser


@final
class CommandProcessor:
    """Run the parsed command and translate failures into exit codes."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def process_command(self, args_list: Sequence[str] | None = None) -> int:
        args = ArgumentParser.create_parser().parse_args(args_list)
        try:
            if args.command == "check":
                return self.check(args.config)
            return self.apply(args.config, args.emit, args.node)
        except InvalidConfigError as exc:
            self.console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
            return 1
        except HandlerIOError as exc:
            self.console.print(f"[red]Handler failure:[/red] {escape(str(exc))}")
            return 1

    def check(self, config: Path | None) -> int:
        tree = load_config(config)
        plan = [parse_settings(block, allow_nested_blocks=True) for block in collect_blocks(tree)]
        self.console.print(render_plan(plan))
        self.console.print(f"[green]OK[/green]: {len(plan)} logger block(s) valid")
        return 0

    def apply(self, config: Path | None, emit: list[str] | None, node: str) -> int:
        level: Level | None = None
        if emit is not None:
            try:
                level = lookup(emit[0])
            except UnknownLevelError as exc:
                raise InvalidConfigError(str(exc), keys=[emit[0]]) from exc

        configured = configure_from_file(config)
        self.console.print(f"[green]Applied[/green] {len(configured)} logger block(s)")
        if emit is not None and level is not None:
            get_logger(node).log(level, emit[1])
        return 0


def render_plan(plan: Sequence[LoggerSettings]) -> Table:
    """Summarise parsed blocks as a Rich table."""

    table = Table(title="Logging configuration")
    table.add_column("Node")
    table.add_column("Level")
    table.add_column("Handlers")
    table.add_column("Roll")
    table.add_column("Use parents")
    for settings in plan:
        handlers: list[str] = []
        if settings.console:
            handlers.append("console")
        if settings.filename is not None:
            handlers.append(f"file:{escape(settings.filename)}")
        table.add_row(
            escape(settings.node) or "(root)",
            settings.level.name,
            ", ".join(handlers) or "-",
            settings.roll.describe() if settings.filename is not None else "-",
            "yes" if settings.use_parents else "no",
        )
    return table


def main() -> int:
    """Main entry point."""

    return CommandProcessor().process_command(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
