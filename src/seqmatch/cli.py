"""Line-oriented command shell for the sequence matcher."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from seqmatch.config import ShellSettings
from seqmatch.matcher import SequenceMatcher
from seqmatch.modes import ModeBus, ModeContext, ModeManager, ModeResult
from seqmatch.runtime import telemetry

ERROR_PREFIX = "Error: "


def create_default_manager(settings: Optional[ShellSettings] = None) -> ModeManager:
    """Build a ModeManager over a fresh, empty text store."""

    context = ModeContext(
        matcher=SequenceMatcher(),
        bus=ModeBus(),
        settings=settings or ShellSettings(),
    )
    return ModeManager(context)


class Shell:
    """Feeds lines to a ModeManager and writes results to two streams."""

    def __init__(
        self,
        manager: ModeManager,
        *,
        out: TextIO,
        err: TextIO,
        echo: bool = False,
    ) -> None:
        self.manager = manager
        self.out = out
        self.err = err
        self.echo = echo

    def execute(self, line: str) -> ModeResult:
        if self.echo:
            self.out.write(f"> {line}\n")
        result = self.manager.handle_line(line)
        self.write(result)
        return result

    def run(self, lines: Iterable[str]) -> None:
        for raw in lines:
            if not self.manager.running:
                break
            self.execute(raw.rstrip("\r\n"))

    def write(self, result: ModeResult) -> None:
        for line in result.output:
            self.out.write(line + "\n")
        for message in result.errors:
            self.err.write(ERROR_PREFIX + message + "\n")
        self.out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqmatch",
        description="Find and edit shared token runs between texts.",
    )
    parser.add_argument(
        "--script",
        type=Path,
        help="Read commands from this file instead of standard input.",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        help="Telemetry preset to apply before starting.",
    )
    parser.add_argument(
        "--echo",
        action="store_true",
        help="Echo every command before its output.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = ShellSettings.from_env()
    except ValueError as exc:
        sys.stderr.write(f"{ERROR_PREFIX}{exc}\n")
        return 2

    preset = args.log_preset or settings.log_preset
    if preset:
        telemetry.configure(preset=preset)
    if args.echo:
        settings.echo_commands = True

    shell = Shell(
        create_default_manager(settings),
        out=sys.stdout,
        err=sys.stderr,
        echo=settings.echo_commands,
    )
    if args.script is not None:
        try:
            with args.script.open(encoding="utf-8") as handle:
                shell.run(handle)
        except OSError as exc:
            sys.stderr.write(f"{ERROR_PREFIX}could not read script: {exc}\n")
            return 1
    else:
        shell.run(sys.stdin)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
