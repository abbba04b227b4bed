"""Base classes and shared types for shell modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from seqmatch.config import ShellSettings
from seqmatch.matcher import SequenceMatcher

from .arguments import ArgumentError, Arguments

COMMAND_SEPARATOR = " "


@dataclass(slots=True)
class CommandInput:
    """One shell line split into keyword and raw argument words."""

    keyword: str
    args: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, line: str) -> "CommandInput":
        words = line.split(COMMAND_SEPARATOR)
        return cls(keyword=words[0], args=tuple(words[1:]))

    def arguments(self) -> Arguments:
        return Arguments(self.args)


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_command``."""

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    output: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    payload: object | None = None

    @classmethod
    def lines(cls, *lines: str, status: str = "ok", **kwargs: object) -> "ModeResult":
        return cls(consumed=True, status=status, output=tuple(lines), **kwargs)  # type: ignore[arg-type]

    @classmethod
    def error(cls, message: str, *, status: str = "error") -> "ModeResult":
        return cls(consumed=True, status=status, errors=(message,))

    def extend(self, other: "ModeResult") -> "ModeResult":
        self.output = self.output + other.output
        self.errors = self.errors + other.errors
        return self


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    matcher: SequenceMatcher
    bus: "ModeBus"
    settings: ShellSettings = field(default_factory=ShellSettings)


class ModeBus:
    """Minimal event bus letting modes publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


CommandHandler = Callable[["Mode", Arguments], ModeResult]


class Mode:
    """Base class for shell modes; subclasses fill ``handlers``."""

    name: str = "mode"
    handlers: Dict[str, CommandHandler] = {}

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> ModeResult:
        del previous
        return ModeResult(consumed=True, status="enter")

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_command(self, command: CommandInput) -> ModeResult:
        handler = self.handlers.get(command.keyword)
        if handler is None:
            return ModeResult(consumed=False, status="miss")
        try:
            return handler(self, command.arguments())
        except ArgumentError as exc:
            return ModeResult.error(str(exc), status="argument_error")


__all__ = [
    "CommandHandler",
    "CommandInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
