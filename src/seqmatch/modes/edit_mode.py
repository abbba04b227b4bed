"""Editing mode bound to one ``ComparisonEditor`` session."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from seqmatch.editor import ComparisonEditor, ComparisonMetric, format_percentage
from seqmatch.errors import Outcome

from .arguments import ArgumentError, Arguments
from .base_mode import CommandHandler, CommandInput, Mode, ModeContext, ModeResult

MATCH_FORMAT = "Match of length {length}: {first}-{second}"
STATUS_FORMAT = (
    "Comparison of {first}, {second}: {percent}% similarity, {count} matches. "
    "Available commands: matches, print, add, extend, truncate, discard, set, exit."
)
MESSAGE_EXIT = "OK, exit editing mode."
ERROR_INVALID_METRIC = "invalid metric."
ERROR_CONTEXT_NEGATIVE = "'{value}' must be non-negative."


def render_context_line(
    identifier: str, tokens: Sequence[str], match_start: int, match_length: int
) -> str:
    """Render ``identifier: a b [c d] e`` with the match bracketed."""

    match_end = match_start + match_length
    words: List[str] = []
    for index, token in enumerate(tokens):
        word = token
        if index == match_start:
            word = "[" + word
        if index + 1 == match_end:
            word = word + "]"
        words.append(word)
    return f"{identifier}: {' '.join(words)}"


class EditMode(Mode):
    name = "edit"

    def __init__(
        self,
        context: ModeContext,
        editor: ComparisonEditor,
        *,
        metric: Optional[ComparisonMetric] = None,
    ) -> None:
        super().__init__(context)
        self.editor = editor
        self.metric = metric or context.settings.default_metric

    def on_enter(self, previous: Optional[str]) -> ModeResult:
        del previous
        self.context.bus.emit("edit.enter", (self.editor.first_id, self.editor.second_id))
        return ModeResult.lines(self.status_line(), status="enter")

    def handle_command(self, command: CommandInput) -> ModeResult:
        # Editing keywords are case-insensitive; main-mode keywords are not.
        return super().handle_command(CommandInput(command.keyword.lower(), command.args))

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.context.bus.emit("edit.exit", (self.editor.first_id, self.editor.second_id))

    def status_line(self) -> str:
        similarity = self.metric.compute(
            self.editor.total_match_length,
            self.editor.first_token_count,
            self.editor.second_token_count,
        )
        return STATUS_FORMAT.format(
            first=self.editor.first_id,
            second=self.editor.second_id,
            percent=format_percentage(similarity)[:-1],
            count=self.editor.match_count,
        )

    def after_edit(self, outcome: Outcome[object], *lines: str) -> ModeResult:
        if not outcome.ok:
            return ModeResult.error(outcome.error.message, status=outcome.error.kind.value)  # type: ignore[union-attr]
        self.context.bus.emit("edit.commit", outcome.value)
        return ModeResult.lines(*lines, self.status_line())


def _handle_matches(mode: EditMode, args: Arguments) -> ModeResult:
    args.finish()
    lines = [
        MATCH_FORMAT.format(length=view.length, first=view.first_index, second=view.second_index)
        for view in mode.editor.matches()
    ]
    return ModeResult.lines(*lines, mode.status_line())


def _handle_print(mode: EditMode, args: Arguments) -> ModeResult:
    match_number = args.parse_positive()
    context_size = mode.context.settings.default_context
    if not args.exhausted:
        context_size = args.parse_integer()
        if context_size < 0:
            raise ArgumentError(ERROR_CONTEXT_NEGATIVE.format(value=context_size))
    args.finish()
    outcome = mode.editor.context_for_match(match_number, context_size)
    if not outcome.ok:
        return mode.after_edit(outcome)
    context = outcome.unwrap()
    return ModeResult.lines(
        render_context_line(
            mode.editor.first_id, context.first_tokens, context.first_match_start, context.length
        ),
        render_context_line(
            mode.editor.second_id, context.second_tokens, context.second_match_start, context.length
        ),
        mode.status_line(),
    )


def _handle_add(mode: EditMode, args: Arguments) -> ModeResult:
    first_index = args.parse_integer()
    second_index = args.parse_integer()
    length = args.parse_positive()
    args.finish()
    return mode.after_edit(mode.editor.add_match(first_index, second_index, length))


def _handle_extend(mode: EditMode, args: Arguments) -> ModeResult:
    match_number = args.parse_positive()
    delta = args.parse_integer()
    args.finish()
    return mode.after_edit(mode.editor.extend_match(match_number, delta))


def _handle_truncate(mode: EditMode, args: Arguments) -> ModeResult:
    match_number = args.parse_positive()
    delta = args.parse_integer()
    args.finish()
    return mode.after_edit(mode.editor.truncate_match(match_number, delta))


def _handle_discard(mode: EditMode, args: Arguments) -> ModeResult:
    match_number = args.parse_positive()
    args.finish()
    return mode.after_edit(mode.editor.discard_match(match_number))


def _handle_set(mode: EditMode, args: Arguments) -> ModeResult:
    name = args.parse_string()
    args.finish()
    metric = ComparisonMetric.from_name(name)
    if metric is None:
        return ModeResult.error(ERROR_INVALID_METRIC)
    mode.metric = metric
    return ModeResult.lines(mode.status_line())


def _handle_exit(mode: EditMode, args: Arguments) -> ModeResult:
    args.finish()
    return ModeResult(
        consumed=True, switch_to="main", status="exit_edit", output=(MESSAGE_EXIT,)
    )


_EDIT_HANDLERS: Dict[str, CommandHandler] = {
    "matches": _handle_matches,  # type: ignore[dict-item]
    "print": _handle_print,  # type: ignore[dict-item]
    "add": _handle_add,  # type: ignore[dict-item]
    "extend": _handle_extend,  # type: ignore[dict-item]
    "truncate": _handle_truncate,  # type: ignore[dict-item]
    "discard": _handle_discard,  # type: ignore[dict-item]
    "set": _handle_set,  # type: ignore[dict-item]
    "exit": _handle_exit,  # type: ignore[dict-item]
}

EditMode.handlers = _EDIT_HANDLERS


__all__ = ["EditMode", "render_context_line"]
