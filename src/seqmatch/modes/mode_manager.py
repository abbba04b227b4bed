"""Mode manager owning the active mode and the single editing slot."""

from __future__ import annotations

from typing import Dict, Optional

from seqmatch.editor import ComparisonEditor
from seqmatch.runtime import telemetry

from .arguments import ERROR_TOO_MANY_ARGUMENTS
from .base_mode import CommandInput, Mode, ModeContext, ModeResult
from .edit_mode import EditMode
from .main_mode import MainMode

ERROR_UNKNOWN_COMMAND = "unknown command"
ERROR_ALREADY_EDITING = "an editing session is already active."
QUIT_KEYWORD = "quit"


class ModeManager:
    """Dispatches shell lines to the main mode or the open editing session.

    ``editing`` is the only place an editing session lives; it is set by
    ``enter_editing`` and cleared by ``exit_editing``.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.main = MainMode(context)
        self.editing: Optional[EditMode] = None
        self.running = True

    @property
    def active_mode(self) -> Mode:
        return self.editing if self.editing is not None else self.main

    def enter_editing(self, editor: ComparisonEditor) -> ModeResult:
        if self.editing is not None:
            return ModeResult.error(ERROR_ALREADY_EDITING)
        self.editing = EditMode(self.context, editor)
        telemetry.record_event(
            "mode.switch",
            data={"mode": self.editing.name, "pair": f"{editor.first_id}-{editor.second_id}"},
            logger_name="seqmatch.modes",
        )
        return self.editing.on_enter(self.main.name)

    def exit_editing(self) -> None:
        if self.editing is None:
            return
        self.editing.on_exit(self.main.name)
        self.editing = None
        telemetry.record_event(
            "mode.switch", data={"mode": self.main.name}, logger_name="seqmatch.modes"
        )

    def handle_line(self, line: str) -> ModeResult:
        if not self.running:
            raise RuntimeError("Mode manager already stopped")
        command = CommandInput.parse(line)
        if command.keyword == QUIT_KEYWORD:
            return self._quit(command)

        mode = self.active_mode
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"command": command.keyword, "mode": mode.name},
        ):
            result = mode.handle_command(command)
        if not result.consumed:
            return ModeResult.error(ERROR_UNKNOWN_COMMAND, status="unknown_command")
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.switch_to == EditMode.name and isinstance(result.payload, ComparisonEditor):
            return result.extend(self.enter_editing(result.payload))
        if result.switch_to == MainMode.name:
            self.exit_editing()
        return result

    def _quit(self, command: CommandInput) -> ModeResult:
        if command.args:
            return ModeResult.error(ERROR_TOO_MANY_ARGUMENTS, status="argument_error")
        self.exit_editing()
        self.running = False
        self.context.bus.emit("session.quit", None)
        return ModeResult(consumed=True, status="quit")


__all__ = ["ModeManager"]
