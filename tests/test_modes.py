from pathlib import Path
from typing import List

import pytest

from seqmatch.cli import create_default_manager
from seqmatch.config import ShellSettings
from seqmatch.modes import CommandInput, EditMode, ModeManager, ModeResult, render_context_line

STATUS_SUFFIX = "Available commands: matches, print, add, extend, truncate, discard, set, exit."


def make_manager(settings: ShellSettings | None = None) -> ModeManager:
    return create_default_manager(settings)


def run(manager: ModeManager, line: str) -> ModeResult:
    return manager.handle_line(line)


def make_analyzed_manager(settings: ShellSettings | None = None) -> ModeManager:
    manager = make_manager(settings)
    run(manager, "input left the quick brown fox jumps")
    run(manager, "input right a quick brown fox sleeps the")
    run(manager, "analyze word 1")
    return manager


def test_command_input_splits_on_single_spaces() -> None:
    command = CommandInput.parse("add 1 2 3")

    assert command.keyword == "add"
    assert command.args == ("1", "2", "3")


def test_input_reports_loaded_then_updated() -> None:
    manager = make_manager()

    assert run(manager, "input left a b").output == ("Loaded left",)
    assert run(manager, "input left c d").output == ("Updated left",)


def test_load_uses_file_name(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("alpha beta", encoding="utf-8")
    manager = make_manager()

    assert run(manager, f"load {path}").output == ("Loaded notes.txt",)
    assert run(manager, f"load {tmp_path / 'missing.txt'}").errors == ("Could not read file.",)


def test_tokenization_joins_tokens() -> None:
    manager = make_manager()
    run(manager, "input left don't stop-me")

    assert run(manager, "tokenization left smart").output == ("don't~stop-me",)
    assert run(manager, "tokenization left fancy").errors == (
        "Unknown tokenization strategy: fancy",
    )
    assert run(manager, "tokenization ghost word").errors == (
        "No text stored for identifier 'ghost'.",
    )


def test_analyze_reports_timing_and_validates_length() -> None:
    manager = make_manager()
    run(manager, "input left a b")

    assert run(manager, "analyze word 0").errors == ("Minimum match length must be positive.",)
    assert run(manager, "analyze word x").errors == ("'x' must be an integer.",)
    timing = run(manager, "analyze word 1").output
    assert len(timing) == 1 and timing[0].startswith("Analysis took ")
    assert timing[0].endswith("ms")


def test_statistics_commands_need_analysis() -> None:
    manager = make_manager()

    for line in ("list avg", "top 1 len", "histogram avg", "edit a b"):
        assert run(manager, line).errors == ("No analysis result available.",)


def test_statistics_commands() -> None:
    manager = make_analyzed_manager()

    assert run(manager, "list avg").output == ("left-right: 72.73%",)
    assert run(manager, "top 1 len asc").output == ("left-right: 4",)
    assert run(manager, "list median").errors == ("invalid metric",)
    assert run(manager, "list avg sideways").errors == ("invalid order",)
    assert run(manager, "histogram len").errors == ("Metric must be a percentage.",)
    histogram = run(manager, "histogram avg").output[0].splitlines()
    assert histogram[2] == ":| 1"


def test_matches_command_lists_pair_matches() -> None:
    manager = make_analyzed_manager()

    assert run(manager, "matches right left").output == (
        "Match of length 3: 1-1\nMatch of length 1: 5-0",
    )


def test_edit_session_round_trip() -> None:
    manager = make_analyzed_manager()
    events: List[str] = []
    manager.context.bus.subscribe("edit.commit", lambda payload: events.append(str(payload)))

    entered = run(manager, "edit left right")
    assert entered.output == (
        f"Comparison of left, right: 72.73% similarity, 2 matches. {STATUS_SUFFIX}",
    )
    assert isinstance(manager.active_mode, EditMode)

    assert run(manager, "matches").output[:2] == (
        "Match of length 1: 0-5",
        "Match of length 3: 1-1",
    )
    printed = run(manager, "print 2 1").output
    assert printed[:2] == (
        "left: the [quick brown fox] jumps",
        "right: a [quick brown fox] sleeps",
    )

    assert run(manager, "add 0 0 1").errors == ("Tokens do not match in the selected range.",)
    assert run(manager, "truncate 2 3").errors == ("Match cannot be truncated completely.",)
    discarded = run(manager, "discard 1").output
    assert discarded[-1].startswith("Comparison of left, right: 54.55% similarity, 1 matches.")
    assert len(events) == 1

    assert run(manager, "set first").output[0].startswith(
        "Comparison of left, right: 60.00% similarity"
    )
    assert run(manager, "set bogus").errors == ("invalid metric.",)
    assert run(manager, "print 1 -1").errors == ("'-1' must be non-negative.",)

    assert run(manager, "exit").output == ("OK, exit editing mode.",)
    assert manager.editing is None
    assert run(manager, "matches left right").output == ("Match of length 3: 1-1",)


def test_print_uses_configured_default_context() -> None:
    manager = make_analyzed_manager(ShellSettings(default_context=1))
    run(manager, "edit left right")

    assert run(manager, "print 1").output[:2] == (
        "left: [the] quick",
        "right: sleeps [the]",
    )


def test_only_one_editing_session() -> None:
    manager = make_analyzed_manager()
    run(manager, "edit left right")

    assert run(manager, "edit left right").errors == ("unknown command",)
    editor = manager.context.matcher.open_editor("left", "right").unwrap()
    assert manager.enter_editing(editor).errors == ("an editing session is already active.",)


def test_edit_keywords_ignore_case_but_main_keywords_do_not() -> None:
    manager = make_analyzed_manager()

    assert run(manager, "INPUT x a b").errors == ("unknown command",)

    run(manager, "edit left right")
    result = run(manager, "MATCHES")
    assert result.errors == ()
    assert result.output[:2] == ("Match of length 1: 0-5", "Match of length 3: 1-1")
    assert run(manager, "Exit").output == ("OK, exit editing mode.",)
    assert manager.editing is None


def test_unknown_command_and_clear() -> None:
    manager = make_analyzed_manager()

    assert run(manager, "frobnicate").errors == ("unknown command",)
    assert run(manager, "clear").output == ("Cleared all texts.",)
    assert manager.context.matcher.snapshot is None


def test_quit_stops_manager() -> None:
    manager = make_analyzed_manager()
    quits: List[object] = []
    manager.context.bus.subscribe("session.quit", quits.append)
    run(manager, "edit left right")

    assert run(manager, "quit now").errors == ("too many arguments provided.",)
    result = run(manager, "quit")

    assert result.status == "quit"
    assert not manager.running
    assert manager.editing is None
    assert quits == [None]
    with pytest.raises(RuntimeError):
        run(manager, "list avg")


def test_render_context_line_brackets_match() -> None:
    assert render_context_line("t", ["a", "b", "c"], 1, 1) == "t: a [b] c"
    assert render_context_line("t", ["a", "b", "c"], 0, 3) == "t: [a b c]"
