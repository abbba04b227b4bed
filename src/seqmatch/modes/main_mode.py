"""Top-level mode: text store, analysis, statistics, and entering edits."""

from __future__ import annotations

from typing import Dict

from seqmatch.analysis.statistics import (
    ListMetric,
    SortOrder,
    format_histogram,
    format_pair_list,
)
from seqmatch.errors import Outcome
from seqmatch.runtime import telemetry
from seqmatch.tokenization import resolve_strategy

from .arguments import ArgumentError, Arguments
from .base_mode import CommandHandler, Mode, ModeResult

TOKEN_SEPARATOR = "~"
ERROR_INVALID_METRIC = "invalid metric"
ERROR_INVALID_ORDER = "invalid order"
ERROR_NO_ANALYSIS = "No analysis result available."
ERROR_METRIC_NOT_PERCENTAGE = "Metric must be a percentage."


def _from_outcome(outcome: Outcome[object]) -> ModeResult:
    if not outcome.ok:
        return ModeResult.error(outcome.error.message, status=outcome.error.kind.value)  # type: ignore[union-attr]
    if outcome.message:
        return ModeResult.lines(outcome.message)
    return ModeResult(consumed=True)


def _parse_metric(args: Arguments) -> ListMetric:
    metric = ListMetric.from_name(args.parse_string())
    if metric is None:
        raise ArgumentError(ERROR_INVALID_METRIC)
    return metric


def _parse_order(args: Arguments) -> SortOrder:
    if args.exhausted:
        return SortOrder.DESCENDING
    order = SortOrder.from_name(args.parse_string())
    if order is None:
        raise ArgumentError(ERROR_INVALID_ORDER)
    return order


def _handle_input(mode: Mode, args: Arguments) -> ModeResult:
    identifier = args.parse_string()
    text = args.parse_remaining()
    return _from_outcome(mode.context.matcher.input(identifier, text))


def _handle_load(mode: Mode, args: Arguments) -> ModeResult:
    path = args.parse_string()
    args.finish()
    return _from_outcome(mode.context.matcher.load(path))


def _handle_tokenization(mode: Mode, args: Arguments) -> ModeResult:
    identifier = args.parse_string()
    strategy_name = args.parse_string()
    args.finish()
    strategy = resolve_strategy(strategy_name)
    if not strategy.ok:
        return _from_outcome(strategy)
    tokens = mode.context.matcher.tokenize(identifier, strategy.unwrap())
    if not tokens.ok:
        return _from_outcome(tokens)
    return ModeResult.lines(TOKEN_SEPARATOR.join(tokens.unwrap()))


def _handle_analyze(mode: Mode, args: Arguments) -> ModeResult:
    strategy_name = args.parse_string()
    min_match_length = args.parse_integer()
    args.finish()
    strategy = resolve_strategy(strategy_name)
    if not strategy.ok:
        return _from_outcome(strategy)
    result = mode.context.matcher.analyze(strategy.unwrap(), min_match_length)
    if result.ok:
        mode.context.bus.emit("analysis.complete", result.value)
    return _from_outcome(result)


def _handle_clear(mode: Mode, args: Arguments) -> ModeResult:
    args.finish()
    return _from_outcome(mode.context.matcher.clear())


def _handle_list(mode: Mode, args: Arguments) -> ModeResult:
    metric = _parse_metric(args)
    order = _parse_order(args)
    args.finish()
    snapshot = mode.context.matcher.snapshot
    if snapshot is None:
        return ModeResult.error(ERROR_NO_ANALYSIS)
    return ModeResult.lines(format_pair_list(snapshot, metric, order))


def _handle_top(mode: Mode, args: Arguments) -> ModeResult:
    limit = args.parse_positive()
    metric = _parse_metric(args)
    order = _parse_order(args)
    args.finish()
    snapshot = mode.context.matcher.snapshot
    if snapshot is None:
        return ModeResult.error(ERROR_NO_ANALYSIS)
    return ModeResult.lines(format_pair_list(snapshot, metric, order, limit=limit))


def _handle_histogram(mode: Mode, args: Arguments) -> ModeResult:
    metric = _parse_metric(args)
    args.finish()
    snapshot = mode.context.matcher.snapshot
    if snapshot is None:
        return ModeResult.error(ERROR_NO_ANALYSIS)
    if not metric.is_percentage:
        return ModeResult.error(ERROR_METRIC_NOT_PERCENTAGE)
    return ModeResult.lines(format_histogram(snapshot, metric))


def _handle_matches(mode: Mode, args: Arguments) -> ModeResult:
    first_id = args.parse_string()
    second_id = args.parse_string()
    args.finish()
    return _from_outcome(mode.context.matcher.pair_matches(first_id, second_id))


def _handle_edit(mode: Mode, args: Arguments) -> ModeResult:
    first_id = args.parse_string()
    second_id = args.parse_string()
    args.finish()
    opened = mode.context.matcher.open_editor(first_id, second_id)
    if not opened.ok:
        return _from_outcome(opened)
    telemetry.record_event(
        "editor.open",
        data={"first": first_id, "second": second_id},
        logger_name="seqmatch.modes",
    )
    return ModeResult(consumed=True, switch_to="edit", status="enter_edit", payload=opened.unwrap())


_MAIN_HANDLERS: Dict[str, CommandHandler] = {
    "input": _handle_input,
    "load": _handle_load,
    "tokenization": _handle_tokenization,
    "analyze": _handle_analyze,
    "clear": _handle_clear,
    "list": _handle_list,
    "top": _handle_top,
    "histogram": _handle_histogram,
    "matches": _handle_matches,
    "edit": _handle_edit,
}


class MainMode(Mode):
    name = "main"
    handlers = _MAIN_HANDLERS


__all__ = ["MainMode"]
