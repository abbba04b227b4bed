from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from seqmatch.runtime import telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []
        self.context: dict = {}
        self.components: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, dict(pairs)))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield


def make_fake(monkeypatch: pytest.MonkeyPatch, name: str = "test.telemetry") -> FakeLogger:
    fake = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, name, fake)
    return fake


def test_record_event_attaches_data(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = make_fake(monkeypatch)

    telemetry.record_event("store.text", data={"identifier": "a"}, logger_name="test.telemetry")

    assert fake.records == [
        ("info", "event::store.text", {"event": "store.text", "identifier": "a"})
    ]


def test_unknown_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    make_fake(monkeypatch)

    with pytest.raises(ValueError):
        telemetry.record_event("x", level="shout", logger_name="test.telemetry")


def test_span_cleans_context_and_reports_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = make_fake(monkeypatch)

    with pytest.raises(KeyError):
        with telemetry.span(
            "editor::add",
            logger_name="test.telemetry",
            component="editor",
            metadata={"pair": "a-b"},
        ):
            assert fake.context == {"pair": "a-b"}
            raise KeyError("boom")

    assert fake.context == {}
    assert fake.components == ["editor"]
    level, message, payload = fake.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["component"] == "editor"


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")
    with pytest.raises(ValueError):
        telemetry._build_preset_config("loud")
