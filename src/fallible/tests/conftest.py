"""Shared fixtures: settings isolation and log capture."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from fallible.config import clear_settings_cache
from fallible.logging import LogEntry, NoOpRenderer, set_renderer


@dataclass
class CapturingRenderer:
    """Renderer that keeps entries in memory for assertions."""

    entries: list[LogEntry] = field(default_factory=list)

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def events(self) -> list[str]:
        return [e.event for e in self.entries]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> object:
    """Strip FALLIBLE_ variables, ignore any .env file and reset cached settings and logging."""
    import os

    for key in list(os.environ):
        if key.startswith("FALLIBLE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
    clear_settings_cache()
    set_renderer(NoOpRenderer(), "INFO")
    yield
    clear_settings_cache()
    set_renderer(NoOpRenderer(), "INFO")


@pytest.fixture
def captured_logs() -> CapturingRenderer:
    renderer = CapturingRenderer()
    set_renderer(renderer, "DEBUG")
    return renderer


@pytest.fixture
def trace_steps(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_TRACE_STEPS", "true")
    clear_settings_cache()
