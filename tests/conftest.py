"""Shared fixtures and fakes for the Outline Toolkit test-suite."""

import logging
from typing import Any, Callable, Dict, List

import pytest

from outline_toolkit.config import ConfigManager
from outline_toolkit.core.models import OutlineEntry

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user config at a temp dir and drop the cached ConfigManager."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("OUTLINE_TOOLKIT_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


# ---------------------------
# Sample outlines
# ---------------------------

@pytest.fixture
def intro_entries() -> List[Dict[str, Any]]:
    """Two headings as an extractor message: Intro (H1) containing Sub (H2)."""
    return [
        {"level": 1, "text": "Intro", "pos": 0, "sectionEnd": 50},
        {"level": 2, "text": "Sub", "pos": 10, "sectionEnd": 50},
    ]


@pytest.fixture
def doc_entries() -> List[OutlineEntry]:
    """A two-root outline with a level jump under Alpha.

    Alpha [0, 100)
      Setup [10, 50)
        Install [20, 50)
      Usage [50, 100)
    Beta [100, 200)
      Advanced setup [120, 200)
    """
    return [
        OutlineEntry(1, "Alpha", 0, 100),
        OutlineEntry(2, "Setup", 10, 50),
        OutlineEntry(3, "Install", 20, 50),
        OutlineEntry(2, "Usage", 50, 100),
        OutlineEntry(1, "Beta", 100, 200),
        OutlineEntry(2, "Advanced setup", 120, 200),
    ]


# ---------------------------
# Fakes
# ---------------------------

class ManualScheduler:
    """Tk ``after``/``after_cancel`` stand-in that runs jobs on demand."""

    def __init__(self) -> None:
        self._seq = 0
        self.jobs: Dict[int, Callable[[], None]] = {}
        self.delays: List[int] = []
        self.cancelled: List[int] = []

    def after(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._seq += 1
        self.jobs[self._seq] = callback
        self.delays.append(delay_ms)
        return self._seq

    def after_cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        self.jobs.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self.jobs)

    def run_all(self) -> int:
        ran = 0
        while self.jobs:
            handle = min(self.jobs)
            callback = self.jobs.pop(handle)
            callback()
            ran += 1
        return ran


class FakeHost:
    """Records reveal calls; optionally raises like a disposed widget."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.reveals: List[tuple] = []

    def reveal(self, item, *, expand=True, select=True, focus=False) -> None:
        if self.fail:
            raise RuntimeError("host disposed")
        self.reveals.append((item, expand, select, focus))


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
