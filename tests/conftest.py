"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio

import pytest

from gremlin_remote.process.remote import RemoteRequest, RemoteResult
from gremlin_remote.process.strategies import StrategyKind, TraversalStrategy
from gremlin_remote.process.traversal import Traverser


class RecordingStrategy(TraversalStrategy):
    """Strategy that logs when its apply starts and ends.

    It also appends a marker step so its effect on the traversal is visible.
    """

    def __init__(
        self,
        kind: StrategyKind,
        log: list[tuple[str, str]],
        *,
        delay: float = 0.0,
        fail: bool = False,
    ) -> None:
        super().__init__(kind)
        self.log = log
        self.delay = delay
        self.fail = fail

    async def apply(self, traversal) -> None:
        self.log.append(("start", self.name))
        await asyncio.sleep(self.delay)
        traversal.add_step("marker", self.name)
        if self.fail:
            raise RuntimeError(f"{self.name} failed")
        self.log.append(("end", self.name))


class FakeConnection:
    """In-memory RemoteConnection that records every submitted request."""

    def __init__(self, objects: list | None = None) -> None:
        self.requests: list[RemoteRequest] = []
        self._objects = objects or []

    async def submit(self, request: RemoteRequest) -> RemoteResult:
        self.requests.append(request)
        return RemoteResult(traversers=[Traverser(object=obj) for obj in self._objects])


@pytest.fixture
def apply_log() -> list[tuple[str, str]]:
    return []


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("GREMLIN_REMOTE_STRATEGY_RESERVED_KEYS", raising=False)
