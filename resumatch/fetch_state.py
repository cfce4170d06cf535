"""Per-card tracking of live-postings fetches.

Each job card index owns a small state machine; a card may have at most one
fetch in flight, while different cards fetch independently.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Set

from resumatch.models import LivePosting


class FetchStatus(str, Enum):
    idle = "idle"
    fetching = "fetching"
    ready = "ready"
    failed = "failed"


FETCH_TRANSITIONS: Dict[FetchStatus, Set[FetchStatus]] = {
    FetchStatus.idle: {FetchStatus.fetching},
    FetchStatus.fetching: {FetchStatus.ready, FetchStatus.failed},
    FetchStatus.ready: {FetchStatus.fetching, FetchStatus.idle},
    FetchStatus.failed: {FetchStatus.fetching, FetchStatus.idle},
}


def validate_fetch_transition(current: FetchStatus, new: FetchStatus) -> bool:
    return new in FETCH_TRANSITIONS.get(current, set())


@dataclass
class FetchState:
    status: FetchStatus = FetchStatus.idle
    postings: list[LivePosting] = field(default_factory=list)
    error: str | None = None


class LiveJobsTracker:
    def __init__(self) -> None:
        self._states: dict[int, FetchState] = {}

    def state(self, index: int) -> FetchState:
        return self._states.get(index, FetchState())

    def is_fetching(self, index: int) -> bool:
        return self.state(index).status is FetchStatus.fetching

    def _move(self, index: int, new: FetchStatus) -> FetchState:
        current = self.state(index)
        if not validate_fetch_transition(current.status, new):
            raise ValueError(f"Card {index}: cannot move from {current.status.value} to {new.value}")
        return current

    def begin(self, index: int) -> bool:
        """Mark a fetch as started; ``False`` if one is already in flight."""
        if self.is_fetching(index):
            return False
        previous = self._move(index, FetchStatus.fetching)
        # Earlier results stay visible while a refresh runs
        self._states[index] = FetchState(status=FetchStatus.fetching, postings=previous.postings)
        return True

    def complete(self, index: int, postings: list[LivePosting]) -> None:
        self._move(index, FetchStatus.ready)
        self._states[index] = FetchState(status=FetchStatus.ready, postings=list(postings))

    def fail(self, index: int, message: str) -> None:
        self._move(index, FetchStatus.failed)
        self._states[index] = FetchState(status=FetchStatus.failed, error=message)

    def reset(self, index: int | None = None) -> None:
        if index is None:
            self._states.clear()
        else:
            self._states.pop(index, None)
