"""Request lifecycle.

IDLE → ACQUIRING → DECODING → TRANSFORMING → CONVERTING → PARSING → RENDERED,
with FAILED reachable from ACQUIRING..PARSING. FAILED always ends in RENDERED.
There is no way back to an earlier state: nothing is retried.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class RequestState(str, enum.Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    DECODING = "decoding"
    TRANSFORMING = "transforming"
    CONVERTING = "converting"
    PARSING = "parsing"
    FAILED = "failed"
    RENDERED = "rendered"


_FAILABLE = {
    RequestState.ACQUIRING,
    RequestState.DECODING,
    RequestState.TRANSFORMING,
    RequestState.CONVERTING,
    RequestState.PARSING,
}

_TRANSITIONS: dict[RequestState, set[RequestState]] = {
    RequestState.IDLE: {RequestState.ACQUIRING},
    # ACQUIRING → RENDERED is the landing view (no image supplied)
    RequestState.ACQUIRING: {RequestState.DECODING, RequestState.RENDERED},
    RequestState.DECODING: {RequestState.TRANSFORMING},
    RequestState.TRANSFORMING: {RequestState.CONVERTING},
    RequestState.CONVERTING: {RequestState.PARSING},
    RequestState.PARSING: {RequestState.RENDERED},
    RequestState.FAILED: {RequestState.RENDERED},
    RequestState.RENDERED: set(),
}


@dataclass
class RequestTrace:
    """Tracks one request through its states and its wall-clock time."""

    state: RequestState = RequestState.IDLE
    failure_kind: str | None = None
    started: float = field(default_factory=time.perf_counter)
    history: list[RequestState] = field(default_factory=lambda: [RequestState.IDLE])

    def advance(self, new_state: RequestState) -> None:
        allowed = set(_TRANSITIONS[self.state])
        if self.state in _FAILABLE:
            allowed.add(RequestState.FAILED)
        if new_state not in allowed:
            raise RuntimeError(f"Illegal transition {self.state.name} -> {new_state.name}")
        logger.debug("Request %s -> %s", self.state.name, new_state.name)
        self.state = new_state
        self.history.append(new_state)

    def fail(self, kind: str) -> None:
        self.failure_kind = kind
        self.advance(RequestState.FAILED)

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started
