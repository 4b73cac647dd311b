"""Bounded randomized restarts.

This module provides a small, problem-agnostic search driver: run an attempt
function up to ``max_attempts`` times, each time with the attempt index and a
shared random source, and stop at the first attempt that succeeds.

It is the backbone of the section scheduler but knows nothing about
timetables. The contract on the attempt function is simple:

- it receives the attempt index (0-based) and the RNG
- it must not mutate anything shared unless it succeeds
- it returns an ``AttemptOutcome`` (success + value, or failure + reason)

The loop is an explicit bounded ``for`` loop (no recursion), so total work is
capped by ``max_attempts`` and every attempt can be inspected via the
callback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Protocol, TypeVar

import random


TValue = TypeVar("TValue")


@dataclass(frozen=True)
class AttemptOutcome(Generic[TValue]):
    ok: bool
    value: Optional[TValue] = None
    failure: Any = None

    @classmethod
    def succeeded(cls, value: TValue) -> "AttemptOutcome[TValue]":
        return cls(ok=True, value=value)

    @classmethod
    def failed(cls, failure: Any = None) -> "AttemptOutcome[TValue]":
        return cls(ok=False, failure=failure)


class AttemptFn(Protocol[TValue]):
    def __call__(self, attempt: int, rng: random.Random) -> AttemptOutcome[TValue]:  # pragma: no cover
        """Run one isolated attempt."""


class AttemptCallbackFn(Protocol):
    def __call__(self, attempt: int, outcome: AttemptOutcome) -> None:  # pragma: no cover
        """Optional hook called after every attempt."""


@dataclass(frozen=True)
class RestartConfig:
    """Configuration for the restart loop.

    Attributes:
        max_attempts: Hard cap on the number of attempts.
        seed: RNG seed used when no RNG is supplied by the caller.
    """

    max_attempts: int = 50
    seed: Optional[int] = None


@dataclass
class RestartResult(Generic[TValue]):
    value: Optional[TValue]
    succeeded: bool
    attempts: int
    last_failure: Any = None

    @property
    def winning_attempt(self) -> Optional[int]:
        """0-based index of the successful attempt, or None."""

        return self.attempts - 1 if self.succeeded else None


def run_with_restarts(
    attempt_fn: AttemptFn[TValue],
    config: RestartConfig = RestartConfig(),
    rng: Optional[random.Random] = None,
    callback: Optional[AttemptCallbackFn] = None,
) -> RestartResult[TValue]:
    """Run ``attempt_fn`` until it succeeds or the attempt cap is reached.

    Returns:
        RestartResult with the winning value (if any), the number of attempts
        used and the failure reason reported by the last failed attempt.
    """

    if int(config.max_attempts) < 1:
        raise ValueError("max_attempts must be >= 1")

    if rng is None:
        rng = random.Random(config.seed)

    last_failure: Any = None
    for attempt in range(int(config.max_attempts)):
        outcome = attempt_fn(attempt, rng)

        if callback is not None:
            callback(attempt=attempt, outcome=outcome)

        if outcome.ok:
            return RestartResult(
                value=outcome.value,
                succeeded=True,
                attempts=attempt + 1,
                last_failure=last_failure,
            )
        last_failure = outcome.failure

    return RestartResult(
        value=None,
        succeeded=False,
        attempts=int(config.max_attempts),
        last_failure=last_failure,
    )
