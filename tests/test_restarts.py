import random
import sys
from pathlib import Path

# Ensure project root is on PYTHONPATH when tests are run via `pytest`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from search import AttemptOutcome, RestartConfig, run_with_restarts


def test_stops_at_first_successful_attempt():
    seen = []

    def attempt(i: int, rng: random.Random) -> AttemptOutcome[str]:
        seen.append(i)
        if i == 3:
            return AttemptOutcome.succeeded(f"won at {i}")
        return AttemptOutcome.failed(f"failed at {i}")

    result = run_with_restarts(attempt, RestartConfig(max_attempts=10, seed=1))

    assert result.succeeded
    assert result.value == "won at 3"
    assert result.attempts == 4
    assert result.winning_attempt == 3
    assert result.last_failure == "failed at 2"
    assert seen == [0, 1, 2, 3]


def test_exhaustion_reports_last_failure():
    def attempt(i: int, rng: random.Random) -> AttemptOutcome[str]:
        return AttemptOutcome.failed(i)

    result = run_with_restarts(attempt, RestartConfig(max_attempts=5))

    assert not result.succeeded
    assert result.value is None
    assert result.attempts == 5
    assert result.winning_attempt is None
    assert result.last_failure == 4


def test_callback_sees_every_attempt():
    calls = []

    def attempt(i: int, rng: random.Random) -> AttemptOutcome[int]:
        return AttemptOutcome.succeeded(i) if i == 1 else AttemptOutcome.failed()

    def callback(attempt: int, outcome: AttemptOutcome) -> None:
        calls.append((attempt, outcome.ok))

    run_with_restarts(attempt, RestartConfig(max_attempts=3), callback=callback)

    assert calls == [(0, False), (1, True)]


def test_same_seed_gives_same_draws():
    def attempt(i: int, rng: random.Random) -> AttemptOutcome[float]:
        return AttemptOutcome.succeeded(rng.random())

    a = run_with_restarts(attempt, RestartConfig(seed=42))
    b = run_with_restarts(attempt, RestartConfig(seed=42))
    c = run_with_restarts(attempt, rng=random.Random(42))

    assert a.value == b.value == c.value


def test_rejects_non_positive_cap():
    with pytest.raises(ValueError):
        run_with_restarts(lambda i, rng: AttemptOutcome.succeeded(i), RestartConfig(max_attempts=0))
