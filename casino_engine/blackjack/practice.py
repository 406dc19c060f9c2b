"""Running-count check drills used by the practice modes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class CheckResult(enum.Enum):
    CORRECT = "correct"
    WRONG = "wrong"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class CountCheck:
    result: CheckResult
    expected: int
    answer: Optional[int]


@dataclass
class CountChallenge:
    """Scores count answers; the countdown itself belongs to the caller."""

    checks: int = 0
    correct: int = 0
    timeouts: int = 0
    history: List[CountCheck] = field(default_factory=list)

    def submit(self, answer: int, running_count: int) -> CountCheck:
        result = CheckResult.CORRECT if int(answer) == running_count else CheckResult.WRONG
        return self._record(CountCheck(result, running_count, int(answer)))

    def timeout(self, running_count: int) -> CountCheck:
        self.timeouts += 1
        return self._record(CountCheck(CheckResult.TIMEOUT, running_count, None))

    def _record(self, check: CountCheck) -> CountCheck:
        self.checks += 1
        if check.result is CheckResult.CORRECT:
            self.correct += 1
        self.history.append(check)
        return check

    @property
    def accuracy(self) -> float:
        return self.correct / self.checks if self.checks else 0.0

    def reset(self) -> None:
        self.checks = 0
        self.correct = 0
        self.timeouts = 0
        self.history.clear()


__all__ = ["CheckResult", "CountCheck", "CountChallenge"]
