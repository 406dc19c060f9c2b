"""Spin history tallies and chunked spin simulation."""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterator, List, Optional

import numpy as np

from .outcome import spin
from .wheel import Pocket, WheelConfig

LOGGER = logging.getLogger(__name__)

SIMULATION_CHUNK = 10


class SpinHistory:
    """Running tallies of every spin seen at one wheel."""

    def __init__(self, wheel: WheelConfig) -> None:
        self.wheel = wheel
        self.reset()

    def reset(self) -> None:
        self.counts = np.zeros(self.wheel.total_pockets, dtype=np.int64)
        self.spins: List[Pocket] = []
        self.total_wagered = 0.0
        self.total_won = 0.0

    def record(self, pocket: Pocket | int | str, wagered: float = 0, winnings: float = 0) -> Pocket:
        pocket = Pocket.parse(pocket)
        self.counts[self.wheel.pocket_index(pocket)] += 1
        self.spins.append(pocket)
        self.total_wagered += wagered
        self.total_won += winnings
        return pocket

    @property
    def total_spins(self) -> int:
        return len(self.spins)

    @property
    def net(self) -> float:
        return self.total_won - self.total_wagered

    def frequency(self, pocket: Pocket | int | str) -> int:
        return int(self.counts[self.wheel.pocket_index(pocket)])

    def frequencies(self) -> Dict[Pocket, int]:
        return {p: int(c) for p, c in zip(self.wheel.sequence, self.counts)}

    def last(self, n: int = 10) -> List[Pocket]:
        """Most recent spins first."""
        return self.spins[::-1][:n]

    def _ranked(self, descending: bool) -> List[Pocket]:
        sign = -1 if descending else 1
        return sorted(
            self.wheel.sequence,
            key=lambda p: (sign * self.frequency(p), p.layout_order),
        )

    def hot_numbers(self, n: int = 5) -> List[Pocket]:
        return [p for p in self._ranked(descending=True) if self.frequency(p) > 0][:n]

    def cold_numbers(self, n: int = 5) -> List[Pocket]:
        return self._ranked(descending=False)[:n]

    def _tally(self, predicate) -> int:
        return sum(1 for p in self.spins if predicate(p))

    def colour_totals(self) -> Dict[str, int]:
        return {
            "red": self._tally(lambda p: p.color == "red"),
            "black": self._tally(lambda p: p.color == "black"),
            "green": self._tally(lambda p: p.is_zero),
        }

    def parity_totals(self) -> Dict[str, int]:
        return {
            "even": self._tally(lambda p: not p.is_zero and p.number % 2 == 0),
            "odd": self._tally(lambda p: not p.is_zero and p.number % 2 == 1),
        }

    def range_totals(self) -> Dict[str, int]:
        return {
            "low": self._tally(lambda p: not p.is_zero and p.number <= 18),
            "high": self._tally(lambda p: not p.is_zero and p.number > 18),
        }

    @property
    def zero_count(self) -> int:
        return self._tally(lambda p: p.is_zero)

    def chi_square(self) -> float:
        """Pearson statistic of the tallies against a uniform wheel."""
        if not self.spins:
            return 0.0
        expected = self.total_spins / self.wheel.total_pockets
        return float(np.sum((self.counts - expected) ** 2 / expected))


def iter_simulated_spins(
    history: SpinHistory,
    count: int,
    chunk_size: int = SIMULATION_CHUNK,
    rng: Optional[random.Random] = None,
) -> Iterator[int]:
    """Record ``count`` unwagered spins, yielding the running total after each chunk.

    Chunking only controls how often the caller regains control; the draws
    are the same for any chunk size given the same ``rng``.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    simulated = 0
    while simulated < count:
        for _ in range(min(chunk_size, count - simulated)):
            history.record(spin(history.wheel.sequence, rng).pocket)
            simulated += 1
        yield simulated
    LOGGER.debug("Simulated %d spins", simulated)


def simulate_spins(
    history: SpinHistory,
    count: int,
    chunk_size: int = SIMULATION_CHUNK,
    rng: Optional[random.Random] = None,
) -> int:
    simulated = 0
    for simulated in iter_simulated_spins(history, count, chunk_size, rng):
        pass
    return simulated


__all__ = ["SIMULATION_CHUNK", "SpinHistory", "iter_simulated_spins", "simulate_spins"]
