"""Uniform spin outcomes drawn from the physical wheel sequence."""

from __future__ import annotations

import logging
import random
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence

from .wheel import Pocket

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinOutcome:
    pocket: Pocket
    index: int
    angle: float


def spin(sequence: Sequence[Pocket], rng: Optional[random.Random] = None) -> SpinOutcome:
    """Pick a pocket uniformly from the physical wheel order.

    Uses the operating system's secure source unless a seeded ``rng`` is
    supplied for replay. The angle is computed from the chosen pocket and
    never feeds back into the draw.
    """
    if not sequence:
        raise ValueError("Cannot spin an empty wheel")
    source = rng if rng is not None else secrets.SystemRandom()
    index = source.randrange(len(sequence))
    pocket = sequence[index]
    angle = index * 360.0 / len(sequence)
    LOGGER.debug("Spin landed on %s (index %d)", pocket, index)
    return SpinOutcome(pocket=pocket, index=index, angle=angle)


__all__ = ["SpinOutcome", "spin"]
