"""Chart builders for the presentation shell.

Figures are built with the object-oriented matplotlib API so no global
pyplot state is touched; callers embed them or pass them to ``save_figure``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from matplotlib.figure import Figure

from .roulette.stats import SpinHistory

POCKET_COLOURS = {"red": "tab:red", "black": "black", "green": "tab:green"}


def spin_frequency_figure(history: SpinHistory) -> Figure:
    """Bar chart of hits per pocket, in layout order, against the uniform expectation."""
    pockets = sorted(history.wheel.sequence, key=lambda p: p.layout_order)
    counts = [history.frequency(p) for p in pockets]
    figure = Figure(figsize=(12, 4))
    ax = figure.add_subplot(1, 1, 1)
    ax.bar(
        [p.label for p in pockets],
        counts,
        color=[POCKET_COLOURS[p.color] for p in pockets],
    )
    if history.total_spins:
        ax.axhline(
            history.total_spins / history.wheel.total_pockets,
            color="tab:blue",
            linestyle="--",
            label="Expected",
        )
        ax.legend()
    ax.set_xlabel("Pocket")
    ax.set_ylabel("Hits")
    ax.set_title(f"{history.wheel.name} wheel: {history.total_spins} spins")
    ax.grid(True, axis="y", alpha=0.3)
    return figure


def count_history_figure(running_counts: Sequence[int]) -> Figure:
    figure = Figure(figsize=(10, 4))
    ax = figure.add_subplot(1, 1, 1)
    values = np.asarray(running_counts)
    ax.plot(np.arange(1, len(values) + 1), values, label="Running count")
    ax.axhline(0, color="grey", linewidth=0.8)
    ax.set_xlabel("Cards dealt")
    ax.set_ylabel("Running count")
    ax.set_title("Running count through the shoe")
    ax.grid(True)
    return figure


def bankroll_figure(starting_bankroll: float, profits: Sequence[float]) -> Figure:
    figure = Figure(figsize=(10, 4))
    ax = figure.add_subplot(1, 1, 1)
    trajectory = starting_bankroll + np.concatenate(([0.0], np.cumsum(profits)))
    ax.plot(np.arange(len(trajectory)), trajectory, label="Bankroll")
    ax.set_xlabel("Hand index")
    ax.set_ylabel("Bankroll")
    ax.set_title("Bankroll trajectory")
    ax.grid(True)
    return figure


def save_figure(figure: Figure, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    figure.tight_layout()
    figure.savefig(path, dpi=150)
    return path


__all__ = [
    "spin_frequency_figure",
    "count_history_figure",
    "bankroll_figure",
    "save_figure",
]
