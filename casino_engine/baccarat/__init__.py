"""Baccarat side-bet counting."""

from .sidebets import BaccaratCounter, EgaliteLine, egalite_ev, hand_total

__all__ = ["BaccaratCounter", "EgaliteLine", "egalite_ev", "hand_total"]
