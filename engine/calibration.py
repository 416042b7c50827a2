"""Per-engine evaluation tuning."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Calibration:
    """
    Per-engine tuning passed unchanged down every recursive call.

    Attributes:
        positional_weight: Multiplier on the piece-square-table balance
                           relative to material. 0 means material only.
    """

    positional_weight: int = 1
