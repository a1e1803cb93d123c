"""
Calculation options for a fault impedance computation.
"""

from dataclasses import dataclass
from enum import Enum


class TransformerSide(Enum):
    """Winding side to which transformer impedances are referred."""
    HV = "hv"
    MV = "mv"
    LV = "lv"


@dataclass(frozen=True)
class CalculationOptions:
    """
    Settings shared by every element during one computation.

    Attributes:
        transformer_side: Side two-winding transformers are referred to
            (MV is treated as LV)
        three_winding_side: Side three-winding transformer star impedances
            are referred to
        station_side: Side power-station unit transformers are referred to
        generator_tolerance_kv: A generator's rated voltage is raised by its
            regulation range when it differs from the nominal system voltage
            by more than this value
        peak: Use the fictitious generator resistance for peak currents
        six_percent: Low-voltage systems with +6 % tolerance (c_max = 1.05)
        workers: Number of threads used for the per-node solves
    """
    transformer_side: TransformerSide = TransformerSide.LV
    three_winding_side: TransformerSide = TransformerSide.LV
    station_side: TransformerSide = TransformerSide.HV
    generator_tolerance_kv: float = 1.0
    peak: bool = False
    six_percent: bool = True
    workers: int = 1

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


DEFAULT_OPTIONS = CalculationOptions()
