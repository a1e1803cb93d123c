"""
Fault result record.
"""

from dataclasses import dataclass

from .busbar import NodeLabel


@dataclass
class Fault:
    """
    Short-circuit currents recorded at a node.

    An output record only; faults are never used as inputs to the solver.

    Attributes:
        node: Faulted node label
        ip50: Peak short-circuit current at 50 Hz (kA)
        ip20: Peak short-circuit current at 20 Hz (kA)
        ib: Symmetrical short-circuit breaking current (kA)
        ik: Steady-state short-circuit current (kA)
        ith: Thermal equivalent short-circuit current (kA)
    """
    node: NodeLabel = None
    ip50: float = 0.0
    ip20: float = 0.0
    ib: float = 0.0
    ik: float = 0.0
    ith: float = 0.0
