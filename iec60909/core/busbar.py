"""
Busbars and the voltage correction factor index.

A busbar ties several node labels to one electrical node sharing a nominal
voltage and the voltage correction factors c_max / c_min.
"""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

# Node labels may be any hashable value (str, int, tuple, ...)
NodeLabel = Hashable

LOW_VOLTAGE_LIMIT_KV = 1.0
MEDIUM_VOLTAGE_LIMIT_KV = 35.0


def voltage_correction_factor(un_kv: float, minimum: bool = False, six_percent: bool = True) -> float:
    """
    Voltage correction factor c according to IEC 60909-0 Table 1.

    Args:
        un_kv: Nominal system voltage in kV
        minimum: If True, return c_min (minimum short-circuit currents)
        six_percent: For low-voltage systems, True when the tolerance is +6 %
            (c_max = 1.05), False for +10 % (c_max = 1.10)

    Returns:
        Voltage correction factor c
    """
    if minimum:
        if un_kv <= LOW_VOLTAGE_LIMIT_KV:
            return 0.95
        return 1.0

    if un_kv <= LOW_VOLTAGE_LIMIT_KV:
        return 1.05 if six_percent else 1.10
    if un_kv <= MEDIUM_VOLTAGE_LIMIT_KV:
        return 1.10
    return 1.10


@dataclass
class Busbar:
    """
    A physical connection point shared by several node labels.

    Attributes:
        nodes: Node labels tied to this busbar
        un: Nominal system voltage (kV)
        cmax: Voltage correction factor for maximum short-circuit currents
            (defaults to the IEC 60909-0 Table 1 value when None)
        cmin: Voltage correction factor for minimum short-circuit currents
    """
    nodes: list[NodeLabel] = field(default_factory=list)
    un: float = 0.0
    cmax: float | None = None
    cmin: float | None = None

    def __post_init__(self):
        self.nodes = list(self.nodes)
        if self.un < 0:
            raise ValueError(f"Busbar nominal voltage must not be negative, got {self.un}")

    def c_max(self, six_percent: bool = True) -> float:
        """Effective c_max: explicit value or the Table 1 default."""
        if self.cmax:
            return self.cmax
        return voltage_correction_factor(self.un, minimum=False, six_percent=six_percent)

    def c_min(self) -> float:
        """Effective c_min: explicit value or the Table 1 default."""
        if self.cmin:
            return self.cmin
        return voltage_correction_factor(self.un, minimum=True)


class BusbarIndex:
    """
    Read-only lookup from node label to the busbar it belongs to.

    Built once per computation. Elements keep only labels; all busbar data is
    resolved through this index.
    """

    def __init__(self, busbars: Iterable[Busbar] = (), six_percent: bool = True):
        self.six_percent = six_percent
        self._index: dict[NodeLabel, Busbar] = {}
        for busbar in busbars:
            for node in busbar.nodes:
                self._index[node] = busbar

    @classmethod
    def empty(cls, six_percent: bool = True) -> "BusbarIndex":
        return cls((), six_percent=six_percent)

    def busbar(self, node: NodeLabel) -> Busbar | None:
        """Return the busbar owning a node label, or None."""
        return self._index.get(node)

    def un(self, node: NodeLabel) -> float | None:
        """Nominal voltage (kV) of the busbar owning a node label."""
        busbar = self._index.get(node)
        return busbar.un if busbar is not None else None

    def cmax(self, node: NodeLabel) -> float | None:
        """Effective c_max of the busbar owning a node label."""
        busbar = self._index.get(node)
        return busbar.c_max(self.six_percent) if busbar is not None else None

    def cmin(self, node: NodeLabel) -> float | None:
        busbar = self._index.get(node)
        return busbar.c_min() if busbar is not None else None

    def __contains__(self, node: NodeLabel) -> bool:
        return node in self._index

    def __len__(self) -> int:
        return len(self._index)

    def resolve(self, node: NodeLabel, ur_kv: float) -> tuple[float, float]:
        """
        Nominal voltage and c_max at a node.

        Falls back to the element's rated voltage and the Table 1 default for
        that voltage when the node is not on a busbar (or the busbar leaves
        the value unset).

        Args:
            node: Node label
            ur_kv: Rated voltage of the element at this node (kV)

        Returns:
            Tuple of (un_kv, c_max)
        """
        un, c = 0.0, 0.0
        busbar = self._index.get(node)
        if busbar is not None:
            un = busbar.un
            c = busbar.c_max(self.six_percent)
        if un == 0.0:
            un = ur_kv
        if c == 0.0:
            c = voltage_correction_factor(ur_kv, minimum=False, six_percent=self.six_percent)
        return un, c
