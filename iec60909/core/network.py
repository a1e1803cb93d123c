"""
Network container for IEC 60909 fault impedance calculations.

This module provides the Network class holding all elements of a network
and orchestrating the computation: node numbering, admittance matrix
assembly and extraction of the driving-point impedances.
"""

import logging
from dataclasses import dataclass, field

from ..matrices.analysis import initial_short_circuit_current
from ..matrices.builder import build_admittance_matrix
from ..matrices.diagnostics import diagnose_network, find_connected_components, find_unsourced_islands
from ..matrices.indexer import NodeIndex
from ..matrices.solver import FactorSolver, impedance_diagonal
from .busbar import Busbar, BusbarIndex, NodeLabel
from .elements import (
    AsynchronousMotor,
    Cable,
    NetworkFeeder,
    NetworkTransformer,
    OverheadLine,
    PowerStationUnit,
    Reactor,
    SynchronousGenerator,
    ThreeWindingTransformer,
)
from .errors import SingularSystemError
from .fault import Fault
from .options import DEFAULT_OPTIONS, CalculationOptions

logger = logging.getLogger(__name__)


@dataclass
class Network:
    """
    A three-phase a.c. network described by its busbars and elements.

    Elements reference nodes by label only. A computation never mutates the
    network; results are returned as new mappings.

    Attributes:
        frequency: System frequency (Hz)
        busbars: Busbars tying node labels together
        feeders: Network feeders
        power_station_units: Generators with their unit transformers
        generators: Synchronous generators connected directly
        transformers: Two-winding transformers
        three_winding_transformers: Three-winding transformers
        motors: Asynchronous motors
        lines: Overhead lines
        cables: Cables
        reactors: Short-circuit limiting reactors
        faults: Recorded fault results (output only)
    """
    frequency: float = 50.0
    busbars: list[Busbar] = field(default_factory=list)
    feeders: list[NetworkFeeder] = field(default_factory=list)
    power_station_units: list[PowerStationUnit] = field(default_factory=list)
    generators: list[SynchronousGenerator] = field(default_factory=list)
    transformers: list[NetworkTransformer] = field(default_factory=list)
    three_winding_transformers: list[ThreeWindingTransformer] = field(default_factory=list)
    motors: list[AsynchronousMotor] = field(default_factory=list)
    lines: list[OverheadLine] = field(default_factory=list)
    cables: list[Cable] = field(default_factory=list)
    reactors: list[Reactor] = field(default_factory=list)
    faults: list[Fault] = field(default_factory=list)

    def __post_init__(self):
        if self.frequency <= 0:
            raise ValueError(f"frequency must be positive, got {self.frequency}")

    def element_collections(self) -> tuple[list, ...]:
        """Element lists in node numbering order."""
        return (
            self.feeders,
            self.power_station_units,
            self.generators,
            self.transformers,
            self.three_winding_transformers,
            self.motors,
            self.lines,
            self.cables,
            self.reactors,
        )

    def busbar_index(self, six_percent: bool = True) -> BusbarIndex:
        return BusbarIndex(self.busbars, six_percent=six_percent)

    def fault_impedance(
        self,
        solver: FactorSolver | None = None,
        options: CalculationOptions | None = None,
    ) -> dict[NodeLabel, complex]:
        """
        Driving-point (Thevenin) impedance at every node label.

        Args:
            solver: Factorization backend (SuperLUSolver when None)
            options: Calculation options (defaults when None)

        Returns:
            Mapping of every node label to its short-circuit impedance Zk in
            Ohms. Labels of one busbar share the same value; internal star
            nodes of three-winding transformers are not included.

        Raises:
            ShortCircuitError: An element impedance could not be evaluated or
                the admittance matrix is singular
        """
        if options is None:
            options = DEFAULT_OPTIONS

        index = NodeIndex.from_network(self)
        Y = build_admittance_matrix(self, index, options)

        try:
            diagonal = impedance_diagonal(Y, solver, workers=options.workers)
        except SingularSystemError as err:
            components = find_connected_components(self, index)
            unsourced = find_unsourced_islands(self, index, components)
            raise SingularSystemError(
                f"{err.message} (network has {len(components)} island(s), "
                f"{len(unsourced)} without a source)"
            ) from err

        result = {label: complex(diagonal[i]) for label, i in index.labels.items()}
        logger.info(f"Computed fault impedances at {len(index.labels)} node labels")
        return result

    def short_circuit_currents(
        self,
        solver: FactorSolver | None = None,
        options: CalculationOptions | None = None,
        impedances: dict[NodeLabel, complex] | None = None,
    ) -> dict[NodeLabel, float]:
        """
        Initial symmetrical short-circuit current Ik'' at every busbar label.

        Args:
            solver: Factorization backend (SuperLUSolver when None)
            options: Calculation options (defaults when None)
            impedances: Previously computed fault impedances to reuse

        Returns:
            Mapping of node label to Ik'' in kA, using the busbar's nominal
            voltage and c_max
        """
        if options is None:
            options = DEFAULT_OPTIONS
        if impedances is None:
            impedances = self.fault_impedance(solver, options)

        currents = {}
        for busbar in self.busbars:
            c = busbar.c_max(options.six_percent)
            for label in busbar.nodes:
                currents[label] = initial_short_circuit_current(impedances[label], busbar.un, c)
        return currents

    def diagnose(self, options: CalculationOptions | None = None) -> dict:
        """Run the network diagnostics. See diagnostics.diagnose_network()."""
        return diagnose_network(self, options or DEFAULT_OPTIONS)
