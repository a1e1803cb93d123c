"""
IEC 60909 Short-Circuit Impedance Library
=========================================

A Python library for computing short-circuit fault impedances in three-phase
a.c. networks according to IEC 60909-0.

Features:
- Corrected impedance models for feeders, generators, power station units,
  motors, two- and three-winding transformers, lines, cables and reactors
- Busbars tying several node labels to one electrical node
- Sparse admittance matrix assembly (scipy.sparse)
- Driving-point impedances from a single sparse LU factorization
- Initial short-circuit currents and pandas export
- Network diagnostics (islands, isolated nodes, matrix health)

Quick Start
-----------

    from iec60909 import Network, Busbar, NetworkFeeder, NetworkTransformer

    net = Network(
        busbars=[Busbar(nodes=["Q"], un=20.0, cmax=1.1)],
        feeders=[NetworkFeeder(node="Q", ur=20.0, ikss=10.0)],
        transformers=[
            NetworkTransformer(node_hv="Q", node_lv="T1", ur_hv=20.0, ur_lv=0.41,
                               sr=630.0, ukr=4.0, pkr=6.5),
        ],
    )

    # Driving-point impedance at every node label (Ohm)
    zk = net.fault_impedance()

    # Ik'' at every busbar label (kA)
    ikss = net.short_circuit_currents(impedances=zk)

Options such as the transformer reference side, peak-current generator
resistance or the number of solver threads are passed as
CalculationOptions:

    from iec60909 import CalculationOptions, TransformerSide

    zk = net.fault_impedance(options=CalculationOptions(
        transformer_side=TransformerSide.HV, workers=4))

Logging
-------
This library uses Python's standard logging module. By default, no output is shown.
To enable logging:

    import logging
    logging.getLogger("iec60909").setLevel(logging.INFO)

For per-element impedances:

    logging.getLogger("iec60909").setLevel(logging.DEBUG)
"""

import logging

__version__ = "0.1.0"

# Configure library logging (NullHandler prevents "No handler found" warnings)
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core classes
from .core import (
    Network,
    Busbar,
    BusbarIndex,
    voltage_correction_factor,
    NetworkFeeder,
    NetworkTransformer,
    ThreeWindingTransformer,
    Cable,
    OverheadLine,
    SynchronousGenerator,
    AsynchronousMotor,
    Reactor,
    PowerStationUnit,
    Fault,
    TransformerSide,
    CalculationOptions,
    ShortCircuitError,
    MissingRatingError,
    InconsistentInputError,
    ZeroImpedanceError,
    UnresolvedNodeError,
    SingularSystemError,
)

# Matrix functions
from .matrices import (
    NodeIndex,
    build_admittance_matrix,
    FactorSolver,
    SuperLUSolver,
    impedance_diagonal,
    initial_short_circuit_current,
    results_to_dataframe,
    diagnose_network,
)

__all__ = [
    # Version
    '__version__',

    # Core classes
    'Network',
    'Busbar',
    'BusbarIndex',
    'voltage_correction_factor',
    'NetworkFeeder',
    'NetworkTransformer',
    'ThreeWindingTransformer',
    'Cable',
    'OverheadLine',
    'SynchronousGenerator',
    'AsynchronousMotor',
    'Reactor',
    'PowerStationUnit',
    'Fault',

    # Configuration
    'TransformerSide',
    'CalculationOptions',

    # Errors
    'ShortCircuitError',
    'MissingRatingError',
    'InconsistentInputError',
    'ZeroImpedanceError',
    'UnresolvedNodeError',
    'SingularSystemError',

    # Matrix functions
    'NodeIndex',
    'build_admittance_matrix',
    'FactorSolver',
    'SuperLUSolver',
    'impedance_diagonal',
    'initial_short_circuit_current',
    'results_to_dataframe',
    'diagnose_network',
]
