"""
Core network elements and classes.
"""

from .busbar import (
    Busbar,
    BusbarIndex,
    NodeLabel,
    voltage_correction_factor,
)

from .errors import (
    ShortCircuitError,
    MissingRatingError,
    InconsistentInputError,
    ZeroImpedanceError,
    UnresolvedNodeError,
    SingularSystemError,
)

from .options import (
    TransformerSide,
    CalculationOptions,
    DEFAULT_OPTIONS,
)

from .elements import (
    NetworkFeeder,
    NetworkTransformer,
    ThreeWindingTransformer,
    WindingPair,
    Cable,
    OverheadLine,
    SynchronousGenerator,
    AsynchronousMotor,
    Reactor,
    PowerStationUnit,
    star_impedances,
    pair_impedances,
    transformer_resistance_reactance,
)

from .fault import Fault

from .network import Network

__all__ = [
    'Busbar',
    'BusbarIndex',
    'NodeLabel',
    'voltage_correction_factor',
    'ShortCircuitError',
    'MissingRatingError',
    'InconsistentInputError',
    'ZeroImpedanceError',
    'UnresolvedNodeError',
    'SingularSystemError',
    'TransformerSide',
    'CalculationOptions',
    'DEFAULT_OPTIONS',
    'NetworkFeeder',
    'NetworkTransformer',
    'ThreeWindingTransformer',
    'WindingPair',
    'Cable',
    'OverheadLine',
    'SynchronousGenerator',
    'AsynchronousMotor',
    'Reactor',
    'PowerStationUnit',
    'star_impedances',
    'pair_impedances',
    'transformer_resistance_reactance',
    'Fault',
    'Network',
]
