"""
Node numbering, admittance matrix assembly and fault impedance extraction.
"""

from .indexer import NodeIndex

from .builder import build_admittance_matrix

from .solver import (
    FactorSolver,
    SuperLUSolver,
    impedance_diagonal,
)

from .analysis import (
    initial_short_circuit_current,
    results_to_dataframe,
    export_results_csv,
)

from .diagnostics import (
    find_connected_components,
    find_unsourced_islands,
    find_isolated_nodes,
    check_matrix_health,
    diagnose_network,
    print_diagnostics,
)

__all__ = [
    # Indexer
    'NodeIndex',

    # Builder
    'build_admittance_matrix',

    # Solver
    'FactorSolver',
    'SuperLUSolver',
    'impedance_diagonal',

    # Analysis
    'initial_short_circuit_current',
    'results_to_dataframe',
    'export_results_csv',

    # Diagnostics
    'find_connected_components',
    'find_unsourced_islands',
    'find_isolated_nodes',
    'check_matrix_health',
    'diagnose_network',
    'print_diagnostics',
]
