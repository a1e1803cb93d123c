"""
Network diagnostics for fault impedance calculations.

This module provides functions to diagnose issues with a network or its
admittance matrix, including detecting islands, islands without any source,
isolated nodes and singular matrix problems.
"""

from collections import deque

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import splu

from ..core.options import DEFAULT_OPTIONS, CalculationOptions
from .builder import build_admittance_matrix
from .indexer import NodeIndex


def _series_connections(network, index: NodeIndex) -> list[tuple[int, int]]:
    """Index pairs joined by a series element."""
    pairs = []
    for t in network.transformers:
        pairs.append((index[t.node_hv], index[t.node_lv]))
    for unit in network.power_station_units:
        pairs.append((index[unit.transformer.node_hv], index[unit.transformer.node_lv]))
    for t3w, star in zip(network.three_winding_transformers, index.star_nodes):
        for node in t3w.node_labels:
            pairs.append((index[node], star))
    for branch in (*network.lines, *network.cables):
        pairs.append((index[branch.node_i], index[branch.node_j]))
    for reactor in network.reactors:
        if reactor.node_j is not None:
            pairs.append((index[reactor.node], index[reactor.node_j]))
    return pairs


def _source_nodes(network, index: NodeIndex) -> set[int]:
    """Indices with an element connected to the reference."""
    nodes = set()
    for element in (*network.feeders, *network.generators, *network.motors):
        nodes.add(index[element.node])
    for unit in network.power_station_units:
        nodes.add(index[unit.generator.node])
    for reactor in network.reactors:
        if reactor.node_j is None:
            nodes.add(index[reactor.node])
    return nodes


def find_connected_components(network, index: NodeIndex) -> list[set[int]]:
    """
    Find connected components (islands) in the network using BFS.

    Args:
        network: The Network
        index: Node numbering of the network

    Returns:
        List of sets, each set containing the matrix indices of one
        component. If len(result) > 1, the network has islands.
    """
    n = len(index)
    adjacency = {i: set() for i in range(n)}
    for i, j in _series_connections(network, index):
        adjacency[i].add(j)
        adjacency[j].add(i)

    visited = set()
    components = []

    for start in range(n):
        if start in visited:
            continue

        component = set()
        queue = deque([start])

        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            component.add(node)

            for neighbor in adjacency[node]:
                if neighbor not in visited:
                    queue.append(neighbor)

        components.append(component)

    return components


def find_unsourced_islands(network, index: NodeIndex, components: list[set[int]] | None = None) -> list[set[int]]:
    """
    Islands with no element connected to the reference.

    The admittance matrix is singular whenever such an island exists.
    """
    if components is None:
        components = find_connected_components(network, index)
    sources = _source_nodes(network, index)
    return [c for c in components if not (c & sources)]


def find_isolated_nodes(Y: sparse.spmatrix, index: NodeIndex, tol: float = 1e-12) -> list:
    """
    Find nodes with no off-diagonal connections.

    Args:
        Y: Admittance matrix
        index: Node numbering
        tol: Tolerance for considering a value as zero

    Returns:
        List of node labels (matrix indices for internal star nodes)
    """
    Y = sparse.csr_matrix(Y)
    row_sums = np.asarray(abs(Y).sum(axis=1)).ravel()
    off_diag = row_sums - np.abs(Y.diagonal())

    labels = index.node_labels()
    isolated = []
    for i in np.flatnonzero(off_diag < tol):
        isolated.extend(labels.get(int(i), [int(i)]))
    return isolated


def check_matrix_health(Y: sparse.spmatrix, rcond_threshold: float = 1e-12) -> dict:
    """
    Check the health of an admittance matrix.

    The reciprocal condition number is estimated from the pivots of the
    sparse LU factorization.

    Args:
        Y: Admittance matrix
        rcond_threshold: Estimates below this flag the matrix as singular

    Returns:
        Dictionary with diagnostic information
    """
    n = Y.shape[0]
    result = {'size': n, 'nnz': int(Y.nnz), 'rcond': None, 'is_singular': True}
    if n == 0:
        return result

    try:
        lu = splu(sparse.csc_matrix(Y))
    except RuntimeError as e:
        result['error'] = str(e)
        return result

    u_diag = np.abs(lu.U.diagonal())
    rcond = float(np.min(u_diag) / np.max(u_diag)) if np.max(u_diag) > 0 else 0.0
    result['rcond'] = rcond
    result['is_singular'] = rcond < rcond_threshold
    return result


def diagnose_network(network, options: CalculationOptions = DEFAULT_OPTIONS) -> dict:
    """
    Comprehensive network diagnostics.

    Args:
        network: The Network
        options: Calculation options used to assemble the matrix

    Returns:
        Dictionary with all diagnostic results
    """
    index = NodeIndex.from_network(network)
    labels = index.node_labels()

    def named(component):
        return sorted((str(label) for i in component for label in labels.get(i, [])))

    components = find_connected_components(network, index)
    unsourced = find_unsourced_islands(network, index, components)

    results = {
        'n_nodes': len(index),
        'n_labels': len(index.labels),
        'n_star_nodes': len(index.star_nodes),
        'n_islands': len(components),
        'has_islands': len(components) > 1,
        'islands': [named(c) for c in components],
        'unsourced_islands': [named(c) for c in unsourced],
    }

    Y = build_admittance_matrix(network, index, options)
    results['isolated_nodes'] = find_isolated_nodes(Y, index)
    results['Y_health'] = check_matrix_health(Y)

    return results


def print_diagnostics(diag: dict) -> None:
    """
    Print diagnostic results in a readable format.

    Args:
        diag: Dictionary from diagnose_network()
    """
    print("=" * 60)
    print("NETWORK DIAGNOSTICS")
    print("=" * 60)

    print("\nNetwork Size:")
    print(f"   Nodes: {diag['n_nodes']} ({diag['n_labels']} labels, {diag['n_star_nodes']} star nodes)")

    print("\nConnectivity (Islands):")
    print(f"   Number of islands: {diag['n_islands']}")
    if diag['has_islands']:
        print("   WARNING: Network has multiple islands!")
        for i, island in enumerate(diag['islands']):
            print(f"   Island {i+1} ({len(island)} labels): {island[:5]}{'...' if len(island) > 5 else ''}")
    if diag['unsourced_islands']:
        print(f"   WARNING: Islands without a source: {diag['unsourced_islands']}")

    health = diag['Y_health']
    print("\nY Matrix Health:")
    print(f"   Size: {health['size']}x{health['size']}, non-zeros: {health['nnz']}")
    print(f"   rcond estimate: {health['rcond']:.2e}" if health['rcond'] is not None else "   rcond estimate: N/A")
    print(f"   Singular: {'YES' if health['is_singular'] else 'NO'}")
    if diag['isolated_nodes']:
        print(f"   Isolated nodes: {diag['isolated_nodes']}")

    print("\n" + "=" * 60)
