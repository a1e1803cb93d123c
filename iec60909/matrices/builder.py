"""
Admittance matrix construction.

This module builds the sparse nodal admittance (Y) matrix of a network from
the corrected short-circuit impedances of its elements.
"""

import logging

import numpy as np
from scipy import sparse

from ..core.errors import ShortCircuitError, ZeroImpedanceError
from ..core.options import DEFAULT_OPTIONS, CalculationOptions, TransformerSide
from .indexer import NodeIndex

logger = logging.getLogger(__name__)


class _TripletStamper:
    """Accumulates (row, col, value) triplets; duplicates are summed."""

    def __init__(self, index: NodeIndex):
        self.index = index
        self.rows: list[int] = []
        self.cols: list[int] = []
        self.values: list[complex] = []

    def _add(self, i: int, j: int, y: complex):
        self.rows.append(i)
        self.cols.append(j)
        self.values.append(y)

    def shunt(self, node, z: complex, name: str):
        """Element connected between a node and the reference."""
        y = _admittance(z)
        i = self.index[node]
        self._add(i, i, y)
        logger.debug(f" {name} at {node!r}: Z = {z:.6g} Ohm")

    def series(self, node_i, node_j, z: complex, name: str):
        """Element connected between two nodes."""
        y = _admittance(z)
        i = self.index[node_i]
        j = self.index[node_j]
        self._series_indices(i, j, y)
        logger.debug(f" {name} {node_i!r} - {node_j!r}: Z = {z:.6g} Ohm")

    def to_star(self, node, star: int, z: complex):
        """Winding branch from a node to an internal star node."""
        self._series_indices(self.index[node], star, _admittance(z))

    def _series_indices(self, i: int, j: int, y: complex):
        if i == j:
            logger.warning(f" Series element on a single node (index {i}), skipping")
            return
        self._add(i, i, y)
        self._add(j, j, y)
        self._add(i, j, -y)
        self._add(j, i, -y)

    def to_csc(self, n: int) -> sparse.csc_matrix:
        Y = sparse.coo_matrix(
            (np.asarray(self.values, dtype=complex), (self.rows, self.cols)),
            shape=(n, n),
        )
        return Y.tocsc()


def _admittance(z: complex) -> complex:
    if z == 0j:
        raise ZeroImpedanceError("impedance is zero")
    return 1.0 / z


def build_admittance_matrix(
    network,
    index: NodeIndex | None = None,
    options: CalculationOptions = DEFAULT_OPTIONS,
) -> sparse.csc_matrix:
    """
    Build the admittance (Y) matrix of a network.

    Feeders, generators, motors, the generator part of power station units
    and single-ended reactors are stamped on the diagonal. Transformers,
    cables, lines, unit transformers and two-terminal reactors are stamped
    as series branches. Each three-winding transformer contributes three
    branches from its winding nodes to its internal star node.

    Args:
        network: Network to assemble
        index: Node numbering (built from the network when None)
        options: Calculation options

    Returns:
        Complex sparse Y-matrix in CSC format (Siemens)

    Raises:
        ShortCircuitError: An element impedance could not be evaluated; the
            error names the element kind and its 1-based position
    """
    if index is None:
        index = NodeIndex.from_network(network)
    busbars = network.busbar_index(six_percent=options.six_percent)
    stamp = _TripletStamper(index)

    transformer_hv = options.transformer_side is TransformerSide.HV
    station_hv = options.station_side is TransformerSide.HV

    def feeder(element, name):
        stamp.shunt(element.node, element.impedance(busbars), name)

    def power_station_unit(element, name):
        zg, zt = element.impedance_parts(busbars, hv=station_hv, peak=options.peak)
        stamp.shunt(element.generator.node, zg, name)
        stamp.series(element.transformer.node_lv, element.transformer.node_hv, zt, name)

    def generator(element, name):
        z = element.impedance(busbars, tolerance_kv=options.generator_tolerance_kv, peak=options.peak)
        stamp.shunt(element.node, z, name)

    def transformer(element, name):
        z = element.impedance(busbars, hv=transformer_hv)
        stamp.series(element.node_hv, element.node_lv, z, name)

    t3w_stars = iter(index.star_nodes)

    def three_winding_transformer(element, name):
        star = next(t3w_stars)
        z_hv, z_mv, z_lv = element.impedance(busbars, side=options.three_winding_side)
        for node, z in ((element.node_hv, z_hv), (element.node_mv, z_mv), (element.node_lv, z_lv)):
            stamp.to_star(node, star, z)
        logger.debug(f" {name}: Z_HV = {z_hv:.6g}, Z_MV = {z_mv:.6g}, Z_LV = {z_lv:.6g} Ohm")

    def motor(element, name):
        stamp.shunt(element.node, element.impedance(), name)

    def line(element, name):
        stamp.series(element.node_i, element.node_j, element.impedance(network.frequency), name)

    def cable(element, name):
        stamp.series(element.node_i, element.node_j, element.impedance(), name)

    def reactor(element, name):
        z = element.impedance(busbars)
        if element.node_j is None:
            stamp.shunt(element.node, z, name)
        else:
            stamp.series(element.node, element.node_j, z, name)

    for collection, stamp_element in (
        (network.feeders, feeder),
        (network.power_station_units, power_station_unit),
        (network.generators, generator),
        (network.transformers, transformer),
        (network.three_winding_transformers, three_winding_transformer),
        (network.motors, motor),
        (network.lines, line),
        (network.cables, cable),
        (network.reactors, reactor),
    ):
        for position, element in enumerate(collection, start=1):
            try:
                stamp_element(element, f"{element.kind.capitalize()} {position}")
            except ShortCircuitError as err:
                raise err.attribute(element.kind, position)

    n = len(index)
    Y = stamp.to_csc(n)
    logger.debug(f"Built {n}x{n} admittance matrix with {Y.nnz} non-zeros")
    return Y
