"""
Short-circuit result analysis.

This module derives currents from the driving-point impedances and exports
results as pandas DataFrames.
"""

import math

import numpy as np
import pandas as pd

from ..core.busbar import NodeLabel

SQRT_3 = math.sqrt(3.0)


def initial_short_circuit_current(zk: complex, un_kv: float, c: float) -> float:
    """
    Initial symmetrical short-circuit current, IEC 60909-0 equation (29).

        Ik'' = c * Un / (sqrt(3) * |Zk|)

    Args:
        zk: Driving-point impedance at the fault location (Ohm)
        un_kv: Nominal system voltage (kV)
        c: Voltage correction factor

    Returns:
        Ik'' in kA
    """
    z = abs(zk)
    if z == 0.0:
        raise ZeroDivisionError("short-circuit impedance is zero")
    return c * un_kv / (SQRT_3 * z)


def results_to_dataframe(
    impedances: dict[NodeLabel, complex],
    currents: dict[NodeLabel, float] | None = None,
) -> pd.DataFrame:
    """
    Tabulate driving-point impedances (and optionally currents) per node.

    Args:
        impedances: Mapping of node label to Zk in Ohms
        currents: Mapping of node label to Ik'' in kA

    Returns:
        DataFrame with columns node, r_ohm, x_ohm, z_ohm (and ikss_ka when
        currents are given), one row per label in the input order
    """
    nodes = list(impedances)
    z = np.array([impedances[node] for node in nodes], dtype=complex)

    df = pd.DataFrame({
        'node': nodes,
        'r_ohm': z.real,
        'x_ohm': z.imag,
        'z_ohm': np.abs(z),
    })
    if currents is not None:
        df['ikss_ka'] = [currents.get(node, np.nan) for node in nodes]
    return df


def export_results_csv(path, impedances: dict[NodeLabel, complex], currents: dict[NodeLabel, float] | None = None) -> pd.DataFrame:
    """
    Write results to a CSV file using ';' as delimiter and ',' as decimal mark.

    Returns:
        The exported DataFrame
    """
    df = results_to_dataframe(impedances, currents)
    df.to_csv(path, sep=';', decimal=',', index=False)
    return df
