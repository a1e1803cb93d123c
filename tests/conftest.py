"""Shared fixtures: the worked networks of IEC TR 60909-4."""

from __future__ import annotations

import pytest

from iec60909 import (
    AsynchronousMotor,
    Busbar,
    Cable,
    Network,
    NetworkFeeder,
    NetworkTransformer,
    OverheadLine,
    PowerStationUnit,
    SynchronousGenerator,
    ThreeWindingTransformer,
)


# ======================================================================
# Helpers
# ======================================================================


def assert_complex_close(given: complex, expected: complex, tol: float) -> None:
    """Compare real and imaginary parts separately with an absolute tolerance."""
    assert given.real == pytest.approx(expected.real, abs=tol)
    assert given.imag == pytest.approx(expected.imag, abs=tol)


def make_three_winding_transformer(node_hv="1-T3", node_mv="2-T3", node_lv="8") -> ThreeWindingTransformer:
    """400/120/30 kV three-winding transformer (IEC TR 60909-4 §2 and §6)."""
    return ThreeWindingTransformer(
        node_hv=node_hv,
        node_mv=node_mv,
        node_lv=node_lv,
        ur_hv=400.0,
        ur_mv=120.0,
        ur_lv=30.0,
        sr_hv_mv=350_000.0,
        sr_hv_lv=50_000.0,
        sr_mv_lv=50_000.0,
        ukr_hv_mv=21.0,
        ukr_hv_lv=10.0,
        ukr_mv_lv=7.0,
        urr_hv_mv=0.26,
        urr_hv_lv=0.16,
        urr_mv_lv=0.16,
    )


# ======================================================================
# Section 3: low-voltage system 20 kV / 0.4 kV
# ======================================================================


@pytest.fixture
def section3() -> Network:
    """Low-voltage system with two transformers, cables and an overhead line."""
    t1 = NetworkTransformer(
        node_hv="Q1", node_lv="T1", sr=630.0, ur_hv=20.0, ur_lv=0.41, ukr=4.0, pkr=6.5,
    )
    t2 = NetworkTransformer(
        node_hv="Q2", node_lv="T2", sr=400.0, ur_hv=20.0, ur_lv=0.41, ukr=4.0, pkr=4.6,
    )
    return Network(
        frequency=50.0,
        busbars=[
            Busbar(nodes=["Q1", "Q", "Q2"], un=20.0, cmax=1.1),
            Busbar(nodes=["L1", "L3", "L2"], un=0.4, cmax=1.05),
        ],
        feeders=[NetworkFeeder(node="Q", ur=20.0, ikss=10.0, tr=20.0 / t1.ur_lv)],
        transformers=[t1, t2],
        cables=[
            # two parallel four-core cables 4 x 240 mm^2 Cu
            Cable(node_i="T1", node_j="L1", l=0.010, rl=0.077, xl=0.079,
                  r0=3.7 * 0.077, x0=1.81 * 0.079, parallel=2),
            # two parallel three-core cables 3 x 185 mm^2 Al
            Cable(node_i="T2", node_j="L2", l=0.004, rl=0.208, xl=0.068,
                  r0=4.23 * 0.208, x0=1.21 * 0.068, parallel=2),
            # four-core cable 4 x 70 mm^2 Cu
            Cable(node_i="L3", node_j="L4", l=0.020, rl=0.271, xl=0.087,
                  r0=3.0 * 0.271, x0=4.46 * 0.087),
        ],
        lines=[
            OverheadLine(node_i="L4", node_j="F3", l=0.050, rl=0.3704, xl=0.297,
                         r0=2.0 * 0.3704, x0=3.0 * 0.297, qn=50.0, rho=1.0 / 54.0, d=0.4),
        ],
    )


# ======================================================================
# Section 4: medium-voltage system 33 kV / 6 kV with motors
# ======================================================================


@pytest.fixture
def section4() -> Network:
    """Medium-voltage system fed through two parallel cable/transformer paths."""
    tr = 33.0 / (6.0 * 1.05)
    return Network(
        frequency=50.0,
        busbars=[
            Busbar(nodes=["Q1", "Q", "Q2"], un=33.0, cmax=1.1, cmin=1.0),
            Busbar(nodes=["AT1", "M1", "AT2", "M2"], un=6.0),
        ],
        feeders=[NetworkFeeder(node="Q", ur=33.0, ikss=13.12, tr=tr)],
        cables=[
            Cable(node_i="Q1", node_j="T1", rl=0.1, xl=0.1, l=4.85, tr=tr),
            Cable(node_i="Q2", node_j="T2", rl=0.1, xl=0.1, l=4.85, tr=tr),
        ],
        transformers=[
            NetworkTransformer(node_hv="T1", node_lv="AT1", sr=15_000.0, ur_hv=33.0,
                               ur_lv=6.3, urr=0.6, ukr=15.0),
            NetworkTransformer(node_hv="T2", node_lv="AT2", sr=15_000.0, ur_hv=33.0,
                               ur_lv=6.3, urr=0.6, ukr=15.0),
        ],
        motors=[
            AsynchronousMotor(node="M1", ur=6.0, pr=5_000.0, cos_phi=0.86, eta=97.0, ilr_ir=4.0, p=2),
            AsynchronousMotor(node="M2", ur=6.0, pr=1_000.0, cos_phi=0.83, eta=94.0, ilr_ir=5.5, p=1, n=3),
        ],
    )


# ======================================================================
# Section 5: power station unit 220 kV
# ======================================================================


@pytest.fixture
def section5() -> Network:
    """Power station unit with on-load tap-changer feeding a 220 kV busbar."""
    g = SynchronousGenerator(
        node="A", sr=250_000.0, ur=21.0, p=5.0, r=0.0025, xdpp=0.17, xdsat=2.0, cos_phi=0.78,
    )
    t = NetworkTransformer(
        node_hv="Q", node_lv="A", sr=250_000.0, ur_hv=240.0, ur_lv=21.0, ukr=15.0, pkr=520.0,
    )
    return Network(
        busbars=[Busbar(nodes=["Q"], un=220.0, cmax=1.1)],
        feeders=[NetworkFeeder(node="Q", ur=220.0, ikss=21.0, rx=0.12)],
        power_station_units=[PowerStationUnit(generator=g, transformer=t)],
    )


# ======================================================================
# Section 6: high-voltage system 380 kV / 110 kV / 30 kV / 10 kV
# ======================================================================


@pytest.fixture
def section6() -> Network:
    """Three-phase a.c. system with power station units, generator and motors."""
    g1 = SynchronousGenerator(node="G1", ur=21.0, sr=150_000.0, xdpp=0.14, xdsat=1.8,
                              cos_phi=0.85, r=0.002)
    t1 = NetworkTransformer(node_hv="4-T1", node_lv="G1", ur_hv=115.0, ur_lv=21.0,
                            sr=150_000.0, ukr=16.0, urr=0.5, p=12.0, x0x=0.95, r0r=1.0)

    g2 = SynchronousGenerator(node="G2", ur=10.5, sr=100_000.0, p=7.5, xdpp=0.16,
                              xdsat=2.0, cos_phi=0.9, r=0.005)
    t2 = NetworkTransformer(node_hv="3-T2", node_lv="G2", ur_hv=120.0, ur_lv=10.5,
                            sr=100_000.0, ukr=12.0, urr=0.5, x0x=1.0, r0r=1.0)

    g3 = SynchronousGenerator(node="6-G3", ur=10.5, sr=10_000.0, p=5.0, xdpp=0.1,
                              xdsat=1.8, cos_phi=0.8, r=0.018)

    t3 = make_three_winding_transformer("1-T3", "2-T3", "8")
    t4 = make_three_winding_transformer("1-T4", "2-T4", "9")

    return Network(
        frequency=50.0,
        busbars=[
            Busbar(nodes=["1-T3", "1-Q1", "1-T4"], un=380.0),
            Busbar(nodes=["2-T3", "2-T4", "2-L3"], un=110.0),
            Busbar(nodes=["8"], un=30.0),
            Busbar(nodes=["5-L4", "5-L3", "5-L5", "5-T5", "5-Q2", "5-T6"], un=110.0),
            Busbar(nodes=["6-G3", "6-L6"], un=10.0),
            Busbar(nodes=["7-M1", "7-L6", "7-M2"], un=10.0),
            Busbar(nodes=["3-T2", "3-L1", "3-L4"], un=110.0),
            Busbar(nodes=["4-T1", "4-L2", "4-L5"], un=110.0),
        ],
        feeders=[
            NetworkFeeder(node="1-Q1", ur=380.0, ikss=38.0, rx=0.1, x0x=3.0, r0x=0.15,
                          tr=400.0 / 120.0),
            NetworkFeeder(node="5-Q2", ur=110.0, ikss=16.0, rx=0.1, x0x=3.3, r0x=0.20),
        ],
        power_station_units=[
            PowerStationUnit(generator=g1, transformer=t1, oltc=True),
            PowerStationUnit(generator=g2, transformer=t2, oltc=False),
        ],
        generators=[g3],
        three_winding_transformers=[t3, t4],
        transformers=[
            NetworkTransformer(node_hv="5-T5", node_lv="6-G3", ur_hv=115.0, ur_lv=10.5,
                               sr=31_500.0, ukr=12.0, urr=0.5),
            NetworkTransformer(node_hv="5-T6", node_lv="6-L6", ur_hv=115.0, ur_lv=10.5,
                               sr=31_500.0, ukr=12.0, urr=0.5),
        ],
        motors=[
            AsynchronousMotor(node="7-M1", ur=10.0, pr=5_000.0, cos_phi=0.88, eta=97.5,
                              ilr_ir=5.0, p=1),
            AsynchronousMotor(node="7-M2", ur=10.0, pr=2_000.0, cos_phi=0.89, eta=96.8,
                              ilr_ir=5.2, p=2, n=2),
        ],
        lines=[
            OverheadLine(node_i="2-T3", node_j="3-L1", l=20.0, rl=0.12, xl=0.39, r0=0.32, x0=1.26),
            OverheadLine(node_i="3-L1", node_j="4-L2", l=10.0, rl=0.12, xl=0.39, r0=0.32, x0=1.26),
            OverheadLine(node_i="2-L3", node_j="5-L3", l=5.0, rl=0.12, xl=0.39, r0=0.52, x0=1.86,
                         parallel=2),
            OverheadLine(node_i="5-L4", node_j="3-L4", l=10.0, rl=0.096, xl=0.388, r0=0.22, x0=1.10),
            OverheadLine(node_i="5-L5", node_j="4-L5", l=15.0, rl=0.12, xl=0.386, r0=0.22, x0=1.10),
        ],
        cables=[
            Cable(node_i="6-L6", node_j="7-L6", ur=10.0, l=1.0, rl=0.082, xl=0.086),
        ],
    )


@pytest.fixture
def three_winding_transformer() -> ThreeWindingTransformer:
    return make_three_winding_transformer()
