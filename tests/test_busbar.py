"""Tests for core.busbar: voltage correction factors and the busbar index."""

from __future__ import annotations

import pytest

from iec60909 import Busbar, BusbarIndex, voltage_correction_factor


# ======================================================================
# Voltage correction factor
# ======================================================================


class TestVoltageCorrectionFactor:
    """Table 1 of IEC 60909-0."""

    @pytest.mark.parametrize("un", [0.23, 0.4, 0.69, 1.0])
    def test_low_voltage(self, un):
        assert voltage_correction_factor(un) == 1.05
        assert voltage_correction_factor(un, six_percent=False) == 1.10
        assert voltage_correction_factor(un, minimum=True) == 0.95

    @pytest.mark.parametrize("un", [1.01, 6.0, 10.0, 20.0, 35.0])
    def test_medium_voltage(self, un):
        assert voltage_correction_factor(un) == 1.10
        assert voltage_correction_factor(un, minimum=True) == 1.0

    @pytest.mark.parametrize("un", [110.0, 220.0, 380.0])
    def test_high_voltage(self, un):
        assert voltage_correction_factor(un) == 1.10
        assert voltage_correction_factor(un, minimum=True) == 1.0

    def test_six_percent_flag_only_affects_low_voltage(self):
        assert voltage_correction_factor(20.0, six_percent=False) == 1.10


# ======================================================================
# Busbar
# ======================================================================


class TestBusbar:

    def test_explicit_factors_win(self):
        b = Busbar(nodes=["A"], un=20.0, cmax=1.08, cmin=0.98)
        assert b.c_max() == 1.08
        assert b.c_min() == 0.98

    def test_default_factors(self):
        b = Busbar(nodes=["A"], un=0.4)
        assert b.c_max() == 1.05
        assert b.c_max(six_percent=False) == 1.10
        assert b.c_min() == 0.95

    def test_nodes_are_copied_to_list(self):
        b = Busbar(nodes=("A", "B"), un=10.0)
        assert b.nodes == ["A", "B"]

    def test_negative_voltage_rejected(self):
        with pytest.raises(ValueError):
            Busbar(nodes=["A"], un=-1.0)


# ======================================================================
# Busbar index
# ======================================================================


class TestBusbarIndex:

    def test_lookup(self):
        q = Busbar(nodes=["Q1", "Q", "Q2"], un=20.0, cmax=1.1)
        index = BusbarIndex([q])
        assert index.busbar("Q2") is q
        assert index.busbar("X") is None
        assert "Q" in index
        assert len(index) == 3

    def test_value_helpers(self):
        index = BusbarIndex([Busbar(nodes=[1, 2], un=6.0)])
        assert index.un(1) == 6.0
        assert index.cmax(2) == 1.10
        assert index.cmin(2) == 1.0
        assert index.un(3) is None
        assert index.cmax(3) is None

    def test_empty(self):
        index = BusbarIndex.empty()
        assert len(index) == 0
        assert index.busbar("A") is None

    def test_resolve_from_busbar(self):
        index = BusbarIndex([Busbar(nodes=["L1"], un=0.4, cmax=1.05)])
        assert index.resolve("L1", 0.41) == (0.4, 1.05)

    def test_resolve_falls_back_to_rating(self):
        index = BusbarIndex.empty()
        un, c = index.resolve("T1", 0.41)
        assert un == 0.41
        assert c == 1.05

    def test_resolve_respects_six_percent(self):
        index = BusbarIndex.empty(six_percent=False)
        assert index.resolve("T1", 0.41) == (0.41, 1.10)

    def test_tuple_labels(self):
        index = BusbarIndex([Busbar(nodes=[("sub", 1)], un=110.0)])
        assert index.un(("sub", 1)) == 110.0
