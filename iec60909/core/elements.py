"""
Element definitions for short-circuit calculations according to IEC 60909-0.

This module contains the network elements and their short-circuit impedance
models:
- Sources (network feeders, synchronous generators, asynchronous motors,
  power station units)
- Branch elements (two- and three-winding transformers, cables, overhead
  lines, reactors)

Every impedance is returned in Ohms. Ratings use the units of the standard:
kV, kVA, kW, kA, Ohm/km and km.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .busbar import BusbarIndex, NodeLabel, voltage_correction_factor
from .errors import InconsistentInputError, MissingRatingError
from .options import TransformerSide

SQRT_3 = math.sqrt(3.0)
MU_0 = 4.0 * math.pi * 1e-7  # H/m


class WindingPair(Enum):
    """Winding pair of a three-winding transformer short-circuit test."""
    HV_MV = "hv_mv"
    HV_LV = "hv_lv"
    MV_LV = "mv_lv"


def _require(element, *names: str) -> None:
    """Raise MissingRatingError for the first unset attribute."""
    for name in names:
        if getattr(element, name) is None:
            raise MissingRatingError(f"{name} must be specified")


def _check_positive(element, *names: str) -> None:
    for name in names:
        value = getattr(element, name)
        if value is not None and value <= 0:
            raise InconsistentInputError(f"{name} must be positive, got {value}")


def _peak_resistance(ur_g: float, sr_g: float, xdpp: float) -> float:
    """
    Fictitious generator resistance R_Gf used for peak currents.

    Args:
        ur_g: Rated generator voltage (V)
        sr_g: Rated generator apparent power (VA)
        xdpp: Subtransient reactance (Ohm)
    """
    if ur_g > 1e3 and sr_g >= 100e6:
        return 0.05 * xdpp
    if ur_g > 1e3:
        return 0.07 * xdpp
    return 0.15 * xdpp


def transformer_resistance_reactance(
    ukr: float,
    sr_va: float,
    ur_v: float,
    urr: float | None = None,
    pkr_w: float = 0.0,
) -> tuple[float, float]:
    """
    Short-circuit resistance and reactance of a two-winding transformer.

    Equations (7) to (9) of IEC 60909-0:
        Z_T = ukr/100 * Ur^2/Sr
        R_T = uRr/100 * Ur^2/Sr  or  Pkr * Ur^2/Sr^2
        X_T = sqrt(Z_T^2 - R_T^2)

    Args:
        ukr: Short-circuit voltage at rated current (%)
        sr_va: Rated apparent power (VA)
        ur_v: Rated voltage of the side the impedance is referred to (V)
        urr: Rated resistive component of the short-circuit voltage (%)
        pkr_w: Total winding losses at rated current (W)

    Returns:
        Tuple of (R_T, X_T) in Ohms, without correction factor
    """
    z_rated = ur_v ** 2 / sr_va
    z = (ukr / 100.0) * z_rated

    if urr is not None:
        r = (urr / 100.0) * z_rated
    elif pkr_w != 0.0:
        r = (pkr_w * ur_v ** 2) / sr_va ** 2
    else:
        raise MissingRatingError("uRr or Pkr must be specified")

    if r > z:
        raise InconsistentInputError(
            f"resistive component ({r:.6g} Ohm) exceeds short-circuit impedance ({z:.6g} Ohm)"
        )
    x = math.sqrt(z * z - r * r)
    return r, x


def star_impedances(zk_hv_mv: complex, zk_hv_lv: complex, zk_mv_lv: complex) -> tuple[complex, complex, complex]:
    """
    Convert corrected pair impedances to star equivalent impedances.

    The pair impedances satisfy:
        Z_HVMV = Z_HV + Z_MV
        Z_HVLV = Z_HV + Z_LV
        Z_MVLV = Z_MV + Z_LV

    Returns:
        Tuple of (Z_HV, Z_MV, Z_LV)
    """
    z_hv = 0.5 * (zk_hv_mv + zk_hv_lv - zk_mv_lv)
    z_mv = 0.5 * (zk_mv_lv + zk_hv_mv - zk_hv_lv)
    z_lv = 0.5 * (zk_hv_lv + zk_mv_lv - zk_hv_mv)
    return z_hv, z_mv, z_lv


def pair_impedances(z_hv: complex, z_mv: complex, z_lv: complex) -> tuple[complex, complex, complex]:
    """Inverse of star_impedances: (Z_HVMV, Z_HVLV, Z_MVLV)."""
    return z_hv + z_mv, z_hv + z_lv, z_mv + z_lv


@dataclass
class NetworkFeeder:
    """
    External network feeder connected at a single node.

    Attributes:
        node: Connection node label
        ur: Rated voltage of the feeder (kV)
        ikss: Initial symmetrical short-circuit current (kA)
        rx: R/X ratio of the short-circuit impedance
        tr: Rated transformation ratio to refer the feeder across a
            transformer (>= 1)
        r0x, x0x: Zero-sequence ratios (accepted, not used)
        overhead: Feeder is connected through overhead lines
    """
    kind: ClassVar[str] = "feeder"

    node: NodeLabel = None
    ur: float | None = None
    ikss: float | None = None
    rx: float | None = None
    tr: float | None = None
    r0x: float = 0.0
    x0x: float = 0.0
    overhead: bool = False

    def __post_init__(self):
        _check_positive(self, "tr")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node,)

    def impedance(self, busbars: BusbarIndex, ohl: bool | None = None) -> complex:
        """
        Short-circuit impedance of the feeder, equations (1) to (4).

        Args:
            busbars: Busbar index resolving the nominal voltage and c_max
            ohl: Overrides the overhead connection flag

        Returns:
            Z_Q (or Z_Qt when a transformation ratio is set) in Ohms
        """
        _require(self, "node", "ikss")
        _check_positive(self, "ikss")
        if ohl is None:
            ohl = self.overhead

        un, c = busbars.resolve(self.node, self.ur or 0.0)
        if un == 0.0:
            raise MissingRatingError("ur must be specified when the node is not on a busbar")

        z = (c * un) / (SQRT_3 * self.ikss)
        if self.tr is not None:
            z *= 1.0 / self.tr ** 2

        if self.rx is not None:
            x = z / math.sqrt(1.0 + self.rx ** 2)
        else:
            x = z

        if un > 35.0 and ohl:
            return complex(0.0, x)
        if self.rx is not None:
            return complex(self.rx * x, x)

        x = 0.995 * x
        return complex(0.1 * x, x)


@dataclass
class NetworkTransformer:
    """
    Two-winding network transformer.

    Attributes:
        node_hv, node_lv: Node labels of the high- and low-voltage sides
        ur_hv, ur_lv: Rated voltages (kV)
        sr: Rated apparent power (kVA)
        pkr: Total winding losses at rated current (kW)
        ukr: Short-circuit voltage at rated current (%)
        urr: Rated resistive component of the short-circuit voltage (%)
        ub: Highest operating voltage before short circuit (kV); selects
            the operating-point correction factor (12b) when set
        ib: Highest operating current before short circuit (kA)
        phib: Angle of the power factor before short circuit (rad)
        p: Range of voltage regulation (%)
        x0x, r0r: Zero-sequence ratios (accepted, not used)
    """
    kind: ClassVar[str] = "transformer"

    node_hv: NodeLabel = None
    node_lv: NodeLabel = None
    ur_hv: float | None = None
    ur_lv: float | None = None
    sr: float | None = None
    pkr: float = 0.0
    ukr: float | None = None
    urr: float | None = None
    ub: float | None = None
    ib: float = 0.0
    phib: float = 0.0
    p: float = 0.0
    x0x: float = 0.0
    r0r: float = 0.0

    def __post_init__(self):
        _check_positive(self, "ur_hv", "ur_lv", "sr")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node_hv, self.node_lv)

    def rated_impedance(self, hv: bool = False) -> tuple[float, float]:
        """Uncorrected (R_T, X_T) in Ohms referred to the HV or LV side."""
        _require(self, "ur_hv", "ur_lv", "sr", "ukr")
        ur = (self.ur_hv if hv else self.ur_lv) * 1e3
        return transformer_resistance_reactance(
            self.ukr, self.sr * 1e3, ur, urr=self.urr, pkr_w=self.pkr * 1e3,
        )

    def correction_factor(self, hv: bool, busbars: BusbarIndex) -> float:
        """
        Impedance correction factor K_T.

        Uses equation (12b) when the operating conditions before the short
        circuit are known (ub set), otherwise the simplified (12a):
            K_T = 0.95 * c_max / (1 + 0.6 * x_T)
        """
        if hv:
            ur_kv = self.ur_hv
            un, c = busbars.resolve(self.node_hv, self.ur_hv)
        else:
            ur_kv = self.ur_lv
            un, c = busbars.resolve(self.node_lv, self.ur_lv)

        ur = ur_kv * 1e3
        sr = self.sr * 1e3
        _, x = self.rated_impedance(hv)
        xt = x / (ur ** 2 / sr)  # relative reactance

        if self.ub is not None:
            ub = self.ub * 1e3
            ib = self.ib * 1e3
            ir = sr / (SQRT_3 * ur)
            return (un * 1e3 / ub) * (c / (1.0 + xt * (ib / ir) * math.sin(self.phib)))

        return 0.95 * (c / (1.0 + 0.6 * xt))

    def impedance(self, busbars: BusbarIndex, hv: bool = False) -> complex:
        """
        Corrected short-circuit impedance Z_TK = K_T * Z_T.

        Args:
            busbars: Busbar index resolving the nominal voltage and c_max
            hv: Refer the impedance to the HV side (default LV side)

        Returns:
            Z_TK in Ohms
        """
        r, x = self.rated_impedance(hv)
        k = self.correction_factor(hv, busbars)
        return complex(r, x) * k


@dataclass
class ThreeWindingTransformer:
    """
    Network transformer with high-, medium- and low-voltage windings.

    The short-circuit data are given per winding pair with the third winding
    open. Pair powers in kVA, pair voltages in %, pair losses in kW.
    """
    kind: ClassVar[str] = "three-winding transformer"

    node_hv: NodeLabel = None
    node_mv: NodeLabel = None
    node_lv: NodeLabel = None

    ur_hv: float | None = None
    ur_mv: float | None = None
    ur_lv: float | None = None

    sr_hv_mv: float | None = None
    sr_hv_lv: float | None = None
    sr_mv_lv: float | None = None

    ukr_hv_mv: float | None = None
    ukr_hv_lv: float | None = None
    ukr_mv_lv: float | None = None

    pkr_hv_mv: float = 0.0
    pkr_hv_lv: float = 0.0
    pkr_mv_lv: float = 0.0

    urr_hv_mv: float | None = None
    urr_hv_lv: float | None = None
    urr_mv_lv: float | None = None

    uxr_hv_mv: float = 0.0
    uxr_hv_lv: float = 0.0
    uxr_mv_lv: float = 0.0

    p: float = 0.0

    def __post_init__(self):
        _check_positive(self, "ur_hv", "ur_mv", "ur_lv", "sr_hv_mv", "sr_hv_lv", "sr_mv_lv")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node_hv, self.node_mv, self.node_lv)

    def _rated_voltage(self, side: TransformerSide) -> float:
        name = f"ur_{side.value}"
        _require(self, name)
        return getattr(self, name) * 1e3

    def pair_impedance(self, side: TransformerSide, pair: WindingPair, busbars: BusbarIndex) -> complex:
        """
        Corrected short-circuit impedance of one winding pair.

        Equations (10) and (12a) of IEC 60909-0. The correction factor uses
        c_max of the HV busbar when set explicitly, otherwise the Table 1
        value for the HV rated voltage.

        Args:
            side: Side whose rated voltage the impedance is referred to
            pair: Winding pair
            busbars: Busbar index

        Returns:
            Z_K of the pair in Ohms
        """
        suffix = pair.value
        _require(self, f"sr_{suffix}", f"ukr_{suffix}")
        ur = self._rated_voltage(side)
        sr = getattr(self, f"sr_{suffix}") * 1e3
        ukr = getattr(self, f"ukr_{suffix}")
        urr = getattr(self, f"urr_{suffix}")
        pkr = getattr(self, f"pkr_{suffix}") * 1e3

        if urr is None and pkr == 0.0:
            raise MissingRatingError(f"uRr or Pkr must be specified for {suffix.upper()}")
        if urr is None:
            urr = (pkr / sr) * 100.0
        if urr > ukr:
            raise InconsistentInputError(f"uRr ({urr}) must be < ukr ({ukr}) for {suffix.upper()}")
        uxr = math.sqrt(ukr ** 2 - urr ** 2)  # (10d)

        z_rated = ur ** 2 / sr
        z = complex(urr / 100.0, uxr / 100.0) * z_rated

        _require(self, "ur_hv")
        cmax = voltage_correction_factor(self.ur_hv, minimum=False, six_percent=busbars.six_percent)
        busbar = busbars.busbar(self.node_hv)
        if busbar is not None and busbar.cmax:
            cmax = busbar.cmax

        xt = z.imag / z_rated
        k = 0.95 * (cmax / (1.0 + 0.6 * xt))
        return k * z

    def impedance(
        self,
        busbars: BusbarIndex,
        side: TransformerSide = TransformerSide.LV,
    ) -> tuple[complex, complex, complex]:
        """
        Star equivalent impedances (Z_HV, Z_MV, Z_LV) referred to one side.
        """
        zk_hv_mv = self.pair_impedance(side, WindingPair.HV_MV, busbars)
        zk_hv_lv = self.pair_impedance(side, WindingPair.HV_LV, busbars)
        zk_mv_lv = self.pair_impedance(side, WindingPair.MV_LV, busbars)
        return star_impedances(zk_hv_mv, zk_hv_lv, zk_mv_lv)


@dataclass
class Cable:
    """
    Cable between two nodes.

    Attributes:
        node_i, node_j: Terminal node labels
        ur: Rated voltage (kV)
        l: Length (km)
        rl, xl: Positive-sequence resistance and reactance (Ohm/km)
        r0, x0: Zero-sequence resistance and reactance (Ohm/km)
        parallel: Number of parallel cables
        tr: Rated transformation ratio to refer the cable across a transformer
    """
    kind: ClassVar[str] = "cable"

    node_i: NodeLabel = None
    node_j: NodeLabel = None
    ur: float = 0.0
    l: float = 1.0
    rl: float | None = None
    xl: float | None = None
    r0: float = 0.0
    x0: float = 0.0
    parallel: int = 1
    tr: float | None = None

    def __post_init__(self):
        if self.parallel < 1:
            raise InconsistentInputError(f"parallel must be at least 1, got {self.parallel}")
        _check_positive(self, "tr")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node_i, self.node_j)

    def impedance(self) -> complex:
        _require(self, "rl", "xl")
        n = float(self.parallel)
        r = (1.0 / n) * self.rl * self.l
        x = (1.0 / n) * self.xl * self.l
        if self.tr is not None:
            r *= 1.0 / self.tr ** 2
            x *= 1.0 / self.tr ** 2
        return complex(r, x)


@dataclass
class OverheadLine:
    """
    Overhead line between two nodes.

    When the tabulated rl / xl are not given they are derived from the
    conductor data, equations (14) and (15) of IEC 60909-0.

    Attributes:
        node_i, node_j: Terminal node labels
        l: Length (km)
        rl, xl: Positive-sequence resistance and reactance (Ohm/km)
        r0, x0: Zero-sequence resistance and reactance (Ohm/km)
        parallel: Number of parallel lines
        qn: Nominal cross-section (mm^2)
        rho: Resistivity (Ohm mm^2/m); Cu 1/54, Al 1/34, Al alloy 1/31
        d: Geometric mean distance between conductors (m)
        n: Number of bundled conductors
    """
    kind: ClassVar[str] = "line"

    node_i: NodeLabel = None
    node_j: NodeLabel = None
    l: float = 1.0
    rl: float | None = None
    xl: float | None = None
    r0: float = 0.0
    x0: float = 0.0
    parallel: int = 1
    qn: float | None = None
    rho: float | None = None
    d: float | None = None
    n: int = 1

    def __post_init__(self):
        if self.parallel < 1:
            raise InconsistentInputError(f"parallel must be at least 1, got {self.parallel}")
        if self.n < 1:
            raise InconsistentInputError(f"n must be at least 1, got {self.n}")
        _check_positive(self, "qn", "d")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node_i, self.node_j)

    def resistance_per_km(self) -> float:
        if self.rl is not None:
            return self.rl
        if self.rho is None or self.qn is None:
            raise MissingRatingError("rl, or rho and qn, must be specified")
        return (self.rho / self.qn) * 1000.0  # (14)

    def reactance_per_km(self, frequency: float) -> float:
        if self.xl is not None:
            return self.xl
        if self.d is None or self.qn is None:
            raise MissingRatingError("xl, or d and qn, must be specified")
        r = (1.14 * math.sqrt(self.qn / math.pi)) / 1000.0  # equivalent conductor radius (m)
        return 2.0 * math.pi * frequency * (MU_0 * 1000.0 / (2.0 * math.pi)) * (
            1.0 / (4.0 * self.n) + math.log(self.d / r)
        )

    def impedance(self, frequency: float = 50.0) -> complex:
        rl = self.resistance_per_km()
        xl = self.reactance_per_km(frequency)
        return complex(rl, xl) * self.l / self.parallel


@dataclass
class SynchronousGenerator:
    """
    Synchronous generator connected directly to the network.

    Attributes:
        node: Connection node label
        ur: Rated voltage (kV)
        sr: Rated apparent power (kVA)
        cos_phi: Rated power factor
        r: Stator resistance (Ohm)
        xdpp: Subtransient reactance related to the rated impedance (p.u.)
        xdsat: Saturated synchronous reactance (p.u.)
        p: Range of generator voltage regulation (%)
    """
    kind: ClassVar[str] = "generator"

    node: NodeLabel = None
    ur: float | None = None
    sr: float | None = None
    cos_phi: float = 1.0
    r: float = 0.0
    xdpp: float | None = None
    xdsat: float = 0.0
    p: float = 0.0

    def __post_init__(self):
        _check_positive(self, "ur", "sr")
        if not 0.0 < self.cos_phi <= 1.0:
            raise InconsistentInputError(f"cos_phi must be in (0, 1], got {self.cos_phi}")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node,)

    def impedance(
        self,
        busbars: BusbarIndex,
        tolerance_kv: float = 1.0,
        peak: bool = False,
    ) -> complex:
        """
        Corrected subtransient impedance Z_GK = K_G * Z_G, equations (17), (18).

        Args:
            busbars: Busbar index resolving the nominal voltage and c_max
            tolerance_kv: If the nominal system voltage differs from the rated
                generator voltage by more than this, UrG * (1 + pG) is used
            peak: Replace R_G by the fictitious resistance R_Gf

        Returns:
            Z_GK in Ohms
        """
        _require(self, "node", "ur", "sr", "xdpp")
        un, c = busbars.resolve(self.node, self.ur)
        un *= 1e3

        ur_g = self.ur * 1e3
        sr_g = self.sr * 1e3
        phi = math.acos(self.cos_phi)
        pg = self.p / 100.0

        if abs(un - ur_g) > tolerance_kv * 1e3:
            ur_g = ur_g * (1.0 + pg)
        xdpp = self.xdpp * ur_g ** 2 / sr_g

        kg = (un / ur_g) * (c / (1.0 + self.xdpp * math.sin(phi)))

        rg = _peak_resistance(ur_g, sr_g, xdpp) if peak else self.r
        return complex(rg, xdpp) * kg


@dataclass
class AsynchronousMotor:
    """
    Asynchronous motor or group of identical motors.

    Attributes:
        node: Connection node label
        ur: Rated voltage (kV)
        pr: Rated active power (kW)
        cos_phi: Rated power factor
        eta: Efficiency (%)
        ilr_ir: Ratio of locked-rotor current to rated current
        p: Pairs of poles
        rx: R/X ratio (defaults per IEC 60909-0 §6.8 when None)
        n: Number of motors in the group
    """
    kind: ClassVar[str] = "motor"

    node: NodeLabel = None
    ur: float | None = None
    pr: float | None = None
    cos_phi: float = 1.0
    eta: float = 100.0
    ilr_ir: float | None = None
    p: int = 1
    rx: float | None = None
    n: int = 1

    def __post_init__(self):
        if self.p < 1:
            raise InconsistentInputError(f"p must be at least 1, got {self.p}")
        if self.n < 1:
            raise InconsistentInputError(f"n must be at least 1, got {self.n}")
        _check_positive(self, "ur", "pr", "ilr_ir", "cos_phi", "eta")

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.node,)

    def default_rx(self) -> float:
        ur = self.ur * 1e3
        pr = self.pr * 1e3
        if ur < 1e3:
            return 0.42
        # 1 MW per pair of poles
        if pr / self.p < 1e6:
            return 0.15
        return 0.10

    def impedance(self) -> complex:
        """Short-circuit impedance Z_M, equations (26) and (27)."""
        _require(self, "ur", "pr", "ilr_ir")
        ur = self.ur * 1e3
        pr = self.pr * 1e3
        eta = self.eta / 100.0
        rx = self.rx if self.rx is not None else self.default_rx()

        sr_m = pr / (eta * self.cos_phi)
        zm = (1.0 / self.n) * (1.0 / self.ilr_ir) * (ur ** 2 / sr_m)

        xm = zm / math.sqrt(1.0 + rx ** 2)
        return complex(rx * xm, xm)


@dataclass
class Reactor:
    """
    Short-circuit limiting reactor.

    A reactor with both node labels is a series element; a reactor with only
    `node` is connected between that node and the reference.

    Attributes:
        node: Node label (first terminal)
        node_j: Second terminal of a series reactor
        ukr: Rated voltage drop (%)
        irr: Rated current (kA)
        rr: Rated resistance (Ohm)
        xr: Rated reactance (Ohm)
    """
    kind: ClassVar[str] = "reactor"

    node: NodeLabel = None
    node_j: NodeLabel = None
    ukr: float | None = None
    irr: float | None = None
    rr: float | None = None
    xr: float | None = None

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        if self.node_j is None:
            return (self.node,)
        return (self.node, self.node_j)

    def impedance(self, busbars: BusbarIndex) -> complex:
        """
        Reactor impedance Z_R, equation (15): X_R = ukr/100 * Un / (sqrt(3) * IrR).
        """
        r = self.rr or 0.0
        if self.xr is not None:
            return complex(r, self.xr)

        _require(self, "ukr", "irr")
        _check_positive(self, "irr")
        busbar = busbars.busbar(self.node)
        if busbar is None or not busbar.un:
            raise MissingRatingError("xr must be specified when the reactor node is not on a busbar")
        x = (self.ukr / 100.0) * busbar.un / (SQRT_3 * self.irr)
        return complex(r, x)


@dataclass
class PowerStationUnit:
    """
    Generator with its unit transformer, IEC 60909-0 §6.7.

    The generator must be connected to the transformer's low-voltage node.

    Attributes:
        generator: The synchronous generator
        transformer: The unit transformer
        oltc: The unit transformer has an on-load tap-changer
    """
    kind: ClassVar[str] = "power station unit"

    generator: SynchronousGenerator
    transformer: NetworkTransformer
    oltc: bool = True

    def __post_init__(self):
        if self.generator.node != self.transformer.node_lv:
            raise InconsistentInputError(
                f"generator node {self.generator.node!r} must be the transformer "
                f"LV node {self.transformer.node_lv!r}"
            )

    @property
    def node_labels(self) -> tuple[NodeLabel, ...]:
        return (self.generator.node, self.transformer.node_hv, self.transformer.node_lv)

    def impedance_parts(
        self,
        busbars: BusbarIndex,
        hv: bool = True,
        peak: bool = False,
    ) -> tuple[complex, complex]:
        """
        Corrected generator and unit transformer parts of Z_S.

        Z_S = K_S * (tr^2 * Z_G + Z_THV), equations (21) to (24). K_S takes
        the on-load tap-changer form (22) or the form (24) without it.

        Args:
            busbars: Busbar index resolving Un and c_max at the HV node
            hv: Refer the unit transformer impedance to the HV side
            peak: Replace R_G by the fictitious resistance R_Gf

        Returns:
            Tuple of (K_S * tr^2 * Z_G, K_S * Z_THV) in Ohms
        """
        g = self.generator
        t = self.transformer
        _require(g, "ur", "sr", "xdpp")
        _require(t, "node_hv", "ur_hv", "ur_lv", "sr", "ukr")

        un, c = busbars.resolve(t.node_hv, t.ur_hv)
        un *= 1e3

        ur_g = g.ur * 1e3
        sr_g = g.sr * 1e3
        phi = math.acos(g.cos_phi)
        pg = g.p / 100.0

        ulv = t.ur_lv * 1e3
        uhv = t.ur_hv * 1e3

        if ulv > ur_g:
            # step-up
            ur_g = ur_g * (1.0 + pg)
        xdpp = g.xdpp * ur_g ** 2 / sr_g

        rg = _peak_resistance(ur_g, sr_g, xdpp) if peak else g.r
        zg = complex(rg, xdpp)

        tr2 = (t.ur_hv / t.ur_lv) ** 2
        ur_t = uhv if hv else ulv
        sr_t = t.sr * 1e3
        rt, xt = transformer_resistance_reactance(t.ukr, sr_t, ur_t, urr=t.urr, pkr_w=t.pkr * 1e3)
        zt = complex(rt, xt)

        if self.oltc:
            xt_rel = xt / (ur_t ** 2 / sr_t)
            ks = (un ** 2 / ur_g ** 2) * (ulv ** 2 / uhv ** 2) * (
                c / (1.0 + abs(g.xdpp - xt_rel) * math.sin(phi))
            )  # (22)
        else:
            ur_g = g.ur * 1e3 * (1.0 + pg)
            ks = (un / ur_g) * (ulv / uhv) * (c / (1.0 + g.xdpp * math.sin(phi)))  # (24)

        return ks * tr2 * zg, ks * zt

    def impedance(self, busbars: BusbarIndex, hv: bool = True, peak: bool = False) -> complex:
        """Corrected impedance Z_S (or Z_SO) of the whole unit in Ohms."""
        zg, zt = self.impedance_parts(busbars, hv=hv, peak=peak)
        return zg + zt
