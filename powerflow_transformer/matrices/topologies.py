"""
Two-port matrix builders, one per (connection topology, solver formulation).

Every builder is a pure function of the per-unit parameters, the
configuration and the active phase set, and returns a TwoPortMatrices bundle.

Conventions (3x3, phase order A, B, C):
    forward-sweep voltage:   V_primary   = a @ V_secondary + b @ I_secondary
    forward-sweep current:   I_primary   = c @ V_secondary + d @ I_secondary
    backward-sweep voltage:  V_secondary = A @ V_primary   - B @ I_secondary

Under Gauss-Seidel, b holds the series admittance instead of an impedance and
(for delta-grounded-wye) c and B hold the wye/delta phase-shift transforms.
"""

import logging
import math

import numpy as np

from ..core.elements import PHASE_ORDER, Phase, TransformerConfiguration, phase_count
from ..core.exceptions import (
    ConfigurationInvalid,
    UnsupportedTopologyCombination,
    ZeroRatingError,
)
from .twoport import PerUnitParameters, TwoPortMatrices

logger = logging.getLogger(__name__)

SQRT3 = math.sqrt(3.0)

# Center-tapped leakage split: share of the per-unit R and X on each winding
PRIMARY_RESISTANCE_SHARE = 0.5
PRIMARY_REACTANCE_SHARE = 0.8
SECONDARY_REACTANCE_SHARE = 0.4

# Core excitation branch (center-tapped), relative to the per-unit R and X
CORE_RESISTANCE_SCALE = 1e6
CORE_REACTANCE_SCALE = 1e3

_IDENTITY = np.eye(3, dtype=complex)
# Cyclic positions: forward (0,1),(1,2),(2,0); backward (0,2),(1,0),(2,1)
_FORWARD = np.roll(_IDENTITY, 1, axis=1)
_BACKWARD = _FORWARD.T


def _zeros() -> np.ndarray:
    return np.zeros((3, 3), dtype=complex)


def _cyclic(diag: complex = 0.0, forward: complex = 0.0, backward: complex = 0.0) -> np.ndarray:
    """Matrix with a constant diagonal and constant forward/backward cyclic entries."""
    return diag * _IDENTITY + forward * _FORWARD + backward * _BACKWARD


def _series_admittance(params: PerUnitParameters) -> complex:
    """Scalar series admittance 1/Z used by the Gauss-Seidel formulation."""
    if params.base_impedance == 0:
        raise ConfigurationInvalid(
            "Gauss-Seidel requires a non-zero series impedance", field="impedance"
        )
    return 1.0 / params.base_impedance


def is_step_down(turns_ratio: float) -> bool:
    """
    Step-down/step-up predicate for delta-grounded-wye transformers.

    Evaluated on the unscaled (line-to-line) turns ratio by both solver
    formulations, so FBS and Gauss-Seidel always select the same pattern.
    """
    return turns_ratio > 1.0


# =============================================================================
# Single-phase and wye-wye
# =============================================================================

def _wye_windings(params: PerUnitParameters, phases: Phase) -> tuple[np.ndarray, np.ndarray]:
    """Per-phase turns ratio and its inverse, zero for inactive phases."""
    nt = np.array([params.turns_ratio if p in phases else 0.0 for p in PHASE_ORDER])
    inv_nt = np.array([1.0 / params.turns_ratio if p in phases else 0.0 for p in PHASE_ORDER])
    return nt, inv_nt


def _wye_bundle(params: PerUnitParameters, phases: Phase, b: np.ndarray) -> TwoPortMatrices:
    nt, inv_nt = _wye_windings(params, phases)
    return TwoPortMatrices(
        a=np.diag(nt).astype(complex),
        b=b,
        c=_zeros(),
        d=np.diag(inv_nt).astype(complex),
        A=np.diag(inv_nt).astype(complex),
        # Not masked by phase activity
        B=params.base_impedance * _IDENTITY,
    )


def build_wye_fbs(params: PerUnitParameters, config: TransformerConfiguration,
                  phases: Phase) -> TwoPortMatrices:
    """Single-phase / wye-wye, forward-backward sweep: b[X][X] = zt * nt_X."""
    nt, _ = _wye_windings(params, phases)
    b = np.diag(params.base_impedance * nt)
    return _wye_bundle(params, phases, b)


def build_wye_gs(params: PerUnitParameters, config: TransformerConfiguration,
                 phases: Phase) -> TwoPortMatrices:
    """
    Single-phase / wye-wye, Gauss-Seidel.

    b carries the series admittance on every phase; absent phases are handled
    by the nodal network, not by this matrix.
    """
    b = _series_admittance(params) * _IDENTITY
    return _wye_bundle(params, phases, b)


# =============================================================================
# Delta-delta
# =============================================================================

def _delta_delta_bundle(params: PerUnitParameters, b: np.ndarray) -> TwoPortMatrices:
    nt = params.turns_ratio
    zt = params.base_impedance

    B = _zeros()
    B[0, 0] = B[1, 1] = zt
    B[2, 0] = B[2, 1] = -zt

    return TwoPortMatrices(
        a=_cyclic(diag=nt * 2.0 / 3.0, forward=-nt / 3.0, backward=-nt / 3.0),
        b=b,
        c=_zeros(),
        d=(1.0 / nt) * _IDENTITY,
        A=_cyclic(diag=2.0 / (nt * 3.0), forward=-1.0 / (nt * 3.0), backward=-1.0 / (nt * 3.0)),
        B=B,
    )


def build_delta_delta_fbs(params: PerUnitParameters, config: TransformerConfiguration,
                          phases: Phase) -> TwoPortMatrices:
    """Delta-delta, forward-backward sweep. Phase activity is ignored."""
    nt = params.turns_ratio
    zt = params.base_impedance

    b = _zeros()
    b[0, 0] = b[1, 1] = zt * nt
    b[2, 0] = b[2, 1] = zt * -nt
    return _delta_delta_bundle(params, b)


def build_delta_delta_gs(params: PerUnitParameters, config: TransformerConfiguration,
                         phases: Phase) -> TwoPortMatrices:
    """Delta-delta, Gauss-Seidel: b is the diagonal series admittance."""
    b = _series_admittance(params) * _IDENTITY
    return _delta_delta_bundle(params, b)


# =============================================================================
# Delta - grounded wye
# =============================================================================

def _delta_gwye_transforms(params: PerUnitParameters) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Voltage (a), current (d) and reverse voltage (A) matrices.

    The turns ratio is scaled by sqrt(3) to refer the delta line-to-line
    rating to the wye line-to-neutral side.
    """
    nt = params.turns_ratio * SQRT3

    if is_step_down(params.turns_ratio):
        a = _cyclic(forward=-nt * 2.0 / 3.0, backward=-nt / 3.0)
        d = _cyclic(diag=1.0 / nt, forward=-1.0 / nt)
        A = _cyclic(diag=1.0 / nt, backward=-1.0 / nt)
    else:
        a = _cyclic(diag=nt * 2.0 / 3.0, forward=nt / 3.0)
        d = _cyclic(diag=1.0 / nt, backward=-1.0 / nt)
        A = _cyclic(diag=1.0 / nt, forward=-1.0 / nt)

    return a, d, A


def build_delta_gwye_fbs(params: PerUnitParameters, config: TransformerConfiguration,
                         phases: Phase) -> TwoPortMatrices:
    """Delta-grounded-wye, forward-backward sweep. Phase activity is ignored."""
    a, d, A = _delta_gwye_transforms(params)
    zt = params.base_impedance

    return TwoPortMatrices(
        a=a,
        b=zt * a,
        c=_zeros(),
        d=d,
        A=A,
        B=zt * _IDENTITY,
    )


def build_delta_gwye_gs(params: PerUnitParameters, config: TransformerConfiguration,
                        phases: Phase) -> TwoPortMatrices:
    """
    Delta-grounded-wye, Gauss-Seidel.

    The admittance formulation keeps the wye/delta transform out of b:
    c maps voltages across the winding (high to low for step-down), B maps
    the currents back, and b is the diagonal series admittance.
    """
    a, d, A = _delta_gwye_transforms(params)
    alpha = params.turns_ratio * SQRT3

    if is_step_down(params.turns_ratio):
        c = _cyclic(diag=1.0 / alpha, backward=-1.0 / alpha)
        B = _cyclic(diag=1.0 / alpha, forward=-1.0 / alpha)
    else:
        c = _cyclic(diag=1.0 / alpha, forward=-1.0 / alpha)
        B = _cyclic(diag=1.0 / alpha, backward=-1.0 / alpha)

    return TwoPortMatrices(
        a=a,
        b=_series_admittance(params) * _IDENTITY,
        c=c,
        d=d,
        A=A,
        B=B,
    )


# =============================================================================
# Single-phase center-tapped
# =============================================================================

def _core_impedance(impedance: complex, z_base_primary: float) -> complex:
    """
    Core excitation impedance: a large resistive branch in parallel with the
    reactive branch, both scaled from the per-unit impedance.
    """
    r_core = CORE_RESISTANCE_SCALE * impedance.real
    x_core = CORE_REACTANCE_SCALE * impedance.imag
    if r_core == 0 or x_core == 0:
        raise ConfigurationInvalid(
            "center-tapped transformer needs non-zero per-unit resistance and reactance",
            field="impedance",
        )
    return z_base_primary * r_core * complex(0, x_core) / complex(r_core, x_core)


def _center_tap_phase(phases: Phase) -> Phase:
    """The single primary phase a center-tapped transformer attaches to."""
    n_active = phase_count(phases)
    if n_active > 1:
        raise UnsupportedTopologyCombination(
            "delta split tap is not supported yet", field="phases"
        )
    if n_active == 0:
        raise UnsupportedTopologyCombination(
            "center-tapped transformer has no primary phase", field="phases"
        )
    return next(p for p in PHASE_ORDER if p in phases)


def build_center_tapped_fbs(params: PerUnitParameters, config: TransformerConfiguration,
                            phases: Phase) -> TwoPortMatrices:
    """
    Single-phase center-tapped transformer, forward-backward sweep.

    The primary row/column of the active phase is populated in a, c, d and A.
    The 2x2 block of b and B (secondary half-windings 1 and 2) does not depend
    on which primary phase is active.
    """
    phase = _center_tap_phase(phases)
    k = PHASE_ORDER.index(phase)

    rating = config.phase_kVA_rating(phase)
    if rating == 0:
        raise ZeroRatingError(
            f"split-phase transformer trying to attach to phase {phase.name} "
            f"not defined in the configuration",
            field=TransformerConfiguration.rating_field(phase),
        )

    nt = params.turns_ratio
    z_base_hi = config.V_primary ** 2 / (rating * 1000.0)
    z_base_lo = config.V_secondary ** 2 / (rating * 1000.0)

    r_pu = config.impedance.real
    x_pu = config.impedance.imag
    z0 = complex(PRIMARY_RESISTANCE_SHARE * r_pu, PRIMARY_REACTANCE_SHARE * x_pu) * z_base_hi
    z1 = complex(r_pu, SECONDARY_REACTANCE_SHARE * x_pu) * z_base_lo
    z2 = complex(r_pu, SECONDARY_REACTANCE_SHARE * x_pu) * z_base_lo
    zc = _core_impedance(config.impedance, z_base_hi)
    logger.debug(f"Center tap on phase {phase.name}: z0={z0}, z1={z1}, z2={z2}, zc={zc}")

    a = _zeros()
    a[0, k] = a[1, k] = (z0 / zc + 1.0) * nt

    c = _zeros()
    c[k, 0] = nt / zc

    d = _zeros()
    d[k, 0] = 1.0 / nt + nt * z1 / zc
    d[k, 1] = -1.0 / nt

    A = _zeros()
    A[0, k] = A[1, k] = (zc / (zc + z0)) / nt

    b = _zeros()
    b[0, 0] = (z0 / zc + 1.0) * (z1 * nt) + z0 / nt
    b[0, 1] = -(z0 / nt)
    b[1, 0] = z0 / nt
    b[1, 1] = -(z0 / zc + 1.0) * (z2 * nt) - z0 / nt

    z_mutual = z0 * zc / ((zc + z0) * nt * nt)
    B = _zeros()
    B[0, 0] = z1 + z_mutual
    B[0, 1] = -z_mutual
    B[1, 0] = z_mutual
    B[1, 1] = -(z2 + z_mutual)

    return TwoPortMatrices(a=a, b=b, c=c, d=d, A=A, B=B)
