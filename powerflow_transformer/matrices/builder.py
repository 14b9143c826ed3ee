"""
Transformer two-port matrix construction.

This module derives the per-unit parameters of a transformer and routes the
configuration to exactly one topology builder, selected by connection type
and solver formulation.
"""

import logging
from collections.abc import Callable

from ..core.elements import (
    ConnectionType,
    Phase,
    SolverMethod,
    TransformerConfiguration,
    parse_phases,
)
from ..core.exceptions import (
    ConfigurationInvalid,
    UnknownConnectionType,
    UnsupportedSolverMethod,
)
from .topologies import (
    build_center_tapped_fbs,
    build_delta_delta_fbs,
    build_delta_delta_gs,
    build_delta_gwye_fbs,
    build_delta_gwye_gs,
    build_wye_fbs,
    build_wye_gs,
)
from .twoport import PerUnitParameters, TwoPortMatrices

logger = logging.getLogger(__name__)

Builder = Callable[[PerUnitParameters, TransformerConfiguration, Phase], TwoPortMatrices]

FBS = SolverMethod.FORWARD_BACKWARD_SWEEP
GS = SolverMethod.GAUSS_SEIDEL

# Supported (topology, solver) pairs. Anything absent is rejected.
_BUILDERS: dict[tuple[ConnectionType, SolverMethod], Builder] = {
    (ConnectionType.SINGLE_PHASE, FBS): build_wye_fbs,
    (ConnectionType.SINGLE_PHASE, GS): build_wye_gs,
    (ConnectionType.WYE_WYE, FBS): build_wye_fbs,
    (ConnectionType.WYE_WYE, GS): build_wye_gs,
    (ConnectionType.DELTA_DELTA, FBS): build_delta_delta_fbs,
    (ConnectionType.DELTA_DELTA, GS): build_delta_delta_gs,
    (ConnectionType.DELTA_GROUNDED_WYE, FBS): build_delta_gwye_fbs,
    (ConnectionType.DELTA_GROUNDED_WYE, GS): build_delta_gwye_gs,
    (ConnectionType.SINGLE_PHASE_CENTER_TAPPED, FBS): build_center_tapped_fbs,
}


def supported_combinations() -> list[tuple[ConnectionType, SolverMethod]]:
    """List the (connection type, solver method) pairs that have a builder."""
    return list(_BUILDERS)


def compute_per_unit_parameters(config: TransformerConfiguration) -> PerUnitParameters:
    """
    Derive the turns ratio and base impedance from a configuration.

        turns_ratio    = V_primary / V_secondary
        base_impedance = impedance_pu * V_secondary^2 / (kVA_rating * 1000)

    Raises:
        ConfigurationInvalid: If a voltage or the kVA rating is zero
    """
    if config.V_primary == 0:
        raise ConfigurationInvalid("primary voltage must be non-zero", field="V_primary")
    if config.V_secondary == 0:
        raise ConfigurationInvalid("secondary voltage must be non-zero", field="V_secondary")
    if config.kVA_rating == 0:
        raise ConfigurationInvalid("kVA rating must be non-zero", field="kVA_rating")

    v_base = config.V_secondary
    turns_ratio = config.V_primary / config.V_secondary
    base_impedance = (config.impedance * v_base * v_base) / (config.kVA_rating * 1000.0)

    return PerUnitParameters(turns_ratio=turns_ratio, base_impedance=base_impedance)


def resolve_connection_type(code: ConnectionType | int) -> ConnectionType:
    """
    Convert a connection type code to a known ConnectionType.

    Raises:
        UnknownConnectionType: For UNKNOWN or any unrecognized code
    """
    try:
        connection_type = ConnectionType(code)
    except (ValueError, TypeError):
        raise UnknownConnectionType(
            f"unknown transformer connect type '{code}'", field="connection_type"
        ) from None
    if connection_type == ConnectionType.UNKNOWN:
        raise UnknownConnectionType(
            "unknown transformer connect type", field="connection_type"
        )
    return connection_type


def check_solver_method(solver_method: SolverMethod) -> SolverMethod:
    """
    Reject solver formulations no builder supports.

    Raises:
        UnsupportedSolverMethod: For Newton-Raphson or anything that is not a SolverMethod
    """
    if not isinstance(solver_method, SolverMethod):
        raise UnsupportedSolverMethod(
            f"Unsupported solver method '{solver_method}'", field="solver_method"
        )
    if solver_method == SolverMethod.NEWTON_RAPHSON:
        raise UnsupportedSolverMethod(
            "Newton-Raphson solution method is not yet supported", field="solver_method"
        )
    return solver_method


def build_transformer_matrices(
    config: TransformerConfiguration,
    phases: Phase | str,
    solver_method: SolverMethod = SolverMethod.FORWARD_BACKWARD_SWEEP,
) -> tuple[PerUnitParameters, TwoPortMatrices]:
    """
    Build the six two-port matrices of a transformer.

    Args:
        config: Transformer configuration
        phases: Active primary phases (Phase flag or e.g. "ABC")
        solver_method: Formulation of the surrounding power-flow solver

    Returns:
        Tuple of (per-unit parameters, frozen matrix bundle)

    Raises:
        UnsupportedSolverMethod: Newton-Raphson, unknown solver, or a topology
            without a builder for the requested solver
        UnknownConnectionType: Unrecognized connection type code
        ConfigurationInvalid: Zero voltage or rating
        UnsupportedTopologyCombination, ZeroRatingError: Center-tap specific
    """
    solver_method = check_solver_method(solver_method)
    connection_type = resolve_connection_type(config.connection_type)

    builder = _BUILDERS.get((connection_type, solver_method))
    if builder is None:
        raise UnsupportedSolverMethod(
            f"{solver_method.name} is not supported for {connection_type.name} transformers",
            field="solver_method",
        )

    params = compute_per_unit_parameters(config)

    logger.debug(
        f"{connection_type.name}/{solver_method.value}: nt={params.turns_ratio:.6g}, "
        f"zt={params.base_impedance} -> {builder.__name__}"
    )
    matrices = builder(params, config, parse_phases(phases))
    return params, matrices
