"""
Transformer two-port matrix construction and diagnostics.
"""

from .twoport import (
    MATRIX_NAMES,
    PerUnitParameters,
    TwoPortMatrices,
)

from .builder import (
    build_transformer_matrices,
    compute_per_unit_parameters,
    resolve_connection_type,
    check_solver_method,
    supported_combinations,
)

from .topologies import (
    is_step_down,
    build_wye_fbs,
    build_wye_gs,
    build_delta_delta_fbs,
    build_delta_delta_gs,
    build_delta_gwye_fbs,
    build_delta_gwye_gs,
    build_center_tapped_fbs,
)

from .diagnostics import (
    check_matrix_health,
    find_zero_rows_cols,
    check_turns_ratio_round_trip,
    diagnose_transformer,
    print_matrices,
    print_diagnostics,
)

__all__ = [
    # Value types
    'MATRIX_NAMES',
    'PerUnitParameters',
    'TwoPortMatrices',

    # Builder / dispatch
    'build_transformer_matrices',
    'compute_per_unit_parameters',
    'resolve_connection_type',
    'check_solver_method',
    'supported_combinations',

    # Topology builders
    'is_step_down',
    'build_wye_fbs',
    'build_wye_gs',
    'build_delta_delta_fbs',
    'build_delta_delta_gs',
    'build_delta_gwye_fbs',
    'build_delta_gwye_gs',
    'build_center_tapped_fbs',

    # Diagnostics
    'check_matrix_health',
    'find_zero_rows_cols',
    'check_turns_ratio_round_trip',
    'diagnose_transformer',
    'print_matrices',
    'print_diagnostics',
]
