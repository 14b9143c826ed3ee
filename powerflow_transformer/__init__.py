"""
Power-flow Transformer Two-Port Library
=======================================

A Python library for building the two-port matrices of power transformers
used by iterative distribution power-flow solvers.

Features:
- Single-phase, wye-wye, delta-delta, delta-grounded-wye (step-up and
  step-down) and single-phase center-tapped transformers
- Forward-backward sweep (impedance form) and Gauss-Seidel (admittance form)
- Frozen a, b, c, d, A, B matrices computed once per transformer
- Structured errors for unsupported solver/topology combinations
- Matrix diagnostics and tabular export

Quick Start
-----------

Using the high-level Network class:

    from powerflow_transformer import (
        Network, Transformer, TransformerConfiguration, ConnectionType, SolverMethod
    )

    config = TransformerConfiguration(
        name="T25",
        V_primary=7200.0,
        V_secondary=120.0,
        connection_type=ConnectionType.WYE_WYE,
        impedance=0.01 + 0.04j,
        kVA_rating=25.0,
    )

    net = Network(solver_method=SolverMethod.FORWARD_BACKWARD_SWEEP)
    net.add_configuration(config)
    net.add_transformer(Transformer("xfmr_1", "n1", "n2", phases="ABC"), "T25")
    net.initialize()

    a = net.get_transformer("xfmr_1").matrices.a

Logging
-------
This library uses Python's standard logging module. By default, no output is shown.
To enable logging:

    import logging
    logging.getLogger("powerflow_transformer").setLevel(logging.INFO)

For detailed debug output:

    logging.getLogger("powerflow_transformer").setLevel(logging.DEBUG)
"""

import logging

__version__ = "0.1.0"

# Configure library logging (NullHandler prevents "No handler found" warnings)
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core classes
from .core import (
    ErrorCode,
    TransformerModelError,
    ConfigurationMissing,
    ConfigurationInvalidType,
    ConfigurationInvalid,
    ZeroRatingError,
    UnsupportedSolverMethod,
    UnsupportedTopologyCombination,
    UnknownConnectionType,
    ConnectionType,
    SolverMethod,
    SpecialLink,
    Phase,
    parse_phases,
    TransformerConfiguration,
    Transformer,
    Network,
    ErrorPolicy,
)

# Matrix functions
from .matrices import (
    PerUnitParameters,
    TwoPortMatrices,
    build_transformer_matrices,
    compute_per_unit_parameters,
    diagnose_transformer,
    print_matrices,
)

# Utilities
from .utils import (
    format_matrix,
    matrices_to_dataframe,
)

__all__ = [
    # Version
    '__version__',

    # Errors
    'ErrorCode',
    'TransformerModelError',
    'ConfigurationMissing',
    'ConfigurationInvalidType',
    'ConfigurationInvalid',
    'ZeroRatingError',
    'UnsupportedSolverMethod',
    'UnsupportedTopologyCombination',
    'UnknownConnectionType',

    # Core classes
    'ConnectionType',
    'SolverMethod',
    'SpecialLink',
    'Phase',
    'parse_phases',
    'TransformerConfiguration',
    'Transformer',
    'Network',
    'ErrorPolicy',

    # Matrix types and functions
    'PerUnitParameters',
    'TwoPortMatrices',
    'build_transformer_matrices',
    'compute_per_unit_parameters',
    'diagnose_transformer',
    'print_matrices',

    # Utilities
    'format_matrix',
    'matrices_to_dataframe',
]
