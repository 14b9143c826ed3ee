"""
Core transformer elements and classes.
"""

from .exceptions import (
    ErrorCode,
    TransformerModelError,
    ConfigurationMissing,
    ConfigurationInvalidType,
    ConfigurationInvalid,
    ZeroRatingError,
    UnsupportedSolverMethod,
    UnsupportedTopologyCombination,
    UnknownConnectionType,
)

from .elements import (
    ConnectionType,
    SolverMethod,
    SpecialLink,
    Phase,
    PHASE_ORDER,
    parse_phases,
    phase_count,
    special_link_for,
    TransformerConfiguration,
)

from .transformer import Transformer

from .network import Network, ErrorPolicy

__all__ = [
    'ErrorCode',
    'TransformerModelError',
    'ConfigurationMissing',
    'ConfigurationInvalidType',
    'ConfigurationInvalid',
    'ZeroRatingError',
    'UnsupportedSolverMethod',
    'UnsupportedTopologyCombination',
    'UnknownConnectionType',
    'ConnectionType',
    'SolverMethod',
    'SpecialLink',
    'Phase',
    'PHASE_ORDER',
    'parse_phases',
    'phase_count',
    'special_link_for',
    'TransformerConfiguration',
    'Transformer',
    'Network',
    'ErrorPolicy',
]
