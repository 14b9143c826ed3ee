"""
Structured errors raised while building transformer two-port matrices.

Every error carries an ErrorCode, the offending configuration field (when one
can be named) and the identity of the transformer being initialized. The core
never catches these; the host decides whether to abort or skip the object.
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""
    CONFIGURATION_MISSING = "configuration_missing"
    CONFIGURATION_INVALID_TYPE = "configuration_invalid_type"
    CONFIGURATION_INVALID = "configuration_invalid"
    ZERO_RATING = "zero_rating"
    UNSUPPORTED_SOLVER_METHOD = "unsupported_solver_method"
    UNSUPPORTED_TOPOLOGY_COMBINATION = "unsupported_topology_combination"
    UNKNOWN_CONNECTION_TYPE = "unknown_connection_type"


class TransformerModelError(Exception):
    """
    Base class for transformer initialization errors.

    Attributes:
        message: Human-readable description
        field: Name of the offending configuration field or setting (optional)
        object_id: Name of the transformer being initialized (optional)
    """
    code: ErrorCode = ErrorCode.CONFIGURATION_INVALID

    def __init__(self, message: str, field: str | None = None, object_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.object_id = object_id

    def __str__(self) -> str:
        text = self.message
        if self.object_id is not None:
            text = f"{self.object_id}: {text}"
        if self.field is not None:
            text = f"{text} [field={self.field}]"
        return text

    def to_dict(self) -> dict:
        """Return the error context as a plain dictionary (for host reporting)."""
        return {
            'code': self.code.value,
            'message': self.message,
            'field': self.field,
            'object_id': self.object_id,
        }


class ConfigurationMissing(TransformerModelError):
    """Raised when a transformer has no configuration attached."""
    code = ErrorCode.CONFIGURATION_MISSING


class ConfigurationInvalidType(TransformerModelError):
    """Raised when the attached configuration is not a TransformerConfiguration."""
    code = ErrorCode.CONFIGURATION_INVALID_TYPE


class ConfigurationInvalid(TransformerModelError):
    """Raised when a configuration value makes the model undefined (e.g. zero rating)."""
    code = ErrorCode.CONFIGURATION_INVALID


class ZeroRatingError(ConfigurationInvalid):
    """Raised when a center-tapped transformer attaches to a phase with no rating."""
    code = ErrorCode.ZERO_RATING


class UnsupportedSolverMethod(TransformerModelError):
    """Raised for Newton-Raphson, unknown solvers, or Gauss-Seidel on a center tap."""
    code = ErrorCode.UNSUPPORTED_SOLVER_METHOD


class UnsupportedTopologyCombination(TransformerModelError):
    """Raised for center-tapped transformers on more than one primary phase."""
    code = ErrorCode.UNSUPPORTED_TOPOLOGY_COMBINATION


class UnknownConnectionType(TransformerModelError):
    """Raised when the connection type code is not recognized."""
    code = ErrorCode.UNKNOWN_CONNECTION_TYPE
