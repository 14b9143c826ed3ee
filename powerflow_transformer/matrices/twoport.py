"""
Value types produced by the matrix construction.

PerUnitParameters holds the scalars every topology builder starts from;
TwoPortMatrices is the frozen bundle of the six 3x3 matrices handed to the
external solver.
"""

from dataclasses import dataclass

import numpy as np

# Order in which the matrices are reported
MATRIX_NAMES: tuple[str, ...] = ("a", "b", "c", "d", "A", "B")


@dataclass(frozen=True)
class PerUnitParameters:
    """
    Per-unit quantities derived from a transformer configuration.

    Attributes:
        turns_ratio: V_primary / V_secondary
        base_impedance: Series impedance referred to the secondary (Ohm),
            impedance_pu * V_secondary^2 / S_rated
    """
    turns_ratio: float
    base_impedance: complex


@dataclass(frozen=True, eq=False)
class TwoPortMatrices:
    """
    The six complex 3x3 two-port matrices of a transformer.

    Forward (primary referenced) matrices a, b, c, d and reverse (secondary
    referenced) matrices A, B. Arrays are copied on construction and made
    read-only, so the bundle cannot change once built.
    """
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    d: np.ndarray
    A: np.ndarray
    B: np.ndarray

    def __post_init__(self):
        for name in MATRIX_NAMES:
            matrix = np.array(getattr(self, name), dtype=complex)
            if matrix.shape != (3, 3):
                raise ValueError(f"Matrix '{name}' must be 3x3, got shape {matrix.shape}")
            matrix.flags.writeable = False
            object.__setattr__(self, name, matrix)

    @classmethod
    def zeros(cls) -> "TwoPortMatrices":
        """Return a bundle of all-zero matrices."""
        return cls(*(np.zeros((3, 3), dtype=complex) for _ in MATRIX_NAMES))

    def as_dict(self) -> dict[str, np.ndarray]:
        """Return the matrices keyed by name, in reporting order."""
        return {name: getattr(self, name) for name in MATRIX_NAMES}
