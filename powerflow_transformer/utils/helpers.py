"""
Utility functions for reporting transformer matrices.
"""
import numpy as np
import pandas as pd

from ..core.elements import PHASE_ORDER, Phase
from ..matrices.twoport import MATRIX_NAMES, TwoPortMatrices


def phase_index(phase: Phase) -> int:
    """
    Matrix row/column index of a single phase (A=0, B=1, C=2).

    Raises:
        ValueError: If phase is not exactly one of A, B, C
    """
    if phase not in PHASE_ORDER:
        raise ValueError(f"Expected a single phase, got {phase}")
    return PHASE_ORDER.index(phase)


def format_matrix(M: np.ndarray, precision: int = 6) -> str:
    """
    Render a complex matrix as text, one row per line.

    Args:
        M: Matrix to render
        precision: Digits after the decimal point

    Returns:
        Multi-line string with entries formatted as ``re+imj``
    """
    rows = []
    for row in np.asarray(M, dtype=complex):
        cells = [f"{z.real:+.{precision}f}{z.imag:+.{precision}f}j" for z in row]
        rows.append("\t" + "\t".join(cells))
    return "\n".join(rows)


def matrices_to_dataframe(matrices: TwoPortMatrices, include_zeros: bool = True) -> pd.DataFrame:
    """
    Flatten the six matrices into a long-format table.

    Parameters:
    -----------
    matrices : TwoPortMatrices
        Matrix bundle of an initialized transformer
    include_zeros : bool, optional
        If False, entries equal to zero are dropped (default True)

    Returns:
    --------
    pd.DataFrame with columns
        matrix, row, col, phase_row, phase_col, real, imag, magnitude
    """
    records = []
    labels = [p.name for p in PHASE_ORDER]
    for name in MATRIX_NAMES:
        M = getattr(matrices, name)
        for i in range(3):
            for j in range(3):
                z = complex(M[i, j])
                if not include_zeros and z == 0:
                    continue
                records.append({
                    'matrix': name,
                    'row': i,
                    'col': j,
                    'phase_row': labels[i],
                    'phase_col': labels[j],
                    'real': z.real,
                    'imag': z.imag,
                    'magnitude': abs(z),
                })

    columns = ['matrix', 'row', 'col', 'phase_row', 'phase_col', 'real', 'imag', 'magnitude']
    return pd.DataFrame.from_records(records, columns=columns)


def dataframe_to_matrices(frame: pd.DataFrame) -> TwoPortMatrices:
    """
    Rebuild a matrix bundle from the table produced by matrices_to_dataframe().

    Entries missing from the table (e.g. dropped zeros) are zero.
    """
    arrays = {name: np.zeros((3, 3), dtype=complex) for name in MATRIX_NAMES}
    for record in frame.itertuples(index=False):
        arrays[record.matrix][int(record.row), int(record.col)] = complex(record.real, record.imag)
    return TwoPortMatrices(**arrays)
