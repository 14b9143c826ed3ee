"""
Diagnostics for transformer two-port matrices.

This module provides functions to inspect computed matrices, including
rank/conditioning checks, structurally empty phase rows and the forward/
reverse turns-ratio round trip.
"""

import numpy as np

from ..core.elements import PHASE_ORDER, Phase
from ..utils.helpers import format_matrix
from .twoport import TwoPortMatrices

_PHASE_LABELS = [p.name for p in PHASE_ORDER]


def check_matrix_health(M: np.ndarray, name: str = "M") -> dict:
    """
    Check the health of a 3x3 matrix.

    Args:
        M: Matrix to check
        name: Name for display purposes

    Returns:
        Dictionary with diagnostic information
    """
    n = M.shape[0]

    # Compute SVD for rank and condition number
    try:
        s = np.linalg.svd(M, compute_uv=False)
        rank = int(np.sum(s > 1e-10))
        cond_number = float(s[0] / s[-1]) if s[-1] > 1e-15 else float('inf')
        min_singular = float(s[-1])
    except np.linalg.LinAlgError:
        rank = None
        cond_number = None
        min_singular = None

    det = complex(np.linalg.det(M))

    return {
        'name': name,
        'size': n,
        'rank': rank,
        'rank_deficiency': n - rank if rank is not None else None,
        'condition_number': cond_number,
        'min_singular_value': min_singular,
        'determinant': det,
        'is_singular': abs(det) < 1e-10,
        'is_zero': bool(np.all(np.abs(M) < 1e-15)),
    }


def find_zero_rows_cols(M: np.ndarray, tol: float = 1e-15) -> dict:
    """
    Find phase rows and columns that are entirely zero.

    Args:
        M: 3x3 matrix
        tol: Tolerance for considering a value as zero

    Returns:
        Dictionary with 'zero_rows' and 'zero_cols' lists of phase labels
    """
    zero_rows = []
    zero_cols = []

    for i, label in enumerate(_PHASE_LABELS):
        if np.sum(np.abs(M[i, :])) < tol:
            zero_rows.append(label)
        if np.sum(np.abs(M[:, i])) < tol:
            zero_cols.append(label)

    return {'zero_rows': zero_rows, 'zero_cols': zero_cols}


def check_turns_ratio_round_trip(matrices: TwoPortMatrices, phases: Phase) -> dict[str, complex]:
    """
    Product a[X][X] * d[X][X] for each active phase.

    For independent per-phase windings (single-phase, wye-wye) the forward and
    reverse turns ratios invert exactly, so every product is 1.
    """
    return {
        p.name: complex(matrices.a[i, i] * matrices.d[i, i])
        for i, p in enumerate(PHASE_ORDER)
        if p in phases
    }


def diagnose_transformer(transformer) -> dict:
    """
    Comprehensive diagnostics for an initialized transformer.

    Args:
        transformer: Initialized Transformer

    Returns:
        Dictionary with all diagnostic results
    """
    matrices = transformer.matrices
    config = transformer.configuration

    results = {
        'name': transformer.name,
        'configuration': config.name,
        'connection_type': transformer.connection_type.name,
        'solver_method': transformer.solver_method.name,
        'special_link': transformer.special_link.name,
        'phases': [p.name for p in PHASE_ORDER if p in transformer.built_phases],
        'turns_ratio': transformer.turns_ratio,
        'base_impedance': transformer.base_impedance,
        'turns_ratio_round_trip': check_turns_ratio_round_trip(matrices, transformer.built_phases),
        'matrices': {},
    }

    for name, M in matrices.as_dict().items():
        entry = check_matrix_health(M, name)
        entry.update(find_zero_rows_cols(M))
        results['matrices'][name] = entry

    return results


def print_matrices(matrices: TwoPortMatrices, precision: int = 6) -> None:
    """
    Print the a, A, b, B, c and d matrices.

    Args:
        matrices: Matrix bundle
        precision: Digits after the decimal point
    """
    for name in ("a", "A", "b", "B", "c", "d"):
        print(f"transformer:\t{name} matrix")
        print(format_matrix(getattr(matrices, name), precision=precision))


def print_diagnostics(diag: dict) -> None:
    """
    Print diagnostic results in a readable format.

    Args:
        diag: Dictionary from diagnose_transformer()
    """
    print("=" * 60)
    print(f"TRANSFORMER DIAGNOSTICS: {diag['name']}")
    print("=" * 60)

    print(f"\nConfiguration: {diag['configuration'] or '(unnamed)'}")
    print(f"   Connection: {diag['connection_type']} ({diag['special_link']})")
    print(f"   Solver: {diag['solver_method']}")
    print(f"   Phases: {''.join(diag['phases']) or '-'}")
    print(f"   Turns ratio: {diag['turns_ratio']:.6g}")
    print(f"   Base impedance: {diag['base_impedance']:.6g}")

    if diag['turns_ratio_round_trip']:
        print("\nTurns-ratio round trip (a[X][X] * d[X][X]):")
        for phase, product in diag['turns_ratio_round_trip'].items():
            print(f"   {phase}: {product:.6g}")

    for name, health in diag['matrices'].items():
        print(f"\nMatrix {name}:")
        if health['is_zero']:
            print("   (all zero)")
            continue
        print(f"   Rank: {health['rank']} (deficiency: {health['rank_deficiency']})")
        print(f"   Condition number: {health['condition_number']:.2e}" if health['condition_number'] else "   Condition number: N/A")
        print(f"   Singular: {'YES' if health['is_singular'] else 'NO'}")
        if health['zero_rows']:
            print(f"   Zero rows: {health['zero_rows']}")
        if health['zero_cols']:
            print(f"   Zero cols: {health['zero_cols']}")

    print("\n" + "=" * 60)
