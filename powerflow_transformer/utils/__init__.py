"""
Utility functions for matrix reporting.
"""

from .helpers import phase_index, format_matrix, matrices_to_dataframe, dataframe_to_matrices

__all__ = [
    'phase_index',
    'format_matrix',
    'matrices_to_dataframe',
    'dataframe_to_matrices',
]
