"""
Tests for matrix diagnostics and tabular export.
"""

import numpy as np
import pandas as pd
import pytest

from powerflow_transformer import (
    Phase,
    SolverMethod,
    Transformer,
    TwoPortMatrices,
    diagnose_transformer,
    format_matrix,
    matrices_to_dataframe,
    print_matrices,
)
from powerflow_transformer.matrices import (
    check_matrix_health,
    check_turns_ratio_round_trip,
    find_zero_rows_cols,
)
from powerflow_transformer.utils import dataframe_to_matrices, phase_index


@pytest.fixture
def wye_transformer(wye_config):
    xfmr = Transformer("xfmr_1", "n1", "n2", phases="AC", configuration=wye_config)
    xfmr.initialize()
    return xfmr


class TestMatrixHealth:
    """Test cases for check_matrix_health and find_zero_rows_cols."""

    def test_identity(self):
        health = check_matrix_health(np.eye(3, dtype=complex), "I")
        assert health['rank'] == 3
        assert health['rank_deficiency'] == 0
        assert health['condition_number'] == pytest.approx(1.0)
        assert not health['is_singular']
        assert not health['is_zero']

    def test_zero(self):
        health = check_matrix_health(np.zeros((3, 3), dtype=complex))
        assert health['rank'] == 0
        assert health['is_zero']
        assert health['is_singular']
        assert health['condition_number'] == float('inf')

    def test_zero_rows_inactive_phase(self, wye_transformer):
        result = find_zero_rows_cols(wye_transformer.matrices.a)
        assert result == {'zero_rows': ['B'], 'zero_cols': ['B']}


class TestRoundTrip:
    """Test cases for check_turns_ratio_round_trip."""

    def test_wye_round_trip(self, wye_transformer):
        products = check_turns_ratio_round_trip(wye_transformer.matrices, wye_transformer.phases)
        assert list(products) == ['A', 'C']
        for value in products.values():
            assert value == pytest.approx(1.0)

    def test_single_phase_round_trip(self, single_phase_config):
        xfmr = Transformer("xfmr_sp", phases=Phase.B, configuration=single_phase_config)
        xfmr.initialize(SolverMethod.GAUSS_SEIDEL)
        products = check_turns_ratio_round_trip(xfmr.matrices, xfmr.phases)
        assert products == {'B': pytest.approx(1.0)}


class TestDiagnoseTransformer:
    """Test cases for diagnose_transformer."""

    def test_summary(self, wye_transformer):
        diag = diagnose_transformer(wye_transformer)

        assert diag['name'] == 'xfmr_1'
        assert diag['connection_type'] == 'WYE_WYE'
        assert diag['special_link'] == 'NORMAL'
        assert diag['phases'] == ['A', 'C']
        assert set(diag['matrices']) == {'a', 'b', 'c', 'd', 'A', 'B'}
        assert diag['matrices']['c']['is_zero']
        assert diag['matrices']['a']['rank'] == 2
        assert diag['matrices']['B']['rank'] == 3

    def test_reports_phases_matrices_were_built_for(self, wye_transformer):
        wye_transformer.phases = Phase.ABC
        diag = diagnose_transformer(wye_transformer)

        assert wye_transformer.built_phases == Phase.A | Phase.C
        assert diag['phases'] == ['A', 'C']
        assert list(diag['turns_ratio_round_trip']) == ['A', 'C']

    def test_requires_initialize(self, wye_config):
        with pytest.raises(RuntimeError):
            diagnose_transformer(Transformer("xfmr_1", configuration=wye_config))


class TestReporting:
    """Test cases for printing and tabular export."""

    def test_format_matrix(self):
        text = format_matrix(np.eye(3) * (1 + 2j), precision=2)
        lines = text.split("\n")
        assert len(lines) == 3
        assert lines[0] == "\t+1.00+2.00j\t+0.00+0.00j\t+0.00+0.00j"

    def test_print_matrices(self, wye_transformer, capsys):
        print_matrices(wye_transformer.matrices, precision=3)
        out = capsys.readouterr().out
        headers = [line for line in out.splitlines() if line.startswith("transformer:")]
        assert headers == [f"transformer:\t{name} matrix" for name in ("a", "A", "b", "B", "c", "d")]
        assert "+60.000+0.000j" in out

    def test_dataframe(self, wye_transformer):
        frame = matrices_to_dataframe(wye_transformer.matrices)

        assert isinstance(frame, pd.DataFrame)
        assert len(frame) == 54
        assert list(frame.columns) == [
            'matrix', 'row', 'col', 'phase_row', 'phase_col', 'real', 'imag', 'magnitude'
        ]
        entry = frame[(frame['matrix'] == 'a') & (frame['row'] == 0) & (frame['col'] == 0)].iloc[0]
        assert entry['real'] == pytest.approx(60.0)
        assert entry['phase_row'] == 'A'

    def test_dataframe_nonzero_only(self, wye_transformer):
        frame = matrices_to_dataframe(wye_transformer.matrices, include_zeros=False)
        # a, b, d, A on phases A and C; B on all three phases
        assert len(frame) == 4 * 2 + 3
        assert (frame['magnitude'] > 0).all()

    def test_dataframe_back_to_matrices(self, wye_transformer):
        frame = matrices_to_dataframe(wye_transformer.matrices, include_zeros=False)
        rebuilt = dataframe_to_matrices(frame)

        assert isinstance(rebuilt, TwoPortMatrices)
        for name, M in wye_transformer.matrices.as_dict().items():
            np.testing.assert_array_equal(getattr(rebuilt, name), M)

    def test_phase_index(self):
        assert phase_index(Phase.A) == 0
        assert phase_index(Phase.C) == 2
        with pytest.raises(ValueError):
            phase_index(Phase.ABC)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
