"""
Tests for the Network container.
"""

import logging

import pytest

from powerflow_transformer import (
    ConnectionType,
    ErrorPolicy,
    Network,
    SolverMethod,
    Transformer,
    ZeroRatingError,
)


@pytest.fixture
def network(wye_config, center_tapped_config):
    """Two good transformers and one center tap on an unrated phase."""
    net = Network()
    net.add_configuration(wye_config)
    net.add_configuration(center_tapped_config)
    net.add_transformer(Transformer("xfmr_1", "n1", "n2", phases="ABC"), wye_config.name)
    net.add_transformer(Transformer("xfmr_bad", "n2", "n3", phases="BS"), center_tapped_config.name)
    net.add_transformer(Transformer("xfmr_2", "n2", "n4", phases="AS"), center_tapped_config)
    return net


class TestNetworkBuild:
    """Test cases for adding configurations and transformers."""

    def test_counts(self, network):
        assert network.n_transformers == 3
        assert network.n_initialized == 0

    def test_shared_configuration(self, network, wye_config):
        net = network
        net.add_transformer(Transformer("xfmr_5"), wye_config.name)
        assert net.get_transformer("xfmr_5").configuration is net.get_transformer("xfmr_1").configuration

    def test_unknown_configuration_name(self):
        net = Network()
        with pytest.raises(KeyError):
            net.add_transformer(Transformer("xfmr_1"), "missing")

    def test_unnamed_configuration(self, config_factory):
        net = Network()
        with pytest.raises(ValueError):
            net.add_configuration(config_factory(ConnectionType.WYE_WYE, name=""))

    def test_duplicate_transformer(self, network):
        with pytest.raises(ValueError, match="already exists"):
            network.add_transformer(Transformer("xfmr_1"))

    def test_get_transformer_missing(self, network):
        with pytest.raises(KeyError):
            network.get_transformer("nope")


class TestNetworkInitialize:
    """Test cases for Network.initialize()."""

    def test_abort_raises_first_error(self, network):
        with pytest.raises(ZeroRatingError) as exc_info:
            network.initialize()
        assert exc_info.value.object_id == "xfmr_bad"
        # Transformers before the failure are initialized, after it are not
        assert network.get_transformer("xfmr_1").is_initialized
        assert not network.get_transformer("xfmr_2").is_initialized

    def test_skip_continues(self, network, caplog):
        with caplog.at_level(logging.WARNING, logger="powerflow_transformer"):
            errors = network.initialize(ErrorPolicy.SKIP)

        assert list(errors) == ["xfmr_bad"]
        assert network.failed_transformers == ["xfmr_bad"]
        assert network.n_initialized == 2
        assert "xfmr_bad" in caplog.text
        assert "skipping" in caplog.text

    def test_reinitialize_skips_done(self, network):
        network.initialize(ErrorPolicy.SKIP)
        first = network.get_transformer("xfmr_1").matrices

        network.initialize(ErrorPolicy.SKIP)
        assert network.get_transformer("xfmr_1").matrices is first
        assert network.failed_transformers == ["xfmr_bad"]

    def test_solver_method_applied(self, wye_config):
        net = Network(solver_method=SolverMethod.GAUSS_SEIDEL)
        net.add_transformer(Transformer("xfmr_1"), wye_config)
        net.initialize()
        assert net.get_transformer("xfmr_1").solver_method is SolverMethod.GAUSS_SEIDEL

    def test_newton_raphson_fails_everything(self, wye_config):
        net = Network(solver_method=SolverMethod.NEWTON_RAPHSON)
        net.add_transformer(Transformer("xfmr_1"), wye_config)
        net.add_transformer(Transformer("xfmr_2"), wye_config)
        errors = net.initialize(ErrorPolicy.SKIP)
        assert sorted(errors) == ["xfmr_1", "xfmr_2"]
        assert net.n_initialized == 0


class TestNetworkDiagnose:
    """Test cases for Network.diagnose()."""

    def test_diagnose_initialized_only(self, network, capsys):
        network.initialize(ErrorPolicy.SKIP)
        results = network.diagnose(print_results=True)

        assert sorted(results) == ["xfmr_1", "xfmr_2"]
        out = capsys.readouterr().out
        assert "TRANSFORMER DIAGNOSTICS: xfmr_1" in out
        assert "xfmr_bad" not in out

    def test_diagnose_quiet(self, network, capsys):
        network.initialize(ErrorPolicy.SKIP)
        network.diagnose(print_results=False)
        assert capsys.readouterr().out == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
