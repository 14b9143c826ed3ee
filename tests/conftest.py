"""
Pytest configuration and shared fixtures for transformer matrix tests.
"""

import pytest

from powerflow_transformer import ConnectionType, TransformerConfiguration


def make_config(connection_type, /, **overrides) -> TransformerConfiguration:
    """7200 V / 120 V, 25 kVA, 0.01+0.04j pu configuration with overrides."""
    values = dict(
        V_primary=7200.0,
        V_secondary=120.0,
        connection_type=connection_type,
        impedance=complex(0.01, 0.04),
        kVA_rating=25.0,
        name=f"cfg_{int(connection_type)}",
    )
    values.update(overrides)
    return TransformerConfiguration(**values)


@pytest.fixture
def config_factory():
    """Factory for configurations that differ from the 25 kVA defaults."""
    return make_config


@pytest.fixture
def wye_config():
    return make_config(ConnectionType.WYE_WYE)


@pytest.fixture
def single_phase_config():
    return make_config(ConnectionType.SINGLE_PHASE)


@pytest.fixture
def delta_delta_config():
    return make_config(ConnectionType.DELTA_DELTA)


@pytest.fixture
def delta_gwye_config():
    """Step-down delta-grounded-wye (turns ratio 60)."""
    return make_config(ConnectionType.DELTA_GROUNDED_WYE)


@pytest.fixture
def delta_gwye_step_up_config():
    """Step-up delta-grounded-wye, 480 V delta / 12.47 kV grounded wye."""
    return make_config(ConnectionType.DELTA_GROUNDED_WYE, V_primary=480.0, V_secondary=12470.0,
                       kVA_rating=500.0)


@pytest.fixture
def center_tapped_config():
    """Center-tapped transformer rated on phases A and C only."""
    return make_config(
        ConnectionType.SINGLE_PHASE_CENTER_TAPPED,
        phaseA_kVA_rating=25.0,
        phaseB_kVA_rating=0.0,
        phaseC_kVA_rating=50.0,
    )
