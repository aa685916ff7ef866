"""
Fuzz Testing for deployment helpers
Tests edge cases and unexpected inputs
"""

import pytest
from hypothesis import given, strategies as st

from blockchain.contract_factory import apply_gas_buffer
from deployment.runner import DeploymentResult, DeploymentOutcome, SUCCESS_LINE


class TestGasBufferFuzzing:
    """Fuzz test gas limit buffer"""

    @given(
        gas_estimate=st.integers(min_value=21000, max_value=30000000),
        buffer=st.floats(min_value=1.0, max_value=3.0)
    )
    def test_buffer_never_below_estimate(self, gas_estimate, buffer):
        gas_limit = apply_gas_buffer(gas_estimate, buffer)

        assert isinstance(gas_limit, int)
        assert gas_limit >= gas_estimate
        assert gas_limit <= gas_estimate * buffer + 1

    @given(gas_estimate=st.integers(min_value=0, max_value=30000000))
    def test_unit_buffer_is_identity(self, gas_estimate):
        assert apply_gas_buffer(gas_estimate, 1.0) == gas_estimate


class TestSuccessLineFuzzing:
    """Fuzz test success line formatting"""

    @given(address=st.from_regex(r"\A0x[0-9a-fA-F]{40}\Z"))
    def test_address_in_success_line(self, address):
        outcome = DeploymentOutcome.success(DeploymentResult(address))
        line = SUCCESS_LINE.format(address=outcome.result.contract_address)

        assert line.endswith(address)
        assert outcome.exit_code == 0


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
