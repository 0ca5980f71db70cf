"""Unit tests for the provisioning session state."""
from __future__ import annotations

import pytest

from ston_provision.errors import ApiRejection, ValidationError
from ston_provision.models import Asset, SimulationResult
from ston_provision.services.session import ProvisioningSession, SessionState


@pytest.fixture()
def session(usdt_asset: Asset, ton_asset: Asset) -> ProvisioningSession:
    s = ProvisioningSession()
    s.select_assets(usdt_asset, ton_asset)
    s.set_amounts("1.5", "2")
    return s


class TestValidate:
    def test_complete_session_passes(self, session: ProvisioningSession) -> None:
        session.validate()

    def test_missing_asset(self, usdt_asset: Asset) -> None:
        s = ProvisioningSession()
        s.select_assets(usdt_asset, None)
        s.set_amounts("1", "2")
        with pytest.raises(ValidationError, match="select tokens"):
            s.validate()

    def test_missing_amount(self, session: ProvisioningSession) -> None:
        session.set_amounts("1", "")
        with pytest.raises(ValidationError):
            session.validate()

    def test_unparseable_amount(self, session: ProvisioningSession) -> None:
        session.set_amounts("1", "two")
        with pytest.raises(ValidationError, match="Invalid amount"):
            session.validate()

    def test_out_of_range_amount_rejected_before_run(self, session: ProvisioningSession) -> None:
        session.set_amounts("1e999999", "1")
        with pytest.raises(ValidationError, match="Invalid amount"):
            session.start_run()
        assert session.state is SessionState.IDLE


class TestSelectDefaults:
    def test_first_two_assets(self, usdt_asset: Asset, ton_asset: Asset, jetton_asset: Asset) -> None:
        s = ProvisioningSession()
        s.select_defaults([ton_asset, usdt_asset, jetton_asset])
        assert s.asset_a is ton_asset
        assert s.asset_b is usdt_asset

    def test_single_asset(self, ton_asset: Asset) -> None:
        s = ProvisioningSession()
        s.select_defaults([ton_asset])
        assert s.asset_a is ton_asset
        assert s.asset_b is None


class TestTransitions:
    def test_start_run_clears_previous_outcome(
        self, session: ProvisioningSession, sample_result: SimulationResult
    ) -> None:
        gen = session.start_run()
        session.complete(gen, sample_result, "2.50")
        assert session.state is SessionState.READY

        new_gen = session.start_run()
        assert new_gen == gen + 1
        assert session.state is SessionState.IDLE
        assert session.result is None
        assert session.error == ""

    def test_start_run_rejects_invalid_input(self) -> None:
        s = ProvisioningSession()
        with pytest.raises(ValidationError):
            s.start_run()
        assert s.generation == 0

    def test_complete_refreshes_amount_b(
        self, session: ProvisioningSession, sample_result: SimulationResult
    ) -> None:
        gen = session.start_run()
        assert session.complete(gen, sample_result, "2.50")
        assert session.amounts.amount_a == "1.5"
        assert session.amounts.amount_b == "2.50"
        assert session.result is sample_result

    def test_stale_generation_ignored(
        self, session: ProvisioningSession, sample_result: SimulationResult
    ) -> None:
        old = session.start_run()
        session.start_run()
        assert not session.complete(old, sample_result, "9.99")
        assert not session.fail(old, ApiRejection("late"))
        assert session.result is None
        assert session.state is SessionState.IDLE
        assert session.amounts.amount_b == "2"

    def test_fail_records_message(self, session: ProvisioningSession) -> None:
        gen = session.start_run()
        error = ApiRejection("1001: bad token")
        assert session.fail(gen, error)
        assert session.state is SessionState.ERROR
        assert session.error == "1001: bad token"
        assert session.last_error is error

    def test_reselecting_assets_invalidates_run(
        self, session: ProvisioningSession, usdt_asset: Asset, jetton_asset: Asset
    ) -> None:
        gen = session.start_run()
        session.select_assets(usdt_asset, jetton_asset)
        assert not session.is_current(gen)
