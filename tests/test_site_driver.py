"""Tests for the site driver contract and the scripted driver."""

from datetime import datetime

import pytest

from config import Credentials
from src.drivers.scripted_driver import ScriptedSiteDriver
from src.exceptions import AuthenticationError, DriverStateError, UiInteractionError
from src.interfaces.site_driver import DriverState, SubmissionOutcome, classify_outcome
from src.models.booking import BookingStatus

CREDENTIALS = Credentials(username="driver@example.com", password="secret")
PARKING_DAY = datetime(2025, 3, 10)


class TestClassifyOutcome:
    """Tests for outcome classification."""

    @pytest.mark.parametrize("outcome", list(SubmissionOutcome))
    def test_single_indicator(self, outcome):
        assert classify_outcome([outcome]) == outcome

    def test_no_indicator_fails_closed(self):
        assert classify_outcome([]) == SubmissionOutcome.FAILED

    def test_multiple_indicators_fail_closed(self):
        visible = [SubmissionOutcome.BOOKED, SubmissionOutcome.NO_SPACE]

        assert classify_outcome(visible) == SubmissionOutcome.FAILED

    def test_duplicates_count_once(self):
        visible = [SubmissionOutcome.BOOKED, SubmissionOutcome.BOOKED]

        assert classify_outcome(visible) == SubmissionOutcome.BOOKED

    def test_outcome_maps_to_status(self):
        assert SubmissionOutcome.NO_SPACE.status == BookingStatus.NO_SPACE
        assert SubmissionOutcome.BOOKED.status == BookingStatus.BOOKED


class TestDriverStateMachine:
    """Tests for state ordering enforced by SiteDriver."""

    @pytest.mark.asyncio
    async def test_full_sequence(self):
        driver = ScriptedSiteDriver()
        assert driver.state == DriverState.LOGGED_OUT

        await driver.login(CREDENTIALS)
        assert driver.state == DriverState.ON_BOOKING_FORM

        await driver.select_date(PARKING_DAY)
        assert driver.state == DriverState.DATE_SELECTED

        assert await driver.resolve_zone_availability() == "Shared"
        assert driver.state == DriverState.ZONE_RESOLVED

        assert await driver.submit() == SubmissionOutcome.BOOKED
        assert driver.state == DriverState.BOOKED

    @pytest.mark.asyncio
    async def test_no_space_final_state(self):
        driver = ScriptedSiteDriver(outcome=SubmissionOutcome.NO_SPACE)
        await driver.login(CREDENTIALS)
        await driver.select_date(PARKING_DAY)
        await driver.resolve_zone_availability()

        await driver.submit()

        assert driver.state == DriverState.NO_SPACE

    @pytest.mark.asyncio
    async def test_out_of_order_call_raises(self):
        driver = ScriptedSiteDriver()

        with pytest.raises(DriverStateError, match="select a date"):
            await driver.select_date(PARKING_DAY)

        assert driver.call_names == []

    @pytest.mark.asyncio
    async def test_cannot_submit_before_zone_resolved(self):
        driver = ScriptedSiteDriver()
        await driver.login(CREDENTIALS)
        await driver.select_date(PARKING_DAY)

        with pytest.raises(DriverStateError):
            await driver.submit()

    @pytest.mark.asyncio
    async def test_failed_step_moves_to_failed(self):
        driver = ScriptedSiteDriver(failures={"login": AuthenticationError("Invalid credentials")})

        with pytest.raises(AuthenticationError):
            await driver.login(CREDENTIALS)

        assert driver.state == DriverState.FAILED
        with pytest.raises(DriverStateError):
            await driver.select_date(PARKING_DAY)

    @pytest.mark.asyncio
    async def test_select_date_failure(self):
        driver = ScriptedSiteDriver(failures={"select_date": UiInteractionError("calendar missing")})
        await driver.login(CREDENTIALS)

        with pytest.raises(UiInteractionError):
            await driver.select_date(PARKING_DAY)

        assert driver.state == DriverState.FAILED


class TestScriptedDriverZones:
    """Tests for zone fallback in the scripted driver."""

    @pytest.mark.asyncio
    async def test_switches_to_fallback_zone(self):
        driver = ScriptedSiteDriver(
            default_zone_has_space=False,
            zone_outcomes={"Shared": SubmissionOutcome.NO_SPACE, "Paid": SubmissionOutcome.BOOKED},
        )
        await driver.login(CREDENTIALS)
        await driver.select_date(PARKING_DAY)

        assert await driver.resolve_zone_availability() == "Paid"
        assert await driver.submit() == SubmissionOutcome.BOOKED
        assert driver.calls[-1] == ("submit", ("Paid",))

    @pytest.mark.asyncio
    async def test_default_zone_outcome(self):
        driver = ScriptedSiteDriver(zone_outcomes={"Shared": SubmissionOutcome.NO_SPACE})
        await driver.login(CREDENTIALS)
        await driver.select_date(PARKING_DAY)
        await driver.resolve_zone_availability()

        assert await driver.submit() == SubmissionOutcome.NO_SPACE

    @pytest.mark.asyncio
    async def test_context_manager_tracks_lifecycle(self):
        driver = ScriptedSiteDriver()

        async with driver as session:
            assert session is driver
            assert driver.opened and not driver.closed

        assert driver.closed
