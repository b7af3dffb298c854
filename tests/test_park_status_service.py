"""
Unit tests for ParkStatusService.
"""
import pytest
from datetime import datetime, timezone
from retiro_api.schemas.status import (
	ClosureAdvisoryState,
	ParkStatus,
	PrimaryStatusMode,
	CLOSING_THEME,
	STATUS_THEMES,
	theme_for,
)
from retiro_api.services.park_status_service import ParkStatusService


def make_status(code: int) -> ParkStatus:
	return ParkStatus(
		status=ParkStatusService.get_status_type(code),
		code=code,
		message="Estado actual del parque",
		updated_at=datetime(2026, 2, 5, 12, 0, tzinfo=timezone.utc),
	)


class TestGetStatusType:
	"""Test cases for ParkStatusService.get_status_type."""
	
	@pytest.mark.parametrize("code,expected", [
		(1, "open"), (2, "open"), (3, "open"),
		(4, "restricted"),
		(5, "closed"), (6, "closed"),
		(0, "open"), (9, "open"),
	])
	def test_mapping(self, code, expected):
		assert ParkStatusService.get_status_type(code) == expected


class TestGetMockStatus:
	"""Test cases for ParkStatusService.get_mock_status."""
	
	def test_forced_closed_code(self):
		status = ParkStatusService.get_mock_status(5)
		
		assert status.code == 5
		assert status.status == "closed"
		assert status.incidents == "14:00 - 20:00"
	
	def test_observations_only_for_code_two(self):
		assert ParkStatusService.get_mock_status(2).observations is not None
		assert ParkStatusService.get_mock_status(3).observations is None
	
	@pytest.mark.parametrize("code", [0, 7, -1])
	def test_out_of_range_code_is_clamped(self, code):
		assert ParkStatusService.get_mock_status(code).code == 1
	
	def test_random_code_is_valid(self):
		assert 1 <= ParkStatusService.get_mock_status().code <= 6


class TestBuildDisplay:
	"""Test cases for ParkStatusService.build_display."""
	
	def test_active_warning_on_open_park(self, make_signal):
		display = ParkStatusService.build_display(make_status(1), make_signal(has_active_warning=True))
		
		assert display.advisory.state == ClosureAdvisoryState.LIKELY_CLOSED_NOW
		assert display.primary.mode == PrimaryStatusMode.PREDICTED_CLOSED
		assert display.primary.theme_code == 6
	
	def test_official_closure_wins(self, make_signal):
		display = ParkStatusService.build_display(make_status(6), make_signal(has_active_warning=True))
		
		assert display.advisory.state == ClosureAdvisoryState.NONE
		assert display.primary.mode == PrimaryStatusMode.OFFICIAL
		assert display.primary.theme_code == 6
	
	def test_missing_status_defaults_to_open(self, make_signal):
		display = ParkStatusService.build_display(None, make_signal(has_warning_within_2_hours=True))
		
		assert display.status is None
		assert display.advisory.state == ClosureAdvisoryState.NONE
		assert display.primary.mode == PrimaryStatusMode.OFFICIAL
		assert display.primary.theme_code == 1


class TestThemeFor:
	"""Test cases for theme_for."""
	
	def test_closing_uses_closing_theme(self, make_signal):
		display = ParkStatusService.build_display(make_status(2), make_signal(has_warning_within_2_hours=True))
		
		assert theme_for(display.primary) == CLOSING_THEME
	
	def test_official_uses_code_theme(self, make_signal):
		display = ParkStatusService.build_display(make_status(3), make_signal())
		
		assert theme_for(display.primary) == STATUS_THEMES[3]
