"""
Unit tests for warning relevance and activity filters.
"""
import pytest
from datetime import datetime, timezone
from retiro_api.schemas.alert import AlertRecord
from retiro_api.utils.warning_filters import is_relevant_warning, is_warning_active


class TestIsRelevantWarning:
	"""Test cases for is_relevant_warning."""
	
	def test_accepts_zone_in_multi_zone_field(self):
		"""Test the target zone inside a space-separated zone list."""
		record = AlertRecord(phenomenon="VI;Vientos", zone="722801 722802")
		
		assert is_relevant_warning(record, target_zone="722802") is True
	
	@pytest.mark.parametrize("phenomenon", ["VI;Vientos", "NE;Nevadas", "ne", " vi ;Vientos"])
	def test_accepts_wind_and_snow(self, phenomenon):
		"""Test wind and snow codes, regardless of case and padding."""
		record = AlertRecord(phenomenon=phenomenon, zone="722802")
		
		assert is_relevant_warning(record, target_zone="722802", relevant_codes=["VI", "NE"]) is True
	
	def test_rejects_other_phenomena(self):
		"""Test temperature warnings do not close the park."""
		record = AlertRecord(phenomenon="TC;Temperaturas maximas", zone="722802")
		
		assert is_relevant_warning(record, target_zone="722802", relevant_codes=["VI", "NE"]) is False
	
	def test_rejects_other_zones(self):
		"""Test Sierra warnings are not relevant for Retiro."""
		record = AlertRecord(phenomenon="VI;Vientos", zone="722801")
		
		assert is_relevant_warning(record, target_zone="722802") is False
	
	@pytest.mark.parametrize("record", [
		AlertRecord(zone="722802"),
		AlertRecord(phenomenon="VI;Vientos"),
		AlertRecord(phenomenon="", zone="722802"),
		AlertRecord(),
	])
	def test_missing_fields_are_not_relevant(self, record):
		"""Test records without phenomenon or zone."""
		assert is_relevant_warning(record, target_zone="722802") is False
	
	def test_uses_settings_defaults(self):
		"""Test default zone and codes come from settings."""
		record = AlertRecord(phenomenon="NE;Nevadas", zone="722802")
		
		assert is_relevant_warning(record) is True


class TestIsWarningActive:
	"""Test cases for is_warning_active."""
	
	@pytest.fixture
	def now(self):
		return datetime(2026, 2, 5, 12, 0, tzinfo=timezone.utc)
	
	def test_future_warning_is_not_active(self, now):
		record = AlertRecord(onset="2026-02-05T13:00:00Z", expires="2026-02-05T15:00:00Z")
		
		assert is_warning_active(record, now) is False
	
	def test_expired_warning_is_not_active(self, now):
		record = AlertRecord(onset="2026-02-05T08:00:00Z", expires="2026-02-05T11:00:00Z")
		
		assert is_warning_active(record, now) is False
	
	def test_warning_bracketing_now_is_active(self, now):
		record = AlertRecord(onset="2026-02-05T08:00:00Z", expires="2026-02-05T15:00:00Z")
		
		assert is_warning_active(record, now) is True
	
	def test_offsets_are_respected(self, now):
		"""Test onset 13:30+01:00 (12:30 UTC) has not started at 12:00 UTC."""
		record = AlertRecord(onset="2026-02-05T13:30:00+01:00", expires="2026-02-05T20:00:00+01:00")
		
		assert is_warning_active(record, now) is False
	
	def test_onset_equal_to_now_is_active(self, now):
		record = AlertRecord(onset="2026-02-05T12:00:00Z")
		
		assert is_warning_active(record, now) is True
	
	def test_expires_equal_to_now_is_not_active(self, now):
		record = AlertRecord(expires="2026-02-05T12:00:00Z")
		
		assert is_warning_active(record, now) is False
	
	def test_no_bounds_is_active(self, now):
		assert is_warning_active(AlertRecord(), now) is True
	
	@pytest.mark.parametrize("onset,expires", [
		("not-a-date", "2026-02-05T15:00:00Z"),
		("2026-02-05T08:00:00Z", "tomorrow"),
		("", None),
		(None, "garbage"),
	])
	def test_unparseable_bounds_fail_closed(self, now, onset, expires):
		"""Test a broken timestamp never makes a warning active."""
		record = AlertRecord(onset=onset, expires=expires)
		
		assert is_warning_active(record, now) is False
	
	def test_naive_now_is_treated_as_utc(self):
		record = AlertRecord(onset="2026-02-05T08:00:00Z", expires="2026-02-05T15:00:00Z")
		
		assert is_warning_active(record, datetime(2026, 2, 5, 12, 0)) is True
