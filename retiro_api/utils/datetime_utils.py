"""
Datetime utility functions.
"""
from typing import Optional
from datetime import datetime, timezone
import logging
import zoneinfo

logger = logging.getLogger(__name__)


def parse_datetime_to_utc(dt_string: Optional[str]) -> Optional[datetime]:
	"""
	Parse a datetime string to a datetime object in UTC.
	
	Handles formats like:
	- 2026-02-05T10:00:00+01:00 (with timezone offset, as AEMET CAP sends)
	- 2026-02-05T10:00:00Z (Zulu/UTC)
	- 2026-02-05T10:00:00 (naive, assumed UTC)
	
	Args:
		dt_string: ISO format datetime string or None
	
	Returns:
		datetime object in UTC timezone or None if missing or unparseable
	"""
	if dt_string is None:
		return None
	try:
		dt_string = dt_string.strip()
		if dt_string.endswith('Z') or dt_string.endswith('z'):
			dt_string = dt_string[:-1] + '+00:00'
		
		dt = datetime.fromisoformat(dt_string)
		
		if dt.tzinfo is not None:
			dt = dt.astimezone(timezone.utc)
		else:
			dt = dt.replace(tzinfo=timezone.utc)
		
		return dt
	except (ValueError, AttributeError) as e:
		logger.warning(f"Failed to parse datetime string '{dt_string}': {str(e)}")
		return None


def ensure_utc(dt: datetime) -> datetime:
	"""Return an aware UTC datetime; naive values are taken to be UTC already."""
	if dt.tzinfo is None:
		return dt.replace(tzinfo=timezone.utc)
	return dt.astimezone(timezone.utc)


def is_same_local_date(first: datetime, second: datetime, tz_name: str) -> bool:
	"""
	Check whether two instants fall on the same calendar date in a timezone.
	
	Args:
		first: First instant
		second: Second instant
		tz_name: IANA timezone name (e.g. "Europe/Madrid")
	
	Returns:
		True if both instants share the local calendar date
	"""
	local_tz = zoneinfo.ZoneInfo(tz_name)
	return ensure_utc(first).astimezone(local_tz).date() == ensure_utc(second).astimezone(local_tz).date()


def utc_now() -> datetime:
	return datetime.now(timezone.utc)
