"""
Predicates deciding which AEMET warnings matter for the park, and when.
"""
from datetime import datetime
from typing import Iterable, Optional
import logging

from retiro_api.config import settings
from retiro_api.schemas.alert import AlertRecord
from retiro_api.utils.datetime_utils import ensure_utc, parse_datetime_to_utc

logger = logging.getLogger(__name__)


def is_relevant_warning(
	record: AlertRecord,
	target_zone: Optional[str] = None,
	relevant_codes: Optional[Iterable[str]] = None
) -> bool:
	"""
	Check whether a warning concerns the park's zone and a closure phenomenon.
	
	The zone field may list several space-separated codes, so the target zone
	is matched as a substring. The phenomenon looks like "VI;Vientos"; only the
	code before the first ";" is compared.
	
	Args:
		record: Parsed warning
		target_zone: Zone code to match (defaults to settings.aemet_target_zone)
		relevant_codes: Phenomenon codes that close the park (defaults to settings)
	
	Returns:
		True if zone and phenomenon both match
	"""
	zone = target_zone or settings.aemet_target_zone
	codes = {code.strip().upper() for code in (relevant_codes or settings.relevant_phenomena)}

	if not record.phenomenon or not record.zone:
		return False
	if zone not in record.zone:
		return False
	return record.phenomenon_code in codes


def is_warning_active(record: AlertRecord, now: datetime) -> bool:
	"""
	Check whether a warning is in force at `now`.
	
	Missing bounds are open-ended. A bound that is present but cannot be
	parsed makes the warning inactive.
	"""
	now = ensure_utc(now)

	if record.onset is not None:
		onset = parse_datetime_to_utc(record.onset)
		if onset is None or onset > now:
			return False

	if record.expires is not None:
		expires = parse_datetime_to_utc(record.expires)
		if expires is None or expires <= now:
			return False

	return True
