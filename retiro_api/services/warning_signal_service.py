from datetime import datetime, timedelta
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence
import logging

from retiro_api.config import settings
from retiro_api.exceptions import ValidationError
from retiro_api.schemas.alert import AlertRecord, SEVERITY_RANK, Severity
from retiro_api.schemas.signal import WeatherWarningSignal
from retiro_api.utils.cap_alert_parser import CAPAlertParser
from retiro_api.utils.cap_documents import extract_cap_documents
from retiro_api.utils.datetime_utils import ensure_utc, is_same_local_date, parse_datetime_to_utc
from retiro_api.utils.warning_filters import is_relevant_warning, is_warning_active

logger = logging.getLogger(__name__)

SOON_WINDOW = timedelta(hours=2)

# Canned signals for the demo/test mode (?mock=<name>)
MOCK_SIGNALS: Dict[str, WeatherWarningSignal] = {
	"none": WeatherWarningSignal(),
	"active": WeatherWarningSignal(
		has_active_warning=True,
		active_warning_severity="moderate",
	),
	"soon": WeatherWarningSignal(
		has_warning_within_2_hours=True,
		next_warning_severity="moderate",
	),
	"later": WeatherWarningSignal(
		has_warning_later_today=True,
		next_warning_severity="moderate",
	),
}


class SignalResult(NamedTuple):
	signal: WeatherWarningSignal
	# True when the signal is the fail-open substitute rather than real data
	fallback: bool


def _highest_severity(records: Iterable[AlertRecord]) -> Optional[Severity]:
	known = [record.known_severity for record in records if record.known_severity]
	if not known:
		return None
	return max(known, key=lambda severity: SEVERITY_RANK[severity])


class WarningSignalService:
	"""Turns AEMET warnings into the predictive closure signal."""

	@staticmethod
	def build_warning_signal(
		records: Sequence[AlertRecord],
		now: datetime,
		target_zone: Optional[str] = None,
		relevant_codes: Optional[Iterable[str]] = None,
		tz_name: Optional[str] = None
	) -> WeatherWarningSignal:
		"""
		Reduce parsed warnings to a single signal at instant `now`.
		
		Active and upcoming warnings are evaluated independently: the active
		subset drives has_active_warning/active_warning_severity, while the
		relevant warning with the earliest onset strictly after `now` (first
		in document order on ties) drives the "next" fields and lands in
		exactly one of the within-2-hours / later-today buckets, or neither
		if it starts on a later local date.
		
		Args:
			records: Warnings in document order
			now: Reference instant
			target_zone: Override for the park's zone code
			relevant_codes: Override for the closure phenomenon codes
			tz_name: Timezone for "today" (defaults to settings.local_timezone)
		
		Returns:
			WeatherWarningSignal with fetched_at left unset
		"""
		now = ensure_utc(now)
		relevant_codes = list(relevant_codes) if relevant_codes is not None else None
		relevant = [
			record for record in records
			if is_relevant_warning(record, target_zone=target_zone, relevant_codes=relevant_codes)
		]
		active = [record for record in relevant if is_warning_active(record, now)]

		upcoming = []
		for record in relevant:
			onset = parse_datetime_to_utc(record.onset) if record.onset is not None else None
			if onset is not None and onset > now:
				upcoming.append((onset, record))

		has_within_2_hours = False
		has_later_today = False
		next_onset = None
		next_severity = None
		if upcoming:
			next_onset, next_record = min(upcoming, key=lambda item: item[0])
			next_severity = next_record.known_severity
			if next_onset - now <= SOON_WINDOW:
				has_within_2_hours = True
			elif is_same_local_date(next_onset, now, tz_name or settings.local_timezone):
				has_later_today = True

		logger.debug(
			f"Signal from {len(records)} warnings: {len(relevant)} relevant, "
			f"{len(active)} active, {len(upcoming)} upcoming"
		)

		return WeatherWarningSignal(
			has_active_warning=bool(active),
			has_warning_within_2_hours=has_within_2_hours,
			has_warning_later_today=has_later_today,
			active_warning_severity=_highest_severity(active),
			next_warning_onset=next_onset,
			next_warning_severity=next_severity,
		)

	@staticmethod
	def parse_payload(raw: bytes, content_type: Optional[str] = None) -> List[AlertRecord]:
		"""
		Extract and parse every warning in a raw AEMET payload.
		
		Raises:
			UnexpectedPayloadError: If the payload has content but no CAP documents
		"""
		documents = extract_cap_documents(raw, content_type)
		records = CAPAlertParser.parse_all(documents)
		logger.info(f"Parsed {len(records)} warnings from {len(documents)} CAP documents")
		return records

	@staticmethod
	def signal_from_payload(raw: bytes, content_type: Optional[str], now: datetime) -> WeatherWarningSignal:
		"""Full pipeline from payload bytes to a signal stamped with `now`."""
		records = WarningSignalService.parse_payload(raw, content_type)
		return WarningSignalService.build_warning_signal(records, now).with_fetched_at(ensure_utc(now))

	@staticmethod
	def mock_signal(name: str, now: Optional[datetime] = None) -> WeatherWarningSignal:
		"""
		Return one of the canned signals (none, active, soon, later).
		
		Raises:
			ValidationError: If the name is unknown
		"""
		signal = MOCK_SIGNALS.get(name.lower())
		if signal is None:
			raise ValidationError(
				f"Unknown mock signal '{name}'",
				detail=f"mock must be one of: {', '.join(MOCK_SIGNALS)}"
			)
		return signal.with_fetched_at(ensure_utc(now) if now else None)

	@staticmethod
	async def get_warning_signal(client, now: datetime, cache=None) -> SignalResult:
		"""
		Fetch the latest AEMET warnings and build the signal, failing open.
		
		Any failure (network, upstream error, unexpected payload) yields the
		empty signal, because the official status must keep working without
		this subsystem. Successful signals are written to the optional cache.
		
		Args:
			client: AemetClient, or None when no API key is configured
			now: Reference instant
			cache: Optional RetiroRedis-like handle with read_as_schema/create
		
		Returns:
			SignalResult(signal, fallback)
		"""
		now = ensure_utc(now)
		if client is None:
			logger.info("AEMET API key not configured, returning empty warning signal")
			return SignalResult(WeatherWarningSignal.empty(fetched_at=now), False)

		cache_key = f"aemet:signal:{settings.aemet_area_code}"
		if cache is not None:
			cached = await cache.read_as_schema(cache_key, WeatherWarningSignal, entity_type="warning signal")
			if cached is not None:
				logger.debug(f"Serving warning signal from cache key {cache_key}")
				return SignalResult(cached, False)

		try:
			raw, content_type = await client.get_latest_warnings_payload()
			signal = WarningSignalService.signal_from_payload(raw, content_type, now)
		except Exception as e:
			logger.error(f"[AEMET] Error building warning signal, failing open: {str(e)}", exc_info=True)
			return SignalResult(WeatherWarningSignal.empty(fetched_at=now), True)

		if cache is not None:
			try:
				await cache.create(cache_key, signal, ttl=settings.warnings_cache_ttl)
			except ValueError as e:
				logger.warning(f"Failed to cache warning signal: {str(e)}")

		return SignalResult(signal, False)
