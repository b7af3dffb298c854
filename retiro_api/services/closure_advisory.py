"""
Advisory state derived from the official status code and the AEMET signal.

Conservative model: the official park status stays the source of truth for
open/closed; predictive advisories are only added while the park is still
officially open or restricted.
"""
from typing import Optional

from retiro_api.schemas.signal import WeatherWarningSignal
from retiro_api.schemas.status import ClosureAdvisory, ClosureAdvisoryState

# Codes 5 and 6 mean Madrid already closed the park
OFFICIAL_CLOSED_MIN_CODE = 5


def resolve_closure_advisory(
	code: Optional[int],
	signal: Optional[WeatherWarningSignal]
) -> ClosureAdvisory:
	"""
	Classify the closure risk, in precedence order:
	official closure or missing input, active warning, warning within two
	hours, warning later today, nothing.
	"""
	if not code or signal is None:
		return ClosureAdvisory()

	if code >= OFFICIAL_CLOSED_MIN_CODE:
		return ClosureAdvisory()

	if signal.has_active_warning:
		state = ClosureAdvisoryState.LIKELY_CLOSED_NOW
	elif signal.has_warning_within_2_hours:
		state = ClosureAdvisoryState.CLOSING_SOON
	elif signal.has_warning_later_today:
		state = ClosureAdvisoryState.CLOSING_LATER_TODAY
	else:
		return ClosureAdvisory()

	return ClosureAdvisory(state=state, next_warning_onset=signal.next_warning_onset)
