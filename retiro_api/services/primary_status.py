from typing import Optional, Union

from retiro_api.schemas.status import (
	ClosureAdvisory,
	ClosureAdvisoryState,
	PrimaryStatusMode,
	PrimaryStatusResolution,
)
from retiro_api.services.closure_advisory import OFFICIAL_CLOSED_MIN_CODE

DEFAULT_OPEN_CODE = 1
PREDICTED_CLOSED_THEME_CODE = 6
CLOSING_THEME_CODE = 4


def resolve_primary_status(
	code: Optional[int],
	advisory_state: Union[ClosureAdvisoryState, ClosureAdvisory, str, None]
) -> PrimaryStatusResolution:
	"""
	Determine the main status displayed to users.
	
	Rules:
	- No official code: official, open.
	- Official closed (code 5/6) always wins.
	- Active warning upgrades the main status to predicted closed.
	- Warning within 2h upgrades the main status to closing.
	- Anything else, including a later-today warning, keeps the official
	  status; later-today warnings only show advisory messaging.
	"""
	if isinstance(advisory_state, ClosureAdvisory):
		advisory_state = advisory_state.state

	if not code:
		return PrimaryStatusResolution(mode=PrimaryStatusMode.OFFICIAL, theme_code=DEFAULT_OPEN_CODE)

	if code >= OFFICIAL_CLOSED_MIN_CODE:
		return PrimaryStatusResolution(mode=PrimaryStatusMode.OFFICIAL, theme_code=code)

	if advisory_state == ClosureAdvisoryState.LIKELY_CLOSED_NOW:
		return PrimaryStatusResolution(mode=PrimaryStatusMode.PREDICTED_CLOSED, theme_code=PREDICTED_CLOSED_THEME_CODE)

	if advisory_state == ClosureAdvisoryState.CLOSING_SOON:
		return PrimaryStatusResolution(mode=PrimaryStatusMode.CLOSING, theme_code=CLOSING_THEME_CODE)

	return PrimaryStatusResolution(mode=PrimaryStatusMode.OFFICIAL, theme_code=code)
