from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response
from retiro_api.config import settings
from retiro_api.dependencies import get_aemet_client, get_clock, get_signal_cache
from retiro_api.exceptions import handle_service_exceptions
from retiro_api.schemas.signal import WeatherWarningSignal
from retiro_api.services.warning_signal_service import WarningSignalService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["warnings"])


def resolve_mock_name(mock: Optional[str], warning: Optional[str]) -> Optional[str]:
	"""
	Map the mock query parameters to a canned signal name.
	The older ?mock=true&warning=true|false form maps to active/none.
	"""
	if not mock:
		return None
	if mock.lower() == "true":
		return "active" if (warning or "").lower() == "true" else "none"
	if mock.lower() == "false":
		return None
	return mock


@router.get("/aemet-warnings", response_model=WeatherWarningSignal)
@handle_service_exceptions
async def get_aemet_warnings(
	response: Response,
	mock: Optional[str] = Query(default=None, description="Canned signal: none, active, soon or later"),
	warning: Optional[str] = Query(default=None, description="Legacy mock flag used with mock=true"),
	now: datetime = Depends(get_clock),
	client=Depends(get_aemet_client),
	cache=Depends(get_signal_cache)
):
	"""
	Predictive closure signal built from the latest AEMET warnings.
	
	Never fails because of AEMET: upstream or parsing errors return the
	empty signal with a shorter cache lifetime.
	"""
	mock_name = resolve_mock_name(mock, warning)
	if mock_name:
		return WarningSignalService.mock_signal(mock_name, now)

	result = await WarningSignalService.get_warning_signal(client, now, cache=cache)
	if result.fallback:
		response.headers["Cache-Control"] = settings.warnings_fallback_cache_control
	else:
		response.headers["Cache-Control"] = settings.warnings_cache_control
	return result.signal
