from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from retiro_api.config import settings
from retiro_api.dependencies import get_aemet_client, get_clock, get_madrid_client, get_signal_cache
from retiro_api.exceptions import RetiroException, handle_service_exceptions
from retiro_api.schemas.status import ParkStatus, StatusDisplay
from retiro_api.services.park_status_service import ParkStatusService
from retiro_api.services.warning_signal_service import WarningSignalService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["status"])


def wants_mock_status(mock: Optional[str], code: Optional[int]) -> bool:
	return (mock or "").lower() == "true" or code is not None


@router.get("/status", response_model=ParkStatus)
@handle_service_exceptions
async def get_status(
	response: Response,
	mock: Optional[str] = Query(default=None, description="Return mock data when 'true'"),
	code: Optional[int] = Query(default=None, description="Force a mock alert code (1-6)"),
	client=Depends(get_madrid_client)
):
	"""
	Official Retiro status from the Madrid park alerts feed.
	"""
	if wants_mock_status(mock, code):
		return ParkStatusService.get_mock_status(code)

	try:
		park_status = await client.fetch_park_status()
	except RetiroException as e:
		logger.error(f"Error fetching Retiro status: {e.message}")
		return JSONResponse(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			content={"error": "Failed to fetch park status", "message": e.message}
		)

	response.headers["Cache-Control"] = settings.status_cache_control
	return park_status


@router.get("/display", response_model=StatusDisplay)
@handle_service_exceptions
async def get_display(
	mock: Optional[str] = Query(default=None, description="Return mock status data when 'true'"),
	code: Optional[int] = Query(default=None, description="Force a mock alert code (1-6)"),
	signal: Optional[str] = Query(default=None, description="Canned signal: none, active, soon or later"),
	now: datetime = Depends(get_clock),
	madrid_client=Depends(get_madrid_client),
	aemet_client=Depends(get_aemet_client),
	cache=Depends(get_signal_cache)
):
	"""
	Official status, warning signal, advisory and the resolved primary status
	in one response. A failing status feed yields status=None (the page shows
	its error state); a failing warnings feed yields the empty signal.
	"""
	if wants_mock_status(mock, code):
		status = ParkStatusService.get_mock_status(code)
	else:
		try:
			status = await madrid_client.fetch_park_status()
		except RetiroException as e:
			logger.error(f"Error fetching Retiro status for display: {e.message}")
			status = None

	if signal:
		warning_signal = WarningSignalService.mock_signal(signal, now)
	else:
		warning_signal = (await WarningSignalService.get_warning_signal(aemet_client, now, cache=cache)).signal

	return ParkStatusService.build_display(status, warning_signal)
