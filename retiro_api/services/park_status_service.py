from datetime import datetime, timezone
from typing import Dict, Optional
import logging
import random

from retiro_api.schemas.signal import WeatherWarningSignal
from retiro_api.schemas.status import ParkStatus, StatusDisplay, StatusType
from retiro_api.services.closure_advisory import resolve_closure_advisory
from retiro_api.services.primary_status import resolve_primary_status

logger = logging.getLogger(__name__)

MOCK_MESSAGES: Dict[int, str] = {
	1: "Abierto según horario habitual",
	2: "Incidencias en algunas zonas",
	3: "Alerta amarilla por viento",
	4: "Alerta naranja - Eventos suspendidos",
	5: "Cerrado por condiciones meteorológicas",
	6: "Cerrado por condiciones meteorológicas",
}


class ParkStatusService:
	"""Official park status helpers and the combined display decision."""

	@staticmethod
	def get_status_type(code: int) -> StatusType:
		"""
		Map a Madrid alert code to a status type.
		Code 5 (previously "closing") is treated as closed.
		"""
		if code in (1, 2, 3):
			return "open"
		if code == 4:
			return "restricted"
		if code in (5, 6):
			return "closed"
		return "open"

	@staticmethod
	def get_mock_status(code: Optional[int] = None) -> ParkStatus:
		"""
		Build mock status data for demos and for when the feed is unreachable.
		
		Args:
			code: Alert code to force; random when None, clamped to 1 when out of range
		"""
		mock_code = code if code is not None else random.randint(1, 6)
		if mock_code < 1 or mock_code > 6:
			mock_code = 1

		return ParkStatus(
			status=ParkStatusService.get_status_type(mock_code),
			code=mock_code,
			message=MOCK_MESSAGES.get(mock_code, MOCK_MESSAGES[1]),
			incidents="14:00 - 20:00" if mock_code >= 5 else None,
			observations="Obras en la zona del estanque" if mock_code == 2 else None,
			updated_at=datetime.now(timezone.utc),
		)

	@staticmethod
	def build_display(status: Optional[ParkStatus], signal: WeatherWarningSignal) -> StatusDisplay:
		"""Combine the official status and the warning signal into what the UI renders."""
		code = status.code if status else None
		advisory = resolve_closure_advisory(code, signal)
		primary = resolve_primary_status(code, advisory.state)
		logger.debug(f"Display for code={code}: advisory={advisory.state.value}, mode={primary.mode.value}")
		return StatusDisplay(status=status, signal=signal, advisory=advisory, primary=primary)
