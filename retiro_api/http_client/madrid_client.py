from datetime import datetime, timezone
from typing import Optional, Dict, Any
import json
import logging
import httpx
from retiro_api.http_client.base_client import BaseHTTPClient
from retiro_api.exceptions import NotFoundError, UpstreamError
from retiro_api.schemas.status import ParkStatus
from retiro_api.services.park_status_service import ParkStatusService
from retiro_api.utils.incident_hours import format_incident_hours
from retiro_api.config import settings

logger = logging.getLogger(__name__)

OUT_FIELDS = "ZONA_VERDE,ALERTA_DESCRIPCION,HORARIO_INCIDENCIA,OBSERVACIONES,FECHA_INCIDENCIA"

class MadridParksClient(BaseHTTPClient):
	"""
	Client for the Madrid city council park alerts layer (ArcGIS MapServer).
	"""
	
	def __init__(self, url: Optional[str] = None):
		super().__init__(
			url or settings.madrid_status_url,
			timeout=settings.request_timeout_seconds,
			max_retries=settings.request_max_retries,
			retry_delays=settings.retry_delays
		)
	
	async def query_alerts(self) -> Dict[str, Any]:
		"""
		Query every park alert feature.
		
		Raises:
			UpstreamError: If the layer cannot be fetched
		"""
		params = {
			"where": "1=1",
			"outFields": OUT_FIELDS,
			"f": "json",
		}
		try:
			return await self.get(self.base_url, params=params)
		except (httpx.HTTPError, json.JSONDecodeError) as e:
			raise UpstreamError("Madrid", f"park alerts query failed: {str(e)}")
	
	@staticmethod
	def parse_park_status(data: Dict[str, Any], park_name: Optional[str] = None) -> ParkStatus:
		"""
		Pick the park's feature out of a layer query and map it to ParkStatus.
		
		Args:
			data: Layer query response
			park_name: Case-insensitive substring of ZONA_VERDE (defaults to settings)
		
		Raises:
			NotFoundError: If no feature matches the park
		"""
		name = (park_name or settings.retiro_park_name).lower()
		
		layer_name = data.get("name")
		if layer_name and "ALERTAS" not in layer_name.upper():
			logger.warning(f"Layer name mismatch: expected similar to '{settings.madrid_target_layer_name}', got '{layer_name}'")
		
		feature = None
		for candidate in data.get("features") or []:
			attributes = candidate.get("attributes") or {}
			zona_verde = attributes.get("ZONA_VERDE") or ""
			if name in zona_verde.lower():
				feature = attributes
				break
		
		if feature is None:
			raise NotFoundError("Park", name)
		
		code = feature.get("ALERTA_DESCRIPCION") or 1
		if code not in range(1, 7):
			logger.warning(f"Unknown alert code {code} for park '{name}', defaulting to open")
			code = 1
		incidents = feature.get("HORARIO_INCIDENCIA")
		source_updated_at = feature.get("FECHA_INCIDENCIA")
		return ParkStatus(
			status=ParkStatusService.get_status_type(code),
			code=code,
			message="Estado actual del parque",
			incidents=format_incident_hours(incidents) if incidents else None,
			observations=feature.get("OBSERVACIONES") or None,
			updated_at=datetime.now(timezone.utc),
			source_updated_at=str(source_updated_at) if source_updated_at else None,
		)
	
	async def fetch_park_status(self, park_name: Optional[str] = None) -> ParkStatus:
		"""Fetch and parse the current official status of the park."""
		data = await self.query_alerts()
		return self.parse_park_status(data, park_name)
