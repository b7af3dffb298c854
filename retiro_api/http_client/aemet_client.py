from typing import Optional, Dict, Any, Tuple
import json
import logging
import httpx
from retiro_api.http_client.base_client import BaseHTTPClient
from retiro_api.exceptions import UpstreamError
from retiro_api.config import settings

logger = logging.getLogger(__name__)

class AemetClient(BaseHTTPClient):
	"""
	AEMET OpenData client.
	
	AEMET answers in two steps: the API call returns a small JSON document
	whose "datos" field is a URL, and that URL serves the actual data (a tar
	archive of CAP XML files for warnings).
	"""
	
	def __init__(self, api_key: str, base_url: Optional[str] = None):
		super().__init__(
			base_url or settings.aemet_api_base_url,
			default_headers={"api_key": api_key},
			timeout=settings.request_timeout_seconds,
			max_retries=settings.request_max_retries,
			retry_delays=settings.retry_delays
		)
	
	async def get_datos_url(self, endpoint: str) -> str:
		"""
		Resolve the data URL for an AEMET endpoint.
		
		Raises:
			UpstreamError: If the request fails or the response is not a success descriptor
		"""
		try:
			descriptor = await self.get(endpoint)
		except (httpx.HTTPError, json.JSONDecodeError) as e:
			raise UpstreamError("AEMET", f"request to {endpoint} failed: {str(e)}")
		
		if not isinstance(descriptor, dict):
			raise UpstreamError("AEMET", f"unexpected descriptor type {type(descriptor).__name__}")
		
		if descriptor.get("estado") != 200 or not descriptor.get("datos"):
			raise UpstreamError("AEMET", descriptor.get("descripcion") or "Unknown error")
		
		return descriptor["datos"]
	
	async def get_latest_warnings_payload(self, area_code: Optional[str] = None) -> Tuple[bytes, Optional[str]]:
		"""
		Get the latest CAP warnings issued for an area.
		
		Args:
			area_code: AEMET area (defaults to settings.aemet_area_code, 72 = Madrid)
		
		Returns:
			Tuple of (raw payload bytes, content type)
		"""
		area = area_code or settings.aemet_area_code
		datos_url = await self.get_datos_url(f"/avisos_cap/ultimoelaborado/area/{area}")
		logger.info(f"Fetching AEMET warnings for area {area}")
		try:
			return await self.get_raw(datos_url)
		except httpx.HTTPError as e:
			raise UpstreamError("AEMET", f"datos URL failed: {str(e)}")
