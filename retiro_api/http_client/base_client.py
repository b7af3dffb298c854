from typing import Optional, Dict, Any, List, Tuple
import asyncio
import logging
import httpx
from abc import ABC

logger = logging.getLogger(__name__)

class BaseHTTPClient(ABC):
	"""
	Base HTTP client class with per-request timeout, retries and
	exponential backoff. Extended by the AEMET and Madrid clients.
	"""
	
	def __init__(
		self,
		base_url: str,
		default_headers: Optional[Dict[str, str]] = None,
		timeout: float = 8.0,
		max_retries: int = 3,
		retry_delays: Optional[List[float]] = None
	):
		self.base_url = base_url.rstrip('/')
		self.default_headers = default_headers or {}
		self.timeout = timeout
		self.max_retries = max(1, max_retries)
		self.retry_delays = retry_delays if retry_delays is not None else [1.0, 2.0, 4.0]
		self.client = httpx.AsyncClient(
			base_url=self.base_url,
			headers=self.default_headers,
			timeout=self.timeout
		)
	
	def _delay_for(self, attempt: int) -> float:
		if not self.retry_delays:
			return 0.0
		return self.retry_delays[min(attempt, len(self.retry_delays) - 1)]
	
	async def _request(
		self,
		url: str,
		params: Optional[Dict[str, Any]] = None,
		headers: Optional[Dict[str, str]] = None
	) -> httpx.Response:
		"""
		GET with retries. Absolute URLs bypass base_url.
		
		Raises:
			httpx.HTTPError: The last error once all attempts failed
		"""
		merged_headers = {**self.default_headers, **(headers or {})}
		
		for attempt in range(self.max_retries):
			try:
				response = await self.client.get(
					url,
					params=params,
					headers=merged_headers
				)
				response.raise_for_status()
				return response
			except httpx.HTTPError as e:
				if attempt == self.max_retries - 1:
					raise
				delay = self._delay_for(attempt)
				logger.warning(f"GET {url} failed (attempt {attempt + 1}/{self.max_retries}): {str(e)}; retrying in {delay}s")
				await asyncio.sleep(delay)
		raise RuntimeError("Max retries exceeded")
	
	async def get(
		self,
		endpoint: str,
		params: Optional[Dict[str, Any]] = None,
		headers: Optional[Dict[str, str]] = None
	) -> Dict[str, Any]:
		"""
		Perform a GET request.
		
		Args:
			endpoint: API endpoint (relative to base_url) or absolute URL
			params: Query parameters
			headers: Additional headers (merged with default_headers)
		
		Returns:
			Response JSON as dictionary
		"""
		response = await self._request(endpoint, params=params, headers=headers)
		return response.json()
	
	async def get_raw(
		self,
		endpoint: str,
		params: Optional[Dict[str, Any]] = None,
		headers: Optional[Dict[str, str]] = None
	) -> Tuple[bytes, Optional[str]]:
		"""
		Perform a GET request and return the undecoded body.
		
		Returns:
			Tuple of (body bytes, Content-Type header or None)
		"""
		response = await self._request(endpoint, params=params, headers=headers)
		return response.content, response.headers.get("content-type")
	
	async def close(self):
		"""Close the HTTP client."""
		await self.client.aclose()
	
	async def __aenter__(self):
		return self
	
	async def __aexit__(self, exc_type, exc_val, exc_tb):
		await self.close()
